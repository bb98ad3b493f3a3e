from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from pathlib import Path


@dataclass
class AuditEntry:
    """A single audit-log entry recording a tool invocation."""
    timestamp: str
    tool_name: str
    action: str
    source: str = ""  # local / remote / none for parse calls
    fields: list[str] = field(default_factory=list)
    phi_redacted: bool = False


class AuditLog:
    """Append-only audit trail persisted as a JSONL file.

    Each line in the log file is a JSON-encoded :class:`AuditEntry`.  Only
    field names are recorded, never scenario text or values.
    """

    def __init__(self, log_path: str | Path | None = None) -> None:
        """Initialize the audit log.

        Parameters
        ----------
        log_path:
            Path to the JSONL log file.  Defaults to
            ``./audit/clinimpact.audit.jsonl``.  The parent directory is
            created on first write.
        """
        if log_path is None:
            self._path = Path("./audit/clinimpact.audit.jsonl")
        else:
            self._path = Path(log_path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def log(self, entry: AuditEntry) -> None:
        """Append an :class:`AuditEntry` to the log file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(entry), default=str) + "\n")

    def log_tool_call(
        self,
        tool_name: str,
        action: str,
        source: str = "",
        fields: list[str] | None = None,
        phi_redacted: bool = False,
    ) -> None:
        """Create and persist an :class:`AuditEntry` stamped with the current UTC time."""
        entry = AuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            tool_name=tool_name,
            action=action,
            source=source,
            fields=fields or [],
            phi_redacted=phi_redacted,
        )
        self.log(entry)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get_entries(self, since: str | None = None) -> list[AuditEntry]:
        """Read entries from the log, optionally filtered by timestamp.

        Parameters
        ----------
        since:
            ISO-8601 timestamp string.  Only entries with a ``timestamp``
            greater than or equal to this value are returned.
        """
        entries: list[AuditEntry] = []
        if not self._path.exists():
            return entries

        with self._path.open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                entry = AuditEntry(**json.loads(line))
                if since is not None and entry.timestamp < since:
                    continue
                entries.append(entry)
        return entries

    def summary(self) -> dict:
        """Return ``total_entries``, ``entries_by_tool`` and ``entries_by_source``."""
        by_tool: dict[str, int] = {}
        by_source: dict[str, int] = {}
        entries = self.get_entries()
        for entry in entries:
            by_tool[entry.tool_name] = by_tool.get(entry.tool_name, 0) + 1
            if entry.source:
                by_source[entry.source] = by_source.get(entry.source, 0) + 1
        return {
            "total_entries": len(entries),
            "entries_by_tool": by_tool,
            "entries_by_source": by_source,
        }
