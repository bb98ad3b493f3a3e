from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass
class PHIMatch:
    """Represents a single detected PHI occurrence."""
    phi_type: str
    value: str
    start: int
    end: int


# Built-in regex patterns for PHI that can turn up in pasted scenario text.
_BUILTIN_PATTERNS: dict[str, str] = {
    "SSN": r"\b\d{3}-\d{2}-\d{4}\b",
    "MRN_labeled": r"\bMRN[:\s#]*\d{6,10}\b",
    "PHONE": r"\(?\b\d{3}\)?[-.]\d{3}[-.]\d{4}\b",
    "EMAIL": r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
    "DOB": (
        r"\b(?:DOB|Date of Birth|Birth Date)"
        r"[:\s]*\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"
    ),
    "IP_ADDRESS": r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b",
}


class PHIDetector:
    """Detect and redact Protected Health Information (PHI) in scenario text.

    Scenario descriptions are pasted by clinicians and may carry identifiers
    that must not reach a remote model.  Counts and rates are left alone:
    phone numbers need separators, so "1500 scans" never looks like one.
    """

    def __init__(self, extra_patterns: dict[str, str] | None = None) -> None:
        """Initialize the detector.

        Parameters
        ----------
        extra_patterns:
            Optional mapping of ``phi_type`` -> regex pattern string to extend
            the built-in set.
        """
        self._patterns: dict[str, re.Pattern] = {}
        all_patterns = dict(_BUILTIN_PATTERNS)
        if extra_patterns:
            all_patterns.update(extra_patterns)
        for name, pattern in all_patterns.items():
            self._patterns[name] = re.compile(pattern, re.IGNORECASE)

    def scan_text(self, text: str) -> list[PHIMatch]:
        """Return all PHI matches in *text*, sorted by start position.

        Where two matches overlap only the earlier (then longer) one is kept.
        """
        matches: list[PHIMatch] = []
        for phi_type, pattern in self._patterns.items():
            for m in pattern.finditer(text):
                matches.append(
                    PHIMatch(phi_type=phi_type, value=m.group(), start=m.start(), end=m.end())
                )
        matches.sort(key=lambda m: (m.start, -(m.end - m.start)))

        kept: list[PHIMatch] = []
        for match in matches:
            if kept and match.start < kept[-1].end:
                continue
            kept.append(match)
        return kept

    def redact_text(self, text: str) -> str:
        """Return *text* with each PHI occurrence replaced by ``[REDACTED-{type}]``."""
        result = text
        # Reverse order keeps earlier offsets valid.
        for match in reversed(self.scan_text(text)):
            result = result[: match.start] + f"[REDACTED-{match.phi_type}]" + result[match.end:]
        return result

    def contains_phi(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self._patterns.values())
