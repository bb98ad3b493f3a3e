"""Provider selection for the remote scenario extractor."""
from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, Field


class ProviderKey(str, Enum):
    ANTHROPIC = "anthropic"
    LOCAL = "local"  # never leave the process; local parser only


DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


class ProviderConfig(BaseModel):
    """Which remote extractor the router may fall back to, and how."""

    provider: ProviderKey = ProviderKey.ANTHROPIC
    model: str = DEFAULT_MODEL
    api_key: str | None = Field(default=None, repr=False)
    max_tokens: int = Field(default=1024, gt=0)
    redact_phi: bool = True  # scrub PHI before text leaves the process

    @classmethod
    def from_env(cls) -> ProviderConfig:
        """Build a config from ``CLINIMPACT_LLM_*`` and ``ANTHROPIC_API_KEY``.

        Unknown provider names fall back to the Anthropic provider.
        """
        raw = os.environ.get("CLINIMPACT_LLM_PROVIDER", ProviderKey.ANTHROPIC.value).strip().lower()
        try:
            provider = ProviderKey(raw)
        except ValueError:
            provider = ProviderKey.ANTHROPIC
        return cls(
            provider=provider,
            model=os.environ.get("CLINIMPACT_LLM_MODEL") or DEFAULT_MODEL,
            api_key=os.environ.get("ANTHROPIC_API_KEY"),
        )
