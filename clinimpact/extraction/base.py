"""Remote extractor protocol and its failure types."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ExtractionError(RuntimeError):
    """The remote extractor could not produce parameters for a scenario."""


class ProviderNotConfiguredError(ExtractionError):
    """The selected provider is missing credentials or client support."""


class RemoteExtractor(ABC):
    """Abstract base class for scenario extractors backed by a remote model."""

    @abstractmethod
    def extract(self, text: str) -> dict[str, int]:
        """Return a sparse camelCase parameter dict for *text*.

        Raises :class:`ExtractionError` when the remote call fails.
        """
        ...
