from clinimpact.extraction.base import ExtractionError, ProviderNotConfiguredError, RemoteExtractor
from clinimpact.extraction.claude_extractor import ClaudeScenarioExtractor
from clinimpact.extraction.config import ProviderConfig, ProviderKey
from clinimpact.extraction.router import ExtractionOutcome, ScenarioRouter
