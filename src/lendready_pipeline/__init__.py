"""LendReady Pipeline - Document intake around the LendReady core engine."""

from lendready_pipeline.config import (
    IntakeConfig,
    LendReadyConfig,
    MatchingConfig,
    ResolutionConfig,
    VerificationConfig,
    configure_logging,
)
from lendready_pipeline.intake import DocumentIntakePipeline, ProgressTracker
from lendready_pipeline.interfaces import (
    FileProvider,
    IntakeStatus,
    LedgerStore,
    TextRecognizer,
)
from lendready_pipeline.ledger import InMemoryLedgerStore
from lendready_pipeline.providers import LocalDirectoryProvider, candidate_from_provider_file
from lendready_pipeline.recognizers import PdfTextRecognizer

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "IntakeConfig",
    "LendReadyConfig",
    "MatchingConfig",
    "ResolutionConfig",
    "VerificationConfig",
    "configure_logging",
    # Intake
    "DocumentIntakePipeline",
    "ProgressTracker",
    # Interfaces
    "FileProvider",
    "IntakeStatus",
    "LedgerStore",
    "TextRecognizer",
    # Adapters
    "InMemoryLedgerStore",
    "LocalDirectoryProvider",
    "PdfTextRecognizer",
    "candidate_from_provider_file",
]
