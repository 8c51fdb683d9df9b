"""Vendor-agnostic collaborator interfaces.

This package defines the protocols the intake pipeline needs from file
providers, OCR engines and the document ledger. No cloud SDK or OCR engine
imports are allowed here.

Available Interfaces:
    FileProvider: Lists candidate files
    TextRecognizer: Recognizes document text with progress reporting
    LedgerStore: Stores uploaded documents immutably
    IntakeStatus: Enum for per-document processing state
"""

from lendready_pipeline.interfaces.base import (
    # Type aliases
    ProgressCallback,
    # Enumerations
    IntakeStatus,
    # Protocols
    FileProvider,
    LedgerStore,
    TextRecognizer,
)

__all__ = [
    # Type aliases
    "ProgressCallback",
    # Enumerations
    "IntakeStatus",
    # Protocols
    "FileProvider",
    "LedgerStore",
    "TextRecognizer",
]
