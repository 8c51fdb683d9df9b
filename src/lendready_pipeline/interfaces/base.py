"""Collaborator interfaces for document intake.

This module defines the protocols (contracts) the intake pipeline expects
from its external collaborators. They use Python's structural subtyping via
typing.Protocol, so any class with matching methods is compatible - no
explicit inheritance required.

Collaborators:
- FileProvider: lists candidate files from a drive or a local folder
- TextRecognizer: turns an image or PDF into text, reporting progress
- LedgerStore: stores an uploaded document immutably and returns its hash

Design Goals:
- Vendor independence: no imports from cloud drive SDKs or OCR engines
- Async-first: every collaborator call may suspend on I/O

Example Usage:
    ```python
    from lendready_pipeline.interfaces.base import TextRecognizer

    class CloudOcr:
        '''Recognizer backed by a hosted OCR service.'''

        async def recognize(self, candidate, on_progress) -> str:
            on_progress(0)
            text = await self._client.ocr(candidate.web_view_link)
            on_progress(100)
            return text

    # CloudOcr is compatible with TextRecognizer without inheriting from it
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from lendready_core.models import CandidateDocument, LedgerReceipt


# =============================================================================
# TYPE ALIASES
# =============================================================================

ProgressCallback = Callable[[float], None]
"""Receives recognition progress for one document as a percentage (0-100)."""


# =============================================================================
# ENUMERATIONS
# =============================================================================

class IntakeStatus(str, Enum):
    """Processing state of one document in the intake pipeline."""

    PENDING = "pending"
    """Queued, waiting for a worker slot."""

    RECOGNIZING = "recognizing"
    """Text recognition in progress."""

    STORING = "storing"
    """Writing to the ledger."""

    STORED = "stored"
    """Stored in the ledger (verified or not)."""

    FAILED = "failed"
    """Ledger storage failed."""

    CANCELLED = "cancelled"
    """Processing was cancelled."""

    @property
    def is_terminal(self) -> bool:
        """Check if processing for the document has finished."""
        return self in (IntakeStatus.STORED, IntakeStatus.FAILED, IntakeStatus.CANCELLED)


# =============================================================================
# COLLABORATOR PROTOCOLS
# =============================================================================

@runtime_checkable
class FileProvider(Protocol):
    """Protocol for sources that list candidate files.

    Cloud drive adapters convert their raw listing with
    `candidate_from_provider_file()`. Authentication is the adapter's concern.
    """

    async def list_files(self) -> list[CandidateDocument]:
        """List candidate files available from this source.

        Returns:
            Candidate documents, in the provider's order
        """
        ...


@runtime_checkable
class TextRecognizer(Protocol):
    """Protocol for OCR and text-layer extraction.

    Implementations report progress through `on_progress` with values from 0
    to 100 and either return the recognized text or raise RecognitionError.
    The pipeline applies its own timeout around each call.
    """

    async def recognize(
        self,
        candidate: CandidateDocument,
        on_progress: ProgressCallback,
    ) -> str:
        """Recognize the text of one document.

        Args:
            candidate: Document to recognize
            on_progress: Progress callback for this document only

        Returns:
            The recognized text (may be empty)

        Raises:
            RecognitionError: If no text could be produced
        """
        ...


@runtime_checkable
class LedgerStore(Protocol):
    """Protocol for the immutable document ledger."""

    async def store(
        self,
        candidate: CandidateDocument,
        metadata: Mapping[str, Any],
    ) -> LedgerReceipt:
        """Store a document and its intake metadata.

        Args:
            candidate: The uploaded document
            metadata: Category, verification outcome and extracted fields

        Returns:
            LedgerReceipt with the document hash and its URL

        Raises:
            LedgerStorageError: If the document could not be stored
        """
        ...


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    # Type aliases
    "ProgressCallback",
    # Enumerations
    "IntakeStatus",
    # Protocols
    "FileProvider",
    "TextRecognizer",
    "LedgerStore",
]
