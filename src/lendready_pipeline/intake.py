"""Document intake pipeline.

Drives each uploaded document through the same steps:

1. Recognize text (PDFs and images only, skipped when text is already attached)
2. Extract structured fields from the text
3. Verify the text against the requirement list
4. Store the document and its intake metadata in the ledger

A recognition failure or timeout never stops intake: the document is stored
unverified with the failure recorded. Ledger failures raise
LedgerStorageError. Batches run on a bounded pool of asyncio tasks, one per
document id, and each document can be cancelled on its own.
"""

import asyncio
from functools import partial
from typing import Iterable, Optional, Sequence, Union

import structlog

from lendready_core.exceptions import ConfigurationError, LedgerStorageError, RecognitionError
from lendready_core.field_extractor import extract_fields
from lendready_core.matcher import match_documents
from lendready_core.models import (
    CandidateDocument,
    DocumentHint,
    LedgerReceipt,
    MatchScore,
    UploadedDocument,
    UploadSource,
    VerificationResult,
    coerce_hint,
)
from lendready_core.verification import verify

from .config import LendReadyConfig
from .interfaces.base import IntakeStatus, LedgerStore, TextRecognizer

logger = structlog.get_logger()


HintLike = Union[DocumentHint, str, None]


class ProgressTracker:
    """Recognition progress per document id, as a percentage.

    Values are clamped to 0-100 and never move backwards for a document, so
    late or out-of-order progress events are harmless.
    """

    def __init__(self):
        self._progress: dict[str, float] = {}

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._progress

    def update(self, document_id: str, percent: float) -> float:
        """Record progress for a document and return the stored value."""
        clamped = min(max(float(percent), 0.0), 100.0)
        current = max(self._progress.get(document_id, 0.0), clamped)
        self._progress[document_id] = current
        return current

    def get(self, document_id: str) -> float:
        """Progress for a document (0.0 if nothing was reported)."""
        return self._progress.get(document_id, 0.0)

    def snapshot(self) -> dict[str, float]:
        """Copy of all tracked progress values."""
        return dict(self._progress)


class DocumentIntakePipeline:
    """
    Recognize, extract, verify and store uploaded documents.

    Example:
        pipeline = DocumentIntakePipeline(
            recognizer=PdfTextRecognizer(),
            ledger=InMemoryLedgerStore(),
        )
        uploaded = await pipeline.process(
            candidate,
            profile.required_documents,
            DocumentHint.PRIMARY,
            upload_source=UploadSource.LOCAL,
        )
    """

    def __init__(
        self,
        recognizer: TextRecognizer,
        ledger: LedgerStore,
        config: Optional[LendReadyConfig] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            recognizer: OCR or text-layer recognizer
            ledger: Ledger the uploaded documents are stored in
            config: Settings (default: loaded from the environment)
        """
        self.recognizer = recognizer
        self.ledger = ledger
        self.config = config or LendReadyConfig()
        self.progress = ProgressTracker()
        self._status: dict[str, IntakeStatus] = {}
        self._tasks: dict[str, asyncio.Task] = {}

    def status(self, document_id: str) -> Optional[IntakeStatus]:
        """Processing state of a document, or None if it was never submitted."""
        return self._status.get(document_id)

    def suggest(
        self,
        candidates: Iterable[CandidateDocument],
        requirements: Iterable[str],
        hint: HintLike = None,
    ) -> list[MatchScore]:
        """Best-matching candidate files, up to the configured suggestion limit."""
        return match_documents(
            candidates,
            requirements,
            coerce_hint(hint),
            limit=self.config.matching.suggestion_limit,
        )

    def cancel(self, document_id: str) -> bool:
        """Cancel processing of one document.

        Returns:
            True if a running or queued document was cancelled
        """
        task = self._tasks.get(document_id)
        if task is None or task.done():
            return False
        task.cancel()
        logger.info("intake_cancel_requested", document_id=document_id)
        return True

    # -------------------------------------------------------------------------
    # Single document
    # -------------------------------------------------------------------------

    async def process(
        self,
        candidate: CandidateDocument,
        requirements: Sequence[str],
        hint: HintLike = None,
        *,
        upload_source: UploadSource = UploadSource.LOCAL,
    ) -> UploadedDocument:
        """Run one document through intake.

        Args:
            candidate: The uploaded file
            requirements: Requirement descriptions the document should satisfy
            hint: Kind of document uploaded; decides the stored category
            upload_source: Where the file came from

        Returns:
            The stored document

        Raises:
            LedgerStorageError: If the ledger could not store the document
            asyncio.CancelledError: If the document was cancelled
        """
        document_id = candidate.id
        task = asyncio.current_task()
        if task is not None:
            self._tasks.setdefault(document_id, task)

        resolved_hint = coerce_hint(hint) or DocumentHint.SUPPORTING
        logger.info(
            "intake_started",
            document_id=document_id,
            name=candidate.name,
            hint=resolved_hint.value,
            upload_source=upload_source.value,
        )

        try:
            candidate, recognition_error = await self._recognize(candidate)

            text = candidate.recognized_text
            fields = {}
            result: Optional[VerificationResult] = None
            if text is not None:
                fields = extract_fields(text)
                result = verify(
                    text,
                    requirements,
                    threshold=self.config.verification.confidence_threshold,
                )
            verified = result.matches if result is not None else False

            self._status[document_id] = IntakeStatus.STORING
            metadata = {
                "category": resolved_hint.category.value,
                "upload_source": upload_source.value,
                "file_type": candidate.mime_type,
                "verified": verified,
                "confidence": result.confidence if result is not None else None,
                "extracted_fields": fields,
                "requirements": list(requirements),
            }
            receipt = await self._store(candidate, metadata)

            self._status[document_id] = IntakeStatus.STORED
            self.progress.update(document_id, 100)
            logger.info(
                "intake_completed",
                document_id=document_id,
                verified=verified,
                ledger_hash=receipt.hash,
                fields=sorted(fields),
            )
            return UploadedDocument(
                id=document_id,
                name=candidate.name,
                category=resolved_hint.category,
                upload_source=upload_source,
                file_type=candidate.mime_type,
                size=candidate.size,
                verified=verified,
                ledger_hash=receipt.hash,
                url=receipt.url,
                extracted_text=text,
                extracted_fields=fields,
                verification_result=result,
                recognition_error=recognition_error,
            )
        except asyncio.CancelledError:
            self._status[document_id] = IntakeStatus.CANCELLED
            logger.info("intake_cancelled", document_id=document_id)
            raise
        finally:
            if self._tasks.get(document_id) is task:
                del self._tasks[document_id]

    async def _recognize(
        self,
        candidate: CandidateDocument,
    ) -> tuple[CandidateDocument, Optional[str]]:
        """Attach recognized text, returning the failure reason if recognition failed."""
        if candidate.recognized_text is not None:
            return candidate, None
        if not candidate.is_recognizable:
            logger.info(
                "recognition_skipped",
                document_id=candidate.id,
                mime_type=candidate.mime_type,
            )
            return candidate, None

        self._status[candidate.id] = IntakeStatus.RECOGNIZING
        timeout = self.config.intake.ocr_timeout
        try:
            text = await asyncio.wait_for(
                self.recognizer.recognize(candidate, partial(self.progress.update, candidate.id)),
                timeout=timeout,
            )
        except RecognitionError as e:
            logger.warning("recognition_failed", document_id=candidate.id, error=str(e))
            return candidate, str(e)
        except asyncio.TimeoutError:
            logger.warning("recognition_timeout", document_id=candidate.id, timeout=timeout)
            return candidate, f"Recognition timed out after {timeout} seconds"
        except Exception as e:
            logger.warning(
                "recognition_failed",
                document_id=candidate.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return candidate, str(e) or type(e).__name__

        return candidate.with_recognized_text(text or ""), None

    async def _store(self, candidate: CandidateDocument, metadata: dict) -> LedgerReceipt:
        try:
            return await self.ledger.store(candidate, metadata)
        except LedgerStorageError as e:
            self._status[candidate.id] = IntakeStatus.FAILED
            logger.error("ledger_store_failed", document_id=candidate.id, error=str(e))
            raise
        except Exception as e:
            self._status[candidate.id] = IntakeStatus.FAILED
            logger.error("ledger_store_failed", document_id=candidate.id, error=str(e))
            raise LedgerStorageError(
                f"Ledger store failed: {e}",
                document_id=candidate.id,
            ) from e

    # -------------------------------------------------------------------------
    # Batches
    # -------------------------------------------------------------------------

    async def process_batch(
        self,
        candidates: Iterable[CandidateDocument],
        requirements: Sequence[str],
        hint: HintLike = None,
        *,
        upload_source: UploadSource = UploadSource.LOCAL,
        max_concurrency: Optional[int] = None,
    ) -> dict[str, UploadedDocument]:
        """Run several documents through intake concurrently.

        Cancelled documents, and documents the ledger failed to store, are
        left out of the result; the rest of the batch completes normally.

        Args:
            candidates: Uploaded files (ids must be unique; repeats are skipped)
            requirements: Requirement descriptions the documents should satisfy
            hint: Kind of documents uploaded
            upload_source: Where the files came from
            max_concurrency: Worker slots (default: intake.max_concurrency)

        Returns:
            Stored documents keyed by document id, in submission order
        """
        limit = self.config.intake.max_concurrency if max_concurrency is None else max_concurrency
        if limit < 1:
            raise ConfigurationError(
                f"Invalid max_concurrency: {limit}",
                config_key="max_concurrency",
                expected="integer >= 1",
                actual=limit,
            )
        semaphore = asyncio.Semaphore(limit)

        async def run(candidate: CandidateDocument) -> UploadedDocument:
            try:
                async with semaphore:
                    return await self.process(
                        candidate,
                        requirements,
                        hint,
                        upload_source=upload_source,
                    )
            except asyncio.CancelledError:
                # Cancelled while still queued for a slot
                self._status[candidate.id] = IntakeStatus.CANCELLED
                raise

        tasks: dict[str, asyncio.Task] = {}
        for candidate in candidates:
            if candidate.id in tasks:
                logger.warning("duplicate_document_skipped", document_id=candidate.id)
                continue
            self._status[candidate.id] = IntakeStatus.PENDING
            task = asyncio.create_task(run(candidate))
            tasks[candidate.id] = task
            self._tasks[candidate.id] = task

        logger.info("intake_batch_started", documents=len(tasks), max_concurrency=limit)
        outcomes = await asyncio.gather(*tasks.values(), return_exceptions=True)

        uploaded: dict[str, UploadedDocument] = {}
        unexpected: Optional[BaseException] = None
        for document_id, outcome in zip(tasks, outcomes):
            self._tasks.pop(document_id, None)
            if isinstance(outcome, UploadedDocument):
                uploaded[document_id] = outcome
            elif isinstance(outcome, (asyncio.CancelledError, LedgerStorageError)):
                continue
            elif unexpected is None:
                unexpected = outcome

        if unexpected is not None:
            raise unexpected

        logger.info(
            "intake_batch_completed",
            documents=len(tasks),
            stored=len(uploaded),
            verified=sum(1 for doc in uploaded.values() if doc.verified),
        )
        return uploaded
