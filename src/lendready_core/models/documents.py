"""Document models for matching, extraction, verification and storage.

A CandidateDocument is created when a provider lists a file or a local file
is chosen. OCR attaches its recognized text once; every other model here is
derived from candidates and requirement lists and carries no state between
calls.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from ..exceptions import DocumentStateError
from .enums import DocumentCategory, UploadSource


ExtractedFields = dict[str, str]
"""Structured fields keyed by the extractor vocabulary; missing keys mean not found."""


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class CandidateDocument(BaseModel):
    """A file that may satisfy a document requirement."""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "1AbCdEf",
                    "name": "2023_Articles_of_Incorporation.pdf",
                    "mime_type": "application/pdf",
                    "size": 182044,
                    "last_modified": "2024-03-02T15:04:05Z",
                }
            ]
        },
    }

    id: str
    name: str
    mime_type: str = "application/octet-stream"
    size: int = Field(default=0, ge=0)
    last_modified: datetime = Field(default_factory=_utc_now)
    web_view_link: Optional[str] = None
    source_path: Optional[str] = Field(
        default=None,
        description="Local filesystem path when the file is available locally",
    )
    recognized_text: Optional[str] = Field(
        default=None,
        description="OCR output; attached once after recognition",
    )

    @property
    def extension(self) -> str:
        """Lowercase filename extension without the dot ('' if none)."""
        parts = self.name.lower().rsplit(".", 1)
        return parts[1] if len(parts) == 2 else ""

    @property
    def is_recognizable(self) -> bool:
        """Whether OCR applies to this file (images and PDFs)."""
        mime = self.mime_type.lower()
        if "image" in mime or "pdf" in mime:
            return True
        return self.extension in {"pdf", "jpg", "jpeg", "png"}

    def with_recognized_text(self, text: str) -> "CandidateDocument":
        """Return a copy carrying the recognized text.

        Raises:
            DocumentStateError: If text was already attached.
        """
        if self.recognized_text is not None:
            raise DocumentStateError(
                "Recognized text is already attached to this document",
                document_id=self.id,
            )
        return self.model_copy(update={"recognized_text": text})


class MatchScore(BaseModel):
    """Keyword score of one candidate against a requirement list."""

    document_id: str
    score: int = Field(ge=0)
    matched_keywords: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def match_percent(self) -> int:
        """Score capped at 100, as shown next to suggested files."""
        return min(self.score, 100)


class VerificationResult(BaseModel):
    """Confidence that a document's text covers a requirement list."""

    matches: bool = False
    confidence: float = Field(default=0.0, ge=0.0, le=100.0)
    matched_keywords: list[str] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "VerificationResult":
        """Result for missing text or missing requirements."""
        return cls(matches=False, confidence=0.0, matched_keywords=[])


class LedgerReceipt(BaseModel):
    """Reference returned by the ledger after storing a document."""

    hash: str
    url: str


class UploadedDocument(BaseModel):
    """Outcome of intake for one document."""

    id: str
    name: str
    category: DocumentCategory
    upload_source: UploadSource
    file_type: str
    size: int = Field(default=0, ge=0)
    upload_date: datetime = Field(default_factory=_utc_now)
    verified: bool = False
    ledger_hash: Optional[str] = None
    url: Optional[str] = None
    extracted_text: Optional[str] = None
    extracted_fields: ExtractedFields = Field(default_factory=dict)
    verification_result: Optional[VerificationResult] = None
    recognition_error: Optional[str] = Field(
        default=None,
        description="Why recognition failed, when the document was stored unverified",
    )
