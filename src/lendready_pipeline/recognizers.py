"""Text recognizers for uploaded documents.

PdfTextRecognizer reads the embedded text layer of local PDFs. It is the
reference TextRecognizer: scanned images need an OCR engine adapter that
implements the same protocol.
"""

import asyncio
from pathlib import Path
from typing import Callable, Optional

import pdfplumber
import structlog
from PyPDF2 import PdfReader

from lendready_core.exceptions import RecognitionError
from lendready_core.models import CandidateDocument

from .interfaces.base import ProgressCallback

logger = structlog.get_logger()


class PdfTextRecognizer:
    """
    Text-layer recognizer for PDF documents.

    Text is read with PyPDF2 first. When PyPDF2 yields fewer than
    `min_text_chars` characters, pdfplumber is tried as a fallback, since it
    copes better with unusual font encodings.
    """

    def __init__(self, min_text_chars: int = 100):
        """
        Initialize the recognizer.

        Args:
            min_text_chars: PyPDF2 output shorter than this triggers the pdfplumber fallback
        """
        self.min_text_chars = min_text_chars

    async def recognize(
        self,
        candidate: CandidateDocument,
        on_progress: ProgressCallback,
    ) -> str:
        """Read the text layer of a local PDF.

        Raises:
            RecognitionError: If the candidate is not a local PDF or cannot be read
        """
        if not candidate.source_path:
            raise RecognitionError(
                "Document is not available locally",
                document_id=candidate.id,
            )
        file_path = Path(candidate.source_path)
        if file_path.suffix.lower() != ".pdf":
            raise RecognitionError(
                f"File must be a PDF: {file_path.name}",
                document_id=candidate.id,
                source=str(file_path),
            )
        if not file_path.exists():
            raise RecognitionError(
                f"PDF file not found: {file_path}",
                document_id=candidate.id,
                source=str(file_path),
            )

        loop = asyncio.get_running_loop()

        def report(percent: float) -> None:
            loop.call_soon_threadsafe(on_progress, percent)

        on_progress(0)
        text = await asyncio.to_thread(self._read_text, candidate.id, file_path, report)
        on_progress(100)
        return text

    def _read_text(
        self,
        document_id: str,
        file_path: Path,
        report: Callable[[float], None],
    ) -> str:
        logger.info("recognizing_pdf", document_id=document_id, file_path=str(file_path))

        try:
            reader = PdfReader(file_path)
        except Exception as e:
            raise RecognitionError(
                f"Failed to read PDF: {e}",
                document_id=document_id,
                source=str(file_path),
            ) from e

        page_count = len(reader.pages)
        pages: list[str] = []
        for page_num, page in enumerate(reader.pages, start=1):
            try:
                pages.append(page.extract_text() or "")
            except Exception as e:
                logger.warning("page_extraction_failed", page=page_num, error=str(e))
                pages.append("")
            # PyPDF2 pass covers the first 90%; the rest is reserved for the fallback
            report(90 * page_num / page_count)

        full_text = "\n".join(pages)

        if len(full_text.strip()) < self.min_text_chars:
            logger.info(
                "pypdf2_fallback_pdfplumber",
                file_path=str(file_path),
                pypdf2_chars=len(full_text.strip()),
            )
            fallback = self._read_with_pdfplumber(file_path)
            if fallback is not None and len(fallback.strip()) > len(full_text.strip()):
                full_text = fallback

        logger.info(
            "pdf_recognized",
            document_id=document_id,
            pages=page_count,
            chars_extracted=len(full_text.strip()),
        )
        return full_text

    def _read_with_pdfplumber(self, file_path: Path) -> Optional[str]:
        """Extract text with pdfplumber, or None if it fails."""
        try:
            with pdfplumber.open(file_path) as pdf:
                pages = []
                for page_num, page in enumerate(pdf.pages, start=1):
                    try:
                        pages.append(page.extract_text() or "")
                    except Exception as e:
                        logger.warning("pdfplumber_page_failed", page=page_num, error=str(e))
                        pages.append("")
                return "\n".join(pages)
        except Exception as e:
            logger.warning("pdfplumber_fallback_failed", error=str(e))
            return None
