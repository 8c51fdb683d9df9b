"""Confidence scoring of recognized text against a requirement list."""

from typing import Optional, Sequence

import structlog

from .keywords import extract_keywords, unique_in_order
from .models.documents import VerificationResult

logger = structlog.get_logger()


DEFAULT_CONFIDENCE_THRESHOLD = 30.0


def verify(
    text: Optional[str],
    requirements: Sequence[str],
    *,
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> VerificationResult:
    """Score how well a document's text covers the requirement keywords.

    Confidence is the number of distinct keywords found in the text divided
    by the total keyword count across all requirements (repeats included),
    as a percentage.

    Args:
        text: Recognized document text
        requirements: Requirement descriptions the document should satisfy
        threshold: Minimum confidence for a match

    Returns:
        VerificationResult; empty text or requirements give an empty result
    """
    if not text or not text.strip() or not requirements:
        return VerificationResult.empty()

    keywords = extract_keywords(requirements)
    total_keywords = len(keywords)
    if total_keywords == 0:
        return VerificationResult.empty()

    lowered = text.lower()
    matched = unique_in_order(k for k in keywords if k in lowered)

    confidence = 100.0 * len(matched) / total_keywords
    confidence = min(max(confidence, 0.0), 100.0)

    result = VerificationResult(
        matches=confidence >= threshold,
        confidence=confidence,
        matched_keywords=matched,
    )
    logger.debug(
        "document_verified",
        total_keywords=total_keywords,
        matched=len(matched),
        confidence=round(confidence, 2),
        matches=result.matches,
    )
    return result
