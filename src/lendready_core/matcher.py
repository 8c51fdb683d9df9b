"""Keyword scoring of candidate files against a requirement list.

Scoring works on filenames only, so it can rank a provider listing before
anything is downloaded:

- base score of 10 for any file with an accepted extension
- +5 for each requirement keyword found in the filename
- +15 when a document hint is given and the filename carries a term typical
  for that kind of document

Only candidates scoring above the base are suggested.
"""

from typing import Iterable, Optional, Sequence, Union

import structlog

from .keywords import extract_keywords
from .models.documents import CandidateDocument, MatchScore
from .models.enums import DocumentHint, coerce_hint

logger = structlog.get_logger()


# =============================================================================
# SCORING CONSTANTS
# =============================================================================

ACCEPTED_EXTENSIONS = frozenset({"pdf", "doc", "docx", "jpg", "jpeg", "png"})

BASE_SCORE = 10
KEYWORD_POINTS = 5
DOMAIN_BONUS = 15

DEFAULT_SUGGESTION_LIMIT = 5

# Filename terms that earn the domain bonus for each hint
HINT_TERMS: dict[DocumentHint, tuple[str, ...]] = {
    DocumentHint.PRIMARY: ("article", "certificate", "formation", "incorporation"),
    DocumentHint.TAX: ("tax", "irs", "ein"),
    DocumentHint.IDENTITY: ("license", "passport", "id", "identification"),
}


# =============================================================================
# SCORING
# =============================================================================


def score_candidate(
    candidate: CandidateDocument,
    keywords: Sequence[str],
    hint: Optional[DocumentHint] = None,
) -> Optional[MatchScore]:
    """Score one candidate's filename.

    Args:
        candidate: File to score
        keywords: Requirement keywords from extract_keywords()
        hint: Kind of document wanted, enables the domain bonus

    Returns:
        The score, or None when the file type is not accepted
    """
    if candidate.extension not in ACCEPTED_EXTENSIONS:
        return None

    filename = candidate.name.lower()
    score = BASE_SCORE
    matched: list[str] = []

    for keyword in keywords:
        if keyword in filename:
            score += KEYWORD_POINTS
            if keyword not in matched:
                matched.append(keyword)

    if hint is not None:
        terms = HINT_TERMS.get(hint, ())
        if any(term in filename for term in terms):
            score += DOMAIN_BONUS

    return MatchScore(document_id=candidate.id, score=score, matched_keywords=matched)


def match_documents(
    candidates: Iterable[CandidateDocument],
    requirements: Iterable[str],
    hint: Union[DocumentHint, str, None] = None,
    *,
    limit: Optional[int] = None,
) -> list[MatchScore]:
    """Rank candidate files against a requirement list.

    Candidates with an unsupported extension, and candidates that only earn
    the base score, are left out. Equal scores keep their input order.

    Args:
        candidates: Files to rank
        requirements: Requirement descriptions
        hint: Kind of document wanted (values and upload slot labels are accepted)
        limit: Keep at most this many results

    Returns:
        Match scores, best first
    """
    hint = coerce_hint(hint)

    keywords = extract_keywords(requirements)
    candidate_list = list(candidates)

    scores = []
    for candidate in candidate_list:
        result = score_candidate(candidate, keywords, hint)
        if result is not None and result.score > BASE_SCORE:
            scores.append(result)

    # sorted() is stable, so ties keep candidate order
    ranked = sorted(scores, key=lambda s: s.score, reverse=True)
    if limit is not None:
        ranked = ranked[:max(limit, 0)]

    logger.debug(
        "documents_matched",
        candidates=len(candidate_list),
        keywords=len(keywords),
        hint=hint.value if hint else None,
        matches=len(ranked),
    )
    return ranked
