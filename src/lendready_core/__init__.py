"""LendReady Core - Document requirement resolution, matching and verification."""

__version__ = "0.1.0"

from .checklist import build_document_checklist
from .exceptions import (
    ConfigurationError,
    DocumentStateError,
    LedgerStorageError,
    LendReadyError,
    RecognitionError,
    UnknownEntityTypeError,
)
from .field_extractor import FIELD_VOCABULARY, extract_fields
from .keywords import extract_keywords
from .matcher import DEFAULT_SUGGESTION_LIMIT, match_documents, score_candidate
from .models import (
    ApplicationProfile,
    BeneficialOwner,
    CandidateDocument,
    CitizenshipStatus,
    DocumentCategory,
    DocumentChecklist,
    DocumentHint,
    EntityType,
    FinancialInstrument,
    MatchScore,
    RequirementProfile,
    TaxRequirementProfile,
    TransactionProfile,
    UploadedDocument,
    UploadSource,
    VerificationResult,
    coerce_hint,
)
from .resolver import (
    get_primary_document_type,
    required_tax_years,
    resolve_entity_requirements,
    resolve_identity_documents,
    resolve_tax_requirements,
)
from .verification import DEFAULT_CONFIDENCE_THRESHOLD, verify

__all__ = [
    # Resolution
    "build_document_checklist",
    "get_primary_document_type",
    "required_tax_years",
    "resolve_entity_requirements",
    "resolve_identity_documents",
    "resolve_tax_requirements",
    # Matching and verification
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "DEFAULT_SUGGESTION_LIMIT",
    "FIELD_VOCABULARY",
    "extract_fields",
    "extract_keywords",
    "match_documents",
    "score_candidate",
    "verify",
    # Models
    "ApplicationProfile",
    "BeneficialOwner",
    "CandidateDocument",
    "CitizenshipStatus",
    "DocumentCategory",
    "DocumentChecklist",
    "DocumentHint",
    "EntityType",
    "FinancialInstrument",
    "MatchScore",
    "RequirementProfile",
    "TaxRequirementProfile",
    "TransactionProfile",
    "UploadedDocument",
    "UploadSource",
    "VerificationResult",
    "coerce_hint",
    # Exceptions
    "ConfigurationError",
    "DocumentStateError",
    "LedgerStorageError",
    "LendReadyError",
    "RecognitionError",
    "UnknownEntityTypeError",
]
