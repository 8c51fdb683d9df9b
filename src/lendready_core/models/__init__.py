"""Data models for lendready-core.

This package provides:
- Closed vocabularies for entity types, citizenship, instruments and hints (enums.py)
- Requirement table entries and resolver inputs/outputs (requirements.py)
- Candidate, match, verification and upload models (documents.py)
"""

from lendready_core.models.enums import (
    CitizenshipStatus,
    DocumentCategory,
    DocumentHint,
    EntityType,
    FinancialInstrument,
    UploadSource,
    coerce_hint,
)
from lendready_core.models.requirements import (
    # Table entries
    EntityDocumentSpec,
    IdentityDocSpec,
    StateOverlay,
    # Inputs
    ApplicationProfile,
    BeneficialOwner,
    TransactionProfile,
    # Outputs
    DocumentChecklist,
    OwnerIdentityRequirement,
    RequirementProfile,
    TaxRequirementProfile,
)
from lendready_core.models.documents import (
    CandidateDocument,
    ExtractedFields,
    LedgerReceipt,
    MatchScore,
    UploadedDocument,
    VerificationResult,
)

__all__ = [
    # Enumerations
    "CitizenshipStatus",
    "DocumentCategory",
    "DocumentHint",
    "EntityType",
    "FinancialInstrument",
    "UploadSource",
    "coerce_hint",
    # Table entries
    "EntityDocumentSpec",
    "IdentityDocSpec",
    "StateOverlay",
    # Inputs
    "ApplicationProfile",
    "BeneficialOwner",
    "TransactionProfile",
    # Outputs
    "DocumentChecklist",
    "OwnerIdentityRequirement",
    "RequirementProfile",
    "TaxRequirementProfile",
    # Documents
    "CandidateDocument",
    "ExtractedFields",
    "LedgerReceipt",
    "MatchScore",
    "UploadedDocument",
    "VerificationResult",
]
