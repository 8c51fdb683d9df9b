"""Closed vocabularies used across requirement resolution and intake.

Every tag that drives a lookup (entity type, citizenship status, financial
instrument, document hint) is a string enum, so values serialize as plain
strings and compare equal to them.
"""

from enum import Enum
from typing import Optional, Union


class EntityType(str, Enum):
    """Legal form of the applying business."""

    SOLE_PROPRIETORSHIP = "sole_proprietorship"
    PARTNERSHIP = "partnership"
    LLC = "llc"
    C_CORP = "c_corp"
    S_CORP = "s_corp"
    NON_PROFIT = "non_profit"
    TRUST_ESTATE = "trust_estate"
    COOPERATIVE = "cooperative"

    @property
    def display_name(self) -> str:
        """Human-readable label for the entity type."""
        return _ENTITY_DISPLAY_NAMES[self]


_ENTITY_DISPLAY_NAMES = {
    EntityType.SOLE_PROPRIETORSHIP: "Sole Proprietorship",
    EntityType.PARTNERSHIP: "Partnership",
    EntityType.LLC: "Limited Liability Company (LLC)",
    EntityType.C_CORP: "Corporation (C Corp)",
    EntityType.S_CORP: "Corporation (S Corp)",
    EntityType.NON_PROFIT: "Non-Profit Organization",
    EntityType.TRUST_ESTATE: "Trusts and Estates",
    EntityType.COOPERATIVE: "Cooperatives",
}


class CitizenshipStatus(str, Enum):
    """Citizenship or immigration status of a beneficial owner."""

    US_CITIZEN = "us_citizen"
    PERMANENT_RESIDENT = "permanent_resident"
    TEMPORARY_VISA_HOLDER = "temporary_visa_holder"
    REFUGEE_ASYLEE = "refugee_asylee"
    DUAL_CITIZEN_US_FOREIGN = "dual_citizen_us_foreign"
    OTHER_NON_RESIDENT_ALIEN = "other_non_resident_alien"


class FinancialInstrument(str, Enum):
    """Financing product requested in the application."""

    SBA_LOAN = "sba_loan"
    COMMERCIAL_REAL_ESTATE = "commercial_real_estate"
    RESIDENTIAL_REAL_ESTATE = "residential_real_estate"
    EQUIPMENT_FINANCE = "equipment_finance"
    EQUIPMENT_LEASE = "equipment_lease"
    WORKING_CAPITAL = "working_capital"
    LINE_OF_CREDIT = "line_of_credit"
    TERM_LOAN = "term_loan"
    INVOICE_FACTORING = "invoice_factoring"


class DocumentHint(str, Enum):
    """Kind of document the caller is looking for.

    Drives the domain bonus in document matching and the stored category of
    an uploaded document.
    """

    PRIMARY = "primary"
    TAX = "tax"
    IDENTITY = "identity"
    SUPPORTING = "supporting"

    @classmethod
    def from_label(cls, label: str) -> "DocumentHint":
        """Map a free-form document label to a hint.

        The intake UI labels upload slots with phrases such as
        "Primary Formation Document" or "Owner Identity Document"; the first
        of primary, tax or identity contained in the label wins.
        """
        lowered = (label or "").lower()
        for hint in (cls.PRIMARY, cls.TAX, cls.IDENTITY):
            if hint.value in lowered:
                return hint
        return cls.SUPPORTING

    @property
    def category(self) -> "DocumentCategory":
        """Storage category for documents uploaded under this hint."""
        if self is DocumentHint.PRIMARY:
            return DocumentCategory.PRIMARY
        if self is DocumentHint.IDENTITY:
            return DocumentCategory.KYD
        return DocumentCategory.SUPPORTING


class DocumentCategory(str, Enum):
    """Category recorded on an uploaded document."""

    PRIMARY = "primary"
    KYD = "kyd"
    SUPPORTING = "supporting"


class UploadSource(str, Enum):
    """Where an uploaded document came from."""

    GOOGLE = "google"
    MICROSOFT = "microsoft"
    LOCAL = "local"


def coerce_hint(hint: Union[DocumentHint, str, None]) -> Optional[DocumentHint]:
    """Accept a hint, its value, or a free-form upload slot label."""
    if hint is None or isinstance(hint, DocumentHint):
        return hint
    try:
        return DocumentHint(hint)
    except ValueError:
        return DocumentHint.from_label(hint)
