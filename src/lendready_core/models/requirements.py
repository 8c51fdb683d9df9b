"""Requirement models: table entries, resolver inputs and resolver outputs.

Table entries (EntityDocumentSpec, StateOverlay, IdentityDocSpec) are frozen
so the reference tables cannot be modified after import. Resolver outputs are
plain mutable models built fresh on every call.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .enums import EntityType, FinancialInstrument


# =============================================================================
# TABLE ENTRIES
# =============================================================================


class EntityDocumentSpec(BaseModel):
    """Base KYB documents for one entity type."""

    model_config = {"frozen": True}

    display_name: str
    documents: tuple[str, ...]


class StateOverlay(BaseModel):
    """Jurisdiction-specific documents and rules for one entity type."""

    model_config = {"frozen": True}

    documents: tuple[str, ...] = ()
    regulations: tuple[str, ...] = ()
    filing_fees: Optional[str] = None
    renewal_requirements: Optional[str] = None
    special_notes: Optional[str] = None


class IdentityDocSpec(BaseModel):
    """Identity (KYD) documents accepted for one citizenship status."""

    model_config = {"frozen": True}

    display_name: str
    primary: tuple[str, ...]
    secondary: Optional[tuple[str, ...]] = None
    note: str
    visa_additions: Optional[tuple[tuple[str, str], ...]] = Field(
        default=None,
        description="(visa type, additional requirement) pairs, in display order",
    )


# =============================================================================
# RESOLVER INPUTS
# =============================================================================


class TransactionProfile(BaseModel):
    """Transaction parameters that drive tax document requirements."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "amount": "750000",
                    "instrument": "commercial_real_estate",
                    "entity_type": "llc",
                }
            ]
        }
    }

    amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Requested transaction amount in USD",
    )
    instrument: Optional[FinancialInstrument] = Field(
        default=None,
        description="Requested financing product, if chosen",
    )
    entity_type: EntityType

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_to_decimal(cls, v):
        """Coerce string and float amounts to Decimal."""
        if isinstance(v, str):
            return Decimal(v.replace(",", "").replace("$", "").strip() or "0")
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("instrument", mode="before")
    @classmethod
    def blank_instrument_is_none(cls, v):
        """Treat an unselected (empty) instrument as no instrument."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BeneficialOwner(BaseModel):
    """An individual owner whose identity documents must be collected."""

    id: str
    name: str
    citizenship_status: str = Field(
        default="",
        description="Citizenship status key; unknown values resolve to no documents",
    )

    @field_validator("citizenship_status", mode="before")
    @classmethod
    def status_to_value(cls, v):
        """Store enum members by their string value."""
        if isinstance(v, Enum):
            return v.value
        return v


class ApplicationProfile(BaseModel):
    """Everything needed to build one application's document checklist."""

    entity_type: EntityType
    jurisdiction: Optional[str] = None
    transaction: Optional[TransactionProfile] = None
    owners: list[BeneficialOwner] = Field(default_factory=list)


# =============================================================================
# RESOLVER OUTPUTS
# =============================================================================


class RequirementProfile(BaseModel):
    """Entity and jurisdiction document requirements."""

    entity_type: EntityType
    jurisdiction: Optional[str] = None
    primary_document_type: str
    required_documents: list[str] = Field(default_factory=list)
    regulations: list[str] = Field(default_factory=list)
    filing_fees: Optional[str] = None
    renewal_requirements: Optional[str] = None
    special_notes: Optional[str] = None

    @property
    def has_state_overlay(self) -> bool:
        """True when jurisdiction-specific rules were applied."""
        return bool(self.regulations) or self.filing_fees is not None


class TaxRequirementProfile(BaseModel):
    """Tax documents required for a transaction.

    Defaults are the requirements of the smallest transactions: one year of
    business returns and nothing else.
    """

    business_tax_years: int = Field(default=1, ge=1)
    personal_tax_required: bool = False
    personal_tax_years: int = Field(default=1, ge=1)
    irs_transcript_required: bool = False
    audited_financials_required: bool = False
    schedules_required: list[str] = Field(default_factory=list)
    additional_documents: list[str] = Field(default_factory=list)


class OwnerIdentityRequirement(BaseModel):
    """Identity documents required from one beneficial owner."""

    owner_id: str
    owner_name: str
    citizenship_status: str
    documents: list[str] = Field(default_factory=list)

    @property
    def requested_documents(self) -> list[str]:
        """Document lines only, without the note and visa guidance lines."""
        return [
            line for line in self.documents
            if line.startswith(("Primary: ", "Secondary: "))
        ]


class DocumentChecklist(BaseModel):
    """Consolidated document checklist for one application."""

    entity: RequirementProfile
    tax: Optional[TaxRequirementProfile] = None
    tax_years: list[int] = Field(default_factory=list)
    owners: list[OwnerIdentityRequirement] = Field(default_factory=list)

    def all_documents(self) -> list[str]:
        """Flatten every requested document into one list.

        Order: entity documents, tax schedules, additional tax documents,
        then each owner's identity documents.
        """
        documents = list(self.entity.required_documents)
        if self.tax is not None:
            documents.extend(self.tax.schedules_required)
            documents.extend(self.tax.additional_documents)
        for owner in self.owners:
            documents.extend(owner.requested_documents)
        return documents
