"""Requirement resolution for KYB, tax and identity documents.

Resolution merges the static requirement tables into per-application results:

1. Entity documents: base documents for the entity type, followed by the
   jurisdiction overlay (if the state has one for that entity type)
2. Tax documents: amount tier, then instrument overlay, then entity overlay.
   Each pass only raises year minimums, sets flags or appends schedules.
3. Identity documents: one line per accepted document for a citizenship status

All functions are pure; every call builds a fresh result.
"""

from typing import Iterable, Optional, Union

import structlog

from .exceptions import UnknownEntityTypeError
from .models.enums import CitizenshipStatus, EntityType, FinancialInstrument
from .models.requirements import (
    RequirementProfile,
    TaxRequirementProfile,
    TransactionProfile,
)
from .requirement_tables import (
    CITIZENSHIP_DOCUMENT_REQUIREMENTS,
    DEFAULT_PRIMARY_DOCUMENT,
    DELAWARE,
    DELAWARE_PRIMARY_DOCUMENTS,
    ENTITIES_REQUIRING_PERSONAL_TAX,
    ENTITIES_WITH_PERSONAL_TAX_AT_SMALL_TIER,
    ENTITY_DOCUMENT_REQUIREMENTS,
    ENTITY_TAX_SCHEDULES,
    EQUIPMENT_INSTRUMENTS,
    GENERIC_PRIMARY_DOCUMENTS,
    REAL_ESTATE_AUDIT_THRESHOLD,
    REAL_ESTATE_INSTRUMENTS,
    REVOLVING_INSTRUMENTS,
    REVOLVING_TRANSCRIPT_THRESHOLD,
    SBA_ADDITIONAL_DOCUMENTS,
    TIER_LARGE_THRESHOLD,
    TIER_MEDIUM_THRESHOLD,
    TIER_SMALL_THRESHOLD,
    get_state_overlay,
)

logger = structlog.get_logger()


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def coerce_entity_type(entity_type: Union[EntityType, str]) -> EntityType:
    """Convert a string value to EntityType.

    Raises:
        UnknownEntityTypeError: If the value is not a known entity type
    """
    if isinstance(entity_type, EntityType):
        return entity_type
    try:
        return EntityType(str(entity_type).strip().lower())
    except ValueError:
        raise UnknownEntityTypeError(str(entity_type)) from None


# =============================================================================
# ENTITY / JURISDICTION REQUIREMENTS
# =============================================================================


def get_primary_document_type(
    entity_type: Union[EntityType, str],
    jurisdiction: Optional[str] = None,
) -> str:
    """Title of the single authoritative formation document.

    Delaware LLCs and corporations get Delaware-titled documents; everywhere
    else the generic title for the entity type applies.
    """
    entity = coerce_entity_type(entity_type)
    if jurisdiction and jurisdiction.strip() == DELAWARE:
        delaware_title = DELAWARE_PRIMARY_DOCUMENTS.get(entity)
        if delaware_title:
            return delaware_title
    return GENERIC_PRIMARY_DOCUMENTS.get(entity, DEFAULT_PRIMARY_DOCUMENT)


def resolve_entity_requirements(
    entity_type: Union[EntityType, str],
    jurisdiction: Optional[str] = None,
    *,
    deduplicate: bool = False,
) -> RequirementProfile:
    """Resolve KYB documents for an entity type in a jurisdiction.

    Args:
        entity_type: Legal form of the business (enum or its string value)
        jurisdiction: State name; unknown or missing states use base documents only
        deduplicate: Drop repeated documents, keeping the first occurrence

    Returns:
        RequirementProfile with base documents followed by overlay documents

    Raises:
        UnknownEntityTypeError: If entity_type is not in the requirement tables
    """
    entity = coerce_entity_type(entity_type)
    base = ENTITY_DOCUMENT_REQUIREMENTS.get(entity)
    if base is None:
        raise UnknownEntityTypeError(entity.value)

    documents = list(base.documents)
    profile = RequirementProfile(
        entity_type=entity,
        jurisdiction=jurisdiction.strip() if jurisdiction else None,
        primary_document_type=get_primary_document_type(entity, jurisdiction),
    )

    overlay = get_state_overlay(jurisdiction, entity)
    if overlay is not None:
        documents.extend(overlay.documents)
        profile.regulations = list(overlay.regulations)
        profile.filing_fees = overlay.filing_fees
        profile.renewal_requirements = overlay.renewal_requirements
        profile.special_notes = overlay.special_notes

    profile.required_documents = _dedupe(documents) if deduplicate else documents

    logger.info(
        "entity_requirements_resolved",
        entity_type=entity.value,
        jurisdiction=profile.jurisdiction,
        state_overlay=overlay is not None,
        documents=len(profile.required_documents),
    )
    return profile


# =============================================================================
# TAX REQUIREMENTS
# =============================================================================


def _apply_amount_tier(profile: TaxRequirementProfile, txn: TransactionProfile) -> None:
    """Set requirements for the highest tier the amount reaches."""
    amount = txn.amount
    if amount >= TIER_LARGE_THRESHOLD:
        profile.business_tax_years = 3
        profile.personal_tax_required = True
        profile.personal_tax_years = 2
        profile.irs_transcript_required = True
        profile.audited_financials_required = True
        profile.schedules_required = ["Schedule C", "Schedule E", "Schedule K-1"]
    elif amount >= TIER_MEDIUM_THRESHOLD:
        profile.business_tax_years = 2
        profile.personal_tax_required = True
        profile.personal_tax_years = 2
        profile.irs_transcript_required = True
        profile.schedules_required = ["Schedule C", "Schedule E"]
    elif amount >= TIER_SMALL_THRESHOLD:
        profile.business_tax_years = 2
        profile.personal_tax_required = txn.entity_type in ENTITIES_WITH_PERSONAL_TAX_AT_SMALL_TIER
        profile.personal_tax_years = 1
        profile.schedules_required = ["Schedule C"]


def _apply_instrument_overlay(profile: TaxRequirementProfile, txn: TransactionProfile) -> None:
    """Raise requirements for the requested financing product."""
    instrument = txn.instrument
    if instrument is None:
        return

    if instrument == FinancialInstrument.SBA_LOAN:
        profile.business_tax_years = max(profile.business_tax_years, 3)
        profile.personal_tax_required = True
        profile.personal_tax_years = max(profile.personal_tax_years, 3)
        profile.irs_transcript_required = True
        profile.additional_documents.extend(SBA_ADDITIONAL_DOCUMENTS)
    elif instrument in REAL_ESTATE_INSTRUMENTS:
        profile.business_tax_years = max(profile.business_tax_years, 2)
        profile.schedules_required.extend(["Schedule E", "Form 4562"])
        if txn.amount >= REAL_ESTATE_AUDIT_THRESHOLD:
            profile.audited_financials_required = True
    elif instrument in EQUIPMENT_INSTRUMENTS:
        profile.schedules_required.extend(["Form 4562", "Section 179 Election"])
    elif instrument in REVOLVING_INSTRUMENTS:
        profile.business_tax_years = max(profile.business_tax_years, 2)
        profile.irs_transcript_required = (
            profile.irs_transcript_required
            or txn.amount >= REVOLVING_TRANSCRIPT_THRESHOLD
        )


def _apply_entity_overlay(profile: TaxRequirementProfile, txn: TransactionProfile) -> None:
    """Append the schedules every return of this entity type carries."""
    if txn.entity_type in ENTITIES_REQUIRING_PERSONAL_TAX:
        profile.personal_tax_required = True
    profile.schedules_required.extend(ENTITY_TAX_SCHEDULES.get(txn.entity_type, ()))


def resolve_tax_requirements(
    transaction: TransactionProfile,
    *,
    deduplicate: bool = False,
) -> TaxRequirementProfile:
    """Resolve tax documents for a transaction.

    Args:
        transaction: Amount, instrument and entity type
        deduplicate: Drop repeated schedules and documents, keeping the first occurrence

    Returns:
        A new TaxRequirementProfile
    """
    profile = TaxRequirementProfile()

    _apply_amount_tier(profile, transaction)
    _apply_instrument_overlay(profile, transaction)
    _apply_entity_overlay(profile, transaction)

    if deduplicate:
        profile.schedules_required = _dedupe(profile.schedules_required)
        profile.additional_documents = _dedupe(profile.additional_documents)

    logger.info(
        "tax_requirements_resolved",
        amount=str(transaction.amount),
        instrument=transaction.instrument.value if transaction.instrument else None,
        entity_type=transaction.entity_type.value,
        business_tax_years=profile.business_tax_years,
        personal_tax_required=profile.personal_tax_required,
        irs_transcript_required=profile.irs_transcript_required,
        audited_financials_required=profile.audited_financials_required,
    )
    return profile


def required_tax_years(profile: TaxRequirementProfile, current_year: int) -> list[int]:
    """Completed tax years to collect, newest first.

    Example:
        >>> required_tax_years(TaxRequirementProfile(business_tax_years=2), 2025)
        [2024, 2023]
    """
    return [current_year - offset for offset in range(1, profile.business_tax_years + 1)]


# =============================================================================
# IDENTITY (KYD) REQUIREMENTS
# =============================================================================


def resolve_identity_documents(citizenship_status: Union[CitizenshipStatus, str, None]) -> list[str]:
    """List identity documents accepted for a citizenship status.

    Lines are ordered: "Primary: " documents, "Secondary: " documents, the
    "Note: " line, then "- {visa}: {requirement}" lines for temporary visa
    holders. An unknown status returns an empty list.
    """
    if citizenship_status is None:
        return []
    key = citizenship_status.value if isinstance(citizenship_status, CitizenshipStatus) else citizenship_status
    try:
        status = CitizenshipStatus(key)
    except ValueError:
        logger.debug("unknown_citizenship_status", citizenship_status=key)
        return []

    entry = CITIZENSHIP_DOCUMENT_REQUIREMENTS[status]
    lines = [f"Primary: {doc}" for doc in entry.primary]
    if entry.secondary:
        lines.extend(f"Secondary: {doc}" for doc in entry.secondary)
    lines.append(f"Note: {entry.note}")

    if status == CitizenshipStatus.TEMPORARY_VISA_HOLDER and entry.visa_additions:
        lines.extend(f"- {visa}: {requirement}" for visa, requirement in entry.visa_additions)

    return lines
