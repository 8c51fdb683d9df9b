"""Consolidated document checklist for one loan application."""

from typing import Optional

import structlog

from .models.requirements import (
    ApplicationProfile,
    DocumentChecklist,
    OwnerIdentityRequirement,
)
from .resolver import (
    required_tax_years,
    resolve_entity_requirements,
    resolve_identity_documents,
    resolve_tax_requirements,
)

logger = structlog.get_logger()


def build_document_checklist(
    application: ApplicationProfile,
    current_year: int,
    *,
    deduplicate: bool = False,
) -> DocumentChecklist:
    """Resolve every document an application must provide.

    Args:
        application: Entity, jurisdiction, transaction and beneficial owners
        current_year: Calendar year used to name the required tax years
        deduplicate: Passed through to the entity and tax resolvers

    Returns:
        DocumentChecklist; tax fields are empty when no transaction is given

    Raises:
        UnknownEntityTypeError: If the entity type is not in the requirement tables
    """
    entity = resolve_entity_requirements(
        application.entity_type,
        application.jurisdiction,
        deduplicate=deduplicate,
    )

    tax = None
    tax_years: list[int] = []
    if application.transaction is not None:
        tax = resolve_tax_requirements(application.transaction, deduplicate=deduplicate)
        tax_years = required_tax_years(tax, current_year)

    owners = [
        OwnerIdentityRequirement(
            owner_id=owner.id,
            owner_name=owner.name,
            citizenship_status=owner.citizenship_status,
            documents=resolve_identity_documents(owner.citizenship_status),
        )
        for owner in application.owners
    ]

    checklist = DocumentChecklist(entity=entity, tax=tax, tax_years=tax_years, owners=owners)
    logger.info(
        "document_checklist_built",
        entity_type=application.entity_type.value,
        jurisdiction=entity.jurisdiction,
        tax_years=tax_years,
        owners=len(owners),
        documents=len(checklist.all_documents()),
    )
    return checklist


def owners_missing_documents(checklist: DocumentChecklist) -> list[str]:
    """Ids of owners whose citizenship status resolved to no documents."""
    return [owner.owner_id for owner in checklist.owners if not owner.documents]


def find_owner(checklist: DocumentChecklist, owner_id: str) -> Optional[OwnerIdentityRequirement]:
    """Look up one owner's identity requirements."""
    for owner in checklist.owners:
        if owner.owner_id == owner_id:
            return owner
    return None
