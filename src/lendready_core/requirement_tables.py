"""Reference tables for KYB, KYD and tax document requirements.

This module contains the static document requirements used during loan
application intake:

- Base KYB documents per business entity type
- Jurisdiction overlays (additional documents and regulations per state)
- Identity (KYD) documents per citizenship status
- Transaction amount thresholds for tax document tiers

All tables are read-only mappings built once at import time. Entries are
frozen models or tuples, so callers cannot modify them.

Updated: 2025-Q2
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

from .models.enums import CitizenshipStatus, EntityType, FinancialInstrument
from .models.requirements import EntityDocumentSpec, IdentityDocSpec, StateOverlay


# =============================================================================
# VERSION TRACKING
# =============================================================================

REQUIREMENT_TABLES_VERSION = "2025-Q2"


def get_requirement_tables_version() -> str:
    """Return current requirement tables version."""
    return REQUIREMENT_TABLES_VERSION


# =============================================================================
# BASE KYB DOCUMENTS BY ENTITY TYPE
# =============================================================================

ENTITY_DOCUMENT_REQUIREMENTS: Mapping[EntityType, EntityDocumentSpec] = MappingProxyType({
    EntityType.SOLE_PROPRIETORSHIP: EntityDocumentSpec(
        display_name=EntityType.SOLE_PROPRIETORSHIP.display_name,
        documents=(
            "Owner's personal tax return with Schedule C included",
            "Doing Business As (DBA) registration or certificate",
            "Local Business License Filling",
        ),
    ),
    EntityType.PARTNERSHIP: EntityDocumentSpec(
        display_name=EntityType.PARTNERSHIP.display_name,
        documents=(
            "Partnership agreement",
            "Form 1065 (U.S. Return of Partnership Income)",
            "EIN Confirmation Letter from the IRS",
            "K-1 Form from the most recent tax return",
        ),
    ),
    EntityType.LLC: EntityDocumentSpec(
        display_name=EntityType.LLC.display_name,
        documents=(
            "Articles of Organization",
            "Operating Agreement",
            "EIN Confirmation Letter from the IRS",
            "Certificate of Good Standing from the state",
            "LLC Resolution showing the authority to act on behalf of the LLC",
        ),
    ),
    EntityType.C_CORP: EntityDocumentSpec(
        display_name=EntityType.C_CORP.display_name,
        documents=(
            "Articles of Incorporation",
            "Stock certificates",
            "Bylaws",
            "Corporate resolutions",
            "EIN Confirmation Letter from the IRS",
            "Form 1120",
            "Certificate of Good Standing from the state",
        ),
    ),
    EntityType.S_CORP: EntityDocumentSpec(
        display_name=EntityType.S_CORP.display_name,
        documents=(
            "Articles of Incorporation",
            "Bylaws",
            "Corporate resolutions",
            "EIN Confirmation Letter from the IRS",
            "Form 1120S",
            "Personal tax return with Schedule E attached",
            "Certificate of Good Standing from the state",
        ),
    ),
    EntityType.NON_PROFIT: EntityDocumentSpec(
        display_name=EntityType.NON_PROFIT.display_name,
        documents=(
            "Articles of Incorporation",
            "IRS Determination Letter confirming tax-exempt status",
            "Bylaws",
            "EIN Confirmation Letter from the IRS",
            "Certificate of Good Standing from the state",
        ),
    ),
    EntityType.TRUST_ESTATE: EntityDocumentSpec(
        display_name=EntityType.TRUST_ESTATE.display_name,
        documents=(
            "Trust Agreement",
            "EIN Confirmation Letter from the IRS",
            "Certificate of Trust (if applicable)",
        ),
    ),
    EntityType.COOPERATIVE: EntityDocumentSpec(
        display_name=EntityType.COOPERATIVE.display_name,
        documents=(
            "Articles of Incorporation",
            "Bylaws",
            "EIN Confirmation Letter from the IRS",
            "Membership agreements",
        ),
    ),
})


# =============================================================================
# JURISDICTION OVERLAYS
# =============================================================================
# Indexed by state name, then entity type. Only states and entity types with
# rules beyond the base list appear here.

DELAWARE = "Delaware"

STATE_SPECIFIC_REQUIREMENTS: Mapping[str, Mapping[EntityType, StateOverlay]] = MappingProxyType({
    "California": MappingProxyType({
        EntityType.SOLE_PROPRIETORSHIP: StateOverlay(
            documents=(
                "California Fictitious Business Name Statement (if using a name other than your legal name)",
                "California Seller's Permit (if selling taxable goods)",
                "Local Business License specific to your city/county in California",
            ),
            regulations=(
                "Must register with California Secretary of State if using a fictitious business name",
                "Must renew FBN statement every 5 years",
                "Local business tax registration may be required in specific cities/counties",
            ),
            filing_fees=(
                "FBN Statement: $26-$58 depending on county; "
                "Local Business License: Varies by location ($50-$500)"
            ),
            renewal_requirements="FBN renewal every 5 years; Annual business tax renewal",
        ),
        EntityType.LLC: StateOverlay(
            documents=(
                "Articles of Organization filed with California Secretary of State",
                "California LLC Operating Agreement",
                "Statement of Information (Form LLC-12)",
                "California LLC Franchise Tax payment confirmation",
            ),
            regulations=(
                "California LLCs must file Statement of Information within 90 days of formation",
                "California imposes an annual $800 minimum franchise tax",
                "Must file Statement of Information every two years ($20 fee)",
            ),
            filing_fees="Filing fee: $70 for Articles of Organization; $20 for Statement of Information",
            renewal_requirements=(
                "Biennial Statement of Information filing; Annual $800 minimum franchise tax"
            ),
        ),
    }),
    DELAWARE: MappingProxyType({
        EntityType.C_CORP: StateOverlay(
            documents=(
                "Delaware Certificate of Incorporation",
                "Delaware Corporate Bylaws",
                "Delaware Annual Franchise Tax Report",
                "Confirmation of Delaware Registered Agent",
            ),
            regulations=(
                "Must maintain a registered agent in Delaware",
                "Must file annual franchise tax report by March 1",
                "Directors meetings not required to be held in Delaware",
            ),
            filing_fees=(
                "Incorporation filing fee: $89 minimum; "
                "Annual franchise tax: $175-$200,000 based on shares"
            ),
            renewal_requirements="Annual franchise tax report and payment",
        ),
        EntityType.LLC: StateOverlay(
            documents=(
                "Delaware Certificate of Formation",
                "Delaware LLC Operating Agreement",
                "Confirmation of Delaware Registered Agent",
                "Delaware Annual LLC Tax payment confirmation",
            ),
            regulations=(
                "Must maintain a registered agent in Delaware",
                "Annual LLC tax of $300 due by June 1",
                "No requirement for operating agreement, but strongly recommended",
            ),
            filing_fees="Formation filing fee: $90; Annual LLC tax: $300 flat fee",
            renewal_requirements="Annual LLC tax payment",
        ),
    }),
    "New York": MappingProxyType({
        EntityType.LLC: StateOverlay(
            documents=(
                "New York Articles of Organization",
                "NY Publication Affidavit (proof of publishing formation notice in two newspapers)",
                "NY Certificate of Publication",
                "NY LLC Operating Agreement",
                "NY Biennial Statement filing receipt",
            ),
            regulations=(
                "Must publish notice of formation in two newspapers for 6 consecutive weeks",
                "Must file Certificate of Publication within 120 days of formation",
                "Must have a New York address for service of process",
                "Must file Biennial Statement every two years",
            ),
            filing_fees=(
                "Filing fee: $200; Publication costs: $600-$1,200 depending on county; "
                "Biennial statement: $9"
            ),
            renewal_requirements="Biennial statement filing every two years with $9 fee",
            special_notes=(
                "NY has unique publication requirements that can be costly, "
                "especially in NYC counties"
            ),
        ),
    }),
})


def get_state_overlay(
    jurisdiction: Optional[str],
    entity_type: EntityType,
) -> Optional[StateOverlay]:
    """Get the overlay for a state and entity type.

    Args:
        jurisdiction: State name (e.g. "Delaware"); surrounding whitespace is ignored
        entity_type: Business entity type

    Returns:
        The overlay, or None when the state or entity type has none
    """
    if not jurisdiction:
        return None
    state_overlays = STATE_SPECIFIC_REQUIREMENTS.get(jurisdiction.strip())
    if state_overlays is None:
        return None
    return state_overlays.get(entity_type)


# =============================================================================
# PRIMARY FORMATION DOCUMENT TITLES
# =============================================================================

DELAWARE_PRIMARY_DOCUMENTS: Mapping[EntityType, str] = MappingProxyType({
    EntityType.LLC: "Delaware Certificate of Formation",
    EntityType.C_CORP: "Delaware Certificate of Incorporation",
    EntityType.S_CORP: "Delaware Certificate of Incorporation",
})

GENERIC_PRIMARY_DOCUMENTS: Mapping[EntityType, str] = MappingProxyType({
    EntityType.SOLE_PROPRIETORSHIP: "Business Registration Certificate or DBA Filing",
    EntityType.LLC: "Articles of Organization",
    EntityType.C_CORP: "Articles of Incorporation",
    EntityType.S_CORP: "Articles of Incorporation",
    EntityType.PARTNERSHIP: "Partnership Agreement",
    EntityType.TRUST_ESTATE: "Trust Agreement or Trust Certificate",
    EntityType.NON_PROFIT: "501(c)(3) Determination Letter",
    EntityType.COOPERATIVE: "Articles of Incorporation for Cooperative",
})

DEFAULT_PRIMARY_DOCUMENT = "Business Formation Document"


# =============================================================================
# IDENTITY (KYD) DOCUMENTS BY CITIZENSHIP STATUS
# =============================================================================

CITIZENSHIP_DOCUMENT_REQUIREMENTS: Mapping[CitizenshipStatus, IdentityDocSpec] = MappingProxyType({
    CitizenshipStatus.US_CITIZEN: IdentityDocSpec(
        display_name="U.S. Citizen",
        primary=(
            "U.S. Passport or U.S. Passport Card",
            "Certificate of U.S. Citizenship (N-560 or N-561)",
            "Certificate of Naturalization (N-550 or N-570)",
            "State-issued Enhanced Driver's License",
        ),
        # Two of these are required when no primary document is available
        secondary=(
            "Original or certified U.S. Birth Certificate",
            "Consular Report of Birth Abroad (FS-240, DS-1350, or FS-545)",
            "Government employee ID card with photo",
            "U.S. Military ID card or draft record",
            "Social Security Card plus government-issued photo ID",
        ),
        note=(
            "Requires at least one primary document, or two secondary documents "
            "if no primary is available."
        ),
    ),
    CitizenshipStatus.PERMANENT_RESIDENT: IdentityDocSpec(
        display_name="Permanent Resident",
        primary=(
            'Permanent Resident Card (Form I-551, "Green Card")',
            "Foreign passport with I-551 stamp or MRIV",
            "Employment Authorization Document (EAD) with Category C08, C09, or C33",
            "Form I-797 Notice of Action showing approval of status with valid foreign passport",
        ),
        note="Requires one document from the list.",
    ),
    CitizenshipStatus.TEMPORARY_VISA_HOLDER: IdentityDocSpec(
        display_name="Temporary Visa Holder",
        primary=(
            "Valid Foreign Passport with appropriate visa",
            "Form I-94 Arrival/Departure Record or I-94W",
            "Employment Authorization Document (EAD), if applicable",
            "USCIS approval notice relevant to status (e.g., I-797)",
        ),
        visa_additions=(
            ("E-1/E-2 (Treaty Trader/Investor)", "Trade agreement documentation"),
            ("H-1B (Specialty Occupation)", "Labor Condition Application"),
            ("L-1A/L-1B (Intracompany Transferee)", "Evidence of qualifying relationship"),
            ("O-1 (Extraordinary Ability)", "Evidence of extraordinary ability/achievement"),
            ("TN (NAFTA Professional)", "Proof of Canadian/Mexican citizenship, educational credentials"),
        ),
        note=(
            "Requires core documents plus any relevant additional documents "
            "based on visa type."
        ),
    ),
    CitizenshipStatus.REFUGEE_ASYLEE: IdentityDocSpec(
        display_name="Refugee/Asylee",
        primary=(
            "Form I-94 with refugee or asylum stamp",
            "Employment Authorization Document (EAD)",
            "Refugee Travel Document (Form I-571)",
            "Approval letter from USCIS granting asylum or refugee status",
            "Order from Immigration Judge granting asylum",
        ),
        note="Requires one document from the list.",
    ),
    CitizenshipStatus.DUAL_CITIZEN_US_FOREIGN: IdentityDocSpec(
        display_name="Dual Citizen (U.S. + Foreign Country)",
        primary=(
            "U.S. Passport or Certificate of U.S. Citizenship (N-560 or N-561)",
            "Valid Foreign Passport from second country of citizenship (optional but recommended)",
        ),
        note=(
            "Requires U.S. proof. Foreign passport is recommended. Ensure identity "
            "and citizenship from both can be established."
        ),
    ),
    CitizenshipStatus.OTHER_NON_RESIDENT_ALIEN: IdentityDocSpec(
        display_name="Other (Non-Resident Alien/Foreign National)",
        primary=(
            "Valid Foreign Passport",
            "Evidence of legal entry into U.S. if applicable",
            "Documentation of permanent residence in another country",
            "Tax identification documents (e.g., W-8BEN, ITIN)",
            "Proof of foreign address",
        ),
        note=(
            "Requires documents confirming foreign nationality and U.S. tax/entry "
            "status if applicable."
        ),
    ),
})


# =============================================================================
# TAX DOCUMENT TIERS
# =============================================================================
# Amount tiers are mutually exclusive; only the highest matching tier applies.

TIER_LARGE_THRESHOLD = Decimal("1000000")
TIER_MEDIUM_THRESHOLD = Decimal("500000")
TIER_SMALL_THRESHOLD = Decimal("100000")

# Working capital and credit lines need an IRS transcript from this amount
REVOLVING_TRANSCRIPT_THRESHOLD = Decimal("250000")

# Real estate financing needs audited financials from this amount
REAL_ESTATE_AUDIT_THRESHOLD = Decimal("500000")

ENTITIES_WITH_PERSONAL_TAX_AT_SMALL_TIER = frozenset({
    EntityType.SOLE_PROPRIETORSHIP,
    EntityType.S_CORP,
})

SBA_ADDITIONAL_DOCUMENTS = ("SBA Form 912", "SBA Form 413")

REAL_ESTATE_INSTRUMENTS = frozenset({
    FinancialInstrument.COMMERCIAL_REAL_ESTATE,
    FinancialInstrument.RESIDENTIAL_REAL_ESTATE,
})
EQUIPMENT_INSTRUMENTS = frozenset({
    FinancialInstrument.EQUIPMENT_FINANCE,
    FinancialInstrument.EQUIPMENT_LEASE,
})
REVOLVING_INSTRUMENTS = frozenset({
    FinancialInstrument.WORKING_CAPITAL,
    FinancialInstrument.LINE_OF_CREDIT,
})

# Schedules every return of the entity type must carry
ENTITY_TAX_SCHEDULES: Mapping[EntityType, tuple[str, ...]] = MappingProxyType({
    EntityType.SOLE_PROPRIETORSHIP: ("Schedule C", "Schedule SE"),
    EntityType.S_CORP: ("Schedule E", "Form 1120S", "Schedule K-1"),
    EntityType.PARTNERSHIP: ("Form 1065", "Schedule K-1"),
    EntityType.LLC: ("Form 1065", "Schedule K-1"),
    EntityType.C_CORP: ("Form 1120",),
})

ENTITIES_REQUIRING_PERSONAL_TAX = frozenset({
    EntityType.SOLE_PROPRIETORSHIP,
    EntityType.S_CORP,
})
