"""Tests for the static requirement tables."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from lendready_core.models import CitizenshipStatus, EntityType
from lendready_core.requirement_tables import (
    CITIZENSHIP_DOCUMENT_REQUIREMENTS,
    ENTITY_DOCUMENT_REQUIREMENTS,
    GENERIC_PRIMARY_DOCUMENTS,
    REQUIREMENT_TABLES_VERSION,
    STATE_SPECIFIC_REQUIREMENTS,
    TIER_LARGE_THRESHOLD,
    TIER_MEDIUM_THRESHOLD,
    TIER_SMALL_THRESHOLD,
    get_requirement_tables_version,
    get_state_overlay,
)


class TestVersion:
    """Tests for table version tracking."""

    def test_version_accessor(self):
        """Accessor should return the module constant."""
        assert get_requirement_tables_version() == REQUIREMENT_TABLES_VERSION


class TestEntityDocuments:
    """Tests for base KYB documents."""

    def test_every_entity_type_has_documents(self):
        """Every entity type should have a non-empty base list."""
        for entity_type in EntityType:
            entry = ENTITY_DOCUMENT_REQUIREMENTS[entity_type]
            assert entry.documents
            assert entry.display_name == entity_type.display_name

    def test_every_entity_type_has_primary_title(self):
        """Every entity type should have a generic primary document title."""
        for entity_type in EntityType:
            assert GENERIC_PRIMARY_DOCUMENTS[entity_type]

    def test_llc_documents(self):
        """LLC base list should start with formation and operating documents."""
        documents = ENTITY_DOCUMENT_REQUIREMENTS[EntityType.LLC].documents
        assert documents[:2] == ("Articles of Organization", "Operating Agreement")
        assert len(documents) == 5

    def test_tables_are_read_only(self):
        """Tables should reject item assignment."""
        with pytest.raises(TypeError):
            ENTITY_DOCUMENT_REQUIREMENTS[EntityType.LLC] = None  # type: ignore[index]

        with pytest.raises(TypeError):
            STATE_SPECIFIC_REQUIREMENTS["Texas"] = {}  # type: ignore[index]

    def test_entries_are_frozen(self):
        """Table entries should reject attribute assignment."""
        entry = ENTITY_DOCUMENT_REQUIREMENTS[EntityType.LLC]
        with pytest.raises(ValidationError):
            entry.documents = ()


class TestStateOverlays:
    """Tests for jurisdiction overlay lookup."""

    def test_shipped_overlays(self):
        """California, Delaware and New York overlays should be available."""
        assert get_state_overlay("California", EntityType.SOLE_PROPRIETORSHIP) is not None
        assert get_state_overlay("California", EntityType.LLC) is not None
        assert get_state_overlay("Delaware", EntityType.C_CORP) is not None
        assert get_state_overlay("Delaware", EntityType.LLC) is not None
        assert get_state_overlay("New York", EntityType.LLC) is not None

    def test_surrounding_whitespace_is_ignored(self):
        """Lookup should trim the state name."""
        assert get_state_overlay("  Delaware ", EntityType.LLC) is not None

    def test_missing_overlay_returns_none(self):
        """Unknown states and uncovered entity types have no overlay."""
        assert get_state_overlay("Texas", EntityType.LLC) is None
        assert get_state_overlay("Delaware", EntityType.S_CORP) is None
        assert get_state_overlay(None, EntityType.LLC) is None
        assert get_state_overlay("", EntityType.LLC) is None

    def test_lookup_is_case_sensitive(self):
        """State names must match exactly."""
        assert get_state_overlay("delaware", EntityType.LLC) is None

    def test_new_york_llc_special_notes(self):
        """Only the New York LLC overlay carries special notes."""
        overlay = get_state_overlay("New York", EntityType.LLC)
        assert overlay.special_notes is not None
        assert "publication" in overlay.special_notes
        assert get_state_overlay("Delaware", EntityType.LLC).special_notes is None


class TestIdentityDocuments:
    """Tests for KYD document tables."""

    def test_every_status_has_entry(self):
        """Every citizenship status should have an entry with a note."""
        for status in CitizenshipStatus:
            entry = CITIZENSHIP_DOCUMENT_REQUIREMENTS[status]
            assert entry.primary
            assert entry.note

    def test_only_us_citizens_have_secondary_documents(self):
        """Secondary documents are defined for U.S. citizens only."""
        with_secondary = {
            status for status, entry in CITIZENSHIP_DOCUMENT_REQUIREMENTS.items()
            if entry.secondary
        }
        assert with_secondary == {CitizenshipStatus.US_CITIZEN}

    def test_only_temporary_visa_holders_have_visa_additions(self):
        """Visa additions are defined for temporary visa holders only."""
        with_visas = {
            status for status, entry in CITIZENSHIP_DOCUMENT_REQUIREMENTS.items()
            if entry.visa_additions
        }
        assert with_visas == {CitizenshipStatus.TEMPORARY_VISA_HOLDER}
        visas = dict(CITIZENSHIP_DOCUMENT_REQUIREMENTS[CitizenshipStatus.TEMPORARY_VISA_HOLDER].visa_additions)
        assert visas["H-1B (Specialty Occupation)"] == "Labor Condition Application"


class TestTierThresholds:
    """Tests for tax tier thresholds."""

    def test_thresholds_are_decimal_and_ordered(self):
        """Thresholds should be Decimals in descending tier order."""
        assert isinstance(TIER_LARGE_THRESHOLD, Decimal)
        assert TIER_LARGE_THRESHOLD > TIER_MEDIUM_THRESHOLD > TIER_SMALL_THRESHOLD
        assert TIER_LARGE_THRESHOLD == Decimal("1000000")
