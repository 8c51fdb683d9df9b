"""Tests for entity, jurisdiction and identity requirement resolution."""

import pytest

from lendready_core.exceptions import UnknownEntityTypeError
from lendready_core.models import CitizenshipStatus, EntityType
from lendready_core.requirement_tables import ENTITY_DOCUMENT_REQUIREMENTS
from lendready_core.resolver import (
    coerce_entity_type,
    get_primary_document_type,
    resolve_entity_requirements,
    resolve_identity_documents,
)


class TestEntityRequirements:
    """Tests for resolve_entity_requirements."""

    def test_delaware_llc(self):
        """Delaware LLCs get base LLC documents followed by the Delaware overlay."""
        profile = resolve_entity_requirements("llc", "Delaware")

        assert profile.primary_document_type == "Delaware Certificate of Formation"
        assert profile.entity_type == EntityType.LLC
        assert profile.required_documents[:5] == list(
            ENTITY_DOCUMENT_REQUIREMENTS[EntityType.LLC].documents
        )
        assert "Articles of Organization" in profile.required_documents
        assert "Operating Agreement" in profile.required_documents
        assert "Delaware Certificate of Formation" in profile.required_documents
        assert "Delaware LLC Operating Agreement" in profile.required_documents
        assert len(profile.required_documents) == 9

    def test_overlay_fields_copied(self):
        """Overlay regulations, fees and renewal should be copied verbatim."""
        profile = resolve_entity_requirements(EntityType.LLC, "California")

        assert profile.regulations[1] == "California imposes an annual $800 minimum franchise tax"
        assert profile.filing_fees.startswith("Filing fee: $70")
        assert profile.renewal_requirements.startswith("Biennial Statement")
        assert profile.special_notes is None
        assert profile.has_state_overlay is True

    def test_no_jurisdiction_gives_base_documents(self):
        """Without a jurisdiction only base documents apply."""
        profile = resolve_entity_requirements(EntityType.C_CORP)

        assert profile.required_documents == list(
            ENTITY_DOCUMENT_REQUIREMENTS[EntityType.C_CORP].documents
        )
        assert profile.regulations == []
        assert profile.filing_fees is None
        assert profile.renewal_requirements is None
        assert profile.special_notes is None
        assert profile.has_state_overlay is False

    def test_unknown_jurisdiction_falls_back(self):
        """An unknown state is not an error."""
        profile = resolve_entity_requirements(EntityType.LLC, "Atlantis")

        assert profile.primary_document_type == "Articles of Organization"
        assert profile.regulations == []
        assert len(profile.required_documents) == 5

    def test_state_without_overlay_for_entity(self):
        """New York only has an LLC overlay."""
        profile = resolve_entity_requirements(EntityType.PARTNERSHIP, "New York")

        assert profile.required_documents == list(
            ENTITY_DOCUMENT_REQUIREMENTS[EntityType.PARTNERSHIP].documents
        )
        assert profile.jurisdiction == "New York"

    def test_unknown_entity_type_raises(self):
        """Unknown entity types must not produce a document list."""
        with pytest.raises(UnknownEntityTypeError) as exc_info:
            resolve_entity_requirements("gmbh", "Delaware")

        assert exc_info.value.details["entity_type"] == "gmbh"
        assert exc_info.value.recoverable is False

    def test_duplicates_kept_by_default(self):
        """Overlay documents are appended after base documents without removal."""
        profile = resolve_entity_requirements(EntityType.C_CORP, "Delaware")

        base = ENTITY_DOCUMENT_REQUIREMENTS[EntityType.C_CORP].documents
        assert len(profile.required_documents) == len(base) + 4

    def test_deduplicate_keeps_first_occurrence(self):
        """deduplicate=True removes repeats and keeps order."""
        profile = resolve_entity_requirements(EntityType.LLC, "Delaware", deduplicate=True)

        assert len(profile.required_documents) == len(set(profile.required_documents))
        assert profile.required_documents[0] == "Articles of Organization"

    def test_deterministic(self):
        """Repeated calls should return equal, independent results."""
        first = resolve_entity_requirements(EntityType.LLC, "New York")
        second = resolve_entity_requirements(EntityType.LLC, "New York")

        assert first == second
        first.required_documents.append("Extra")
        assert "Extra" not in second.required_documents
        assert "Extra" not in resolve_entity_requirements(EntityType.LLC, "New York").required_documents

    def test_serializes_to_json(self):
        """Profiles should round-trip through JSON."""
        profile = resolve_entity_requirements(EntityType.LLC, "New York")
        restored = type(profile).model_validate_json(profile.model_dump_json())
        assert restored == profile


class TestDuplicateDocuments:
    """Tests for duplicate handling with a table that actually repeats entries."""

    def test_repeated_entries_removed_only_when_requested(self, monkeypatch):
        """Overlay entries equal to base entries are kept unless deduplicating."""
        from lendready_core import requirement_tables
        from lendready_core.models import StateOverlay

        overlay = StateOverlay(documents=("Operating Agreement", "Local Permit"))
        monkeypatch.setattr(
            requirement_tables,
            "STATE_SPECIFIC_REQUIREMENTS",
            {"Testland": {EntityType.LLC: overlay}},
        )

        kept = resolve_entity_requirements(EntityType.LLC, "Testland")
        deduped = resolve_entity_requirements(EntityType.LLC, "Testland", deduplicate=True)

        assert kept.required_documents.count("Operating Agreement") == 2
        assert deduped.required_documents.count("Operating Agreement") == 1
        assert deduped.required_documents[-1] == "Local Permit"


class TestPrimaryDocumentType:
    """Tests for get_primary_document_type."""

    @pytest.mark.parametrize(
        "entity_type,expected",
        [
            (EntityType.LLC, "Delaware Certificate of Formation"),
            (EntityType.C_CORP, "Delaware Certificate of Incorporation"),
            (EntityType.S_CORP, "Delaware Certificate of Incorporation"),
            (EntityType.PARTNERSHIP, "Partnership Agreement"),
        ],
    )
    def test_delaware_titles(self, entity_type, expected):
        """Delaware LLCs and corporations get Delaware-titled documents."""
        assert get_primary_document_type(entity_type, "Delaware") == expected

    @pytest.mark.parametrize(
        "entity_type,expected",
        [
            (EntityType.LLC, "Articles of Organization"),
            (EntityType.C_CORP, "Articles of Incorporation"),
            (EntityType.S_CORP, "Articles of Incorporation"),
            (EntityType.PARTNERSHIP, "Partnership Agreement"),
            (EntityType.TRUST_ESTATE, "Trust Agreement or Trust Certificate"),
            (EntityType.NON_PROFIT, "501(c)(3) Determination Letter"),
            (EntityType.SOLE_PROPRIETORSHIP, "Business Registration Certificate or DBA Filing"),
            (EntityType.COOPERATIVE, "Articles of Incorporation for Cooperative"),
        ],
    )
    def test_generic_titles(self, entity_type, expected):
        """Other jurisdictions get the generic title."""
        assert get_primary_document_type(entity_type, "California") == expected
        assert get_primary_document_type(entity_type) == expected


class TestCoerceEntityType:
    """Tests for entity type coercion."""

    def test_accepts_values_case_insensitively(self):
        """String values are trimmed and lowercased."""
        assert coerce_entity_type(" LLC ") == EntityType.LLC
        assert coerce_entity_type(EntityType.S_CORP) is EntityType.S_CORP

    def test_rejects_unknown(self):
        """Unknown values raise UnknownEntityTypeError."""
        with pytest.raises(UnknownEntityTypeError):
            coerce_entity_type("corporation")


class TestIdentityDocuments:
    """Tests for resolve_identity_documents."""

    def test_us_citizen_layout(self):
        """Primary lines, then secondary lines, then the note."""
        lines = resolve_identity_documents(CitizenshipStatus.US_CITIZEN)

        assert lines[0] == "Primary: U.S. Passport or U.S. Passport Card"
        assert lines[4] == "Secondary: Original or certified U.S. Birth Certificate"
        assert lines[-1].startswith("Note: Requires at least one primary document")
        assert len(lines) == 4 + 5 + 1

    def test_permanent_resident_has_no_secondary(self):
        """Statuses without secondary documents go straight to the note."""
        lines = resolve_identity_documents("permanent_resident")

        assert not any(line.startswith("Secondary: ") for line in lines)
        assert lines[-1] == "Note: Requires one document from the list."
        assert len(lines) == 5

    def test_temporary_visa_holder_lists_visa_additions(self):
        """Visa additions follow the note, one line each."""
        lines = resolve_identity_documents(CitizenshipStatus.TEMPORARY_VISA_HOLDER)

        note_index = next(i for i, line in enumerate(lines) if line.startswith("Note: "))
        visa_lines = lines[note_index + 1:]
        assert len(visa_lines) == 5
        assert visa_lines[0] == "- E-1/E-2 (Treaty Trader/Investor): Trade agreement documentation"
        assert "- TN (NAFTA Professional): Proof of Canadian/Mexican citizenship, educational credentials" in visa_lines

    def test_unknown_status_returns_empty_list(self):
        """Unknown statuses are not an error."""
        assert resolve_identity_documents("martian") == []
        assert resolve_identity_documents("") == []
        assert resolve_identity_documents(None) == []

    def test_every_status_resolves(self):
        """Every status should resolve to at least one primary line and a note."""
        for status in CitizenshipStatus:
            lines = resolve_identity_documents(status)
            assert lines[0].startswith("Primary: ")
            assert any(line.startswith("Note: ") for line in lines)
