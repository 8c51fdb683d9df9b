"""Tests for structured field extraction."""

import pytest

from lendready_core.field_extractor import FIELD_VOCABULARY, FieldExtractor, extract_fields


SAMPLE_CERTIFICATE = """STATE OF DELAWARE
CERTIFICATE OF FORMATION
Legal Name: Harbor Light Logistics LLC
Date of Formation: March 15, 2019
Business Address: 1200 Market Street, Suite 400
EIN 84-1234567
D-U-N-S Number: 08-146-6849
"""


class TestExtractFields:
    """Tests for extract_fields."""

    def test_ein_only(self):
        """An EIN line yields only the tax id, digits only."""
        assert extract_fields("EIN: 12-3456789") == {"taxId": "123456789"}

    def test_full_certificate(self):
        """All five fields are extracted from a typical certificate."""
        fields = extract_fields(SAMPLE_CERTIFICATE)

        assert fields == {
            "taxId": "841234567",
            "dunsNumber": "081466849",
            "legalBusinessName": "Harbor Light Logistics LLC",
            "dateEstablished": "2019-03-15",
            "businessAddressStreet": "1200 Market Street, Suite 400",
        }
        assert set(fields) <= set(FIELD_VOCABULARY)

    def test_empty_text(self):
        """Empty or blank text yields no fields."""
        assert extract_fields("") == {}
        assert extract_fields("   \n ") == {}
        assert extract_fields(None) == {}

    def test_case_insensitive_labels(self):
        """Labels match regardless of case."""
        fields = extract_fields("company name: Acme Bakery Inc\nADDRESS: 9 Elm St")
        assert fields["legalBusinessName"] == "Acme Bakery Inc"
        assert fields["businessAddressStreet"] == "9 Elm St"

    def test_first_match_wins(self):
        """Only the first occurrence of a field is used."""
        fields = extract_fields("EIN 11-1111111\nEIN 22-2222222")
        assert fields["taxId"] == "111111111"

    def test_capture_stops_at_line_end(self):
        """Captured values never include the next line."""
        fields = extract_fields("Business Name: Acme\nEIN: 12-3456789")
        assert fields["legalBusinessName"] == "Acme"

    def test_undashed_tax_id(self):
        """Nine digits without a dash are accepted."""
        assert extract_fields("TIN 123456789")["taxId"] == "123456789"

    @pytest.mark.parametrize(
        "text",
        [
            "DUNS: 123456789",
            "D-U-N-S No. 12-345-6789",
            "duns # 12-345-6789",
        ],
    )
    def test_duns_label_variants(self, text):
        """DUNS labels with optional dashes and suffixes are recognized."""
        assert extract_fields(text)["dunsNumber"] == "123456789"

    def test_duns_requires_label(self):
        """A bare DUNS-shaped number is not a DUNS number."""
        assert "dunsNumber" not in extract_fields("Reference 12-345-6789")


class TestDateEstablished:
    """Tests for dateEstablished parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Date of Formation: 03/15/2019", "2019-03-15"),
            ("Date Established: 2019-03-15", "2019-03-15"),
            ("Date Incorporated 03-15-2019", "2019-03-15"),
            ("Date Formed: Mar 15, 2019", "2019-03-15"),
            ("Date of Incorporation: 15 March 2019", "2019-03-15"),
            ("Date of: March 2019", "2019-03-01"),
        ],
    )
    def test_formats(self, text, expected):
        """Supported formats normalize to YYYY-MM-DD."""
        assert extract_fields(text)["dateEstablished"] == expected

    def test_unparseable_date_left_unset(self):
        """A date that cannot be parsed is not an error."""
        fields = extract_fields("Date of Formation: sometime last spring\nEIN 12-3456789")

        assert "dateEstablished" not in fields
        assert fields["taxId"] == "123456789"

    def test_impossible_date_left_unset(self):
        """Calendar-invalid dates are left unset."""
        assert "dateEstablished" not in extract_fields("Date Formed: 02/30/2020")


class TestFieldExtractor:
    """Tests for the FieldExtractor class."""

    def test_deterministic(self):
        """Repeated extraction gives identical results."""
        extractor = FieldExtractor()
        assert extractor.extract(SAMPLE_CERTIFICATE) == extractor.extract(SAMPLE_CERTIFICATE)

    def test_vocabulary(self):
        """The vocabulary lists the five supported fields."""
        assert FIELD_VOCABULARY == (
            "taxId",
            "dunsNumber",
            "legalBusinessName",
            "dateEstablished",
            "businessAddressStreet",
        )
