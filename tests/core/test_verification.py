"""Tests for verification confidence scoring."""

import pytest

from lendready_core.models import VerificationResult
from lendready_core.verification import DEFAULT_CONFIDENCE_THRESHOLD, verify


class TestVerify:
    """Tests for verify."""

    def test_no_significant_keywords_found(self):
        """Short words like 'tax' and 'id' are not keywords, so nothing matches."""
        result = verify(
            "our business tax filing is complete",
            ["Tax ID Number", "Formation Certificate"],
        )

        assert result.confidence == 0
        assert result.matches is False
        assert result.matched_keywords == []

    def test_full_match(self):
        """Text containing every keyword scores 100."""
        result = verify(
            "CERTIFICATE OF FORMATION of Harbor Light LLC",
            ["Formation Certificate"],
        )

        assert result.confidence == 100
        assert result.matches is True
        assert result.matched_keywords == ["formation", "certificate"]

    def test_partial_match(self):
        """Confidence is matched keywords over total keywords."""
        result = verify(
            "Operating Agreement of the company",
            ["Operating Agreement", "Certificate of Good Standing"],
        )

        # operating, agreement, certificate, good, standing
        assert result.confidence == pytest.approx(40.0)
        assert result.matches is True

    def test_duplicate_keywords_count_in_total_only(self):
        """Repeated keywords count twice in the total but once when matched."""
        result = verify(
            "Articles of Incorporation",
            ["Articles of Incorporation", "Certificate of Incorporation"],
        )

        # total: articles, incorporation, certificate, incorporation
        assert result.matched_keywords == ["articles", "incorporation"]
        assert result.confidence == pytest.approx(50.0)

    def test_empty_inputs(self):
        """Empty text or requirements give the empty result."""
        assert verify("", ["Operating Agreement"]) == VerificationResult.empty()
        assert verify("   ", ["Operating Agreement"]) == VerificationResult.empty()
        assert verify(None, ["Operating Agreement"]) == VerificationResult.empty()
        assert verify("Operating Agreement", []) == VerificationResult.empty()

    def test_requirements_without_keywords(self):
        """Requirements made only of short words give zero confidence."""
        result = verify("tax id", ["Tax ID"])
        assert result.confidence == 0
        assert result.matches is False

    def test_threshold_boundary(self):
        """Exactly 30% confidence is a match; a custom threshold can raise the bar."""
        requirements = ["alpha bravo charlie delta echos foxtrot golf1 hotel india juliet"]
        text = "alpha bravo charlie"

        result = verify(text, requirements)
        assert result.confidence == pytest.approx(30.0)
        assert result.matches is True

        strict = verify(text, requirements, threshold=50.0)
        assert strict.matches is False

    def test_default_threshold(self):
        """The default threshold is 30."""
        assert DEFAULT_CONFIDENCE_THRESHOLD == 30.0

    def test_parenthesized_requirement(self):
        """Punctuation inside requirement words does not block a match."""
        result = verify("IRS 501c3 determination letter", ["501(c)(3) Determination Letter"])

        assert result.confidence == pytest.approx(100.0)
        assert result.matched_keywords == ["501c3", "determination", "letter"]


class TestVerifyProperties:
    """Bounds and threshold law over varied inputs."""

    TEXTS = [
        "",
        "operating agreement",
        "Articles of Organization filed with California Secretary of State",
        "random unrelated words",
        "certificate certificate certificate",
    ]
    REQUIREMENTS = [
        [],
        ["Operating Agreement"],
        ["Articles of Organization", "Statement of Information (Form LLC-12)"],
        ["Certificate of Good Standing from the state"],
    ]

    @pytest.mark.parametrize("text", TEXTS)
    @pytest.mark.parametrize("requirements", REQUIREMENTS)
    def test_bounds_and_threshold(self, text, requirements):
        """Confidence stays within 0-100 and matches follows the threshold."""
        result = verify(text, requirements)

        assert 0 <= result.confidence <= 100
        assert result.matches == (result.confidence >= 30)
        assert len(result.matched_keywords) == len(set(result.matched_keywords))
        assert verify(text, requirements) == result
