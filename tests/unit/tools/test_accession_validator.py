"""
Unit tests for the shared BaseAccessionValidator scoring.

The registered families override calculate_confidence, so these tests run
the base formula on a catalog-wide validator that keeps it.
"""

import pytest
import responses

from seqcite.core.identifiers import AccessionType, match_accession
from seqcite.core.schemas import DomainValidationResult, HTTPValidationResult
from seqcite.tools.validators.accession_validator import BaseAccessionValidator


@pytest.fixture
def generic_validator():
    return BaseAccessionValidator(
        name="generic",
        description="every catalog accession, base scoring",
        priority=10,
        accession_types=[t for t in AccessionType if t != AccessionType.UNKNOWN],
        timeout=5,
        fetch_metadata=False,
    )


def _score(validator, accession, http_result, valid=True):
    pattern = match_accession(accession)
    result = DomainValidationResult(
        valid=valid, input=accession, validator_name=validator.name
    )
    return validator.calculate_confidence(result, pattern, http_result)


def _reachable(content_type, status_code=200):
    return HTTPValidationResult(
        url="https://example.org/record",
        accessible=True,
        status_code=status_code,
        content_type=content_type,
    )


@pytest.mark.unit
class TestBaseConfidence:
    """0.6 base, reachability and content bonuses, data level, reputation."""

    def test_json_data_level_sra_is_clamped(self, generic_validator):
        # 0.6 + 0.25 + 0.15 + 0.05 + 0.10 + 0.05
        score = _score(generic_validator, "SRR123456", _reachable("application/json"))
        assert score == pytest.approx(1.0)

    def test_html_gsa_project_is_clamped(self, generic_validator):
        # 0.6 + 0.25 + 0.10 + 0.05 + 0.03
        score = _score(generic_validator, "PRJCA000123", _reachable("text/html"))
        assert score == pytest.approx(1.0)

    def test_html_gsa_project_after_redirect(self, generic_validator):
        score = _score(
            generic_validator, "PRJCA000123", _reachable("text/html", status_code=301)
        )
        assert score == pytest.approx(0.98)

    def test_plain_bioproject_has_no_reputation_bonus(self, generic_validator):
        score = _score(generic_validator, "PRJNA654321", _reachable("text/plain"))
        assert score == pytest.approx(0.90)

    def test_unreachable_is_halved(self, generic_validator):
        http_result = HTTPValidationResult(
            url="https://example.org/record", status_code=404, error="HTTP 404"
        )
        # (0.6 + 0.10 + 0.05) / 2
        assert _score(generic_validator, "SRR123456", http_result) == pytest.approx(
            0.375
        )

    def test_no_probe_scores_syntax_only(self, generic_validator):
        assert _score(generic_validator, "GSE185917", None) == pytest.approx(0.65)

    def test_invalid_scores_zero(self, generic_validator):
        score = _score(
            generic_validator, "SRR123456", _reachable("text/html"), valid=False
        )
        assert score == 0.0


@pytest.mark.unit
class TestBaseValidate:
    """Likelihood follows confidence through the full pipeline."""

    def test_reachable_likelihood_equals_confidence(
        self, generic_validator, mock_http
    ):
        mock_http.add(
            responses.HEAD,
            "https://www.ncbi.nlm.nih.gov/bioproject/PRJNA654321",
            status=200,
            content_type="text/plain",
        )
        result = generic_validator.validate("PRJNA654321")

        assert result.valid
        assert result.confidence == pytest.approx(0.90)
        assert result.likelihood == result.confidence

    def test_unreachable_likelihood_equals_confidence(
        self, generic_validator, mock_http
    ):
        # nothing registered: the probe raises ConnectionError
        result = generic_validator.validate("GSE185917")

        assert result.valid
        assert result.confidence == pytest.approx(0.325)
        assert result.likelihood == result.confidence
        assert "metadata_unavailable" in result.tags
