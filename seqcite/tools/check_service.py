"""
Check service: run every capable validator on an input and pick the best.

This is the orchestration layer between raw candidate strings (from a
link-extraction front end or the CLI) and the validator registry.
"""

from typing import Iterable, List, Optional

from seqcite.core.exceptions import NoValidatorError
from seqcite.core.schemas import CheckReport, DomainValidationResult
from seqcite.tools.validators import get_validator_registry
from seqcite.tools.validators.validator_registry import ValidatorRegistry
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

CONFIDENCE_WEIGHT = 0.6
LIKELIHOOD_WEIGHT = 0.4
VALID_BONUS = 1.0


def result_score(result: DomainValidationResult) -> float:
    """Selection score: weighted confidence/likelihood plus a validity bonus."""
    score = result.confidence * CONFIDENCE_WEIGHT + result.likelihood * LIKELIHOOD_WEIGHT
    if result.valid:
        score += VALID_BONUS
    return score


def select_best_result(
    results: Iterable[DomainValidationResult],
) -> Optional[DomainValidationResult]:
    """
    Pick the highest-scoring result.

    Ties go to the earliest result, i.e. the higher-priority validator when
    results come from ValidatorRegistry.validate_with_all.
    """
    best = None
    best_score = -1.0
    for result in results:
        score = result_score(result)
        if score > best_score:
            best, best_score = result, score
    return best


class CheckService:
    """
    Validate candidate strings against all capable validators.

    Examples:
        >>> service = CheckService()
        >>> report = service.check("GSE185917")
        >>> report.best.dataset_type
        'expression_data'
    """

    def __init__(self, registry: Optional[ValidatorRegistry] = None):
        self.registry = registry or get_validator_registry()

    def check(self, value: str, deadline: Optional[float] = None) -> CheckReport:
        """
        Check one input.

        Never raises for unrecognised input: a NoValidatorError becomes a
        report without a best result and with an error message.

        Args:
            value: Accession, URL or text snippet
            deadline: Optional absolute time.monotonic() deadline

        Returns:
            CheckReport
        """
        report = CheckReport(input=value)

        try:
            results = self.registry.validate_with_all(value, deadline=deadline)
        except NoValidatorError as e:
            logger.debug(f"No validator for input {value!r}")
            report.error = str(e)
            return report

        report.results = results
        best = select_best_result(results)
        if best is None:
            return report

        report.best = best
        report.likelihood_score = best.likelihood
        for key, item in best.metadata.items():
            report.metadata[f"domain_{key}"] = item

        logger.info(
            f"Checked {value!r}: best={best.validator_name} valid={best.valid} "
            f"likelihood={best.likelihood:.2f}"
        )
        return report

    def check_many(
        self, values: Iterable[str], deadline: Optional[float] = None
    ) -> List[CheckReport]:
        return [self.check(value, deadline=deadline) for value in values]
