"""
Validator registry with priority-based routing.

The registry keeps three views over the registered validators (by name, by
domain, and one priority-sorted list) and routes inputs to the validators
that can handle them.
"""

import threading
from typing import Dict, List, Optional

from seqcite.core.exceptions import (
    DuplicateValidatorError,
    NoValidatorError,
    ValidatorNotFoundError,
)
from seqcite.core.schemas import DomainValidationResult, ValidatorInfo
from seqcite.tools.validators.base_validator import DomainValidator
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)


class ValidatorRegistry:
    """
    Registry of domain validators.

    Validators are ordered by priority (higher first), ties broken by name,
    so repeated lookups with the same registrations always yield the same
    candidate order.

    Examples:
        >>> registry = ValidatorRegistry()
        >>> registry.register(SRAValidator())
        >>> registry.register(GEOValidator())
        >>> [v.name for v in registry.find_validators("GSE185917")]
        ['geo']
        >>> result = registry.validate_with_best("SRR123456")
    """

    def __init__(self):
        self._by_name: Dict[str, DomainValidator] = {}
        self._by_domain: Dict[str, List[DomainValidator]] = {}
        self._sorted: List[DomainValidator] = []
        self._lock = threading.RLock()

        logger.debug("Initialized ValidatorRegistry")

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def register(self, validator: DomainValidator) -> None:
        """
        Register a validator.

        Raises:
            DuplicateValidatorError: If a validator with the same name exists
        """
        with self._lock:
            name = validator.name
            if name in self._by_name:
                raise DuplicateValidatorError(
                    f"validator with name '{name}' already exists",
                    details={"name": name},
                )

            self._by_name[name] = validator
            self._by_domain.setdefault(validator.domain, []).append(validator)
            self._rebuild_sorted()

        logger.debug(
            f"Registered validator '{name}' "
            f"(domain {validator.domain}, priority {validator.priority})"
        )

    def unregister(self, name: str) -> None:
        """
        Remove a validator by name.

        Raises:
            ValidatorNotFoundError: If no validator has this name
        """
        with self._lock:
            validator = self._by_name.pop(name, None)
            if validator is None:
                raise ValidatorNotFoundError(
                    f"validator with name '{name}' not found", details={"name": name}
                )

            bucket = self._by_domain.get(validator.domain, [])
            self._by_domain[validator.domain] = [v for v in bucket if v.name != name]
            if not self._by_domain[validator.domain]:
                del self._by_domain[validator.domain]

            self._rebuild_sorted()

        logger.debug(f"Unregistered validator '{name}'")

    def _rebuild_sorted(self) -> None:
        self._sorted = sorted(
            self._by_name.values(), key=lambda v: (-v.priority, v.name)
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> DomainValidator:
        """
        Get a validator by name.

        Raises:
            ValidatorNotFoundError: If no validator has this name
        """
        with self._lock:
            validator = self._by_name.get(name)
        if validator is None:
            raise ValidatorNotFoundError(
                f"validator with name '{name}' not found", details={"name": name}
            )
        return validator

    def get_by_domain(self, domain: str) -> List[DomainValidator]:
        with self._lock:
            return list(self._by_domain.get(domain, []))

    def get_all(self) -> List[DomainValidator]:
        """All validators, highest priority first."""
        with self._lock:
            return list(self._sorted)

    def list_domains(self) -> List[str]:
        with self._lock:
            return sorted(self._by_domain)

    def list_validators(self) -> List[ValidatorInfo]:
        return [
            ValidatorInfo(
                name=v.name,
                domain=v.domain,
                description=v.description,
                priority=v.priority,
                patterns=v.get_patterns(),
            )
            for v in self.get_all()
        ]

    def find_validators(self, value: str) -> List[DomainValidator]:
        """
        Validators whose can_validate accepts the input, in priority order.

        This only runs the cheap routing checks; nothing is fetched.
        """
        return [v for v in self.get_all() if v.can_validate(value)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_name)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._by_name

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def validate_with_best(
        self, value: str, deadline: Optional[float] = None
    ) -> DomainValidationResult:
        """
        Validate with the highest-priority validator that accepts the input.

        Raises:
            NoValidatorError: If no validator accepts the input
        """
        candidates = self.find_validators(value)
        if not candidates:
            raise NoValidatorError(
                f"no validator found for input: {value}", details={"input": value}
            )
        return candidates[0].validate(value, deadline=deadline)

    def validate_with_all(
        self, value: str, deadline: Optional[float] = None
    ) -> List[DomainValidationResult]:
        """
        Validate with every validator that accepts the input.

        A validator that raises contributes an invalid result carrying the
        error text instead of aborting the others.

        Raises:
            NoValidatorError: If no validator accepts the input
        """
        candidates = self.find_validators(value)
        if not candidates:
            raise NoValidatorError(
                f"no validator found for input: {value}", details={"input": value}
            )

        results = []
        for validator in candidates:
            try:
                results.append(validator.validate(value, deadline=deadline))
            except Exception as e:
                logger.warning(f"Validator '{validator.name}' failed on {value!r}: {e}")
                results.append(
                    DomainValidationResult(
                        valid=False,
                        input=value,
                        validator_name=validator.name,
                        domain=validator.domain,
                        error=str(e),
                    )
                )
        return results
