"""
Abstract base class for domain validators.

Every archive-family validator implements this interface so the registry and
the check service can route inputs without knowing concrete validator types.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional

from seqcite.core.schemas import DomainValidationResult, ValidatorPattern

DEADLINE_EXCEEDED = "deadline exceeded"


def deadline_after(seconds: float) -> float:
    """
    Build an absolute deadline ``seconds`` from now.

    Deadlines are ``time.monotonic()`` values and can be passed to any
    ``validate`` call.
    """
    return time.monotonic() + seconds


def remaining_timeout(timeout: float, deadline: Optional[float]) -> Optional[float]:
    """
    Effective timeout for a network call bounded by a deadline.

    Returns:
        min(timeout, time left), or None if the deadline already passed
    """
    if deadline is None:
        return timeout
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        return None
    return min(timeout, remaining)


class DomainValidator(ABC):
    """
    Capability interface for domain validators.

    ``can_validate`` must be cheap and free of side effects: the registry calls
    it on every registered validator for every input. ``validate`` does the
    expensive work and never raises for network problems; failures are encoded
    in the returned result.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique validator name."""
        pass

    @property
    @abstractmethod
    def domain(self) -> str:
        """Scientific domain this validator belongs to."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    def priority(self) -> int:
        """
        Routing priority, higher values are tried first.

        Returns:
            int: Priority (default 50)
        """
        return 50

    @abstractmethod
    def can_validate(self, value: str) -> bool:
        """Quick check whether this validator recognises the input."""
        pass

    @abstractmethod
    def validate(
        self, value: str, deadline: Optional[float] = None
    ) -> DomainValidationResult:
        """
        Validate an input.

        Args:
            value: Bare accession, URL, DOI or free-text snippet
            deadline: Optional absolute ``time.monotonic()`` deadline for network calls

        Returns:
            DomainValidationResult: Fresh result owned by the caller
        """
        pass

    @abstractmethod
    def get_patterns(self) -> List[ValidatorPattern]:
        """Patterns advertised by this validator."""
        pass
