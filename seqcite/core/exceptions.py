"""
Core exceptions for seqcite.

Only caller-side usage errors are raised as exceptions. Problems with the
input itself (nothing recognised, wrong archive, unreachable record) are
reported inside the returned DomainValidationResult instead.
"""

from typing import Any, Dict, Optional


class SeqciteCoreError(Exception):
    """Base exception for all seqcite errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        return self.message


class RegistryError(SeqciteCoreError):
    """
    Raised by ValidatorRegistry operations.

    Attributes:
        message: Human-readable error message
        error_type: One of "duplicate", "not_found", "no_validator"
        details: Contains the offending validator name or input

    Example:
        try:
            registry.register(SRAValidator())
        except RegistryError as e:
            print(f"{e.error_type}: {e.message}")
    """

    error_type = "registry"


class DuplicateValidatorError(RegistryError):
    """A validator with the same name is already registered."""

    error_type = "duplicate"


class ValidatorNotFoundError(RegistryError):
    """No validator is registered under the requested name."""

    error_type = "not_found"


class NoValidatorError(RegistryError):
    """
    No registered validator can handle the input.

    Distinct from an invalid result: this means nothing recognised the
    input at all, not that a validator recognised it and rejected it.
    """

    error_type = "no_validator"
