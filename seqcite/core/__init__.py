"""
seqcite core: accession catalog, result schemas and exception hierarchy.
"""

from seqcite.core.exceptions import (
    DuplicateValidatorError,
    NoValidatorError,
    RegistryError,
    SeqciteCoreError,
    ValidatorNotFoundError,
)

__all__ = [
    "DuplicateValidatorError",
    "NoValidatorError",
    "RegistryError",
    "SeqciteCoreError",
    "ValidatorNotFoundError",
]
