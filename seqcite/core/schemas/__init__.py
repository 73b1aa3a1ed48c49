from seqcite.core.schemas.validation import (
    CheckReport,
    DomainValidationResult,
    HTTPValidationResult,
    PatternType,
    ValidatorInfo,
    ValidatorPattern,
)

__all__ = [
    "CheckReport",
    "DomainValidationResult",
    "HTTPValidationResult",
    "PatternType",
    "ValidatorInfo",
    "ValidatorPattern",
]
