"""
Result schemas for the domain validation pipeline.

These models are created fresh for every validate call and handed to the
caller; nothing in here is shared between calls.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PatternType(str, Enum):
    """How a validator pattern is matched against input."""

    REGEX = "regex"
    URL_HOST = "url_host"
    PREFIX = "prefix"


class ValidatorPattern(BaseModel):
    """A pattern a validator advertises for routing and display."""

    type: PatternType
    pattern: str
    description: str
    examples: List[str] = Field(default_factory=list)


class ValidatorInfo(BaseModel):
    """Summary of a registered validator."""

    name: str
    domain: str
    description: str
    priority: int
    patterns: List[ValidatorPattern] = Field(default_factory=list)


class HTTPValidationResult(BaseModel):
    """Outcome of a single liveness probe."""

    url: str
    accessible: bool = False
    status_code: int = 0
    content_type: str = ""
    content_length: int = 0
    last_modified: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None
    response_time: float = 0.0


class DomainValidationResult(BaseModel):
    """
    Output of one validator for one input.

    Attributes:
        valid: Whether the input names a well-formed record of this validator's domain
        input: Original input string, unchanged
        validator_name: Name of the validator that produced this result
        domain: Scientific domain of the validator
        normalized_id: Upper-cased, trimmed accession
        primary_url: Canonical record URL (the one probed)
        alternate_urls: Mirrors and API endpoints (never probed)
        dataset_type: Coarse classification (e.g., sequence_data, expression_data)
        subtype: Fine classification (accession type or GEO entity kind)
        confidence: Self-assessed reliability of the validation, in [0, 1]
        likelihood: Estimated probability the reference is dataset-bearing, in [0, 1]
        metadata: Free-form string metadata
        tags: Ordered, duplicate-free tag list
        error: Failure reason, only set when valid is False
        warnings: Non-fatal issues
        validation_time: Elapsed wall time in seconds
    """

    valid: bool = False
    input: str
    validator_name: str = ""
    domain: str = ""
    normalized_id: str = ""
    primary_url: str = ""
    alternate_urls: List[str] = Field(default_factory=list)
    dataset_type: str = ""
    subtype: str = ""
    confidence: float = 0.0
    likelihood: float = 0.0
    metadata: Dict[str, str] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    validation_time: float = 0.0

    def add_tag(self, *tags: str) -> None:
        """Append tags, skipping ones already present."""
        for tag in tags:
            if tag and tag not in self.tags:
                self.tags.append(tag)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        """
        Flat JSON-ready representation.

        Empty metadata, tags, alternate_urls and warnings are omitted;
        error is only present on invalid results.
        """
        data = self.model_dump()
        for key in ("metadata", "tags", "alternate_urls", "warnings"):
            if not data[key]:
                del data[key]
        if self.valid or not self.error:
            data.pop("error", None)
        return data


class CheckReport(BaseModel):
    """Unified report for one input checked against every capable validator."""

    input: str
    best: Optional[DomainValidationResult] = None
    results: List[DomainValidationResult] = Field(default_factory=list)
    likelihood_score: float = 0.0
    metadata: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.best is not None and self.best.valid

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "input": self.input,
            "valid": self.valid,
            "likelihood_score": self.likelihood_score,
        }
        if self.best is not None:
            data["best"] = self.best.to_dict()
        if self.results:
            data["results"] = [r.to_dict() for r in self.results]
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        if self.error:
            data["error"] = self.error
        return data
