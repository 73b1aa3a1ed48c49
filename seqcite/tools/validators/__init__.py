"""
Domain validators and the process-wide validator registry.

Example:
    >>> from seqcite.tools.validators import get_validator_registry
    >>> registry = get_validator_registry()
    >>> [info.name for info in registry.list_validators()]
    ['sra', 'geo', 'gsa']
"""

import threading
from collections import Counter
from typing import Any, Dict, List, Optional

from seqcite.core.identifiers import ACCESSION_PATTERNS, AccessionType
from seqcite.tools.validators.accession_validator import BaseAccessionValidator
from seqcite.tools.validators.base_validator import (
    DomainValidator,
    deadline_after,
    remaining_timeout,
)
from seqcite.tools.validators.geo_validator import GEOValidator
from seqcite.tools.validators.gsa_validator import GSAValidator
from seqcite.tools.validators.metadata_cache import MetadataCache
from seqcite.tools.validators.sra_validator import SRAValidator
from seqcite.tools.validators.validator_registry import ValidatorRegistry
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

_VALIDATOR_CLASSES = {
    "sra": SRAValidator,
    "geo": GEOValidator,
    "gsa": GSAValidator,
}


def get_all_accession_validators(**kwargs) -> List[BaseAccessionValidator]:
    """
    Fresh instances of every accession validator.

    Args:
        **kwargs: Passed to each validator constructor (e.g. fetch_metadata=False)
    """
    return [cls(**kwargs) for cls in _VALIDATOR_CLASSES.values()]


def get_accession_validator_by_name(
    name: str, **kwargs
) -> Optional[BaseAccessionValidator]:
    """Fresh validator instance by name, or None if the name is unknown."""
    cls = _VALIDATOR_CLASSES.get(name)
    return cls(**kwargs) if cls is not None else None


def register_accession_validators(registry: ValidatorRegistry, **kwargs) -> None:
    """
    Register every accession validator into a registry.

    Raises:
        DuplicateValidatorError: If one of them is already registered
    """
    for validator in get_all_accession_validators(**kwargs):
        registry.register(validator)


def get_supported_accession_types() -> List[AccessionType]:
    """Accession types handled by at least one validator, without duplicates."""
    seen: List[AccessionType] = []
    for validator in get_all_accession_validators(fetch_metadata=False):
        for accession_type in validator.get_supported_accession_types():
            if accession_type not in seen:
                seen.append(accession_type)
    return seen


def get_accession_stats() -> Dict[str, Any]:
    """
    Summary statistics about the accession catalog.

    Returns:
        dict with total_patterns, per-database and per-type counts,
        supported_databases and validators_count
    """
    return {
        "total_patterns": len(ACCESSION_PATTERNS),
        "databases": dict(Counter(p.database for p in ACCESSION_PATTERNS)),
        "accession_types": dict(Counter(p.type.value for p in ACCESSION_PATTERNS)),
        "supported_databases": sorted({p.database for p in ACCESSION_PATTERNS}),
        "validators_count": len(_VALIDATOR_CLASSES),
    }


_registry: Optional[ValidatorRegistry] = None
_registry_lock = threading.Lock()


def get_validator_registry() -> ValidatorRegistry:
    """
    Get the process-wide registry, populated with the default validators.

    Thread-safe lazy initialization; registration happens exactly once.

    Returns:
        ValidatorRegistry singleton
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                registry = ValidatorRegistry()
                register_accession_validators(registry)
                _registry = registry
                logger.debug(f"Default validator registry ready ({len(registry)} validators)")
    return _registry


def reset_validator_registry() -> None:
    """Drop the process-wide registry (for testing)."""
    global _registry
    with _registry_lock:
        _registry = None


__all__ = [
    "BaseAccessionValidator",
    "DomainValidator",
    "GEOValidator",
    "GSAValidator",
    "MetadataCache",
    "SRAValidator",
    "ValidatorRegistry",
    "deadline_after",
    "get_accession_stats",
    "get_accession_validator_by_name",
    "get_all_accession_validators",
    "get_supported_accession_types",
    "get_validator_registry",
    "register_accession_validators",
    "remaining_timeout",
    "reset_validator_registry",
]
