"""
seqcite - identify and validate sequence-archive references in scientific text.

Recognises accessions for SRA/ENA/DDBJ, GSA and GEO records (bare, embedded
in URLs or in free text), classifies their hierarchy level and checks whether
the referenced record is reachable.

Example:
    >>> from seqcite import get_validator_registry
    >>> registry = get_validator_registry()
    >>> [v.name for v in registry.find_validators("SRR123456")]
    ['sra']
"""

from seqcite.tools.validators import get_validator_registry
from seqcite.version import __version__

__all__ = ["get_validator_registry", "__version__"]
