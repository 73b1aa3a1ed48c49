"""
Accession identifier catalog.

Recognition, format checks, text extraction and hierarchy helpers for
sequence-archive accessions (SRA/ENA/DDBJ, GSA, GEO, BioSample).
"""

from seqcite.core.identifiers.patterns import (
    ACCESSION_PATTERNS,
    KNOWN_DATABASES,
    PATTERNS_BY_TYPE,
    AccessionDatabase,
    AccessionPattern,
    AccessionType,
    HierarchyLevel,
    extract_accession_from_text,
    get_accession_hierarchy,
    get_hierarchy_level,
    get_patterns_for_types,
    get_preferred_database,
    get_regional_mirrors,
    is_data_level,
    match_accession,
    match_all_accessions,
    normalize_accession,
    validate_accession_format,
)

__all__ = [
    "ACCESSION_PATTERNS",
    "KNOWN_DATABASES",
    "PATTERNS_BY_TYPE",
    "AccessionDatabase",
    "AccessionPattern",
    "AccessionType",
    "HierarchyLevel",
    "extract_accession_from_text",
    "get_accession_hierarchy",
    "get_hierarchy_level",
    "get_patterns_for_types",
    "get_preferred_database",
    "get_regional_mirrors",
    "is_data_level",
    "match_accession",
    "match_all_accessions",
    "normalize_accession",
    "validate_accession_format",
]
