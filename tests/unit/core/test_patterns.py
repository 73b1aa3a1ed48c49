"""
Unit tests for the accession pattern catalog.

Covers recognition of every catalog type, syntax checks, free-text
extraction and the hierarchy / archive helpers.
"""

import pytest

from seqcite.core.identifiers import (
    ACCESSION_PATTERNS,
    KNOWN_DATABASES,
    PATTERNS_BY_TYPE,
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


# ===============================================================================
# Catalog
# ===============================================================================


@pytest.mark.unit
class TestCatalog:
    """Static structure of the pattern catalog."""

    def test_catalog_sorted_by_priority(self):
        priorities = [p.priority for p in ACCESSION_PATTERNS]
        assert priorities == sorted(priorities, reverse=True)

    def test_one_pattern_per_type(self):
        assert len(PATTERNS_BY_TYPE) == len(ACCESSION_PATTERNS)
        assert AccessionType.UNKNOWN not in PATTERNS_BY_TYPE

    def test_every_pattern_database_is_known(self):
        for pattern in ACCESSION_PATTERNS:
            assert pattern.database in KNOWN_DATABASES

    def test_known_databases_read_only(self):
        with pytest.raises(TypeError):
            KNOWN_DATABASES["new"] = KNOWN_DATABASES["sra"]

    @pytest.mark.parametrize(
        "pattern", ACCESSION_PATTERNS, ids=lambda p: p.type.value
    )
    def test_examples_match_only_their_own_type(self, pattern):
        for example in pattern.examples:
            matched = match_all_accessions(example)
            assert [p.type for p in matched] == [pattern.type]

    def test_patterns_for_types_keeps_catalog_order(self):
        subset = get_patterns_for_types(
            [AccessionType.RUN_SRA, AccessionType.PROJECT_BIOPROJECT]
        )
        assert [p.type for p in subset] == [
            AccessionType.PROJECT_BIOPROJECT,
            AccessionType.RUN_SRA,
        ]


# ===============================================================================
# Matching
# ===============================================================================


@pytest.mark.unit
class TestMatchAccession:
    """Recognition of single candidates."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("SRR123456", AccessionType.RUN_SRA),
            ("ERR1234567", AccessionType.RUN_SRA),
            ("SRX123456", AccessionType.EXPERIMENT_SRA),
            ("ERP123456", AccessionType.STUDY_SRA),
            ("PRJNA654321", AccessionType.PROJECT_BIOPROJECT),
            ("PRJCA002001", AccessionType.PROJECT_GSA),
            ("CRR000123", AccessionType.RUN_GSA),
            ("GSE185917", AccessionType.PROJECT_GEO),
            ("GSM5625000", AccessionType.SAMPLE_GEO),
            ("GPL570", AccessionType.PLATFORM_GEO),
            ("SAMEA123456", AccessionType.BIOSAMPLE_EBI),
            ("SAMC000001", AccessionType.BIOSAMPLE_GSA),
        ],
    )
    def test_known_accessions(self, value, expected):
        assert match_accession(value).type == expected

    def test_case_and_whitespace_ignored(self):
        assert match_accession("  srr123456 \n").type == AccessionType.RUN_SRA

    @pytest.mark.parametrize(
        "value", ["INVALID123", "", "SRR12345", "GSE", "PRJXA123", "SRR123456.1"]
    )
    def test_unrecognised(self, value):
        assert match_accession(value) is None
        assert match_all_accessions(value) == []

    def test_normalize(self):
        assert normalize_accession(" gse185917 ") == "GSE185917"


# ===============================================================================
# Format checks
# ===============================================================================


@pytest.mark.unit
class TestValidateAccessionFormat:
    """Syntax checks report every violated rule."""

    def test_well_formed(self):
        assert validate_accession_format("SRR123456") == (True, [])

    def test_empty(self):
        assert validate_accession_format("") == (False, ["empty input"])

    def test_lowercase(self):
        ok, issues = validate_accession_format("srr123456")
        assert not ok
        assert issues == ["accession should be uppercase"]

    def test_internal_space_reports_both_issues(self):
        ok, issues = validate_accession_format("SRR 123456")
        assert not ok
        assert "accession contains spaces" in issues
        assert "accession contains invalid characters" in issues

    def test_too_short(self):
        _, issues = validate_accession_format("SRR1")
        assert issues == ["accession too short (minimum 6 characters)"]

    def test_too_long(self):
        _, issues = validate_accession_format("A" * 21)
        assert issues == ["accession too long (maximum 20 characters)"]

    def test_invalid_characters(self):
        _, issues = validate_accession_format("SRR#123456")
        assert issues == ["accession contains invalid characters"]


# ===============================================================================
# Extraction
# ===============================================================================


@pytest.mark.unit
class TestExtractFromText:
    """Free-text scanning."""

    def test_order_and_deduplication(self):
        text = (
            "Reads are in SRR123456 (PRJNA654321); see srr123456 again "
            "and the processed data in GSE185917."
        )
        assert extract_accession_from_text(text) == [
            "SRR123456",
            "PRJNA654321",
            "GSE185917",
        ]

    def test_from_url(self):
        assert extract_accession_from_text(
            "https://www.ebi.ac.uk/ena/browser/view/PRJEB12345"
        ) == ["PRJEB12345"]

    def test_nothing_found(self):
        assert extract_accession_from_text("no accessions in this sentence") == []
        assert extract_accession_from_text("") == []


# ===============================================================================
# Hierarchy and archives
# ===============================================================================


@pytest.mark.unit
class TestHierarchy:
    """Hierarchy chains, levels and archive helpers."""

    def test_run_hierarchy(self):
        assert get_accession_hierarchy(AccessionType.RUN_SRA) == [
            AccessionType.PROJECT_BIOPROJECT,
            AccessionType.STUDY_SRA,
            AccessionType.EXPERIMENT_SRA,
            AccessionType.RUN_SRA,
        ]

    def test_gsa_run_hierarchy(self):
        assert get_accession_hierarchy(AccessionType.RUN_GSA)[0] == (
            AccessionType.PROJECT_GSA
        )

    def test_geo_sample_hierarchy(self):
        assert get_accession_hierarchy(AccessionType.SAMPLE_GEO) == [
            AccessionType.PROJECT_GEO,
            AccessionType.SAMPLE_GEO,
        ]

    def test_types_without_parents(self):
        assert get_accession_hierarchy(AccessionType.BIOSAMPLE_NCBI) == [
            AccessionType.BIOSAMPLE_NCBI
        ]
        assert get_accession_hierarchy(AccessionType.PROJECT_BIOPROJECT) == [
            AccessionType.PROJECT_BIOPROJECT
        ]

    def test_hierarchy_is_a_copy(self):
        chain = get_accession_hierarchy(AccessionType.RUN_SRA)
        chain.clear()
        assert len(get_accession_hierarchy(AccessionType.RUN_SRA)) == 4

    @pytest.mark.parametrize(
        "accession_type,level",
        [
            (AccessionType.PROJECT_GEO, HierarchyLevel.PROJECT),
            (AccessionType.DATASET_GEO, HierarchyLevel.STUDY),
            (AccessionType.BIOSAMPLE_EBI, HierarchyLevel.SAMPLE),
            (AccessionType.EXPERIMENT_GSA, HierarchyLevel.EXPERIMENT),
            (AccessionType.RUN_SRA, HierarchyLevel.RUN),
            (AccessionType.PLATFORM_GEO, HierarchyLevel.PLATFORM),
            (AccessionType.UNKNOWN, HierarchyLevel.UNKNOWN),
        ],
    )
    def test_hierarchy_level(self, accession_type, level):
        assert get_hierarchy_level(accession_type) == level

    def test_data_level(self):
        assert is_data_level(AccessionType.RUN_SRA)
        assert is_data_level(AccessionType.SAMPLE_GEO)
        assert not is_data_level(AccessionType.PROJECT_GEO)
        assert not is_data_level(AccessionType.BIOSAMPLE_NCBI)

    @pytest.mark.parametrize(
        "accession_type,database",
        [
            (AccessionType.RUN_SRA, "sra"),
            (AccessionType.PROJECT_BIOPROJECT, "sra"),
            (AccessionType.BIOSAMPLE_GSA, "gsa"),
            (AccessionType.PLATFORM_GEO, "geo"),
            (AccessionType.BIOSAMPLE_DDBJ, "biosample"),
            (AccessionType.UNKNOWN, "unknown"),
        ],
    )
    def test_preferred_database(self, accession_type, database):
        assert get_preferred_database(accession_type) == database

    def test_insdc_mirrors(self):
        assert [db.name for db in get_regional_mirrors("ena")] == [
            "ENA",
            "SRA",
            "DDBJ",
        ]

    def test_single_archive_mirrors(self):
        assert [db.name for db in get_regional_mirrors("geo")] == ["GEO"]
        assert get_regional_mirrors("nowhere") == []
