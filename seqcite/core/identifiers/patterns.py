"""
Accession pattern catalog for sequence-archive identifiers.

Single source of truth for the accession types seqcite recognises, the
regular expressions that identify them, the archive that owns each type and
where each type sits in the project > study > sample/experiment > run
hierarchy.

The catalog is built and sorted once at import time (priority descending,
archive name ascending) and is read-only afterwards. Patterns are anchored
and mutually exclusive, so the order only matters for determinism.

Example:
    >>> from seqcite.core.identifiers import match_accession
    >>> match_accession("srr123456").type
    <AccessionType.RUN_SRA: 'sra_run'>
    >>> extract_accession_from_text("Reads are in SRR123456 (PRJNA654321).")
    ['SRR123456', 'PRJNA654321']
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple


class AccessionType(str, Enum):
    """Accession types, grouped by hierarchy level."""

    # Project level
    PROJECT_BIOPROJECT = "bioproject"  # PRJNA, PRJEB, PRJDB
    PROJECT_GSA = "gsa_project"  # PRJCA
    PROJECT_GEO = "geo_series"  # GSE
    COLLECTION_GEO = "geo_collection"  # GSC

    # Study level
    STUDY_SRA = "sra_study"  # SRP, ERP, DRP
    STUDY_GSA = "gsa_study"  # CRA
    DATASET_GEO = "geo_dataset"  # GDS

    # Sample level
    BIOSAMPLE_NCBI = "biosample_ncbi"  # SAMN
    BIOSAMPLE_EBI = "biosample_ebi"  # SAME, SAMEA
    BIOSAMPLE_DDBJ = "biosample_ddbj"  # SAMD
    BIOSAMPLE_GSA = "biosample_gsa"  # SAMC
    SAMPLE_SRA = "sra_sample"  # SRS, ERS, DRS
    SAMPLE_GEO = "geo_sample"  # GSM

    # Experiment level
    EXPERIMENT_SRA = "sra_experiment"  # SRX, ERX, DRX
    EXPERIMENT_GSA = "gsa_experiment"  # CRX

    # Run level
    RUN_SRA = "sra_run"  # SRR, ERR, DRR
    RUN_GSA = "gsa_run"  # CRR

    # Platform descriptions (outside the project/run hierarchy)
    PLATFORM_GEO = "geo_platform"  # GPL

    UNKNOWN = "unknown"


class HierarchyLevel(str, Enum):
    """How specific an accession is, from most general to closest to raw data."""

    PROJECT = "project"
    STUDY = "study"
    SAMPLE = "sample"
    EXPERIMENT = "experiment"
    RUN = "run"
    PLATFORM = "platform"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AccessionPattern:
    """
    A recognised accession format.

    Attributes:
        type: Accession type this pattern identifies
        regex: Compiled, anchored regular expression (matched against uppercase input)
        description: Human-readable description
        examples: Example accessions that must match this pattern
        database: Owning archive key in KNOWN_DATABASES
        priority: Higher priority patterns are checked first
    """

    type: AccessionType
    regex: re.Pattern
    description: str
    examples: Tuple[str, ...]
    database: str
    priority: int

    @property
    def pattern(self) -> str:
        """Regular expression source."""
        return self.regex.pattern

    def matches(self, candidate: str) -> bool:
        """Check an already-normalized candidate against this pattern."""
        return self.regex.fullmatch(candidate) is not None


@dataclass(frozen=True)
class AccessionDatabase:
    """
    Static metadata about an archive.

    Attributes:
        name: Short name (e.g., 'SRA')
        full_name: Full archive name
        url: Canonical archive URL
        description: One-line description
        region: One of "international", "europe", "asia", "usa"
    """

    name: str
    full_name: str
    url: str
    description: str
    region: str


# =============================================================================
# Archives
# =============================================================================

KNOWN_DATABASES: Mapping[str, AccessionDatabase] = MappingProxyType(
    {
        "sra": AccessionDatabase(
            name="SRA",
            full_name="Sequence Read Archive",
            url="https://www.ncbi.nlm.nih.gov/sra",
            description="NCBI's primary archive for high-throughput sequencing data",
            region="usa",
        ),
        "ena": AccessionDatabase(
            name="ENA",
            full_name="European Nucleotide Archive",
            url="https://www.ebi.ac.uk/ena",
            description="Europe's primary nucleotide sequence resource",
            region="europe",
        ),
        "ddbj": AccessionDatabase(
            name="DDBJ",
            full_name="DNA Data Bank of Japan",
            url="https://www.ddbj.nig.ac.jp",
            description="Japan's primary nucleotide sequence database",
            region="asia",
        ),
        "gsa": AccessionDatabase(
            name="GSA",
            full_name="Genome Sequence Archive",
            url="https://ngdc.cncb.ac.cn/gsa",
            description="China's genomic data repository",
            region="asia",
        ),
        "geo": AccessionDatabase(
            name="GEO",
            full_name="Gene Expression Omnibus",
            url="https://www.ncbi.nlm.nih.gov/geo",
            description="NCBI's gene expression and genomics data repository",
            region="usa",
        ),
        "biosample": AccessionDatabase(
            name="BioSample",
            full_name="BioSample Database",
            url="https://www.ncbi.nlm.nih.gov/biosample",
            description="Database of biological sample metadata",
            region="international",
        ),
        "bioproject": AccessionDatabase(
            name="BioProject",
            full_name="NCBI BioProject",
            url="https://www.ncbi.nlm.nih.gov/bioproject",
            description="Collection of biological data related to a single initiative",
            region="international",
        ),
    }
)


# =============================================================================
# Patterns
# =============================================================================


def _pattern(
    accession_type: AccessionType,
    regex: str,
    description: str,
    examples: Iterable[str],
    database: str,
    priority: int,
) -> AccessionPattern:
    return AccessionPattern(
        type=accession_type,
        regex=re.compile(regex),
        description=description,
        examples=tuple(examples),
        database=database,
        priority=priority,
    )


_CATALOG = [
    # Projects (checked first: PRJ prefixes overlap shorter run/study prefixes)
    _pattern(
        AccessionType.PROJECT_BIOPROJECT,
        r"^PRJ[EDN][A-Z]\d+$",
        "BioProject identifiers from NCBI (PRJNA), EBI (PRJEB), or DDBJ (PRJDB)",
        ["PRJNA123456", "PRJEB123456", "PRJDB123456"],
        "bioproject",
        100,
    ),
    _pattern(
        AccessionType.PROJECT_GSA,
        r"^PRJC[A-Z]\d+$",
        "GSA (Genome Sequence Archive) project identifiers",
        ["PRJCA123456", "PRJCB123456"],
        "gsa",
        99,
    ),
    _pattern(
        AccessionType.PROJECT_GEO,
        r"^GSE\d+$",
        "GEO Series identifiers for gene expression studies",
        ["GSE123456", "GSE000001"],
        "geo",
        98,
    ),
    _pattern(
        AccessionType.COLLECTION_GEO,
        r"^GSC\d+$",
        "GEO SuperSeries collection identifiers",
        ["GSC123456"],
        "geo",
        97,
    ),
    # Studies
    _pattern(
        AccessionType.STUDY_SRA,
        r"^[EDS]RP\d{6,}$",
        "SRA Study identifiers from ENA (ERP), DDBJ (DRP), or NCBI (SRP)",
        ["SRP123456", "ERP123456", "DRP123456"],
        "sra",
        90,
    ),
    _pattern(
        AccessionType.STUDY_GSA,
        r"^CRA\d+$",
        "GSA Study identifiers",
        ["CRA123456", "CRA000001"],
        "gsa",
        89,
    ),
    _pattern(
        AccessionType.DATASET_GEO,
        r"^GDS\d+$",
        "GEO curated DataSet identifiers",
        ["GDS123456", "GDS005678"],
        "geo",
        88,
    ),
    # BioSamples
    _pattern(
        AccessionType.BIOSAMPLE_NCBI,
        r"^SAMN\d+$",
        "NCBI BioSample identifiers",
        ["SAMN12345678", "SAMN00000001"],
        "biosample",
        85,
    ),
    _pattern(
        AccessionType.BIOSAMPLE_EBI,
        r"^SAME[A-Z]?\d+$",
        "EBI BioSample identifiers",
        ["SAME12345678", "SAMEA123456"],
        "biosample",
        84,
    ),
    _pattern(
        AccessionType.BIOSAMPLE_DDBJ,
        r"^SAMD\d+$",
        "DDBJ BioSample identifiers",
        ["SAMD12345678", "SAMD00000001"],
        "biosample",
        83,
    ),
    _pattern(
        AccessionType.BIOSAMPLE_GSA,
        r"^SAMC\d+$",
        "GSA BioSample identifiers",
        ["SAMC12345678", "SAMC00000001"],
        "gsa",
        82,
    ),
    # Samples
    _pattern(
        AccessionType.SAMPLE_SRA,
        r"^[EDS]RS\d{6,}$",
        "SRA Sample identifiers from ENA (ERS), DDBJ (DRS), or NCBI (SRS)",
        ["SRS123456", "ERS123456", "DRS123456"],
        "sra",
        80,
    ),
    _pattern(
        AccessionType.SAMPLE_GEO,
        r"^GSM\d+$",
        "GEO Sample identifiers",
        ["GSM123456", "GSM000001"],
        "geo",
        79,
    ),
    _pattern(
        AccessionType.PLATFORM_GEO,
        r"^GPL\d+$",
        "GEO Platform identifiers (array or sequencer descriptions)",
        ["GPL570", "GPL21185"],
        "geo",
        75,
    ),
    # Experiments
    _pattern(
        AccessionType.EXPERIMENT_SRA,
        r"^[EDS]RX\d{6,}$",
        "SRA Experiment identifiers from ENA (ERX), DDBJ (DRX), or NCBI (SRX)",
        ["SRX123456", "ERX123456", "DRX123456"],
        "sra",
        70,
    ),
    _pattern(
        AccessionType.EXPERIMENT_GSA,
        r"^CRX\d+$",
        "GSA Experiment identifiers",
        ["CRX123456", "CRX000001"],
        "gsa",
        69,
    ),
    # Runs (most granular)
    _pattern(
        AccessionType.RUN_SRA,
        r"^[EDS]RR\d{6,}$",
        "SRA Run identifiers from ENA (ERR), DDBJ (DRR), or NCBI (SRR)",
        ["SRR123456", "ERR123456", "DRR123456"],
        "sra",
        60,
    ),
    _pattern(
        AccessionType.RUN_GSA,
        r"^CRR\d+$",
        "GSA Run identifiers",
        ["CRR123456", "CRR000001"],
        "gsa",
        59,
    ),
]

ACCESSION_PATTERNS: Tuple[AccessionPattern, ...] = tuple(
    sorted(_CATALOG, key=lambda p: (-p.priority, p.database))
)

PATTERNS_BY_TYPE: Mapping[AccessionType, AccessionPattern] = MappingProxyType(
    {p.type: p for p in ACCESSION_PATTERNS}
)

_TOKEN_PATTERN = re.compile(r"\b[A-Za-z][A-Za-z0-9._-]{5,19}\b")
_VALID_CHARS = re.compile(r"^[A-Z0-9._-]+$")

_LEVELS = {
    AccessionType.PROJECT_BIOPROJECT: HierarchyLevel.PROJECT,
    AccessionType.PROJECT_GSA: HierarchyLevel.PROJECT,
    AccessionType.PROJECT_GEO: HierarchyLevel.PROJECT,
    AccessionType.COLLECTION_GEO: HierarchyLevel.PROJECT,
    AccessionType.STUDY_SRA: HierarchyLevel.STUDY,
    AccessionType.STUDY_GSA: HierarchyLevel.STUDY,
    AccessionType.DATASET_GEO: HierarchyLevel.STUDY,
    AccessionType.BIOSAMPLE_NCBI: HierarchyLevel.SAMPLE,
    AccessionType.BIOSAMPLE_EBI: HierarchyLevel.SAMPLE,
    AccessionType.BIOSAMPLE_DDBJ: HierarchyLevel.SAMPLE,
    AccessionType.BIOSAMPLE_GSA: HierarchyLevel.SAMPLE,
    AccessionType.SAMPLE_SRA: HierarchyLevel.SAMPLE,
    AccessionType.SAMPLE_GEO: HierarchyLevel.SAMPLE,
    AccessionType.EXPERIMENT_SRA: HierarchyLevel.EXPERIMENT,
    AccessionType.EXPERIMENT_GSA: HierarchyLevel.EXPERIMENT,
    AccessionType.RUN_SRA: HierarchyLevel.RUN,
    AccessionType.RUN_GSA: HierarchyLevel.RUN,
    AccessionType.PLATFORM_GEO: HierarchyLevel.PLATFORM,
}

_HIERARCHIES = {
    AccessionType.RUN_SRA: [
        AccessionType.PROJECT_BIOPROJECT,
        AccessionType.STUDY_SRA,
        AccessionType.EXPERIMENT_SRA,
        AccessionType.RUN_SRA,
    ],
    AccessionType.RUN_GSA: [
        AccessionType.PROJECT_GSA,
        AccessionType.STUDY_GSA,
        AccessionType.EXPERIMENT_GSA,
        AccessionType.RUN_GSA,
    ],
    AccessionType.EXPERIMENT_SRA: [
        AccessionType.PROJECT_BIOPROJECT,
        AccessionType.STUDY_SRA,
        AccessionType.EXPERIMENT_SRA,
    ],
    AccessionType.EXPERIMENT_GSA: [
        AccessionType.PROJECT_GSA,
        AccessionType.STUDY_GSA,
        AccessionType.EXPERIMENT_GSA,
    ],
    AccessionType.SAMPLE_SRA: [
        AccessionType.PROJECT_BIOPROJECT,
        AccessionType.STUDY_SRA,
        AccessionType.SAMPLE_SRA,
    ],
    AccessionType.SAMPLE_GEO: [AccessionType.PROJECT_GEO, AccessionType.SAMPLE_GEO],
    AccessionType.DATASET_GEO: [AccessionType.PROJECT_GEO, AccessionType.DATASET_GEO],
    AccessionType.STUDY_SRA: [AccessionType.PROJECT_BIOPROJECT, AccessionType.STUDY_SRA],
    AccessionType.STUDY_GSA: [AccessionType.PROJECT_GSA, AccessionType.STUDY_GSA],
}

_DATA_LEVEL_TYPES = frozenset(
    {
        AccessionType.RUN_SRA,
        AccessionType.RUN_GSA,
        AccessionType.EXPERIMENT_SRA,
        AccessionType.EXPERIMENT_GSA,
        AccessionType.SAMPLE_GEO,
        AccessionType.SAMPLE_SRA,
    }
)


def normalize_accession(value: str) -> str:
    """Trim whitespace and uppercase an accession candidate."""
    return value.strip().upper()


def match_accession(value: str) -> Optional[AccessionPattern]:
    """
    Match input against the catalog in priority order.

    Args:
        value: Candidate accession (case and surrounding whitespace ignored)

    Returns:
        The first matching AccessionPattern, or None

    Example:
        >>> match_accession("GSE185917").database
        'geo'
        >>> match_accession("INVALID123") is None
        True
    """
    normalized = normalize_accession(value)
    for pattern in ACCESSION_PATTERNS:
        if pattern.matches(normalized):
            return pattern
    return None


def match_all_accessions(value: str) -> List[AccessionPattern]:
    """
    Return every catalog pattern matching the input, in priority order.

    More than one entry means the input is genuinely ambiguous.
    """
    normalized = normalize_accession(value)
    return [p for p in ACCESSION_PATTERNS if p.matches(normalized)]


def validate_accession_format(value: str) -> Tuple[bool, List[str]]:
    """
    Syntax-only checks, independent of the catalog.

    Every violated rule is reported, not just the first one.

    Args:
        value: Raw accession string

    Returns:
        Tuple of (is_valid, issues)

    Example:
        >>> validate_accession_format("SRR123456")
        (True, [])
        >>> validate_accession_format("srr123456")
        (False, ['accession should be uppercase'])
    """
    if not value:
        return False, ["empty input"]

    normalized = value.strip()
    issues: List[str] = []

    if normalized != normalized.upper():
        issues.append("accession should be uppercase")

    if any(ch.isspace() for ch in normalized):
        issues.append("accession contains spaces")

    if len(normalized) < 6:
        issues.append("accession too short (minimum 6 characters)")

    if len(normalized) > 20:
        issues.append("accession too long (maximum 20 characters)")

    if not _VALID_CHARS.match(normalized.upper()):
        issues.append("accession contains invalid characters")

    return len(issues) == 0, issues


def extract_accession_from_text(text: str) -> List[str]:
    """
    Find catalog accessions embedded in free text.

    Tokens are letter-initial runs of 6-20 characters; matches are returned
    uppercased, in first-seen order, without duplicates.

    Args:
        text: Free text (sentence, methods section, URL...)

    Returns:
        List of normalized accessions
    """
    if not text:
        return []

    found: List[str] = []
    seen = set()

    for token in _TOKEN_PATTERN.findall(text):
        candidate = token.upper()
        if candidate in seen:
            continue
        if match_accession(candidate) is not None:
            found.append(candidate)
            seen.add(candidate)

    return found


def get_accession_hierarchy(accession_type: AccessionType) -> List[AccessionType]:
    """
    Ancestor chain for an accession type, most general first.

    Types without ancestors (BioSamples, projects, platforms) return
    a single-element list containing the type itself.
    """
    return list(_HIERARCHIES.get(accession_type, [accession_type]))


def get_hierarchy_level(accession_type: AccessionType) -> HierarchyLevel:
    """Hierarchy level of an accession type."""
    return _LEVELS.get(accession_type, HierarchyLevel.UNKNOWN)


def is_data_level(accession_type: AccessionType) -> bool:
    """True if the type references downloadable data rather than only metadata."""
    return accession_type in _DATA_LEVEL_TYPES


def get_preferred_database(accession_type: AccessionType) -> str:
    """Primary archive for an accession type."""
    if accession_type in (
        AccessionType.PROJECT_BIOPROJECT,
        AccessionType.STUDY_SRA,
        AccessionType.SAMPLE_SRA,
        AccessionType.EXPERIMENT_SRA,
        AccessionType.RUN_SRA,
    ):
        return "sra"
    if accession_type in (
        AccessionType.PROJECT_GSA,
        AccessionType.STUDY_GSA,
        AccessionType.BIOSAMPLE_GSA,
        AccessionType.EXPERIMENT_GSA,
        AccessionType.RUN_GSA,
    ):
        return "gsa"
    if accession_type in (
        AccessionType.PROJECT_GEO,
        AccessionType.COLLECTION_GEO,
        AccessionType.DATASET_GEO,
        AccessionType.SAMPLE_GEO,
        AccessionType.PLATFORM_GEO,
    ):
        return "geo"
    if accession_type in (
        AccessionType.BIOSAMPLE_NCBI,
        AccessionType.BIOSAMPLE_EBI,
        AccessionType.BIOSAMPLE_DDBJ,
    ):
        return "biosample"
    return "unknown"


def get_regional_mirrors(database: str) -> List[AccessionDatabase]:
    """
    Archives mirroring a database, the database itself first.

    The INSDC members (SRA, ENA, DDBJ) mirror each other; every other
    archive only lists itself.
    """
    insdc_order = {
        "sra": ["sra", "ena", "ddbj"],
        "ena": ["ena", "sra", "ddbj"],
        "ddbj": ["ddbj", "ena", "sra"],
    }
    if database in insdc_order:
        return [KNOWN_DATABASES[name] for name in insdc_order[database]]
    if database in KNOWN_DATABASES:
        return [KNOWN_DATABASES[database]]
    return []


def get_patterns_for_types(types: Iterable[AccessionType]) -> List[AccessionPattern]:
    """Catalog subset for the given types, preserving catalog order."""
    wanted = set(types)
    return [p for p in ACCESSION_PATTERNS if p.type in wanted]
