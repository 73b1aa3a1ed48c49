"""
SRA/ENA/DDBJ accession validator.

Covers the INSDC sequence-read archives: BioProjects, SRA studies, samples,
experiments and runs, plus the NCBI/EBI/DDBJ BioSample records that hang off
them. Remote metadata comes from the ENA Portal API (TSV).
"""

import io
from typing import Dict, List, Optional, Tuple

import pandas as pd

from seqcite.core.identifiers import (
    KNOWN_DATABASES,
    AccessionPattern,
    AccessionType,
    is_data_level,
)
from seqcite.core.schemas import DomainValidationResult, HTTPValidationResult
from seqcite.tools.validators.accession_validator import (
    ENA_VIEW_URL,
    NCBI_SRA_URL,
    BaseAccessionValidator,
)
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

ENA_PORTAL_API = "https://www.ebi.ac.uk/ena/portal/api"

SRA_ACCESSION_TYPES = (
    AccessionType.PROJECT_BIOPROJECT,
    AccessionType.STUDY_SRA,
    AccessionType.SAMPLE_SRA,
    AccessionType.EXPERIMENT_SRA,
    AccessionType.RUN_SRA,
    AccessionType.BIOSAMPLE_NCBI,
    AccessionType.BIOSAMPLE_EBI,
    AccessionType.BIOSAMPLE_DDBJ,
)

_RUN_FIELDS = (
    "run_accession,experiment_title,scientific_name,instrument_platform,"
    "library_strategy,library_source,library_layout,fastq_bytes,"
    "first_created,last_updated"
)
_EXPERIMENT_FIELDS = (
    "experiment_accession,experiment_title,scientific_name,instrument_platform,"
    "library_strategy,library_source,library_layout,first_created,last_updated"
)
_STUDY_FIELDS = "study_accession,study_title,scientific_name,first_created,last_updated"


class SRAValidator(BaseAccessionValidator):
    """
    Validator for the Sequence Read Archive family (SRA, ENA, DDBJ).

    A record the archive answers with an HTTP error is treated as invalid:
    INSDC mirrors are reliable enough that a 404 means the accession does
    not exist.
    """

    treat_unreachable_as_invalid = True
    unreachable_confidence = 0.3

    url_hosts = frozenset(
        {
            "www.ncbi.nlm.nih.gov",
            "trace.ncbi.nlm.nih.gov",
            "ftp-trace.ncbi.nlm.nih.gov",
            "www.ebi.ac.uk",
            "ftp.sra.ebi.ac.uk",
            "www.ddbj.nig.ac.jp",
            "trace.ddbj.nig.ac.jp",
        }
    )
    url_path_markers = ("/sra", "/traces/sra", "/ena", "/ddbj", "/bioproject", "/biosample")

    def __init__(self, **kwargs):
        super().__init__(
            name="sra",
            description=(
                "Sequence Read Archive (SRA/ENA/DDBJ) - International "
                "repositories for high-throughput sequencing data"
            ),
            priority=95,
            accession_types=SRA_ACCESSION_TYPES,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def generate_urls(
        self, accession: str, pattern: AccessionPattern
    ) -> Tuple[str, List[str]]:
        if pattern.type == AccessionType.RUN_SRA:
            return self._run_urls(accession)
        if pattern.type == AccessionType.EXPERIMENT_SRA:
            return f"{NCBI_SRA_URL}?term={accession}", [
                ENA_VIEW_URL.format(accession),
                f"https://trace.ncbi.nlm.nih.gov/Traces/sra/?exp={accession}",
                f"{ENA_PORTAL_API}/search?result=read_experiment"
                f"&query=experiment_accession={accession}",
            ]
        if pattern.type == AccessionType.SAMPLE_SRA:
            return f"{NCBI_SRA_URL}?term={accession}", [
                ENA_VIEW_URL.format(accession),
                f"{ENA_PORTAL_API}/search?result=sample"
                f"&query=sample_accession={accession}",
            ]
        if pattern.type == AccessionType.STUDY_SRA:
            return f"{NCBI_SRA_URL}?term={accession}", [
                ENA_VIEW_URL.format(accession),
                f"{ENA_PORTAL_API}/search?result=study"
                f"&query=study_accession={accession}",
            ]
        # BioProjects and BioSamples use the archive-wide rules
        return super().generate_urls(accession, pattern)

    def _run_urls(self, run_id: str) -> Tuple[str, List[str]]:
        alternates = [
            ENA_VIEW_URL.format(run_id),
            f"https://trace.ncbi.nlm.nih.gov/Traces/sra/?run={run_id}",
            f"{ENA_PORTAL_API}/filereport?accession={run_id}"
            "&result=read_run&fields=all",
            f"https://ddbj.nig.ac.jp/resource/sra-run/{run_id}",
        ]
        fastq_dir = ena_fastq_dir(run_id)
        if fastq_dir:
            alternates.append(f"ftp://ftp.sra.ebi.ac.uk/vol1/fastq/{fastq_dir}/{run_id}")
        return f"{NCBI_SRA_URL}/{run_id}", alternates

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def fetch_remote_metadata(
        self,
        accession: str,
        pattern: AccessionPattern,
        deadline: Optional[float] = None,
    ) -> Optional[Dict[str, str]]:
        """
        Fetch run/experiment/study metadata from the ENA Portal API.

        Returns:
            Mapping of metadata keys, or None if unsupported or unavailable
        """
        if pattern.type == AccessionType.RUN_SRA:
            url = (
                f"{ENA_PORTAL_API}/filereport?accession={accession}"
                f"&result=read_run&fields={_RUN_FIELDS}&format=tsv"
            )
        elif pattern.type == AccessionType.EXPERIMENT_SRA:
            url = (
                f"{ENA_PORTAL_API}/search?result=read_experiment"
                f'&query=experiment_accession="{accession}"'
                f"&fields={_EXPERIMENT_FIELDS}&format=tsv"
            )
        elif pattern.type == AccessionType.STUDY_SRA:
            url = (
                f"{ENA_PORTAL_API}/search?result=study"
                f'&query=secondary_study_accession="{accession}"'
                f"&fields={_STUDY_FIELDS}&format=tsv"
            )
        elif pattern.type == AccessionType.PROJECT_BIOPROJECT:
            url = (
                f"{ENA_PORTAL_API}/search?result=study"
                f'&query=study_accession="{accession}"'
                f"&fields={_STUDY_FIELDS}&format=tsv"
            )
        else:
            return None

        response = self._http_get(url, deadline, accept="text/plain")
        if response is None:
            return None
        return parse_ena_report(response.text)

    # ------------------------------------------------------------------
    # Enhancement and scoring
    # ------------------------------------------------------------------

    def enhance_result(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> None:
        result.add_tag("sequence_archive", "high_throughput_sequencing")
        self.add_hierarchy_metadata(result, pattern)

        database = KNOWN_DATABASES.get(pattern.database)
        if database is not None:
            result.add_tag(f"region:{database.region}")

        if http_result is not None and http_result.accessible and is_data_level(
            pattern.type
        ):
            result.add_tag("downloadable_data")
            if pattern.type == AccessionType.RUN_SRA:
                result.add_tag("raw_reads", "fastq_available")

    def calculate_confidence(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> float:
        if not result.valid:
            return 0.0
        if http_result is not None and not http_result.accessible:
            return 0.0

        confidence = 0.85

        if http_result is not None and http_result.accessible:
            confidence += 0.10
            if http_result.status_code == 200:
                confidence += 0.03

        if "title" in result.metadata:
            confidence += 0.05
        if "organism" in result.metadata:
            confidence += 0.03

        if pattern.type == AccessionType.RUN_SRA:
            confidence += 0.02
        elif pattern.type == AccessionType.PROJECT_BIOPROJECT:
            confidence += 0.01

        return min(confidence, 1.0)


def ena_fastq_dir(run_id: str) -> Optional[str]:
    """
    ENA FASTQ directory for a run, relative to vol1/fastq.

    Six-digit runs live in <prefix6>/<run>; longer runs use a zero-padded
    directory built from the digits past the sixth.

    Example:
        >>> ena_fastq_dir("SRR123456")
        'SRR123/SRR123456'
        >>> ena_fastq_dir("SRR12345678")
        'SRR123/078'
    """
    if len(run_id) < 9:
        return None
    if len(run_id) == 9:
        return f"{run_id[:6]}/{run_id}"
    return f"{run_id[:6]}/{run_id[9:].zfill(3)}"


def parse_ena_report(text: str) -> Optional[Dict[str, str]]:
    """
    Map the first row of an ENA Portal TSV report onto metadata keys.

    Args:
        text: TSV body (header line plus data rows)

    Returns:
        Metadata mapping, or None if the report is empty or malformed
    """
    if not text or not text.strip():
        return None

    try:
        df = pd.read_csv(io.StringIO(text), sep="\t", dtype=str)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.debug(f"Could not parse ENA report: {e}")
        return None

    if df.empty:
        return None

    row = df.fillna("").iloc[0]

    def field(name: str) -> str:
        return str(row[name]).strip() if name in row.index else ""

    metadata = {
        "title": field("experiment_title") or field("study_title"),
        "organism": field("scientific_name"),
        "sequencing_platform": field("instrument_platform"),
        "library_strategy": field("library_strategy"),
        "library_source": field("library_source"),
        "library_layout": field("library_layout"),
        "submission_date": field("first_created"),
        "last_updated": field("last_updated"),
    }

    fastq_bytes = field("fastq_bytes")
    if fastq_bytes:
        try:
            total = sum(int(part) for part in fastq_bytes.split(";") if part)
        except ValueError:
            total = 0
        if total > 0:
            metadata["data_size_bytes"] = str(total)

    metadata = {key: value for key, value in metadata.items() if value}
    return metadata or None
