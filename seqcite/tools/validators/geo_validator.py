"""
Gene Expression Omnibus (GEO) accession validator.

Handles series (GSE), samples (GSM), platforms (GPL), curated datasets (GDS)
and SuperSeries collections (GSC). Metadata is read from the brief SOFT text
that acc.cgi serves for series, samples and platforms.
"""

from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

from seqcite.core.identifiers import AccessionPattern, AccessionType
from seqcite.core.schemas import DomainValidationResult, HTTPValidationResult
from seqcite.tools.validators.accession_validator import BaseAccessionValidator
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

GEO_URL = "https://www.ncbi.nlm.nih.gov/geo"
GEO_FTP_URL = "ftp://ftp.ncbi.nlm.nih.gov/geo"

GEO_ACCESSION_TYPES = (
    AccessionType.PROJECT_GEO,
    AccessionType.COLLECTION_GEO,
    AccessionType.DATASET_GEO,
    AccessionType.SAMPLE_GEO,
    AccessionType.PLATFORM_GEO,
)

# type -> (dataset_type, subtype, geo_type, description, tags)
_GEO_CLASSES = {
    AccessionType.PROJECT_GEO: (
        "expression_data",
        "series",
        "Series",
        "Gene expression experiment or study",
        ("experiment", "series", "study"),
    ),
    AccessionType.SAMPLE_GEO: (
        "expression_data",
        "sample",
        "Sample",
        "Individual biological sample",
        ("sample", "biological_sample"),
    ),
    AccessionType.PLATFORM_GEO: (
        "metadata",
        "platform",
        "Platform",
        "Array or sequencing platform information",
        ("platform", "array", "technology"),
    ),
    AccessionType.DATASET_GEO: (
        "expression_data",
        "dataset",
        "Dataset",
        "Curated gene expression dataset",
        ("curated", "dataset", "processed"),
    ),
    AccessionType.COLLECTION_GEO: (
        "expression_data",
        "collection",
        "SuperSeries Collection",
        "Collection of related series",
        ("collection", "superseries"),
    ),
}

_FTP_DIRS = {
    AccessionType.PROJECT_GEO: "series",
    AccessionType.PLATFORM_GEO: "platforms",
    AccessionType.DATASET_GEO: "datasets",
}

_SOFT_TYPES = (
    AccessionType.PROJECT_GEO,
    AccessionType.SAMPLE_GEO,
    AccessionType.PLATFORM_GEO,
)


class GEOValidator(BaseAccessionValidator):
    """
    Validator for NCBI GEO accessions.

    An unreachable record stays valid; it only loses the HTTP 200 bonus.
    """

    treat_unreachable_as_invalid = False
    unreachable_confidence = None

    url_hosts = frozenset(
        {"www.ncbi.nlm.nih.gov", "ftp.ncbi.nlm.nih.gov", "ftp-trace.ncbi.nlm.nih.gov"}
    )

    def __init__(self, **kwargs):
        super().__init__(
            name="geo",
            description=(
                "Gene Expression Omnibus (GEO) - NCBI repository for gene "
                "expression and genomics data"
            ),
            priority=90,
            accession_types=GEO_ACCESSION_TYPES,
            **kwargs,
        )

    def is_related_url(self, value: str) -> bool:
        try:
            parsed = urlparse(value.strip())
        except ValueError:
            return False

        host = (parsed.hostname or "").lower()
        path = parsed.path.lower()

        if host == "www.ncbi.nlm.nih.gov":
            return (
                "/geo/" in path
                or "acc=G" in parsed.query
                or "term=G" in parsed.query
            )
        if host in ("ftp.ncbi.nlm.nih.gov", "ftp-trace.ncbi.nlm.nih.gov"):
            return "geo" in path
        return False

    def populate_result(
        self, result: DomainValidationResult, pattern: AccessionPattern
    ) -> None:
        dataset_type, subtype, geo_type, description, tags = _GEO_CLASSES[
            pattern.type
        ]
        result.dataset_type = dataset_type
        result.subtype = subtype

        result.metadata["accession_type"] = pattern.type.value
        result.metadata["geo_type"] = geo_type
        result.metadata["description"] = description
        result.metadata["database"] = "GEO"
        result.metadata["provider"] = "NCBI"
        result.metadata["data_domain"] = "gene_expression"

        result.add_tag(*tags)
        result.add_tag("ncbi", "geo", "gene_expression")

    def generate_urls(
        self, accession: str, pattern: AccessionPattern
    ) -> Tuple[str, List[str]]:
        primary = f"{GEO_URL}/query/acc.cgi?acc={accession}"
        alternates: List[str] = []

        if pattern.type == AccessionType.PROJECT_GEO:
            alternates.append(f"{GEO_URL}/browse/?view=series&acc={accession}")
            alternates.append(f"{GEO_URL}/browse/?view=samples&series={accession}")
        elif pattern.type == AccessionType.SAMPLE_GEO:
            alternates.append(f"{GEO_URL}/browse/?view=samples&acc={accession}")
        elif pattern.type == AccessionType.PLATFORM_GEO:
            alternates.append(f"{GEO_URL}/browse/?view=platforms&acc={accession}")

        ftp_dir = _FTP_DIRS.get(pattern.type)
        if ftp_dir is not None:
            alternates.append(f"{GEO_FTP_URL}/{ftp_dir}/{geo_ftp_stub(accession)}/{accession}/")

        return primary, alternates

    def fetch_remote_metadata(
        self,
        accession: str,
        pattern: AccessionPattern,
        deadline: Optional[float] = None,
    ) -> Optional[Dict[str, str]]:
        """Fetch the brief SOFT record for series, samples and platforms."""
        if pattern.type not in _SOFT_TYPES:
            return None

        url = (
            f"{GEO_URL}/query/acc.cgi?acc={accession}"
            "&targ=self&form=text&view=brief"
        )
        response = self._http_get(url, deadline, accept="text/plain")
        if response is None:
            return None
        return parse_soft_header(response.text)

    def add_remote_metadata(
        self, result: DomainValidationResult, metadata: Dict[str, str]
    ) -> None:
        super().add_remote_metadata(result, metadata)
        if metadata.get("sample_count"):
            result.metadata["sample_count"] = metadata["sample_count"]

    def calculate_confidence(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> float:
        if not result.valid:
            return 0.0

        confidence = 0.8

        if http_result is not None and http_result.status_code == 200:
            confidence += 0.15

        if result.subtype in ("series", "dataset"):
            confidence += 0.05
        elif result.subtype == "platform":
            confidence += 0.03

        return min(confidence, 1.0)

    def calculate_likelihood(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> float:
        """
        Likelihood that the accession references a real, data-bearing record.

        Combines validity, reachability, response content type and size,
        and the dataset type.
        """
        score = 0.0

        if result.valid:
            score += 0.4

        if http_result is not None and http_result.accessible:
            score += 0.3

            content_type = http_result.content_type.lower()
            if "text/html" in content_type:
                score += 0.1
            elif "application/json" in content_type:
                score += 0.15
            elif "text/xml" in content_type or "application/xml" in content_type:
                score += 0.15
            elif "text/plain" in content_type:
                score += 0.05

            if http_result.content_length > 1024 * 1024:
                score += 0.1
            elif http_result.content_length > 1024:
                score += 0.05

        if result.dataset_type in ("expression_data", "sequence_data", "genomic_data"):
            score += 0.1
        elif result.dataset_type in ("experimental_data", "computational_data"):
            score += 0.08
        elif result.dataset_type in ("metadata", "annotation"):
            score += 0.05

        return min(score, 1.0)


def geo_ftp_stub(accession: str) -> str:
    """
    GEO FTP bucket for an accession.

    GSE185917 -> GSE185nnn, GSE12 -> GSEnnn
    """
    prefix, digits = accession[:3], accession[3:]
    return f"{prefix}{digits[:-3]}nnn"


def parse_soft_header(text: str) -> Optional[Dict[str, str]]:
    """
    Extract metadata from brief SOFT text.

    Attribute lines look like ``!Series_title = ...``; the entity prefix is
    dropped and the first occurrence of each attribute wins.
    """
    attributes: Dict[str, str] = {}
    sample_count = 0

    for line in text.splitlines():
        if not line.startswith("!") or "=" not in line:
            continue
        key, _, value = line[1:].partition("=")
        key = key.strip().lower()
        value = value.strip()
        if "_" not in key or not value:
            continue
        attribute = key.split("_", 1)[1]
        if attribute == "sample_id":
            sample_count += 1
        attributes.setdefault(attribute, value)

    organism = (
        attributes.get("organism_ch1")
        or attributes.get("organism")
        or attributes.get("sample_organism")
    )

    metadata = {
        "title": attributes.get("title", ""),
        "organism": organism or "",
        "sequencing_platform": attributes.get("platform_id", ""),
        "study_type": attributes.get("type", ""),
        "submission_date": attributes.get("submission_date", ""),
        "last_updated": attributes.get("last_update_date", ""),
    }
    if sample_count:
        metadata["sample_count"] = str(sample_count)

    metadata = {key: value for key, value in metadata.items() if value}
    return metadata or None
