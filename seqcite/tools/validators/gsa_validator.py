"""
Genome Sequence Archive (GSA) accession validator.

GSA is run by the China National Center for Bioinformation (NGDC). Its
servers are often slow or unreachable from outside China, so an unreachable
record keeps its syntactic validity with a reduced, fixed confidence.
"""

from collections import deque
from typing import Any, Dict, List, Optional, Tuple

from seqcite.core.identifiers import AccessionPattern, AccessionType, is_data_level
from seqcite.core.schemas import DomainValidationResult, HTTPValidationResult
from seqcite.tools.validators.accession_validator import BaseAccessionValidator
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

NGDC_URL = "https://ngdc.cncb.ac.cn"
GSA_URL = f"{NGDC_URL}/gsa"

GSA_ACCESSION_TYPES = (
    AccessionType.PROJECT_GSA,
    AccessionType.STUDY_GSA,
    AccessionType.BIOSAMPLE_GSA,
    AccessionType.EXPERIMENT_GSA,
    AccessionType.RUN_GSA,
)

# Metadata key -> candidate JSON keys (matched case-insensitively)
_JSON_FIELDS = {
    "title": ("title", "projecttitle", "sampletitle", "name"),
    "organism": ("organism", "organismname", "scientificname", "species"),
    "sequencing_platform": ("platform", "instrumentplatform", "instrument"),
    "library_layout": ("librarylayout",),
    "library_source": ("librarysource",),
    "study_type": ("studytype", "projecttype", "datatype"),
    "submission_date": ("submissiondate", "submitdate", "createtime"),
    "last_updated": ("updatedate", "lastupdate", "modifytime"),
    "institution": ("institution", "organization", "submitterorganization"),
    "country": ("country",),
}


class GSAValidator(BaseAccessionValidator):
    """Validator for the Genome Sequence Archive (CRA/CRX/CRR, PRJC, SAMC)."""

    treat_unreachable_as_invalid = False
    unreachable_confidence = 0.3

    url_hosts = frozenset(
        {
            "ngdc.cncb.ac.cn",
            "bigd.big.ac.cn",
            "download.cncb.ac.cn",
            "download.big.ac.cn",
            "ftp.cncb.ac.cn",
            "ftp.big.ac.cn",
            "gsa.big.ac.cn",
            "www.biosino.org",
            "biosino.org",
        }
    )
    url_path_markers = (
        "/gsa",
        "/bioproject",
        "/biosample",
        "/gsr",
        "/browse",
        "/search",
        "/download",
    )
    url_query_params = ("acc", "term", "query", "accession", "searchTerm")

    def __init__(self, **kwargs):
        super().__init__(
            name="gsa",
            description=(
                "Genome Sequence Archive (GSA) - China's national genomic data "
                "repository"
            ),
            priority=88,
            accession_types=GSA_ACCESSION_TYPES,
            **kwargs,
        )

    def generate_urls(
        self, accession: str, pattern: AccessionPattern
    ) -> Tuple[str, List[str]]:
        search_url = f"{GSA_URL}/search?searchTerm={accession}"

        if pattern.type == AccessionType.RUN_GSA:
            alternates = [
                f"{GSA_URL}/browse/{accession}",
                f"{GSA_URL}/api/run/{accession}",
                f"https://download.cncb.ac.cn/gsa/{accession}",
            ]
            # The CRA series of a run is not derivable from its accession
            alternates.append(f"ftp://download.big.ac.cn/gsa001/CRA001/{accession}/")
            return search_url, alternates

        if pattern.type == AccessionType.EXPERIMENT_GSA:
            return search_url, [
                f"{GSA_URL}/browse/{accession}",
                f"{GSA_URL}/api/experiment/{accession}",
            ]

        if pattern.type == AccessionType.BIOSAMPLE_GSA:
            return f"{NGDC_URL}/biosample/browse/{accession}", [
                search_url,
                f"{NGDC_URL}/biosample/api/{accession}",
            ]

        if pattern.type == AccessionType.STUDY_GSA:
            return f"{GSA_URL}/browse/{accession}", [
                search_url,
                f"{GSA_URL}/search/getRunInfoByCra",
                f"{GSA_URL}/file/exportExcelFile",
            ]

        if pattern.type == AccessionType.PROJECT_GSA:
            return f"{NGDC_URL}/bioproject/browse/{accession}", [
                search_url,
                f"{NGDC_URL}/bioproject/api/{accession}",
            ]

        return super().generate_urls(accession, pattern)

    def add_http_metadata(
        self, result: DomainValidationResult, http_result: HTTPValidationResult
    ) -> None:
        super().add_http_metadata(result, http_result)

        if http_result.accessible:
            result.metadata["accessibility"] = "true"
            return

        result.metadata["accessibility"] = "false"
        result.metadata["http_error"] = (
            f"HTTP {http_result.status_code}"
            if http_result.status_code
            else (http_result.error or "unreachable")
        )
        error = (http_result.error or "").lower()
        if "timeout" in error or "timed out" in error or "refused" in error:
            result.add_warning("GSA servers may have limited international access")

    def fetch_remote_metadata(
        self,
        accession: str,
        pattern: AccessionPattern,
        deadline: Optional[float] = None,
    ) -> Optional[Dict[str, str]]:
        """
        Fetch project or BioSample metadata from the NGDC JSON APIs.

        Run and study lookups need NGDC's form-POST endpoints and are not
        attempted.
        """
        if pattern.type == AccessionType.PROJECT_GSA:
            url = f"{NGDC_URL}/bioproject/api/{accession}"
        elif pattern.type == AccessionType.BIOSAMPLE_GSA:
            url = f"{NGDC_URL}/biosample/api/{accession}"
        else:
            return None

        response = self._http_get(url, deadline, accept="application/json")
        if response is None:
            return None
        try:
            payload = response.json()
        except ValueError as e:
            logger.debug(f"NGDC returned non-JSON metadata for {accession}: {e}")
            return None
        return parse_ngdc_record(payload)

    def enhance_result(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> None:
        result.add_tag("chinese_database", "ngdc", "asia_pacific")
        self.add_hierarchy_metadata(result, pattern)

        result.add_tag("region:asia")
        result.metadata["primary_region"] = "China"
        result.metadata["data_policy"] = "Chinese national data sharing policies apply"

        if http_result is not None and http_result.accessible and is_data_level(
            pattern.type
        ):
            result.add_tag("downloadable_data")
            if pattern.type == AccessionType.RUN_GSA:
                result.add_tag("raw_reads", "fastq_available")

        result.add_tag("chinese_interface", "english_interface")
        result.metadata["interface_languages"] = "Chinese, English"

        if pattern.type == AccessionType.RUN_GSA:
            result.add_tag("aspera_support", "ftp_download", "http_download")
            result.metadata["download_methods"] = "Aspera, FTP, HTTP"
        elif pattern.type == AccessionType.STUDY_GSA:
            result.add_tag("batch_download", "metadata_export")

    def calculate_confidence(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> float:
        if not result.valid:
            return 0.0

        confidence = 0.80

        if http_result is not None and http_result.accessible:
            confidence += 0.15
            if http_result.status_code == 200:
                confidence += 0.03

        if "title" in result.metadata:
            confidence += 0.05
        if "organism" in result.metadata:
            confidence += 0.03

        if pattern.type == AccessionType.RUN_GSA:
            confidence += 0.03
        elif pattern.type == AccessionType.STUDY_GSA:
            confidence += 0.02
        elif pattern.type == AccessionType.PROJECT_GSA:
            confidence += 0.01

        if result.metadata.get("country", "").lower() in ("china", "中国"):
            confidence += 0.02

        return min(confidence, 1.0)

    def get_download_capabilities(self, accession_type: AccessionType) -> Dict[str, Any]:
        """
        Describe how data for an accession type can be downloaded from GSA.

        Args:
            accession_type: GSA accession type

        Returns:
            Dict of capability flags and supported formats/methods
        """
        capabilities: Dict[str, Any] = {}

        if accession_type == AccessionType.RUN_GSA:
            capabilities["formats"] = ["FASTQ", "SRA"]
            capabilities["compression"] = ["gzip", "bzip2"]
            capabilities["methods"] = ["HTTP", "FTP", "Aspera"]
            capabilities["batch_download"] = True
            capabilities["api_access"] = True
        elif accession_type == AccessionType.STUDY_GSA:
            capabilities["metadata_formats"] = ["CSV", "Excel", "JSON"]
            capabilities["batch_operations"] = True
            capabilities["run_list"] = True
        elif accession_type == AccessionType.PROJECT_GSA:
            capabilities["metadata_export"] = True
            capabilities["study_list"] = True
        else:
            capabilities["metadata_only"] = True

        capabilities["region_optimized"] = "Asia-Pacific"
        capabilities["international_access"] = "Limited"
        return capabilities


def parse_ngdc_record(payload: Any) -> Optional[Dict[str, str]]:
    """
    Pick known fields out of an NGDC JSON record.

    NGDC responses wrap the record in varying envelopes, so nested objects
    are searched breadth-first and the shallowest match wins.
    """
    scalars: Dict[str, str] = {}
    queue = deque([payload])

    while queue:
        node = queue.popleft()
        if isinstance(node, dict):
            for key, value in node.items():
                if isinstance(value, (dict, list)):
                    queue.append(value)
                elif value is not None and str(value).strip():
                    scalars.setdefault(str(key).lower(), str(value).strip())
        elif isinstance(node, list):
            queue.extend(node)

    metadata = {}
    for field, candidates in _JSON_FIELDS.items():
        for candidate in candidates:
            if candidate in scalars:
                metadata[field] = scalars[candidate]
                break

    return metadata or None
