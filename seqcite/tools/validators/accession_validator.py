"""
Shared validation engine for sequence-archive accession validators.

Every archive-family validator runs the same pipeline:

1. Extract: find an accession in a bare string, a URL or free text
2. Match: check the accession against the types this validator owns
3. Classify: dataset type, archive metadata and hierarchy tags
4. URLs: primary record URL plus alternates (family-specific)
5. Probe: one HEAD request against the primary URL
6. Score: confidence and likelihood in [0, 1]

Subclasses customise steps 3-6 through hooks and a few policy attributes
instead of re-implementing the pipeline.
"""

import re
import time
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import requests

from seqcite.config.settings import get_settings
from seqcite.core.identifiers import (
    KNOWN_DATABASES,
    AccessionPattern,
    AccessionType,
    extract_accession_from_text,
    get_accession_hierarchy,
    get_patterns_for_types,
    is_data_level,
    match_accession,
    normalize_accession,
    validate_accession_format,
)
from seqcite.core.schemas import (
    DomainValidationResult,
    HTTPValidationResult,
    PatternType,
    ValidatorPattern,
)
from seqcite.tools.validators.base_validator import (
    DEADLINE_EXCEEDED,
    DomainValidator,
    remaining_timeout,
)
from seqcite.tools.validators.metadata_cache import MetadataCache
from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

BIOINFORMATICS_DOMAIN = "bioinformatics"

NO_ACCESSION_ERROR = "no valid accession identifier found in input"
NOT_RECOGNIZED_ERROR = "accession format not recognized by this validator"

URL_ID_PARAMS = ("acc", "accession", "id", "term", "query", "searchTerm")

RELEVANT_HEADERS = (
    "Server",
    "X-Powered-By",
    "Content-Encoding",
    "Cache-Control",
    "ETag",
    "Expires",
    "Location",
    "X-RateLimit-Remaining",
)

ENA_VIEW_URL = "https://www.ebi.ac.uk/ena/browser/view/{}"
NCBI_SRA_URL = "https://www.ncbi.nlm.nih.gov/sra"

# Remote metadata fields: metadata key -> tag prefix (None = no tag)
METADATA_FIELDS = (
    ("title", None),
    ("organism", "organism"),
    ("sequencing_platform", "platform"),
    ("library_strategy", "strategy"),
    ("library_layout", None),
    ("library_source", None),
    ("study_type", None),
    ("data_size_bytes", None),
    ("file_count", None),
    ("submission_date", None),
    ("last_updated", None),
    ("institution", None),
    ("country", "country"),
)

_DATASET_TYPES = {
    AccessionType.RUN_SRA: "sequence_data",
    AccessionType.RUN_GSA: "sequence_data",
    AccessionType.EXPERIMENT_SRA: "experimental_data",
    AccessionType.EXPERIMENT_GSA: "experimental_data",
    AccessionType.SAMPLE_SRA: "sample_data",
    AccessionType.SAMPLE_GEO: "sample_data",
    AccessionType.BIOSAMPLE_NCBI: "sample_metadata",
    AccessionType.BIOSAMPLE_EBI: "sample_metadata",
    AccessionType.BIOSAMPLE_DDBJ: "sample_metadata",
    AccessionType.BIOSAMPLE_GSA: "sample_metadata",
    AccessionType.STUDY_SRA: "study_metadata",
    AccessionType.STUDY_GSA: "study_metadata",
    AccessionType.PROJECT_BIOPROJECT: "project_metadata",
    AccessionType.PROJECT_GSA: "project_metadata",
    AccessionType.PROJECT_GEO: "project_metadata",
}

_TYPE_TAGS = {
    AccessionType.RUN_SRA: ("sequencing", "run", "raw_data"),
    AccessionType.RUN_GSA: ("sequencing", "run", "raw_data"),
    AccessionType.EXPERIMENT_SRA: ("experiment", "sequencing"),
    AccessionType.EXPERIMENT_GSA: ("experiment", "sequencing"),
    AccessionType.SAMPLE_SRA: ("sample", "biological_sample"),
    AccessionType.SAMPLE_GEO: ("sample", "biological_sample"),
    AccessionType.BIOSAMPLE_NCBI: ("biosample", "metadata", "sample_metadata"),
    AccessionType.BIOSAMPLE_EBI: ("biosample", "metadata", "sample_metadata"),
    AccessionType.BIOSAMPLE_DDBJ: ("biosample", "metadata", "sample_metadata"),
    AccessionType.BIOSAMPLE_GSA: ("biosample", "metadata", "sample_metadata"),
    AccessionType.STUDY_SRA: ("study", "metadata"),
    AccessionType.STUDY_GSA: ("study", "metadata"),
    AccessionType.PROJECT_BIOPROJECT: ("project", "metadata"),
    AccessionType.PROJECT_GSA: ("project", "metadata"),
    AccessionType.PROJECT_GEO: ("project", "metadata"),
}

_HIERARCHY_TAGS = {
    AccessionType.PROJECT_BIOPROJECT: "project_level",
    AccessionType.PROJECT_GSA: "project_level",
    AccessionType.PROJECT_GEO: "project_level",
    AccessionType.STUDY_SRA: "study_level",
    AccessionType.STUDY_GSA: "study_level",
    AccessionType.EXPERIMENT_SRA: "experiment_level",
    AccessionType.EXPERIMENT_GSA: "experiment_level",
    AccessionType.RUN_SRA: "run_level",
    AccessionType.RUN_GSA: "run_level",
}


def _original_case(text: str, accession: str) -> str:
    """First occurrence of a normalized accession in text, as written."""
    match = re.search(rf"\b{re.escape(accession)}\b", text, flags=re.IGNORECASE)
    return match.group(0) if match else accession


class BaseAccessionValidator(DomainValidator):
    """
    Pipeline shared by all accession validators.

    Policy attributes (override in subclasses):
        treat_unreachable_as_invalid: An HTTP error status from the archive
            invalidates the result and zeroes both scores
        unreachable_confidence: Fixed confidence for unreachable records;
            None means the regular confidence formula decides
        url_hosts / url_path_markers / url_query_params: URL routing
            heuristics used by can_validate

    Examples:
        >>> validator = SRAValidator(fetch_metadata=False)
        >>> result = validator.validate("SRR123456")
        >>> result.primary_url
        'https://www.ncbi.nlm.nih.gov/sra/SRR123456'
    """

    treat_unreachable_as_invalid = False
    unreachable_confidence: Optional[float] = None

    url_hosts: frozenset = frozenset()
    url_path_markers: Tuple[str, ...] = ()
    url_query_params: Tuple[str, ...] = ("acc", "term", "query", "accession")

    def __init__(
        self,
        name: str,
        description: str,
        priority: int,
        accession_types: Iterable[AccessionType],
        timeout: Optional[float] = None,
        metadata_timeout: Optional[float] = None,
        fetch_metadata: Optional[bool] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
        cache: Optional[MetadataCache] = None,
    ):
        """
        Initialize the validator.

        Args:
            name: Unique validator name
            description: Human-readable description
            priority: Routing priority (higher first)
            accession_types: Catalog types this validator owns
            timeout: Liveness probe timeout in seconds (default from settings)
            metadata_timeout: Metadata lookup timeout in seconds (default from settings)
            fetch_metadata: Enable remote metadata lookups (default from settings)
            user_agent: User-Agent header (default from settings)
            session: Shared requests session
            cache: Metadata cache (a new one sized from settings by default)
        """
        settings = get_settings()

        self._name = name
        self._description = description
        self._priority = priority
        self._patterns: List[AccessionPattern] = get_patterns_for_types(
            accession_types
        )
        self._owned_types = frozenset(p.type for p in self._patterns)

        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.metadata_timeout = (
            metadata_timeout
            if metadata_timeout is not None
            else settings.METADATA_TIMEOUT
        )
        self.fetch_metadata = (
            fetch_metadata if fetch_metadata is not None else settings.FETCH_METADATA
        )

        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent or settings.USER_AGENT})

        self._cache = cache if cache is not None else MetadataCache(
            ttl_seconds=settings.CACHE_TTL, max_entries=settings.CACHE_MAX_ENTRIES
        )

        logger.debug(
            f"Initialized {type(self).__name__} '{name}' with "
            f"{len(self._patterns)} accession patterns"
        )

    # ------------------------------------------------------------------
    # DomainValidator interface
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def domain(self) -> str:
        return BIOINFORMATICS_DOMAIN

    @property
    def description(self) -> str:
        return self._description

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def accession_patterns(self) -> List[AccessionPattern]:
        """Catalog entries owned by this validator, in catalog order."""
        return list(self._patterns)

    def get_patterns(self) -> List[ValidatorPattern]:
        patterns = [
            ValidatorPattern(
                type=PatternType.REGEX,
                pattern=p.pattern,
                description=p.description,
                examples=list(p.examples),
            )
            for p in self._patterns
        ]
        for host in sorted(self.url_hosts):
            patterns.append(
                ValidatorPattern(
                    type=PatternType.URL_HOST,
                    pattern=host,
                    description=f"URLs on {host}",
                )
            )
        return patterns

    def get_supported_accession_types(self) -> List[AccessionType]:
        return [p.type for p in self._patterns]

    def can_validate(self, value: str) -> bool:
        """
        Cheap routing check.

        True if the input is (or contains) an accession this validator owns,
        or is a URL on one of this archive family's hosts.
        """
        if self.find_matching_pattern(normalize_accession(value)) is not None:
            return True

        extracted = self.extract_accession(value)
        if extracted is not None and self.find_matching_pattern(extracted[0]):
            return True

        return self.is_related_url(value)

    def validate(
        self, value: str, deadline: Optional[float] = None
    ) -> DomainValidationResult:
        start = time.monotonic()
        result = DomainValidationResult(
            input=value, validator_name=self.name, domain=self.domain
        )

        extracted = self.extract_accession(value)
        if extracted is None:
            return self._finish_failed(result, NO_ACCESSION_ERROR, start)
        accession, raw = extracted

        pattern = self.find_matching_pattern(accession)
        if pattern is None:
            return self._finish_failed(result, NOT_RECOGNIZED_ERROR, start)

        result.valid = True
        result.normalized_id = accession
        self.populate_result(result, pattern)

        format_ok, issues = validate_accession_format(raw)
        if not format_ok:
            result.warnings.extend(issues)

        primary, alternates = self.generate_urls(accession, pattern)
        result.primary_url = primary
        result.alternate_urls = alternates

        http_result = None
        if primary:
            http_result = self.check_http_access(primary, deadline)
            self.add_http_metadata(result, http_result)

        if http_result is not None and not http_result.accessible:
            self._apply_unreachable_policy(result, pattern, http_result)
        else:
            metadata = self.get_metadata(accession, pattern, deadline)
            if metadata:
                self.add_remote_metadata(result, metadata)
            self.add_availability_tags(result, pattern, http_result)
            self.enhance_result(result, pattern, http_result)
            result.confidence = self.calculate_confidence(result, pattern, http_result)
            result.likelihood = self.calculate_likelihood(result, pattern, http_result)

        result.validation_time = time.monotonic() - start
        logger.debug(
            f"{self.name}: {accession} valid={result.valid} "
            f"confidence={result.confidence:.2f}"
        )
        return result

    # ------------------------------------------------------------------
    # Extraction and matching
    # ------------------------------------------------------------------

    def extract_accession(self, value: str) -> Optional[Tuple[str, str]]:
        """
        Find an accession in a bare string, URL or free text.

        Any catalog accession is accepted, but accessions owned by this
        validator win over foreign ones found in the same input.

        Returns:
            (normalized accession, raw token as it appeared) or None
        """
        stripped = value.strip()
        if not stripped:
            return None

        if match_accession(stripped) is not None:
            return normalize_accession(stripped), stripped

        candidates: List[str] = []
        if stripped.lower().startswith(("http://", "https://", "ftp://")):
            candidates.extend(self._url_candidates(stripped))

        for token in extract_accession_from_text(stripped):
            if token not in (normalize_accession(c) for c in candidates):
                candidates.append(_original_case(stripped, token))

        recognised = [c for c in candidates if match_accession(c) is not None]
        if not recognised:
            return None

        for candidate in recognised:
            if self.find_matching_pattern(normalize_accession(candidate)):
                return normalize_accession(candidate), candidate
        return normalize_accession(recognised[0]), recognised[0]

    def _url_candidates(self, value: str) -> List[str]:
        try:
            parsed = urlparse(value)
            query = parse_qs(parsed.query)
        except ValueError:
            return []

        candidates = []
        for param in URL_ID_PARAMS:
            for item in query.get(param, []):
                item = item.strip()
                if item and match_accession(item) is not None:
                    candidates.append(item)

        for part in parsed.path.strip("/").split("/"):
            if part and match_accession(part) is not None:
                candidates.append(part)

        return candidates

    def find_matching_pattern(self, accession: str) -> Optional[AccessionPattern]:
        """Owned pattern matching an already-normalized accession."""
        for pattern in self._patterns:
            if pattern.matches(accession):
                return pattern
        return None

    def is_related_url(self, value: str) -> bool:
        """
        URL heuristic: a known host with a known path marker, or a query
        parameter carrying an owned accession.
        """
        if not self.url_hosts:
            return False
        try:
            parsed = urlparse(value.strip())
            query = parse_qs(parsed.query)
        except ValueError:
            return False

        if (parsed.hostname or "").lower() not in self.url_hosts:
            return False

        path = parsed.path.lower()
        if any(marker in path for marker in self.url_path_markers):
            return True

        for param in self.url_query_params:
            for item in query.get(param, []):
                if self.find_matching_pattern(normalize_accession(item)):
                    return True
        return False

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def populate_result(
        self, result: DomainValidationResult, pattern: AccessionPattern
    ) -> None:
        """Dataset type, archive metadata and type/hierarchy tags."""
        result.dataset_type = _DATASET_TYPES.get(pattern.type, "biological_data")
        result.subtype = pattern.type.value

        result.metadata["accession_type"] = pattern.type.value
        result.metadata["database"] = pattern.database
        result.metadata["pattern_description"] = pattern.description

        database = KNOWN_DATABASES.get(pattern.database)
        if database is not None:
            result.metadata["database_full_name"] = database.full_name
            result.metadata["database_url"] = database.url
            result.metadata["database_region"] = database.region

        result.add_tag(pattern.database)
        result.add_tag(*_TYPE_TAGS.get(pattern.type, ()))
        for level in get_accession_hierarchy(pattern.type):
            result.add_tag(_HIERARCHY_TAGS.get(level, ""))

    def add_hierarchy_metadata(
        self, result: DomainValidationResult, pattern: AccessionPattern
    ) -> None:
        hierarchy = get_accession_hierarchy(pattern.type)
        if len(hierarchy) > 1:
            result.metadata["hierarchical_level"] = (
                f"{len(hierarchy)} of {len(hierarchy)}"
            )
            result.metadata["hierarchy"] = " > ".join(t.value for t in hierarchy)

    # ------------------------------------------------------------------
    # URL synthesis (generic fallback)
    # ------------------------------------------------------------------

    def generate_urls(
        self, accession: str, pattern: AccessionPattern
    ) -> Tuple[str, List[str]]:
        """
        Generic primary/alternate URLs keyed on the owning archive.

        Families override this for the types they know better and fall back
        here for everything else.
        """
        database = pattern.database
        acc_type = pattern.type

        if database == "sra":
            if acc_type == AccessionType.RUN_SRA:
                return f"{NCBI_SRA_URL}/{accession}", [
                    ENA_VIEW_URL.format(accession),
                    f"https://trace.ncbi.nlm.nih.gov/Traces/sra/?run={accession}",
                ]
            return f"{NCBI_SRA_URL}?term={accession}", [ENA_VIEW_URL.format(accession)]

        if database == "ena":
            return ENA_VIEW_URL.format(accession), [
                "https://www.ebi.ac.uk/ena/portal/api/filereport"
                f"?accession={accession}&result=read_run&fields=all"
            ]

        if database == "ddbj":
            return f"https://ddbj.nig.ac.jp/resource/sra-run/{accession}", []

        if database == "gsa":
            if acc_type == AccessionType.BIOSAMPLE_GSA:
                return f"https://ngdc.cncb.ac.cn/biosample/browse/{accession}", []
            return f"https://ngdc.cncb.ac.cn/gsa/browse/{accession}", []

        if database == "geo":
            return f"https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc={accession}", []

        if database == "biosample":
            biosample_urls = {
                AccessionType.BIOSAMPLE_NCBI: "https://www.ncbi.nlm.nih.gov/biosample/{}",
                AccessionType.BIOSAMPLE_EBI: "https://www.ebi.ac.uk/biosamples/samples/{}",
                AccessionType.BIOSAMPLE_DDBJ: "https://ddbj.nig.ac.jp/resource/biosample/{}",
                AccessionType.BIOSAMPLE_GSA: "https://ngdc.cncb.ac.cn/biosample/browse/{}",
            }
            template = biosample_urls.get(acc_type)
            return (template.format(accession) if template else ""), []

        if database == "bioproject":
            alternates = [f"{NCBI_SRA_URL}?term={accession}"]
            if accession.startswith("PRJEB"):
                alternates.append(ENA_VIEW_URL.format(accession))
            elif accession.startswith("PRJDB"):
                alternates.append(
                    f"https://ddbj.nig.ac.jp/resource/bioproject/{accession}"
                )
            return f"https://www.ncbi.nlm.nih.gov/bioproject/{accession}", alternates

        return "", []

    # ------------------------------------------------------------------
    # Liveness probe
    # ------------------------------------------------------------------

    def check_http_access(
        self, url: str, deadline: Optional[float] = None
    ) -> HTTPValidationResult:
        """
        HEAD the URL; 2xx and 3xx count as accessible.

        Never raises: transport errors and expired deadlines come back as an
        inaccessible result carrying the error text.
        """
        start = time.monotonic()

        timeout = remaining_timeout(self.timeout, deadline)
        if timeout is None:
            return HTTPValidationResult(url=url, error=DEADLINE_EXCEEDED)

        try:
            response = self.session.head(url, timeout=timeout, allow_redirects=True)
        except requests.exceptions.RequestException as e:
            logger.debug(f"Liveness probe failed for {url}: {e}")
            return HTTPValidationResult(
                url=url, error=str(e), response_time=time.monotonic() - start
            )

        try:
            content_length = int(response.headers.get("Content-Length", 0))
        except ValueError:
            content_length = 0

        headers = {
            header: response.headers[header]
            for header in RELEVANT_HEADERS
            if response.headers.get(header)
        }

        accessible = 200 <= response.status_code < 400
        logger.debug(f"Liveness probe {url} -> HTTP {response.status_code}")

        return HTTPValidationResult(
            url=url,
            accessible=accessible,
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type", ""),
            content_length=content_length,
            last_modified=response.headers.get("Last-Modified", ""),
            headers=headers,
            error=None if accessible else f"HTTP {response.status_code}",
            response_time=time.monotonic() - start,
        )

    def add_http_metadata(
        self, result: DomainValidationResult, http_result: HTTPValidationResult
    ) -> None:
        if http_result.accessible:
            result.metadata["http_status"] = str(http_result.status_code)
            result.metadata["content_type"] = http_result.content_type
            if http_result.last_modified:
                result.metadata["last_modified"] = http_result.last_modified
            if http_result.content_length > 0:
                result.metadata["content_length"] = str(http_result.content_length)
        else:
            result.add_warning(f"HTTP access failed: {http_result.error}")

    def _apply_unreachable_policy(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: HTTPValidationResult,
    ) -> None:
        # Only an actual HTTP answer can invalidate; transport failures and
        # expired deadlines keep the syntactic result.
        if self.treat_unreachable_as_invalid and http_result.status_code:
            result.valid = False
            result.error = f"accession not accessible (HTTP {http_result.status_code})"
            result.confidence = 0.0
            result.likelihood = 0.0
            return

        self.add_availability_tags(result, pattern, http_result)
        if self.unreachable_confidence is not None:
            result.confidence = self.unreachable_confidence
        else:
            result.confidence = self.calculate_confidence(result, pattern, http_result)
        result.likelihood = self.calculate_likelihood(result, pattern, http_result)

    def add_availability_tags(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> None:
        if not result.valid:
            return
        data_level = is_data_level(pattern.type)
        if http_result is not None and http_result.accessible:
            result.add_tag("data_available" if data_level else "metadata_available")
        else:
            result.add_tag("data_unavailable" if data_level else "metadata_unavailable")

    # ------------------------------------------------------------------
    # Remote metadata
    # ------------------------------------------------------------------

    def get_metadata(
        self,
        accession: str,
        pattern: AccessionPattern,
        deadline: Optional[float] = None,
    ) -> Optional[Dict[str, str]]:
        """
        Cached best-effort metadata lookup.

        Returns None when disabled, unsupported or failed; never raises.
        """
        cached = self._cache.get(accession)
        if cached is not None:
            logger.debug(f"Metadata cache hit: {accession}")
            return cached

        if not self.fetch_metadata:
            return None

        metadata = self.fetch_remote_metadata(accession, pattern, deadline)
        if metadata:
            self._cache.set(accession, metadata)
        return metadata

    def fetch_remote_metadata(
        self,
        accession: str,
        pattern: AccessionPattern,
        deadline: Optional[float] = None,
    ) -> Optional[Dict[str, str]]:
        """Family-specific metadata lookup; none by default."""
        return None

    def _http_get(
        self, url: str, deadline: Optional[float], accept: str
    ) -> Optional[requests.Response]:
        """GET for metadata lookups; None on any failure or non-200 status."""
        timeout = remaining_timeout(self.metadata_timeout, deadline)
        if timeout is None:
            logger.debug(f"Skipping metadata request, {DEADLINE_EXCEEDED}: {url}")
            return None
        try:
            response = self.session.get(
                url, timeout=timeout, headers={"Accept": accept}
            )
        except requests.exceptions.RequestException as e:
            logger.debug(f"Metadata request failed for {url}: {e}")
            return None
        if response.status_code != 200:
            logger.debug(f"Metadata request {url} -> HTTP {response.status_code}")
            return None
        return response

    def add_remote_metadata(
        self, result: DomainValidationResult, metadata: Dict[str, str]
    ) -> None:
        for key, tag_prefix in METADATA_FIELDS:
            value = metadata.get(key)
            if not value:
                continue
            result.metadata[key] = value
            if tag_prefix:
                result.add_tag(f"{tag_prefix}:{value.lower()}")

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def enhance_result(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> None:
        """Family-specific tags and metadata for reachable records."""
        pass

    def calculate_confidence(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> float:
        """
        Base confidence formula.

        0.6 for a valid accession, +0.25 when reachable (plus content-type and
        HTTP 200 bonuses), +0.10 for data-level types, +0.03-0.05 archive
        reputation. Unreachable records get half the score.
        """
        if not result.valid:
            return 0.0

        score = 0.6
        accessible = http_result is not None and http_result.accessible

        if accessible:
            score += 0.25
            content_type = http_result.content_type.lower()
            if "text/html" in content_type:
                score += 0.10
            elif "application/json" in content_type:
                score += 0.15
            elif "text/xml" in content_type or "application/xml" in content_type:
                score += 0.15
            if http_result.status_code == 200:
                score += 0.05

        if is_data_level(pattern.type):
            score += 0.10

        if pattern.database in ("sra", "ena", "ddbj", "geo"):
            score += 0.05
        elif pattern.database == "gsa":
            score += 0.03

        if http_result is not None and not accessible:
            score *= 0.5

        return min(score, 1.0)

    def calculate_likelihood(
        self,
        result: DomainValidationResult,
        pattern: AccessionPattern,
        http_result: Optional[HTTPValidationResult],
    ) -> float:
        """Likelihood equals confidence unless a family says otherwise."""
        return result.confidence

    def _finish_failed(
        self, result: DomainValidationResult, error: str, start: float
    ) -> DomainValidationResult:
        result.valid = False
        result.error = error
        result.validation_time = time.monotonic() - start
        return result
