"""
Unit tests for ValidatorRegistry routing and dispatch.

Stub validators keep these tests independent of the accession catalog and
of the network.
"""

from typing import Callable, List, Optional

import pytest

from seqcite.core.exceptions import (
    DuplicateValidatorError,
    NoValidatorError,
    ValidatorNotFoundError,
)
from seqcite.core.identifiers import ACCESSION_PATTERNS
from seqcite.core.schemas import DomainValidationResult, ValidatorPattern
from seqcite.tools.validators import (
    DomainValidator,
    ValidatorRegistry,
    get_accession_stats,
    get_accession_validator_by_name,
    get_supported_accession_types,
    get_validator_registry,
    register_accession_validators,
    reset_validator_registry,
)


class StubValidator(DomainValidator):
    def __init__(
        self,
        name: str,
        priority: int = 50,
        domain: str = "test",
        accepts: Optional[Callable[[str], bool]] = None,
        fail: bool = False,
        confidence: float = 0.5,
    ):
        self._name = name
        self._priority = priority
        self._domain = domain
        self._accepts = accepts or (lambda value: True)
        self._fail = fail
        self._confidence = confidence
        self.calls: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def description(self) -> str:
        return f"stub {self._name}"

    @property
    def priority(self) -> int:
        return self._priority

    def can_validate(self, value: str) -> bool:
        return self._accepts(value)

    def validate(self, value, deadline=None) -> DomainValidationResult:
        self.calls.append(value)
        if self._fail:
            raise RuntimeError("validator exploded")
        return DomainValidationResult(
            valid=True,
            input=value,
            validator_name=self._name,
            domain=self._domain,
            confidence=self._confidence,
            likelihood=self._confidence,
        )

    def get_patterns(self) -> List[ValidatorPattern]:
        return []


@pytest.fixture
def registry():
    return ValidatorRegistry()


# ===============================================================================
# Membership
# ===============================================================================


@pytest.mark.unit
class TestMembership:
    """Register / unregister and the three registry views."""

    def test_register_and_get(self, registry):
        stub = StubValidator("alpha")
        registry.register(stub)
        assert registry.get("alpha") is stub
        assert "alpha" in registry
        assert len(registry) == 1

    def test_duplicate_name_rejected(self, registry):
        registry.register(StubValidator("alpha"))
        with pytest.raises(DuplicateValidatorError) as exc_info:
            registry.register(StubValidator("alpha", priority=99))
        assert str(exc_info.value) == "validator with name 'alpha' already exists"
        assert len(registry) == 1

    def test_get_unknown(self, registry):
        with pytest.raises(ValidatorNotFoundError):
            registry.get("missing")

    def test_unregister_unknown(self, registry):
        with pytest.raises(ValidatorNotFoundError):
            registry.unregister("missing")

    def test_unregister_prunes_domain(self, registry):
        registry.register(StubValidator("alpha", domain="one"))
        registry.register(StubValidator("beta", domain="two"))
        registry.unregister("alpha")

        assert "alpha" not in registry
        assert registry.list_domains() == ["two"]
        assert registry.get_by_domain("one") == []
        assert [v.name for v in registry.get_all()] == ["beta"]

    def test_domain_view_matches_names(self, registry):
        for name, domain in [("a", "x"), ("b", "y"), ("c", "x")]:
            registry.register(StubValidator(name, domain=domain))

        by_domain = {
            domain: sorted(v.name for v in registry.get_by_domain(domain))
            for domain in registry.list_domains()
        }
        assert by_domain == {"x": ["a", "c"], "y": ["b"]}

    def test_sorted_by_priority_then_name(self, registry):
        registry.register(StubValidator("low", priority=10))
        registry.register(StubValidator("zeta", priority=90))
        registry.register(StubValidator("alpha", priority=90))
        assert [v.name for v in registry.get_all()] == ["alpha", "zeta", "low"]

    def test_list_validators(self, registry):
        registry.register(StubValidator("alpha", priority=70))
        infos = registry.list_validators()
        assert infos[0].name == "alpha"
        assert infos[0].priority == 70
        assert infos[0].description == "stub alpha"


# ===============================================================================
# Dispatch
# ===============================================================================


@pytest.mark.unit
class TestDispatch:
    """validate_with_best / validate_with_all."""

    def test_find_validators_filters_and_orders(self, registry):
        registry.register(StubValidator("never", priority=99, accepts=lambda v: False))
        registry.register(StubValidator("low", priority=10))
        registry.register(StubValidator("high", priority=80))
        assert [v.name for v in registry.find_validators("x")] == ["high", "low"]

    def test_best_is_first_candidate(self, registry):
        high = StubValidator("high", priority=80, confidence=0.1)
        low = StubValidator("low", priority=10, confidence=0.9)
        registry.register(low)
        registry.register(high)

        result = registry.validate_with_best("x")
        assert result.validator_name == "high"
        assert low.calls == []

    def test_no_validator(self, registry):
        registry.register(StubValidator("never", accepts=lambda v: False))
        with pytest.raises(NoValidatorError) as exc_info:
            registry.validate_with_best("INVALID123")
        assert str(exc_info.value) == "no validator found for input: INVALID123"

        with pytest.raises(NoValidatorError):
            registry.validate_with_all("INVALID123")

    def test_validate_with_all_converts_exceptions(self, registry):
        registry.register(StubValidator("broken", priority=90, fail=True))
        registry.register(StubValidator("working", priority=10))

        results = registry.validate_with_all("x")

        assert [r.validator_name for r in results] == ["broken", "working"]
        assert results[0].valid is False
        assert results[0].error == "validator exploded"
        assert results[1].valid is True

    def test_deadline_forwarded(self, registry, mocker):
        stub = StubValidator("alpha")
        spy = mocker.spy(stub, "validate")
        registry.register(stub)

        registry.validate_with_best("x", deadline=123.0)
        spy.assert_called_once_with("x", deadline=123.0)


# ===============================================================================
# Process-wide registry
# ===============================================================================


@pytest.mark.unit
class TestDefaultRegistry:
    """get_validator_registry singleton."""

    def test_singleton_has_default_validators(self):
        registry = get_validator_registry()
        assert registry is get_validator_registry()
        assert [v.name for v in registry.get_all()] == ["sra", "geo", "gsa"]
        assert registry.list_domains() == ["bioinformatics"]

    def test_reset(self):
        first = get_validator_registry()
        reset_validator_registry()
        assert get_validator_registry() is not first


@pytest.mark.unit
class TestPackageHelpers:
    """Module-level helper functions."""

    def test_validator_by_name(self):
        validator = get_accession_validator_by_name("gsa", fetch_metadata=False)
        assert validator.name == "gsa"
        assert get_accession_validator_by_name("nope") is None

    def test_register_twice_fails(self):
        registry = ValidatorRegistry()
        register_accession_validators(registry, fetch_metadata=False)
        with pytest.raises(DuplicateValidatorError):
            register_accession_validators(registry, fetch_metadata=False)

    def test_every_catalog_type_has_a_validator(self):
        supported = get_supported_accession_types()
        assert len(supported) == len(set(supported))
        assert set(supported) == {p.type for p in ACCESSION_PATTERNS}

    def test_stats(self):
        stats = get_accession_stats()
        assert stats["total_patterns"] == len(ACCESSION_PATTERNS)
        assert stats["validators_count"] == 3
        assert stats["supported_databases"] == [
            "bioproject",
            "biosample",
            "geo",
            "gsa",
            "sra",
        ]
        assert stats["databases"]["geo"] == 5
