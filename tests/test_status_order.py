import pytest

from dwr_status.core.status_order import (
    build_index,
    build_status_set,
    fallback_status,
    validate_status_order,
)
from dwr_status.utils.config import ConfigurationError


ORDER = ["Estimating", "Job Setup", "Field Work in Progress", "Complete"]


def test_build_index_rank_and_status_at_are_consistent():
    idx = build_index(ORDER)
    for i, status in enumerate(ORDER):
        assert idx.rank(status) == i
        assert idx.status_at(i) == status
    assert idx.last_rank == 3
    assert len(idx) == 4


def test_build_index_misses_return_none():
    idx = build_index(ORDER)
    assert idx.rank("Unknown") is None
    assert idx.status_at(-1) is None
    assert idx.status_at(4) is None
    assert "Complete" in idx
    assert "complete" not in idx


def test_fallback_status_prefers_estimating():
    assert fallback_status(["Lead", "Estimating", "Complete"]) == "Estimating"


def test_fallback_status_first_when_estimating_absent():
    assert fallback_status(["Lead", "Complete"]) == "Lead"
    assert fallback_status([]) is None


def test_build_status_set_contains_fallback():
    assert build_status_set(ORDER) == frozenset(ORDER)
    s = build_status_set(["Lead", "Complete"])
    assert "Lead" in s
    assert "Estimating" not in s


def test_validate_status_order_strips_and_dedupes():
    out = validate_status_order(["  Estimating ", "", "Complete", "Estimating", None])
    assert out == ("Estimating", "Complete")


def test_validate_status_order_empty_is_configuration_error():
    with pytest.raises(ConfigurationError) as e:
        validate_status_order(["", "   "])
    assert "empty" in str(e.value).lower()
