import pandas as pd

from dwr_status.core.grouping import compare_entries, group_rows, parse_date, sort_group
from dwr_status.core.rows import IndexedRow


def _entry(index: int, date: str = "", dwr: str = "") -> IndexedRow:
    return IndexedRow(index=index, row={"job_number": "J1", "date": date, "dwrNumber": dwr})


# ============================================================
# parse_date
# ============================================================

def test_parse_date_iso():
    assert parse_date("2024-03-01") == pd.Timestamp("2024-03-01")


def test_parse_date_unparseable_or_blank():
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert parse_date("   ") is None
    assert parse_date(None) is None


def test_parse_date_tz_aware_normalized_to_naive_utc():
    ts = parse_date("2024-03-01T10:00:00+02:00")
    assert ts == pd.Timestamp("2024-03-01 08:00:00")
    assert ts.tzinfo is None


# ============================================================
# group_rows
# ============================================================

def test_group_rows_insertion_order_and_positions():
    rows = [
        {"job_number": "B"},
        {"job_number": "A"},
        {"job_number": "B"},
    ]
    groups = group_rows(rows, "job_number")
    assert list(groups) == ["B", "A"]
    assert [e.index for e in groups["B"]] == [0, 2]
    assert [e.index for e in groups["A"]] == [1]


def test_group_rows_missing_identifier_groups_under_empty_key():
    rows = [{"job_number": ""}, {"other": "x"}, {"job_number": "J1"}]
    groups = group_rows(rows, "job_number")
    assert [e.index for e in groups[""]] == [0, 1]


# ============================================================
# ordering
# ============================================================

def test_sort_group_by_date_first():
    entries = [_entry(0, "2024-01-02", "1"), _entry(1, "2024-01-01", "2")]
    assert [e.index for e in sort_group(entries)] == [1, 0]


def test_sort_group_same_date_falls_back_to_sequence():
    entries = [_entry(0, "2024-01-01", "DWR-2"), _entry(1, "2024-01-01", "DWR-1")]
    assert [e.index for e in sort_group(entries)] == [1, 0]


def test_sort_group_unparseable_date_contributes_no_ordering():
    entries = [_entry(0, "garbage", "B"), _entry(1, "2024-01-01", "A")]
    assert [e.index for e in sort_group(entries)] == [1, 0]


def test_sort_group_full_tie_keeps_input_position():
    entries = [_entry(2, "", "X"), _entry(0, "", "X"), _entry(1, "", "X")]
    assert [e.index for e in sort_group(entries)] == [0, 1, 2]


def test_compare_entries_sign():
    a = _entry(0, "2024-01-01", "1")
    b = _entry(1, "2024-01-05", "0")
    assert compare_entries(a, b) < 0
    assert compare_entries(b, a) > 0
    assert compare_entries(a, a) == 0


def test_parse_date_rejects_clock_relative_words():
    for word in ("now", "today", " Today ", "TOMORROW", "yesterday"):
        assert parse_date(word) is None


def test_sort_group_relative_date_falls_back_to_sequence():
    entries = [_entry(0, "2024-01-05", "DWR-2"), _entry(1, "now", "DWR-1")]
    assert [e.index for e in sort_group(entries)] == [1, 0]


def test_sequence_order_is_codepoint_not_numeric_or_locale():
    # uppercase sorts before lowercase; digits compare as characters
    entries = [_entry(0, "", "dwr-1"), _entry(1, "", "DWR-2"), _entry(2, "", "DWR-10")]
    assert [e.index for e in sort_group(entries)] == [2, 1, 0]
