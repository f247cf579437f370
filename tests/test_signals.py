import re

from dwr_status.core.rows import RowFields
from dwr_status.core.signal_tables import (
    DEFAULT_SIGNAL_TABLES,
    RoleCap,
    SignalTables,
    build_keyword_table,
    unknown_statuses,
)
from dwr_status.core.signals import build_row_text, cap_rank, pick_status_from_signals, score_statuses
from dwr_status.core.status_order import build_index


ORDER = [
    "Estimating",
    "Proposal Sent",
    "Job Setup",
    "Scheduled",
    "Field Work in Progress",
    "Field Work Complete",
    "Processing",
    "Drafting",
    "QA/QC Review",
    "Deliverables Sent",
    "Invoiced",
    "Complete",
]
IDX = build_index(ORDER)


# ============================================================
# build_row_text
# ============================================================

def test_build_row_text_order_and_normalization():
    row = {
        "description": "Site\nsurvey   today",
        "role": "Field  Technician",
        "job_status_at_dwr_create": "Pending",
        "notes": "",
        "job_number": "J-1",
    }
    assert build_row_text(row) == "pending field technician site survey today"


def test_build_row_text_skips_absent_and_supplementary_optional():
    row = {"description": "Scan", "notes": "Extra"}
    assert build_row_text(row) == "scan extra"
    assert build_row_text(row, RowFields(supplementary=None)) == "scan"


# ============================================================
# score_statuses
# ============================================================

def test_score_statuses_initializes_every_status():
    scores = score_statuses({}, IDX)
    assert list(scores) == ORDER
    assert all(v == 0 for v in scores.values())


def test_score_statuses_keyword_points():
    scores = score_statuses({"description": "site survey and field scan today"}, IDX)
    assert scores["Field Work in Progress"] == 3.0
    assert sum(scores.values()) == 3.0


def test_score_statuses_role_affinity_weight_dominates_keyword():
    scores = score_statuses({"role": "Field Technician", "description": "drafting"}, IDX)
    assert scores["Field Work in Progress"] == 3.0
    assert scores["Drafting"] == 1.0


def test_score_statuses_role_pattern_is_case_insensitive():
    scores = score_statuses({"role": "FIELD TECHNICIAN"}, IDX)
    assert scores["Field Work in Progress"] == 3.0


def test_score_statuses_ignores_statuses_missing_from_order():
    idx = build_index(["Estimating", "Complete"])
    scores = score_statuses({"description": "site survey", "role": "Field Technician"}, idx)
    assert scores == {"Estimating": 0.0, "Complete": 0.0}


# ============================================================
# cap_rank
# ============================================================

def test_cap_rank_unbounded_without_matching_role():
    assert cap_rank({"role": "Office"}, IDX, 0) == IDX.last_rank
    assert cap_rank({}, IDX, 3) == IDX.last_rank


def test_cap_rank_field_role():
    assert cap_rank({"role": "Field Technician"}, IDX, 0) == IDX.rank("Field Work in Progress")


def test_cap_rank_most_restrictive_wins():
    row = {"role": "Field Surveyor / CAD drafter"}
    assert cap_rank(row, IDX, 0) == IDX.rank("Field Work in Progress")


def test_cap_rank_never_below_floor():
    assert cap_rank({"role": "Field Technician"}, IDX, 9) == 9


def test_cap_rank_ignores_cap_status_missing_from_order():
    idx = build_index(["Estimating", "Complete"])
    assert cap_rank({"role": "Field Technician"}, idx, 0) == 1


def test_cap_rank_custom_tables():
    tables = SignalTables(role_caps=(RoleCap(re.compile("intern", re.IGNORECASE), "Job Setup"),))
    assert cap_rank({"role": "Summer Intern"}, IDX, 0, tables=tables) == IDX.rank("Job Setup")


# ============================================================
# pick_status_from_signals
# ============================================================

def test_pick_prefers_highest_score():
    scores = {"Estimating": 0.0, "Job Setup": 2.0, "Scheduled": 1.0}
    assert pick_status_from_signals(scores, IDX, 0, IDX.last_rank) == IDX.rank("Job Setup")


def test_pick_tie_prefers_higher_rank():
    scores = {"Job Setup": 1.0, "Scheduled": 1.0}
    assert pick_status_from_signals(scores, IDX, 0, IDX.last_rank) == IDX.rank("Scheduled")


def test_pick_respects_floor_and_cap_window():
    scores = {"Estimating": 5.0, "Scheduled": 1.0, "Complete": 9.0}
    floor = IDX.rank("Job Setup")
    cap = IDX.rank("Drafting")
    assert pick_status_from_signals(scores, IDX, floor, cap) == IDX.rank("Scheduled")


def test_pick_none_without_positive_scores():
    scores = {"Scheduled": 0.0, "Complete": -1.0}
    assert pick_status_from_signals(scores, IDX, 0, IDX.last_rank) is None


# ============================================================
# tables
# ============================================================

def test_default_tables_only_reference_default_order():
    assert unknown_statuses(DEFAULT_SIGNAL_TABLES, ORDER) == []


def test_unknown_statuses_reports_missing_names():
    tables = SignalTables(keywords=build_keyword_table({"Archived": [r"\barchive"]}))
    assert unknown_statuses(tables, ORDER) == ["Archived"]
