from __future__ import annotations

from datetime import date

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.services.financial_line import MilestoneSchedule

START = date(2026, 1, 1)
FINISH = date(2026, 6, 30)


def _schedule(*rows: tuple[str, date, float]) -> MilestoneSchedule:
    schedule = MilestoneSchedule()
    for idx, (name, due, amount) in enumerate(rows):
        schedule.add_milestone()
        schedule.update_field(idx, "milestone_name", name)
        schedule.update_field(idx, "due_date", due)
        schedule.update_field(idx, "amount", amount)
    return schedule


def test_total_within_tolerance_is_accepted():
    schedule = _schedule(("Go-live", date(2026, 6, 1), 9_999.995))
    data = schedule.validate(10_000.0, START, FINISH)
    assert len(data.payment_milestones) == 1


def test_total_one_cent_off_is_accepted():
    schedule = _schedule(
        ("Kickoff", date(2026, 2, 1), 5_000.0),
        ("Go-live", date(2026, 6, 1), 4_999.99),
    )
    assert schedule.is_balanced(10_000.0)
    data = schedule.validate(10_000.0, START, FINISH)
    assert len(data.payment_milestones) == 2


def test_total_outside_tolerance_is_rejected():
    schedule = _schedule(("Go-live", date(2026, 6, 1), 9_999.98))
    with pytest.raises(ValidationError) as exc:
        schedule.validate(10_000.0, START, FINISH)
    assert exc.value.code == "MILESTONE_TOTAL_MISMATCH"


def test_at_least_one_milestone_is_required():
    with pytest.raises(ValidationError) as exc:
        MilestoneSchedule().validate(1_000.0, START, FINISH)
    assert exc.value.code == "MILESTONES_REQUIRED"


@pytest.mark.parametrize(
    "row",
    [
        ("   ", date(2026, 2, 1), 1_000.0),
        ("Kickoff", None, 1_000.0),
        ("Kickoff", date(2026, 2, 1), 0.0),
    ],
)
def test_incomplete_milestone_is_rejected(row):
    schedule = _schedule(row)
    with pytest.raises(ValidationError) as exc:
        schedule.validate(1_000.0, START, FINISH)
    assert exc.value.code == "MILESTONE_INVALID"
    assert exc.value.field == "payment_milestones[0]"


def test_due_date_outside_schedule_is_rejected():
    schedule = _schedule(
        ("Kickoff", date(2026, 1, 10), 400.0),
        ("Sign-off", date(2026, 7, 15), 600.0),
    )
    with pytest.raises(ValidationError) as exc:
        schedule.validate(1_000.0, START, FINISH)
    assert exc.value.code == "MILESTONE_DATE_OUT_OF_RANGE"
    assert exc.value.field == "payment_milestones[1].due_date"


def test_sum_is_checked_before_dates():
    schedule = _schedule(("Late", date(2027, 1, 1), 10.0))
    with pytest.raises(ValidationError) as exc:
        schedule.validate(1_000.0, START, FINISH)
    assert exc.value.code == "MILESTONE_TOTAL_MISMATCH"


def test_schedule_boundaries_are_inclusive_and_names_are_trimmed():
    schedule = _schedule(
        ("  Kickoff  ", START, 500.0),
        ("Sign-off", FINISH, 500.0),
    )
    data = schedule.validate(1_000.0, START, FINISH)
    assert [m.milestone_name for m in data.payment_milestones] == ["Kickoff", "Sign-off"]


def test_balance_helpers():
    schedule = _schedule(("Kickoff", date(2026, 2, 1), 250.0))
    assert schedule.total() == pytest.approx(250.0)
    assert schedule.remaining(1_000.0) == pytest.approx(750.0)
    assert not schedule.is_balanced(1_000.0)
    schedule.update_field(0, "amount", 1_000.0)
    assert schedule.is_balanced(1_000.0)


def test_update_and_remove_errors():
    schedule = _schedule(("Kickoff", date(2026, 2, 1), 250.0))
    schedule.update_field(0, "due_date", "2026-03-01")
    assert schedule.milestones[0].due_date == date(2026, 3, 1)
    with pytest.raises(ValidationError) as bad_date:
        schedule.update_field(0, "due_date", "next week")
    assert bad_date.value.code == "INVALID_DATE"
    with pytest.raises(ValidationError) as unknown:
        schedule.update_field(0, "owner", "x")
    assert unknown.value.code == "UNKNOWN_FIELD"
    with pytest.raises(NotFoundError) as missing:
        schedule.remove_milestone(2)
    assert missing.value.code == "MILESTONE_NOT_FOUND"
    schedule.remove_milestone(0)
    assert schedule.milestones == []
