from __future__ import annotations

from datetime import date

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import UnitOfMeasure
from core.services.financial_line import RevenuePlanGrid
from core.services.financial_line.revenue import ZERO_REVENUE_PROMPT


def _keys(grid: RevenuePlanGrid) -> list[str]:
    return [m.month for m in grid.months]


def test_buckets_cover_every_touched_month():
    grid = RevenuePlanGrid(billing_rate=100.0)
    grid.generate_buckets(date(2026, 1, 15), date(2026, 3, 10))
    assert _keys(grid) == ["2026-01", "2026-02", "2026-03"]


def test_buckets_cross_year_boundary():
    grid = RevenuePlanGrid(billing_rate=100.0)
    grid.generate_buckets(date(2025, 11, 30), date(2026, 1, 1))
    assert _keys(grid) == ["2025-11", "2025-12", "2026-01"]


def test_single_day_schedule_gives_one_bucket():
    grid = RevenuePlanGrid(billing_rate=100.0)
    grid.generate_buckets(date(2026, 5, 31), date(2026, 5, 31))
    assert _keys(grid) == ["2026-05"]


def test_inverted_or_missing_dates_give_no_buckets():
    grid = RevenuePlanGrid(billing_rate=100.0)
    assert grid.generate_buckets(date(2026, 3, 1), date(2026, 1, 1)) == []
    assert grid.generate_buckets(None, date(2026, 1, 1)) == []
    assert grid.months == []


def test_entered_units_survive_schedule_changes():
    grid = RevenuePlanGrid(billing_rate=50.0)
    grid.generate_buckets(date(2026, 1, 1), date(2026, 3, 31))
    grid.update_planned_units(1, 4)

    grid.generate_buckets(date(2026, 3, 1), date(2026, 1, 1))
    assert grid.months == []

    grid.generate_buckets(date(2026, 2, 1), date(2026, 4, 30))
    assert _keys(grid) == ["2026-02", "2026-03", "2026-04"]
    assert grid.months[0].planned_units == 4
    assert grid.months[0].planned_revenue == pytest.approx(200.0)


def test_planned_units_derive_revenue_from_rate():
    grid = RevenuePlanGrid(billing_rate=80.0, rate_uom=UnitOfMeasure.HOUR)
    grid.generate_buckets(date(2026, 1, 1), date(2026, 2, 28))
    bucket = grid.update_planned_units(0, 10)
    assert bucket.planned_revenue == pytest.approx(800.0)
    assert grid.unit_label() == "Hours"

    grid.set_billing_rate(100.0)
    assert grid.total() == pytest.approx(1_000.0)
    assert grid.total_units() == pytest.approx(10.0)
    assert grid.remaining(1_500.0) == pytest.approx(500.0)


def test_update_rejects_bad_index_and_negative_units():
    grid = RevenuePlanGrid(billing_rate=10.0)
    grid.generate_buckets(date(2026, 1, 1), date(2026, 1, 31))
    with pytest.raises(NotFoundError) as missing:
        grid.update_planned_units(3, 1)
    assert missing.value.code == "REVENUE_MONTH_NOT_FOUND"
    with pytest.raises(ValidationError) as negative:
        grid.update_planned_units(0, -2)
    assert negative.value.code == "NEGATIVE_AMOUNT"


def test_validate_rejects_revenue_above_funding():
    grid = RevenuePlanGrid(billing_rate=100.0)
    grid.generate_buckets(date(2026, 1, 1), date(2026, 2, 28))
    grid.update_planned_units(0, 6)
    grid.update_planned_units(1, 6)
    with pytest.raises(ValidationError) as exc:
        grid.validate(1_000.0)
    assert exc.value.code == "REVENUE_EXCEEDS_FUNDING"
    assert "1,200.00" in str(exc.value)
    assert "1,000.00" in str(exc.value)
    assert "200.00" in str(exc.value)


def test_validate_accepts_revenue_equal_to_funding():
    grid = RevenuePlanGrid(billing_rate=100.0)
    grid.generate_buckets(date(2026, 1, 1), date(2026, 1, 31))
    grid.update_planned_units(0, 10)
    data = grid.validate(1_000.0)
    assert data.total_planned_revenue == pytest.approx(1_000.0)
    assert [m.month for m in data.revenue_planning] == ["2026-01"]


def test_zero_revenue_needs_confirmation():
    grid = RevenuePlanGrid(billing_rate=100.0)
    grid.generate_buckets(date(2026, 1, 1), date(2026, 1, 31))

    with pytest.raises(ValidationError) as no_callback:
        grid.validate(1_000.0)
    assert no_callback.value.code == "REVENUE_PLAN_UNCONFIRMED"

    with pytest.raises(ValidationError) as declined:
        grid.validate(1_000.0, confirm=lambda _msg: False)
    assert declined.value.code == "REVENUE_PLAN_UNCONFIRMED"

    prompts = []

    def _accept(message):
        prompts.append(message)
        return True

    data = grid.validate(1_000.0, confirm=_accept)
    assert data.total_planned_revenue == 0
    assert prompts == [ZERO_REVENUE_PROMPT]
