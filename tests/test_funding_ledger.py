from __future__ import annotations

from types import SimpleNamespace

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import (
    FundingAllocation,
    PurchaseOrder,
    PurchaseOrderStatus,
    UnitOfMeasure,
)
from core.services.financial_line import FundingLedger, sum_po_allocations


def _po(po_no: str, amount: float, project_id: str = "p1", **extra) -> PurchaseOrder:
    return PurchaseOrder.create(
        po_no=po_no,
        contract_no=f"CN-{po_no}",
        project_id=project_id,
        po_currency=extra.pop("po_currency", "USD"),
        po_amount=amount,
        **extra,
    )


def _ledger(rate: float = 100.0, allocations=None, pos=None) -> FundingLedger:
    return FundingLedger(
        project_id="p1",
        currency="USD",
        billing_rate=rate,
        rate_uom=UnitOfMeasure.DAY,
        purchase_orders=pos if pos is not None else [_po("PO-1", 10_000.0), _po("PO-2", 2_000.0)],
        allocations=allocations,
    )


def test_new_row_takes_defaults_from_step1():
    ledger = _ledger(rate=120.0)
    row = ledger.add_row()
    assert row.unit_rate == 120.0
    assert row.project_currency == "USD"
    assert row.uom == UnitOfMeasure.DAY
    assert row.po_no == ""


def test_rate_times_units_gives_value_and_po_amount():
    ledger = _ledger()
    ledger.add_row()
    ledger.update_field(0, "unit_rate", 100)
    row = ledger.update_field(0, "funding_units", 5)
    assert row.funding_value_project == pytest.approx(500.0)
    assert row.funding_amount_po_currency == pytest.approx(500.0)


def test_value_entry_derives_units_back():
    ledger = _ledger()
    ledger.add_row()
    ledger.update_field(0, "unit_rate", 100)
    ledger.update_field(0, "funding_units", 5)
    row = ledger.update_field(0, "funding_value_project", 750)
    assert row.funding_units == pytest.approx(7.5)
    assert row.funding_amount_po_currency == pytest.approx(750.0)


def test_value_entry_with_zero_rate_reports_error_and_zeroes_row():
    ledger = _ledger(rate=0.0)
    errors = []
    ledger.calculation_failed.connect(errors.append)
    ledger.add_row()
    ledger.update_field(0, "funding_units", 3)

    row = ledger.update_field(0, "funding_value_project", 500)

    assert row.funding_units == 0.0
    assert row.funding_value_project == 0.0
    assert row.funding_amount_po_currency == 0.0
    assert len(errors) == 1
    assert errors[0].code == "ZERO_UNIT_RATE"


def test_clearing_value_with_zero_rate_is_silent():
    ledger = _ledger(rate=0.0)
    errors = []
    ledger.calculation_failed.connect(errors.append)
    ledger.add_row()
    ledger.update_field(0, "funding_value_project", 0)
    assert errors == []


def test_selecting_po_fills_contract_currency_and_balance():
    ledger = _ledger(allocations={"PO-1": 4_000.0})
    ledger.add_row()
    row = ledger.update_field(0, "po_no", "PO-1")
    assert row.contract_no == "CN-PO-1"
    assert row.po_currency == "USD"
    assert row.available_po_line_in_po == pytest.approx(6_000.0)
    assert row.available_po_line_in_project == pytest.approx(6_000.0)
    assert ledger.available_balance("PO-2") == pytest.approx(2_000.0)


def test_terminal_and_foreign_pos_are_not_selectable():
    pos = [
        _po("PO-1", 1_000.0),
        _po("PO-X", 1_000.0, status=PurchaseOrderStatus.EXPIRED),
        _po("PO-Z", 1_000.0, project_id="other"),
    ]
    ledger = _ledger(pos=pos)
    assert [po.po_no for po in ledger.purchase_orders] == ["PO-1"]
    ledger.add_row()
    with pytest.raises(NotFoundError) as exc:
        ledger.select_po(0, "PO-X")
    assert exc.value.code == "PO_NOT_FOUND"


def test_over_allocation_is_reported_but_not_blocking():
    ledger = _ledger(allocations={"PO-2": 1_500.0})
    ledger.add_row()
    ledger.update_field(0, "po_no", "PO-2")
    ledger.update_field(0, "funding_units", 10)  # 1,000 against 500 available
    assert ledger.over_allocated_rows() == [0]
    data = ledger.validate()
    assert data.total_funding == pytest.approx(1_000.0)


def test_validate_requires_rows():
    with pytest.raises(ValidationError) as exc:
        _ledger().validate()
    assert exc.value.code == "FUNDING_ROWS_REQUIRED"


def test_validate_flags_first_incomplete_row():
    ledger = _ledger()
    ledger.add_row()
    ledger.update_field(0, "po_no", "PO-1")
    ledger.update_field(0, "funding_units", 2)
    ledger.add_row()
    with pytest.raises(ValidationError) as exc:
        ledger.validate()
    assert exc.value.code == "FUNDING_ROW_INVALID"
    assert exc.value.field == "funding[1]"


def test_validate_totals_and_snapshot():
    ledger = _ledger()
    for po_no, units in (("PO-1", 10), ("PO-2", 2.5)):
        ledger.add_row()
        idx = len(ledger.rows) - 1
        ledger.update_field(idx, "po_no", po_no)
        ledger.update_field(idx, "funding_units", units)

    data = ledger.validate()
    assert data.total_funding == pytest.approx(1_250.0)
    assert data.total_units == pytest.approx(12.5)

    ledger.update_field(0, "funding_units", 1)
    assert data.funding[0].funding_units == pytest.approx(10.0)


def test_negative_and_unknown_fields_are_rejected():
    ledger = _ledger()
    ledger.add_row()
    with pytest.raises(ValidationError) as neg:
        ledger.update_field(0, "funding_units", -1)
    assert neg.value.code == "NEGATIVE_AMOUNT"
    with pytest.raises(ValidationError) as unknown:
        ledger.update_field(0, "discount", 1)
    assert unknown.value.code == "UNKNOWN_FIELD"
    with pytest.raises(ValidationError) as nan:
        ledger.update_field(0, "unit_rate", "abc")
    assert nan.value.code == "NOT_A_NUMBER"


def test_remove_row_and_bad_index():
    ledger = _ledger()
    ledger.add_row()
    ledger.add_row()
    ledger.remove_row(0)
    assert len(ledger.rows) == 1
    with pytest.raises(NotFoundError) as exc:
        ledger.remove_row(5)
    assert exc.value.code == "FUNDING_ROW_NOT_FOUND"


def test_sum_po_allocations_excludes_the_line_being_edited():
    def _fl(fl_id: str, *rows: tuple[str, float]):
        funding = [FundingAllocation(po_no=po, funding_amount_po_currency=amt) for po, amt in rows]
        return SimpleNamespace(id=fl_id, funding=funding)

    lines = [
        _fl("a", ("PO-1", 100.0), ("PO-2", 50.0)),
        _fl("b", ("PO-1", 25.0), ("", 999.0)),
    ]
    assert sum_po_allocations(lines) == {"PO-1": 125.0, "PO-2": 50.0}
    assert sum_po_allocations(lines, exclude_fl_id="a") == {"PO-1": 25.0}
