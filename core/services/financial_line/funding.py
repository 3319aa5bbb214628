from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable

from core.events.signal import Signal
from core.exceptions import CalculationError, NotFoundError, ValidationError
from core.models import FinancialLine, FundingAllocation, PurchaseOrder, UnitOfMeasure
from core.services.financial_line.helpers import as_amount, exceeds
from core.services.financial_line.steps import Step2Data

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = {
    "unit_rate",
    "funding_units",
    "funding_value_project",
    "funding_amount_po_currency",
}
_TEXT_FIELDS = {"contract_no", "project_currency", "po_currency"}


def sum_po_allocations(
    financial_lines: Iterable[FinancialLine],
    *,
    exclude_fl_id: str | None = None,
) -> dict[str, float]:
    """Amount already consumed per PO (in PO currency) across existing financial lines."""
    allocations: dict[str, float] = {}
    for fl in financial_lines:
        if exclude_fl_id and fl.id == exclude_fl_id:
            continue
        for row in fl.funding or []:
            if not row.po_no:
                continue
            allocations[row.po_no] = allocations.get(row.po_no, 0.0) + float(row.funding_amount_po_currency or 0.0)
    return allocations


def selectable_purchase_orders(purchase_orders: Iterable[PurchaseOrder], project_id: str) -> list[PurchaseOrder]:
    return [
        po
        for po in purchase_orders
        if po.project_id == project_id and not po.status.is_terminal
    ]


class FundingLedger:
    """PO funding rows of one financial line with units <-> value derivation."""

    def __init__(
        self,
        *,
        project_id: str,
        currency: str,
        billing_rate: float,
        rate_uom: UnitOfMeasure,
        purchase_orders: Iterable[PurchaseOrder] = (),
        allocations: dict[str, float] | None = None,
        rows: Iterable[FundingAllocation] = (),
    ) -> None:
        self._project_id = project_id
        self._currency = currency
        self._billing_rate = float(billing_rate or 0.0)
        self._rate_uom = rate_uom
        self._purchase_orders: list[PurchaseOrder] = selectable_purchase_orders(purchase_orders, project_id)
        self._allocations: dict[str, float] = dict(allocations or {})
        self._rows: list[FundingAllocation] = [replace(row) for row in rows]
        self.calculation_failed: Signal[CalculationError] = Signal()

    @property
    def rows(self) -> list[FundingAllocation]:
        return list(self._rows)

    @property
    def purchase_orders(self) -> list[PurchaseOrder]:
        return list(self._purchase_orders)

    def set_defaults(self, *, currency: str, billing_rate: float, rate_uom: UnitOfMeasure) -> None:
        self._currency = currency
        self._billing_rate = float(billing_rate or 0.0)
        self._rate_uom = rate_uom

    def add_row(self) -> FundingAllocation:
        row = FundingAllocation(
            project_currency=self._currency,
            unit_rate=self._billing_rate,
            uom=self._rate_uom,
        )
        self._rows.append(row)
        return row

    def remove_row(self, index: int) -> None:
        self._row(index)
        del self._rows[index]

    def available_balance(self, po_no: str) -> float:
        po = self._find_po(po_no)
        return float(po.po_amount) - self._allocations.get(po.po_no, 0.0)

    def select_po(self, index: int, po_no: str) -> FundingAllocation:
        row = self._row(index)
        po = self._find_po(po_no)
        available = float(po.po_amount) - self._allocations.get(po.po_no, 0.0)
        row.po_no = po.po_no
        row.contract_no = po.contract_no
        row.po_currency = po.po_currency
        row.available_po_line_in_po = available
        row.available_po_line_in_project = available
        logger.debug(
            "PO %s: total=%.2f allocated=%.2f available=%.2f",
            po.po_no,
            po.po_amount,
            self._allocations.get(po.po_no, 0.0),
            available,
        )
        return row

    def update_field(self, index: int, field: str, value: Any) -> FundingAllocation:
        row = self._row(index)
        if field == "po_no":
            return self.select_po(index, str(value or ""))
        if field == "uom":
            row.uom = UnitOfMeasure(value)
            return row
        if field in _TEXT_FIELDS:
            setattr(row, field, str(value or "").strip())
            return row
        if field not in _NUMERIC_FIELDS:
            raise ValidationError(f"Unknown funding field: {field}", code="UNKNOWN_FIELD", field=field)

        amount = as_amount(value, field=field)
        if amount < 0:
            raise ValidationError(f"{field} cannot be negative.", code="NEGATIVE_AMOUNT", field=field)

        if field in ("unit_rate", "funding_units"):
            setattr(row, field, amount)
            row.funding_value_project = row.unit_rate * row.funding_units
            row.funding_amount_po_currency = row.funding_value_project
        elif field == "funding_value_project":
            self._apply_funding_value(index, row, amount)
        else:
            row.funding_amount_po_currency = amount
        return row

    def _apply_funding_value(self, index: int, row: FundingAllocation, value: float) -> None:
        if row.unit_rate > 0:
            row.funding_value_project = value
            row.funding_units = value / row.unit_rate
            row.funding_amount_po_currency = value
            return
        row.funding_value_project = 0.0
        row.funding_units = 0.0
        row.funding_amount_po_currency = 0.0
        if value != 0:
            error = CalculationError(
                "Unit rate must be greater than 0 to calculate funding units.",
                code="ZERO_UNIT_RATE",
                field="funding_value_project",
            )
            logger.info("Funding row %s: rejected value %.2f with zero unit rate", index, value)
            self.calculation_failed.emit(error)

    def total(self) -> float:
        return sum(row.funding_value_project for row in self._rows)

    def total_units(self) -> float:
        return sum(row.funding_units for row in self._rows)

    def over_allocated_rows(self) -> list[int]:
        return [
            idx
            for idx, row in enumerate(self._rows)
            if row.po_no and exceeds(row.funding_amount_po_currency, row.available_po_line_in_po)
        ]

    def validate(self) -> Step2Data:
        if not self._rows:
            raise ValidationError(
                "At least one PO funding allocation is required.",
                code="FUNDING_ROWS_REQUIRED",
            )
        for idx, row in enumerate(self._rows):
            if not row.po_no or row.unit_rate <= 0 or row.funding_value_project <= 0:
                raise ValidationError(
                    "All funding rows must have: PO selected, unit rate > 0, and funding value > 0.",
                    code="FUNDING_ROW_INVALID",
                    field=f"funding[{idx}]",
                )
        return Step2Data(
            funding=tuple(replace(row) for row in self._rows),
            total_funding=self.total(),
            total_units=self.total_units(),
        )

    def _row(self, index: int) -> FundingAllocation:
        if not 0 <= index < len(self._rows):
            raise NotFoundError(f"Funding row {index} does not exist.", code="FUNDING_ROW_NOT_FOUND")
        return self._rows[index]

    def _find_po(self, po_no: str) -> PurchaseOrder:
        for po in self._purchase_orders:
            if po.po_no == po_no:
                return po
        raise NotFoundError(f"Purchase order {po_no!r} is not available for this project.", code="PO_NOT_FOUND")


__all__ = ["FundingLedger", "sum_po_allocations", "selectable_purchase_orders"]
