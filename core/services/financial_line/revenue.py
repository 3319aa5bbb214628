from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional

from core.exceptions import NotFoundError, ValidationError
from core.models import RevenueMonth, UnitOfMeasure
from core.services.financial_line.helpers import (
    as_amount,
    exceeds,
    fmt_amount,
    iter_month_starts,
    month_key,
)
from core.services.financial_line.steps import Step3Data

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]

ZERO_REVENUE_PROMPT = (
    "Total planned revenue is 0. Do you want to continue without a revenue plan?"
)


class RevenuePlanGrid:
    """Monthly planned units/revenue between the FL schedule dates."""

    def __init__(
        self,
        *,
        billing_rate: float,
        rate_uom: UnitOfMeasure = UnitOfMeasure.DAY,
        months: Iterable[RevenueMonth] = (),
    ) -> None:
        self._billing_rate = float(billing_rate or 0.0)
        self._rate_uom = rate_uom
        self._months: list[RevenueMonth] = [replace(m) for m in months]
        # every bucket ever shown, so a schedule that briefly inverts does not lose entered units
        self._history: dict[str, RevenueMonth] = {m.month: m for m in self._months}

    @property
    def months(self) -> list[RevenueMonth]:
        return list(self._months)

    @property
    def billing_rate(self) -> float:
        return self._billing_rate

    @property
    def rate_uom(self) -> UnitOfMeasure:
        return self._rate_uom

    def unit_label(self) -> str:
        return self._rate_uom.plural_label

    def set_billing_rate(self, billing_rate: float, rate_uom: Optional[UnitOfMeasure] = None) -> None:
        self._billing_rate = float(billing_rate or 0.0)
        if rate_uom is not None:
            self._rate_uom = rate_uom
        for bucket in self._months:
            bucket.planned_revenue = bucket.planned_units * self._billing_rate

    def generate_buckets(self, schedule_start: Optional[date], schedule_finish: Optional[date]) -> list[RevenueMonth]:
        if schedule_start is None or schedule_finish is None:
            self._months = []
            return []
        starts = iter_month_starts(schedule_start, schedule_finish)
        if not starts:
            logger.info("Revenue grid: schedule start %s after finish %s, no buckets", schedule_start, schedule_finish)
        months: list[RevenueMonth] = []
        for first_day in starts:
            key = month_key(first_day)
            existing = self._history.get(key)
            if existing is None:
                existing = RevenueMonth(month=key)
                self._history[key] = existing
            months.append(existing)
        in_range = {m.month for m in months}
        self._history = {
            key: bucket
            for key, bucket in self._history.items()
            if key in in_range or bucket.has_user_data
        }
        self._months = months
        return self.months

    def update_planned_units(self, index: int, units) -> RevenueMonth:
        if not 0 <= index < len(self._months):
            raise NotFoundError(f"Revenue month {index} does not exist.", code="REVENUE_MONTH_NOT_FOUND")
        amount = as_amount(units, field="planned_units")
        if amount < 0:
            raise ValidationError("Planned units cannot be negative.", code="NEGATIVE_AMOUNT", field="planned_units")
        bucket = self._months[index]
        bucket.planned_units = amount
        bucket.planned_revenue = amount * self._billing_rate
        return bucket

    def total(self) -> float:
        return sum(m.planned_revenue for m in self._months)

    def total_units(self) -> float:
        return sum(m.planned_units for m in self._months)

    def remaining(self, total_funding: float) -> float:
        return float(total_funding) - self.total()

    def validate(self, total_funding: float, confirm: Optional[ConfirmCallback] = None) -> Step3Data:
        total = self.total()
        if exceeds(total, total_funding):
            raise ValidationError(
                f"Total planned revenue ({fmt_amount(total)}) exceeds total funding "
                f"({fmt_amount(total_funding)}) by {fmt_amount(total - total_funding)}.",
                code="REVENUE_EXCEEDS_FUNDING",
            )
        if total == 0:
            accepted = bool(confirm(ZERO_REVENUE_PROMPT)) if confirm is not None else False
            if not accepted:
                raise ValidationError(
                    "Planned revenue is 0. Enter a revenue plan or confirm to continue.",
                    code="REVENUE_PLAN_UNCONFIRMED",
                )
            logger.info("Revenue grid: zero planned revenue accepted by user")
        return Step3Data(
            revenue_planning=tuple(replace(m) for m in self._months),
            total_planned_revenue=total,
        )


__all__ = ["RevenuePlanGrid", "ConfirmCallback", "ZERO_REVENUE_PROMPT"]
