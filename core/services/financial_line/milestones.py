from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Iterable, Optional

from core.exceptions import NotFoundError, ValidationError
from core.models import MilestoneStatus, PaymentMilestone
from core.services.financial_line.helpers import amounts_match, as_amount, as_date, fmt_amount
from core.services.financial_line.steps import Step4Data


class MilestoneSchedule:
    def __init__(self, milestones: Iterable[PaymentMilestone] = ()) -> None:
        self._milestones: list[PaymentMilestone] = [replace(m) for m in milestones]

    @property
    def milestones(self) -> list[PaymentMilestone]:
        return list(self._milestones)

    def add_milestone(self) -> PaymentMilestone:
        milestone = PaymentMilestone()
        self._milestones.append(milestone)
        return milestone

    def remove_milestone(self, index: int) -> None:
        self._get(index)
        del self._milestones[index]

    def update_field(self, index: int, field: str, value: Any) -> PaymentMilestone:
        milestone = self._get(index)
        if field == "milestone_name":
            milestone.milestone_name = str(value or "")
        elif field == "notes":
            milestone.notes = str(value or "")
        elif field == "due_date":
            milestone.due_date = as_date(value, field=field)
        elif field == "amount":
            milestone.amount = as_amount(value, field=field)
        elif field == "status":
            milestone.status = MilestoneStatus(value)
        else:
            raise ValidationError(f"Unknown milestone field: {field}", code="UNKNOWN_FIELD", field=field)
        return milestone

    def total(self) -> float:
        return sum(m.amount for m in self._milestones)

    def remaining(self, total_funding: float) -> float:
        return float(total_funding) - self.total()

    def is_balanced(self, total_funding: float) -> bool:
        return amounts_match(self.total(), total_funding)

    def validate(
        self,
        total_funding: float,
        schedule_start: Optional[date],
        schedule_finish: Optional[date],
    ) -> Step4Data:
        if not self._milestones:
            raise ValidationError("At least one payment milestone is required.", code="MILESTONES_REQUIRED")

        for idx, m in enumerate(self._milestones):
            if not m.milestone_name.strip() or m.due_date is None or m.amount <= 0:
                raise ValidationError(
                    "All milestones must have a name, due date, and amount greater than 0.",
                    code="MILESTONE_INVALID",
                    field=f"payment_milestones[{idx}]",
                )

        total = self.total()
        if not amounts_match(total, total_funding):
            raise ValidationError(
                f"Total milestone amount ({fmt_amount(total)}) must equal total funding "
                f"({fmt_amount(total_funding)}).",
                code="MILESTONE_TOTAL_MISMATCH",
            )

        for idx, m in enumerate(self._milestones):
            if (schedule_start and m.due_date < schedule_start) or (schedule_finish and m.due_date > schedule_finish):
                raise ValidationError(
                    "All milestone due dates must be within FL schedule start and finish dates.",
                    code="MILESTONE_DATE_OUT_OF_RANGE",
                    field=f"payment_milestones[{idx}].due_date",
                )

        return Step4Data(
            payment_milestones=tuple(
                replace(m, milestone_name=m.milestone_name.strip()) for m in self._milestones
            )
        )

    def _get(self, index: int) -> PaymentMilestone:
        if not 0 <= index < len(self._milestones):
            raise NotFoundError(f"Milestone {index} does not exist.", code="MILESTONE_NOT_FOUND")
        return self._milestones[index]


__all__ = ["MilestoneSchedule"]
