from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FinancialLineStats:
    total: int
    draft: int
    active: int
    completed: int
    cancelled: int
    total_funding: float
    total_planned_revenue: float


__all__ = ["FinancialLineStats"]
