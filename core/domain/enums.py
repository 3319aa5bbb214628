from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ContractType(str, Enum):
    TIME_AND_MATERIALS = "T&M"
    FIXED_BID = "Fixed Bid"
    FIXED_MONTHLY = "Fixed Monthly"
    LICENSE = "License"

    @property
    def requires_milestones(self) -> bool:
        return self is not ContractType.TIME_AND_MATERIALS


class LocationType(str, Enum):
    ONSITE = "Onsite"
    OFFSHORE = "Offshore"
    HYBRID = "Hybrid"


class UnitOfMeasure(str, Enum):
    HOUR = "Hr"
    DAY = "Day"
    MONTH = "Month"

    @property
    def plural_label(self) -> str:
        return {
            UnitOfMeasure.HOUR: "Hours",
            UnitOfMeasure.DAY: "Days",
            UnitOfMeasure.MONTH: "Months",
        }[self]


class FinancialLineStatus(str, Enum):
    DRAFT = "Draft"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    CLOSED = "Closed"
    ARCHIVED = "Archived"


class PurchaseOrderStatus(str, Enum):
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    CLOSED = "Closed"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (
            PurchaseOrderStatus.CLOSED,
            PurchaseOrderStatus.EXPIRED,
            PurchaseOrderStatus.CANCELLED,
        )


class MilestoneStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"


__all__ = [
    "ProjectStatus",
    "ContractType",
    "LocationType",
    "UnitOfMeasure",
    "FinancialLineStatus",
    "PurchaseOrderStatus",
    "MilestoneStatus",
]
