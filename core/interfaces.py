from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol

from core.models import FinancialLine, FinancialLineDraft, Project, PurchaseOrder


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...


class PurchaseOrderRepository(ABC):
    @abstractmethod
    def add(self, po: PurchaseOrder) -> None: ...

    @abstractmethod
    def get(self, po_id: str) -> Optional[PurchaseOrder]: ...

    @abstractmethod
    def get_by_po_no(self, po_no: str) -> Optional[PurchaseOrder]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[PurchaseOrder]: ...


class FinancialLineRepository(ABC):
    @abstractmethod
    def add(self, fl: FinancialLine) -> None: ...

    @abstractmethod
    def update(self, fl: FinancialLine) -> None: ...

    @abstractmethod
    def delete(self, fl_id: str) -> None: ...

    @abstractmethod
    def get(self, fl_id: str) -> Optional[FinancialLine]: ...

    @abstractmethod
    def get_by_fl_no(self, fl_no: str) -> Optional[FinancialLine]: ...

    @abstractmethod
    def list_all(self) -> List[FinancialLine]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[FinancialLine]: ...

    @abstractmethod
    def count_with_prefix(self, prefix: str) -> int: ...


class FinancialLineBackend(Protocol):
    """Collaborator the wizard reads from and submits to."""

    def get_project(self, project_id: str) -> Project: ...

    def list_purchase_orders(self, project_id: str) -> List[PurchaseOrder]: ...

    def list_financial_lines(self, project_id: str) -> List[FinancialLine]: ...

    def create_financial_line(self, draft: FinancialLineDraft) -> FinancialLine: ...

    def update_financial_line(self, fl_id: str, draft: FinancialLineDraft) -> FinancialLine: ...


__all__ = [
    "ProjectRepository",
    "PurchaseOrderRepository",
    "FinancialLineRepository",
    "FinancialLineBackend",
]
