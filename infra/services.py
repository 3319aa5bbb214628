from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.financial_line import FinancialLineService
from core.services.project import ProjectService
from core.services.purchase_order import PurchaseOrderService
from infra.db.repositories import (
    SqlAlchemyFinancialLineRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyPurchaseOrderRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_service: ProjectService
    purchase_order_service: PurchaseOrderService
    financial_line_service: FinancialLineService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "project_service": self.project_service,
            "purchase_order_service": self.purchase_order_service,
            "financial_line_service": self.financial_line_service,
        }


def build_service_graph(session: Session) -> ServiceGraph:
    project_repo = SqlAlchemyProjectRepository(session)
    po_repo = SqlAlchemyPurchaseOrderRepository(session)
    fl_repo = SqlAlchemyFinancialLineRepository(session)

    project_service = ProjectService(session, project_repo)
    purchase_order_service = PurchaseOrderService(session, po_repo, project_repo)
    financial_line_service = FinancialLineService(
        session,
        project_repo=project_repo,
        po_repo=po_repo,
        fl_repo=fl_repo,
    )
    return ServiceGraph(
        session=session,
        project_service=project_service,
        purchase_order_service=purchase_order_service,
        financial_line_service=financial_line_service,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
