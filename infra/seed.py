from __future__ import annotations

import logging
import os
from datetime import date

from core.models import ContractType
from infra.services import ServiceGraph

logger = logging.getLogger(__name__)

SEED_ENV_VAR = "RMG_SEED_DEMO"


def seed_requested() -> bool:
    return (os.getenv(SEED_ENV_VAR) or "").strip().lower() in {"1", "true", "yes", "on"}


def seed_demo_data(graph: ServiceGraph) -> bool:
    """Create two demo projects with purchase orders on an empty database."""
    if graph.project_service.list_projects():
        logger.info("Demo seed skipped: projects already exist")
        return False

    year = date.today().year
    tm = graph.project_service.create_project(
        project_code="RMG-TM-001",
        name="Managed Services Support",
        start_date=date(year, 1, 1),
        end_date=date(year, 12, 31),
        legal_entity="RMG Consulting Ltd",
        currency="USD",
        billing_type=ContractType.TIME_AND_MATERIALS.value,
        project_manager="Jordan Lee",
    )
    graph.purchase_order_service.create_purchase_order(
        tm.id, "PO-TM-1001", "CN-7001", 250_000.0, customer_name="Northwind Traders"
    )
    graph.purchase_order_service.create_purchase_order(
        tm.id, "PO-TM-1002", "CN-7001", 80_000.0, customer_name="Northwind Traders"
    )

    fixed = graph.project_service.create_project(
        project_code="RMG-FB-002",
        name="Billing Platform Migration",
        start_date=date(year, 3, 1),
        end_date=date(year + 1, 2, 28),
        legal_entity="RMG Consulting GmbH",
        currency="EUR",
        billing_type=ContractType.FIXED_BID.value,
        delivery_manager="Sam Patel",
    )
    graph.purchase_order_service.create_purchase_order(
        fixed.id, "PO-FB-2001", "CN-8001", 400_000.0, customer_name="Contoso AG"
    )
    logger.info("Demo data seeded: 2 projects, 3 purchase orders")
    return True


__all__ = ["SEED_ENV_VAR", "seed_requested", "seed_demo_data"]
