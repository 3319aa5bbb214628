# tests/conftest.py
import random
from dataclasses import fields
from datetime import date, datetime, timezone

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import (
    ContractType,
    FinancialLine,
    FinancialLineDraft,
    Project,
    PurchaseOrder,
    PurchaseOrderStatus,
)
from core.services.financial_line import FinancialLineWizard
from infra.db.base import Base, build_engine, build_session_factory
from infra.services import build_service_graph


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = build_engine("sqlite:///:memory:")
    TestingSessionLocal = build_session_factory(engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    # Recreate what build_services() does, but with the test session
    return build_service_graph(session).as_dict()


class FakeBackend:
    """In-memory wizard collaborator with hooks for failure scenarios."""

    def __init__(self):
        self.projects: dict[str, Project] = {}
        self.purchase_orders: list[PurchaseOrder] = []
        self.financial_lines: list[FinancialLine] = []
        self.created_drafts: list[FinancialLineDraft] = []
        self.updated: list[tuple[str, FinancialLineDraft]] = []
        self.duplicate_responses = 0
        self.fail_with: Exception | None = None
        self.load_error: Exception | None = None

    def add_project(self, project: Project) -> Project:
        self.projects[project.id] = project
        return project

    def add_po(self, project_id: str, po_no: str, amount: float, **extra) -> PurchaseOrder:
        po = PurchaseOrder.create(
            po_no=po_no,
            contract_no=extra.pop("contract_no", f"CN-{po_no}"),
            project_id=project_id,
            po_currency=extra.pop("po_currency", "USD"),
            po_amount=amount,
            **extra,
        )
        self.purchase_orders.append(po)
        return po

    def get_project(self, project_id):
        if self.load_error is not None:
            raise self.load_error
        project = self.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def list_purchase_orders(self, project_id):
        return [po for po in self.purchase_orders if po.project_id == project_id]

    def list_financial_lines(self, project_id):
        return [fl for fl in self.financial_lines if fl.project_id == project_id]

    def create_financial_line(self, draft):
        self.created_drafts.append(draft)
        if self.fail_with is not None:
            raise self.fail_with
        if self.duplicate_responses > 0:
            self.duplicate_responses -= 1
            raise ValidationError("Duplicate FL number.", code="FL_NO_DUPLICATE", field="fl_no")
        fl = FinancialLine.create(draft)
        self.financial_lines.append(fl)
        return fl

    def update_financial_line(self, fl_id, draft):
        self.updated.append((fl_id, draft))
        if self.fail_with is not None:
            raise self.fail_with
        for idx, existing in enumerate(self.financial_lines):
            if existing.id == fl_id:
                values = {f.name: getattr(draft, f.name) for f in fields(FinancialLineDraft)}
                fl = FinancialLine(
                    id=fl_id,
                    created_at=existing.created_at,
                    updated_at=datetime.now(timezone.utc),
                    **values,
                )
                self.financial_lines[idx] = fl
                return fl
        raise NotFoundError("Financial line not found.", code="FL_NOT_FOUND")


@pytest.fixture
def backend():
    fake = FakeBackend()
    tm = fake.add_project(
        Project(
            id="p-tm",
            project_code="TM-1",
            name="Support Services",
            start_date=date(2026, 1, 1),
            end_date=date(2026, 12, 31),
            legal_entity="RMG Ltd",
            currency="USD",
            billing_type=ContractType.TIME_AND_MATERIALS.value,
            project_manager="Jordan Lee",
        )
    )
    fixed = fake.add_project(
        Project(
            id="p-fb",
            project_code="FB-1",
            name="Platform Migration",
            start_date=date(2026, 1, 1),
            end_date=date(2026, 6, 30),
            legal_entity="RMG GmbH",
            currency="EUR",
            billing_type=ContractType.FIXED_BID.value,
            delivery_manager="Sam Patel",
        )
    )
    fake.add_po(tm.id, "PO-1", 100_000.0)
    fake.add_po(tm.id, "PO-2", 5_000.0)
    fake.add_po(tm.id, "PO-OLD", 9_000.0, status=PurchaseOrderStatus.CLOSED)
    fake.add_po(fixed.id, "PO-FB", 50_000.0, po_currency="EUR")
    return fake


@pytest.fixture
def make_wizard(backend):
    def _make(confirm=None, seed: int = 7):
        return FinancialLineWizard(
            backend,
            confirm=confirm,
            today=lambda: date(2026, 2, 1),
            rng=random.Random(seed),
        )

    return _make


def _fill_basic(wizard: FinancialLineWizard, project_id: str = "p-tm", **overrides):
    """Open the wizard on a project and fill step 1 with valid values."""
    if not wizard.is_open:
        wizard.open(project_id)
    values = dict(
        fl_name="Support FL",
        schedule_start=date(2026, 1, 15),
        schedule_finish=date(2026, 3, 10),
        billing_rate=100.0,
        effort=20.0,
    )
    values.update(overrides)
    return wizard.update_basic(**values)


def _fund(wizard: FinancialLineWizard, po_no: str = "PO-1", units: float = 10.0):
    """Add one funding row on `po_no` at the step 1 rate."""
    ledger = wizard.ledger
    ledger.add_row()
    idx = len(ledger.rows) - 1
    ledger.update_field(idx, "po_no", po_no)
    ledger.update_field(idx, "funding_units", units)
    return ledger.rows[idx]


@pytest.fixture
def fill_basic():
    return _fill_basic


@pytest.fixture
def fund():
    return _fund
