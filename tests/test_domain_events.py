import pytest

from core.events.domain_events import domain_events
from core.events.signal import Signal
from core.exceptions import CalculationError


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.purchase_orders_changed.connect(_handler)
    domain_events.purchase_orders_changed.emit("p-1")
    domain_events.purchase_orders_changed.disconnect(_handler)
    domain_events.purchase_orders_changed.emit("p-2")

    assert seen == ["p-1"]


def test_signal_ignores_duplicate_connections_and_clears_all():
    signal: Signal[int] = Signal()
    seen: list[int] = []

    signal.connect(seen.append)
    signal.connect(seen.append)
    signal.emit(1)
    signal.disconnect_all()
    signal.emit(2)

    assert seen == [1]


def test_signal_drops_listeners_of_deleted_widgets():
    signal: Signal[str] = Signal()
    seen: list[str] = []
    calls = {"deleted": 0}

    def _deleted_label(_payload: str) -> None:
        calls["deleted"] += 1
        raise RuntimeError("Internal C++ object (PySide6.QtWidgets.QLabel) already deleted.")

    signal.connect(_deleted_label)
    signal.connect(seen.append)

    signal.emit("row-1")
    signal.emit("row-2")

    assert calls["deleted"] == 1
    assert seen == ["row-1", "row-2"]


def test_signal_keeps_other_runtime_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)
    with pytest.raises(RuntimeError, match="boom"):
        signal.emit("x")


def test_wizard_relays_ledger_calculation_errors(make_wizard, fill_basic):
    wizard = make_wizard()
    errors: list[CalculationError] = []
    wizard.calculation_failed.connect(errors.append)

    fill_basic(wizard)
    wizard.next()
    ledger = wizard.ledger
    ledger.add_row()
    ledger.update_field(0, "po_no", "PO-1")
    ledger.update_field(0, "unit_rate", 0)
    ledger.update_field(0, "funding_value_project", 500.0)

    assert len(errors) == 1
    assert ledger.rows[0].funding_units == 0
