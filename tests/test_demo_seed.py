import pytest

from infra.seed import SEED_ENV_VAR, seed_demo_data, seed_requested
from infra.services import build_service_graph


@pytest.mark.parametrize("value, expected", [("1", True), ("Yes", True), (" on ", True), ("0", False), ("", False)])
def test_seed_requested_reads_env_flag(monkeypatch, value, expected):
    monkeypatch.setenv(SEED_ENV_VAR, value)
    assert seed_requested() is expected


def test_seed_creates_projects_and_purchase_orders_once(session):
    graph = build_service_graph(session)

    assert seed_demo_data(graph) is True
    assert seed_demo_data(graph) is False

    projects = {p.project_code: p for p in graph.project_service.list_projects()}
    assert set(projects) == {"RMG-TM-001", "RMG-FB-002"}
    tm_pos = graph.financial_line_service.list_purchase_orders(projects["RMG-TM-001"].id)
    fb_pos = graph.financial_line_service.list_purchase_orders(projects["RMG-FB-002"].id)
    assert sorted(po.po_no for po in tm_pos) == ["PO-TM-1001", "PO-TM-1002"]
    assert [po.po_currency for po in fb_pos] == ["EUR"]
