"""Tests for the stock pivot and the cross-store reconciler."""

from app.core.config import CatalogConfig
from app.core.exceptions import UpstreamError
from app.services.reconciler import CrossStoreReconciler
from app.services.stock_pivot import pivot_stock


class FakeGateway:
    """Stands in for the secondary store; records the statements it gets"""

    def __init__(self, rows=None, fail=False):
        self.rows = rows or []
        self.fail = fail
        self.calls = 0

    def fetch_all(self, statement):
        self.calls += 1
        if self.fail:
            raise UpstreamError("Error al consultar la base de datos (secondary).", "connection refused")
        return self.rows


def test_pivot_replaces_raw_columns():
    config = CatalogConfig(warehouses={1: "MATRIZ", 6: "BODEGA"})
    shaped = pivot_stock({"CVE_ART": "A1", "EXIST_1": 4.0, "EXIST_6": None}, config, secondary_stock=2)

    assert shaped["EXISTENCIAS"] == {"MATRIZ": 4.0, "BODEGA": 0, "ROSA_QUEZADA": 2}
    assert shaped["EXISTENCIA_TOTAL"] == 6
    assert "EXIST_1" not in shaped and "EXIST_6" not in shaped


def test_pivot_follows_injected_warehouse_map():
    config = CatalogConfig(warehouses={3: "NORTE"}, secondary_warehouse_name="SUR")
    shaped = pivot_stock({"CVE_ART": "A1"}, config)
    assert shaped["EXISTENCIAS"] == {"NORTE": 0, "SUR": 0}


def test_enrich_merges_by_trimmed_key():
    gateway = FakeGateway(rows=[{"CVE_ART": "A2   ", "EXIST": 9}])
    reconciler = CrossStoreReconciler(gateway, CatalogConfig())

    rows = reconciler.enrich([{"CVE_ART": "A1  "}, {"CVE_ART": "A2"}], branch="1")

    assert [r["CVE_ART"] for r in rows] == ["A1", "A2"]
    assert rows[0]["EXISTENCIAS"]["ROSA_QUEZADA"] == 0
    assert rows[1]["EXISTENCIAS"]["ROSA_QUEZADA"] == 9
    assert gateway.calls == 1


def test_enrich_on_failure_defaults_to_zero():
    reconciler = CrossStoreReconciler(FakeGateway(fail=True), CatalogConfig())
    rows = reconciler.enrich([{"CVE_ART": "A1", "EXIST_1": 3}], branch="1")

    assert rows[0]["EXISTENCIAS"] == {"MATRIZ": 3, "BODEGA": 0, "ROSA_QUEZADA": 0}


def test_enrich_secondary_branch_failure_keeps_null_price():
    gateway = FakeGateway(fail=True)
    reconciler = CrossStoreReconciler(gateway, CatalogConfig(secondary_branch="3"))
    rows = reconciler.enrich([{"CVE_ART": "A1", "PRECIO": 50.0}], branch="3")

    assert rows[0]["PRECIO"] is None
    assert gateway.calls == 2


def test_enrich_empty_page_skips_secondary_store():
    gateway = FakeGateway()
    assert CrossStoreReconciler(gateway, CatalogConfig()).enrich([], branch="1") == []
    assert gateway.calls == 0
