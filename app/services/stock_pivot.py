"""
Warehouse stock pivot.

Aggregated rows carry one EXIST_<id> column per configured warehouse. These
are folded into a single EXISTENCIAS mapping keyed by warehouse name.
"""

from typing import Any, Dict, Optional

from app.core.config import CatalogConfig
from app.services.query_builder import stock_column


def to_quantity(value: Any) -> float:
    """NULL or missing quantities count as 0"""
    if value is None:
        return 0
    return float(value)


def pivot_stock(row: Dict[str, Any], config: CatalogConfig, secondary_stock: Optional[float] = None) -> Dict[str, Any]:
    """
    Return a copy of row with the raw warehouse columns replaced by EXISTENCIAS.

    The mapping always has one entry per configured warehouse plus the
    secondary store warehouse, so callers never need to test for presence.
    """
    shaped = dict(row)
    stock: Dict[str, float] = {}

    for warehouse_id, name in config.warehouses.items():
        stock[name] = to_quantity(shaped.pop(stock_column(warehouse_id), None))

    stock[config.secondary_warehouse_name] = to_quantity(secondary_stock)

    shaped["EXISTENCIAS"] = stock
    shaped["EXISTENCIA_TOTAL"] = sum(stock.values())
    return shaped
