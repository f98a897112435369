"""
Cross-store reconciliation.

The secondary branch store is read after the primary page is known, with one
batched query for the page's keys, and merged in memory by trimmed article
key. Enrichment is best effort: a failing secondary store leaves every row at
0 stock for its warehouse and the request still succeeds.
"""

import logging
from typing import Any, Dict, List

from app.core.config import CatalogConfig
from app.core.database import StoreGateway
from app.core.exceptions import UpstreamError
from app.services.query_builder import build_secondary_price_query, build_secondary_stock_query
from app.services.stock_pivot import pivot_stock, to_quantity

logger = logging.getLogger(__name__)


def article_key(value: Any) -> str:
    return str(value).strip() if value is not None else ""


class CrossStoreReconciler:
    """Merge secondary store stock (and branch prices) into primary rows"""

    def __init__(self, gateway: StoreGateway, config: CatalogConfig):
        self.gateway = gateway
        self.config = config

    def fetch_stock(self, keys: List[str]) -> Dict[str, float]:
        """Stock per key in the secondary warehouse; empty dict on failure"""
        if not keys:
            return {}
        statement = build_secondary_stock_query(keys, self.config.secondary_warehouse_id)
        try:
            rows = self.gateway.fetch_all(statement)
        except UpstreamError as e:
            logger.warning(f"Secondary store stock unavailable, defaulting to 0: {e.detail or e.message}")
            return {}

        stock: Dict[str, float] = {}
        for row in rows:
            key = article_key(row["CVE_ART"])
            stock[key] = stock.get(key, 0) + to_quantity(row["EXIST"])
        return stock

    def fetch_prices(self, keys: List[str], branch: str) -> Dict[str, Any]:
        """Secondary store prices per key for the branch; empty dict on failure"""
        if not keys:
            return {}
        try:
            rows = self.gateway.fetch_all(build_secondary_price_query(keys, branch))
        except UpstreamError as e:
            logger.warning(f"Secondary store prices unavailable for branch {branch}: {e.detail or e.message}")
            return {}
        return {article_key(row["CVE_ART"]): row["PRECIO"] for row in rows}

    def enrich(self, rows: List[Dict[str, Any]], branch: str) -> List[Dict[str, Any]]:
        """
        Pivot each row's stock and fill in the secondary warehouse figure.

        Rows are returned in their original order with CVE_ART trimmed. When
        the branch is served by the secondary store, PRECIO is taken from it
        (None for keys it does not price).
        """
        keys = [article_key(row["CVE_ART"]) for row in rows]
        stock = self.fetch_stock(keys)
        prices = None
        if branch == self.config.secondary_branch:
            prices = self.fetch_prices(keys, branch)

        enriched = []
        for key, row in zip(keys, rows):
            shaped = pivot_stock(row, self.config, secondary_stock=stock.get(key, 0))
            shaped["CVE_ART"] = key
            if prices is not None:
                shaped["PRECIO"] = prices.get(key)
            enriched.append(shaped)
        return enriched
