"""
Repository layer for the inventory catalog.
Runs the catalog statements against the stores and shapes the results.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.config import CatalogConfig
from app.core.database import StoreGateway
from app.core.exceptions import InvalidInput, NotFound
from app.services import query_builder
from app.services.filters import normalize_branch, normalize_filters, normalize_text, parse_pagination
from app.services.pagination import paginate
from app.services.predicates import build_predicates
from app.services.reconciler import CrossStoreReconciler, article_key

logger = logging.getLogger(__name__)

FILTERED_DEFAULT_LIMIT = 10
PRICES_DEFAULT_LIMIT = 1000


def _reconciler(secondary_db: Session, config: CatalogConfig) -> CrossStoreReconciler:
    # the reconciler logs secondary store failures itself, at WARNING
    return CrossStoreReconciler(StoreGateway(secondary_db, "secondary", failure_level=logging.DEBUG), config)


def _trim_keys(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    for row in rows:
        row["CVE_ART"] = article_key(row["CVE_ART"])
    return rows


class ProductCatalogRepository:
    """Product listings and single article lookups"""

    @staticmethod
    def get_detail(
        db: Session,
        secondary_db: Session,
        clave: str,
        sucursal: Optional[str],
        config: CatalogConfig,
    ) -> Dict[str, Any]:
        """Full record for one article, enriched with secondary store stock"""
        key = article_key(clave)
        branch = normalize_branch(sucursal, config.default_branch)

        rows = StoreGateway(db).fetch_all(query_builder.build_detail_query(key, branch, config))
        if not rows:
            raise NotFound("Producto no encontrado en la base de datos.")

        reconciler = _reconciler(secondary_db, config)
        return reconciler.enrich(rows[:1], branch)[0]

    @staticmethod
    def get_filtered(
        db: Session,
        secondary_db: Session,
        params: Dict[str, Optional[str]],
        config: CatalogConfig,
    ) -> Dict[str, Any]:
        """
        Filtered, paginated listing.

        COUNT and DATA are built from the same predicate list; the page is then
        reconciled against the secondary store.
        """
        filters = normalize_filters(params)
        branch = normalize_branch(params.get("sucursal"), config.default_branch)
        limit, offset = parse_pagination(params.get("limit"), params.get("offset"), FILTERED_DEFAULT_LIMIT)

        predicates = build_predicates(filters, config)
        gateway = StoreGateway(db)

        total = gateway.fetch_scalar(query_builder.build_count_query(predicates)) or 0
        rows = []
        if total:
            rows = gateway.fetch_all(
                query_builder.build_page_query(predicates, branch, limit, offset, config)
            )
        logger.debug(f"Filtered listing: {total} matches, {len(rows)} on page (limit={limit}, offset={offset})")

        reconciler = _reconciler(secondary_db, config)
        return {
            "data": reconciler.enrich(rows, branch),
            "pagination": paginate(total, limit, offset).model_dump(),
        }

    @staticmethod
    def get_detailed(db: Session, sucursal: Optional[str], config: CatalogConfig) -> List[Dict[str, Any]]:
        """Active articles with total stock and price, primary store only"""
        branch = normalize_branch(sucursal, config.default_branch)
        rows = StoreGateway(db).fetch_all(query_builder.build_detailed_list_query(branch, config))
        return _trim_keys(rows)

    @staticmethod
    def get_inventory(db: Session) -> List[Dict[str, Any]]:
        return _trim_keys(StoreGateway(db).fetch_all(query_builder.build_inventory_query()))

    @staticmethod
    def get_families(db: Session, config: CatalogConfig) -> List[Dict[str, Any]]:
        """Distinct families with the denylist applied in the query"""
        return StoreGateway(db).fetch_all(query_builder.build_families_query(config))


class PriceRepository:
    """Price list reads"""

    @staticmethod
    def get_prices(
        db: Session,
        secondary_db: Session,
        sucursal: Optional[str],
        limit: Optional[str],
        offset: Optional[str],
        config: CatalogConfig,
    ) -> List[Dict[str, Any]]:
        """
        Prices of one price list.
        The secondary branch is read from the secondary store; a failure there
        is an upstream error like any other since the price is the payload.
        """
        branch = normalize_branch(sucursal, config.default_branch)
        page_limit, page_offset = parse_pagination(limit, offset, PRICES_DEFAULT_LIMIT)

        if branch == config.secondary_branch:
            gateway = StoreGateway(secondary_db, "secondary")
            statement = query_builder.build_price_list_query(branch, page_limit, page_offset, secondary=True)
        else:
            gateway = StoreGateway(db)
            statement = query_builder.build_price_list_query(branch, page_limit, page_offset)

        return _trim_keys(gateway.fetch_all(statement))


class StockRepository:
    """Stock by warehouse reads"""

    @staticmethod
    def get_stock(db: Session, config: CatalogConfig) -> List[Dict[str, Any]]:
        rows = StoreGateway(db).fetch_all(query_builder.build_stock_query(config.bulk_warehouses))
        return _trim_keys(rows)

    @staticmethod
    def get_article_stock(db: Session, clave: str) -> List[Dict[str, Any]]:
        """Every warehouse row for one article; NotFound when it has none"""
        rows = StoreGateway(db).fetch_all(query_builder.build_article_stock_query(article_key(clave)))
        if not rows:
            raise NotFound("No se encontraron registros de existencia para la clave de producto especificada.")
        return _trim_keys(rows)

    @staticmethod
    def get_bulk_stock(db: Session, claves: Optional[List[str]], config: CatalogConfig) -> List[Dict[str, Any]]:
        """
        Stock for exactly the requested keys in the bulk warehouse subset.
        InvalidInput unless at least one non-blank key is given.
        """
        keys = [article_key(clave) for clave in claves or []]
        keys = [key for key in keys if key]
        if not keys:
            raise InvalidInput("Se requiere un arreglo no vacío de claves de producto.")

        statement = query_builder.build_bulk_stock_query(keys, config.bulk_warehouses)
        return _trim_keys(StoreGateway(db).fetch_all(statement))


class AlternateKeyRepository:
    """Provider alternate keys"""

    @staticmethod
    def get_all(db: Session, config: CatalogConfig) -> List[Dict[str, Any]]:
        return _trim_keys(StoreGateway(db).fetch_all(query_builder.build_alternate_keys_query(config)))

    @staticmethod
    def search(db: Session, query: Optional[str], config: CatalogConfig) -> List[Dict[str, Any]]:
        """
        Autocomplete search.

        A non-empty term that matches nothing is NotFound; an empty term that
        happens to return nothing is just an empty list.
        """
        term = normalize_text(query) or ""
        statement = query_builder.build_alternate_keys_query(config, term=term, limit=config.search_limit)
        rows = StoreGateway(db).fetch_all(statement)

        if not rows and term:
            logger.info(f"Alternate key search without matches: {term}")
            raise NotFound(f'No se encontraron coincidencias para "{term}".')
        return _trim_keys(rows)
