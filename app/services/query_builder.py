"""
Query assembly.

Every catalog statement is a SQLAlchemy Core select built from the legacy
models. The filtered listing is built twice from one predicate list: a COUNT
of distinct article keys and a paginated DATA query, so both see the same
WHERE clause and the same bound values.
"""

from typing import Iterable, List, Optional, Sequence

from sqlalchemy import and_, case, distinct, func, or_, select
from sqlalchemy.sql import Select

from app.core.config import CatalogConfig
from app.models import (
    AlternateKey,
    Article,
    ArticleAttributes,
    ArticlePrice,
    BranchArticlePrice,
    BranchWarehouseStock,
    Supplier,
    WarehouseStock,
)
from app.services.predicates import LIKE_ESCAPE, contains_pattern, where_clauses


def stock_column(warehouse_id: int) -> str:
    """Name of the pivoted stock column for a warehouse"""
    return f"EXIST_{warehouse_id}"


def attribute_columns() -> list:
    """Free attribute fields, labelled with the names the frontend reads"""
    return [
        ArticleAttributes.camplib1.label("DIAM_INT"),
        ArticleAttributes.camplib2.label("DIAM_EXT"),
        ArticleAttributes.camplib3.label("ALTURA"),
        ArticleAttributes.camplib4.label("PERFIL"),
        ArticleAttributes.camplib5.label("UBICACION"),
        ArticleAttributes.camplib7.label("SECCION"),
        ArticleAttributes.camplib15.label("CLA_SYR"),
        ArticleAttributes.camplib16.label("CLA_LC"),
        ArticleAttributes.camplib17.label("SIST_MED"),
        ArticleAttributes.camplib19.label("DESC_ECOMM"),
        ArticleAttributes.camplib21.label("GENERO"),
        ArticleAttributes.camplib22.label("FAMILIA"),
    ]


def article_columns() -> list:
    return [
        Article.cve_art.label("CVE_ART"),
        Article.descr.label("DESCR"),
        Article.uni_med.label("UNI_MED"),
        Article.lin_prod.label("LIN_PROD"),
        Article.fch_ultcom.label("FCH_ULTCOM"),
        Article.ult_costo.label("ULT_COSTO"),
        Article.status.label("STATUS"),
    ]


def stock_pivot_columns(config: CatalogConfig) -> list:
    """MAX(CASE ...) per configured warehouse, NULL defaulted to 0"""
    return [
        func.coalesce(
            func.max(case((WarehouseStock.cve_alm == warehouse_id, WarehouseStock.exist), else_=None)),
            0,
        ).label(stock_column(warehouse_id))
        for warehouse_id in config.warehouses
    ]


def alternate_key_pivot_columns(config: CatalogConfig) -> list:
    """One column per configured supplier holding its alternate code"""
    return [
        func.max(
            case((func.trim(AlternateKey.cve_clpv) == supplier_id, AlternateKey.cve_alter), else_=None)
        ).label(name)
        for name, supplier_id in config.alternate_suppliers.items()
    ]


# ============================================================================
# Filtered product listing
# ============================================================================

def _filtered_from(statement: Select, join_stock_and_price: bool, branch: Optional[str] = None) -> Select:
    """
    Fixed join topology of the filtered listing.

    Alternate keys are an inner join (a provider key is required); attributes,
    price and stock are outer joins so their absence never drops a product.
    """
    statement = statement.select_from(Article).join(
        AlternateKey, AlternateKey.cve_art == Article.cve_art
    ).outerjoin(
        ArticleAttributes, ArticleAttributes.cve_prod == Article.cve_art
    )
    if join_stock_and_price:
        statement = statement.outerjoin(
            ArticlePrice,
            and_(ArticlePrice.cve_art == Article.cve_art, ArticlePrice.cve_precio == int(branch)),
        ).outerjoin(
            WarehouseStock, WarehouseStock.cve_art == Article.cve_art
        )
    return statement


def build_count_query(predicates: List) -> Select:
    """COUNT(DISTINCT article key) over the required joins and predicates"""
    statement = select(func.count(distinct(Article.cve_art)).label("TOTAL"))
    return _filtered_from(statement, join_stock_and_price=False).where(*where_clauses(predicates))


def build_page_query(
    predicates: List,
    branch: str,
    limit: int,
    offset: int,
    config: CatalogConfig,
) -> Select:
    """
    One aggregated row per article for the requested page.

    GROUP BY covers every scalar column; stock, alternate keys and price come
    from conditional aggregates. The price list id is bound in the join, ahead
    of the filter values in the WHERE clause.
    """
    scalars = article_columns() + attribute_columns()
    statement = select(
        *scalars,
        *alternate_key_pivot_columns(config),
        func.max(ArticlePrice.precio).label("PRECIO"),
        *stock_pivot_columns(config),
    )
    statement = _filtered_from(statement, join_stock_and_price=True, branch=branch)
    return (
        statement.where(*where_clauses(predicates))
        .group_by(*[c.element for c in scalars])
        .order_by(Article.cve_art)
        .offset(offset)
        .limit(limit)
    )


# ============================================================================
# Single article and legacy listings
# ============================================================================

def build_detail_query(clave: str, branch: str, config: CatalogConfig) -> Select:
    """Full record for one article: attributes, price for the branch, stock pivot"""
    scalars = article_columns() + attribute_columns()
    return (
        select(
            *scalars,
            func.max(ArticlePrice.precio).label("PRECIO"),
            *stock_pivot_columns(config),
        )
        .select_from(Article)
        .outerjoin(ArticleAttributes, ArticleAttributes.cve_prod == Article.cve_art)
        .outerjoin(
            ArticlePrice,
            and_(ArticlePrice.cve_art == Article.cve_art, ArticlePrice.cve_precio == int(branch)),
        )
        .outerjoin(WarehouseStock, WarehouseStock.cve_art == Article.cve_art)
        .where(Article.cve_art == clave)
        .group_by(*[c.element for c in scalars])
    )


def build_detailed_list_query(branch: str, config: CatalogConfig) -> Select:
    """Active articles with total stock of the configured warehouses and one price"""
    stock = (
        select(WarehouseStock.cve_art.label("CVE_ART"), func.sum(WarehouseStock.exist).label("EXISTENCIA"))
        .where(WarehouseStock.cve_alm.in_(list(config.warehouses)))
        .group_by(WarehouseStock.cve_art)
        .subquery("stock_aggr")
    )
    price = (
        select(ArticlePrice.cve_art.label("CVE_ART"), ArticlePrice.precio.label("PRECIO"))
        .where(ArticlePrice.cve_precio == int(branch))
        .subquery("price_aggr")
    )
    return (
        select(
            *article_columns(),
            func.coalesce(stock.c.EXISTENCIA, 0).label("EXISTENCIA"),
            price.c.PRECIO.label("PRECIO"),
        )
        .select_from(Article)
        .outerjoin(stock, stock.c.CVE_ART == Article.cve_art)
        .outerjoin(price, price.c.CVE_ART == Article.cve_art)
        .where(Article.status == "A")
        .order_by(Article.cve_art)
    )


def build_inventory_query() -> Select:
    return (
        select(
            Article.cve_art.label("CVE_ART"),
            Article.descr.label("DESCR"),
            Article.fch_ultcom.label("FCH_ULTCOM"),
            Article.ult_costo.label("ULT_COSTO"),
            Article.uni_med.label("UNI_MED"),
        )
        .where(Article.status == "A")
        .order_by(Article.cve_art)
    )


def build_price_list_query(branch: str, limit: int, offset: int, secondary: bool = False) -> Select:
    """Prices of one price list, read from whichever store serves it"""
    model = BranchArticlePrice if secondary else ArticlePrice
    return (
        select(model.cve_art.label("CVE_ART"), model.precio.label("PRECIO"))
        .where(model.cve_precio == int(branch))
        .order_by(model.cve_art)
        .offset(offset)
        .limit(limit)
    )


def _stock_rows(model=WarehouseStock) -> Select:
    return select(
        model.cve_art.label("CVE_ART"),
        model.cve_alm.label("CVE_ALM"),
        model.exist.label("EXIST"),
    )


def build_stock_query(warehouse_ids: Iterable[int]) -> Select:
    return (
        _stock_rows()
        .where(WarehouseStock.cve_alm.in_(list(warehouse_ids)))
        .order_by(WarehouseStock.cve_art, WarehouseStock.cve_alm)
    )


def build_article_stock_query(clave: str) -> Select:
    """Every warehouse row for one article"""
    return _stock_rows().where(WarehouseStock.cve_art == clave).order_by(WarehouseStock.cve_alm)


def build_bulk_stock_query(claves: Sequence[str], warehouse_ids: Iterable[int]) -> Select:
    """Stock for exactly the given keys in a fixed warehouse subset"""
    return (
        _stock_rows()
        .where(
            WarehouseStock.cve_art.in_(list(claves)),
            WarehouseStock.cve_alm.in_(list(warehouse_ids)),
        )
        .order_by(WarehouseStock.cve_art, WarehouseStock.cve_alm)
    )


def build_alternate_keys_query(
    config: CatalogConfig,
    term: Optional[str] = None,
    limit: Optional[int] = None,
) -> Select:
    """
    Provider alternate keys joined with supplier name and free attributes.
    A term matches key, description, alternate key or supplier name.
    """
    statement = (
        select(
            Article.cve_art.label("CVE_ART"),
            Article.descr.label("DESCR"),
            Article.uni_med.label("UNI_MED"),
            Article.fch_ultcom.label("FCH_ULTCOM"),
            Article.ult_costo.label("ULT_COSTO"),
            AlternateKey.cve_alter.label("CVE_ALTER"),
            AlternateKey.cve_clpv.label("CVE_CLPV"),
            Supplier.nombre.label("NOMBRE"),
            *attribute_columns(),
        )
        .select_from(Article)
        .join(AlternateKey, AlternateKey.cve_art == Article.cve_art)
        .outerjoin(Supplier, Supplier.clave == AlternateKey.cve_clpv)
        .outerjoin(ArticleAttributes, ArticleAttributes.cve_prod == Article.cve_art)
        .where(AlternateKey.tipo == config.alternate_key_type)
    )
    if term:
        pattern = contains_pattern(term)
        statement = statement.where(
            or_(*[
                func.upper(func.coalesce(column, "")).like(pattern, escape=LIKE_ESCAPE)
                for column in (Article.cve_art, Article.descr, AlternateKey.cve_alter, Supplier.nombre)
            ])
        )
    if limit is not None:
        statement = statement.limit(limit)
    return statement.order_by(Article.cve_art, AlternateKey.cve_alter)


def build_families_query(config: CatalogConfig) -> Select:
    """Distinct non-empty families, minus the denylist (compared uppercase)"""
    family = func.trim(ArticleAttributes.camplib22)
    statement = select(family.label("FAMILIA")).distinct().where(
        ArticleAttributes.camplib22.isnot(None),
        family != "",
    )
    if config.family_denylist:
        denied = [name.strip().upper() for name in config.family_denylist]
        statement = statement.where(func.upper(family).not_in(denied))
    return statement.order_by(family)


# ============================================================================
# Secondary store
# ============================================================================

def build_secondary_stock_query(claves: Sequence[str], warehouse_id: int) -> Select:
    return _stock_rows(BranchWarehouseStock).where(
        BranchWarehouseStock.cve_art.in_(list(claves)),
        BranchWarehouseStock.cve_alm == warehouse_id,
    )


def build_secondary_price_query(claves: Sequence[str], branch: str) -> Select:
    return select(
        BranchArticlePrice.cve_art.label("CVE_ART"),
        BranchArticlePrice.precio.label("PRECIO"),
    ).where(
        BranchArticlePrice.cve_art.in_(list(claves)),
        BranchArticlePrice.cve_precio == int(branch),
    )
