"""
API Router for product endpoints.
Single article detail, the filtered listing and the legacy bare-array listings.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import CatalogConfig, get_catalog_config
from app.core.database import get_db, get_secondary_db
from app.services.catalog_repository import ProductCatalogRepository
from app.schemas.catalog import (
    DetailedProduct,
    ErrorResponse,
    FamilyRow,
    InventoryRow,
    ProductDetail,
    ProductPage,
)

router = APIRouter(tags=["Products"])


# ============================================================================
# PAGINATED ENDPOINTS
# ============================================================================

@router.get("/productos/filtrados", response_model=ProductPage)
def get_filtered_products(
    db: Session = Depends(get_db),
    secondary_db: Session = Depends(get_secondary_db),
    config: CatalogConfig = Depends(get_catalog_config),
    diam_int: Optional[str] = Query(None, description="Inner diameter, comma or dot decimals"),
    diam_ext: Optional[str] = Query(None, description="Outer diameter"),
    altura: Optional[str] = Query(None, description="Height"),
    seccion: Optional[str] = Query(None, description="Section"),
    familia: Optional[str] = Query(None, description="Family (partial match)"),
    ubicacion: Optional[str] = Query(None, description="Placement (partial match)"),
    linea: Optional[str] = Query(None, description="Product line (partial match)"),
    cla_syr: Optional[str] = Query(None, description="SYR classification (partial match)"),
    cla_lc: Optional[str] = Query(None, description="LC classification (partial match)"),
    genero: Optional[str] = Query(None, description="Genre (partial match)"),
    perfil: Optional[str] = Query(None, description="Profile (partial match)"),
    sucursal: Optional[str] = Query(None, description="Branch / price list id (default 1)"),
    limit: Optional[str] = Query(None, description="Page size (default 10)"),
    offset: Optional[str] = Query(None, description="Records to skip (default 0)"),
):
    """
    Filter products by dimensions and attributes, with pagination.

    **Query Parameters:**
    - diam_int, diam_ext, altura, seccion: matched within a small tolerance;
      unparseable values are ignored
    - familia, ubicacion, linea, cla_syr, cla_lc, genero, perfil: case-insensitive partial match
    - sucursal: price list; the secondary branch prices come from the branch store
    - limit / offset: pagination

    Returns `{data, pagination}`.
    """
    params = {
        "diam_int": diam_int,
        "diam_ext": diam_ext,
        "altura": altura,
        "seccion": seccion,
        "familia": familia,
        "ubicacion": ubicacion,
        "linea": linea,
        "cla_syr": cla_syr,
        "cla_lc": cla_lc,
        "genero": genero,
        "perfil": perfil,
        "sucursal": sucursal,
        "limit": limit,
        "offset": offset,
    }
    return ProductCatalogRepository.get_filtered(db, secondary_db, params, config)


# ============================================================================
# SINGLE ARTICLE
# ============================================================================

@router.get(
    "/inventariocompleto/{clave}",
    response_model=ProductDetail,
    responses={404: {"model": ErrorResponse}},
)
def get_product_detail(
    clave: str,
    db: Session = Depends(get_db),
    secondary_db: Session = Depends(get_secondary_db),
    config: CatalogConfig = Depends(get_catalog_config),
    sucursal: Optional[str] = Query(None, description="Branch / price list id (default 1)"),
):
    """
    Get all data of one product: attributes, price and stock by warehouse.
    Used by the product detail page.
    """
    return ProductCatalogRepository.get_detail(db, secondary_db, clave, sucursal, config)


# ============================================================================
# LEGACY LISTINGS (bare arrays)
# ============================================================================

@router.get("/productos-detallado", response_model=List[DetailedProduct])
def get_detailed_products(
    db: Session = Depends(get_db),
    config: CatalogConfig = Depends(get_catalog_config),
    sucursal: Optional[str] = Query(None, description="Branch / price list id (default 1)"),
):
    """Active products with total stock of the configured warehouses and price"""
    return ProductCatalogRepository.get_detailed(db, sucursal, config)


@router.get("/inventario", response_model=List[InventoryRow])
def get_inventory(db: Session = Depends(get_db)):
    """Base inventory of active products"""
    return ProductCatalogRepository.get_inventory(db)


@router.get("/familias", response_model=List[FamilyRow])
def get_families(
    db: Session = Depends(get_db),
    config: CatalogConfig = Depends(get_catalog_config),
):
    """Distinct product families, excluding non-product labels"""
    return ProductCatalogRepository.get_families(db, config)
