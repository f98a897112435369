"""
API Router for stock by warehouse.
"""

from typing import List, Optional
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.core.config import CatalogConfig, get_catalog_config
from app.core.database import get_db
from app.services.catalog_repository import StockRepository
from app.schemas.catalog import BulkStockRequest, ErrorResponse, StockRow

router = APIRouter(tags=["Stock"])


@router.get("/existencias", response_model=List[StockRow])
def get_stock(
    db: Session = Depends(get_db),
    config: CatalogConfig = Depends(get_catalog_config),
):
    """Stock rows of the configured warehouses, ordered by article and warehouse"""
    return StockRepository.get_stock(db, config)


@router.get(
    "/existenciaalm/{clave}",
    response_model=List[StockRow],
    responses={404: {"model": ErrorResponse}},
)
def get_article_stock(clave: str, db: Session = Depends(get_db)):
    """Stock of one article in every warehouse (one row per warehouse)"""
    return StockRepository.get_article_stock(db, clave)


@router.post(
    "/existencias-masiva-filtrada",
    response_model=List[StockRow],
    responses={400: {"model": ErrorResponse}},
)
def get_bulk_stock(
    request: Optional[BulkStockRequest] = Body(None),
    db: Session = Depends(get_db),
    config: CatalogConfig = Depends(get_catalog_config),
):
    """
    Stock for a list of article keys.

    **Body:** `{"claves": ["KEY1", "KEY2"]}`, a non-empty array.
    Only the bulk warehouse subset is returned, ordered by key then warehouse.
    """
    claves = request.claves if request else None
    return StockRepository.get_bulk_stock(db, claves, config)
