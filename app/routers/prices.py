"""
API Router for price lists.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import CatalogConfig, get_catalog_config
from app.core.database import get_db, get_secondary_db
from app.services.catalog_repository import PriceRepository
from app.schemas.catalog import PriceRow

router = APIRouter(tags=["Prices"])


@router.get("/precios", response_model=List[PriceRow])
def get_prices(
    db: Session = Depends(get_db),
    secondary_db: Session = Depends(get_secondary_db),
    config: CatalogConfig = Depends(get_catalog_config),
    sucursal: Optional[str] = Query(None, description="Branch / price list id (default 1)"),
    limit: Optional[str] = Query(None, description="Maximum records (default 1000)"),
    offset: Optional[str] = Query(None, description="Records to skip"),
):
    """
    Get the prices of one price list, ordered by article key.

    The secondary branch's price list is read from the branch store.
    """
    return PriceRepository.get_prices(db, secondary_db, sucursal, limit, offset, config)
