"""
API Router for provider alternate keys.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import CatalogConfig, get_catalog_config
from app.core.database import get_db
from app.services.catalog_repository import AlternateKeyRepository
from app.schemas.catalog import AlternateKeyRow, ErrorResponse

router = APIRouter(prefix="/clavesalternas", tags=["Alternate Keys"])


@router.get("", response_model=List[AlternateKeyRow])
def get_alternate_keys(
    db: Session = Depends(get_db),
    config: CatalogConfig = Depends(get_catalog_config),
):
    """All provider alternate keys with supplier name and free attributes"""
    return AlternateKeyRepository.get_all(db, config)


@router.get(
    "/search",
    response_model=List[AlternateKeyRow],
    responses={404: {"model": ErrorResponse}},
)
def search_alternate_keys(
    db: Session = Depends(get_db),
    config: CatalogConfig = Depends(get_catalog_config),
    query: Optional[str] = Query(None, description="Term matched against key, description, alternate key and supplier"),
):
    """
    Autocomplete search over alternate keys.

    - A term with no matches returns 404 with a message naming the term
    - An empty term returns the first results, or an empty list
    """
    return AlternateKeyRepository.search(db, query, config)
