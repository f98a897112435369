"""
Pydantic schemas for the catalog.
One record type per query shape.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Product Schemas
# ============================================================================

class ArticleFields(BaseModel):
    """Scalar columns shared by the product shapes"""
    CVE_ART: str = Field(..., description="Article key (trimmed)")
    DESCR: Optional[str] = None
    UNI_MED: Optional[str] = None
    FCH_ULTCOM: Optional[datetime] = None
    ULT_COSTO: Optional[float] = None


class AttributeFields(BaseModel):
    """Free attribute fields; absent attribute rows give nulls"""
    DIAM_INT: Optional[str] = None
    DIAM_EXT: Optional[str] = None
    ALTURA: Optional[str] = None
    PERFIL: Optional[str] = None
    UBICACION: Optional[str] = None
    SECCION: Optional[str] = None
    CLA_SYR: Optional[str] = None
    CLA_LC: Optional[str] = None
    SIST_MED: Optional[str] = None
    DESC_ECOMM: Optional[str] = None
    GENERO: Optional[str] = None
    FAMILIA: Optional[str] = None


class ProductDetail(ArticleFields, AttributeFields):
    """Single article with price for the branch and stock by warehouse"""
    LIN_PROD: Optional[str] = None
    STATUS: Optional[str] = None
    PRECIO: Optional[float] = None
    EXISTENCIAS: Dict[str, float] = Field(default_factory=dict, description="Warehouse name -> quantity")
    EXISTENCIA_TOTAL: float = 0


class ProductRecord(ProductDetail):
    """
    Row of the filtered listing.
    Alternate supplier key columns are configurable, so extra fields are kept.
    """
    model_config = ConfigDict(extra="allow")


class DetailedProduct(ArticleFields):
    """Active article with total stock and one price"""
    LIN_PROD: Optional[str] = None
    STATUS: Optional[str] = None
    EXISTENCIA: float = 0
    PRECIO: Optional[float] = None


class InventoryRow(ArticleFields):
    """Base inventory row"""
    pass


# ============================================================================
# Price, Stock and Alternate Key Schemas
# ============================================================================

class PriceRow(BaseModel):
    CVE_ART: str
    PRECIO: Optional[float] = None


class StockRow(BaseModel):
    """One (article, warehouse) stock entry"""
    CVE_ART: str
    CVE_ALM: int
    EXIST: Optional[float] = None


class AlternateKeyRow(ArticleFields, AttributeFields):
    """Provider alternate key joined with supplier name"""
    CVE_ALTER: Optional[str] = None
    CVE_CLPV: Optional[str] = None
    NOMBRE: Optional[str] = None


class FamilyRow(BaseModel):
    FAMILIA: str


class BulkStockRequest(BaseModel):
    """Body of the bulk stock lookup"""
    claves: Optional[List[str]] = Field(None, description="Non-empty list of article keys")


# ============================================================================
# Envelope Schemas
# ============================================================================

class Pagination(BaseModel):
    totalRecords: int
    totalPages: int
    currentPage: int
    limit: int
    offset: int


class ProductPage(BaseModel):
    """Paginated envelope of the filtered listing"""
    data: List[ProductRecord]
    pagination: Pagination


class ErrorResponse(BaseModel):
    error: str
    detalles: Optional[str] = None
