"""
Schemas for the application.

Response records keep the legacy uppercase column names; external frontends
read them as-is.
"""

from app.schemas.catalog import (
    ProductRecord,
    ProductDetail,
    DetailedProduct,
    InventoryRow,
    PriceRow,
    StockRow,
    AlternateKeyRow,
    FamilyRow,
    Pagination,
    ProductPage,
    BulkStockRequest,
    ErrorResponse,
)

__all__ = [
    "ProductRecord",
    "ProductDetail",
    "DetailedProduct",
    "InventoryRow",
    "PriceRow",
    "StockRow",
    "AlternateKeyRow",
    "FamilyRow",
    "Pagination",
    "ProductPage",
    "BulkStockRequest",
    "ErrorResponse",
]
