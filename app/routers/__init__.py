"""
API routers for the application.
"""

from fastapi import APIRouter
from app.routers import products, stock, prices, alternate_keys

api_router = APIRouter()

# Include routers
api_router.include_router(products.router)  # Product detail, listings and families
api_router.include_router(stock.router)  # Stock by warehouse
api_router.include_router(prices.router)  # Price lists
api_router.include_router(alternate_keys.router)  # Provider alternate keys

__all__ = ["api_router", "products", "stock", "prices", "alternate_keys"]
