"""
Legacy inventory tables.

Primary store tables are declared on Base, the secondary branch store tables
on SecondaryBase. Both are read-only projections; nothing here is written.
"""

from app.core.database import Base, SecondaryBase
from app.models.inventory import Article, ArticleAttributes
from app.models.stock import WarehouseStock, BranchWarehouseStock
from app.models.price import ArticlePrice, BranchArticlePrice
from app.models.supplier import AlternateKey, Supplier

__all__ = [
    "Base",
    "SecondaryBase",
    "Article",
    "ArticleAttributes",
    "WarehouseStock",
    "BranchWarehouseStock",
    "ArticlePrice",
    "BranchArticlePrice",
    "AlternateKey",
    "Supplier",
]
