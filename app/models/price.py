"""
Prices by price list.
A product has at most one price per price list (CVE_PRECIO).
"""

from sqlalchemy import Column, String, Integer, Float
from app.core.database import Base, SecondaryBase


class ArticlePrice(Base):
    """Primary store price list entry"""
    __tablename__ = "PRECIO_X_PROD02"

    cve_art = Column("CVE_ART", String(16), primary_key=True)
    cve_precio = Column("CVE_PRECIO", Integer, primary_key=True)  # Price list id
    precio = Column("PRECIO", Float)

    def __repr__(self):
        return f"<ArticlePrice(cve_art='{self.cve_art}', cve_precio={self.cve_precio}, precio={self.precio})>"


class BranchArticlePrice(SecondaryBase):
    """Secondary store price list entry"""
    __tablename__ = "PRECIO_X_PROD03"

    cve_art = Column("CVE_ART", String(16), primary_key=True)
    cve_precio = Column("CVE_PRECIO", Integer, primary_key=True)
    precio = Column("PRECIO", Float)

    def __repr__(self):
        return f"<BranchArticlePrice(cve_art='{self.cve_art}', cve_precio={self.cve_precio}, precio={self.precio})>"
