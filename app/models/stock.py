"""
Stock by warehouse.
MULT02 lives in the primary store, MULT03 in the secondary branch store. They
share the article key but no foreign key relationship exists across stores.
"""

from sqlalchemy import Column, String, Integer, Float
from app.core.database import Base, SecondaryBase


class WarehouseStock(Base):
    """Primary store stock, one row per (article, warehouse)"""
    __tablename__ = "MULT02"

    cve_art = Column("CVE_ART", String(16), primary_key=True)
    cve_alm = Column("CVE_ALM", Integer, primary_key=True)  # Warehouse id
    exist = Column("EXIST", Float)  # Quantity on hand

    def __repr__(self):
        return f"<WarehouseStock(cve_art='{self.cve_art}', cve_alm={self.cve_alm}, exist={self.exist})>"


class BranchWarehouseStock(SecondaryBase):
    """Secondary store stock"""
    __tablename__ = "MULT03"

    cve_art = Column("CVE_ART", String(16), primary_key=True)
    cve_alm = Column("CVE_ALM", Integer, primary_key=True)
    exist = Column("EXIST", Float)

    def __repr__(self):
        return f"<BranchWarehouseStock(cve_art='{self.cve_art}', cve_alm={self.cve_alm}, exist={self.exist})>"
