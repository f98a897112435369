"""
Article models.
INVE02 is the product master, INVE_CLIB02 the free-form attribute side table.
"""

from sqlalchemy import Column, String, Float, DateTime
from app.core.database import Base


class Article(Base):
    """Product master row, one per article key"""
    __tablename__ = "INVE02"

    cve_art = Column("CVE_ART", String(16), primary_key=True)  # Article key
    descr = Column("DESCR", String(40))
    lin_prod = Column("LIN_PROD", String(5))  # Product line
    uni_med = Column("UNI_MED", String(10))  # Unit of measure
    fch_ultcom = Column("FCH_ULTCOM", DateTime)  # Last purchase date
    ult_costo = Column("ULT_COSTO", Float)  # Last cost
    status = Column("STATUS", String(1))  # 'A' = active

    def __repr__(self):
        return f"<Article(cve_art='{self.cve_art}', status='{self.status}')>"


class ArticleAttributes(Base):
    """
    Free-form attribute fields (CAMPLIBn).
    Dimensional values are stored as text with comma decimals, blank for null.
    """
    __tablename__ = "INVE_CLIB02"

    cve_prod = Column("CVE_PROD", String(16), primary_key=True)  # Same key as INVE02.CVE_ART
    camplib1 = Column("CAMPLIB1", String(20))  # Inner diameter
    camplib2 = Column("CAMPLIB2", String(20))  # Outer diameter
    camplib3 = Column("CAMPLIB3", String(20))  # Height
    camplib4 = Column("CAMPLIB4", String(30))  # Profile
    camplib5 = Column("CAMPLIB5", String(30))  # Placement
    camplib7 = Column("CAMPLIB7", String(20))  # Section
    camplib15 = Column("CAMPLIB15", String(30))  # SYR classification
    camplib16 = Column("CAMPLIB16", String(30))  # LC classification
    camplib17 = Column("CAMPLIB17", String(30))  # Measurement system
    camplib19 = Column("CAMPLIB19", String(255))  # E-commerce description
    camplib21 = Column("CAMPLIB21", String(30))  # Genre / generation
    camplib22 = Column("CAMPLIB22", String(60))  # Family

    def __repr__(self):
        return f"<ArticleAttributes(cve_prod='{self.cve_prod}', familia='{self.camplib22}')>"
