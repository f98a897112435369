"""
Supplier and alternate key models.
"""

from sqlalchemy import Column, String
from app.core.database import Base


class AlternateKey(Base):
    """Alternate article code; only TIPO 'P' (provider) rows are used"""
    __tablename__ = "CVES_ALTER02"

    cve_art = Column("CVE_ART", String(16), primary_key=True)
    cve_alter = Column("CVE_ALTER", String(30), primary_key=True)  # Alternate code
    cve_clpv = Column("CVE_CLPV", String(10), primary_key=True)  # Supplier id
    tipo = Column("TIPO", String(1))

    def __repr__(self):
        return f"<AlternateKey(cve_art='{self.cve_art}', cve_alter='{self.cve_alter}', cve_clpv='{self.cve_clpv}')>"


class Supplier(Base):
    """Supplier master"""
    __tablename__ = "PROV02"

    clave = Column("CLAVE", String(10), primary_key=True)
    nombre = Column("NOMBRE", String(120))

    def __repr__(self):
        return f"<Supplier(clave='{self.clave}', nombre='{self.nombre}')>"
