"""
Shared fixtures.

Both stores are in-memory SQLite databases seeded with a small legacy
catalog; the app's session and config dependencies are overridden to use them.
"""

import logging
import os
from datetime import datetime

# Module-level engines in app.core.database must not need a Firebird driver
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECONDARY_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import CatalogConfig, get_catalog_config
from app.core.database import get_db, get_secondary_db
from app.models import (
    Base,
    SecondaryBase,
    AlternateKey,
    Article,
    ArticleAttributes,
    ArticlePrice,
    BranchArticlePrice,
    BranchWarehouseStock,
    Supplier,
    WarehouseStock,
)
from main import app

logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def seed_primary(session):
    bought = datetime(2024, 5, 17, 0, 0, 0)
    session.add_all([
        Article(cve_art="A001", descr="RETEN 10X20", lin_prod="SELL", uni_med="PZA",
                fch_ultcom=bought, ult_costo=55.5, status="A"),
        Article(cve_art="A002", descr="BALERO 25", lin_prod="BAL", uni_med="PZA",
                fch_ultcom=bought, ult_costo=80.0, status="A"),
        Article(cve_art="A003", descr="ORING 3MM", lin_prod="SELL", uni_med="PZA",
                fch_ultcom=None, ult_costo=1.25, status="A"),
        Article(cve_art="A004", descr="RETEN SIN ALTERNA", lin_prod="SELL", uni_med="PZA",
                fch_ultcom=bought, ult_costo=10.0, status="A"),
        Article(cve_art="A005", descr="JUNTA DESCONTINUADA", lin_prod="VAR", uni_med="PZA",
                fch_ultcom=bought, ult_costo=3.0, status="B"),
    ])
    session.add_all([
        ArticleAttributes(cve_prod="A001", camplib1="10,5", camplib2="20", camplib3="7",
                          camplib5="PASILLO 1", camplib7="", camplib15="SYR-1",
                          camplib21="G2", camplib22="RETENES"),
        ArticleAttributes(cve_prod="A002", camplib1="10,500004", camplib2=None, camplib3="12",
                          camplib5="PASILLO 4", camplib22="baleros"),
        ArticleAttributes(cve_prod="A004", camplib1="10,5", camplib22="RETENES"),
        ArticleAttributes(cve_prod="A005", camplib1=" ", camplib2="1234,56", camplib22="varios "),
    ])
    session.add_all([
        AlternateKey(cve_art="A001", cve_alter="SKF-A001", cve_clpv="1", tipo="P"),
        AlternateKey(cve_art="A001", cve_alter="NTN-A001", cve_clpv="2", tipo="P"),
        AlternateKey(cve_art="A002", cve_alter="SKF-A002", cve_clpv="1", tipo="P"),
        AlternateKey(cve_art="A003", cve_alter="NTN-A003", cve_clpv="2", tipo="P"),
        AlternateKey(cve_art="A004", cve_alter="CLI-A004", cve_clpv="9", tipo="C"),
        AlternateKey(cve_art="A005", cve_alter="SKF-A005", cve_clpv="1", tipo="P"),
    ])
    session.add_all([
        Supplier(clave="1", nombre="SKF MEXICO"),
        Supplier(clave="2", nombre="NTN DISTRIBUCION"),
    ])
    session.add_all([
        WarehouseStock(cve_art="A001", cve_alm=1, exist=5),
        WarehouseStock(cve_art="A001", cve_alm=2, exist=100),
        WarehouseStock(cve_art="A001", cve_alm=6, exist=3),
        WarehouseStock(cve_art="A002", cve_alm=1, exist=2),
    ])
    session.add_all([
        ArticlePrice(cve_art="A001", cve_precio=1, precio=100.0),
        ArticlePrice(cve_art="A001", cve_precio=2, precio=90.0),
        ArticlePrice(cve_art="A003", cve_precio=1, precio=5.0),
    ])
    session.commit()


def seed_secondary(session):
    session.add_all([
        BranchWarehouseStock(cve_art="A001", cve_alm=1, exist=7),
        BranchWarehouseStock(cve_art="A003", cve_alm=2, exist=40),
        BranchArticlePrice(cve_art="A001", cve_precio=3, precio=120.0),
    ])
    session.commit()


@pytest.fixture
def primary_sessionmaker():
    engine = memory_engine()
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as session:
        seed_primary(session)
    yield factory
    engine.dispose()


@pytest.fixture
def secondary_sessionmaker():
    engine = memory_engine()
    SecondaryBase.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as session:
        seed_secondary(session)
    yield factory
    engine.dispose()


@pytest.fixture
def broken_secondary_sessionmaker():
    """A secondary store without any tables: every query fails"""
    engine = memory_engine()
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def catalog_config():
    return CatalogConfig()


def _override(factory):
    def override():
        db = factory()
        try:
            yield db
        finally:
            db.close()
    return override


@pytest.fixture
def db_session(primary_sessionmaker):
    with primary_sessionmaker() as session:
        yield session


@pytest.fixture
def secondary_session(secondary_sessionmaker):
    with secondary_sessionmaker() as session:
        yield session


@pytest.fixture
def client(primary_sessionmaker, secondary_sessionmaker, catalog_config):
    app.dependency_overrides[get_db] = _override(primary_sessionmaker)
    app.dependency_overrides[get_secondary_db] = _override(secondary_sessionmaker)
    app.dependency_overrides[get_catalog_config] = lambda: catalog_config

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def degraded_client(primary_sessionmaker, broken_secondary_sessionmaker, catalog_config):
    """Client whose secondary store is unreachable"""
    app.dependency_overrides[get_db] = _override(primary_sessionmaker)
    app.dependency_overrides[get_secondary_db] = _override(broken_secondary_sessionmaker)
    app.dependency_overrides[get_catalog_config] = lambda: catalog_config

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
