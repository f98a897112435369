"""Tests for predicate construction and statement assembly."""

import pytest
from sqlalchemy.dialects import sqlite
from sqlalchemy.engine import make_url

from app.core.config import CatalogConfig
from app.services.filters import normalize_filters
from app.services.predicates import (
    RequiredEquals,
    TextContains,
    ToleranceMatch,
    build_predicates,
    contains_pattern,
)
from app.services.query_builder import (
    build_count_query,
    build_families_query,
    build_page_query,
)


def render_statement(statement, dialect):
    """SQL text and its parameters in placeholder order (positional dialects)"""
    compiled = statement.compile(dialect=dialect)
    return str(compiled), [compiled.params[name] for name in compiled.positiontup]


def test_provider_predicate_is_always_first():
    config = CatalogConfig()
    predicates = build_predicates(normalize_filters({}), config)
    assert len(predicates) == 1
    assert isinstance(predicates[0], RequiredEquals)
    assert predicates[0].value == "P"


def test_predicate_order_follows_filter_kinds():
    config = CatalogConfig(numeric_tolerance=0.001)
    filters = normalize_filters({"familia": "ret", "seccion": "3,2", "diam_int": "10"})
    predicates = build_predicates(filters, config)

    kinds = [type(p) for p in predicates]
    assert kinds == [RequiredEquals, ToleranceMatch, ToleranceMatch, TextContains]
    assert [p.target for p in predicates[1:3]] == [10.0, 3.2]
    assert predicates[1].tolerance == 0.001


def test_branch_parameter_precedes_filter_parameters():
    config = CatalogConfig()
    predicates = build_predicates(normalize_filters({"diam_int": "12.345"}), config)
    sql, params = render_statement(build_page_query(predicates, "7", 10, 0, config), sqlite.dialect())

    assert sql.count("?") == len(params)
    assert params.index(7) < params.index(12.345)
    assert params[-2:] == [10, 0]


def test_count_and_page_share_where_parameters():
    config = CatalogConfig()
    predicates = build_predicates(normalize_filters({"altura": "7", "familia": "ret"}), config)

    _, count_params = render_statement(build_count_query(predicates), sqlite.dialect())
    _, page_params = render_statement(build_page_query(predicates, "1", 20, 40, config), sqlite.dialect())

    assert page_params[-(len(count_params) + 2):-2] == count_params
    assert page_params[-2:] == [20, 40]


def test_page_query_groups_and_pivots():
    config = CatalogConfig(warehouses={1: "MATRIZ", 6: "BODEGA", 9: "TALLER"})
    sql, _ = render_statement(
        build_page_query(build_predicates(normalize_filters({}), config), "1", 10, 0, config),
        sqlite.dialect(),
    )
    assert "GROUP BY" in sql
    assert "ORDER BY" in sql
    for column in ("EXIST_1", "EXIST_6", "EXIST_9", "CVE_PROV_1", "CVE_PROV_2"):
        assert column in sql
    assert "LEFT OUTER JOIN" in sql


def test_families_query_without_denylist():
    sql, params = render_statement(build_families_query(CatalogConfig(family_denylist=[])), sqlite.dialect())
    assert "NOT IN" not in sql
    assert "DISTINCT" in sql


def test_tolerance_casts_use_double_precision_on_firebird():
    pytest.importorskip("sqlalchemy_firebird")
    dialect = make_url("firebird+firebird://").get_dialect()()
    config = CatalogConfig()
    predicates = build_predicates(normalize_filters({"diam_int": "1234,56"}), config)

    sql = str(build_page_query(predicates, "1", 10, 0, config).compile(dialect=dialect))

    assert "AS FLOAT)" not in sql
    assert "DOUBLE PRECISION" in sql


def test_contains_pattern_escapes_like_wildcards():
    assert contains_pattern("RET") == "%RET%"
    assert contains_pattern("50%") == "%50\\%%"
    assert contains_pattern("A_1") == "%A\\_1%"
    assert contains_pattern("C\\D") == "%C\\\\D%"
