"""
Predicate builder.

Each filter becomes a typed predicate object that renders to a SQLAlchemy
clause with bound parameters. The clauses are combined by the query builder,
so placeholder order and parameter order always agree.
"""

from dataclasses import dataclass
from typing import Dict, List

from sqlalchemy import Float, cast, func, literal
from sqlalchemy.sql.elements import ColumnElement

from app.core.config import CatalogConfig
from app.models import AlternateKey, Article, ArticleAttributes
from app.services.filters import ProductFilters

# DOUBLE PRECISION; a bare Float is single precision on Firebird
DecimalValue = Float(precision=53)

LIKE_ESCAPE = "\\"

# Columns behind each filter key
NUMERIC_COLUMNS: Dict[str, ColumnElement] = {
    "diam_int": ArticleAttributes.camplib1,
    "diam_ext": ArticleAttributes.camplib2,
    "altura": ArticleAttributes.camplib3,
    "seccion": ArticleAttributes.camplib7,
}

TEXT_COLUMNS: Dict[str, ColumnElement] = {
    "familia": ArticleAttributes.camplib22,
    "ubicacion": ArticleAttributes.camplib5,
    "linea": Article.lin_prod,
    "cla_syr": ArticleAttributes.camplib15,
    "cla_lc": ArticleAttributes.camplib16,
    "genero": ArticleAttributes.camplib21,
    "perfil": ArticleAttributes.camplib4,
}


def decimal_text(column: ColumnElement) -> ColumnElement:
    """
    Numeric view of a comma-decimal text column.
    Blank and NULL both read as 0.
    """
    normalized = func.nullif(func.trim(func.replace(column, ",", ".")), "")
    return cast(func.coalesce(normalized, "0"), DecimalValue)


def contains_pattern(term: str) -> str:
    """%term% with LIKE wildcards in the term matched literally"""
    escaped = term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", LIKE_ESCAPE + "%").replace("_", LIKE_ESCAPE + "_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class ToleranceMatch:
    """|stored - target| <= tolerance"""
    column: ColumnElement
    target: float
    tolerance: float

    def clause(self) -> ColumnElement:
        return func.abs(decimal_text(self.column) - literal(self.target, DecimalValue)) <= literal(self.tolerance, DecimalValue)


@dataclass(frozen=True)
class TextContains:
    """Case-folded, trimmed, NULL-safe substring match"""
    column: ColumnElement
    value: str

    def clause(self) -> ColumnElement:
        stored = func.upper(func.trim(func.coalesce(self.column, "")))
        return stored.like(contains_pattern(self.value.strip().upper()), escape=LIKE_ESCAPE)


@dataclass(frozen=True)
class RequiredEquals:
    """Structural predicate that applies regardless of caller input"""
    column: ColumnElement
    value: str

    def clause(self) -> ColumnElement:
        return self.column == self.value


def build_predicates(filters: ProductFilters, config: CatalogConfig) -> List:
    """
    Ordered predicate list for the filtered product listing.

    The alternate key type predicate is always first, followed by numeric
    filters and then text filters in their declared order.
    """
    predicates = [RequiredEquals(AlternateKey.tipo, config.alternate_key_type)]

    for key, column in NUMERIC_COLUMNS.items():
        if key in filters.numeric:
            predicates.append(ToleranceMatch(column, filters.numeric[key], config.numeric_tolerance))

    for key, column in TEXT_COLUMNS.items():
        if key in filters.text:
            predicates.append(TextContains(column, filters.text[key]))

    return predicates


def where_clauses(predicates: List) -> List[ColumnElement]:
    return [p.clause() for p in predicates]
