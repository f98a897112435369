"""
Request parameter normalization.

Turns raw query strings into typed filter values. Nothing here raises: bad
numbers drop the filter and bad pagination falls back to defaults.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# Text filters accepted by the filtered product listing
TEXT_FILTERS = ("familia", "ubicacion", "linea", "cla_syr", "cla_lc", "genero", "perfil")

# Dimensional filters, compared with tolerance
NUMERIC_FILTERS = ("diam_int", "diam_ext", "altura", "seccion")


@dataclass
class ProductFilters:
    """Normalized filter set; absent filters are simply missing from the dicts"""
    text: Dict[str, str] = field(default_factory=dict)
    numeric: Dict[str, float] = field(default_factory=dict)


def normalize_text(value: Optional[str]) -> Optional[str]:
    """Trim, turn '+' into space, uppercase. Empty result means absent."""
    if value is None:
        return None
    cleaned = str(value).replace("+", " ").strip().upper()
    return cleaned or None


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a decimal that may use a comma separator; None when unparseable"""
    if value is None:
        return None
    text = str(value).strip().replace(",", ".")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def normalize_branch(value: Optional[str], default: str = "1") -> str:
    """Canonical price list id: '01' and ' 1 ' both become '1'"""
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        return default
    try:
        return str(int(text))
    except ValueError:
        return default


def parse_int(value: Optional[str], default: int, minimum: int = 0) -> int:
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    if number < minimum:
        return default
    return number


def parse_pagination(
    limit: Optional[str],
    offset: Optional[str],
    default_limit: int = 10,
) -> Tuple[int, int]:
    """
    Parse limit/offset.

    limit is at least 1 (page math divides by it); offset is never negative.
    Invalid values fall back to the defaults instead of failing the request.
    """
    parsed_limit = parse_int(limit, default_limit, minimum=1)
    parsed_offset = parse_int(offset, 0, minimum=0)
    return parsed_limit, parsed_offset


def normalize_filters(raw: Dict[str, Optional[str]]) -> ProductFilters:
    """Build a ProductFilters from raw query parameters, in a fixed key order"""
    filters = ProductFilters()

    for key in NUMERIC_FILTERS:
        number = parse_number(raw.get(key))
        if number is not None:
            filters.numeric[key] = number

    for key in TEXT_FILTERS:
        text = normalize_text(raw.get(key))
        if text is not None:
            filters.text[key] = text

    return filters
