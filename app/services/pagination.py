"""
Pagination metadata for the filtered listings.
"""

import math

from app.schemas.catalog import Pagination


def paginate(total_records: int, limit: int, offset: int) -> Pagination:
    """totalPages = ceil(total/limit), currentPage = floor(offset/limit) + 1"""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    return Pagination(
        totalRecords=total_records,
        totalPages=math.ceil(total_records / limit),
        currentPage=offset // limit + 1,
        limit=limit,
        offset=offset,
    )
