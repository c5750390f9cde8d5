"""
Resource Use Case DTOs

Pagination envelope shared by every list endpoint.
"""

import math
from typing import Any, Dict, List

from pydantic import BaseModel

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class PaginatedResponse(BaseModel):
    items: List[Dict[str, Any]]
    pagination: PaginationInfo


def clamp_paging(page: int, limit: int):
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)
    return page, limit, (page - 1) * limit


def paginate(items: List[Dict[str, Any]], page: int, limit: int, total: int) -> PaginatedResponse:
    total_pages = math.ceil(total / limit) if total else 0
    return PaginatedResponse(
        items=items,
        pagination=PaginationInfo(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )
