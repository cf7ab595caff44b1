# mealswipe/services/pagination.py
# 목록 페이지네이션 공용 헬퍼 (좋아요/수정본/검색 목록이 모두 이걸 씀)

from __future__ import annotations
import math
from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

MAX_PER_PAGE = 100


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    page: int = 1
    perPage: int
    total: int = 0
    totalPages: int = 0


def clamp_page(page: int, per_page: int) -> tuple[int, int]:
    return max(1, int(page)), min(max(1, int(per_page)), MAX_PER_PAGE)


def paginate(items: Sequence[T], page: int = 1, per_page: int = 12) -> Page[T]:
    page, per_page = clamp_page(page, per_page)
    total = len(items)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        perPage=per_page,
        total=total,
        totalPages=math.ceil(total / per_page) if total else 0,
    )
