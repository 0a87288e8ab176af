# app/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy import Select, func, select

T = TypeVar("T")  # SQLAlchemy model type

MAX_PAGE_SIZE = 100

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

def clamp_page(limit: int, offset: int, *, default: int = 20) -> tuple[int, int]:
    """Bound pagination so a single request can't ask for the whole table."""
    if limit < 1:
        limit = default
    return min(limit, MAX_PAGE_SIZE), max(offset, 0)

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def page_from_stmt(self, stmt: Select, *, limit: int = 20, offset: int = 0) -> Page[T]:
        limit, offset = clamp_page(limit, offset)
        items = list(self.db.execute(stmt.limit(limit).offset(offset)).scalars().all())
        # one query for items and one for count
        total = self.db.execute(select(func.count()).select_from(self.model)).scalar_one()
        return Page(items=items, total=total, limit=limit, offset=offset)
