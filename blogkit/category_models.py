"""Category entity, status values and the data shapes used to change and query it."""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass

from blogkit.filters import PaginationFilter, SortFilter, StringFilter


class CategoryStatus(enum.StrEnum):
    """Publication state of a category."""

    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    ARCHIVED = "ARCHIVED"


@dataclass
class Category:
    """A stored category."""

    id: uuid.UUID
    name: str
    slug: str
    status: CategoryStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime


@dataclass(kw_only=True)
class CategoryCreate:
    """Values for a new category; the slug defaults to one made from the name."""

    name: str
    slug: str | None = None
    status: CategoryStatus


@dataclass
class CategoryWhere:
    """Criteria, sort and pagination for listing categories."""

    name: StringFilter | None = None
    slug: StringFilter | None = None
    status: CategoryStatus | None = None
    sort: SortFilter | None = None
    pagination: PaginationFilter | None = None


@dataclass
class CategoryUpdate:
    """New values for a category."""

    name: str | None = None
    slug: str | None = None
    status: CategoryStatus | None = None