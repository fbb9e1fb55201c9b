"""Post entity, status values and the data shapes used to change and query it."""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass

from blogkit.filters import PaginationFilter, SortFilter, StringFilter, UuidFilter


class PostStatus(enum.StrEnum):
    """Publication state of a post."""

    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    ARCHIVED = "ARCHIVED"


@dataclass
class Post:
    """A stored post."""

    id: uuid.UUID
    title: str
    slug: str
    category: uuid.UUID
    status: PostStatus
    content: str = ""
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


@dataclass(kw_only=True)
class PostCreate:
    """Values for a new post; the slug defaults to one made from the title."""

    title: str
    slug: str | None = None
    category: uuid.UUID
    status: PostStatus
    content: str | None = None


@dataclass
class PostWhere:
    """Criteria, sort and pagination for listing posts."""

    title: StringFilter | None = None
    slug: StringFilter | None = None
    category: UuidFilter | None = None
    status: PostStatus | None = None
    sort: SortFilter | None = None
    pagination: PaginationFilter | None = None


@dataclass
class PostUpdate:
    """New values for a post; None keeps the stored value."""

    title: str | None = None
    slug: str | None = None
    category: uuid.UUID | None = None
    status: PostStatus | None = None
    content: str | None = None