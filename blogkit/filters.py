"""Filter, sort and pagination criteria shared by the list queries."""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass, field


@dataclass
class StringFilter:
    """Match a string exactly or by a case-insensitive regular expression."""

    eq: str | None = None
    regex: str | None = None


@dataclass
class UuidFilter:
    """Match a UUID by equality, membership or inequality."""

    eq: uuid.UUID | None = None
    in_: list[uuid.UUID] = field(default_factory=list)
    ne: uuid.UUID | None = None


@dataclass
class IntFilter:
    """Compare an integer field."""

    eq: int | None = None
    gt: int | None = None
    gte: int | None = None
    lt: int | None = None
    lte: int | None = None


@dataclass
class Float64Filter:
    """Compare a floating point field."""

    eq: float | None = None
    gt: float | None = None
    gte: float | None = None
    lt: float | None = None
    lte: float | None = None


@dataclass
class DateFilter:
    """Compare a timestamp field."""

    eq: datetime.datetime | None = None
    gt: datetime.datetime | None = None
    gte: datetime.datetime | None = None
    lt: datetime.datetime | None = None
    lte: datetime.datetime | None = None


class SortOrder(enum.StrEnum):
    """Direction of a sort."""

    ASC = "asc"
    DESC = "desc"


@dataclass
class SortFilter:
    """Field to sort by and an optional direction."""

    sort_by: str = ""
    sort_order: SortOrder | None = None


@dataclass
class PaginationFilter:
    """Number of items to return and to skip."""

    limit: int = 0
    skip: int = 0