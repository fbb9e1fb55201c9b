"""Typed queries over the posts table."""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

CREATE_ONE = """-- name: CreateOne :one
INSERT INTO posts (title, slug, category, status, content, created_at, updated_at)
VALUES ($1, $2, $3, $4, $5, NOW(), NOW())
RETURNING id, title, slug, category, status, content, created_at, updated_at
"""

DELETE_ONE = """-- name: DeleteOne :exec
DELETE FROM posts
WHERE id = $1
"""

GET_MANY = """-- name: GetMany :many
SELECT id, title, slug, category, status, content, created_at, updated_at
FROM posts
WHERE
  (
    ($1::text IS NOT NULL AND title = $1)
    OR
    ($2::text IS NOT NULL AND title ~* $2::text)
    OR
    ($1::text IS NULL AND $2 IS NULL)
  )
  AND
  (
    ($3::text IS NOT NULL AND slug = $3)
    OR
    ($4::text IS NOT NULL AND slug ~* $4::text)
    OR
    ($3::text IS NULL AND $4 IS NULL)
  )
  AND
  (
    ($5::uuid IS NOT NULL AND category = $5)
    OR
    ($6::uuid[] IS NOT NULL AND category = ANY($6::uuid[]))
    OR
    ($5::text IS NULL AND $6 IS NULL)
  )
  AND
  (
    status = $7 OR $7 IS NULL
  )
ORDER BY
  CASE WHEN $8::text = 'title__asc' THEN title END ASC,
  CASE WHEN $8::text = 'title__desc' THEN title END DESC,
  CASE WHEN $8::text = 'created_at__asc' THEN created_at END ASC,
  CASE WHEN $8::text = 'created_at__desc' THEN created_at END DESC,
  CASE WHEN $8::text = 'updated_at__asc' THEN updated_at END ASC,
  CASE WHEN $8::text = 'updated_at__desc' THEN updated_at END DESC,
  CASE WHEN $8::text = 'status__asc' THEN status END ASC,
  CASE WHEN $8::text = 'status__desc' THEN status END DESC
LIMIT $10 OFFSET $9
"""

GET_MANY_BY_IDS = """-- name: GetManyByIds :many
SELECT id, title, slug, category, status, content, created_at, updated_at FROM posts
WHERE id = ANY($1::uuid[])
"""

GET_ONE_BY_ID = """-- name: GetOneById :one
SELECT id, title, slug, category, status, content, created_at, updated_at FROM posts
WHERE id = $1
"""

UPDATE_ONE_BY_ID = """-- name: UpdateOneById :one
UPDATE posts SET
  title = coalesce($1, title),
  slug = coalesce($2, slug),
  category = coalesce($3, category),
  status = coalesce($4, status),
  content = coalesce($5, content),
  updated_at = now()
WHERE id = $6 RETURNING id, title, slug, category, status, content, created_at, updated_at
"""


class NoRowsError(LookupError):
    """Raised when a query that must return one row returns none."""

    def __init__(self) -> None:
        super().__init__("sql: no rows in result set")


class DBTX(Protocol):
    """Anything that runs positional SQL: a database handle or a transaction."""

    def execute(self, query: str, params: Sequence[Any] = ...) -> int: ...

    def query(self, query: str, params: Sequence[Any] = ...) -> list[tuple[Any, ...]]: ...

    def query_row(self, query: str, params: Sequence[Any] = ...) -> tuple[Any, ...] | None: ...


@dataclass
class PostRow:
    """One row of the posts table."""

    id: uuid.UUID
    title: str
    slug: str
    category: uuid.UUID
    status: str
    content: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


@dataclass
class CreateOneParams:
    """Values for a new post."""

    title: str
    slug: str
    category: uuid.UUID
    status: str
    content: str | None = None


@dataclass
class GetManyParams:
    """Optional criteria for listing posts; None leaves a criterion out."""

    title_eq: str | None = None
    title_regex: str | None = None
    slug_eq: str | None = None
    slug_regex: str | None = None
    category_eq: uuid.UUID | None = None
    category_in: list[uuid.UUID] | None = None
    status: str | None = None
    sort_query: str | None = None
    offset: int | None = None
    limit: int | None = None


@dataclass(kw_only=True)
class UpdateOneByIdParams:
    """Fields to change on a post; None keeps the stored value."""

    title: str | None = None
    slug: str | None = None
    category: uuid.UUID | None = None
    status: str | None = None
    content: str | None = None
    id: uuid.UUID


@runtime_checkable
class Querier(Protocol):
    """The queries available on the posts table."""

    def create_one(self, params: CreateOneParams) -> PostRow: ...

    def delete_one(self, post_id: uuid.UUID) -> None: ...

    def get_many(self, params: GetManyParams) -> list[PostRow]: ...

    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> list[PostRow]: ...

    def get_one_by_id(self, post_id: uuid.UUID) -> PostRow: ...

    def update_one_by_id(self, params: UpdateOneByIdParams) -> PostRow: ...


def _as_uuid(value: Any) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def _scan(row: Sequence[Any]) -> PostRow:
    post_id, title, slug, category, status, content, created_at, updated_at = row
    return PostRow(
        id=_as_uuid(post_id),
        title=title,
        slug=slug,
        category=_as_uuid(category),
        status=status,
        content=content,
        created_at=created_at,
        updated_at=updated_at,
    )


def _scan_one(row: Sequence[Any] | None) -> PostRow:
    if row is None:
        raise NoRowsError()
    return _scan(row)


class Queries:
    """Runs the posts queries against a database handle or transaction."""

    def __init__(self, db: DBTX) -> None:
        self._db = db

    def with_tx(self, tx: DBTX) -> Queries:
        """Return queries that run inside the given transaction."""
        return Queries(tx)

    def create_one(self, params: CreateOneParams) -> PostRow:
        """Insert a post and return the stored row."""
        row = self._db.query_row(
            CREATE_ONE,
            (params.title, params.slug, params.category, params.status, params.content),
        )
        return _scan_one(row)

    def delete_one(self, post_id: uuid.UUID) -> None:
        """Delete the post with this id."""
        self._db.execute(DELETE_ONE, (post_id,))

    def get_many(self, params: GetManyParams) -> list[PostRow]:
        """Return the posts matching the criteria."""
        category_in = None if params.category_in is None else list(params.category_in)
        rows = self._db.query(
            GET_MANY,
            (
                params.title_eq,
                params.title_regex,
                params.slug_eq,
                params.slug_regex,
                params.category_eq,
                category_in,
                params.status,
                params.sort_query,
                params.offset,
                params.limit,
            ),
        )
        return [_scan(row) for row in rows]

    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> list[PostRow]:
        """Return the posts whose ids are among the given ones."""
        rows = self._db.query(GET_MANY_BY_IDS, (list(ids),))
        return [_scan(row) for row in rows]

    def get_one_by_id(self, post_id: uuid.UUID) -> PostRow:
        """Return the post with this id or raise NoRowsError."""
        return _scan_one(self._db.query_row(GET_ONE_BY_ID, (post_id,)))

    def update_one_by_id(self, params: UpdateOneByIdParams) -> PostRow:
        """Update a post and return the stored row, or raise NoRowsError."""
        row = self._db.query_row(
            UPDATE_ONE_BY_ID,
            (
                params.title,
                params.slug,
                params.category,
                params.status,
                params.content,
                params.id,
            ),
        )
        return _scan_one(row)