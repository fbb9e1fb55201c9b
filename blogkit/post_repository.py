"""Post storage through the typed posts queries."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from slugify import slugify

from blogkit.post_models import Post, PostCreate, PostStatus, PostUpdate, PostWhere
from blogkit.post_querier import (
    CreateOneParams,
    GetManyParams,
    NoRowsError,
    PostRow,
    Querier,
    UpdateOneByIdParams,
)

_log = logging.getLogger(__name__)

DEFAULT_ORDER_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


class PostNotFoundError(LookupError):
    """Raised when no post has the requested id."""

    def __init__(self) -> None:
        super().__init__("post is not found")


def _to_post(row: PostRow) -> Post:
    return Post(
        id=row.id,
        title=row.title,
        slug=row.slug,
        category=row.category,
        status=PostStatus(row.status),
        content=row.content or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _get_many_params(where: PostWhere | None) -> GetManyParams:
    params = GetManyParams()
    if where is None:
        return params
    if where.title is not None:
        params.title_eq = where.title.eq
        params.title_regex = where.title.regex
    if where.slug is not None:
        params.slug_eq = where.slug.eq
        params.slug_regex = where.slug.regex
    if where.category is not None:
        params.category_eq = where.category.eq
        if where.category.in_:
            params.category_in = list(where.category.in_)
    if where.status is not None:
        params.status = str(where.status)
    order_by = DEFAULT_ORDER_BY
    sort_order = DEFAULT_SORT_ORDER
    if where.sort is not None:
        order_by = where.sort.sort_by
        if where.sort.sort_order is not None:
            sort_order = str(where.sort.sort_order)
    params.sort_query = f"{order_by}__{sort_order}"
    if where.pagination is not None:
        params.limit = where.pagination.limit
        params.offset = where.pagination.skip
    return params


class PostgresPostRepository:
    """Creates, reads, updates and deletes posts."""

    def __init__(self, querier: Querier) -> None:
        self._querier = querier

    def create_one(self, data: PostCreate) -> Post:
        """Store a new post and return it."""
        slug = slugify(data.slug if data.slug is not None else data.title)
        params = CreateOneParams(
            title=data.title,
            slug=slug,
            category=data.category,
            status=str(data.status),
            content=data.content,
        )
        try:
            row = self._querier.create_one(params)
        except Exception as exc:
            _log.error("method=CreateOne category=call querier.CreateOne error=%s", exc)
            raise
        return _to_post(row)

    def get_one_by_id(self, post_id: uuid.UUID) -> Post:
        """Return the post with this id or raise PostNotFoundError."""
        try:
            row = self._querier.get_one_by_id(post_id)
        except NoRowsError as exc:
            raise PostNotFoundError() from exc
        except Exception as exc:
            _log.error("method=getOneById event=failed to get post: %s", exc)
            raise
        return _to_post(row)

    def get_many(self, where: PostWhere | None) -> list[Post]:
        """Return the posts matching the criteria."""
        try:
            rows = self._querier.get_many(_get_many_params(where))
        except Exception as exc:
            _log.error("method=GetMany category=call querier.GetMany error=%s", exc)
            raise
        return [_to_post(row) for row in rows]

    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> list[Post]:
        """Return the posts whose ids are among the given ones."""
        try:
            rows = self._querier.get_many_by_ids(list(ids))
        except Exception as exc:
            _log.error("method=GetManyByIds category=call querier.GetManyByIds error=%s", exc)
            raise
        return [_to_post(row) for row in rows]

    def update_one_by_id(self, post_id: uuid.UUID, data: PostUpdate) -> Post:
        """Apply the given values and return the stored post."""
        params = UpdateOneByIdParams(
            title=data.title,
            slug=data.slug,
            category=data.category,
            status=None if data.status is None else str(data.status),
            content=data.content,
            id=post_id,
        )
        try:
            row = self._querier.update_one_by_id(params)
        except Exception as exc:
            _log.error("method=UpdateOneById category=call querier.UpdateOneById error=%s", exc)
            raise
        return _to_post(row)

    def delete_one(self, post_id: uuid.UUID) -> None:
        """Delete the post with this id."""
        self._querier.delete_one(post_id)