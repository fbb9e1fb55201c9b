"""Batched, uncached loading of posts by id."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from typing import Protocol

from blogkit.batching import BatchLoader, BatchResult, UuidKey
from blogkit.post_models import Post

_log = logging.getLogger(__name__)


class _Repository(Protocol):
    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> Sequence[Post | None]: ...


class PostDataloader:
    """Loads posts through one repository call per batch of ids."""

    def __init__(self, repository: _Repository) -> None:
        self._repository = repository
        self._loader = BatchLoader(self._batch_item_loader)

    def item_loader(self, post_id: uuid.UUID) -> Post | None:
        """Return the post with this id, or None if there is none."""
        try:
            result = self._loader.load(UuidKey(post_id))
        except Exception as exc:
            _log.debug(
                "method=ItemLoader post=call itemLoader.Load.thunk id=%s error=%s",
                post_id,
                exc,
            )
            raise
        return result if isinstance(result, Post) else None

    def _batch_item_loader(self, keys: list[UuidKey]) -> list[BatchResult]:
        ids = [key.raw() for key in keys]
        bucket = {item: BatchResult() for item in ids}
        try:
            posts = self._repository.get_many_by_ids(ids)
        except Exception as exc:
            _log.debug(
                "method=batchItemLoader post=repository.GetManyByIds call is failed error=%s",
                exc,
            )
            return [BatchResult(error=exc)]
        for post in posts:
            if post is not None:
                bucket[post.id] = BatchResult(data=post)
        return [bucket[item] for item in ids]