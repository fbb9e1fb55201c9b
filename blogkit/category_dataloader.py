"""Batched, uncached loading of categories by id."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from typing import Protocol

from blogkit.batching import BatchLoader, BatchResult, UuidKey
from blogkit.category_models import Category

_log = logging.getLogger(__name__)


class _Repository(Protocol):
    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> Sequence[Category | None]: ...


class CategoryDataloader:
    """Loads categories through one repository call per batch of ids."""

    def __init__(self, repository: _Repository) -> None:
        self._repository = repository
        self._loader = BatchLoader(self._batch_item_loader)

    def item_loader(self, category_id: uuid.UUID) -> Category | None:
        """Return the category with this id, or None if there is none."""
        try:
            result = self._loader.load(UuidKey(category_id))
        except Exception as exc:
            _log.debug(
                "method=ItemLoader category=call itemLoader.Load.thunk id=%s error=%s",
                category_id,
                exc,
            )
            raise
        return result if isinstance(result, Category) else None

    def _batch_item_loader(self, keys: list[UuidKey]) -> list[BatchResult]:
        ids = [key.raw() for key in keys]
        bucket = {item: BatchResult() for item in ids}
        try:
            categories = self._repository.get_many_by_ids(ids)
        except Exception as exc:
            _log.debug(
                "method=batchItemLoader category=repository.GetManyByIds call is failed error=%s",
                exc,
            )
            return [BatchResult(error=exc)]
        for category in categories:
            if category is not None:
                bucket[category.id] = BatchResult(data=category)
        return [bucket[item] for item in ids]