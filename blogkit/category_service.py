"""Category operations offered to the rest of the application."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Protocol

from blogkit.category_models import Category, CategoryCreate, CategoryUpdate, CategoryWhere


class _Repository(Protocol):
    def create_one(self, data: CategoryCreate) -> Category: ...

    def get_one_by_id(self, category_id: uuid.UUID) -> Category: ...

    def get_many(self, where: CategoryWhere | None) -> list[Category]: ...

    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> list[Category]: ...

    def update_one_by_id(self, category_id: uuid.UUID, data: CategoryUpdate) -> Category: ...

    def delete_one(self, category_id: uuid.UUID) -> None: ...


class _Dataloader(Protocol):
    def item_loader(self, category_id: uuid.UUID) -> Category | None: ...


class CategoryService:
    """CRUD on categories plus batched loading by id."""

    def __init__(self, repository: _Repository, dataloader: _Dataloader) -> None:
        self._repository = repository
        self._dataloader = dataloader

    def create_category(self, data: CategoryCreate) -> Category:
        """Create a category."""
        return self._repository.create_one(data)

    def get_category(self, category_id: uuid.UUID) -> Category:
        """Return one category by id."""
        return self._repository.get_one_by_id(category_id)

    def list_categories(self, where: CategoryWhere | None) -> list[Category]:
        """Return the categories matching the criteria."""
        return self._repository.get_many(where)

    def update_category(self, category_id: uuid.UUID, data: CategoryUpdate) -> Category:
        """Update a category and return it."""
        return self._repository.update_one_by_id(category_id, data)

    def delete_category(self, category_id: uuid.UUID) -> None:
        """Delete a category."""
        self._repository.delete_one(category_id)

    def load_category(self, category_id: uuid.UUID) -> Category | None:
        """Load a category through the batching loader."""
        return self._dataloader.item_loader(category_id)