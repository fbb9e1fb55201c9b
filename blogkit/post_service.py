"""Post operations offered to the rest of the application."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Protocol

from blogkit.post_models import Post, PostCreate, PostUpdate, PostWhere


class _Repository(Protocol):
    def create_one(self, data: PostCreate) -> Post: ...

    def get_one_by_id(self, post_id: uuid.UUID) -> Post: ...

    def get_many(self, where: PostWhere | None) -> list[Post]: ...

    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> list[Post]: ...

    def update_one_by_id(self, post_id: uuid.UUID, data: PostUpdate) -> Post: ...

    def delete_one(self, post_id: uuid.UUID) -> None: ...


class _Dataloader(Protocol):
    def item_loader(self, post_id: uuid.UUID) -> Post | None: ...


class PostService:
    """CRUD on posts plus batched loading by id."""

    def __init__(self, repository: _Repository, dataloader: _Dataloader) -> None:
        self._repository = repository
        self._dataloader = dataloader

    def create_post(self, data: PostCreate) -> Post:
        """Create a post."""
        return self._repository.create_one(data)

    def get_post(self, post_id: uuid.UUID) -> Post:
        """Return one post by id."""
        return self._repository.get_one_by_id(post_id)

    def list_posts(self, where: PostWhere | None) -> list[Post]:
        """Return the posts matching the criteria."""
        return self._repository.get_many(where)

    def update_post(self, post_id: uuid.UUID, data: PostUpdate) -> Post:
        """Update a post and return it."""
        return self._repository.update_one_by_id(post_id, data)

    def delete_post(self, post_id: uuid.UUID) -> None:
        """Delete a post."""
        self._repository.delete_one(post_id)

    def load_post(self, post_id: uuid.UUID) -> Post | None:
        """Load a post through the batching loader."""
        return self._dataloader.item_loader(post_id)