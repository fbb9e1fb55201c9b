"""Wiring of the post queries, repository, loader and service."""

from __future__ import annotations

from typing import Protocol

from blogkit.post_dataloader import PostDataloader
from blogkit.post_querier import DBTX, Queries
from blogkit.post_repository import PostgresPostRepository
from blogkit.post_service import PostService


class _Database(Protocol):
    def get_db(self) -> DBTX: ...


class PostModule:
    """Builds the post service on top of a SQL database."""

    def __init__(self, db: _Database) -> None:
        querier = Queries(db.get_db())
        repository = PostgresPostRepository(querier)
        loader = PostDataloader(repository)
        self.service = PostService(repository, loader)