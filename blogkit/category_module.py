"""Wiring of the category repository, loader and service."""

from __future__ import annotations

from blogkit.category_dataloader import CategoryDataloader
from blogkit.category_repository import MongoCategoryRepository
from blogkit.category_service import CategoryService
from blogkit.mongodb import Database


class CategoryModule:
    """Builds the category service on top of a MongoDB database."""

    def __init__(self, db: Database) -> None:
        repository = MongoCategoryRepository(db)
        loader = CategoryDataloader(repository)
        self.service = CategoryService(repository, loader)