import datetime
import uuid
from unittest.mock import create_autospec

import pytest

from blogkit.category_dataloader import CategoryDataloader
from blogkit.category_models import Category, CategoryStatus
from blogkit.category_repository import MongoCategoryRepository


@pytest.fixture
def category():
    now = datetime.datetime(2024, 5, 1, 12, 0, 0)
    return Category(
        id=uuid.uuid4(),
        name="Amber Dusk",
        slug="amber-dusk",
        status=CategoryStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def repository():
    return create_autospec(MongoCategoryRepository, instance=True)


def test_item_loader_fails_on_thunk(repository, category):
    repository.get_many_by_ids.side_effect = RuntimeError("error fetching category")
    loader = CategoryDataloader(repository)
    with pytest.raises(RuntimeError, match="^error fetching category$"):
        loader.item_loader(category.id)
    repository.get_many_by_ids.assert_called_once_with([category.id])


def test_item_loader_silent_fails_on_category_casting(repository, category):
    other = uuid.uuid4()
    repository.get_many_by_ids.return_value = [category]
    loader = CategoryDataloader(repository)
    assert loader.item_loader(other) is None
    repository.get_many_by_ids.assert_called_once_with([other])


def test_item_loader_success(repository, category):
    repository.get_many_by_ids.return_value = [category]
    loader = CategoryDataloader(repository)
    assert loader.item_loader(category.id) == category
    repository.get_many_by_ids.assert_called_once_with([category.id])


def test_item_loader_skips_missing_entries(repository, category):
    repository.get_many_by_ids.return_value = [None, category]
    loader = CategoryDataloader(repository)
    assert loader.item_loader(category.id) == category


def test_item_loader_does_not_cache(repository, category):
    repository.get_many_by_ids.return_value = [category]
    loader = CategoryDataloader(repository)
    loader.item_loader(category.id)
    loader.item_loader(category.id)
    assert repository.get_many_by_ids.call_count == 2