import datetime
import uuid
from unittest.mock import create_autospec

import pytest

from blogkit.category_dataloader import CategoryDataloader
from blogkit.category_models import (
    Category,
    CategoryCreate,
    CategoryStatus,
    CategoryUpdate,
    CategoryWhere,
)
from blogkit.category_repository import CategoryNotFoundError, MongoCategoryRepository
from blogkit.category_service import CategoryService
from blogkit.filters import PaginationFilter


@pytest.fixture
def category():
    now = datetime.datetime(2024, 5, 1, 12, 0, 0)
    return Category(
        id=uuid.uuid4(),
        name="Stout Season",
        slug="stout-season",
        status=CategoryStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def repository():
    return create_autospec(MongoCategoryRepository, instance=True)


@pytest.fixture
def dataloader():
    return create_autospec(CategoryDataloader, instance=True)


@pytest.fixture
def service(repository, dataloader):
    return CategoryService(repository, dataloader)


def test_create_category(service, repository, category):
    data = CategoryCreate(name=category.name, slug=category.slug, status=category.status)
    repository.create_one.return_value = category
    assert service.create_category(data) == category
    repository.create_one.assert_called_once_with(data)


def test_get_category(service, repository, category):
    repository.get_one_by_id.return_value = category
    assert service.get_category(category.id) == category
    repository.get_one_by_id.assert_called_once_with(category.id)


def test_get_category_propagates_not_found(service, repository, category):
    repository.get_one_by_id.side_effect = CategoryNotFoundError()
    with pytest.raises(CategoryNotFoundError):
        service.get_category(category.id)


def test_list_categories(service, repository, category):
    where = CategoryWhere(pagination=PaginationFilter(limit=1, skip=0))
    repository.get_many.return_value = [category]
    assert service.list_categories(where) == [category]
    repository.get_many.assert_called_once_with(where)


def test_update_category(service, repository, category):
    data = CategoryUpdate(name=category.name, slug=category.slug, status=category.status)
    repository.update_one_by_id.return_value = category
    assert service.update_category(category.id, data) == category
    repository.update_one_by_id.assert_called_once_with(category.id, data)


def test_delete_category(service, repository, category):
    repository.delete_one.return_value = None
    assert service.delete_category(category.id) is None
    repository.delete_one.assert_called_once_with(category.id)


def test_load_category(service, dataloader, category):
    dataloader.item_loader.return_value = category
    assert service.load_category(category.id) == category
    dataloader.item_loader.assert_called_once_with(category.id)