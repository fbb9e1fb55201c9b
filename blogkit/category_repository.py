"""Category storage in a MongoDB collection."""

from __future__ import annotations

import contextlib
import datetime
import logging
import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from bson.binary import Binary
from pymongo.errors import PyMongoError
from slugify import slugify

from blogkit.category_models import (
    Category,
    CategoryCreate,
    CategoryStatus,
    CategoryUpdate,
    CategoryWhere,
)
from blogkit.mongo_filters import get_regex_filter, get_sort_filter, get_string_filter
from blogkit.mongodb import Database

_log = logging.getLogger(__name__)

COLLECTION_NAME = "category"


class CategoryNotFoundError(LookupError):
    """Raised when no category has the requested id."""

    def __init__(self) -> None:
        super().__init__("category is not found")


def _is_slug(text: str) -> bool:
    if not text or text[0] in "-_" or text[-1] in "-_":
        return False
    return all(("a" <= char <= "z") or ("0" <= char <= "9") or char in "-_" for char in text)


def _encode_id(value: uuid.UUID) -> Binary:
    return Binary.from_uuid(value)


def _decode_id(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, Binary):
        return value.as_uuid()
    return uuid.UUID(str(value))


def _to_document(category: Category) -> dict[str, Any]:
    return {
        "_id": _encode_id(category.id),
        "name": category.name,
        "slug": category.slug,
        "status": str(category.status),
        "createdAt": category.created_at,
        "updatedAt": category.updated_at,
    }


def _from_document(document: Mapping[str, Any]) -> Category:
    return Category(
        id=_decode_id(document["_id"]),
        name=document["name"],
        slug=document["slug"],
        status=CategoryStatus(document["status"]),
        created_at=document["createdAt"],
        updated_at=document["updatedAt"],
    )


def _set_document(data: CategoryUpdate) -> dict[str, Any]:
    # name and slug are always written; status only when given.
    document: dict[str, Any] = {"name": data.name, "slug": data.slug}
    if data.status is not None:
        document["status"] = str(data.status)
    return document


class MongoCategoryRepository:
    """Creates, reads, updates and deletes categories."""

    def __init__(self, db: Database) -> None:
        self._collection = db.collection(COLLECTION_NAME)

    def create_one(self, data: CategoryCreate) -> Category:
        """Store a new category and return it."""
        now = datetime.datetime.now(datetime.timezone.utc)
        slug = data.slug if data.slug is not None else data.name
        if not _is_slug(slug):
            slug = slugify(slug)
        category = Category(
            id=uuid.uuid4(),
            name=data.name,
            slug=slug,
            status=data.status,
            created_at=now,
            updated_at=now,
        )
        try:
            self._collection.insert_one(_to_document(category))
        except PyMongoError as exc:
            _log.error("method=CreateOne category=call collection.InsertOne error=%s", exc)
            raise
        return category

    def get_one_by_id(self, category_id: uuid.UUID) -> Category:
        """Return the category with this id or raise CategoryNotFoundError."""
        try:
            document = self._collection.find_one({"_id": _encode_id(category_id)})
        except PyMongoError as exc:
            _log.error("method=GetOneById category=call collection.FindOne error=%s", exc)
            raise PyMongoError(f"failed to get category: {exc}") from exc
        if document is None:
            raise CategoryNotFoundError()
        return _from_document(document)

    def get_many(self, where: CategoryWhere | None) -> list[Category]:
        """Return the categories matching the criteria."""
        query: dict[str, Any] = {}
        options: dict[str, Any] = {}
        if where is not None:
            if where.name is not None:
                query["name"] = get_string_filter(where.name)
            if where.slug is not None:
                query["slug"] = get_string_filter(where.slug)
            if where.status is not None:
                query["status"] = get_regex_filter(str(where.status))
            options["sort"] = get_sort_filter(where.sort) if where.sort is not None else []
            if where.pagination is not None:
                options["limit"] = where.pagination.limit
                options["skip"] = where.pagination.skip
        return self._find("GetMany", query, options)

    def get_many_by_ids(self, ids: Sequence[uuid.UUID]) -> list[Category]:
        """Return the categories whose ids are among the given ones."""
        query = {"_id": {"$in": [_encode_id(item) for item in ids]}}
        return self._find("GetManyByIds", query, {})

    def _find(self, method: str, query: dict[str, Any], options: dict[str, Any]) -> list[Category]:
        try:
            cursor = self._collection.find(query, **options)
        except PyMongoError as exc:
            _log.error("method=%s category=call collection.Find error=%s", method, exc)
            raise
        try:
            with contextlib.closing(cursor):
                return [_from_document(document) for document in cursor]
        except PyMongoError as exc:
            _log.error("method=%s category=call cursor.All error=%s", method, exc)
            raise

    def update_one_by_id(self, category_id: uuid.UUID, data: CategoryUpdate) -> Category:
        """Apply the new values and return the stored category."""
        try:
            self._collection.update_one(
                {"_id": _encode_id(category_id)},
                {"$set": _set_document(data)},
                upsert=False,
            )
        except PyMongoError as exc:
            _log.error("method=UpdateOneById category=call collection.UpdateOne error=%s", exc)
            raise
        return self.get_one_by_id(category_id)

    def delete_one(self, category_id: uuid.UUID) -> None:
        """Delete the category with this id or raise CategoryNotFoundError."""
        try:
            result = self._collection.delete_one({"_id": _encode_id(category_id)})
        except PyMongoError as exc:
            _log.error("method=DeleteOne category=call collection.DeleteOne error=%s", exc)
            raise
        if result.deleted_count == 0:
            _log.debug("method=DeleteOne category=Item is not found in db")
            raise CategoryNotFoundError()