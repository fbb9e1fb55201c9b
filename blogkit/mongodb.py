"""MongoDB connection with thin database and collection wrappers."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

_log = logging.getLogger(__name__)

_TIMEOUT_MS = 10_000


class MongoConnectionError(RuntimeError):
    """Raised when a MongoDB connection cannot be made or used."""


class Collection:
    """A MongoDB collection."""

    def __init__(self, collection: Any) -> None:
        self._collection = collection

    def name(self) -> str:
        """Return the collection name."""
        return self._collection.name

    def bulk_write(self, requests: Sequence[Any], **kwargs: Any) -> Any:
        """Run several write operations at once."""
        return self._collection.bulk_write(list(requests), **kwargs)

    def insert_one(self, document: Mapping[str, Any], **kwargs: Any) -> Any:
        """Insert one document."""
        return self._collection.insert_one(document, **kwargs)

    def insert_many(self, documents: Sequence[Mapping[str, Any]], **kwargs: Any) -> Any:
        """Insert several documents."""
        return self._collection.insert_many(list(documents), **kwargs)

    def delete_one(self, filter: Mapping[str, Any], **kwargs: Any) -> Any:
        """Delete the first document matching a filter."""
        return self._collection.delete_one(filter, **kwargs)

    def delete_many(self, filter: Mapping[str, Any], **kwargs: Any) -> Any:
        """Delete every document matching a filter."""
        return self._collection.delete_many(filter, **kwargs)

    def update_by_id(self, document_id: Any, update: Any, **kwargs: Any) -> Any:
        """Set the given fields on the document with this id."""
        return self._collection.update_one({"_id": document_id}, {"$set": update}, **kwargs)

    def update_one(self, filter: Mapping[str, Any], update: Any, **kwargs: Any) -> Any:
        """Update the first document matching a filter."""
        return self._collection.update_one(filter, update, **kwargs)

    def update_many(self, filter: Mapping[str, Any], update: Any, **kwargs: Any) -> Any:
        """Update every document matching a filter."""
        return self._collection.update_many(filter, update, **kwargs)

    def replace_one(self, filter: Mapping[str, Any], replacement: Mapping[str, Any], **kwargs: Any) -> Any:
        """Replace the first document matching a filter."""
        return self._collection.replace_one(filter, replacement, **kwargs)

    def aggregate(self, pipeline: Sequence[Mapping[str, Any]], **kwargs: Any) -> Any:
        """Run an aggregation pipeline on the collection."""
        return self._collection.aggregate(list(pipeline), **kwargs)

    def count_documents(self, filter: Mapping[str, Any], **kwargs: Any) -> int:
        """Count the documents matching a filter."""
        return self._collection.count_documents(filter, **kwargs)

    def estimated_document_count(self, **kwargs: Any) -> int:
        """Return the collection's estimated document count."""
        return self._collection.estimated_document_count(**kwargs)

    def distinct(self, field_name: str, filter: Mapping[str, Any] | None, **kwargs: Any) -> list[Any]:
        """Return the distinct values of a field among matching documents."""
        return self._collection.distinct(field_name, filter, **kwargs)

    def find(self, filter: Mapping[str, Any], **kwargs: Any) -> Any:
        """Return a cursor over the documents matching a filter."""
        return self._collection.find(filter, **kwargs)

    def find_one(self, filter: Mapping[str, Any], **kwargs: Any) -> Any:
        """Return the first document matching a filter, or None."""
        return self._collection.find_one(filter, **kwargs)


class Database:
    """A MongoDB database."""

    def __init__(self, database: Any) -> None:
        self._database = database

    def client(self) -> Any:
        """Return the client the database belongs to."""
        return self._database.client

    def name(self) -> str:
        """Return the database name."""
        return self._database.name

    def collection(self, name: str, **kwargs: Any) -> Collection:
        """Return a collection of this database."""
        return Collection(self._database.get_collection(name, **kwargs))

    def aggregate(self, pipeline: Sequence[Mapping[str, Any]], **kwargs: Any) -> Any:
        """Run a database-level aggregation pipeline."""
        return self._database.aggregate(list(pipeline), **kwargs)

    def run_command(self, command: Any, **kwargs: Any) -> Any:
        """Run a database command and return its reply."""
        return self._database.command(command, **kwargs)

    def drop(self) -> None:
        """Drop the whole database."""
        self._database.client.drop_database(self._database.name)

    def list_collections(self, filter: Mapping[str, Any] | None, **kwargs: Any) -> Any:
        """Return a cursor over the collection specifications."""
        return self._database.list_collections(filter=filter, **kwargs)

    def list_collection_names(self, filter: Mapping[str, Any] | None, **kwargs: Any) -> list[str]:
        """Return the names of the collections matching a filter."""
        return self._database.list_collection_names(filter=filter, **kwargs)

    def watch(self, pipeline: Sequence[Mapping[str, Any]] | None, **kwargs: Any) -> Any:
        """Open a change stream on the database."""
        return self._database.watch(pipeline=pipeline, **kwargs)

    def create_collection(self, name: str, **kwargs: Any) -> Collection:
        """Create a collection and return it."""
        return Collection(self._database.create_collection(name, **kwargs))

    def create_view(
        self,
        view_name: str,
        view_on: str,
        pipeline: Sequence[Mapping[str, Any]],
        **kwargs: Any,
    ) -> None:
        """Create a view over another collection."""
        self._database.create_collection(
            view_name, viewOn=view_on, pipeline=list(pipeline), **kwargs
        )


class Mongodb:
    """A connection to one MongoDB database."""

    def __init__(self, uri: str, name: str, retry_writes: bool) -> None:
        self.uri = uri
        self.name = name
        self.retry_writes = retry_writes
        self._client: Any = None

    def _require_client(self) -> Any:
        if self._client is None:
            raise MongoConnectionError(f"database {self.name!r} is not connected")
        return self._client

    def connect(self) -> Mongodb:
        """Connect and ping the server; raise MongoConnectionError on failure."""
        _log.info("dbName=%s status=connecting...", self.name)
        if not self.name:
            _log.critical("status=missing parameters reason=name is required")
            raise MongoConnectionError("name is required")
        if not self.uri:
            _log.critical("dbName=%s status=missing parameters reason=uri is required", self.name)
            raise MongoConnectionError("uri is required")
        try:
            client = MongoClient(
                self.uri,
                connectTimeoutMS=_TIMEOUT_MS,
                serverSelectionTimeoutMS=_TIMEOUT_MS,
            )
        except PyMongoError as exc:
            _log.critical("dbName=%s status=connection failed! error=%s", self.name, exc)
            raise MongoConnectionError(f"connection failed: {exc}") from exc
        self._client = client
        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            _log.critical("dbName=%s status=failed to ping client error=%s", self.name, exc)
            raise MongoConnectionError(f"failed to ping client: {exc}") from exc
        _log.info("dbName=%s status=connected successfully.", self.name)
        return self

    def disconnect(self) -> None:
        """Close the connection; a failure to close is only logged."""
        _log.info("dbName=%s status=disconnecting...", self.name)
        client = self._require_client()
        try:
            client.close()
        except PyMongoError as exc:
            _log.debug("dbName=%s status=failed to disconnect gracefully error=%s", self.name, exc)
        self._client = None
        _log.info("dbName=%s status=disconnected successfully", self.name)

    def get_database(self) -> Database:
        """Return the connected database."""
        return Database(self._require_client()[self.name])

    def collection(self, name: str, **kwargs: Any) -> Collection:
        """Return a collection of the connected database."""
        return Collection(self._require_client()[self.name].get_collection(name, **kwargs))

    def ping(self) -> None:
        """Ping the server, raising the driver's error if it does not answer."""
        self._require_client().admin.command("ping")