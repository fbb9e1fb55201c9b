from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from blogkit.mongodb import Collection, Database, Mongodb, MongoConnectionError

URI = "mongodb://localhost:27017"


@pytest.fixture
def raw_collection():
    return MagicMock()


@pytest.fixture
def collection(raw_collection):
    return Collection(raw_collection)


@pytest.fixture
def raw_database():
    return MagicMock()


@pytest.fixture
def database(raw_database):
    return Database(raw_database)


def test_connect_requires_name():
    with pytest.raises(MongoConnectionError, match="name is required"):
        Mongodb(URI, "", False).connect()


def test_connect_requires_uri():
    with pytest.raises(MongoConnectionError, match="uri is required"):
        Mongodb("", "blog", False).connect()


def test_connect_rejects_bad_uri():
    with pytest.raises(MongoConnectionError, match="connection failed"):
        Mongodb("not-a-mongo-uri", "blog", False).connect()


def test_connect_pings_and_returns_self():
    with patch("blogkit.mongodb.MongoClient") as client_cls:
        db = Mongodb(URI, "blog", False)
        assert db.connect() is db
        client_cls.return_value.admin.command.assert_called_once_with("ping")
        assert client_cls.call_args.args[0] == URI


def test_connect_fails_on_ping():
    with patch("blogkit.mongodb.MongoClient") as client_cls:
        client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("down")
        with pytest.raises(MongoConnectionError, match="failed to ping client"):
            Mongodb(URI, "blog", False).connect()


def test_use_before_connect_raises():
    db = Mongodb(URI, "blog", False)
    with pytest.raises(MongoConnectionError):
        db.get_database()
    with pytest.raises(MongoConnectionError):
        db.ping()
    with pytest.raises(MongoConnectionError):
        db.disconnect()


def test_get_database_and_collection():
    with patch("blogkit.mongodb.MongoClient") as client_cls:
        client = client_cls.return_value
        db = Mongodb(URI, "blog", False).connect()
        database = db.get_database()
        client.__getitem__.assert_called_with("blog")
        assert database.name() == client.__getitem__.return_value.name
        coll = db.collection("category")
        client.__getitem__.return_value.get_collection.assert_called_with("category")
        assert coll.name() == client.__getitem__.return_value.get_collection.return_value.name


def test_disconnect_closes_client():
    with patch("blogkit.mongodb.MongoClient") as client_cls:
        db = Mongodb(URI, "blog", False).connect()
        db.disconnect()
        client_cls.return_value.close.assert_called_once_with()
        with pytest.raises(MongoConnectionError):
            db.ping()


def test_update_by_id_wraps_in_set(collection, raw_collection):
    result = collection.update_by_id("abc", {"name": "news"}, upsert=False)
    raw_collection.update_one.assert_called_once_with(
        {"_id": "abc"}, {"$set": {"name": "news"}}, upsert=False
    )
    assert result is raw_collection.update_one.return_value


def test_collection_passes_calls_through(collection, raw_collection):
    doc = {"_id": 1}
    assert collection.insert_one(doc) is raw_collection.insert_one.return_value
    raw_collection.insert_one.assert_called_once_with(doc)
    assert collection.insert_many([doc]) is raw_collection.insert_many.return_value
    assert collection.delete_one(doc) is raw_collection.delete_one.return_value
    assert collection.delete_many(doc) is raw_collection.delete_many.return_value
    assert collection.update_many(doc, {"$set": {}}) is raw_collection.update_many.return_value
    assert collection.replace_one(doc, doc) is raw_collection.replace_one.return_value
    assert collection.bulk_write([]) is raw_collection.bulk_write.return_value
    assert collection.aggregate([]) is raw_collection.aggregate.return_value
    assert collection.count_documents(doc) is raw_collection.count_documents.return_value
    assert collection.estimated_document_count() is raw_collection.estimated_document_count.return_value
    assert collection.distinct("name", doc) is raw_collection.distinct.return_value
    assert collection.find(doc, limit=1) is raw_collection.find.return_value
    raw_collection.find.assert_called_once_with(doc, limit=1)
    assert collection.find_one(doc) is raw_collection.find_one.return_value


def test_database_collection(database, raw_database):
    coll = database.collection("posts")
    raw_database.get_collection.assert_called_once_with("posts")
    assert coll.find({}) is raw_database.get_collection.return_value.find.return_value


def test_database_drop(database, raw_database):
    raw_database.client.drop_database.return_value = None
    assert database.drop() is None
    assert raw_database.client.drop_database.call_args.args == (raw_database.name,)
    assert raw_database.client.drop_database.call_count == 1


def test_database_client_and_command(database, raw_database):
    assert database.client() is raw_database.client
    assert database.run_command({"ping": 1}) is raw_database.command.return_value
    raw_database.command.assert_called_once_with({"ping": 1})


def test_database_listing(database, raw_database):
    assert database.list_collection_names({}) is raw_database.list_collection_names.return_value
    raw_database.list_collection_names.assert_called_once_with(filter={})
    assert database.list_collections(None) is raw_database.list_collections.return_value
    assert database.watch(None) is raw_database.watch.return_value
    assert database.aggregate([]) is raw_database.aggregate.return_value


def test_database_create_view(database, raw_database):
    pipeline = [{"$match": {"status": "ACTIVE"}}]
    database.create_view("active", "category", pipeline)
    raw_database.create_collection.assert_called_once_with(
        "active", viewOn="category", pipeline=pipeline
    )


def test_database_create_collection(database, raw_database):
    coll = database.create_collection("tags")
    raw_database.create_collection.assert_called_once_with("tags")
    assert coll.name() == raw_database.create_collection.return_value.name