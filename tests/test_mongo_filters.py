import datetime
import uuid

import pymongo
import pytest

from blogkit.filters import (
    DateFilter,
    Float64Filter,
    IntFilter,
    SortFilter,
    SortOrder,
    StringFilter,
    UuidFilter,
)
from blogkit.mongo_filters import (
    get_date_filter,
    get_float64_filter,
    get_int_filter,
    get_regex_filter,
    get_sort_filter,
    get_string_filter,
    get_uuid_filter,
)

D1 = datetime.datetime(2024, 1, 1)
D2 = datetime.datetime(2024, 2, 1)
D3 = datetime.datetime(2024, 3, 1)


def test_uuid_filter_none_is_empty():
    assert get_uuid_filter(None) == {}


def test_uuid_filter_all_fields():
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    result = get_uuid_filter(UuidFilter(eq=a, in_=[b], ne=c))
    assert result == {"$eq": a, "$in": [b], "$ne": c}


def test_uuid_filter_empty_in_is_left_out():
    a = uuid.uuid4()
    assert get_uuid_filter(UuidFilter(eq=a, in_=[])) == {"$eq": a}


def test_int_filter():
    assert get_int_filter(None) == {}
    assert get_int_filter(IntFilter(gt=1, lte=9)) == {"$gt": 1, "$lte": 9}
    assert get_int_filter(IntFilter(eq=0)) == {"$eq": 0}


def test_float_filter():
    result = get_float64_filter(Float64Filter(eq=1.5, gte=0.5, lt=2.5))
    assert result == {"$eq": 1.5, "$gte": 0.5, "$lt": 2.5}
    assert get_float64_filter(None) == {}


def test_regex_filter():
    assert get_regex_filter("ACTIVE") == {"$regex": "ACTIVE", "$options": "i"}


def test_string_filter():
    assert get_string_filter(None) == {}
    assert get_string_filter(StringFilter(eq="news")) == {"$eq": "news"}
    assert get_string_filter(StringFilter(eq="a", regex="^b")) == {
        "$eq": "a",
        "$regex": "^b",
        "$options": "i",
    }


@pytest.mark.parametrize(
    ("criteria", "expected"),
    [
        (DateFilter(gt=D1, lt=D3), {"$gt": D1, "$lt": D3}),
        (DateFilter(gt=D1, lte=D3), {"$gt": D1, "$lte": D3}),
        (DateFilter(gte=D1, lt=D3), {"$gte": D1, "$lt": D3}),
        (DateFilter(gte=D1, lte=D3), {"$gte": D1, "$lte": D3}),
        (DateFilter(eq=D2), {"$eq": D2}),
        (DateFilter(gt=D1), {"$gt": D1}),
        (DateFilter(lte=D3), {"$lte": D3}),
    ],
)
def test_date_filter(criteria, expected):
    assert get_date_filter(criteria) == expected


def test_date_filter_range_drops_other_fields():
    result = get_date_filter(DateFilter(eq=D2, gt=D1, gte=D1, lt=D3))
    assert result == {"$gt": D1, "$lt": D3}


def test_sort_filter_defaults_to_ascending():
    assert get_sort_filter(SortFilter(sort_by="name")) == [("name", pymongo.ASCENDING)]


def test_sort_filter_descending():
    sort = SortFilter(sort_by="createdAt", sort_order=SortOrder.DESC)
    assert get_sort_filter(sort) == [("createdAt", pymongo.DESCENDING)]


def test_sort_filter_ascending_explicit():
    sort = SortFilter(sort_by="slug", sort_order=SortOrder.ASC)
    assert get_sort_filter(sort) == [("slug", pymongo.ASCENDING)]


def test_sort_filter_empty():
    assert get_sort_filter(None) == []
    assert get_sort_filter(SortFilter(sort_by="", sort_order=SortOrder.DESC)) == []