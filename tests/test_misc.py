from blogkit.misc import get_header_string


def test_returns_first_value_of_matching_header():
    headers = {"Authorization": ["Bearer token", "other"], "Accept": ["text/html"]}
    assert get_header_string("Authorization", headers) == "Bearer token"
    assert get_header_string("Accept", headers) == "text/html"


def test_missing_header_is_empty():
    assert get_header_string("X-Request-Id", {"Accept": ["text/html"]}) == ""


def test_match_is_case_sensitive():
    assert get_header_string("X-Request-Id", {"x-request-id": ["abc"]}) == ""


def test_plain_string_values_are_accepted():
    assert get_header_string("Accept", {"Accept": "application/json"}) == "application/json"


def test_empty_value_list_is_empty():
    assert get_header_string("Accept", {"Accept": []}) == ""