"""Tests for URL building and parameter encoding."""

import json
import math

import pytest

from generic_api_client.encoding import encode_form, encode_json, flatten_params
from generic_api_client.errors import InvalidUrlError, SerializationError
from generic_api_client.url import build_url, is_absolute_url


class TestIsAbsoluteUrl:
    """Test detection of fully qualified URLs."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "url",
        ["https://dummyjson.com/products", "http://localhost:8080", "https://other.example/endpoint?x=1"],
    )
    def test_absolute(self, url):
        """URLs with scheme and host are absolute."""
        assert is_absolute_url(url)

    @pytest.mark.unit
    @pytest.mark.parametrize("url", ["/products", "products", "?limit=1", ""])
    def test_relative(self, url):
        """Paths and bare query strings are not absolute."""
        assert not is_absolute_url(url)


class TestBuildUrl:
    """Test build_url base URL and query handling."""

    @pytest.mark.unit
    def test_get_with_base_url_and_params(self):
        """GET params are appended to the base URL + path."""
        url = build_url("GET", "/products", {"limit": 25}, base_url="https://dummyjson.com")
        assert str(url) == "https://dummyjson.com/products?limit=25"

    @pytest.mark.unit
    def test_absolute_url_ignores_base_url(self):
        """An absolute URL is used verbatim."""
        url = build_url("GET", "https://other.example/endpoint", base_url="https://dummyjson.com")
        assert str(url) == "https://other.example/endpoint"

    @pytest.mark.unit
    def test_base_url_concatenation_is_plain(self):
        """Duplicate slashes are not normalized away."""
        url = build_url("POST", "/products", base_url="https://dummyjson.com/")
        assert str(url) == "https://dummyjson.com//products"

    @pytest.mark.unit
    def test_method_is_case_insensitive(self):
        """Lower-case get still folds params into the query."""
        url = build_url("get", "https://api.example.com/items", {"page": 2})
        assert url.params["page"] == "2"

    @pytest.mark.unit
    def test_non_get_ignores_params(self):
        """POST params never reach the query string."""
        url = build_url("POST", "https://api.example.com/items", {"page": 2})
        assert str(url) == "https://api.example.com/items"

    @pytest.mark.unit
    def test_existing_query_is_merged(self):
        """Existing keys are replaced and new keys appended."""
        url = build_url("GET", "https://api.example.com/items?page=1&sort=asc", {"page": 2, "limit": 10})

        assert url.params["page"] == "2"
        assert url.params["sort"] == "asc"
        assert url.params["limit"] == "10"

    @pytest.mark.unit
    def test_empty_params_leave_url_untouched(self):
        """No trailing question mark without params."""
        url = build_url("GET", "https://api.example.com/items", {})
        assert str(url) == "https://api.example.com/items"

    @pytest.mark.unit
    def test_nested_params(self):
        """Lists repeat keys and mappings use brackets."""
        url = build_url("GET", "https://api.example.com/items", {"ids": [1, 2], "filter": {"brand": "acme"}})

        assert url.params.get_list("ids") == ["1", "2"]
        assert url.params["filter[brand]"] == "acme"

    @pytest.mark.unit
    def test_invalid_url_raises(self):
        """Unparsable URLs raise InvalidUrlError carrying the URL."""
        with pytest.raises(InvalidUrlError) as exc_info:
            build_url("GET", ":notaport/items", base_url="https://api.example.com")

        assert exc_info.value.url == "https://api.example.com:notaport/items"


class TestEncoding:
    """Test parameter encoders."""

    @pytest.mark.unit
    def test_flatten_params(self):
        """Nested structures flatten in order, skipping None."""
        pairs = flatten_params(
            {
                "q": "phone",
                "missing": None,
                "tags": ["a", "b"],
                "filter": {"brand": "x", "price": {"max": 10}},
                "rows": [{"id": 1}],
                "matrix": [[1, 2], (3,)],
                "active": True,
                "archived": [False],
            }
        )

        assert pairs == [
            ("q", "phone"),
            ("tags", "a"),
            ("tags", "b"),
            ("filter[brand]", "x"),
            ("filter[price][max]", 10),
            ("rows[0][id]", 1),
            ("matrix[0][0]", 1),
            ("matrix[0][1]", 2),
            ("matrix[1][0]", 3),
            ("active", 1),
            ("archived", 0),
        ]

    @pytest.mark.unit
    def test_encode_form(self):
        """Form bodies are URL encoded."""
        assert encode_form({"name": "john", "age": 30, "tags": ["a", "b"]}) == b"name=john&age=30&tags=a&tags=b"

    @pytest.mark.unit
    def test_encode_json(self):
        """JSON bodies round-trip through json.loads."""
        assert json.loads(encode_json({"a": [1, 2]})) == {"a": [1, 2]}

    @pytest.mark.unit
    def test_encode_json_rejects_unserializable(self):
        """Values JSON cannot represent raise SerializationError."""
        with pytest.raises(SerializationError):
            encode_json({"when": object()})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_encode_json_rejects_non_finite_numbers(self, value):
        """NaN and infinities are not valid JSON."""
        with pytest.raises(SerializationError):
            encode_json({"v": value})

    @pytest.mark.unit
    def test_nested_lists_in_query(self):
        """Lists inside lists keep their values instead of being stringified."""
        url = build_url("GET", "https://x.example/a", {"m": [[1, 2]]})

        assert url.params["m[0][0]"] == "1"
        assert url.params["m[0][1]"] == "2"
        assert "m" not in url.params

    @pytest.mark.unit
    def test_booleans_encode_as_digits(self):
        """True and False are sent as 1 and 0."""
        assert encode_form({"active": True, "deleted": False}) == b"active=1&deleted=0"
