from __future__ import annotations

import requests

import services.catalog.client as client_mod
from apps.common.settings import DEFAULT_CATALOG_URL, load_settings
from services.catalog.client import (
    BookRecord,
    CatalogClient,
    NotFound,
    RequestFailed,
    Success,
    normalize_volume_info,
)


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, json_error: Exception | None = None):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response


FULL_ITEM = {
    "totalItems": 1,
    "items": [
        {
            "volumeInfo": {
                "title": "Clean Code",
                "authors": ["Robert C. Martin"],
                "description": "A handbook of agile software craftsmanship.",
                "publisher": "Prentice Hall",
                "publishedDate": "2008-08-01",
                "pageCount": 464,
            }
        }
    ],
}


def make_client(session: FakeSession, **kwargs) -> CatalogClient:
    return CatalogClient("https://catalog.test/volumes", session=session, **kwargs)


def test_lookup_success_normalizes_first_item():
    session = FakeSession(FakeResponse(200, FULL_ITEM))
    out = make_client(session, timeout_s=5.0).lookup("9780132350884")

    assert out == Success(
        BookRecord(
            title="Clean Code",
            author="Robert C. Martin",
            description="A handbook of agile software craftsmanship.",
            publisher="Prentice Hall",
            published_date="2008-08-01",
            page_count=464,
        )
    )
    url, params, timeout = session.calls[0]
    assert url == "https://catalog.test/volumes"
    assert params == {"q": "isbn:9780132350884"}
    assert timeout == 5.0


def test_default_base_url_comes_from_settings(tmp_path, monkeypatch):
    for key in ("BOOKREVIEW_CONFIG_PATH", "BOOKREVIEW_CATALOG_URL"):
        monkeypatch.delenv(key, raising=False)
    session = FakeSession(FakeResponse(200, FULL_ITEM))
    CatalogClient(session=session).lookup("1")
    assert session.calls[0][0] == DEFAULT_CATALOG_URL
    assert load_settings(str(tmp_path / "missing.yaml")).catalog_url == DEFAULT_CATALOG_URL


def test_lookup_sends_api_key_when_configured():
    session = FakeSession(FakeResponse(200, FULL_ITEM))
    make_client(session, api_key="secret").lookup("123")
    assert session.calls[0][1] == {"q": "isbn:123", "key": "secret"}


def test_lookup_uses_only_first_item():
    payload = {
        "totalItems": 2,
        "items": [
            {"volumeInfo": {"title": "First"}},
            {"volumeInfo": {"title": "Second"}},
        ],
    }
    out = make_client(FakeSession(FakeResponse(200, payload))).lookup("1")
    assert isinstance(out, Success)
    assert out.book.title == "First"


def test_lookup_zero_results_is_not_found():
    out = make_client(FakeSession(FakeResponse(200, {"totalItems": 0}))).lookup("0000000000")
    assert out == NotFound()


def test_lookup_positive_count_without_items_is_not_found():
    out = make_client(FakeSession(FakeResponse(200, {"totalItems": 3, "items": []}))).lookup("1")
    assert out == NotFound()


def test_lookup_non_2xx_is_request_failed():
    for status in (404, 429, 500):
        out = make_client(FakeSession(FakeResponse(status, FULL_ITEM))).lookup("1")
        assert out == RequestFailed("API request failed")


def test_lookup_accepts_any_2xx():
    out = make_client(FakeSession(FakeResponse(203, FULL_ITEM))).lookup("1")
    assert isinstance(out, Success)


def test_lookup_unparsable_json_is_request_failed():
    session = FakeSession(FakeResponse(200, json_error=ValueError("Expecting value: line 1 column 1")))
    out = make_client(session).lookup("1")
    assert out == RequestFailed("Error: Expecting value: line 1 column 1")


def test_lookup_network_error_is_request_failed():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    out = make_client(session).lookup("1")
    assert isinstance(out, RequestFailed)
    assert out.reason == "Error: connection refused"


def test_lookup_schema_violation_is_request_failed():
    session = FakeSession(FakeResponse(200, {"items": []}))
    out = make_client(session).lookup("1")
    assert isinstance(out, RequestFailed)
    assert out.reason.startswith("Error: ")
    assert "totalItems" in out.reason


def test_lookup_never_raises_on_unexpected_errors(monkeypatch):
    def boom(_info):
        raise KeyError("volumeInfo")

    monkeypatch.setattr(client_mod, "normalize_volume_info", boom)
    out = make_client(FakeSession(FakeResponse(200, FULL_ITEM))).lookup("1")
    assert isinstance(out, RequestFailed)
    assert out.reason.startswith("Error: ")


def test_normalize_defaults_missing_fields():
    book = normalize_volume_info({})
    assert book.title == "Unknown"
    assert book.author == "Unknown"
    assert book.description == "No description available"
    assert book.publisher is None
    assert book.published_date is None
    assert book.page_count is None


def test_normalize_defaults_each_field_independently():
    book = normalize_volume_info({"title": "Dune", "authors": [], "description": "   "})
    assert book.title == "Dune"
    assert book.author == "Unknown"
    assert book.description == "No description available"


def test_normalize_joins_authors():
    book = normalize_volume_info({"authors": ["Kernighan", "Ritchie"]})
    assert book.author == "Kernighan, Ritchie"


def test_normalize_handles_missing_volume_info():
    assert normalize_volume_info(None) == BookRecord(
        title="Unknown", author="Unknown", description="No description available"
    )
