# services/catalog/client.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from apps.common.logging import get_logger
from apps.common.settings import DEFAULT_CATALOG_URL
from services.validation.schema_validation import validate_with_schema

UNKNOWN = "Unknown"
NO_DESCRIPTION = "No description available"

log = get_logger("bookreview.catalog")

@dataclass(frozen=True)
class BookRecord:
    title: str
    author: str
    description: str
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    page_count: Optional[int] = None

@dataclass(frozen=True)
class Success:
    book: BookRecord

@dataclass(frozen=True)
class NotFound:
    pass

@dataclass(frozen=True)
class RequestFailed:
    reason: str

FetchOutcome = Union[Success, NotFound, RequestFailed]

def _present(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None

def _join_authors(authors: Any) -> Optional[str]:
    if isinstance(authors, str):
        return _present(authors)
    names = [s for s in (_present(a) for a in (authors or [])) if s]
    return ", ".join(names) if names else None

def normalize_volume_info(info: Optional[Dict[str, Any]]) -> BookRecord:
    """
    Map a catalog `volumeInfo` object to a BookRecord.
    Each field falls back on its own when missing, null or blank.
    """
    info = info or {}
    page_count = info.get("pageCount")
    return BookRecord(
        title=_present(info.get("title")) or UNKNOWN,
        author=_join_authors(info.get("authors")) or UNKNOWN,
        description=_present(info.get("description")) or NO_DESCRIPTION,
        publisher=_present(info.get("publisher")),
        published_date=_present(info.get("publishedDate")),
        page_count=int(page_count) if isinstance(page_count, int) else None,
    )

class CatalogClient:
    def __init__(
        self,
        base_url: str = DEFAULT_CATALOG_URL,
        *,
        timeout_s: Optional[float] = None,
        api_key: Optional[str] = None,
        session: Any = None,
    ) -> None:
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.api_key = api_key
        self.session = session or requests.Session()

    def _params(self, identifier: str) -> Dict[str, str]:
        params = {"q": f"isbn:{identifier}"}
        if self.api_key:
            params["key"] = self.api_key
        return params

    def lookup(self, identifier: str) -> FetchOutcome:
        """
        One GET against the volumes search endpoint.
        Failures come back as RequestFailed; nothing is raised to the caller.
        """
        try:
            r = self.session.get(self.base_url, params=self._params(identifier), timeout=self.timeout_s)
            if not (200 <= r.status_code < 300):
                log.warning("catalog lookup isbn=%s http_status=%s", identifier, r.status_code)
                return RequestFailed("API request failed")

            data = r.json()
            is_valid, msg = validate_with_schema(data, "volumes")
            if not is_valid:
                log.warning("catalog lookup isbn=%s malformed payload: %s", identifier, msg)
                return RequestFailed(f"Error: {msg}")

            items = data.get("items") or []
            if data.get("totalItems", 0) <= 0 or not items:
                log.info("catalog lookup isbn=%s not found", identifier)
                return NotFound()

            book = normalize_volume_info(items[0].get("volumeInfo"))
        except Exception as e:
            log.warning("catalog lookup isbn=%s failed: %s", identifier, e)
            return RequestFailed(f"Error: {e}")

        log.info("catalog lookup isbn=%s found title=%r", identifier, book.title)
        return Success(book)
