# apps/review_ui/controller.py
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional, Tuple

import pandas as pd

from apps.common.logging import get_logger
from apps.review_ui.adapters import reviews_to_frame
from apps.review_ui.domain import (
    DEFAULT_RATING,
    RATING_MAX,
    RATING_MIN,
    FormFields,
    FormValidationError,
    Notice,
    Review,
)
from apps.review_ui.state import SessionState
from services.catalog.client import BookRecord, NotFound, RequestFailed, Success

log = get_logger("bookreview.form")

MSG_ENTER_ISBN = "Please enter an ISBN"
MSG_LOADED = "Book information loaded successfully!"
MSG_NOT_FOUND = "No book found with this ISBN"
MSG_INCOMPLETE = "Please fetch book information and fill in your review"
MSG_SUBMITTED = "Review submitted successfully!"


def clamp_rating(rating: Optional[Any]) -> int:
    if rating is None:
        return DEFAULT_RATING
    return min(RATING_MAX, max(RATING_MIN, int(rating)))


class FormController:
    """
    Fetch / submit / clear against one session's state.
    Every action leaves the form in a well-defined state; nothing here raises
    for bad user input.
    """

    def __init__(
        self,
        catalog: Any,
        state: Optional[SessionState] = None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.catalog = catalog
        self.state = state or SessionState()
        self._today = today
        self.busy = False

    # --- Derived view signals ---
    @property
    def book_loaded(self) -> bool:
        return self.state.current_book is not None

    @property
    def has_reviews(self) -> bool:
        return len(self.state.reviews) > 0

    @property
    def current_book(self) -> Optional[BookRecord]:
        return self.state.current_book

    def reviews_frame(self) -> pd.DataFrame:
        return reviews_to_frame(self.state.reviews)

    # --- Actions ---
    def fetch(self, isbn: str) -> Notice:
        identifier = (isbn or "").strip()
        if not identifier:
            return Notice("warning", MSG_ENTER_ISBN)

        self.busy = True
        try:
            outcome = self.catalog.lookup(identifier)
        finally:
            self.busy = False

        if isinstance(outcome, Success):
            self.state.set_current_book(outcome.book)
            log.info("fetch isbn=%s loaded title=%r", identifier, outcome.book.title)
            return Notice("info", MSG_LOADED)

        self.state.set_current_book(None)
        if isinstance(outcome, NotFound):
            log.info("fetch isbn=%s not found", identifier)
            return Notice("error", MSG_NOT_FOUND)
        if isinstance(outcome, RequestFailed):
            log.info("fetch isbn=%s failed: %s", identifier, outcome.reason)
            return Notice("error", outcome.reason)
        raise TypeError(f"unexpected lookup outcome: {outcome!r}")

    def _build_review(self, fields: FormFields) -> Review:
        isbn = (fields.isbn or "").strip()
        text = fields.review_text or ""
        book = self.state.current_book
        if not isbn or book is None or not text.strip():
            raise FormValidationError(MSG_INCOMPLETE)
        return Review(
            isbn=isbn,
            title=book.title,
            author=book.author,
            rating=clamp_rating(fields.rating),
            review_text=text,
            date=self._today(),
        )

    def submit(self, fields: FormFields) -> Tuple[Notice, FormFields]:
        try:
            review = self._build_review(fields)
        except FormValidationError as e:
            return Notice("warning", str(e)), fields

        self.state.append_review(review)
        self.state.set_current_book(None)
        log.info("review submitted isbn=%s rating=%d total=%d", review.isbn, review.rating, len(self.state.reviews))
        return Notice("info", MSG_SUBMITTED), FormFields()

    def clear(self) -> FormFields:
        self.state.set_current_book(None)
        return FormFields()
