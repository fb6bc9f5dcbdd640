# apps/review_ui/state.py
from __future__ import annotations

from typing import List, Optional, Tuple

from apps.review_ui.domain import Review
from services.catalog.client import BookRecord


class SessionState:
    """Current book plus the append-only review log for one session."""

    def __init__(self) -> None:
        self._current_book: Optional[BookRecord] = None
        self._reviews: List[Review] = []

    @property
    def current_book(self) -> Optional[BookRecord]:
        return self._current_book

    @property
    def reviews(self) -> Tuple[Review, ...]:
        return tuple(self._reviews)

    def set_current_book(self, book: Optional[BookRecord]) -> None:
        self._current_book = book

    def append_review(self, review: Review) -> None:
        self._reviews.append(review)
