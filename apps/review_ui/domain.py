# apps/review_ui/domain.py
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

RATING_MIN = 1
RATING_MAX = 5
DEFAULT_RATING = 5


class FormValidationError(ValueError):
    """Missing form input. Recovered locally as a warning."""


@dataclass(frozen=True)
class Review:
    isbn: str
    title: str
    author: str
    rating: int
    review_text: str
    date: date

    def __post_init__(self) -> None:
        if not (RATING_MIN <= self.rating <= RATING_MAX):
            raise ValueError(f"rating must be between {RATING_MIN} and {RATING_MAX}, got {self.rating}")

    def to_row(self) -> Dict[str, Any]:
        return {
            "ISBN": self.isbn,
            "Title": self.title,
            "Author": self.author,
            "Rating": self.rating,
            "Review": self.review_text,
            "Date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class FormFields:
    isbn: str = ""
    rating: Optional[int] = DEFAULT_RATING
    review_text: str = ""


@dataclass(frozen=True)
class Notice:
    level: str           # "info", "warning" or "error"
    message: str
