# apps/review_ui/adapters.py
from __future__ import annotations

import math
from typing import Iterable, List, Optional

import pandas as pd

from apps.review_ui.domain import Review

REVIEW_COLUMNS: List[str] = ["ISBN", "Title", "Author", "Rating", "Review", "Date"]


def reviews_to_frame(reviews: Iterable[Review]) -> pd.DataFrame:
    rows = [r.to_row() for r in reviews]
    return pd.DataFrame(rows, columns=REVIEW_COLUMNS)


def sort_reviews(frame: pd.DataFrame, column: Optional[str] = None, ascending: bool = True) -> pd.DataFrame:
    """None keeps submission order. Ties keep submission order too (stable sort)."""
    if column is None:
        return frame if ascending else frame.iloc[::-1]
    if column not in REVIEW_COLUMNS:
        raise ValueError(f"unknown column: {column}")
    return frame.sort_values(by=column, ascending=ascending, kind="mergesort")


def page_count(total_rows: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return max(1, math.ceil(total_rows / page_size))


def paginate(frame: pd.DataFrame, page: int, page_size: int) -> pd.DataFrame:
    pages = page_count(len(frame), page_size)
    page = min(max(1, int(page)), pages)
    start = (page - 1) * page_size
    return frame.iloc[start : start + page_size].reset_index(drop=True)
