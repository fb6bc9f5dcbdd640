# apps/review_ui/main.py
import html

import streamlit as st

# --- 1. Page Config ---
st.set_page_config(layout="wide", page_title="Book Review App")

from apps.common.logging import get_logger
from apps.common.settings import load_settings
from apps.review_ui.adapters import REVIEW_COLUMNS, page_count, paginate, sort_reviews
from apps.review_ui.controller import FormController
from apps.review_ui.domain import DEFAULT_RATING, RATING_MAX, RATING_MIN, FormFields, Notice
from services.catalog.client import CatalogClient

SETTINGS = load_settings()
SUBMISSION_ORDER = "Submission order"

log = get_logger("bookreview.ui")

READONLY_CSS = """
<style>
.readonly-text {
  background-color: #f8f9fa;
  border: 1px solid #dee2e6;
  border-radius: 4px;
  padding: 6px 12px;
  font-size: 14px;
  color: #555;
  margin-bottom: 10px;
}
.readonly-label {
  font-weight: bold;
  margin-bottom: 5px;
  display: block;
}
</style>
"""


# --- Helper Functions ---
@st.cache_resource
def get_catalog() -> CatalogClient:
    # Stateless; shared by every session in this process.
    return CatalogClient(
        SETTINGS.catalog_url,
        timeout_s=SETTINGS.request_timeout_s,
        api_key=SETTINGS.api_key,
    )


def get_controller() -> FormController:
    if "controller" not in st.session_state:
        st.session_state.controller = FormController(get_catalog())
        log.info("new review session started")
    return st.session_state.controller


def _form_fields() -> FormFields:
    return FormFields(
        isbn=st.session_state.isbn,
        rating=st.session_state.rating,
        review_text=st.session_state.review_text,
    )


def _apply_fields(fields: FormFields) -> None:
    st.session_state.isbn = fields.isbn
    st.session_state.rating = fields.rating
    st.session_state.review_text = fields.review_text


def _readonly(label: str, value: str, style: str = "") -> None:
    st.markdown(
        f'<span class="readonly-label">{html.escape(label)}</span>'
        f'<div class="readonly-text" style="{style}">{html.escape(value)}</div>',
        unsafe_allow_html=True,
    )


def _show_notice(notice: Notice) -> None:
    if notice.level == "error":
        st.error(notice.message)
    elif notice.level == "warning":
        st.warning(notice.message)
    else:
        st.success(notice.message)


# --- Callbacks (run before widgets are re-created, so they may reset them) ---
def on_fetch() -> None:
    with st.spinner("Fetching book information... Please wait while we retrieve the book details."):
        st.session_state.notice = get_controller().fetch(st.session_state.isbn)


def on_submit() -> None:
    notice, fields = get_controller().submit(_form_fields())
    _apply_fields(fields)
    st.session_state.notice = notice


def on_clear() -> None:
    _apply_fields(get_controller().clear())
    st.session_state.notice = None


# --- Main App ---
controller = get_controller()
for key, default in (("isbn", ""), ("rating", DEFAULT_RATING), ("review_text", "")):
    if key not in st.session_state:
        st.session_state[key] = default

st.markdown(READONLY_CSS, unsafe_allow_html=True)
st.title("Book Review App")

# Sidebar form
with st.sidebar:
    st.header("Add Book Review")
    st.text_input("Enter ISBN:", placeholder="e.g., 9780132350884", key="isbn")
    st.button("Fetch Book Info", type="primary", key="fetch", on_click=on_fetch)

    book = controller.current_book
    if controller.book_loaded and book is not None:
        _readonly("Title:", book.title)
        _readonly("Author:", book.author)
        _readonly("Description:", book.description, style="height: 80px; overflow-y: auto;")
        extras = []
        if book.publisher:
            extras.append(book.publisher)
        if book.published_date:
            extras.append(book.published_date)
        if book.page_count:
            extras.append(f"{book.page_count} pages")
        if extras:
            st.caption(" · ".join(extras))

    st.number_input("Your Rating (1-5):", min_value=RATING_MIN, max_value=RATING_MAX, step=1, key="rating")
    st.text_area("Your Review:", height=120, placeholder="Write your review here...", key="review_text")
    st.button("Submit Review", key="submit", on_click=on_submit)
    st.button("Clear Form", key="clear", on_click=on_clear)

# Transient notice from the last action
notice = st.session_state.pop("notice", None)
if notice is not None:
    _show_notice(notice)

st.header("Book Reviews")

if controller.has_reviews:
    frame = controller.reviews_frame()

    col_sort, col_dir, col_page = st.columns([2, 1, 1])
    with col_sort:
        sort_by = st.selectbox("Sort by", [SUBMISSION_ORDER] + REVIEW_COLUMNS, key="sort_by")
    with col_dir:
        descending = st.checkbox("Descending", key="sort_desc")

    frame = sort_reviews(
        frame,
        None if sort_by == SUBMISSION_ORDER else sort_by,
        ascending=not descending,
    )

    pages = page_count(len(frame), SETTINGS.page_size)
    page = 1
    if pages > 1:
        with col_page:
            page = st.number_input("Page", min_value=1, max_value=pages, step=1, key="reviews_page")

    st.dataframe(paginate(frame, page, SETTINGS.page_size), hide_index=True)
    st.caption(f"{len(frame)} review(s), page {page} of {pages}")
else:
    st.markdown("#### No reviews yet")
    st.caption("Add your first book review using the form on the left.")
