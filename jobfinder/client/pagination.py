"""Page-number window for result navigation."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageWindow:
    """The page buttons to render plus the edge controls around them."""

    pages: tuple[int, ...]
    total_pages: int
    show_first: bool = False
    show_last: bool = False
    leading_ellipsis: bool = False
    trailing_ellipsis: bool = False

    def __bool__(self) -> bool:
        return bool(self.pages)


def total_pages(total_items: int, page_size: int) -> int:
    """Number of pages needed for ``total_items`` at ``page_size`` per page."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(max(total_items, 0) / page_size)


def compute_page_window(
    current_page: int,
    total_items: int,
    page_size: int,
    max_buttons: int = 5,
) -> PageWindow:
    """
    Compute the contiguous page numbers to show around ``current_page``.

    The window holds ``min(max_buttons, total_pages)`` pages, is centered on
    the current page (clamped to the valid range) and shifted inward when it
    would run past either end. ``total_items`` is the count across all pages,
    not the size of the current page.
    """
    pages_total = total_pages(total_items, page_size)
    length = min(max_buttons, pages_total)
    if length <= 0:
        return PageWindow(pages=(), total_pages=pages_total)

    current = min(max(current_page, 1), pages_total)
    start = current - length // 2
    start = max(1, min(start, pages_total - length + 1))
    pages = tuple(range(start, start + length))

    first, last = pages[0], pages[-1]
    return PageWindow(
        pages=pages,
        total_pages=pages_total,
        show_first=first > 1,
        show_last=last < pages_total,
        # At least one page hidden between the edge control and the window
        leading_ellipsis=first > 2,
        trailing_ellipsis=last < pages_total - 1,
    )
