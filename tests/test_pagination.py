import math

import pytest

from jobfinder.client.pagination import PageWindow, compute_page_window, total_pages


def test_window_is_contiguous_and_in_range():
    for total_items in range(0, 120, 7):
        for page_size in (1, 10, 15):
            pages_total = math.ceil(total_items / page_size)
            for max_buttons in (1, 3, 5, 7):
                for current in range(-1, pages_total + 3):
                    window = compute_page_window(current, total_items, page_size, max_buttons)
                    pages = list(window.pages)
                    assert len(pages) == min(max_buttons, pages_total)
                    if pages:
                        assert pages == list(range(pages[0], pages[0] + len(pages)))
                    assert all(1 <= p <= pages_total for p in pages)
                    assert window.total_pages == pages_total


def test_current_page_in_window_when_valid():
    for current in range(1, 21):
        window = compute_page_window(current, 200, 10, 5)
        assert current in window.pages


def test_empty_when_no_items():
    window = compute_page_window(1, 0, 15, 5)
    assert window.pages == ()
    assert not window
    assert not window.show_first and not window.show_last


def test_engineer_search_scenario():
    # 42 results at 15 per page -> 3 pages
    assert compute_page_window(1, 42, 15, 5).pages == (1, 2, 3)
    assert compute_page_window(3, 42, 15, 5).pages == (1, 2, 3)


def test_five_pages_fill_window():
    assert compute_page_window(1, 75, 15, 5).pages == (1, 2, 3, 4, 5)


@pytest.mark.parametrize(
    "current, expected",
    [
        (1, (1, 2, 3, 4, 5)),
        (3, (1, 2, 3, 4, 5)),
        (4, (2, 3, 4, 5, 6)),
        (10, (8, 9, 10, 11, 12)),
        (19, (16, 17, 18, 19, 20)),
        (20, (16, 17, 18, 19, 20)),
        (99, (16, 17, 18, 19, 20)),
    ],
)
def test_window_centers_and_shifts_inward(current, expected):
    assert compute_page_window(current, 200, 10, 5).pages == expected


def test_edge_controls():
    start = compute_page_window(1, 200, 10, 5)
    assert not start.show_first and not start.leading_ellipsis
    assert start.show_last and start.trailing_ellipsis

    near_start = compute_page_window(4, 200, 10, 5)
    assert near_start.pages[0] == 2
    assert near_start.show_first
    assert not near_start.leading_ellipsis

    middle = compute_page_window(10, 200, 10, 5)
    assert middle.show_first and middle.leading_ellipsis
    assert middle.show_last and middle.trailing_ellipsis

    near_end = compute_page_window(17, 200, 10, 5)
    assert near_end.pages[-1] == 19
    assert near_end.show_last
    assert not near_end.trailing_ellipsis


def test_total_pages():
    assert total_pages(0, 15) == 0
    assert total_pages(15, 15) == 1
    assert total_pages(16, 15) == 2
    with pytest.raises(ValueError):
        total_pages(10, 0)


def test_window_is_falsy_only_when_empty():
    assert PageWindow(pages=(1,), total_pages=1)
    assert not PageWindow(pages=(), total_pages=0)
