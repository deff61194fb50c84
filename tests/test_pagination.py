import pytest

from event_manager.models import Pagination
from event_manager.pagination import page_window


def test_single_page_is_not_visible():
    window = page_window(Pagination(page=1, limit=10, total=4, total_pages=1))

    assert not window.visible
    assert window.first_item == 1
    assert window.last_item == 4
    assert not window.has_previous
    assert not window.has_next


def test_empty_result():
    window = page_window(Pagination())

    assert window.page == 1
    assert window.first_item == 0
    assert window.last_item == 0
    assert window.pages == []
    assert not window.visible


def test_last_page_is_partial():
    window = page_window(Pagination(page=3, limit=10, total=25, total_pages=3))

    assert window.first_item == 21
    assert window.last_item == 25
    assert window.has_previous
    assert not window.has_next
    assert window.pages == [1, 2, 3]


@pytest.mark.parametrize("page, expected", [
    (1, [1, 2, 3, 4, 5, None, 20]),
    (10, [1, None, 8, 9, 10, 11, 12, None, 20]),
    (20, [1, None, 16, 17, 18, 19, 20]),
    (4, [1, 2, 3, 4, 5, 6, None, 20]),
])
def test_window_with_gaps(page, expected):
    window = page_window(Pagination(page=page, limit=10, total=200, total_pages=20))
    assert window.pages == expected


def test_page_beyond_last_is_clamped():
    window = page_window(Pagination(page=9, limit=10, total=25, total_pages=3))

    assert window.page == 3
    assert not window.has_next
