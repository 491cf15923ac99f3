"""Split ordered post listings into fixed-size pages.

An empty listing still has one (empty) page so the first listing URL always
resolves. Out-of-range page indexes raise ``IndexError`` instead of being
clamped; they mean the caller built a bad link.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import Page

T = typ.TypeVar("T")


def _check_page_size(page_size: int) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        msg = f"page_size must be a positive integer, got {page_size!r}."
        raise ValueError(msg)
    return page_size


def total_pages(n: int, page_size: int) -> int:
    """Return the number of pages needed for ``n`` items.

    >>> [total_pages(n, 3) for n in (0, 3, 4, 9)]
    [1, 1, 2, 3]
    """
    _check_page_size(page_size)
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        msg = f"n must be a non-negative integer, got {n!r}."
        raise ValueError(msg)
    if n == 0:
        return 1
    return -(-n // page_size)


def page_slice(
    posts: cabc.Sequence[T], page_index: int, page_size: int
) -> list[T]:
    """Return the items on the zero-based page ``page_index``.

    Raises
    ------
    ValueError
        If ``page_size`` is not a positive integer.
    IndexError
        If ``page_index`` is negative or past the last page.
    """
    pages = total_pages(len(posts), page_size)
    if isinstance(page_index, bool) or not isinstance(page_index, int):
        msg = f"page index must be an integer, got {page_index!r}."
        raise TypeError(msg)
    if not 0 <= page_index < pages:
        msg = f"page index {page_index} out of range for {pages} page(s)."
        raise IndexError(msg)
    start = page_index * page_size
    return list(posts[start : min(len(posts), start + page_size)])


def paginate(posts: cabc.Sequence[T], page_size: int) -> list[Page[T]]:
    """Return every page of ``posts`` in order."""
    pages = total_pages(len(posts), page_size)
    return [
        Page(index=index, total=pages, items=tuple(page_slice(posts, index, page_size)))
        for index in range(pages)
    ]


__all__ = ["page_slice", "paginate", "total_pages"]
