"""Unit tests for the post visibility filter.

The filter hides drafts and posts whose publish timestamp is after
``now - margin``, then sorts newest first with ties kept in input order.
These tests pin the boundary (exactly at the cutoff is visible), timezone
handling, and the stability guarantees that keep builds reproducible.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from conftest import NOW, make_post, slugs
from folio_pages.posts import visible_posts, visible_posts_for

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from folio_pages.config import SiteConfig

MARGIN = dt.timedelta(minutes=15)


def test_drafts_are_hidden() -> None:
    """Draft posts never appear, however old they are."""
    posts = [
        make_post("old-draft", NOW - dt.timedelta(days=300), draft=True),
        make_post("live", NOW - dt.timedelta(days=1)),
    ]
    assert slugs(visible_posts(posts, now=NOW, margin=MARGIN)) == ["live"]


def test_cutoff_boundary() -> None:
    """A post exactly at now - margin is visible; one second later is not."""
    cutoff = NOW - MARGIN
    posts = [
        make_post("at-cutoff", cutoff),
        make_post("after-cutoff", cutoff + dt.timedelta(seconds=1)),
        make_post("future", NOW + dt.timedelta(days=1)),
    ]
    shown = slugs(visible_posts(posts, now=NOW, margin=MARGIN))
    assert shown == ["at-cutoff"], f"expected only the post at the cutoff, got {shown}"


def test_margin_accepts_milliseconds() -> None:
    """Integer margins are read as milliseconds."""
    post = make_post("recent", NOW - dt.timedelta(minutes=10))
    assert visible_posts([post], now=NOW, margin=15 * 60 * 1000) == []
    assert visible_posts([post], now=NOW, margin=5 * 60 * 1000) == [post]


def test_zero_margin_shows_posts_published_now() -> None:
    """With no margin a post published at 'now' is visible."""
    post = make_post("now", NOW)
    assert visible_posts([post], now=NOW, margin=0) == [post]


def test_negative_margin_rejected() -> None:
    """Negative margins are a caller error."""
    with pytest.raises(ValueError, match="negative"):
        visible_posts([], now=NOW, margin=dt.timedelta(minutes=-1))


def test_naive_now_is_read_as_utc() -> None:
    """A naive 'now' is compared as UTC rather than local time."""
    post = make_post("edge", NOW - MARGIN)
    naive_now = NOW.replace(tzinfo=None)
    assert visible_posts([post], now=naive_now, margin=MARGIN) == [post]


def test_naive_publish_timestamps_are_read_as_utc() -> None:
    """Posts built with naive timestamps compare as UTC instead of failing."""
    naive_old = make_post("naive-old", dt.datetime(2024, 1, 1))
    naive_future = make_post("naive-future", (NOW + MARGIN).replace(tzinfo=None))
    aware = make_post("aware", NOW - dt.timedelta(days=2))
    assert naive_old.pub_datetime.tzinfo is dt.UTC
    visible = visible_posts([naive_old, naive_future, aware], now=NOW, margin=0)
    assert slugs(visible) == ["aware", "naive-old"], (
        f"unexpected visible posts {slugs(visible)}"
    )


def test_other_timezones_compare_by_instant() -> None:
    """Offsets are normalised, so the same instant gives the same result."""
    tokyo = dt.timezone(dt.timedelta(hours=9))
    post = make_post("tokyo", (NOW - MARGIN).astimezone(tokyo))
    assert visible_posts([post], now=NOW.astimezone(tokyo), margin=MARGIN) == [post]


def test_sorted_newest_first_with_stable_ties() -> None:
    """Posts sort by publish time descending; equal times keep input order."""
    same = NOW - dt.timedelta(days=2)
    posts = [
        make_post("oldest", NOW - dt.timedelta(days=9)),
        make_post("tie-a", same),
        make_post("newest", NOW - dt.timedelta(days=1)),
        make_post("tie-b", same),
        make_post("tie-c", same),
    ]
    shown = slugs(visible_posts(posts, now=NOW, margin=MARGIN))
    assert shown == ["newest", "tie-a", "tie-b", "tie-c", "oldest"]


def test_output_is_a_subset_without_hidden_posts() -> None:
    """The result invents nothing and honours both exclusion rules."""
    posts = [
        make_post(f"post-{i}", NOW - dt.timedelta(hours=i * 7), draft=i % 3 == 0)
        for i in range(12)
    ]
    shown = visible_posts(posts, now=NOW, margin=MARGIN)
    assert all(any(post is original for original in posts) for post in shown)
    assert not any(post.draft for post in shown)
    assert all(post.pub_datetime <= NOW - MARGIN for post in shown)


def test_filtering_twice_is_idempotent() -> None:
    """Re-filtering the output yields the same sequence."""
    same = NOW - dt.timedelta(days=3)
    posts = [
        make_post(f"p{i}", same if i % 2 else NOW - dt.timedelta(days=i))
        for i in range(8)
    ]
    once = visible_posts(posts, now=NOW, margin=MARGIN)
    twice = visible_posts(once, now=NOW, margin=MARGIN)
    assert once == twice
    assert visible_posts(posts, now=NOW, margin=MARGIN) == once


def test_input_is_not_mutated() -> None:
    """The caller's collection keeps its order."""
    posts = [
        make_post("older", NOW - dt.timedelta(days=5)),
        make_post("newer", NOW - dt.timedelta(days=1)),
    ]
    visible_posts(posts, now=NOW, margin=MARGIN)
    assert slugs(posts) == ["older", "newer"]


def test_visible_posts_for_uses_site_margin(site: SiteConfig) -> None:
    """The site-level helper applies the configured 15 minute margin."""
    posts = [
        make_post("ten-minutes-ago", NOW - dt.timedelta(minutes=10)),
        make_post("hour-ago", NOW - dt.timedelta(hours=1)),
    ]
    assert slugs(visible_posts_for(site, posts, now=NOW)) == ["hour-ago"]


def test_visible_posts_for_defaults_to_current_time(
    site: SiteConfig, mocker: MockerFixture
) -> None:
    """Without an explicit 'now' the current UTC time is used."""
    spy = mocker.patch("folio_pages.posts.visibility.visible_posts", return_value=[])
    visible_posts_for(site, [])
    moment = spy.call_args.kwargs["now"]
    assert moment.tzinfo is not None, "expected an aware datetime for 'now'"
    assert abs(dt.datetime.now(dt.UTC) - moment) < dt.timedelta(minutes=1)
    assert spy.call_args.kwargs["margin"] == site.scheduled_margin
