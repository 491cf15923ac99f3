"""Decide which posts are listed at a given moment.

A post is hidden while it is a draft, and while its publish timestamp lies
within the scheduled-post margin of the current time, so future-dated posts
appear on their own once ``pub_datetime + margin`` has passed.
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import logging
import typing as typ

if typ.TYPE_CHECKING:
    from ..config import SiteConfig
    from .models import BlogPost

logger = logging.getLogger(__name__)


def _as_utc(moment: dt.datetime) -> dt.datetime:
    if not isinstance(moment, dt.datetime):
        msg = f"'now' must be a datetime, got {moment!r}."
        raise TypeError(msg)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=dt.UTC)
    return moment.astimezone(dt.UTC)


def _as_margin(margin: dt.timedelta | int) -> dt.timedelta:
    match margin:
        case dt.timedelta():
            delta = margin
        case bool():
            msg = f"margin must be a timedelta or milliseconds, got {margin!r}."
            raise TypeError(msg)
        case int():
            delta = dt.timedelta(milliseconds=margin)
        case _:
            msg = f"margin must be a timedelta or milliseconds, got {margin!r}."
            raise TypeError(msg)
    if delta < dt.timedelta(0):
        msg = f"margin must not be negative, got {delta}."
        raise ValueError(msg)
    return delta


def is_visible(post: BlogPost, *, cutoff: dt.datetime) -> bool:
    """Return True when ``post`` is not a draft and was published by ``cutoff``."""
    return not post.draft and post.pub_datetime <= cutoff


def visible_posts(
    posts: cabc.Iterable[BlogPost],
    *,
    now: dt.datetime,
    margin: dt.timedelta | int,
) -> list[BlogPost]:
    """Return the displayable posts, newest first.

    Parameters
    ----------
    posts : Iterable[BlogPost]
        The full post collection in its original order.
    now : datetime.datetime
        Current wall-clock time; naive values are read as UTC.
    margin : datetime.timedelta or int
        Scheduled-post margin, as a timedelta or in milliseconds.

    Returns
    -------
    list[BlogPost]
        Posts that are not drafts and whose publish timestamp is not after
        ``now - margin``, sorted by publish timestamp descending. Posts with
        equal timestamps keep their input order.

    Raises
    ------
    TypeError
        If ``now`` is not a datetime or ``margin`` has an unsupported type.
    ValueError
        If ``margin`` is negative.
    """
    delta = _as_margin(margin)
    cutoff = _as_utc(now) - delta
    shown: list[BlogPost] = []
    for post in posts:
        if is_visible(post, cutoff=cutoff):
            shown.append(post)
        elif post.draft:
            logger.debug("hiding draft %s", post.slug or post.title)
        else:
            logger.debug(
                "hiding scheduled post %s until %s",
                post.slug or post.title,
                post.pub_datetime + delta,
            )
    return sorted(shown, key=lambda post: post.pub_datetime, reverse=True)


def visible_posts_for(
    site: SiteConfig,
    posts: cabc.Iterable[BlogPost],
    *,
    now: dt.datetime | None = None,
) -> list[BlogPost]:
    """Apply :func:`visible_posts` with the site's margin and the current time."""
    moment = now if now is not None else dt.datetime.now(dt.UTC)
    return visible_posts(posts, now=moment, margin=site.scheduled_margin)


__all__ = ["is_visible", "visible_posts", "visible_posts_for"]
