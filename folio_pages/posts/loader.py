r"""Parse markdown content files into blog posts and standalone pages.

Each content file starts with a YAML front-matter block delimited by ``---``
lines, followed by the free-form markdown body. The front matter uses the
same camelCase keys as the site configuration (``pubDatetime``,
``modDatetime``). Bodies are kept as markdown; converting them to HTML is the
rendering layer's job.

Example
-------
>>> from folio_pages.posts.loader import parse_post
>>> post = parse_post(
...     "---\ntitle: Digit DP\ndescription: Counting digits\n"
...     "pubDatetime: 2024-03-02T10:00:00Z\n---\nBody\n",
...     source_path="digit-dp.md",
... )
>>> post.slug
'digit-dp'
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import logging
import re
import typing as typ
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..config.helpers import _optional_str, _parse_timestamp
from .models import BlogPost, PostFormatError, StaticPage

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
CONTENT_SUFFIXES = frozenset({".md", ".mdx"})
DEFAULT_TAGS = ("others",)


def _slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "post"


def _split_front_matter(text: str, source_path: str) -> tuple[dict[str, typ.Any], str]:
    """Return the parsed front matter mapping and the remaining body."""
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        msg = f"{source_path}: missing '---' front matter block."
        raise PostFormatError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"{source_path}: invalid YAML front matter: {exc}"
        raise PostFormatError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"{source_path}: front matter must be a mapping."
        raise PostFormatError(msg)
    return dict(loaded), text[match.end() :].lstrip("\r\n")


def _required_text(meta: cabc.Mapping[str, typ.Any], key: str, source_path: str) -> str:
    value = _optional_str(meta.get(key))
    if value is None:
        msg = f"{source_path}: front matter requires '{key}'."
        raise PostFormatError(msg)
    return value


def _flag(meta: cabc.Mapping[str, typ.Any], key: str, source_path: str) -> bool:
    value = meta.get(key, False)
    if isinstance(value, bool):
        return value
    msg = f"{source_path}: '{key}' must be true or false, got {value!r}."
    raise PostFormatError(msg)


def _timestamp(
    meta: cabc.Mapping[str, typ.Any], key: str, source_path: str, *, required: bool
) -> dt.datetime | None:
    raw = meta.get(key)
    if raw is None and not required:
        return None
    parsed = _parse_timestamp(raw)
    if parsed is None:
        problem = "requires" if raw is None else "has an unparseable"
        msg = f"{source_path}: front matter {problem} '{key}' ({raw!r})."
        raise PostFormatError(msg)
    return parsed


def _tags(meta: cabc.Mapping[str, typ.Any], source_path: str) -> tuple[str, ...]:
    match meta.get("tags"):
        case None:
            return DEFAULT_TAGS
        case list() as items:
            tags = tuple(text for item in items if (text := _optional_str(item)))
            return tags or DEFAULT_TAGS
        case other:
            msg = f"{source_path}: 'tags' must be a list, got {other!r}."
            raise PostFormatError(msg)


def parse_post(text: str, *, source_path: str) -> BlogPost:
    """Parse one content file into a :class:`BlogPost`.

    Parameters
    ----------
    text : str
        Full file contents, front matter included.
    source_path : str
        Path relative to the content root; used for the default slug, error
        messages, and edit links.

    Returns
    -------
    BlogPost
        The validated post.

    Raises
    ------
    PostFormatError
        If the front matter is missing, is not a mapping, or lacks the
        ``title``, ``description`` or ``pubDatetime`` fields, or if any
        field has the wrong type.
    """
    meta, body = _split_front_matter(text, source_path)
    slug_source = _optional_str(meta.get("slug")) or PurePosixPath(source_path).stem
    return BlogPost(
        title=_required_text(meta, "title", source_path),
        description=_required_text(meta, "description", source_path),
        pub_datetime=_timestamp(meta, "pubDatetime", source_path, required=True),
        mod_datetime=_timestamp(meta, "modDatetime", source_path, required=False),
        featured=_flag(meta, "featured", source_path),
        draft=_flag(meta, "draft", source_path),
        tags=_tags(meta, source_path),
        body=body,
        slug=_slugify(slug_source),
        source_path=source_path,
    )


def _read_source(path: Path, source_path: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{source_path}: not valid UTF-8: {exc}"
        raise PostFormatError(msg) from exc


def discover_content(root: Path) -> list[Path]:
    """Return sorted markdown files under ``root`` (or ``[root]`` for a file)."""
    if root.is_file():
        return [root] if root.suffix in CONTENT_SUFFIXES else []
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix in CONTENT_SUFFIXES
    )


def load_posts(root: Path) -> list[BlogPost]:
    """Load every post below ``root`` in sorted path order.

    Raises
    ------
    FileNotFoundError
        If ``root`` does not exist.
    PostFormatError
        If any file is malformed or two posts share a slug.
    """
    if not root.exists():
        msg = f"Content directory '{root}' not found."
        raise FileNotFoundError(msg)

    base = root if root.is_dir() else root.parent
    posts: list[BlogPost] = []
    seen: dict[str, str] = {}
    for path in discover_content(root):
        source_path = path.relative_to(base).as_posix()
        post = parse_post(_read_source(path, source_path), source_path=source_path)
        if post.slug in seen:
            msg = (
                f"{source_path}: slug '{post.slug}' is already used by "
                f"{seen[post.slug]}."
            )
            raise PostFormatError(msg)
        seen[post.slug] = source_path
        posts.append(post)
    logger.debug("loaded %d posts from %s", len(posts), root)
    return posts


def load_page(path: Path) -> StaticPage:
    """Load a standalone page such as ``content/about.md``."""
    text = _read_source(path, path.name)
    meta, body = _split_front_matter(text, path.name)
    title = _required_text(meta, "title", path.name)
    slug = _slugify(_optional_str(meta.get("slug")) or path.stem)
    return StaticPage(title=title, body=body, slug=slug, source_path=path.name)


__all__ = [
    "CONTENT_SUFFIXES",
    "FRONT_MATTER_PATTERN",
    "discover_content",
    "load_page",
    "load_posts",
    "parse_post",
]
