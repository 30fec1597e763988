"""Blog post loading, metadata derivation and lookup."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

# en-US month names, independent of the process locale.
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")

_TEXT_FIELDS = ("title", "image", "author", "teaser", "content")


class PostDataError(ValueError):
    """Raised when the posts file is missing or malformed."""


@dataclass(frozen=True)
class RawPost:
    """A post record as stored in the posts file."""

    title: str
    image: str
    author: str
    created_at: int
    teaser: str
    content: str


@dataclass(frozen=True)
class EnrichedPost:
    """A post plus the display fields derived from it."""

    title: str
    image: str
    author: str
    created_at: int
    teaser: str
    content: str
    formatted_date: str
    slug: str


def slugify(title: str) -> str:
    """Lowercase the title and join its alphanumeric runs with hyphens."""

    slug = _NON_SLUG_RE.sub("-", title.lower())
    return slug.strip("-")


def format_date(timestamp: int) -> str:
    """Render a unix timestamp (seconds, UTC) as e.g. ``January 5, 2024``."""

    value = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def enrich(posts: Iterable[RawPost]) -> Tuple[EnrichedPost, ...]:
    """Attach the display date and slug to each post, keeping source order."""

    return tuple(
        EnrichedPost(
            title=post.title,
            image=post.image,
            author=post.author,
            created_at=post.created_at,
            teaser=post.teaser,
            content=post.content,
            formatted_date=format_date(post.created_at),
            slug=slugify(post.title),
        )
        for post in posts
    )


def find_by_slug(posts: Sequence[EnrichedPost], slug: str) -> Optional[EnrichedPost]:
    """Return the first post whose slug matches, or ``None``.

    Titles that normalize to the same slug are not deduplicated, so the
    earliest post in source order wins.
    """

    for post in posts:
        if post.slug == slug:
            return post
    return None


def first_post(posts: Sequence[EnrichedPost]) -> Optional[EnrichedPost]:
    """Return the first post in source order, or ``None`` when there are none."""

    if not posts:
        return None
    return posts[0]


def _parse_record(record: Any, index: int, source: Path) -> RawPost:
    if not isinstance(record, dict):
        raise PostDataError(f"{source}: post #{index} is not an object")

    values: Dict[str, Any] = {}
    for field in _TEXT_FIELDS:
        value = record.get(field)
        if not isinstance(value, str):
            raise PostDataError(f"{source}: post #{index} field '{field}' must be a string")
        values[field] = value

    created_at = record.get("createdAt")
    # bool is an int subclass; reject it explicitly.
    if isinstance(created_at, bool) or not isinstance(created_at, int):
        raise PostDataError(f"{source}: post #{index} field 'createdAt' must be an integer")
    try:
        format_date(created_at)
    except (OverflowError, OSError, ValueError) as exc:
        raise PostDataError(f"{source}: post #{index} field 'createdAt' is out of range") from exc

    return RawPost(created_at=created_at, **values)


def load_posts(path: Union[str, Path]) -> Tuple[EnrichedPost, ...]:
    """Read the posts file and return the enriched posts in file order.

    Raises :class:`PostDataError` if the file cannot be read or does not hold
    a JSON array of post objects.
    """

    source = Path(path)
    try:
        with open(source, encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise PostDataError(f"Cannot read posts file {source}: {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PostDataError(f"Posts file {source} is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise PostDataError(f"{source}: expected a JSON array of posts")

    return enrich(_parse_record(record, i, source) for i, record in enumerate(data))
