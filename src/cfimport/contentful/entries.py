"""
Map raw Contentful entries to post records.

A PostRecord holds the handful of fields the writer needs. It is built once
per entry and thrown away after the file is written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from cfimport.contentful.client import is_link
from cfimport.core.config import DEFAULT_LOCALE

logger = logging.getLogger(__name__)

# Seconds fraction of an ISO time, padded or cut to microseconds before parsing
_FRACTION_RE = re.compile(r"(?<=\d\d:\d\d:\d\d)\.(\d+)")


@dataclass
class PostRecord:
    """One post or page, flattened from a Contentful entry."""

    id: str
    content_type: str = ""
    title: str = ""
    slug: str = ""
    date: datetime | None = None
    date_gmt: str = ""
    content: str = ""
    excerpt: str = ""
    author: str = ""
    author_login: str = ""
    author_email: str = ""
    author_url: str = ""
    status: str = "publish"
    type: str = "post"
    guid: str = ""
    parent: str | None = None

    @property
    def is_page(self) -> bool:
        return self.type == "page"

    @property
    def is_draft(self) -> bool:
        return self.status == "draft"


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 date or datetime string.

    Returns:
        datetime, or None if the value is empty or unparseable
    """
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable date: %r", value)
        return None


def flatten_rich_text(document: dict[str, Any]) -> str:
    """Reduce a rich-text document to plain paragraphs.

    Each top-level block becomes one paragraph; blocks are separated by a
    blank line.
    """

    def _text(node: Any) -> str:
        if not isinstance(node, dict):
            return ""
        if node.get("nodeType") == "text":
            return str(node.get("value", ""))
        return "".join(_text(child) for child in node.get("content", []))

    blocks = [_text(block) for block in document.get("content", [])]
    return "\n\n".join(b for b in blocks if b)


def localize(value: Any, locale: str = DEFAULT_LOCALE) -> Any:
    """Pick one locale out of a ``{"en-US": ...}`` field map.

    The Management API, and the Delivery API with ``locale=*``, key every
    field by locale. Plain values, links and rich-text documents pass
    through unchanged. A map without ``locale`` falls back to its only
    value, and to None when it holds several.
    """
    if not isinstance(value, dict) or "sys" in value or "nodeType" in value:
        return value
    if locale in value:
        return value[locale]
    if len(value) == 1:
        return next(iter(value.values()))
    logger.debug("No %s value among locales %s", locale, ", ".join(value))
    return None


def localize_fields(fields: dict[str, Any] | None, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
    """Apply localize() to every field of an entry."""
    return {key: localize(value, locale) for key, value in (fields or {}).items()}


def _as_text(value: Any) -> str:
    """Render a field value as text."""
    if value is None:
        return ""
    if isinstance(value, dict) and value.get("nodeType") == "document":
        return flatten_rich_text(value)
    if isinstance(value, (dict, list)):
        return ""
    return str(value)


def _resolve(value: Any, linked_entries: dict[str, dict[str, Any]]) -> dict[str, Any] | None:
    """Return the fields of a linked entry, or None."""
    if not is_link(value):
        return None
    entry = linked_entries.get(value["sys"].get("id", ""))
    if entry is None:
        logger.debug("Link %s not in includes", value["sys"].get("id"))
        return None
    return entry.get("fields", {})


def _author_fields(
    fields: dict[str, Any],
    linked_entries: dict[str, dict[str, Any]],
    locale: str = DEFAULT_LOCALE,
) -> dict[str, str]:
    """Collect author name, login, email and url from a string or linked entry."""
    author = fields.get("author")
    result = {"author": "", "author_login": "", "author_email": "", "author_url": ""}

    linked = _resolve(author, linked_entries)
    if linked is not None:
        linked = localize_fields(linked, locale)
        result["author"] = _as_text(linked.get("name") or linked.get("display_name"))
        result["author_login"] = _as_text(linked.get("login"))
        result["author_email"] = _as_text(linked.get("email"))
        result["author_url"] = _as_text(linked.get("url"))
    else:
        result["author"] = _as_text(author)

    # Explicit fields on the entry take precedence
    for key in ("author_login", "author_email", "author_url"):
        if fields.get(key):
            result[key] = _as_text(fields[key])

    return result


def _date_gmt(fields: dict[str, Any], date: datetime | None) -> str:
    if fields.get("date_gmt"):
        return _as_text(fields["date_gmt"])
    if date is not None and date.tzinfo is not None:
        return date.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    return ""


def entry_to_record(
    entry: dict[str, Any],
    linked_entries: dict[str, dict[str, Any]] | None = None,
    page_content_type: str = "pages",
    now: datetime | None = None,
    locale: str = DEFAULT_LOCALE,
) -> PostRecord:
    """Build a PostRecord from a raw Contentful entry.

    Args:
        entry: Entry dict with ``sys`` and ``fields``
        linked_entries: Included entries keyed by id, for resolving links
        page_content_type: Content type id that marks an entry as a page
        now: Fallback date when the entry has neither a date nor createdAt
        locale: Locale to read from locale-keyed field maps

    Returns:
        PostRecord for the entry
    """
    linked_entries = linked_entries or {}
    sys = entry.get("sys", {})
    fields = localize_fields(entry.get("fields"), locale)

    entry_id = str(sys.get("id", ""))
    content_type = sys.get("contentType", {}).get("sys", {}).get("id", "")

    date = parse_date(fields.get("date")) or parse_date(sys.get("createdAt"))
    if date is None:
        date = now or datetime.now()

    default_type = "page" if content_type == page_content_type else "post"

    parent = fields.get("parent")
    if is_link(parent):
        parent = parent["sys"].get("id")
    elif parent is not None:
        parent = str(parent) or None

    return PostRecord(
        id=entry_id,
        content_type=content_type,
        title=_as_text(fields.get("title")),
        slug=_as_text(fields.get("slug")),
        date=date,
        date_gmt=_date_gmt(fields, date),
        content=_as_text(fields.get("content")),
        excerpt=_as_text(fields.get("excerpt")),
        status=_as_text(fields.get("status")).lower() or "publish",
        type=_as_text(fields.get("type")) or default_type,
        guid=_as_text(fields.get("guid") or fields.get("url")),
        parent=parent,
        **_author_fields(fields, linked_entries, locale),
    )
