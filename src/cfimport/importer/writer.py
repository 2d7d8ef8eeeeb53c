"""
Output file construction.

Builds the YAML header for a record, works out where the file goes, and
writes header plus body to disk.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from cfimport.contentful.entries import PostRecord

POSTS_DIR = "_posts"
DRAFTS_DIR = "_drafts"


def format_date(date: datetime | None) -> str:
    """Format a date for the header, with UTC offset when known."""
    if date is None:
        return ""
    if date.tzinfo is not None:
        return date.strftime("%Y-%m-%d %H:%M:%S %z")
    return date.strftime("%Y-%m-%d %H:%M:%S")


def published_flag(status: str) -> bool | None:
    """Map a status to the header's ``published`` value.

    Drafts get no flag at all, published posts True, anything else False.
    """
    if status == "draft":
        return None
    return status == "publish"


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def build_header(
    record: PostRecord,
    title: str,
    excerpt: str,
    more_anchor: str | None = None,
) -> dict[str, Any]:
    """Build the header mapping for a record.

    Keys with None or empty-string values are dropped, as is an author
    mapping with nothing in it.

    Args:
        record: Source record
        title: Title to use (possibly entity-cleaned)
        excerpt: Excerpt to use (possibly derived from the more marker)
        more_anchor: Anchor name when a more anchor was inserted

    Returns:
        Ordered header dict
    """
    author = {
        "display_name": record.author,
        "login": record.author_login,
        "email": record.author_email,
        "url": record.author_url,
    }
    data: dict[str, Any] = {
        "layout": record.type,
        "status": record.status,
        "published": published_flag(record.status),
        "title": title,
        "author": {k: v for k, v in author.items() if v} or None,
        "author_login": record.author_login,
        "author_email": record.author_email,
        "author_url": record.author_url,
        "excerpt": excerpt,
        "more_anchor": more_anchor,
        "contentful_id": record.id,
        "contentful_url": record.guid,
        "date": format_date(record.date),
        "date_gmt": record.date_gmt,
    }
    return {k: v for k, v in data.items() if not _is_empty(v)}


def render_document(header: dict[str, Any], body: str) -> str:
    """Render header and body as a complete file."""
    yaml_str = yaml.dump(
        header,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=120,
    )
    return f"---\n{yaml_str}---\n{body.rstrip(chr(10))}\n"


def page_path(page_id: str | None, page_tree: dict[str, dict[str, Any]]) -> str:
    """Directory path of a page built from its ancestors' slugs.

    Args:
        page_id: Page entry id
        page_tree: Mapping of page id to ``{"slug": ..., "parent": ...}``

    Returns:
        Path like ``"about/team/"``, or ``""`` for an unknown id
    """
    parts: list[str] = []
    seen: set[str] = set()
    current = page_id
    while current and current in page_tree and current not in seen:
        seen.add(current)
        parts.append(page_tree[current]["slug"])
        current = page_tree[current].get("parent")
    return "".join(f"{slug}/" for slug in reversed(parts))


def post_filename(
    record: PostRecord,
    slug: str,
    extension: str,
    page_tree: dict[str, dict[str, Any]],
) -> Path:
    """Relative output path for a record.

    - pages: ``<ancestors>/<slug>/index.<ext>``
    - drafts: ``_drafts/<slug>.md``
    - posts: ``_posts/YYYY-MM-DD-<slug>.<ext>``
    """
    if record.is_page:
        directory = page_path(record.id, page_tree) or f"{slug}/"
        return Path(f"{directory}index.{extension}")
    if record.is_draft:
        return Path(DRAFTS_DIR) / f"{slug}.md"

    date = record.date or datetime.now()
    name = "%04d-%02d-%02d-%s.%s" % (date.year, date.month, date.day, slug, extension)
    return Path(POSTS_DIR) / name


def write_document(path: Path, content: str, root: Path | None = None) -> None:
    """Write a rendered document, creating parent directories.

    Raises:
        ValueError: If ``root`` is given and ``path`` resolves outside it
    """
    if root is not None and not path.resolve().is_relative_to(root.resolve()):
        raise ValueError(f"Refusing to write outside {root}: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
