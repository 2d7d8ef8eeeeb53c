"""
Contentful importer.

Fetches pages and posts from a Contentful space and writes them out as
static-site files with a YAML header.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from rich.console import Console

from cfimport.contentful.client import ContentfulClient
from cfimport.contentful.entries import PostRecord, entry_to_record
from cfimport.core.config import DEFAULT_EXTENSION, ImportOptions
from cfimport.importer.transform import apply_more_tag, clean_entities, sluggify
from cfimport.importer.wpautop import wpautop
from cfimport.importer.writer import (
    DRAFTS_DIR,
    POSTS_DIR,
    build_header,
    post_filename,
    render_document,
    write_document,
)

logger = logging.getLogger(__name__)
console = Console()


@dataclass
class ImportResult:
    """Summary of an import run."""

    written: list[Path] = field(default_factory=list)
    skipped_status: int = 0

    @property
    def count(self) -> int:
        return len(self.written)


@dataclass
class PreparedPost:
    """A record after transforms, ready to be written."""

    path: Path
    header: dict[str, Any]
    body: str


def load_markdown_converter() -> Callable[[str], str] | None:
    """Return an HTML to Markdown converter, or None if markdownify is missing."""
    try:
        from markdownify import markdownify
    except ImportError:
        return None

    def convert(html: str) -> str:
        return markdownify(html, heading_style="ATX", bullets="-").strip()

    return convert


def build_page_tree(pages: list[PostRecord]) -> dict[str, dict[str, Any]]:
    """Map page ids to their slug and parent id.

    Slugs are normalized with sluggify(); pages without one get a slug
    derived from the title.
    """
    tree: dict[str, dict[str, Any]] = {}
    for page in pages:
        slug = sluggify(page.slug) or sluggify(page.title) or sluggify(page.id) or "page"
        tree[page.id] = {"slug": slug, "parent": page.parent}
    return tree


def prepare_post(
    record: PostRecord,
    options: ImportOptions,
    page_tree: dict[str, dict[str, Any]],
    to_markdown: Callable[[str], str] | None = None,
) -> PreparedPost:
    """Apply transforms to a record and work out its output file.

    Args:
        record: Record to prepare
        options: Import options (entity cleaning, more-tag handling, extension)
        page_tree: Page tree for nested page paths
        to_markdown: Converter used instead of paragraph formatting

    Returns:
        PreparedPost with relative path, header and body
    """
    title = record.title
    content = record.content
    if options.clean_entities:
        title = clean_entities(title)
        content = clean_entities(content)

    slug = sluggify(record.slug) or sluggify(title) or sluggify(record.id) or "post"

    content, excerpt, more_anchor = apply_more_tag(
        content,
        record.excerpt,
        record.id,
        more_excerpt=options.more_excerpt,
        more_anchor=options.more_anchor,
    )

    header = build_header(record, title=title, excerpt=excerpt, more_anchor=more_anchor)

    extension = options.extension
    if to_markdown is not None:
        body = to_markdown(content)
        if extension == DEFAULT_EXTENSION:
            extension = "md"
    else:
        body = wpautop(content)

    path = post_filename(record, slug, extension, page_tree)
    return PreparedPost(path=path, header=header, body=body)


def _fetch_records(
    client: ContentfulClient,
    content_type: str,
    options: ImportOptions,
) -> list[PostRecord]:
    if not content_type:
        return []
    entries = list(client.get_entries(content_type))
    return [
        entry_to_record(
            entry,
            client.linked_entries,
            page_content_type=options.page_content_type,
            locale=options.locale,
        )
        for entry in entries
    ]


def process(
    options: ImportOptions,
    client: ContentfulClient | None = None,
    dry_run: bool = False,
) -> ImportResult:
    """Run a full import.

    Args:
        options: Resolved import options
        client: API client (built from the options if not given)
        dry_run: Report target paths without writing anything

    Returns:
        ImportResult with the written paths and skip counts

    Raises:
        ContentfulError: If the API cannot be read
    """
    if dry_run:
        console.print("=" * 60)
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")
        console.print("=" * 60)
        console.print()

    to_markdown = None
    if options.markdown:
        to_markdown = load_markdown_converter()
        if to_markdown is None:
            console.print(
                "[yellow]Could not import 'markdownify', so the "
                "--markdown option is now disabled.[/yellow]"
            )
            options = replace(options, markdown=False)

    output_dir = Path(options.output_dir)
    if not dry_run:
        (output_dir / POSTS_DIR).mkdir(parents=True, exist_ok=True)
        if options.allows_status("draft"):
            (output_dir / DRAFTS_DIR).mkdir(parents=True, exist_ok=True)

    if client is None:
        client = ContentfulClient(
            access_token=options.access_token,
            space_id=options.space_id,
            api_endpoint=options.api_endpoint,
            environment=options.environment,
        )

    console.print(f"[cyan]Fetching pages ({options.page_content_type or 'none'})...[/cyan]")
    pages = _fetch_records(client, options.page_content_type, options)
    page_tree = build_page_tree(pages)
    console.print(f"Found {len(pages)} pages")

    console.print(f"[cyan]Fetching posts ({options.post_content_type})...[/cyan]")
    posts = _fetch_records(client, options.post_content_type, options)
    console.print(f"Found {len(posts)} posts")

    result = ImportResult()

    for record in pages + posts:
        if not options.allows_status(record.status):
            logger.debug("Skipping %s (status %s)", record.id, record.status)
            result.skipped_status += 1
            continue

        prepared = prepare_post(record, options, page_tree, to_markdown=to_markdown)
        target = output_dir / prepared.path

        if dry_run:
            console.print(f"  [dim]Would write {target}[/dim]")
            result.written.append(target)
            continue

        write_document(target, render_document(prepared.header, prepared.body), root=output_dir)
        console.print(f"  [green]✓[/green] {prepared.path}")
        result.written.append(target)

    console.print()
    verb = "Would import" if dry_run else "Imported"
    console.print(f"[green]{verb} {result.count} files[/green]")
    if result.skipped_status:
        console.print(f"[dim]Skipped {result.skipped_status} entries by status[/dim]")

    return result
