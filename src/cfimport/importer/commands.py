"""CLI commands for importing from Contentful."""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_dry_run(ctx: Any) -> bool:
    """Extract the dry_run flag from the Click context object."""
    return ctx.dry_run if ctx else False


def _require_credentials(options: Any) -> None:
    missing = []
    if not options.access_token:
        missing.append("--access-token (or CONTENTFUL_ACCESS_TOKEN)")
    if not options.space_id:
        missing.append("--space-id (or CONTENTFUL_SPACE_ID)")
    if missing:
        console.print("[red]Missing Contentful credentials:[/red]")
        for item in missing:
            console.print(f"  - {item}")
        console.print("[dim]Set them on the command line, in the environment, "
                      "or with 'cfimport config set'.[/dim]")
        raise SystemExit(1)


_credential_options = [
    click.option("--access-token", envvar="CONTENTFUL_ACCESS_TOKEN", help="Contentful access token"),
    click.option("--space-id", "--space", envvar="CONTENTFUL_SPACE_ID", help="Contentful space ID"),
    click.option("--api", "api_endpoint", help="API endpoint (default: api.contentful.com)"),
    click.option("--environment", help="Space environment (default: master)"),
]


def credential_options(func):
    """Attach the shared Contentful connection options to a command."""
    for option in reversed(_credential_options):
        func = option(func)
    return func


@click.command(name="import")
@credential_options
@click.option("--post-content-type", help='Posts content type (default: "posts")')
@click.option("--page-content-type", help='Pages content type (default: "pages")')
@click.option("--locale", help='Locale to read from localized fields (default: "en-US")')
@click.option(
    "--clean-entities/--no-clean-entities",
    default=None,
    help="Convert non-ASCII characters to HTML entities (default: on)",
)
@click.option(
    "--more-excerpt/--no-more-excerpt",
    default=None,
    help="Use text before <!-- more --> as excerpt when none is set (default: on)",
)
@click.option(
    "--more-anchor/--no-more-anchor",
    default=None,
    help="Replace <!-- more --> with anchors (default: on)",
)
@click.option(
    "--status",
    help='Comma separated allowed statuses (default: "publish"; also draft, private, revision; "all" for everything)',
)
@click.option("--extension", help='Post file extension (default: "html")')
@click.option(
    "-o", "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    help="Site directory to write into (default: current directory)",
)
@click.option(
    "--markdown/--no-markdown",
    default=None,
    help="Convert bodies to Markdown (requires markdownify)",
)
@click.pass_obj
def import_cmd(
    ctx,
    access_token: str | None,
    space_id: str | None,
    api_endpoint: str | None,
    environment: str | None,
    post_content_type: str | None,
    page_content_type: str | None,
    locale: str | None,
    clean_entities: bool | None,
    more_excerpt: bool | None,
    more_anchor: bool | None,
    status: str | None,
    extension: str | None,
    output_dir: str | None,
    markdown: bool | None,
) -> None:
    """Import posts and pages from a Contentful space.

    Posts go to _posts/YYYY-MM-DD-slug.EXT, drafts to _drafts/slug.md and
    pages to slug/index.EXT nested under their parent pages.

    \b
    Examples:
        cfimport import --space-id abc123 --access-token TOKEN
        cfimport import --status publish,draft -o ./site
        cfimport -n import   # Preview target paths
    """
    from cfimport.contentful.client import ContentfulError
    from cfimport.core.config import resolve_options
    from cfimport.importer.runner import process

    options = resolve_options(
        access_token=access_token,
        space_id=space_id,
        api_endpoint=api_endpoint,
        environment=environment,
        post_content_type=post_content_type,
        page_content_type=page_content_type,
        locale=locale,
        clean_entities=clean_entities,
        more_excerpt=more_excerpt,
        more_anchor=more_anchor,
        status=status,
        extension=extension,
        output_dir=output_dir,
        markdown=markdown,
    )
    _require_credentials(options)

    try:
        process(options, dry_run=_get_dry_run(ctx))
    except ContentfulError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e


@click.command(name="content-types")
@credential_options
def content_types_cmd(
    access_token: str | None,
    space_id: str | None,
    api_endpoint: str | None,
    environment: str | None,
) -> None:
    """List the content types defined in a Contentful space.

    Useful for finding the ids to pass to --post-content-type and
    --page-content-type.
    """
    from cfimport.contentful.client import ContentfulClient, ContentfulError
    from cfimport.core.config import resolve_options

    options = resolve_options(
        access_token=access_token,
        space_id=space_id,
        api_endpoint=api_endpoint,
        environment=environment,
    )
    _require_credentials(options)

    client = ContentfulClient(
        access_token=options.access_token,
        space_id=options.space_id,
        api_endpoint=options.api_endpoint,
        environment=options.environment,
    )

    try:
        types = client.get_content_types()
    except ContentfulError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e

    if not types:
        console.print("[yellow]No content types found[/yellow]")
        return

    table = Table(title=f"Content types in {options.space_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Fields", style="dim")

    for content_type in types:
        field_ids = [f.get("id", "") for f in content_type.get("fields", [])]
        table.add_row(
            content_type.get("sys", {}).get("id", ""),
            content_type.get("name", ""),
            ", ".join(field_ids),
        )

    console.print(table)
