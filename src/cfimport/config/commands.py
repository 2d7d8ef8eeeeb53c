"""
Configuration management CLI commands.

Manages default import settings stored in the global config.yaml.
"""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.table import Table

from cfimport.core.config import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_ENVIRONMENT,
    DEFAULT_EXTENSION,
    DEFAULT_LOCALE,
    DEFAULT_PAGE_CONTENT_TYPE,
    DEFAULT_POST_CONTENT_TYPE,
    DEFAULT_STATUS,
    get_config_value,
    get_global_config_path,
    load_global_config,
    parse_status,
    save_global_config,
)

console = Console()


def set_config_value(key: str, value: Any) -> None:
    """Set a configuration value by dotted key."""
    config = load_global_config()
    section, name = key.split(".", 1)
    if not isinstance(config.get(section), dict):
        config[section] = {}
    config[section][name] = value
    save_global_config(config)


# Known settings with their types and descriptions
CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "contentful.space_id": {
        "default": None,
        "type": str,
        "description": "Contentful space ID",
    },
    "contentful.access_token": {
        "default": None,
        "type": str,
        "description": "Contentful access token",
        "secret": True,
    },
    "contentful.api_endpoint": {
        "default": DEFAULT_API_ENDPOINT,
        "type": str,
        "description": "API host name",
    },
    "contentful.environment": {
        "default": DEFAULT_ENVIRONMENT,
        "type": str,
        "description": "Space environment",
    },
    "contentful.locale": {
        "default": DEFAULT_LOCALE,
        "type": str,
        "description": "Locale read from localized fields",
    },
    "contentful.post_content_type": {
        "default": DEFAULT_POST_CONTENT_TYPE,
        "type": str,
        "description": "Content type id for posts",
    },
    "contentful.page_content_type": {
        "default": DEFAULT_PAGE_CONTENT_TYPE,
        "type": str,
        "description": "Content type id for pages",
    },
    "import.clean_entities": {
        "default": True,
        "type": bool,
        "description": "Convert non-ASCII characters to HTML entities",
    },
    "import.more_excerpt": {
        "default": True,
        "type": bool,
        "description": "Use text before <!-- more --> as excerpt",
    },
    "import.more_anchor": {
        "default": True,
        "type": bool,
        "description": "Replace <!-- more --> with anchors",
    },
    "import.extension": {
        "default": DEFAULT_EXTENSION,
        "type": str,
        "description": "Post file extension",
    },
    "import.status": {
        "default": list(DEFAULT_STATUS),
        "type": list,
        "description": "Allowed statuses (comma separated)",
    },
    "import.output_dir": {
        "default": ".",
        "type": str,
        "description": "Site directory to write into",
    },
    "import.markdown": {
        "default": False,
        "type": bool,
        "description": "Convert bodies to Markdown",
    },
}


def _display(key: str, value: Any) -> str:
    if value is None:
        return "-"
    if CONFIG_SCHEMA.get(key, {}).get("secret") and value:
        text = str(value)
        return text[:4] + "..." if len(text) > 4 else "***"
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


def _unknown_key(key: str) -> None:
    console.print(f"[red]Unknown setting: {key}[/red]")
    console.print("\nAvailable settings:")
    for k in CONFIG_SCHEMA:
        console.print(f"  - {k}")


@click.group()
def config():
    """Manage cfimport configuration.

    Settings are stored in ~/.config/cfimport/config.yaml.
    """
    pass


@config.command(name="show")
@click.option("--all", "show_all", is_flag=True, help="Show all settings including defaults")
def show_cmd(show_all: bool):
    """Show current configuration.

    Without --all, only shows settings that differ from defaults.
    """
    cfg = load_global_config()
    config_path = get_global_config_path()

    if not cfg and not show_all:
        console.print(f"[dim]No settings in {config_path}. Use --all to see defaults.[/dim]")
        return

    table = Table(title="Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")
    table.add_column("Default", style="dim")
    table.add_column("Description", style="dim")

    for key, schema in CONFIG_SCHEMA.items():
        current = get_config_value(key, config=cfg)
        default = schema["default"]
        is_custom = current is not None and current != default

        if show_all or is_custom:
            display_value = _display(key, current) if current is not None else f"[dim]{_display(key, default)}[/dim]"
            table.add_row(key, display_value, _display(key, default), schema["description"])

    console.print(table)
    console.print(f"\n[dim]Config file: {config_path}[/dim]")


@config.command(name="get")
@click.argument("key")
def get_cmd(key: str):
    """Get a configuration value.

    Examples:
        cfimport config get contentful.space_id
        cfimport config get import.status
    """
    if key not in CONFIG_SCHEMA:
        _unknown_key(key)
        return

    value = get_config_value(key)
    default = CONFIG_SCHEMA[key]["default"]

    if value is None:
        console.print(f"{key} = {_display(key, default)} [dim](default)[/dim]")
    else:
        console.print(f"{key} = {_display(key, value)}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str):
    """Set a configuration value.

    Examples:
        cfimport config set contentful.space_id abc123
        cfimport config set import.status publish,draft
        cfimport config set import.clean_entities false
    """
    if key not in CONFIG_SCHEMA:
        _unknown_key(key)
        return

    schema = CONFIG_SCHEMA[key]

    typed_value: bool | str | list[str]
    if schema["type"] is bool:
        typed_value = value.lower() in ("true", "1", "yes", "on")
    elif schema["type"] is list:
        typed_value = parse_status(value)
    else:
        typed_value = value

    set_config_value(key, typed_value)
    console.print(f"[green]Set {key} = {_display(key, typed_value)}[/green]")


@config.command(name="reset")
@click.argument("key", required=False)
@click.option("--all", "reset_all", is_flag=True, help="Reset all settings to defaults")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
def reset_cmd(key: str | None, reset_all: bool, force: bool):
    """Reset configuration to defaults.

    Examples:
        cfimport config reset import.extension   # Reset single setting
        cfimport config reset --all              # Reset all settings
    """
    if not key and not reset_all:
        console.print("[red]Specify a key or use --all to reset all settings[/red]")
        return

    if reset_all:
        if not force and not click.confirm("Reset all settings to defaults?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

        config_path = get_global_config_path()
        if config_path.exists():
            config_path.unlink()
        console.print("[green]All settings reset to defaults[/green]")
        return

    if key not in CONFIG_SCHEMA:
        _unknown_key(key)
        return

    cfg = load_global_config()
    section, name = key.split(".", 1)
    values = cfg.get(section)

    if isinstance(values, dict) and name in values:
        del values[name]
        save_global_config(cfg)
        console.print(f"[green]Reset {key} to default ({_display(key, CONFIG_SCHEMA[key]['default'])})[/green]")
    else:
        console.print(f"[dim]{key} is already at default[/dim]")


@config.command(name="path")
def path_cmd():
    """Show path to config file."""
    click.echo(str(get_global_config_path()))
