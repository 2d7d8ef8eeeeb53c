"""
Configuration and option resolution.

Import options come from four places. For each option the first one that
provides a value wins:
  1. Command-line flag
  2. Environment variable (CONTENTFUL_ACCESS_TOKEN, CONTENTFUL_SPACE_ID)
  3. Global config file (~/.config/cfimport/config.yaml)
  4. Built-in default
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

DEFAULT_API_ENDPOINT = "api.contentful.com"
DEFAULT_ENVIRONMENT = "master"
DEFAULT_LOCALE = "en-US"
DEFAULT_POST_CONTENT_TYPE = "posts"
DEFAULT_PAGE_CONTENT_TYPE = "pages"
DEFAULT_EXTENSION = "html"
DEFAULT_STATUS = ("publish",)


@dataclass
class ImportOptions:
    """Settings for a single import run."""

    access_token: str = ""
    space_id: str = ""
    api_endpoint: str = DEFAULT_API_ENDPOINT
    environment: str = DEFAULT_ENVIRONMENT
    locale: str = DEFAULT_LOCALE
    post_content_type: str = DEFAULT_POST_CONTENT_TYPE
    page_content_type: str = DEFAULT_PAGE_CONTENT_TYPE
    clean_entities: bool = True
    more_excerpt: bool = True
    more_anchor: bool = True
    extension: str = DEFAULT_EXTENSION
    status: list[str] = field(default_factory=lambda: list(DEFAULT_STATUS))
    output_dir: Path = field(default_factory=lambda: Path("."))
    markdown: bool = False

    def allows_status(self, status: str) -> bool:
        """Check whether entries with this status should be migrated.

        An empty status list allows everything.
        """
        if not self.status:
            return True
        return status in self.status


# Option name -> dotted key in the global config file
OPTION_KEYS: dict[str, str] = {
    "access_token": "contentful.access_token",
    "space_id": "contentful.space_id",
    "api_endpoint": "contentful.api_endpoint",
    "environment": "contentful.environment",
    "locale": "contentful.locale",
    "post_content_type": "contentful.post_content_type",
    "page_content_type": "contentful.page_content_type",
    "clean_entities": "import.clean_entities",
    "more_excerpt": "import.more_excerpt",
    "more_anchor": "import.more_anchor",
    "extension": "import.extension",
    "status": "import.status",
    "output_dir": "import.output_dir",
    "markdown": "import.markdown",
}


def get_global_config_path() -> Path:
    """Return the path to the global cfimport config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/cfimport/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "cfimport" / "config.yaml"


def load_global_config() -> dict:
    """Load the global cfimport configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        text = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
        return {}
    except (OSError, yaml.YAMLError):
        return {}


def save_global_config(config: dict[str, Any]) -> None:
    """Write the global configuration as YAML."""
    config_path = get_global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.dump(config, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )


def get_config_value(key: str, default: Any = None, config: dict | None = None) -> Any:
    """Get a configuration value by dotted key.

    Args:
        key: Dotted key such as ``contentful.space_id``
        default: Returned when the key is not set
        config: Config dict to read (loads the global config if omitted)

    Returns:
        The stored value or ``default``
    """
    current: Any = load_global_config() if config is None else config
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default
    return current


def parse_status(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Normalize a status filter to a list of lowercase status names.

    Accepts a comma separated string (``"publish,draft"``) or a sequence,
    possibly containing comma separated items. ``"all"`` yields an empty
    list, which allows every status.
    """
    if value is None:
        return []
    items = [value] if isinstance(value, str) else list(value)
    statuses: list[str] = []
    for item in items:
        for part in str(item).split(","):
            part = part.strip().lower()
            if part and part not in statuses:
                statuses.append(part)
    if "all" in statuses:
        return []
    return statuses


def resolve_options(**overrides: Any) -> ImportOptions:
    """Build ImportOptions from CLI overrides, the config file and defaults.

    Overrides whose value is None are treated as "not given" so the config
    file or the default applies.

    Args:
        **overrides: Option values keyed by ImportOptions field name

    Returns:
        Fully resolved ImportOptions

    Raises:
        TypeError: If an override names an unknown option
    """
    known = {f.name for f in fields(ImportOptions)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown import option(s): {', '.join(sorted(unknown))}")

    config = load_global_config()
    values: dict[str, Any] = {}

    for name in known:
        value = overrides.get(name)
        if value is None:
            value = get_config_value(OPTION_KEYS[name], config=config)
        if value is None:
            continue
        values[name] = value

    if "status" in values:
        values["status"] = parse_status(values["status"])
    if "output_dir" in values:
        values["output_dir"] = Path(values["output_dir"]).expanduser()

    return ImportOptions(**values)
