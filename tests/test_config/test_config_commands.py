"""Tests for cfimport.config.commands CLI module."""

import pytest
import yaml
from click.testing import CliRunner

from cfimport.config.commands import (
    CONFIG_SCHEMA,
    config,
    set_config_value,
)
from cfimport.core.config import (
    ImportOptions,
    OPTION_KEYS,
    get_config_value,
    load_global_config,
    resolve_options,
)


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Schema consistency
# ---------------------------------------------------------------------------


def test_schema_covers_every_option():
    """Every import option can be set through the config commands."""
    assert set(CONFIG_SCHEMA) == set(OPTION_KEYS.values())


def test_schema_defaults_match_options():
    defaults = ImportOptions()
    for name, key in OPTION_KEYS.items():
        schema_default = CONFIG_SCHEMA[key]["default"]
        if schema_default is None:
            continue
        if name == "output_dir":
            assert str(defaults.output_dir) == schema_default
        else:
            assert getattr(defaults, name) == schema_default


# ---------------------------------------------------------------------------
# set_config_value
# ---------------------------------------------------------------------------


def test_set_config_value_nested(isolated_config):
    set_config_value("contentful.space_id", "abc")
    assert yaml.safe_load(isolated_config.read_text()) == {"contentful": {"space_id": "abc"}}


def test_set_config_value_preserves_siblings():
    set_config_value("contentful.space_id", "abc")
    set_config_value("contentful.environment", "staging")
    cfg = load_global_config()
    assert cfg["contentful"] == {"space_id": "abc", "environment": "staging"}


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def test_show_empty(runner):
    result = runner.invoke(config, ["show"])
    assert result.exit_code == 0
    assert "No settings in" in result.output


def test_show_all(runner):
    result = runner.invoke(config, ["show", "--all"])
    assert result.exit_code == 0
    assert "Configuration" in result.output


def test_set_and_get(runner):
    result = runner.invoke(config, ["set", "contentful.space_id", "abc123"])
    assert result.exit_code == 0
    assert get_config_value("contentful.space_id") == "abc123"

    result = runner.invoke(config, ["get", "contentful.space_id"])
    assert "abc123" in result.output


def test_get_default(runner):
    result = runner.invoke(config, ["get", "import.extension"])
    assert result.exit_code == 0
    assert "html" in result.output
    assert "default" in result.output


def test_set_bool(runner):
    runner.invoke(config, ["set", "import.clean_entities", "false"])
    assert get_config_value("import.clean_entities") is False
    assert resolve_options().clean_entities is False


def test_set_status_list(runner):
    runner.invoke(config, ["set", "import.status", "publish,draft"])
    assert get_config_value("import.status") == ["publish", "draft"]
    assert resolve_options().status == ["publish", "draft"]


def test_secret_is_masked(runner):
    result = runner.invoke(config, ["set", "contentful.access_token", "supersecrettoken"])
    assert result.exit_code == 0
    assert "supersecrettoken" not in result.output
    assert get_config_value("contentful.access_token") == "supersecrettoken"


def test_unknown_key(runner):
    result = runner.invoke(config, ["set", "nope.key", "x"])
    assert "Unknown setting" in result.output
    assert load_global_config() == {}


def test_reset_single(runner):
    runner.invoke(config, ["set", "import.extension", "md"])
    result = runner.invoke(config, ["reset", "import.extension"])
    assert result.exit_code == 0
    assert get_config_value("import.extension") is None


def test_reset_already_default(runner):
    result = runner.invoke(config, ["reset", "import.extension"])
    assert "already at default" in result.output


def test_reset_all(runner, isolated_config):
    runner.invoke(config, ["set", "import.extension", "md"])
    result = runner.invoke(config, ["reset", "--all", "--force"])
    assert result.exit_code == 0
    assert not isolated_config.exists()


def test_reset_requires_key(runner):
    result = runner.invoke(config, ["reset"])
    assert "Specify a key" in result.output


def test_path(runner, isolated_config):
    result = runner.invoke(config, ["path"])
    assert result.exit_code == 0
    assert "config.yaml" in result.output


def test_reset_with_non_dict_section(runner, isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("import: oops\n")
    result = runner.invoke(config, ["reset", "import.extension"])
    assert result.exit_code == 0
    assert "already at default" in result.output


def test_set_replaces_non_dict_section(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("contentful: oops\n")
    set_config_value("contentful.locale", "de-DE")
    assert load_global_config()["contentful"] == {"locale": "de-DE"}
