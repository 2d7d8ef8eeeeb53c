"""Tests for cfimport.core.config module.

Covers:
  - get_global_config_path() with default and XDG_CONFIG_HOME
  - load_global_config() with missing, valid, and invalid files
  - parse_status() normalization
  - resolve_options() precedence (override > config file > default)
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from cfimport.core.config import (
    ImportOptions,
    get_config_value,
    get_global_config_path,
    load_global_config,
    parse_status,
    resolve_options,
    save_global_config,
)


# ---------------------------------------------------------------------------
# get_global_config_path
# ---------------------------------------------------------------------------

class TestGetGlobalConfigPath:
    """Tests for get_global_config_path()."""

    def test_default_path(self, monkeypatch):
        """Without XDG_CONFIG_HOME, returns ~/.config/cfimport/config.yaml."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        result = get_global_config_path()
        assert result == Path.home() / ".config" / "cfimport" / "config.yaml"

    def test_xdg_config_home(self, monkeypatch, tmp_path):
        """With XDG_CONFIG_HOME set, uses that directory."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom_config"))
        result = get_global_config_path()
        assert result == tmp_path / "custom_config" / "cfimport" / "config.yaml"


# ---------------------------------------------------------------------------
# load_global_config / save_global_config
# ---------------------------------------------------------------------------

class TestLoadGlobalConfig:
    """Tests for load_global_config()."""

    def test_missing_file_returns_empty(self):
        assert load_global_config() == {}

    def test_valid_yaml(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("contentful:\n  space_id: abc123\n")
        assert load_global_config() == {"contentful": {"space_id": "abc123"}}

    def test_invalid_yaml_returns_empty(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("contentful: [unclosed\n")
        assert load_global_config() == {}

    def test_non_dict_returns_empty(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("- just\n- a list\n")
        assert load_global_config() == {}

    def test_save_round_trip(self, isolated_config):
        save_global_config({"import": {"extension": "md"}})
        assert isolated_config.exists()
        assert yaml.safe_load(isolated_config.read_text()) == {"import": {"extension": "md"}}


class TestGetConfigValue:
    """Tests for get_config_value()."""

    def test_dotted_lookup(self):
        config = {"contentful": {"space_id": "abc"}}
        assert get_config_value("contentful.space_id", config=config) == "abc"

    def test_missing_key_returns_default(self):
        assert get_config_value("contentful.nope", default="x", config={}) == "x"

    def test_non_dict_intermediate(self):
        config = {"contentful": "oops"}
        assert get_config_value("contentful.space_id", config=config) is None


# ---------------------------------------------------------------------------
# parse_status
# ---------------------------------------------------------------------------

class TestParseStatus:
    """Tests for parse_status()."""

    def test_comma_string(self):
        assert parse_status("publish,draft") == ["publish", "draft"]

    def test_strips_and_lowercases(self):
        assert parse_status(" Publish , DRAFT ") == ["publish", "draft"]

    def test_sequence_with_commas(self):
        assert parse_status(["publish", "draft,private"]) == ["publish", "draft", "private"]

    def test_deduplicates(self):
        assert parse_status("publish,publish") == ["publish"]

    def test_all_means_every_status(self):
        assert parse_status("all") == []
        assert parse_status("publish,all") == []

    def test_none_and_empty(self):
        assert parse_status(None) == []
        assert parse_status("") == []


# ---------------------------------------------------------------------------
# ImportOptions / resolve_options
# ---------------------------------------------------------------------------

class TestImportOptions:
    """Tests for ImportOptions defaults and status filtering."""

    def test_defaults(self):
        opts = ImportOptions()
        assert opts.api_endpoint == "api.contentful.com"
        assert opts.post_content_type == "posts"
        assert opts.page_content_type == "pages"
        assert opts.clean_entities is True
        assert opts.more_excerpt is True
        assert opts.more_anchor is True
        assert opts.extension == "html"
        assert opts.status == ["publish"]

    def test_allows_status(self):
        opts = ImportOptions(status=["publish"])
        assert opts.allows_status("publish")
        assert not opts.allows_status("draft")

    def test_empty_status_allows_all(self):
        opts = ImportOptions(status=[])
        assert opts.allows_status("draft")
        assert opts.allows_status("revision")


class TestResolveOptions:
    """Tests for resolve_options()."""

    def test_defaults_without_config(self):
        opts = resolve_options()
        assert opts == ImportOptions()

    def test_config_file_applies(self):
        save_global_config({
            "contentful": {"space_id": "from-config", "api_endpoint": "preview.contentful.com"},
            "import": {"clean_entities": False, "status": "publish,draft"},
        })
        opts = resolve_options()
        assert opts.space_id == "from-config"
        assert opts.api_endpoint == "preview.contentful.com"
        assert opts.clean_entities is False
        assert opts.status == ["publish", "draft"]

    def test_override_beats_config(self):
        save_global_config({"contentful": {"space_id": "from-config"}})
        opts = resolve_options(space_id="from-cli")
        assert opts.space_id == "from-cli"

    def test_none_override_falls_through(self):
        save_global_config({"import": {"more_anchor": False}})
        opts = resolve_options(more_anchor=None)
        assert opts.more_anchor is False

    def test_false_override_is_kept(self):
        opts = resolve_options(clean_entities=False)
        assert opts.clean_entities is False

    def test_empty_status_override_means_all(self):
        opts = resolve_options(status=[])
        assert opts.status == []
        assert opts.allows_status("draft")

    def test_output_dir_becomes_path(self, tmp_path):
        opts = resolve_options(output_dir=str(tmp_path))
        assert opts.output_dir == tmp_path

    def test_unknown_option_raises(self):
        with pytest.raises(TypeError, match="bogus"):
            resolve_options(bogus=1)
