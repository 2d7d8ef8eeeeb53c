"""Shared test fixtures for cfimport package."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the global config at a temp dir and clear Contentful env vars."""
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("CONTENTFUL_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("CONTENTFUL_SPACE_ID", raising=False)
    return config_home / "cfimport" / "config.yaml"


def make_entry(
    entry_id: str,
    content_type: str = "posts",
    created_at: str = "2024-01-15T10:00:00.000Z",
    **fields: Any,
) -> dict[str, Any]:
    """Build a raw Contentful entry dict."""
    return {
        "sys": {
            "id": entry_id,
            "type": "Entry",
            "createdAt": created_at,
            "contentType": {"sys": {"type": "Link", "linkType": "ContentType", "id": content_type}},
        },
        "fields": fields,
    }


def make_link(entry_id: str) -> dict[str, Any]:
    """Build a Link field value pointing at an entry."""
    return {"sys": {"type": "Link", "linkType": "Entry", "id": entry_id}}


@pytest.fixture
def entry_factory():
    """Factory fixture for raw Contentful entries."""
    return make_entry


@pytest.fixture
def link_factory():
    """Factory fixture for Link values."""
    return make_link


class FakeClient:
    """Stand-in for ContentfulClient serving canned entries per content type."""

    def __init__(
        self,
        entries: dict[str, list[dict[str, Any]]] | None = None,
        linked_entries: dict[str, dict[str, Any]] | None = None,
    ):
        self.entries = entries or {}
        self.linked_entries = linked_entries or {}
        self.requested: list[str] = []

    def get_entries(self, content_type: str):
        self.requested.append(content_type)
        yield from self.entries.get(content_type, [])


@pytest.fixture
def fake_client():
    """Factory fixture for FakeClient."""
    return FakeClient
