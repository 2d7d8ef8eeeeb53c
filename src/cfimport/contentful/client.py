"""
Contentful Delivery API client.

Read-only access to the entries and content types of one space environment.
Requests are made once; failures raise ContentfulError rather than retrying.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import requests

from cfimport import __version__
from cfimport.core.config import DEFAULT_API_ENDPOINT, DEFAULT_ENVIRONMENT

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class ContentfulError(Exception):
    """Raised when the Contentful API cannot be reached or returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ContentfulClient:
    """Contentful Delivery API client."""

    def __init__(
        self,
        access_token: str,
        space_id: str,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
        environment: str = DEFAULT_ENVIRONMENT,
        timeout: int = 30,
    ):
        """Initialize client.

        Args:
            access_token: Content delivery (or preview) access token
            space_id: Space to read from
            api_endpoint: API host name, with or without scheme
            environment: Space environment
            timeout: Request timeout in seconds
        """
        self.access_token = access_token
        self.space_id = space_id
        self.api_endpoint = api_endpoint
        self.environment = environment
        self.timeout = timeout
        # Linked entries seen in "includes" across all fetched pages
        self.linked_entries: dict[str, dict[str, Any]] = {}

    @property
    def base_url(self) -> str:
        host = self.api_endpoint.rstrip("/")
        if "://" not in host:
            host = f"https://{host}"
        return f"{host}/spaces/{self.space_id}/environments/{self.environment}"

    def _make_request(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a path below the environment URL and return the JSON body.

        Raises:
            ContentfulError: On network errors, non-2xx responses or bad JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
            "User-Agent": f"cfimport/{__version__}",
        }
        logger.debug("GET %s params=%s", url, params)

        try:
            response = requests.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContentfulError(f"Network error: {e}") from e

        if response.status_code >= 400:
            message = response.reason or "Error"
            try:
                body = response.json()
                message = body.get("message") or message
            except ValueError:
                pass
            raise ContentfulError(
                f"Contentful API error {response.status_code}: {message}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ContentfulError(f"Invalid JSON from {url}") from e

        if not isinstance(data, dict):
            raise ContentfulError(f"Unexpected response from {url}")
        return data

    def _remember_includes(self, data: dict[str, Any]) -> None:
        for entry in data.get("includes", {}).get("Entry", []):
            entry_id = entry.get("sys", {}).get("id")
            if entry_id:
                self.linked_entries[entry_id] = entry

    def get_entries(self, content_type: str) -> Iterator[dict[str, Any]]:
        """Yield every entry of a content type, page by page.

        Args:
            content_type: Content type id (e.g. "posts")

        Yields:
            Raw entry dicts as returned by the API
        """
        skip = 0
        while True:
            params = {
                "content_type": content_type,
                "skip": skip,
                "limit": PAGE_SIZE,
                "order": "sys.createdAt",
            }
            data = self._make_request("entries", params)
            self._remember_includes(data)

            items = data.get("items", [])
            logger.debug("Fetched %d %s entries at skip=%d", len(items), content_type, skip)
            yield from items

            skip += len(items)
            total = data.get("total", 0)
            if not items or len(items) < PAGE_SIZE or skip >= total:
                break

    def get_content_types(self) -> list[dict[str, Any]]:
        """Fetch all content types defined in the environment.

        Returns:
            List of content type dicts
        """
        types: list[dict[str, Any]] = []
        skip = 0
        while True:
            data = self._make_request("content_types", {"skip": skip, "limit": PAGE_SIZE})
            items = data.get("items", [])
            types.extend(items)
            skip += len(items)
            if not items or skip >= data.get("total", 0):
                break
        return types


def is_link(value: Any) -> bool:
    """Check whether a field value is an unresolved Contentful link."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("sys"), dict)
        and value["sys"].get("type") == "Link"
    )
