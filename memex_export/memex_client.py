"""
Module for downloading content from the Memex personal API.
"""

import json
from typing import Optional
from urllib.parse import urlencode

import requests
from rich.console import Console
from .cache import NullResponseCache, ResponseCache
from .config import ExportConfig
from .constants import CONTENT_LIST_PATH, KEY_ID_HEADER, KEY_SECRET_HEADER, SPACE_LIST_PATH
from .exceptions import CacheError, MemexAPIError

console = Console()


class MemexClient:
    """Class for managing requests to the Memex personal API."""

    def __init__(self, config: ExportConfig, cache: Optional[ResponseCache] = None, session=None):
        """Initialize the HTTP session."""
        self.config = config
        self.cache = cache or NullResponseCache()
        self.session = session or requests.Session()
        self.session.headers.update({
            KEY_ID_HEADER: config.key_id,
            KEY_SECRET_HEADER: config.key_secret,
        })

    def build_url(self, path, params):
        """Build the full request URL, keeping the parameter order."""
        return f"{self.config.base_url}{path}?{urlencode(params)}"

    def get_json(self, path, params):
        """
        Issue a GET request, going through the response cache.

        Args:
            path: API path
            params: Ordered query parameters

        Returns:
            The decoded JSON body

        Raises:
            MemexAPIError: On a non-success status or an API error body
            requests.RequestException: On network failures
            ValueError: If the body is not valid JSON
        """
        url = self.build_url(path, params)

        cached_body = self.cache.get(url)
        if cached_body is not None:
            try:
                return json.loads(cached_body)
            except json.JSONDecodeError:
                console.print(f"[yellow]Corrupted cache entry for {url}, fetching again[/yellow]")

        console.print(f"Making a request to [dim]{url}[/dim]")
        response = self.session.get(url, timeout=self.config.request_timeout)

        if not response.ok:
            raise MemexAPIError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        body = response.text
        data = json.loads(body)
        if isinstance(data, dict) and data.get("error"):
            raise MemexAPIError(
                f"Memex API error: {data['error']}",
                status_code=response.status_code,
                error_code=data["error"],
                url=url,
            )

        try:
            self.cache.put(url, body)
        except CacheError as e:
            console.print(f"[yellow]Response not cached:[/yellow] {e}")
        return data

    def list_spaces(self, to_when):
        """Download one page of personal spaces created before `to_when`."""
        return self.get_json(SPACE_LIST_PATH, {
            "spacesToWhen": to_when,
            "maxSpaceCount": self.config.page_size,
        })

    def list_content(self, to_when):
        """Download one page of personal content updated before `to_when`."""
        return self.get_json(CONTENT_LIST_PATH, {
            "contentToWhen": to_when,
            "maxContentCount": self.config.page_size,
            "withMetadata": "true",
            "withAnnotations": "true",
            "withLocators": "true",
            "withPersonalSpaceIds": "true",
        })
