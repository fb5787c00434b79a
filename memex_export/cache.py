"""
Module for managing the response cache.

Responses are keyed by their full URL. The disk cache mirrors the URL's
hierarchy: ``{hostname}/{path segments}/{query}.json``.
"""

from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote, urlsplit
from rich.console import Console
from .constants import DEFAULT_CACHE_FILENAME
from .exceptions import CacheError

console = Console()

# Characters left alone by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def cache_path_for_url(url: str) -> Path:
    """
    Get the relative cache path of a URL.

    Args:
        url: Full request URL

    Returns:
        Relative path under the cache directory
    """
    parts = urlsplit(url)
    segments = [_encode_component(segment) for segment in parts.path.split("/") if segment]

    if parts.query:
        filename = f"{_encode_component('?' + parts.query)}.json"
    else:
        filename = DEFAULT_CACHE_FILENAME

    return Path(parts.hostname or "", *segments, filename)


class ResponseCache:
    """Key-value store of response bodies keyed by URL."""

    def get(self, url: str) -> Optional[str]:
        raise NotImplementedError

    def put(self, url: str, body: str) -> None:
        raise NotImplementedError


class NullResponseCache(ResponseCache):
    """Cache that never stores anything."""

    def get(self, url: str) -> Optional[str]:
        return None

    def put(self, url: str, body: str) -> None:
        pass


class MemoryResponseCache(ResponseCache):
    """Cache kept in memory for the lifetime of the process."""

    def __init__(self):
        self.entries: Dict[str, str] = {}

    def get(self, url: str) -> Optional[str]:
        return self.entries.get(url)

    def put(self, url: str, body: str) -> None:
        self.entries[url] = body


class DiskResponseCache(ResponseCache):
    """Cache persisted on disk across runs."""

    def __init__(self, cache_dir):
        self.cache_dir = Path(cache_dir)

    def path_for(self, url: str) -> Path:
        return self.cache_dir / cache_path_for_url(url)

    def get(self, url: str) -> Optional[str]:
        """
        Retrieve a cached response body.

        Args:
            url: Full request URL

        Returns:
            The stored body or None if absent/unreadable
        """
        cache_path = self.path_for(url)
        if not cache_path.is_file():
            return None

        try:
            return cache_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[yellow]Ignoring unreadable cache entry {cache_path}:[/yellow] {e}")
            return None

    def put(self, url: str, body: str) -> None:
        """
        Save a response body to the cache.

        Args:
            url: Full request URL
            body: Exact response body

        Raises:
            CacheError: If saving fails
        """
        cache_path = self.path_for(url)
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            cache_path.write_text(body, encoding="utf-8")
        except OSError as e:
            raise CacheError(f"Error saving cache {cache_path}: {e}")

    def clear(self) -> int:
        """
        Clear all cached responses.

        Returns:
            Number of files deleted
        """
        if not self.cache_dir.exists():
            return 0

        count = 0
        for cache_file in self.cache_dir.rglob("*.json"):
            if cache_file.is_file():
                cache_file.unlink()
                count += 1

        return count
