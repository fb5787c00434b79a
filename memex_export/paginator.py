"""
Cursor pagination over the Memex list endpoints.

Pages are requested newest first. The cursor is an exclusive upper bound
(ms since epoch) and advances to the ordering key of the last item of each
page. A page whose last item does not move the cursor means the API would
return the same page forever, so the run is aborted with NoProgressError.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

import requests
from rich.console import Console
from rich.markup import escape
from .constants import CONTENT_ORDERING_KEY, SPACE_ORDERING_KEY
from .dates import format_iso
from .exceptions import MemexAPIError, NoProgressError
from .models import ContentPage, Space

console = Console()


@dataclass
class Page:
    """One page of results and the cursors around it."""

    cursor: int
    next_cursor: int
    data: Dict[str, Any]


class Paginator:
    """Iterate over the pages of one collection."""

    def __init__(
        self,
        fetch_page: Callable[[int], Optional[Dict[str, Any]]],
        items_key: str,
        ordering_key: str,
        collection: str,
    ):
        """
        Args:
            fetch_page: Returns the page before a cursor, or None for "no more data"
            items_key: Key of the primary collection in a page
            ordering_key: Field of the last item the cursor advances to
            collection: Name used in logs and errors
        """
        self.fetch_page = fetch_page
        self.items_key = items_key
        self.ordering_key = ordering_key
        self.collection = collection

    def pages(self, initial_cursor: int) -> Iterator[Page]:
        cursor = initial_cursor
        previous_item = None

        while True:
            data = self.fetch_page(cursor)
            if not data:
                return

            items = data.get(self.items_key) or []
            if not items:
                return

            console.print(f"Fetched {len(items)} {self.collection}")

            last_item = items[-1]
            next_cursor = last_item.get(self.ordering_key)
            if next_cursor is None or next_cursor == cursor:
                console.print(
                    f"[bold red]The API result of the next page returned the same result as the "
                    f"previous page.[/bold red] Previous last {self.collection}: {escape(str(previous_item))}, "
                    f"current last {self.collection}: {escape(str(last_item))}"
                )
                raise NoProgressError(self.collection, cursor, previous_item, last_item)

            yield Page(cursor=cursor, next_cursor=next_cursor, data=data)

            previous_item = last_item
            cursor = next_cursor
            console.print(f"[dim]Next page before {format_iso(cursor)}, {cursor}[/dim]")


def unique_spaces(spaces: List[Space]) -> List[Space]:
    """Deduplicate spaces by id, keeping the first occurrence."""
    seen = set()
    unique = []
    for space in spaces:
        space_id = space["personalSpaceId"]
        if space_id not in seen:
            seen.add(space_id)
            unique.append(space)
    return unique


def fetch_all_personal_spaces(client, to_when: int) -> List[Space]:
    """
    Fetch every personal space.

    Errors propagate: the export cannot resolve space memberships without them.
    """
    paginator = Paginator(client.list_spaces, "personalSpaces", SPACE_ORDERING_KEY, "spaces")

    spaces = []
    for page in paginator.pages(to_when):
        spaces.extend(page.data["personalSpaces"])

    all_spaces = unique_spaces(spaces)
    console.print(f"[bold yellow]Fetched all {len(all_spaces)} spaces[/bold yellow]")
    return all_spaces


def fetch_personal_content(client, to_when: int) -> Optional[ContentPage]:
    """Download one content page; failures are logged and end the pagination."""
    try:
        data = client.list_content(to_when)
    except (requests.RequestException, MemexAPIError, ValueError) as e:
        console.print(f"[bold red]Error fetching data:[/bold red] {escape(str(e))}")
        return None

    if not isinstance(data, dict):
        console.print(f"[bold red]Unexpected content page:[/bold red] {escape(repr(data))}")
        return None
    return data


def iter_personal_content(client, to_when: int) -> Iterator[Page]:
    """Iterate over content pages, advancing on the last metadata's update time."""
    paginator = Paginator(
        lambda cursor: fetch_personal_content(client, cursor),
        "metadata",
        CONTENT_ORDERING_KEY,
        "metadata values",
    )
    return paginator.pages(to_when)
