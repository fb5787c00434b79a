"""
Module for exporting bookmarks and spaces as cross-linked Markdown notes.

Front matter dates are wiki links (``[[2024-01-31]]``) so notes join the
daily notes of tools like Obsidian.
"""

import os
from typing import List, Optional
from rich.console import Console
from rich.markup import escape
from .constants import SPACES_FOLDER
from .dates import format_date_yyyy_mm, format_date_yyyy_mm_dd, format_iso
from .models import (
    ContentLocator,
    ContentMetadata,
    ContentPage,
    Space,
    entries_in_space,
    first_metadata_for,
    locator_for,
    space_entries_for,
    spaces_by_id,
)
from .security import entry_filename

console = Console()


def space_filename(space: Space) -> str:
    return entry_filename(space.get("title"), None, space["personalSpaceId"])


def bookmark_filename(locator: Optional[ContentLocator], metadata: Optional[ContentMetadata], content_id: str) -> str:
    title = metadata.get("title") if metadata else None
    location = locator.get("location") if locator else None
    return entry_filename(title, location, content_id)


def render_bookmark_markdown(
    locator: ContentLocator,
    metadata: Optional[ContentMetadata],
    spaces: List[Space],
) -> str:
    """Render the note of one bookmark."""
    content_id = locator["personalContentId"]
    title = ((metadata or {}).get("title") or content_id).replace("\n", " ")

    content = "---\n"
    content += f"Title: {title}\n"
    content += f"Url: {locator.get('originalLocation')}\n"
    content += f"Created at: [[{format_date_yyyy_mm_dd(locator['createdWhen'])}]]\n"
    content += f"Updated at: [[{format_date_yyyy_mm_dd(locator['updatedWhen'])}]]\n"
    content += f"Type: {locator.get('locationType')}\n"
    content += f"Format: {locator.get('format')}\n"
    content += f"Memex Personal Content ID: {content_id}\n"
    if metadata and metadata.get("canonicalUrl"):
        content += f"Canonical Url: {metadata['canonicalUrl']}\n"

    if spaces:
        content += "Spaces:\n"
        for space in spaces:
            content += f"- \"[[{space['title']}]]\"\n"

    content += "---\n\n"
    content += "## Details\n"
    content += f"Created at: {format_iso(locator['createdWhen'])}\n"
    content += f"Updated at: {format_iso(locator['updatedWhen'])}\n\n"

    if spaces:
        content += "## Spaces\n"
        for space in spaces:
            content += f"- [{space['title']}](../{SPACES_FOLDER}/{space_filename(space)}.md)\n"

    return content


def save_markdown_data(data: ContentPage, personal_spaces: List[Space], base_path) -> List[str]:
    """
    Write one Markdown note per locator, grouped by month of creation.

    Returns:
        Paths of the written files
    """
    known_spaces = spaces_by_id(personal_spaces)
    written = []

    for locator in data.get("locators", []):
        content_id = locator["personalContentId"]
        bookmark_dir = os.path.join(base_path, format_date_yyyy_mm(locator["createdWhen"]))
        os.makedirs(bookmark_dir, exist_ok=True)

        metadata = first_metadata_for(data, content_id)
        spaces = [
            known_spaces[entry["personalSpaceId"]]
            for entry in space_entries_for(data, content_id)
            if entry["personalSpaceId"] in known_spaces
        ]

        file_path = os.path.join(bookmark_dir, f"{bookmark_filename(locator, metadata, content_id)}.md")
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(render_bookmark_markdown(locator, metadata, spaces))
        written.append(file_path)

    return written


def _bookmarks_in_space(space: Space, data: ContentPage):
    """Yield (file name, locator) of each exported bookmark in a space, once per content."""
    seen = set()
    for entry in entries_in_space(data, space["personalSpaceId"]):
        content_id = entry["personalContentId"]
        locator = locator_for(data, content_id)
        if locator is None or content_id in seen:
            continue
        seen.add(content_id)
        yield bookmark_filename(locator, first_metadata_for(data, content_id), content_id), locator


def render_space_markdown(space: Space, data: ContentPage) -> str:
    """Render the note of one space, linking to its bookmarks."""
    bookmarks = list(_bookmarks_in_space(space, data))

    content = "---\n"
    content += f"Title: {space['title']}\n"
    content += f"Memex Space ID: {space['personalSpaceId']}\n"
    content += f"Type: {space.get('type')}\n"
    content += f"Created at: [[{format_date_yyyy_mm_dd(space['createdWhen'])}]]\n"
    content += f"Updated at: [[{format_date_yyyy_mm_dd(space['updatedWhen'])}]]\n"

    if bookmarks:
        content += "Links:\n"
        for filename, _ in bookmarks:
            content += f"- \"[[{filename}]]\"\n"

    content += "---\n\n"
    content += "## Details\n"
    content += f"Created: {format_iso(space['createdWhen'])}\n"
    content += f"Updated: {format_iso(space['updatedWhen'])}\n\n"

    if bookmarks:
        content += "## Links\n"
        for filename, locator in bookmarks:
            content += f"- [{filename}]({locator.get('originalLocation')})\n"

    return content


def save_markdown_space_data(personal_spaces: List[Space], data: ContentPage, base_path) -> List[str]:
    """Write one Markdown note per space."""
    spaces_dir = os.path.join(base_path, SPACES_FOLDER)
    os.makedirs(spaces_dir, exist_ok=True)
    written = []

    for space in personal_spaces:
        file_path = os.path.join(spaces_dir, f"{space_filename(space)}.md")
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(render_space_markdown(space, data))
        console.print(f"  → Space: [dim]{escape(space['title'])}[/dim]")
        written.append(file_path)

    return written
