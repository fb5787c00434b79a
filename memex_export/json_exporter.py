"""
Module for exporting content pages as JSON records.
"""

import json
import os
from typing import List
from rich.console import Console
from rich.markup import escape
from .constants import ANNOTATIONS_FILENAME
from .dates import format_date_yyyy_mm
from .models import Annotation, ContentPage, Space, metadata_for, space_entries_for, spaces_by_id

console = Console()


def _write_json(file_path, data):
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def save_json_data(data: ContentPage, personal_spaces: List[Space], base_path) -> List[str]:
    """
    Write one JSON file per locator, grouped by month of creation.

    Args:
        data: Content page
        personal_spaces: All known spaces, to resolve space entries
        base_path: Output folder

    Returns:
        Paths of the written files
    """
    spaces = spaces_by_id(personal_spaces)
    written = []

    for locator in data.get("locators", []):
        content_id = locator["personalContentId"]
        target_folder = os.path.join(base_path, format_date_yyyy_mm(locator["createdWhen"]))
        os.makedirs(target_folder, exist_ok=True)
        file_path = os.path.join(target_folder, f"{content_id}.json")

        metadata = metadata_for(data, content_id)
        space_entries = [
            {**entry, "personalSpace": spaces.get(entry["personalSpaceId"])}
            for entry in space_entries_for(data, content_id)
        ]

        console.print(
            f"  → Entry [dim]{escape(str(locator.get('location')))}[/dim] with {len(space_entries)} spaces "
            f"and {len(metadata)} metadata values"
        )

        _write_json(file_path, {
            "content": locator,
            "metadata": metadata,
            "spaceEntries": space_entries,
        })
        written.append(file_path)

    return written


def save_annotations_json(annotations: List[Annotation], base_path) -> str:
    """Write every annotation of the run into a single file."""
    os.makedirs(base_path, exist_ok=True)
    file_path = os.path.join(base_path, ANNOTATIONS_FILENAME)
    _write_json(file_path, annotations)
    return file_path
