"""
Shapes of the Memex API records and the joins between them.

Records stay plain dicts as decoded from JSON; the TypedDicts describe them.
"""

from typing import Dict, List, Optional, TypedDict


class Space(TypedDict):
    type: str
    personalSpaceId: str
    title: str
    createdWhen: int
    updatedWhen: int


class ContentLocator(TypedDict):
    type: str
    personalContentId: str
    locationType: str
    locationScheme: str
    format: str
    location: str
    originalLocation: str
    createdWhen: int
    updatedWhen: int


class ContentMetadata(TypedDict, total=False):
    type: str
    personalContentId: str
    canonicalUrl: str
    title: str
    createdWhen: int
    updatedWhen: int


class SpaceEntry(TypedDict):
    type: str
    personalContentId: str
    personalSpaceId: str
    createdWhen: int
    updatedWhen: int


class RichText(TypedDict):
    value: str


class Annotation(TypedDict, total=False):
    type: str
    createdWhen: int
    updatedWhen: int
    highlight: str
    comment: RichText


class ContentPage(TypedDict):
    type: str
    metadata: List[ContentMetadata]
    locators: List[ContentLocator]
    annotations: List[Annotation]
    personalSpaceEntries: List[SpaceEntry]


def empty_content_page() -> ContentPage:
    return {
        "type": "personal-content-list-result",
        "metadata": [],
        "locators": [],
        "annotations": [],
        "personalSpaceEntries": [],
    }


def extend_content_page(target: ContentPage, page: ContentPage) -> None:
    """Append every collection of `page` to `target`."""
    for key in ("metadata", "locators", "annotations", "personalSpaceEntries"):
        target[key].extend(page.get(key, []))


def metadata_for(page: ContentPage, content_id: str) -> List[ContentMetadata]:
    return [m for m in page.get("metadata", []) if m.get("personalContentId") == content_id]


def first_metadata_for(page: ContentPage, content_id: str) -> Optional[ContentMetadata]:
    matches = metadata_for(page, content_id)
    return matches[0] if matches else None


def locator_for(page: ContentPage, content_id: str) -> Optional[ContentLocator]:
    for locator in page.get("locators", []):
        if locator.get("personalContentId") == content_id:
            return locator
    return None


def space_entries_for(page: ContentPage, content_id: str) -> List[SpaceEntry]:
    return [
        entry for entry in page.get("personalSpaceEntries", [])
        if entry.get("personalContentId") == content_id
    ]


def entries_in_space(page: ContentPage, space_id: str) -> List[SpaceEntry]:
    return [
        entry for entry in page.get("personalSpaceEntries", [])
        if entry.get("personalSpaceId") == space_id
    ]


def spaces_by_id(spaces: List[Space]) -> Dict[str, Space]:
    return {space["personalSpaceId"]: space for space in spaces}
