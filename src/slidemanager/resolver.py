"""Ordinal resolution against a fetched presentation snapshot.

Commands address slides by zero-based position. Positions are only
meaningful relative to the snapshot they were read from, so every
resolution takes the snapshot explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from slidemanager.exceptions import (
    MalformedInputError,
    NotesShapeNotFoundError,
    NotesUnavailableError,
    OutOfRangeError,
)
from slidemanager.transport import PresentationData


def resolve_slide(snapshot: PresentationData, index: int) -> str:
    """Return the objectId of the slide at ``index``.

    Raises:
        OutOfRangeError: If ``index`` is negative or past the last slide.
    """
    return get_slide(snapshot, index)["objectId"]


def get_slide(snapshot: PresentationData, index: int) -> dict[str, Any]:
    """Return the slide at ``index``, raising OutOfRangeError if invalid."""
    slides = snapshot.slides
    if not 0 <= index < len(slides):
        raise OutOfRangeError("slide", index, len(slides))
    return slides[index]


def parse_indices(text: str) -> list[int]:
    """Parse a comma-separated list of slide indices such as ``"2,0,1"``."""
    indices: list[int] = []
    for token in text.split(","):
        token = token.strip()
        try:
            indices.append(int(token))
        except ValueError:
            raise MalformedInputError(f"invalid index: {token!r}") from None
    return indices


def resolve_reorder(
    snapshot: PresentationData, indices: str | Sequence[int]
) -> list[tuple[int, str]]:
    """Pair each listed slide with its new position.

    Every index is looked up in the snapshot's original ordering; the new
    position of a slide is its position within ``indices``. Slides not listed
    are left to the service.

    Returns:
        List of ``(new_position, slide_object_id)`` in list order.
    """
    if isinstance(indices, str):
        indices = parse_indices(indices)
    if not indices:
        raise MalformedInputError("no slide indices given")

    return [
        (position, resolve_slide(snapshot, index))
        for position, index in enumerate(indices)
    ]


def resolve_notes_shape(snapshot: PresentationData, index: int) -> str:
    """Return the objectId of the speaker-notes text shape of a slide.

    The first notes-page element with a text body is taken as the
    speaker-notes placeholder.
    """
    slide = get_slide(snapshot, index)
    notes_page = slide.get("slideProperties", {}).get("notesPage")
    if not notes_page or not notes_page.get("pageElements"):
        raise NotesUnavailableError(index)

    for element in notes_page["pageElements"]:
        if "text" in element.get("shape", {}):
            return str(element["objectId"])

    raise NotesShapeNotFoundError(index)


def find_element(snapshot: PresentationData, object_id: str) -> dict[str, Any] | None:
    """Find a page element by objectId anywhere on the slides, or None."""
    for slide in snapshot.slides:
        found = _find_in(slide.get("pageElements", []), object_id)
        if found is not None:
            return found
    return None


def _find_in(elements: list[dict[str, Any]], object_id: str) -> dict[str, Any] | None:
    for element in elements:
        if element.get("objectId") == object_id:
            return element
        children = element.get("elementGroup", {}).get("children", [])
        found = _find_in(children, object_id)
        if found is not None:
            return found
    return None
