"""Text extraction and search over presentation element trees.

Walks page elements depth-first, left to right. Shapes contribute their
own text body; tables contribute one text body per cell in row-major order
(reported under the table's objectId); groups are descended into.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import asdict, dataclass
from typing import Any

from slidemanager.resolver import get_slide
from slidemanager.transport import PresentationData

SLIDE_DELIMITER = "\n---\n\n"


@dataclass(frozen=True)
class SearchMatch:
    """A text run containing the search query."""

    slide_index: int
    object_id: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def iter_text_bodies(
    page_elements: list[dict[str, Any]],
) -> Iterator[tuple[str, list[str]]]:
    """Yield ``(object_id, run_contents)`` for every text body in the tree."""
    for elem in page_elements:
        object_id = elem.get("objectId", "")

        if "shape" in elem and "text" in elem["shape"]:
            yield object_id, _text_runs(elem["shape"]["text"])

        if "table" in elem:
            for row in elem["table"].get("tableRows", []):
                for cell in row.get("tableCells", []):
                    if "text" in cell:
                        yield object_id, _text_runs(cell["text"])

        if "elementGroup" in elem:
            children = elem["elementGroup"].get("children", [])
            yield from iter_text_bodies(children)


def _text_runs(text: dict[str, Any]) -> list[str]:
    return [
        text_elem["textRun"].get("content", "")
        for text_elem in text.get("textElements", [])
        if "textRun" in text_elem
    ]


def extract_text(page_elements: list[dict[str, Any]]) -> list[str]:
    """Return one flattened string per text-bearing element."""
    return ["".join(runs) for _, runs in iter_text_bodies(page_elements)]


def extract_presentation_text(snapshot: PresentationData) -> str:
    """Concatenate the text of every slide in order.

    Each element's text is followed by a newline and every slide (including
    the last) is followed by ``SLIDE_DELIMITER``.
    """
    parts: list[str] = []
    for slide in snapshot.slides:
        for text in extract_text(slide.get("pageElements", [])):
            parts.append(text)
            parts.append("\n")
        parts.append(SLIDE_DELIMITER)
    return "".join(parts)


def search_text(snapshot: PresentationData, query: str) -> list[SearchMatch]:
    """Find text runs containing ``query``, ignoring case.

    Each run is tested on its own, so a match that spans two runs of the
    same paragraph is not reported.
    """
    needle = query.lower()
    results: list[SearchMatch] = []

    for slide_index, slide in enumerate(snapshot.slides):
        for object_id, runs in iter_text_bodies(slide.get("pageElements", [])):
            for content in runs:
                if needle in content.lower():
                    results.append(
                        SearchMatch(
                            slide_index=slide_index,
                            object_id=object_id,
                            text=content,
                        )
                    )

    return results


def _notes_text(slide: dict[str, Any]) -> str | None:
    notes_page = slide.get("slideProperties", {}).get("notesPage")
    if notes_page is None:
        return None
    return "".join(extract_text(notes_page.get("pageElements", [])))


def get_notes(snapshot: PresentationData, index: int) -> str:
    """Return the speaker notes of one slide, or "" if it has no notes page."""
    return _notes_text(get_slide(snapshot, index)) or ""


def extract_all_notes(snapshot: PresentationData) -> dict[str, str]:
    """Map ``slide_<index>`` to trimmed notes text for slides with notes."""
    all_notes: dict[str, str] = {}
    for index, slide in enumerate(snapshot.slides):
        notes = (_notes_text(slide) or "").strip()
        if notes:
            all_notes[f"slide_{index}"] = notes
    return all_notes
