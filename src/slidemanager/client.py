"""SlidesClient - Main API for slidemanager.

Each method performs one logical command: it fetches a fresh snapshot when
ordinals need resolving, assembles the primitive requests, and submits them
as a single batch.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from slidemanager import requests as req
from slidemanager.exceptions import (
    MalformedInputError,
    ObjectNotFoundError,
    describe,
)
from slidemanager.export import PDF_MIME_TYPE, PPTX_MIME_TYPE, export_presentation
from slidemanager.ids import ObjectIdGenerator
from slidemanager.resolver import (
    find_element,
    resolve_notes_shape,
    resolve_reorder,
    resolve_slide,
)
from slidemanager.text import (
    SearchMatch,
    extract_all_notes,
    extract_presentation_text,
    get_notes,
    search_text,
)
from slidemanager.transport import PresentationData, Transport

logger = logging.getLogger(__name__)


def parse_presentation_id(id_or_url: str) -> str:
    """Extract presentation ID from a URL or return as-is if already an ID.

    Supports URLs like:
    - https://docs.google.com/presentation/d/PRESENTATION_ID/edit
    - https://docs.google.com/presentation/d/PRESENTATION_ID/edit#slide=id.xxx
    - https://docs.google.com/presentation/d/PRESENTATION_ID/
    """
    url_pattern = r"docs\.google\.com/presentation/d/([a-zA-Z0-9_-]+)"
    match = re.search(url_pattern, id_or_url)
    if match:
        return match.group(1)
    return id_or_url


class SlidesClient:
    """Client for editing and querying a Google Slides presentation.

    Slides are addressed by zero-based index. Indices are resolved against a
    snapshot fetched inside the same call, so they are never reused across
    commands.

    Example:
        >>> from slidemanager.transport import GoogleSlidesTransport
        >>> transport = GoogleSlidesTransport(access_token="ya29...")
        >>> client = SlidesClient(transport)
        >>> slide_id = await client.add_slide("1abc...", layout="TITLE")
        >>> await client.reorder_slides("1abc...", "2,0,1")
    """

    def __init__(
        self, transport: Transport, id_generator: ObjectIdGenerator | None = None
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport implementation for fetching/updating presentations
            id_generator: Source of object IDs for created elements
        """
        self._transport = transport
        self._ids = id_generator or ObjectIdGenerator()

    async def _snapshot(self, presentation_id: str) -> PresentationData:
        with describe("getting presentation"):
            return await self._transport.get_presentation(presentation_id)

    async def _submit(
        self, presentation_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        logger.debug("Batch for %s: %s", presentation_id, requests)
        return await self._transport.batch_update(presentation_id, requests)

    # ---------------------------------------------------------------------
    # Presentations
    # ---------------------------------------------------------------------

    async def create_presentation(
        self, title: str, folder_id: str | None = None
    ) -> dict[str, Any]:
        """Create a presentation, optionally placing it in a Drive folder.

        Returns:
            The created presentation resource (has ``presentationId``).
        """
        with describe("creating presentation"):
            result = await self._transport.create_presentation(title)
        if folder_id:
            with describe("moving to folder"):
                await self._transport.move_to_folder(result["presentationId"], folder_id)
        return result

    # ---------------------------------------------------------------------
    # Slides
    # ---------------------------------------------------------------------

    async def add_slide(
        self,
        presentation_id: str,
        layout: str = req.DEFAULT_LAYOUT,
        position: int | None = None,
    ) -> str:
        """Add a slide and return its objectId. ``position=None`` appends."""
        slide_id = self._ids.new_id("slide")
        with describe("adding slide"):
            await self._submit(
                presentation_id, [req.create_slide(slide_id, layout, position)]
            )
        return slide_id

    async def duplicate_slide(self, presentation_id: str, slide_index: int) -> None:
        snapshot = await self._snapshot(presentation_id)
        with describe("duplicating slide"):
            slide_id = resolve_slide(snapshot, slide_index)
            await self._submit(presentation_id, [req.duplicate_object(slide_id)])

    async def remove_slide(self, presentation_id: str, slide_index: int) -> None:
        snapshot = await self._snapshot(presentation_id)
        with describe("removing slide"):
            slide_id = resolve_slide(snapshot, slide_index)
            await self._submit(presentation_id, [req.delete_object(slide_id)])

    async def move_slide(
        self, presentation_id: str, slide_index: int, new_position: int
    ) -> None:
        snapshot = await self._snapshot(presentation_id)
        with describe("moving slide"):
            slide_id = resolve_slide(snapshot, slide_index)
            await self._submit(
                presentation_id,
                [req.update_slides_position([slide_id], new_position)],
            )

    async def reorder_slides(self, presentation_id: str, indices: str | list[int]) -> None:
        """Reorder slides so that the listed slides take positions 0, 1, 2, ...

        All indices refer to the order before the call. One position update
        per listed slide is sent, in list order, inside a single batch.
        """
        snapshot = await self._snapshot(presentation_id)
        with describe("reordering slides"):
            moves = resolve_reorder(snapshot, indices)
            await self._submit(
                presentation_id,
                [
                    req.update_slides_position([slide_id], position)
                    for position, slide_id in moves
                ],
            )

    # ---------------------------------------------------------------------
    # Tables
    # ---------------------------------------------------------------------

    async def create_table(
        self, presentation_id: str, slide_index: int, rows: int, columns: int
    ) -> str:
        """Create a table on a slide and return the table's objectId."""
        with describe("creating table"):
            if rows < 1 or columns < 1:
                raise MalformedInputError("rows and columns must be at least 1")
        snapshot = await self._snapshot(presentation_id)
        with describe("creating table"):
            slide_id = resolve_slide(snapshot, slide_index)
            table_id = self._ids.new_id("table")
            await self._submit(
                presentation_id, [req.create_table(table_id, slide_id, rows, columns)]
            )
        return table_id

    async def update_cell(
        self, presentation_id: str, table_id: str, row: int, column: int, text: str
    ) -> None:
        """Insert text at the start of a table cell.

        Cell coordinates are checked by the service, not locally.
        """
        with describe("updating cell"):
            await self._submit(
                presentation_id,
                [req.insert_text(table_id, text, row=row, column=column)],
            )

    async def style_cell(
        self,
        presentation_id: str,
        table_id: str,
        row: int,
        column: int,
        bg_color: str,
    ) -> None:
        with describe("styling cell"):
            request = req.update_cell_background(table_id, row, column, bg_color)
            await self._submit(presentation_id, [request])

    # ---------------------------------------------------------------------
    # Text
    # ---------------------------------------------------------------------

    async def replace_text(self, presentation_id: str, find: str, replace: str) -> None:
        with describe("replacing text"):
            if not find:
                raise MalformedInputError("text to find must not be empty")
            await self._submit(presentation_id, [req.replace_all_text(find, replace)])

    async def extract_all_text(self, presentation_id: str) -> str:
        snapshot = await self._snapshot(presentation_id)
        return extract_presentation_text(snapshot)

    async def search_text(self, presentation_id: str, query: str) -> list[SearchMatch]:
        snapshot = await self._snapshot(presentation_id)
        return search_text(snapshot, query)

    async def copy_text_style(
        self, presentation_id: str, source_id: str, target_id: str
    ) -> None:
        """Apply the style of the source's first text run to all text of the target."""
        snapshot = await self._snapshot(presentation_id)
        with describe("copying text style"):
            source = find_element(snapshot, source_id)
            if source is None:
                raise ObjectNotFoundError(source_id)
            if find_element(snapshot, target_id) is None:
                raise ObjectNotFoundError(target_id)

            style = _first_run_style(source)
            if not style:
                raise MalformedInputError(f"{source_id!r} has no styled text")
            await self._submit(
                presentation_id, [req.update_text_style(target_id, style)]
            )

    # ---------------------------------------------------------------------
    # Notes
    # ---------------------------------------------------------------------

    async def get_notes(self, presentation_id: str, slide_index: int) -> str:
        snapshot = await self._snapshot(presentation_id)
        with describe("getting notes"):
            return get_notes(snapshot, slide_index)

    async def add_notes(
        self, presentation_id: str, slide_index: int, notes: str
    ) -> None:
        snapshot = await self._snapshot(presentation_id)
        with describe("adding notes"):
            shape_id = resolve_notes_shape(snapshot, slide_index)
            await self._submit(presentation_id, [req.insert_text(shape_id, notes)])

    async def extract_all_notes(self, presentation_id: str) -> dict[str, str]:
        snapshot = await self._snapshot(presentation_id)
        return extract_all_notes(snapshot)

    # ---------------------------------------------------------------------
    # Shapes
    # ---------------------------------------------------------------------

    async def add_shape(
        self, presentation_id: str, slide_index: int, shape_type: str
    ) -> str:
        """Add a shape to a slide and return its objectId."""
        snapshot = await self._snapshot(presentation_id)
        with describe("adding shape"):
            slide_id = resolve_slide(snapshot, slide_index)
            shape_id = self._ids.new_id("shape")
            await self._submit(
                presentation_id, [req.create_shape(shape_id, slide_id, shape_type)]
            )
        return shape_id

    # ---------------------------------------------------------------------
    # Export
    # ---------------------------------------------------------------------

    async def export_pdf(self, presentation_id: str, output_path: str | Path) -> Path:
        with describe("exporting as PDF"):
            return await export_presentation(
                self._transport, presentation_id, PDF_MIME_TYPE, output_path
            )

    async def export_pptx(self, presentation_id: str, output_path: str | Path) -> Path:
        with describe("exporting as PPTX"):
            return await export_presentation(
                self._transport, presentation_id, PPTX_MIME_TYPE, output_path
            )


def _first_run_style(element: dict[str, Any]) -> dict[str, Any]:
    """Return the style of the first text run of a shape, or {}."""
    text = element.get("shape", {}).get("text", {})
    for text_elem in text.get("textElements", []):
        if "textRun" in text_elem:
            style: dict[str, Any] = text_elem["textRun"].get("style", {})
            return style
    return {}
