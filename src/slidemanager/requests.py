"""Builders for Google Slides API batchUpdate requests.

Each function returns one request object. Callers collect them into a
list and submit the list as a single batch; the service applies the batch
in order and all-or-nothing.
"""

from __future__ import annotations

from typing import Any

from slidemanager.units import opaque_color, pt_size, pt_translate

# Default geometry for created elements, in points
TABLE_SIZE = (400.0, 200.0)
TABLE_POSITION = (50.0, 50.0)
SHAPE_SIZE = (100.0, 100.0)
SHAPE_POSITION = (100.0, 100.0)

DEFAULT_LAYOUT = "BLANK"


def _element_properties(
    page_id: str, size: tuple[float, float], position: tuple[float, float]
) -> dict[str, Any]:
    return {
        "pageObjectId": page_id,
        "size": pt_size(*size),
        "transform": pt_translate(*position),
    }


def create_slide(
    object_id: str, layout: str = DEFAULT_LAYOUT, insertion_index: int | None = None
) -> dict[str, Any]:
    """Create a slide from a predefined layout, appended unless an index is given."""
    request: dict[str, Any] = {
        "objectId": object_id,
        "slideLayoutReference": {"predefinedLayout": layout},
    }
    if insertion_index is not None:
        request["insertionIndex"] = insertion_index
    return {"createSlide": request}


def duplicate_object(object_id: str) -> dict[str, Any]:
    return {"duplicateObject": {"objectId": object_id}}


def delete_object(object_id: str) -> dict[str, Any]:
    return {"deleteObject": {"objectId": object_id}}


def update_slides_position(slide_ids: list[str], insertion_index: int) -> dict[str, Any]:
    """Move the given slides so the first lands at ``insertion_index``."""
    return {
        "updateSlidesPosition": {
            "slideObjectIds": slide_ids,
            "insertionIndex": insertion_index,
        }
    }


def create_table(object_id: str, page_id: str, rows: int, columns: int) -> dict[str, Any]:
    return {
        "createTable": {
            "objectId": object_id,
            "elementProperties": _element_properties(
                page_id, TABLE_SIZE, TABLE_POSITION
            ),
            "rows": rows,
            "columns": columns,
        }
    }


def insert_text(
    object_id: str,
    text: str,
    *,
    row: int | None = None,
    column: int | None = None,
    insertion_index: int = 0,
) -> dict[str, Any]:
    """Insert text into a shape, or into a table cell when row/column are given."""
    request: dict[str, Any] = {
        "objectId": object_id,
        "text": text,
        "insertionIndex": insertion_index,
    }
    if row is not None and column is not None:
        request["cellLocation"] = {"rowIndex": row, "columnIndex": column}
    return {"insertText": request}


def update_cell_background(
    table_id: str, row: int, column: int, hex_color: str
) -> dict[str, Any]:
    """Set the solid background fill of a single table cell."""
    return {
        "updateTableCellProperties": {
            "objectId": table_id,
            "tableCellProperties": {
                "tableCellBackgroundFill": {
                    "solidFill": {"color": opaque_color(hex_color)}
                }
            },
            "tableRange": {
                "location": {"rowIndex": row, "columnIndex": column},
                "rowSpan": 1,
                "columnSpan": 1,
            },
            "fields": "tableCellBackgroundFill.solidFill.color",
        }
    }


def replace_all_text(find: str, replace: str) -> dict[str, Any]:
    """Replace every case-insensitive occurrence of ``find`` in the presentation."""
    return {
        "replaceAllText": {
            "containsText": {"text": find, "matchCase": False},
            "replaceText": replace,
        }
    }


def create_shape(object_id: str, page_id: str, shape_type: str) -> dict[str, Any]:
    return {
        "createShape": {
            "objectId": object_id,
            "shapeType": shape_type,
            "elementProperties": _element_properties(
                page_id, SHAPE_SIZE, SHAPE_POSITION
            ),
        }
    }


def update_text_style(object_id: str, style: dict[str, Any]) -> dict[str, Any]:
    """Apply ``style`` to all text of a shape.

    Only the style's top-level fields are written, so unset properties on
    the target are left alone.
    """
    return {
        "updateTextStyle": {
            "objectId": object_id,
            "style": style,
            "textRange": {"type": "ALL"},
            "fields": ",".join(sorted(style)),
        }
    }
