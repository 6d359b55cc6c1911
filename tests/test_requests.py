"""Tests for batchUpdate request builders."""

import pytest

from slidemanager import requests as req
from slidemanager.exceptions import MalformedInputError


class TestSlideRequests:
    """Slide-level requests."""

    def test_create_slide_appends_by_default(self) -> None:
        """No insertionIndex means the service appends."""
        request = req.create_slide("slide_1")

        assert request == {
            "createSlide": {
                "objectId": "slide_1",
                "slideLayoutReference": {"predefinedLayout": "BLANK"},
            }
        }

    def test_create_slide_at_position(self) -> None:
        request = req.create_slide("slide_1", "TITLE_AND_BODY", 0)

        body = request["createSlide"]
        assert body["insertionIndex"] == 0
        assert body["slideLayoutReference"]["predefinedLayout"] == "TITLE_AND_BODY"

    def test_duplicate_and_delete(self) -> None:
        assert req.duplicate_object("s1") == {"duplicateObject": {"objectId": "s1"}}
        assert req.delete_object("s1") == {"deleteObject": {"objectId": "s1"}}

    def test_update_slides_position(self) -> None:
        request = req.update_slides_position(["s2"], 0)

        assert request == {
            "updateSlidesPosition": {"slideObjectIds": ["s2"], "insertionIndex": 0}
        }


class TestElementRequests:
    """Requests creating page elements."""

    def test_create_table_geometry(self) -> None:
        """Tables are 400x200pt placed at (50, 50)."""
        body = req.create_table("table_1", "slide_1", 3, 4)["createTable"]

        assert body["objectId"] == "table_1"
        assert body["rows"] == 3
        assert body["columns"] == 4
        props = body["elementProperties"]
        assert props["pageObjectId"] == "slide_1"
        assert props["size"]["width"] == {"magnitude": 400.0, "unit": "PT"}
        assert props["size"]["height"] == {"magnitude": 200.0, "unit": "PT"}
        assert props["transform"]["translateX"] == 50.0
        assert props["transform"]["translateY"] == 50.0
        assert props["transform"]["scaleX"] == 1.0

    def test_create_shape_geometry(self) -> None:
        """Shapes are 100x100pt placed at (100, 100)."""
        body = req.create_shape("shape_1", "slide_1", "STAR_5")["createShape"]

        assert body["shapeType"] == "STAR_5"
        props = body["elementProperties"]
        assert props["size"]["width"]["magnitude"] == 100.0
        assert props["transform"]["translateX"] == 100.0
        assert props["transform"]["translateY"] == 100.0


class TestTextRequests:
    """Text and style requests."""

    def test_insert_text_in_shape(self) -> None:
        assert req.insert_text("notes_1", "Hi") == {
            "insertText": {"objectId": "notes_1", "text": "Hi", "insertionIndex": 0}
        }

    def test_insert_text_in_cell(self) -> None:
        body = req.insert_text("table_1", "42", row=1, column=2)["insertText"]

        assert body["cellLocation"] == {"rowIndex": 1, "columnIndex": 2}
        assert body["insertionIndex"] == 0

    def test_replace_all_text_ignores_case(self) -> None:
        body = req.replace_all_text("Q1", "Q2")["replaceAllText"]

        assert body["containsText"] == {"text": "Q1", "matchCase": False}
        assert body["replaceText"] == "Q2"

    def test_update_cell_background(self) -> None:
        body = req.update_cell_background("table_1", 0, 1, "#FF0000")[
            "updateTableCellProperties"
        ]

        assert body["fields"] == "tableCellBackgroundFill.solidFill.color"
        assert body["tableRange"] == {
            "location": {"rowIndex": 0, "columnIndex": 1},
            "rowSpan": 1,
            "columnSpan": 1,
        }
        color = body["tableCellProperties"]["tableCellBackgroundFill"]["solidFill"][
            "color"
        ]
        assert color == {"rgbColor": {"red": 1.0, "green": 0.0, "blue": 0.0}}

    def test_update_cell_background_rejects_bad_color(self) -> None:
        with pytest.raises(MalformedInputError):
            req.update_cell_background("table_1", 0, 0, "red")

    def test_update_text_style_field_mask(self) -> None:
        """The field mask lists the style's top-level keys."""
        style = {"italic": True, "bold": True, "fontSize": {"magnitude": 12, "unit": "PT"}}

        body = req.update_text_style("shape_1", style)["updateTextStyle"]

        assert body["fields"] == "bold,fontSize,italic"
        assert body["textRange"] == {"type": "ALL"}
        assert body["style"] == style
