"""Per-command options.

The CLI parses argv into one of these frozen structs and hands it to the
command handler, so no parsed state is shared between commands.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from typing import Any, TypeVar

from slidemanager.client import parse_presentation_id
from slidemanager.exceptions import MalformedInputError
from slidemanager.requests import DEFAULT_LAYOUT
from slidemanager.resolver import parse_indices
from slidemanager.units import hex_to_rgb

T = TypeVar("T", bound="CommandOptions")


@dataclass(frozen=True)
class CommandOptions:
    """Base for command option structs."""

    @classmethod
    def from_args(cls: type[T], args: argparse.Namespace) -> T:
        """Build options from the namespace attributes matching field names.

        Presentation references are normalized from URLs to bare IDs.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            value = getattr(args, f.name)
            if f.name.endswith("presentation_id"):
                value = parse_presentation_id(value)
            values[f.name] = value
        return cls(**values)

    def validate(self) -> None:
        """Check values that can be rejected before contacting any service."""


@dataclass(frozen=True)
class CreatePresentationOptions(CommandOptions):
    title: str
    folder: str | None = None


@dataclass(frozen=True)
class PresentationOptions(CommandOptions):
    """Commands that only need a presentation (extract-all-text, extract-all-notes)."""

    presentation_id: str


@dataclass(frozen=True)
class AddSlideOptions(CommandOptions):
    presentation_id: str
    layout: str = DEFAULT_LAYOUT
    position: int = -1

    @property
    def insertion_index(self) -> int | None:
        """Position to insert at, or None to append (any negative position)."""
        return self.position if self.position >= 0 else None


@dataclass(frozen=True)
class SlideOptions(CommandOptions):
    """Commands addressing one slide (duplicate-slide, remove-slide, get-notes)."""

    presentation_id: str
    slide_index: int


@dataclass(frozen=True)
class MoveSlideOptions(CommandOptions):
    presentation_id: str
    slide_index: int
    new_position: int


@dataclass(frozen=True)
class ReorderSlidesOptions(CommandOptions):
    presentation_id: str
    indices: str

    def validate(self) -> None:
        parse_indices(self.indices)


@dataclass(frozen=True)
class CreateTableOptions(CommandOptions):
    presentation_id: str
    slide_index: int
    rows: int
    cols: int

    def validate(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise MalformedInputError("rows and columns must be at least 1")


@dataclass(frozen=True)
class UpdateCellOptions(CommandOptions):
    presentation_id: str
    table_id: str
    row: int
    col: int
    text: str


@dataclass(frozen=True)
class StyleCellOptions(CommandOptions):
    presentation_id: str
    table_id: str
    row: int
    col: int
    bg_color: str = ""

    def validate(self) -> None:
        if not self.bg_color:
            raise MalformedInputError("background color is required (--bg-color)")
        hex_to_rgb(self.bg_color)


@dataclass(frozen=True)
class ReplaceTextOptions(CommandOptions):
    presentation_id: str
    find: str
    replace: str


@dataclass(frozen=True)
class SearchTextOptions(CommandOptions):
    presentation_id: str
    query: str


@dataclass(frozen=True)
class CopyTextStyleOptions(CommandOptions):
    presentation_id: str
    source_object_id: str
    target_object_id: str


@dataclass(frozen=True)
class AddNotesOptions(CommandOptions):
    presentation_id: str
    slide_index: int
    notes: str


@dataclass(frozen=True)
class AddShapeOptions(CommandOptions):
    presentation_id: str
    slide_index: int
    shape_type: str


@dataclass(frozen=True)
class ExportOptions(CommandOptions):
    presentation_id: str
    output_file: str


@dataclass(frozen=True)
class LoginOptions(CommandOptions):
    force: bool = False
