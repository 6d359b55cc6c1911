"""Command-line interface for slidemanager.

Usage:
    slidemanager create-presentation <title> [--folder FOLDER_ID]
    slidemanager add-slide <presentation> [--layout BLANK] [--position -1]
    slidemanager reorder-slides <presentation> 2,0,1
    slidemanager export-pdf <presentation> deck.pdf
    ...

Confirmations are written to stderr; created IDs and query results are
written to stdout so they can be piped.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from slidemanager.client import SlidesClient
from slidemanager.config import Settings
from slidemanager.credentials import CredentialsManager
from slidemanager.exceptions import SlideManagerError
from slidemanager.options import (
    AddNotesOptions,
    AddShapeOptions,
    AddSlideOptions,
    CommandOptions,
    CopyTextStyleOptions,
    CreatePresentationOptions,
    CreateTableOptions,
    ExportOptions,
    LoginOptions,
    MoveSlideOptions,
    PresentationOptions,
    ReorderSlidesOptions,
    ReplaceTextOptions,
    SearchTextOptions,
    SlideOptions,
    StyleCellOptions,
    UpdateCellOptions,
)
from slidemanager.transport import GoogleSlidesTransport, Transport

Handler = Callable[[SlidesClient, Any], Awaitable[int]]
TransportFactory = Callable[[Settings], Transport]


def _confirm(message: str) -> None:
    print(f"✅ {message}", file=sys.stderr)


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


# ==================== Presentation Commands ====================


async def cmd_create_presentation(
    client: SlidesClient, opts: CreatePresentationOptions
) -> int:
    """Create a new presentation."""
    result = await client.create_presentation(opts.title, opts.folder)
    _confirm(f"Presentation created: {result.get('title', opts.title)}")
    print(f"   ID: {result['presentationId']}", file=sys.stderr)
    print(result["presentationId"])
    return 0


# ==================== Slide Commands ====================


async def cmd_add_slide(client: SlidesClient, opts: AddSlideOptions) -> int:
    slide_id = await client.add_slide(
        opts.presentation_id, opts.layout, opts.insertion_index
    )
    _confirm(f"Slide added with layout {opts.layout}")
    print(slide_id)
    return 0


async def cmd_duplicate_slide(client: SlidesClient, opts: SlideOptions) -> int:
    await client.duplicate_slide(opts.presentation_id, opts.slide_index)
    _confirm("Slide duplicated")
    return 0


async def cmd_remove_slide(client: SlidesClient, opts: SlideOptions) -> int:
    await client.remove_slide(opts.presentation_id, opts.slide_index)
    _confirm("Slide removed")
    return 0


async def cmd_move_slide(client: SlidesClient, opts: MoveSlideOptions) -> int:
    await client.move_slide(opts.presentation_id, opts.slide_index, opts.new_position)
    _confirm(f"Slide moved to position {opts.new_position}")
    return 0


async def cmd_reorder_slides(client: SlidesClient, opts: ReorderSlidesOptions) -> int:
    await client.reorder_slides(opts.presentation_id, opts.indices)
    _confirm("Slides reordered")
    return 0


# ==================== Table Commands ====================


async def cmd_create_table(client: SlidesClient, opts: CreateTableOptions) -> int:
    table_id = await client.create_table(
        opts.presentation_id, opts.slide_index, opts.rows, opts.cols
    )
    _confirm(f"Table created ({opts.rows}x{opts.cols})")
    print(table_id)
    return 0


async def cmd_update_cell(client: SlidesClient, opts: UpdateCellOptions) -> int:
    await client.update_cell(
        opts.presentation_id, opts.table_id, opts.row, opts.col, opts.text
    )
    _confirm(f"Cell updated (row {opts.row}, col {opts.col})")
    return 0


async def cmd_style_cell(client: SlidesClient, opts: StyleCellOptions) -> int:
    await client.style_cell(
        opts.presentation_id, opts.table_id, opts.row, opts.col, opts.bg_color
    )
    _confirm(f"Cell styled (row {opts.row}, col {opts.col})")
    return 0


# ==================== Text Commands ====================


async def cmd_replace_text(client: SlidesClient, opts: ReplaceTextOptions) -> int:
    await client.replace_text(opts.presentation_id, opts.find, opts.replace)
    _confirm(f"Text replaced: '{opts.find}' -> '{opts.replace}'")
    return 0


async def cmd_extract_all_text(client: SlidesClient, opts: PresentationOptions) -> int:
    print(await client.extract_all_text(opts.presentation_id))
    return 0


async def cmd_search_text(client: SlidesClient, opts: SearchTextOptions) -> int:
    matches = await client.search_text(opts.presentation_id, opts.query)
    _print_json([m.to_dict() for m in matches])
    return 0


async def cmd_copy_text_style(client: SlidesClient, opts: CopyTextStyleOptions) -> int:
    await client.copy_text_style(
        opts.presentation_id, opts.source_object_id, opts.target_object_id
    )
    _confirm("Text style copied")
    return 0


# ==================== Notes Commands ====================


async def cmd_get_notes(client: SlidesClient, opts: SlideOptions) -> int:
    print(await client.get_notes(opts.presentation_id, opts.slide_index))
    return 0


async def cmd_add_notes(client: SlidesClient, opts: AddNotesOptions) -> int:
    await client.add_notes(opts.presentation_id, opts.slide_index, opts.notes)
    _confirm(f"Notes added to slide {opts.slide_index}")
    return 0


async def cmd_extract_all_notes(client: SlidesClient, opts: PresentationOptions) -> int:
    _print_json(await client.extract_all_notes(opts.presentation_id))
    return 0


# ==================== Shape Commands ====================


async def cmd_add_shape(client: SlidesClient, opts: AddShapeOptions) -> int:
    shape_id = await client.add_shape(
        opts.presentation_id, opts.slide_index, opts.shape_type
    )
    _confirm(f"Shape added: {opts.shape_type}")
    print(shape_id)
    return 0


# ==================== Export Commands ====================


async def cmd_export_pdf(client: SlidesClient, opts: ExportOptions) -> int:
    path = await client.export_pdf(opts.presentation_id, opts.output_file)
    _confirm(f"Presentation exported as PDF: {path}")
    return 0


async def cmd_export_pptx(client: SlidesClient, opts: ExportOptions) -> int:
    path = await client.export_pptx(opts.presentation_id, opts.output_file)
    _confirm(f"Presentation exported as PPTX: {path}")
    return 0


# ==================== Credential Commands ====================


def cmd_login(settings: Settings, opts: LoginOptions) -> int:
    """Authorize and cache a token."""
    manager = CredentialsManager(settings)
    manager.get_credentials(force_refresh=opts.force)
    _confirm(f"Authorized. Token cached at {manager.token_path}")
    return 0


def cmd_logout(settings: Settings, _opts: CommandOptions) -> int:
    """Clear the cached token."""
    manager = CredentialsManager(settings)
    if manager.clear():
        _confirm(f"Credentials cleared from {manager.token_path}")
    else:
        print("No cached credentials found.", file=sys.stderr)
    return 0


# ==================== Wiring ====================


def google_transport(settings: Settings) -> Transport:
    """Authorize and build the production transport."""
    creds = CredentialsManager(settings).get_credentials()
    return GoogleSlidesTransport(access_token=creds.token, timeout=settings.timeout)


def _add_command(
    subparsers: Any,
    name: str,
    help_text: str,
    handler: Any,
    options: type[CommandOptions],
    *,
    local: bool = False,
) -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = subparsers.add_parser(name, help=help_text)
    parser.set_defaults(handler=handler, options=options, local=local)
    return parser


def _add_presentation_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "presentation_id",
        metavar="presentation",
        help="Presentation ID or full Google Slides URL",
    )


def _add_slide_index_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("slide_index", type=int, help="Zero-based slide index")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="slidemanager",
        description=(
            "Google Slides operations: create, edit, format, and export "
            "presentations"
        ),
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # Presentation
    p = _add_command(
        sub,
        "create-presentation",
        "Create a new Google Slides presentation",
        cmd_create_presentation,
        CreatePresentationOptions,
    )
    p.add_argument("title", help="Presentation title")
    p.add_argument("--folder", default=None, help="Drive folder ID to place it in")

    # Slides
    p = _add_command(
        sub, "add-slide", "Add a new slide", cmd_add_slide, AddSlideOptions
    )
    _add_presentation_arg(p)
    p.add_argument(
        "--layout",
        default="BLANK",
        help="Predefined layout (BLANK, TITLE, TITLE_AND_BODY, ...)",
    )
    p.add_argument(
        "--position", type=int, default=-1, help="Insertion index (-1 appends)"
    )

    p = _add_command(
        sub,
        "duplicate-slide",
        "Duplicate an existing slide",
        cmd_duplicate_slide,
        SlideOptions,
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)

    p = _add_command(
        sub, "remove-slide", "Remove a slide", cmd_remove_slide, SlideOptions
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)

    p = _add_command(
        sub,
        "move-slide",
        "Move a slide to a new position",
        cmd_move_slide,
        MoveSlideOptions,
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)
    p.add_argument("new_position", type=int, help="Target insertion index")

    p = _add_command(
        sub,
        "reorder-slides",
        "Reorder slides (comma-separated indices, e.g. 2,0,1)",
        cmd_reorder_slides,
        ReorderSlidesOptions,
    )
    _add_presentation_arg(p)
    p.add_argument("indices", help="Comma-separated slide indices in the new order")

    # Tables
    p = _add_command(
        sub,
        "create-table",
        "Create a table on a slide",
        cmd_create_table,
        CreateTableOptions,
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)
    p.add_argument("rows", type=int)
    p.add_argument("cols", type=int)

    p = _add_command(
        sub,
        "update-cell",
        "Insert text into a table cell",
        cmd_update_cell,
        UpdateCellOptions,
    )
    _add_presentation_arg(p)
    p.add_argument("table_id", help="Table object ID (printed by create-table)")
    p.add_argument("row", type=int)
    p.add_argument("col", type=int)
    p.add_argument("text")

    p = _add_command(
        sub,
        "style-cell",
        "Set a table cell background color",
        cmd_style_cell,
        StyleCellOptions,
    )
    _add_presentation_arg(p)
    p.add_argument("table_id")
    p.add_argument("row", type=int)
    p.add_argument("col", type=int)
    p.add_argument("--bg-color", default="", help="Hex color, e.g. #FF0000")

    # Text
    p = _add_command(
        sub,
        "replace-text",
        "Find and replace text in the whole presentation",
        cmd_replace_text,
        ReplaceTextOptions,
    )
    _add_presentation_arg(p)
    p.add_argument("find")
    p.add_argument("replace")

    p = _add_command(
        sub,
        "extract-all-text",
        "Print all slide text",
        cmd_extract_all_text,
        PresentationOptions,
    )
    _add_presentation_arg(p)

    p = _add_command(
        sub,
        "search-text",
        "Search text runs (JSON output)",
        cmd_search_text,
        SearchTextOptions,
    )
    _add_presentation_arg(p)
    p.add_argument("query")

    p = _add_command(
        sub,
        "copy-text-style",
        "Copy text style from one element to another",
        cmd_copy_text_style,
        CopyTextStyleOptions,
    )
    _add_presentation_arg(p)
    p.add_argument("source_object_id")
    p.add_argument("target_object_id")

    # Notes
    p = _add_command(
        sub, "get-notes", "Print a slide's speaker notes", cmd_get_notes, SlideOptions
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)

    p = _add_command(
        sub,
        "add-notes",
        "Add speaker notes to a slide",
        cmd_add_notes,
        AddNotesOptions,
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)
    p.add_argument("notes")

    p = _add_command(
        sub,
        "extract-all-notes",
        "Print all speaker notes (JSON output)",
        cmd_extract_all_notes,
        PresentationOptions,
    )
    _add_presentation_arg(p)

    # Shapes
    p = _add_command(
        sub,
        "add-shape",
        "Add a shape to a slide (RECTANGLE, ELLIPSE, ...)",
        cmd_add_shape,
        AddShapeOptions,
    )
    _add_presentation_arg(p)
    _add_slide_index_arg(p)
    p.add_argument("shape_type")

    # Export
    p = _add_command(
        sub, "export-pdf", "Export as PDF", cmd_export_pdf, ExportOptions
    )
    _add_presentation_arg(p)
    p.add_argument("output_file")

    p = _add_command(
        sub, "export-pptx", "Export as PowerPoint", cmd_export_pptx, ExportOptions
    )
    _add_presentation_arg(p)
    p.add_argument("output_file")

    # Credentials
    p = _add_command(
        sub,
        "login",
        "Authorize with Google (opens browser)",
        cmd_login,
        LoginOptions,
        local=True,
    )
    p.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Re-authorize even if a cached token is valid",
    )

    _add_command(
        sub,
        "logout",
        "Clear cached credentials",
        cmd_logout,
        LoginOptions,
        local=True,
    ).set_defaults(force=False)

    return parser


async def run_command(
    handler: Handler,
    opts: CommandOptions,
    settings: Settings,
    transport_factory: TransportFactory,
) -> int:
    """Build a client, run one handler, and always close the transport."""
    transport = transport_factory(settings)
    try:
        return await handler(SlidesClient(transport), opts)
    finally:
        await transport.close()


def main(
    argv: Sequence[str] | None = None,
    transport_factory: TransportFactory | None = None,
) -> int:
    """Main entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        opts = args.options.from_args(args)
        opts.validate()
        settings = Settings.load()

        if args.local:
            result: int = args.handler(settings, opts)
            return result

        return asyncio.run(
            run_command(
                args.handler, opts, settings, transport_factory or google_transport
            )
        )
    except SlideManagerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
