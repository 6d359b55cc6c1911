"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from oauthlib.oauth2.rfc6749.errors import AccessDeniedError

from slidemanager import LocalFileTransport, RejectedError
from slidemanager import credentials as credentials_module
from slidemanager.cli import build_parser, main
from slidemanager.config import Settings
from slidemanager.exceptions import MalformedInputError
from slidemanager.options import (
    AddSlideOptions,
    CommandOptions,
    ExportOptions,
    StyleCellOptions,
)

GOLDEN_DIR = Path(__file__).parent / "golden"
PID = "simple_presentation"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temp dir and clear overrides."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("SLIDEMANAGER_CONFIG_DIR", str(config_dir))
    for name in ("SLIDEMANAGER_CREDENTIALS", "SLIDEMANAGER_TOKEN_PATH", "SLIDEMANAGER_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture
def local() -> LocalFileTransport:
    return LocalFileTransport(GOLDEN_DIR)


def run(argv: list[str], transport: LocalFileTransport) -> int:
    return main(argv, transport_factory=lambda settings: transport)


class TestParser:
    def test_every_command_registered(self) -> None:
        parser = build_parser()
        commands = {
            "create-presentation": ["Deck"],
            "add-slide": [PID],
            "duplicate-slide": [PID, "0"],
            "remove-slide": [PID, "0"],
            "move-slide": [PID, "0", "1"],
            "reorder-slides": [PID, "1,0"],
            "create-table": [PID, "0", "2", "2"],
            "update-cell": [PID, "t", "0", "0", "x"],
            "style-cell": [PID, "t", "0", "0", "--bg-color", "#ffffff"],
            "replace-text": [PID, "a", "b"],
            "extract-all-text": [PID],
            "search-text": [PID, "q"],
            "copy-text-style": [PID, "a", "b"],
            "get-notes": [PID, "0"],
            "add-notes": [PID, "0", "hi"],
            "extract-all-notes": [PID],
            "add-shape": [PID, "0", "RECTANGLE"],
            "export-pdf": [PID, "out.pdf"],
            "export-pptx": [PID, "out.pptx"],
            "login": [],
            "logout": [],
        }
        for name, rest in commands.items():
            args = parser.parse_args([name, *rest])
            opts = args.options.from_args(args)
            assert isinstance(opts, CommandOptions), name

    def test_add_slide_defaults(self) -> None:
        args = build_parser().parse_args(["add-slide", PID])
        opts = AddSlideOptions.from_args(args)

        assert opts.layout == "BLANK"
        assert opts.position == -1
        assert opts.insertion_index is None

    def test_style_cell_without_bg_color(self) -> None:
        """--bg-color defaults to empty and is refused by validation."""
        args = build_parser().parse_args(["style-cell", PID, "t", "0", "0"])
        opts = StyleCellOptions.from_args(args)

        assert opts.bg_color == ""
        with pytest.raises(MalformedInputError, match="--bg-color"):
            opts.validate()

    def test_url_normalized_to_id(self) -> None:
        url = "https://docs.google.com/presentation/d/1abc-XYZ/edit"
        args = build_parser().parse_args(["export-pdf", url, "out.pdf"])

        assert ExportOptions.from_args(args).presentation_id == "1abc-XYZ"

    def test_non_integer_index_rejected(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["remove-slide", PID, "first"])

        assert exc_info.value.code == 2


class TestCommands:
    def test_create_presentation_prints_id(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["create-presentation", "Deck", "--folder", "f1"], local) == 0

        out, err = capsys.readouterr()
        assert out == "local_1\n"
        assert "✅ Presentation created: Deck" in err
        assert local.moves == [("local_1", "f1")]

    def test_add_slide_prints_id(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["add-slide", PID, "--layout", "TITLE", "--position", "1"], local) == 0

        out, err = capsys.readouterr()
        slide_id = out.strip()
        assert slide_id.startswith("slide_")
        assert "✅" in err
        request = local.batch_updates[0]["requests"][0]["createSlide"]
        assert request["objectId"] == slide_id
        assert request["insertionIndex"] == 1

    def test_reorder_slides(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["reorder-slides", PID, "2,0,1"], local) == 0

        requests = local.batch_updates[0]["requests"]
        assert [r["updateSlidesPosition"]["slideObjectIds"] for r in requests] == [
            ["p_slide2"],
            ["p_slide0"],
            ["p_slide1"],
        ]
        assert capsys.readouterr().out == ""

    def test_extract_all_text(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["extract-all-text", "two_slides"], local) == 0

        assert capsys.readouterr().out == "Hello\n\n---\n\nWorld\n\n---\n\n\n"

    def test_search_text_json(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["search-text", "two_slides", "wor"], local) == 0

        assert json.loads(capsys.readouterr().out) == [
            {"slide_index": 1, "object_id": "shape_world", "text": "World"}
        ]

    def test_extract_all_notes_json(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["extract-all-notes", PID], local) == 0

        assert json.loads(capsys.readouterr().out) == {"slide_0": "remember this"}

    def test_get_notes(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["get-notes", PID, "0"], local) == 0

        assert capsys.readouterr().out == "  remember this  \n"

    def test_export_pdf(
        self,
        local: LocalFileTransport,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        output = tmp_path / "deck.pdf"

        assert run(["export-pdf", "two_slides", str(output)], local) == 0

        assert output.read_bytes() == b"application/pdf:two_slides"
        assert "exported as PDF" in capsys.readouterr().err


class TestErrors:
    def test_out_of_range(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["remove-slide", PID, "9"], local) == 1

        out, err = capsys.readouterr()
        assert out == ""
        assert err.startswith("Error: error removing slide: slide index 9 out of range")
        assert local.batch_updates == []

    def test_rejected_batch_prints_only_the_error(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A refused batch leaves stdout empty and prints no confirmation."""

        class RefusingTransport(LocalFileTransport):
            async def batch_update(
                self, presentation_id: str, requests: list[dict[str, Any]]
            ) -> dict[str, Any]:
                raise RejectedError(
                    "Batch rejected, no changes applied (400): bad", status_code=400
                )

        refusing = RefusingTransport(GOLDEN_DIR)

        assert run(["reorder-slides", PID, "2,0,1"], refusing) == 1

        out, err = capsys.readouterr()
        assert out == ""
        assert "✅" not in err
        assert err.startswith("Error: error reordering slides: Batch rejected")

    def test_missing_bg_color_rejected_before_transport(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Local validation runs before any transport is built."""

        def factory(settings: Settings) -> LocalFileTransport:
            raise AssertionError("transport should not be built")

        code = main(["style-cell", PID, "t", "0", "0"], transport_factory=factory)

        assert code == 1
        assert "--bg-color" in capsys.readouterr().err

    def test_malformed_reorder_rejected_before_transport(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def factory(settings: Settings) -> LocalFileTransport:
            raise AssertionError("transport should not be built")

        assert main(["reorder-slides", PID, "1,a"], transport_factory=factory) == 1
        assert "invalid index" in capsys.readouterr().err

    def test_notes_unavailable(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["add-notes", PID, "3", "hi"], local) == 1

        assert "notes page not available for slide 3" in capsys.readouterr().err

    def test_unknown_presentation(
        self, local: LocalFileTransport, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(["extract-all-text", "missing"], local) == 1

        out, err = capsys.readouterr()
        assert out == ""
        assert "Golden file not found" in err


class TestCredentialCommands:
    def test_logout_without_token(
        self, isolated_config: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["logout"]) == 0

        assert "No cached credentials found." in capsys.readouterr().err

    def test_logout_removes_token(
        self, isolated_config: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        isolated_config.mkdir(parents=True)
        token = isolated_config / "token.json"
        token.write_text("{}")

        assert main(["logout"]) == 0

        assert not token.exists()
        assert "Credentials cleared" in capsys.readouterr().err

    def test_login_without_client_secrets(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["login"]) == 1

        assert "client secrets not found" in capsys.readouterr().err

    def test_login_access_denied(
        self,
        isolated_config: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Declining the consent screen is reported, not raised."""

        class DenyingFlow:
            @classmethod
            def from_client_secrets_file(
                cls, path: str, scopes: list[str]
            ) -> DenyingFlow:
                return cls()

            def run_local_server(self, port: int = 0) -> None:
                raise AccessDeniedError(description="user denied access")

        isolated_config.mkdir(parents=True)
        (isolated_config / "credentials.json").write_text('{"installed": {}}')
        monkeypatch.setattr(credentials_module, "InstalledAppFlow", DenyingFlow)

        assert main(["login"]) == 1

        out, err = capsys.readouterr()
        assert out == ""
        assert err.startswith("Error: Authorization failed:")
        assert "user denied access" in err
        assert not (isolated_config / "token.json").exists()
