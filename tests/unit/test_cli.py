"""Unit tests for the mjprompt CLI."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner, Result

from mjprompt.cli import cli
from mjprompt.utils.exceptions import ClipboardError


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "prompt-data"


def _run(data_dir: Path, *args: str) -> Result:
    """Invoke mjprompt quietly against data_dir; returns Click's Result."""
    runner = CliRunner()
    return runner.invoke(cli, ["--data-dir", str(data_dir), "-q", *args])


def _show(data_dir: Path, text: str = "a knight") -> str:
    result = _run(data_dir, "show", "--text", text)
    assert result.exit_code == 0, result.output
    return result.output.strip()


def _document(data_dir: Path) -> dict:
    return yaml.safe_load((data_dir / "promt.yaml").read_text(encoding="utf-8"))


@pytest.mark.unit
class TestShow:
    def test_defaults(self, data_dir):
        assert _show(data_dir) == "/imagine prompt: a knight"

    def test_text_is_not_saved(self, data_dir):
        _show(data_dir, "a dragon")
        assert "a dragon" not in (data_dir / "promt.yaml").read_text(encoding="utf-8")

    def test_summary_panel_when_not_quiet(self, data_dir):
        runner = CliRunner()
        result = runner.invoke(cli, ["--data-dir", str(data_dir), "show", "--options"])
        assert result.exit_code == 0
        assert "/imagine prompt: " in result.output

    def test_spec_example(self, data_dir):
        assert _run(data_dir, "choose", "body", "feminine").exit_code == 0
        assert _run(data_dir, "theme", "toggle", "1").exit_code == 0
        assert _show(data_dir) == "/imagine prompt: a knight, feminine body, cyberpunk"


@pytest.mark.unit
class TestSet:
    def test_algorithm_switch_remaps_aspect(self, data_dir):
        result = _run(data_dir, "set", "--aspect", "wide", "--algorithm", "test")
        assert result.exit_code == 0
        assert _show(data_dir) == "/imagine prompt: a knight --ar 3:2 --test"
        assert _document(data_dir)["aspect"] == "landscape"

    def test_flags(self, data_dir):
        result = _run(data_dir, "set", "--stylize", "5000", "--seed", "7", "--video")
        assert result.exit_code == 0
        assert _show(data_dir) == "/imagine prompt: a knight --stylize 5000 --video --sameseed 7"

    def test_stylize_clamped_and_reset(self, data_dir):
        _run(data_dir, "set", "--stylize", "1")
        assert _document(data_dir)["stylize"] == 625
        _run(data_dir, "set", "--reset-stylize")
        assert _document(data_dir)["stylize"] == 2500

    def test_no_seed(self, data_dir):
        _run(data_dir, "set", "--seed", "3")
        _run(data_dir, "set", "--no-seed")
        doc = _document(data_dir)
        assert doc["use_seed"] is False
        assert doc["seed"] == 3

    def test_copy_on_change_preference(self, data_dir):
        _run(data_dir, "set", "--no-copy-on-change")
        assert _document(data_dir)["copy_on_change"] is False

    def test_unknown_algorithm_rejected(self, data_dir):
        result = _run(data_dir, "set", "--algorithm", "v5")
        assert result.exit_code == 2


@pytest.mark.unit
class TestChooseAndOptions:
    def test_choose_unknown_value_fails(self, data_dir):
        result = _run(data_dir, "choose", "hair", "green")
        assert result.exit_code == 2
        assert "green" in result.output

    def test_choose_without_value_clears(self, data_dir):
        _run(data_dir, "choose", "style", "lo-fi anime")
        assert _show(data_dir) == "/imagine prompt: a knight, lo-fi anime"
        _run(data_dir, "choose", "style")
        assert _show(data_dir) == "/imagine prompt: a knight"

    def test_add_then_choose(self, data_dir):
        assert _run(data_dir, "option", "add", "color", "sepia").exit_code == 0
        assert _run(data_dir, "choose", "color", "sepia").exit_code == 0
        assert _show(data_dir) == "/imagine prompt: a knight, sepia colors"

    def test_edit_selected_option(self, data_dir):
        _run(data_dir, "choose", "pose", "dynamic")
        assert _run(data_dir, "option", "edit", "pose", "1", "heroic").exit_code == 0
        assert _show(data_dir) == "/imagine prompt: a knight, heroic pose"

    def test_remove_out_of_range(self, data_dir):
        result = _run(data_dir, "option", "remove", "body", "9")
        assert result.exit_code == 2

    def test_remove_last_option_refused(self, data_dir):
        assert _run(data_dir, "option", "remove", "body", "1").exit_code == 0
        result = _run(data_dir, "option", "remove", "body", "1")
        assert result.exit_code == 2
        assert _document(data_dir)["body"]["choices"] == ["masculine"]


@pytest.mark.unit
class TestThemes:
    def test_add_is_enabled(self, data_dir):
        assert _run(data_dir, "theme", "add", "solarpunk").exit_code == 0
        assert _show(data_dir) == "/imagine prompt: a knight, solarpunk"

    def test_add_disabled(self, data_dir):
        _run(data_dir, "theme", "add", "solarpunk", "--disabled")
        assert _show(data_dir) == "/imagine prompt: a knight"

    def test_edit_and_remove(self, data_dir):
        _run(data_dir, "theme", "toggle", "2")
        _run(data_dir, "theme", "edit", "2", "dieselpunk")
        assert _show(data_dir) == "/imagine prompt: a knight, dieselpunk"
        _run(data_dir, "theme", "remove", "2")
        assert _document(data_dir)["themes"] == [["cyberpunk", False]]

    def test_bad_position(self, data_dir):
        assert _run(data_dir, "theme", "toggle", "0").exit_code == 2


@pytest.mark.unit
class TestCopy:
    @patch("mjprompt.core.session.copy_text")
    def test_copies_command(self, copy_text: MagicMock, data_dir):
        result = _run(data_dir, "copy", "--text", "a knight")
        assert result.exit_code == 0
        copy_text.assert_called_once_with("/imagine prompt: a knight")
        assert "/imagine prompt: a knight" in result.output

    @patch("mjprompt.core.session.copy_text")
    def test_clipboard_error_exit_1(self, copy_text: MagicMock, data_dir):
        copy_text.side_effect = ClipboardError("no display")
        result = _run(data_dir, "copy", "--text", "a knight")
        assert result.exit_code == 1
        assert "error copying command: no display" in result.output

    @patch("mjprompt.core.session.copy_text")
    def test_blank_text_exit_2(self, copy_text: MagicMock, data_dir):
        result = _run(data_dir, "copy", "--text", "   ")
        assert result.exit_code == 2
        copy_text.assert_not_called()


@pytest.mark.unit
class TestBracketedText:
    """User text containing rich markup tags is printed literally."""

    @staticmethod
    def _run_verbose(data_dir: Path, *args: str) -> Result:
        return CliRunner().invoke(cli, ["--data-dir", str(data_dir), *args])

    @patch("mjprompt.core.session.copy_text")
    def test_copy_with_closing_tag(self, copy_text: MagicMock, data_dir):
        result = self._run_verbose(data_dir, "copy", "--text", "a [/x] knight")
        assert result.exit_code == 0, result.output
        copy_text.assert_called_once_with("/imagine prompt: a [/x] knight")
        assert "/imagine prompt: a [/x] knight" in result.output

    def test_choose_option_with_closing_tag(self, data_dir):
        assert _run(data_dir, "option", "add", "style", "[/neon]").exit_code == 0
        result = self._run_verbose(data_dir, "choose", "style", "[/neon]")
        assert result.exit_code == 0, result.output
        assert "[/neon]" in result.output

    def test_error_message_with_closing_tag(self, data_dir):
        result = self._run_verbose(data_dir, "choose", "hair", "[/green]")
        assert result.exit_code == 2
        assert "[/green]" in result.output


@pytest.mark.unit
class TestMisc:
    def test_path(self, data_dir):
        result = _run(data_dir, "path")
        assert result.output.strip() == str(data_dir / "promt.yaml")

    def test_reset(self, data_dir):
        _run(data_dir, "set", "--video")
        assert _run(data_dir, "reset").exit_code == 0
        assert _document(data_dir)["video"] is False

    def test_corrupt_document_still_works(self, data_dir):
        data_dir.mkdir(parents=True)
        (data_dir / "promt.yaml").write_text("style: [", encoding="utf-8")
        assert _show(data_dir) == "/imagine prompt: a knight"

    def test_bad_port_env_exit_2(self, data_dir, monkeypatch):
        monkeypatch.setenv("MJPROMPT_UI_PORT", "nope")
        result = _run(data_dir, "path")
        assert result.exit_code == 2

    @patch("mjprompt.ui.gradio_app.launch")
    def test_ui_passes_settings(self, launch: MagicMock, data_dir):
        result = _run(data_dir, "ui", "--port", "8123", "--host", "0.0.0.0")
        assert result.exit_code == 0
        settings = launch.call_args[0][0]
        assert settings.ui_port == 8123
        assert settings.ui_host == "0.0.0.0"
        assert settings.document_path == data_dir / "promt.yaml"
