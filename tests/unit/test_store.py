"""Unit tests for PromptStore load/save."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from mjprompt.core.algorithm import Algorithm, Aspect
from mjprompt.core.prompt import PromptConfig
from mjprompt.core.store import PromptDocument, PromptStore

VALID_DOCUMENT = """\
style:
  current: lo-fi anime
  choices: [ultra realistic, lo-fi anime]
themes:
- [cyberpunk, true]
- [steampunk, false]
color: {current: null, choices: [vibrant]}
body: {current: feminine, choices: [feminine, masculine]}
hair: {current: null, choices: [blonde]}
pose: {current: null, choices: [dynamic]}
algorithm: test
aspect: portrait
stylize: 5000
video: true
copy_on_change: false
use_seed: true
seed: 1234
"""


def _write(store: PromptStore, text: str) -> None:
    store.path.parent.mkdir(parents=True, exist_ok=True)
    store.path.write_text(text, encoding="utf-8")


@pytest.mark.unit
class TestLoad:
    def test_missing_file_returns_defaults(self, store):
        assert not store.path.exists()
        assert store.load() == PromptConfig.default()

    def test_valid_document(self, store):
        _write(store, VALID_DOCUMENT)
        c = store.load()
        assert c.style.current == "lo-fi anime"
        assert c.themes.entries == [("cyberpunk", True), ("steampunk", False)]
        assert c.color.options == ["vibrant"]
        assert c.body.render() == "feminine"
        assert c.algorithm == Algorithm.TEST
        assert c.aspect == Aspect.PORTRAIT
        assert c.stylize == 5000
        assert c.video is True
        assert c.copy_on_change is False
        assert c.use_seed is True
        assert c.seed == 1234
        assert c.text == ""

    def test_legacy_testphoto_algorithm(self, store):
        _write(store, VALID_DOCUMENT.replace("algorithm: test", "algorithm: testphoto"))
        assert store.load().algorithm == Algorithm.TESTP

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "style: [unclosed",
            "- just\n- a list\n",
            "\x00\x01 not yaml: : :",
        ],
    )
    def test_malformed_document_returns_defaults(self, store, text):
        _write(store, text)
        assert store.load() == PromptConfig.default()

    def test_deeply_nested_document_returns_defaults(self, store):
        _write(store, "style: " + "[" * 50000)
        assert store.load() == PromptConfig.default()

    def test_truncated_document_returns_defaults(self, store):
        _write(store, VALID_DOCUMENT[: len(VALID_DOCUMENT) // 2])
        assert store.load() == PromptConfig.default()

    def test_unknown_field_returns_defaults(self, store):
        _write(store, VALID_DOCUMENT + "extra: 1\n")
        assert store.load() == PromptConfig.default()

    def test_missing_field_returns_defaults(self, store):
        _write(store, VALID_DOCUMENT.replace("seed: 1234\n", ""))
        assert store.load() == PromptConfig.default()

    @pytest.mark.parametrize(
        "old,new",
        [
            ("stylize: 5000", "stylize: 10"),
            ("seed: 1234", "seed: -1"),
            ("aspect: portrait", "aspect: panorama"),
            ("algorithm: test", "algorithm: v5"),
        ],
    )
    def test_invalid_values_return_defaults(self, store, old, new):
        _write(store, VALID_DOCUMENT.replace(old, new))
        assert store.load() == PromptConfig.default()

    def test_empty_choices_keep_one_slot(self, store):
        _write(store, VALID_DOCUMENT.replace("choices: [blonde]", "choices: []"))
        assert store.load().hair.options == [""]

    def test_unreadable_file_returns_defaults(self, store):
        _write(store, VALID_DOCUMENT)
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            assert store.load() == PromptConfig.default()


@pytest.mark.unit
class TestSave:
    def test_creates_directory_and_writes_yaml(self, store):
        assert store.save(PromptConfig.default()) is True
        data = yaml.safe_load(store.path.read_text(encoding="utf-8"))
        assert list(data) == [
            "style",
            "themes",
            "color",
            "body",
            "hair",
            "pose",
            "algorithm",
            "aspect",
            "stylize",
            "video",
            "copy_on_change",
            "use_seed",
            "seed",
        ]
        assert data["style"] == {"current": None, "choices": ["ultra realistic", "lo-fi anime"]}
        assert data["themes"] == [["cyberpunk", False], ["steampunk", False]]
        assert data["algorithm"] == "v3"
        assert data["aspect"] == "square"

    def test_transient_fields_not_written(self, store):
        c = PromptConfig.default()
        c.set_text("secret subject")
        c.copied_command = "copied command"
        store.save(c)
        raw = store.path.read_text(encoding="utf-8")
        assert "secret subject" not in raw
        assert "copied command" not in raw

    def test_testp_written_as_wire_string(self, store):
        c = PromptConfig.default()
        c.set_algorithm(Algorithm.TESTP)
        store.save(c)
        assert yaml.safe_load(store.path.read_text(encoding="utf-8"))["algorithm"] == "testp"

    def test_overwrites_corrupt_document(self, store):
        _write(store, "garbage: [")
        assert store.save(PromptConfig.default()) is True
        assert store.load() == PromptConfig.default()

    def test_write_failure_is_swallowed(self, store):
        with patch.object(Path, "write_text", side_effect=OSError("disk full")):
            assert store.save(PromptConfig.default()) is False

    def test_out_of_range_state_is_not_saved(self, store):
        c = PromptConfig.default()
        c.stylize = 1
        assert store.save(c) is False
        assert not store.path.exists()


@pytest.mark.unit
class TestRoundTrip:
    def test_round_trip_after_mutations(self, store):
        c = PromptConfig.default()
        c.set_text("not persisted")
        c.style.add_option()
        c.style.edit_option(2, "oil painting")
        c.style.select("oil painting")
        c.hair.remove_option(4)
        c.hair.select("red")
        c.pose.select("relaxed")
        c.themes.add()
        c.themes.edit_label(2, "solarpunk")
        c.themes.toggle(0)
        c.set_aspect(Aspect.ULTRAWIDE)
        c.set_algorithm(Algorithm.TEST)
        c.set_stylize(60000)
        c.set_use_seed(True)
        c.set_seed(2**32 - 1)
        c.set_video(True)
        c.set_copy_on_change(False)

        store.save(c)
        loaded = store.load()

        assert loaded == c
        assert loaded.text == ""
        assert loaded.compile() == c.compile().replace("not persisted", "")

    def test_document_model_round_trip(self):
        c = PromptConfig.default()
        c.color.select("muted")
        assert PromptDocument.from_config(c).to_config() == c


@pytest.mark.unit
class TestDefaultPath:
    def test_uses_settings_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MJPROMPT_DATA_DIR", str(tmp_path / "custom"))
        assert PromptStore().path == tmp_path / "custom" / "promt.yaml"

    def test_bad_ui_port_does_not_block_store(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MJPROMPT_DATA_DIR", str(tmp_path / "custom"))
        monkeypatch.setenv("MJPROMPT_UI_PORT", "http")
        store = PromptStore()
        assert store.path == tmp_path / "custom" / "promt.yaml"
        assert store.load() == PromptConfig.default()
