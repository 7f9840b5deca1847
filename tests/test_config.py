from __future__ import annotations

import json
from pathlib import Path

import pytest

from dictexport import config as config_module
from dictexport import language_codes as lc
from dictexport.config import DEFAULT_CONFIG, get_translation_settings, load_config, save_config
from dictexport.exceptions import ConfigError
from dictexport.export.targets import ExportTarget, get_target, get_targets


def test_missing_config_file_yields_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "nope.json")

    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


def test_config_file_merges_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"translation": {"pacing_delay": 0.5}, "output_dir": "dist"}), encoding="utf-8")

    cfg = load_config(path)

    assert cfg["output_dir"] == "dist"
    assert cfg["translation"]["pacing_delay"] == 0.5
    assert cfg["translation"]["api_url"] == DEFAULT_CONFIG["translation"]["api_url"]


def test_corrupt_config_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(path) == DEFAULT_CONFIG


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    save_config({"source_language": "pt"}, path)

    assert load_config(path)["source_language"] == "pt"


def test_default_config_file_location_can_be_overridden(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)

    config_module.create_default_config()

    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG


@pytest.mark.parametrize(
    "translation",
    [{"pacing_delay": -0.1}, {"progress_every": 0}, {"progress_every": "often"}],
)
def test_invalid_translation_settings_raise(translation: dict) -> None:
    with pytest.raises(ConfigError):
        get_translation_settings({"translation": translation})


def test_translation_settings_are_coerced() -> None:
    settings = get_translation_settings({"translation": {"pacing_delay": "0", "progress_every": "50"}})

    assert settings["pacing_delay"] == 0.0
    assert settings["progress_every"] == 50


def test_default_targets_mirror_builtin_outputs() -> None:
    targets = get_targets(DEFAULT_CONFIG)

    assert [(t.code, t.output, t.mode) for t in targets] == [
        ("es", "spanishdictionary.js", "identity-by-word"),
        ("en", "englishdictionary.js", "identity-by-english-equivalent"),
        ("fr", "frenchdictionary.js", "translate"),
        ("hi", "hindidictionary.js", "translate"),
        ("vi", "vietnamesedictionary.js", "translate"),
        ("zh", "mandarindictionary.js", "translate"),
    ]
    assert get_target(DEFAULT_CONFIG, "zh").source_language == "es"
    assert get_target(DEFAULT_CONFIG, "zh").target_language == "zh"
    assert get_target(DEFAULT_CONFIG, "es").source_language is None


def test_get_targets_keeps_requested_order_and_rejects_unknown() -> None:
    assert [t.code for t in get_targets(DEFAULT_CONFIG, ["vi", "es"])] == ["vi", "es"]

    with pytest.raises(ConfigError) as excinfo:
        get_targets(DEFAULT_CONFIG, ["es", "tlh"])

    assert excinfo.value.code == "unknown_target"


@pytest.mark.parametrize(
    "entry",
    [
        {"code": "fr", "output": "fr.js", "mode": "machine"},
        {"code": "", "output": "fr.js", "mode": "translate"},
        {"code": "fr", "mode": "translate"},
        {"code": "es", "output": "es.js", "mode": "translate", "source_language": "es"},
        "fr",
    ],
)
def test_invalid_target_entries_raise(entry) -> None:
    with pytest.raises(ConfigError):
        ExportTarget.from_dict(entry)


def test_translate_target_languages_can_be_explicit() -> None:
    target = ExportTarget.from_dict(
        {"code": "pt-br", "output": "portuguese.js", "mode": "translate", "source_language": "en", "target_language": "pt"}
    )

    assert (target.source_language, target.target_language) == ("en", "pt")
    assert target.output_path("dist") == Path("dist") / "portuguese.js"


def test_language_code_helpers() -> None:
    assert lc.get_language_name("vi") == "Vietnamese"
    assert lc.is_valid_language_code("zh-CN")
    assert not lc.is_valid_language_code("tlh")
    assert lc.languages_match("zh-CN", "zh")
    assert not lc.languages_match("zh-CN", "zh", strict=True)
