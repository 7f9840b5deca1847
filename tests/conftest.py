from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Make package importable when running tests from the repository root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dictexport.config import DEFAULT_CONFIG  # noqa: E402
from dictexport.translator.results import UNAVAILABLE, Translated  # noqa: E402


SAMPLE_SOURCE = """
const words = [
  {
    word: "manzana",
    definition: "a fruit",
    pronunciation: "man-ZA-na",
    englishEquivalent: "apple"
  },
  { word: "perro", definition: "a loyal animal", pronunciation: "PEH-rro", englishEquivalent: "dog" },
];
"""


class FakeTranslationClient:
    """Stands in for TranslationClient; empty translations are unavailable."""

    def __init__(self, translations: Dict[str, str] | None = None, fail_on: Tuple[str, ...] = ()):
        self.translations = translations or {}
        self.fail_on = fail_on
        self.calls: List[Tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def translate(self, text: str, source_lang: str, target_lang: str):
        with self._lock:
            self.calls.append((text, source_lang, target_lang))
        if text in self.fail_on:
            raise RuntimeError(f"cannot translate {text}")
        value = self.translations.get(text, "")
        return Translated(value) if value else UNAVAILABLE

    def close(self) -> None:
        pass


@pytest.fixture
def fake_client() -> FakeTranslationClient:
    return FakeTranslationClient()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "dictionary.txt"
    path.write_text(SAMPLE_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def export_config(tmp_path: Path, source_file: Path) -> dict:
    config = {
        **DEFAULT_CONFIG,
        "source_dictionary": str(source_file),
        "output_dir": str(tmp_path / "out"),
        "log_mode": "off",
    }
    config["translation"] = {**DEFAULT_CONFIG["translation"], "pacing_delay": 0.15, "progress_every": 25}
    return config
