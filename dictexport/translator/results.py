"""
Translation results.

A translate call yields either Translated(text) or UNAVAILABLE. An empty
translation from the service counts as unavailable.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Translated:
    """Service returned usable text."""
    text: str


@dataclass(frozen=True)
class Unavailable:
    """Translation failed or came back empty; callers fall back to the original."""
    reason: str = ""


UNAVAILABLE = Unavailable()

TranslationResult = Union[Translated, Unavailable]


def text_or(result: TranslationResult, fallback: str) -> str:
    """Return the translated text, or fallback when the translation is unavailable."""
    if isinstance(result, Translated):
        return result.text
    return fallback
