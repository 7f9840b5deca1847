"""
Translator Module

This module provides the remote translation client and its result types.
"""

from dictexport.exceptions import TranslationError
from dictexport.translator.client import TranslationClient, get_httpx_timeout
from dictexport.translator.results import (
    UNAVAILABLE,
    Translated,
    TranslationResult,
    Unavailable,
    text_or,
)

__all__ = [
    'TranslationError',
    'TranslationClient',
    'get_httpx_timeout',
    'UNAVAILABLE',
    'Translated',
    'TranslationResult',
    'Unavailable',
    'text_or',
]
