"""
Language code mappings and utilities.

Codes follow ISO 639-1 (2-letter), which is what LibreTranslate-compatible
services accept for the `source`/`target` fields. A few region variants are
listed so configuration can name them, but requests are sent with the base
language.
"""

from typing import Optional

# Languages offered by LibreTranslate/Argos deployments
ISO_639_1 = {
    'ar': 'Arabic',
    'az': 'Azerbaijani',
    'bg': 'Bulgarian',
    'bn': 'Bengali',
    'ca': 'Catalan',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'eo': 'Esperanto',
    'es': 'Spanish',
    'et': 'Estonian',
    'fa': 'Persian',
    'fi': 'Finnish',
    'fr': 'French',
    'ga': 'Irish',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hu': 'Hungarian',
    'id': 'Indonesian',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'ms': 'Malay',
    'nb': 'Norwegian Bokmål',
    'nl': 'Dutch',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'sq': 'Albanian',
    'sv': 'Swedish',
    'th': 'Thai',
    'tl': 'Tagalog',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'ur': 'Urdu',
    'vi': 'Vietnamese',
    'zh': 'Chinese',
}

REGION_VARIANTS = {
    'en-US': 'English (United States)',
    'en-GB': 'English (United Kingdom)',
    'es-MX': 'Spanish (Mexico)',
    'pt-BR': 'Portuguese (Brazil)',
    'zh-CN': 'Chinese (Simplified, China)',
    'zh-TW': 'Chinese (Traditional, Taiwan)',
}

# Combined mapping
ALL_LANGUAGE_CODES = {**ISO_639_1, **REGION_VARIANTS}


def is_valid_language_code(code: str) -> bool:
    """
    Check if a language code is known.

    Examples:
        >>> is_valid_language_code('fr')
        True
        >>> is_valid_language_code('zh-CN')
        True
        >>> is_valid_language_code('klingon')
        False
    """
    return code in ALL_LANGUAGE_CODES


def get_language_name(code: str) -> Optional[str]:
    """
    Get the full language name from code, or None if unknown.

    Examples:
        >>> get_language_name('hi')
        'Hindi'
    """
    return ALL_LANGUAGE_CODES.get(code)


def extract_base_language(code: str) -> str:
    """
    Extract base language from code (remove region).

    Examples:
        >>> extract_base_language('zh-CN')
        'zh'
        >>> extract_base_language('fr')
        'fr'
    """
    return code.split('-')[0]


def languages_match(code1: str, code2: str, strict: bool = False) -> bool:
    """
    Check if two language codes match.

    With strict=False a shared base language is enough.

    Examples:
        >>> languages_match('en', 'en-US')
        True
        >>> languages_match('en', 'en-US', strict=True)
        False
    """
    if strict:
        return code1 == code2

    return extract_base_language(code1) == extract_base_language(code2)
