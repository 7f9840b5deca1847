"""
LibreTranslate-compatible translation client.

One POST per translate() call with body
{"q": text, "source": ..., "target": ..., "format": "text"}; the reply must
be {"translatedText": "..."}. Calls never raise: every failure becomes
Unavailable so callers apply their own fallback. No retry, no caching.
"""

from typing import Any, Dict, Optional

import httpx

from dictexport.config import DEFAULT_TRANSLATE_URL
from dictexport.exceptions import TranslationError
from dictexport.logger import get_logger
from dictexport.translator.results import (
    Translated,
    TranslationResult,
    Unavailable,
    text_or,
)

logger = get_logger(__name__)


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 30.0),
            read=timeout_config.get('read', 30.0),
            pool=timeout_config.get('pool', 10.0),
        )
    timeout_value = float(timeout_config) if timeout_config else 30.0
    return httpx.Timeout(
        connect=10.0,
        write=30.0,
        read=timeout_value,
        pool=10.0,
    )


class TranslationClient:
    """Single-text translation against a LibreTranslate endpoint."""

    def __init__(
        self,
        api_url: str = DEFAULT_TRANSLATE_URL,
        timeout: Any = 30,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        if not api_url:
            raise TranslationError("Translation API URL not configured", details={"missing_field": "api_url"})
        self.api_url = api_url
        self.api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=get_httpx_timeout(timeout))
        logger.info(f"Initialized translation client for {api_url}")

    @classmethod
    def from_config(cls, config: Dict[str, Any], http_client: Optional[httpx.Client] = None) -> "TranslationClient":
        settings = config.get('translation', {})
        return cls(
            api_url=settings.get('api_url', DEFAULT_TRANSLATE_URL),
            timeout=settings.get('timeout', 30),
            api_key=settings.get('api_key'),
            http_client=http_client,
        )

    def _build_body(self, text: str, source_lang: str, target_lang: str) -> Dict[str, Any]:
        body = {"q": text, "source": source_lang, "target": target_lang, "format": "text"}
        if self.api_key:
            body["api_key"] = self.api_key
        return body

    def translate(self, text: str, source_lang: str, target_lang: str) -> TranslationResult:
        """Translate text; returns Translated or Unavailable, never raises."""
        body = self._build_body(text, source_lang, target_lang)

        try:
            response = self._client.post(self.api_url, json=body)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Translation API error {e.response.status_code} ({source_lang}->{target_lang})")
            return Unavailable(f"status {e.response.status_code}")
        except httpx.TimeoutException:
            logger.warning(f"Translation API request timeout ({source_lang}->{target_lang})")
            return Unavailable("timeout")
        except httpx.HTTPError as e:
            logger.warning(f"Translation API request failed ({source_lang}->{target_lang}): {e}")
            return Unavailable(f"request failed: {e}")
        except ValueError as e:
            logger.warning(f"Translation API returned malformed JSON: {e}")
            return Unavailable("malformed response")
        except Exception as e:
            logger.error(f"Unexpected translation failure: {e}")
            return Unavailable(f"unexpected error: {e}")

        translated = result.get("translatedText") if isinstance(result, dict) else None
        if not isinstance(translated, str):
            logger.debug(f"Translation response missing translatedText: {result!r}")
            return Unavailable("missing translatedText")
        if not translated:
            return Unavailable("empty translation")
        return Translated(translated)

    def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate text, returning an empty string when translation is unavailable."""
        return text_or(self.translate(text, source_lang, target_lang), "")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TranslationClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
