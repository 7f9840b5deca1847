from __future__ import annotations

import json

import httpx
import pytest

from dictexport.exceptions import TranslationError
from dictexport.translator.client import TranslationClient, get_httpx_timeout
from dictexport.translator.results import Translated, Unavailable, text_or

API_URL = "https://translate.test/translate"


def make_client(handler, **kwargs) -> TranslationClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return TranslationClient(api_url=API_URL, http_client=http_client, **kwargs)


def test_translate_posts_expected_body() -> None:
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"translatedText": "pomme"})

    result = make_client(handler).translate("manzana", "es", "fr")

    assert result == Translated("pomme")
    assert captured["url"] == API_URL
    assert captured["body"] == {"q": "manzana", "source": "es", "target": "fr", "format": "text"}


def test_api_key_is_sent_when_configured() -> None:
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured.update(json.loads(request.content))
        return httpx.Response(200, json={"translatedText": "x"})

    make_client(handler, api_key="secret").translate("a", "es", "fr")

    assert captured["api_key"] == "secret"


@pytest.mark.parametrize(
    "status, payload",
    [
        (500, {"json": {"error": "server"}}),
        (429, {"json": {"error": "slow down"}}),
        (200, {"text": "<html>not json</html>"}),
        (200, {"json": {"error": "no text"}}),
        (200, {"json": ["pomme"]}),
        (200, {"json": {"translatedText": 42}}),
        (200, {"json": {"translatedText": ""}}),
    ],
)
def test_failures_are_reported_as_unavailable(status: int, payload: dict) -> None:
    client = make_client(lambda request: httpx.Response(status, **payload))

    result = client.translate("manzana", "es", "fr")

    assert isinstance(result, Unavailable)
    assert client.translate_text("manzana", "es", "fr") == ""


def test_network_error_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert isinstance(make_client(handler).translate("manzana", "es", "fr"), Unavailable)


def test_timeout_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    result = make_client(handler).translate("manzana", "es", "fr")

    assert result == Unavailable("timeout")


def test_translate_text_returns_translation() -> None:
    client = make_client(lambda request: httpx.Response(200, json={"translatedText": "chien"}))

    assert client.translate_text("perro", "es", "fr") == "chien"


def test_text_or_falls_back_only_when_unavailable() -> None:
    assert text_or(Translated("pomme"), "manzana") == "pomme"
    assert text_or(Unavailable("timeout"), "manzana") == "manzana"


def test_missing_api_url_is_rejected() -> None:
    with pytest.raises(TranslationError):
        TranslationClient(api_url="")


def test_from_config_reads_translation_settings() -> None:
    config = {"translation": {"api_url": "https://lt.local/translate", "timeout": 5, "api_key": "k"}}

    client = TranslationClient.from_config(config)
    try:
        assert client.api_url == "https://lt.local/translate"
        assert client.api_key == "k"
    finally:
        client.close()


def test_get_httpx_timeout_accepts_number_and_dict() -> None:
    assert get_httpx_timeout(12).read == 12.0
    timeout = get_httpx_timeout({"connect": 1, "read": 2, "write": 3, "pool": 4})
    assert (timeout.connect, timeout.read, timeout.write, timeout.pool) == (1, 2, 3, 4)
