from datetime import datetime

import pytest
import requests

from print_quote.models.chat import ChatMessage
from print_quote.models.quote import ServiceType
from print_quote.services import ai
from print_quote.services.ai import AIServiceError, GeminiClient
from print_quote.services.chat import (
    ChatAssistant,
    detect_service_type,
    export_transcript,
    transcript_filename,
    wants_quote,
    welcome_message,
)


class FakeClient:
    def __init__(self, text="承知しました。"):
        self.text = text
        self.calls = []

    def generate(self, system_prompt, user_text):
        self.calls.append((system_prompt, user_text))
        return self.text


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload


@pytest.mark.parametrize("text, expected", [
    ("名刺を500枚作りたい", ServiceType.PRINTING),
    ("Can you print posters?", ServiceType.PRINTING),
    ("ハードカバーの製本をお願いします", ServiceType.BINDING),
    ("hardcover binding for 20 books", ServiceType.BINDING),
    ("大阪への配送について", ServiceType.LOGISTICS),
    ("shipping to Osaka", ServiceType.LOGISTICS),
    ("再生紙を使いたい", ServiceType.ECO_PRINTING),
    ("FSC paper with carbon offset", ServiceType.ECO_PRINTING),
    ("こんにちは", ServiceType.PRINTING),
    ("", ServiceType.PRINTING),
])
def test_detect_service_type(text, expected):
    assert detect_service_type(text) == expected


def test_printing_keywords_win_over_later_services():
    assert detect_service_type("環境に優しい印刷") == ServiceType.PRINTING


def test_wants_quote():
    assert wants_quote("見積もりをください")
    assert wants_quote("Please send a QUOTE")
    assert wants_quote("rough estimate?")
    assert not wants_quote("納期を教えて")


def test_welcome_message_languages():
    assert welcome_message("en").content.startswith("Hello!")
    assert welcome_message("ja").sender == "ai"


def test_export_transcript():
    messages = [
        ChatMessage(id="1", content="チラシの見積もり", sender="user", timestamp=datetime(2024, 3, 5, 14, 7)),
        ChatMessage(id="2", content="承知しました。", sender="ai", timestamp=datetime(2024, 3, 5, 14, 8)),
    ]
    assert export_transcript(messages) == (
        "[2024/03/05 14:07] お客様:\nチラシの見積もり\n"
        "\n"
        "[2024/03/05 14:08] AIアシスタント:\n承知しました。\n"
    )


def test_transcript_filename():
    assert transcript_filename(datetime(2024, 3, 5, 14, 7, 9)) == "chat-history-2024-03-05T14-07-09.txt"


def test_reply_without_quote_request():
    client = FakeClient()
    reply = ChatAssistant(client=client).reply("製本について教えて", "ja")
    assert reply.service_type == ServiceType.BINDING
    assert reply.message.content == "承知しました。"
    assert reply.message.sender == "ai"
    assert reply.quote is None
    assert client.calls[0][1] == "製本について教えて"


def test_reply_with_quote_request_prices_defaults():
    client = FakeClient("Here is an estimate.")
    reply = ChatAssistant(client=client).reply("I need a quote for logistics", "en")
    assert reply.service_type == ServiceType.LOGISTICS
    assert client.calls[0][0].startswith("You are a professional assistant")
    # form defaults: 5 kg standard delivery, 100 units
    assert reply.quote.price == 5500
    assert reply.quote.turnaround == 5
    assert reply.quote.specs.custom_specs == "I need a quote for logistics"


def test_gemini_requires_key(monkeypatch):
    monkeypatch.setattr(ai, "GEMINI_API_KEY", None)
    with pytest.raises(AIServiceError, match="API key"):
        GeminiClient(api_key="").generate("system", "hello")


def test_gemini_extracts_text(monkeypatch):
    sent = {}

    def fake_post(url, params=None, json=None, headers=None, timeout=None):
        sent.update(url=url, params=params, json=json)
        return FakeResponse({"candidates": [{"content": {"parts": [{"text": "こんにちは"}]}}]})

    monkeypatch.setattr(ai.requests, "post", fake_post)
    text = GeminiClient(api_key="k", model="gemini-pro").generate("system", "hello")
    assert text == "こんにちは"
    assert sent["params"] == {"key": "k"}
    assert sent["url"].endswith("/gemini-pro:generateContent")
    assert sent["json"]["contents"][0]["parts"] == [{"text": "system"}, {"text": "hello"}]
    assert sent["json"]["generationConfig"]["maxOutputTokens"] == 1024
    assert len(sent["json"]["safetySettings"]) == 4


def test_gemini_error_body(monkeypatch):
    monkeypatch.setattr(ai.requests, "post",
                        lambda *a, **kw: FakeResponse({"error": {"message": "API key not valid"}}, 400))
    with pytest.raises(AIServiceError, match="API key not valid"):
        GeminiClient(api_key="bad").generate("system", "hello")


def test_gemini_empty_candidates(monkeypatch):
    monkeypatch.setattr(ai.requests, "post", lambda *a, **kw: FakeResponse({"candidates": []}))
    with pytest.raises(AIServiceError, match="No text generated"):
        GeminiClient(api_key="k").generate("system", "hello")


def test_gemini_network_failure(monkeypatch):
    def boom(*a, **kw):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(ai.requests, "post", boom)
    with pytest.raises(AIServiceError):
        GeminiClient(api_key="k").generate("system", "hello")
