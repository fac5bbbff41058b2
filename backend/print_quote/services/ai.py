import logging
import os
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-pro")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "30"))
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


class AIServiceError(Exception):
    pass


class GeminiClient:
    """Thin client for the Gemini ``generateContent`` endpoint."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: float = GEMINI_TIMEOUT):
        self.api_key = api_key or GEMINI_API_KEY
        self.model = model or GEMINI_MODEL
        self.timeout = timeout
        logger.debug("GeminiClient initialized model=%s key_set=%s", self.model, bool(self.api_key))

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _payload(self, system_prompt: str, user_text: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": system_prompt}, {"text": user_text}]}],
            "generationConfig": GENERATION_CONFIG,
            "safetySettings": SAFETY_SETTINGS,
        }

    def generate(self, system_prompt: str, user_text: str) -> str:
        if not self.api_key:
            raise AIServiceError("API key is not set")

        url = GEMINI_URL.format(model=self.model)
        try:
            resp = requests.post(
                url,
                params={"key": self.api_key},
                json=self._payload(system_prompt, user_text),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.exception("Gemini request failed: %s", e)
            raise AIServiceError("Failed to generate response") from e

        if data.get("error"):
            message = data["error"].get("message") or "Failed to generate response"
            logger.warning("Gemini returned error status=%s: %s", resp.status_code, message)
            raise AIServiceError(message)

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None
        if not text:
            raise AIServiceError("No text generated")

        logger.info("Gemini response received model=%s chars=%s", self.model, len(text))
        return text
