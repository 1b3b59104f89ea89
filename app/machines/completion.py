# app/machines/completion.py
"""
Completion backends: "give me text for this prompt".

Two providers are wired in, selected per request by name:
  - "gemini": Google Gemini via google-generativeai
  - "zai":    Z.ai GLM models through their OpenAI-compatible chat endpoint
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import google.generativeai as genai
from openai import OpenAI

from app.machines.errors import GenerationFailure

log = logging.getLogger(__name__)


class CompletionBackend:
    name = "base"

    def complete(self, prompt: str) -> str:
        raise NotImplementedError


class GeminiBackend(CompletionBackend):
    name = "gemini"

    def __init__(self, api_key: Optional[str], model: str = "gemini-2.5-flash"):
        self.api_key = api_key
        self.model_name = model
        self._model = None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise GenerationFailure(details="GEMINI_API_KEY is not set")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def complete(self, prompt: str) -> str:
        model = self._get_model()
        log.info("[AI - gemini] Calling model: %s", self.model_name)
        resp = model.generate_content(prompt)
        return resp.text


class ZaiBackend(CompletionBackend):
    name = "zai"

    def __init__(self, api_key: Optional[str], base_url: str, model: str = "GLM-4.5-Flash",
                 temperature: float = 0.1):
        self.api_key = api_key
        self.base_url = base_url
        self.model_name = model
        self.temperature = temperature  # low for deterministic SQL
        self._client = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise GenerationFailure(details="ZAI_API_KEY is not set")
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    def complete(self, prompt: str) -> str:
        client = self._get_client()
        log.info("[AI - zai] Calling model: %s", self.model_name)
        resp = client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
        )
        return resp.choices[0].message.content or ""


def build_backends(config) -> Dict[str, CompletionBackend]:
    """Backends keyed by the names accepted in the query request's ``model`` field."""
    return {
        "gemini": GeminiBackend(config.get("GEMINI_API_KEY"), config.get("GEMINI_MODEL", "gemini-2.5-flash")),
        "zai": ZaiBackend(
            config.get("ZAI_API_KEY"),
            config.get("ZAI_BASE_URL", "https://api.z.ai/api/paas/v4/"),
            config.get("ZAI_MODEL", "GLM-4.5-Flash"),
        ),
    }
