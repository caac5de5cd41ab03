"""LLM client — HTTP connection to a text-generation provider.

Game operations take an LLM callable matching the protocol:

    async def __call__(self, stage: str, prompt: str) -> str: ...

`stage` names the request kind ("scenario", "outcome", "backstory"). The
implementation may use it for logging; the simplest implementation ignores it.

Two implementations are provided:

    HttpLLM   — real HTTP client for Gemini, OpenAI-compatible and KoboldCpp
                backends. Selected by provider_format.
    EchoLLM   — returns the prompt back unchanged. Useful for smoke-testing
                the request wiring without a running model.

Every transport or protocol failure surfaces as ProviderError, which the
retry policy counts as a failed attempt.
"""

from __future__ import annotations

import logging
from typing import Literal, Protocol

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol — every LLM implementation must match this signature
# ---------------------------------------------------------------------------

class LLM(Protocol):
    async def __call__(self, stage: str, prompt: str) -> str: ...


# ---------------------------------------------------------------------------
# HttpLLM — connects to a real backend
# ---------------------------------------------------------------------------

ProviderFormat = Literal["gemini", "openai", "koboldcpp"]

DEFAULT_GEMINI_URL = "https://generativelanguage.googleapis.com"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


class HttpLLM:
    """Async HTTP client for text-generation backends.

    Supported formats:
      "gemini"     — POST /v1beta/models/{model}:generateContent
                     {"contents": [{"parts": [{"text": ...}]}]}
                     Response: {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
      "openai"     — POST /v1/completions   {"model": ..., "prompt": ...}
                     Response: {"choices": [{"text": "..."}]}
      "koboldcpp"  — POST /api/v1/generate  {"prompt": ...}
                     Response: {"results": [{"text": "..."}]}

    Args:
        provider_url:    Base URL of the backend, e.g. "http://localhost:5001".
        api_key:         API key, or empty string if not required. Sent as
                         x-goog-api-key for gemini, Bearer token otherwise.
        provider_format: Wire format to use. Defaults to "gemini".
        model:           Model identifier; gemini falls back to
                         DEFAULT_GEMINI_MODEL, openai omits it when empty.
        timeout:         HTTP timeout in seconds. Defaults to 120.
    """

    def __init__(
        self,
        provider_url: str = DEFAULT_GEMINI_URL,
        api_key: str = "",
        provider_format: ProviderFormat = "gemini",
        model: str = "",
        timeout: float = 120.0,
    ) -> None:
        self._base_url = provider_url.rstrip("/")
        self._api_key = api_key
        self._format = provider_format
        self._model = model
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            if self._format == "gemini":
                headers["x-goog-api-key"] = self._api_key
            else:
                headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_request(self, prompt: str) -> tuple[str, dict]:
        """Return (url, body) for the configured format."""
        if self._format == "openai":
            url = f"{self._base_url}/v1/completions"
            body: dict = {"prompt": prompt}
            if self._model:
                body["model"] = self._model
            return url, body

        if self._format == "koboldcpp":
            return f"{self._base_url}/api/v1/generate", {"prompt": prompt}

        # gemini (default)
        model = self._model or DEFAULT_GEMINI_MODEL
        url = f"{self._base_url}/v1beta/models/{model}:generateContent"
        return url, {"contents": [{"parts": [{"text": prompt}]}]}

    def _parse_response(self, data: dict) -> str:
        """Extract the completion text from the response body."""
        if self._format == "openai":
            choices = data.get("choices")
            if not choices or "text" not in choices[0]:
                raise ProviderError("Unexpected response format from OpenAI-compatible backend")
            return choices[0]["text"]

        if self._format == "koboldcpp":
            results = data.get("results")
            if not results or "text" not in results[0]:
                raise ProviderError("Unexpected response format from KoboldCpp backend")
            return results[0]["text"]

        # gemini
        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(part["text"] for part in parts)
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Unexpected response format from Gemini backend") from e

    async def __call__(self, stage: str, prompt: str) -> str:
        url, body = self._build_request(prompt)
        logger.debug("llm call stage=%s url=%s prompt_len=%d", stage, url, len(prompt))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise ProviderError(f"Cannot connect to LLM backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"LLM backend returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise ProviderError(f"LLM backend timed out after {self._timeout}s") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError("LLM backend returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise ProviderError("Unexpected response format from LLM backend")

        text = self._parse_response(data)
        logger.debug("llm response stage=%s len=%d", stage, len(text))
        return text


# ---------------------------------------------------------------------------
# EchoLLM — returns the prompt unchanged; useful for wiring smoke tests
# ---------------------------------------------------------------------------

class EchoLLM:
    """Returns the prompt text as-is. No network calls.

    The prompts describe each expected tag with placeholder text, so an echoed
    prompt is not a meaningful response and mostly fails to decode. Use
    StubLLM in tests when you need controlled responses.
    """

    async def __call__(self, stage: str, prompt: str) -> str:
        logger.debug("EchoLLM stage=%s prompt_len=%d", stage, len(prompt))
        return prompt


# ---------------------------------------------------------------------------
# ProviderError — raised by HttpLLM for all connection and protocol failures
# ---------------------------------------------------------------------------

class ProviderError(RuntimeError):
    """Raised when the LLM backend cannot be reached or returns an error."""
