"""Runtime settings read from the environment.

`.env` at the repo root is loaded first (python-dotenv), then values are read
from os.environ. Unknown variables are ignored; invalid values raise
pydantic.ValidationError at startup rather than at the first request.

    LIFESIM_PROVIDER_URL     provider base URL (default: Gemini API)
    LIFESIM_PROVIDER_FORMAT  gemini | openai | koboldcpp
    LIFESIM_API_KEY          provider key; falls back to GEMINI_API_KEY
    LIFESIM_MODEL            model name (gemini default: gemini-1.5-flash)
    LIFESIM_TIMEOUT          HTTP timeout per provider call, seconds
    LIFESIM_MAX_ATTEMPTS     attempts per request before giving up
    LIFESIM_BLOCK_POLICY     skip | strict, for malformed relationship blocks
    LIFESIM_CORS_ORIGIN      allowed browser origin for the HTTP app
    HOST / PORT / LOG_LEVEL  server launcher settings
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from lifesim.llm import DEFAULT_GEMINI_URL, HttpLLM, ProviderFormat
from lifesim.parsing import BlockPolicy
from lifesim.retry import DEFAULT_MAX_ATTEMPTS

ROOT = Path(__file__).parent.parent


class Settings(BaseModel):
    provider_url: str = DEFAULT_GEMINI_URL
    provider_format: ProviderFormat = "gemini"
    api_key: str = ""
    model: str = ""
    timeout: float = Field(120.0, gt=0)
    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1)
    block_policy: BlockPolicy = "skip"
    cors_origin: str = "http://localhost:5173"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"


_ENV_NAMES: dict[str, str] = {
    "provider_url": "LIFESIM_PROVIDER_URL",
    "provider_format": "LIFESIM_PROVIDER_FORMAT",
    "api_key": "LIFESIM_API_KEY",
    "model": "LIFESIM_MODEL",
    "timeout": "LIFESIM_TIMEOUT",
    "max_attempts": "LIFESIM_MAX_ATTEMPTS",
    "block_policy": "LIFESIM_BLOCK_POLICY",
    "cors_origin": "LIFESIM_CORS_ORIGIN",
    "host": "HOST",
    "port": "PORT",
    "log_level": "LOG_LEVEL",
}


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from .env + environment. Unset variables keep defaults."""
    load_dotenv(env_file or ROOT / ".env")
    fields = {
        field: os.environ[name]
        for field, name in _ENV_NAMES.items()
        if os.environ.get(name, "") != ""
    }
    if "api_key" not in fields and os.getenv("GEMINI_API_KEY"):
        fields["api_key"] = os.environ["GEMINI_API_KEY"]
    return Settings.model_validate(fields)


def build_llm(settings: Settings) -> HttpLLM:
    return HttpLLM(
        provider_url=settings.provider_url,
        api_key=settings.api_key,
        provider_format=settings.provider_format,
        model=settings.model,
        timeout=settings.timeout,
    )
