from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class LLMErrorCategory(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    UNKNOWN = "unknown"


class LLMError(RuntimeError):
    """Provider failure with a category the caller can map without reading the message."""

    def __init__(
        self,
        message: str,
        category: LLMErrorCategory = LLMErrorCategory.UNKNOWN,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.category = category
        self.status_code = status_code


def categorize_status(status_code: Optional[int]) -> LLMErrorCategory:
    if status_code in (401, 403):
        return LLMErrorCategory.AUTH
    if status_code == 429:
        return LLMErrorCategory.RATE_LIMIT
    if status_code in (408, 502, 503, 504):
        return LLMErrorCategory.NETWORK
    return LLMErrorCategory.UNKNOWN


@dataclass
class LLMConfig:
    provider: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 2000
    json_mode: bool = True
    gemini_api_key: Optional[str] = None


class GeminiLLM:
    def __init__(self, api_key: str, model: str, temperature: float, max_tokens: int, json_mode: bool = True):
        from google import genai
        from google.genai import errors, types

        self._types = types
        self._errors = errors
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.json_mode = json_mode

    async def generate_text(self, system: str, user: str) -> str:
        config = self._types.GenerateContentConfig(
            system_instruction=[system],
            response_mime_type="application/json" if self.json_mode else None,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
        )

        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model,
                contents=user,
                config=config,
            )
        except self._errors.APIError as e:
            raise LLMError(
                f"Gemini API error {e.code}: {e.message or e.status}",
                category=categorize_status(e.code),
                status_code=e.code,
            ) from e
        except httpx.TimeoutException as e:
            raise LLMError(f"Gemini request timeout: {e}", category=LLMErrorCategory.NETWORK) from e
        except httpx.TransportError as e:
            raise LLMError(f"Gemini network error: {e}", category=LLMErrorCategory.NETWORK) from e

        text = resp.text or ""
        logger.debug("Gemini returned %d characters (model=%s)", len(text), self.model)
        return text


def build_llm(cfg: LLMConfig):
    provider = (cfg.provider or "").lower().strip()

    if provider == "gemini":
        if not cfg.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is missing. Add it to .env")
        return GeminiLLM(
            api_key=cfg.gemini_api_key,
            model=cfg.model,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
            json_mode=cfg.json_mode,
        )

    raise ValueError(f"Unsupported llm provider: {cfg.provider}. Use provider: gemini")
