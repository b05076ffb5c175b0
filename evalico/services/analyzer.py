from __future__ import annotations

import logging

import httpx

from evalico.core.errors import (
    AnalysisError,
    AppError,
    ConfigurationError,
    NetworkError,
    RateLimitError,
)
from evalico.core.settings import Settings
from evalico.services.llm_client import LLMConfig, LLMError, LLMErrorCategory, build_llm
from evalico.services.parsing import AnalysisOutcome, FallbackAnalysis, parse_completion
from evalico.services.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


# -----------------------------
# Provider error classification
# -----------------------------
_CONFIG_MARKERS = ("api key", "authentication")
_RATE_LIMIT_MARKERS = ("rate limit", "429")
_NETWORK_MARKERS = ("network", "timeout")


def _category_from_message(message: str) -> LLMErrorCategory:
    m = message.lower()
    if any(k in m for k in _CONFIG_MARKERS):
        return LLMErrorCategory.AUTH
    if any(k in m for k in _RATE_LIMIT_MARKERS):
        return LLMErrorCategory.RATE_LIMIT
    if any(k in m for k in _NETWORK_MARKERS):
        return LLMErrorCategory.NETWORK
    return LLMErrorCategory.UNKNOWN


def classify_error(exc: Exception) -> AppError:
    """Map a provider/transport failure onto the endpoint's error taxonomy."""
    if isinstance(exc, AppError):
        return exc

    message = str(exc) or type(exc).__name__
    category = LLMErrorCategory.UNKNOWN
    if isinstance(exc, LLMError):
        category = exc.category
    elif isinstance(exc, httpx.TransportError):
        category = LLMErrorCategory.NETWORK
    if category is LLMErrorCategory.UNKNOWN:
        category = _category_from_message(message)

    if category is LLMErrorCategory.AUTH:
        return ConfigurationError("Please check your API key setup")
    if category is LLMErrorCategory.RATE_LIMIT:
        return RateLimitError(message)
    if category is LLMErrorCategory.NETWORK:
        return NetworkError(message)
    return AnalysisError(message)


# -----------------------------
# Analyzer
# -----------------------------
class DecisionAnalyzer:
    """One fixed-prompt completion per scenario. Holds no per-request state."""

    def __init__(self, settings: Settings, llm=None):
        self.settings = settings
        self._llm = llm

    def _get_llm(self):
        if not self.settings.GEMINI_API_KEY:
            raise ConfigurationError(
                "GEMINI_API_KEY is not set",
                error="API key not configured",
            )
        if self._llm is None:
            llm_cfg = LLMConfig(
                provider=self.settings.llm_provider,
                model=self.settings.llm_model,
                temperature=float(self.settings.llm_temperature),
                max_tokens=int(self.settings.llm_max_tokens),
                json_mode=bool(self.settings.llm_json_mode),
                gemini_api_key=self.settings.GEMINI_API_KEY,
            )
            try:
                self._llm = build_llm(llm_cfg)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        return self._llm

    async def analyze(self, scenario: str) -> AnalysisOutcome:
        llm = self._get_llm()

        try:
            text = await llm.generate_text(system=SYSTEM_PROMPT, user=scenario)
        except Exception as e:
            err = classify_error(e)
            logger.error("Analysis error (%s): %s", err.code, e)
            raise err from e

        if not text:
            logger.error("Analysis error: empty completion")
            raise AnalysisError("No response from AI")

        outcome = parse_completion(text)
        if isinstance(outcome, FallbackAnalysis):
            logger.warning("Completion was not valid JSON, returning fallback: %s", outcome.reason)
        return outcome
