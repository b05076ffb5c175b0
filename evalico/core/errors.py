"""
Error taxonomy for the analysis endpoint.

Every error raised inside a request is an ``AppError`` subclass by the time it
reaches the exception handler in ``evalico.main``. Each one knows its HTTP
status, a machine-readable code (sent as the ``X-Error-Code`` header), the
short ``error`` string of the JSON envelope, an optional technical
``details`` string and an optional ``userMessage`` meant for end users.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class AppError(Exception):
    status_code: int = 500
    code: str = "analysis_failed"
    error: str = "Analysis failed"
    user_message: Optional[str] = None

    def __init__(
        self,
        details: Optional[str] = None,
        *,
        error: Optional[str] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(details or error or self.error)
        self.details = details
        if error is not None:
            self.error = error
        if user_message is not None:
            self.user_message = user_message

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        if self.user_message is not None:
            payload["userMessage"] = self.user_message
        return payload


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    error = "Input is required"


class ConfigurationError(AppError):
    status_code = 500
    code = "configuration_error"
    error = "API configuration issue"
    user_message = "We're having trouble connecting to our analysis service. Please try again in a moment."


class RateLimitError(AppError):
    status_code = 429
    code = "rate_limited"
    error = "Rate limit exceeded"
    user_message = "We're receiving high traffic. Please wait a moment and try again."


class NetworkError(AppError):
    status_code = 503
    code = "network_error"
    error = "Network error"
    user_message = "Connection issue detected. Please check your internet and try again."


class AnalysisError(AppError):
    status_code = 500
    code = "analysis_failed"
    error = "Analysis failed"
    user_message = "Sorry, we couldn't analyze your scenario right now. Please try again."
