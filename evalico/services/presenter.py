"""
Presentation layer: client-side session for one page.

``DecisionSession`` is an explicit state machine
(IDLE -> EDITING -> SUBMITTING -> SHOWING_RESULT -> IDLE) driving an
``AnalysisClient`` that talks to the analysis endpoint over HTTP. Whatever
the endpoint answers, the session ends in SHOWING_RESULT with an
``AnalysisResult``: the real analysis, or an error analysis carrying the
user-facing message, rendered through the same template path.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError as PydanticValidationError

from evalico.schemas.analysis import AnalysisResult, ErrorEnvelope, ProsCons
from evalico.services.charts import DEFAULT_DIAGRAM, chart_data_to_chartjs
from evalico.services.parsing import to_analysis_result

logger = logging.getLogger(__name__)

ANALYSIS_PATH = "/api/effective"

GENERIC_ERROR_MESSAGE = "We encountered an unexpected error. Please try again."
GENERIC_ERROR_DETAILS = "Please check your connection and try again."
CONNECTIVITY_MESSAGE = "Connection issue detected. Please check your internet and try again."
CONNECTIVITY_DETAILS = "Network connectivity problem"
SERVER_ERROR_MESSAGE = "Our analysis service is temporarily unavailable."
SERVER_ERROR_DETAILS = "Server error - please try again in a moment"
ERROR_RECOMMENDATION = "If this problem persists, please try refreshing the page or come back later."

EXAMPLE_SCENARIOS = [
    "Should I buy a house now or wait for interest rates to drop?",
    "Compare working remotely vs relocating for a 40% salary increase",
    "Is it worth paying off student loans early vs investing in index funds?",
    "Analyze switching from iPhone to Android: ecosystem lock-in vs savings",
    "Should I start a side business or focus on climbing the corporate ladder?",
    "Compare leasing vs buying a car for my 50-mile daily commute",
]


class SessionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"
    SHOWING_RESULT = "showing_result"


class InvalidTransition(RuntimeError):
    pass


class AnalysisRequestFailed(Exception):
    """The endpoint call failed; the message is the raw failure text (often the JSON error payload)."""


# -----------------------------
# Error message recovery
# -----------------------------
def describe_failure(failure_text: str) -> Tuple[str, str]:
    """Return (user-facing message, details) for a failed analysis call."""
    try:
        envelope = ErrorEnvelope.model_validate_json(failure_text)
    except PydanticValidationError:
        if "Failed to fetch" in failure_text:
            return CONNECTIVITY_MESSAGE, CONNECTIVITY_DETAILS
        if "500" in failure_text:
            return SERVER_ERROR_MESSAGE, SERVER_ERROR_DETAILS
        return GENERIC_ERROR_MESSAGE, GENERIC_ERROR_DETAILS

    return (
        envelope.user_message or GENERIC_ERROR_MESSAGE,
        envelope.details or GENERIC_ERROR_DETAILS,
    )


def build_error_analysis(message: str, details: str) -> AnalysisResult:
    return AnalysisResult(
        summary=message,
        key_factors=[details],
        analysis=ProsCons(),
        recommendation=ERROR_RECOMMENDATION,
        metrics=[],
        error=True,
        error_type="api_error",
    )


# -----------------------------
# HTTP client
# -----------------------------
class AnalysisClient:
    def __init__(self, http: httpx.AsyncClient, path: str = ANALYSIS_PATH):
        self.http = http
        self.path = path

    async def analyze(self, scenario: str) -> Dict[str, Any]:
        try:
            response = await self.http.post(self.path, json={"input": scenario})
        except httpx.HTTPError as e:
            raise AnalysisRequestFailed(f"Failed to fetch: {type(e).__name__}: {e}") from e

        if not response.is_success:
            raise AnalysisRequestFailed(response.text or f"HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise AnalysisRequestFailed(f"HTTP {response.status_code}: response is not JSON") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise AnalysisRequestFailed("Analysis failed")
        return data


def open_http_client(app, base_url: Optional[str] = None, timeout: float = 60.0) -> httpx.AsyncClient:
    """Remote endpoint when ``base_url`` is set, otherwise the given ASGI app in-process."""
    if base_url:
        return httpx.AsyncClient(base_url=base_url, timeout=timeout)
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://evalico.local",
        timeout=timeout,
    )


# -----------------------------
# Session state machine
# -----------------------------
class DecisionSession:
    def __init__(self, client: Optional[AnalysisClient] = None):
        self.client = client
        self.state = SessionState.IDLE
        self.input = ""
        self.result: Optional[AnalysisResult] = None

    @property
    def in_flight(self) -> bool:
        return self.state is SessionState.SUBMITTING

    @property
    def show_results(self) -> bool:
        return self.state is SessionState.SHOWING_RESULT and self.result is not None

    def edit(self, text: str) -> None:
        if self.state in (SessionState.SUBMITTING, SessionState.SHOWING_RESULT):
            raise InvalidTransition(f"cannot edit input while {self.state.value}")
        self.input = text or ""
        self.state = SessionState.EDITING

    async def submit(self) -> Optional[AnalysisResult]:
        if self.state is not SessionState.EDITING:
            raise InvalidTransition(f"cannot submit while {self.state.value}")
        scenario = self.input.strip()
        if not scenario:
            return None
        if self.client is None:
            raise InvalidTransition("session has no analysis client")

        self.state = SessionState.SUBMITTING
        self.result = None
        try:
            data = await self.client.analyze(scenario)
            self.result = to_analysis_result(data)
        except AnalysisRequestFailed as e:
            logger.warning("Analysis request failed: %s", e)
            message, details = describe_failure(str(e))
            self.result = build_error_analysis(message, details)
        finally:
            self.state = SessionState.SHOWING_RESULT
        return self.result

    def start_over(self) -> None:
        self.state = SessionState.IDLE
        self.result = None
        self.input = ""

    def view(self) -> Dict[str, Any]:
        """Template context for the current state."""
        result = self.result if self.show_results else None
        return {
            "state": self.state.value,
            "input": self.input,
            "examples": EXAMPLE_SCENARIOS[:4],
            "placeholder": EXAMPLE_SCENARIOS[0],
            "result": result,
            "diagram": (result.mermaid_chart or DEFAULT_DIAGRAM) if result else None,
            "chartjs": chart_data_to_chartjs(result.chart_data) if result else None,
        }
