from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from evalico.core.errors import AnalysisError, AppError, ValidationError
from evalico.core.settings import Settings, get_settings
from evalico.schemas.analysis import AnalysisResponse
from evalico.schemas.inputs import AnalysisRequest
from evalico.services.analyzer import DecisionAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


# one analyzer (and so one Gemini client) per settings object, built on first use
_analyzer: Optional[DecisionAnalyzer] = None


def get_analyzer(settings: Settings = Depends(get_settings)) -> DecisionAnalyzer:
    global _analyzer
    if _analyzer is None or _analyzer.settings is not settings:
        _analyzer = DecisionAnalyzer(settings)
    return _analyzer


async def _read_request(request: Request) -> AnalysisRequest:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError()
    try:
        return AnalysisRequest.model_validate(body)
    except PydanticValidationError:
        raise ValidationError()


@router.post("/effective", response_model=AnalysisResponse)
async def analyze_scenario(request: Request, analyzer: DecisionAnalyzer = Depends(get_analyzer)):
    """
    Analyze one scenario.

    The body is validated before the API key is checked, so blank input is a
    400 even when the key is missing. Neither path reaches the provider.
    """
    payload = await _read_request(request)
    try:
        outcome = await analyzer.analyze(payload.input)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Unexpected analysis failure")
        raise AnalysisError(f"{type(e).__name__}: {e}") from e

    return AnalysisResponse(success=True, data=outcome.payload())
