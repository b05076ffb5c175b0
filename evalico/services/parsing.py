"""
Completion parsing: model text -> ParsedAnalysis | FallbackAnalysis.

Only a completion that is, as a whole, a strict JSON object counts as parsed
and is passed through unchanged. Prose, fenced blocks, arrays, scalars and
non-standard constants (NaN, Infinity) all become a FallbackAnalysis that
keeps the raw text verbatim.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from evalico.schemas.analysis import AnalysisResult, FallbackResult


class ParseError(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Non-standard JSON constant {name!r} in completion")


def parse_json_object(text: str) -> Dict[str, Any]:
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except ParseError:
        raise
    except ValueError as e:
        raise ParseError(f"Completion is not valid JSON: {e}") from e

    if not isinstance(obj, dict):
        raise ParseError(f"Completion is JSON but not an object ({type(obj).__name__})")
    return obj


@dataclass(frozen=True)
class ParsedAnalysis:
    data: Dict[str, Any]

    def payload(self) -> Dict[str, Any]:
        return self.data

    def result(self) -> AnalysisResult:
        return AnalysisResult.model_validate(self.data)


@dataclass(frozen=True)
class FallbackAnalysis:
    raw_text: str
    reason: str = ""

    def payload(self) -> Dict[str, Any]:
        return FallbackResult.from_text(self.raw_text).model_dump(by_alias=True)

    def result(self) -> AnalysisResult:
        return AnalysisResult.model_validate(self.payload())


AnalysisOutcome = Union[ParsedAnalysis, FallbackAnalysis]


def parse_completion(text: str) -> AnalysisOutcome:
    try:
        return ParsedAnalysis(parse_json_object(text))
    except ParseError as e:
        return FallbackAnalysis(raw_text=text, reason=str(e))


def to_analysis_result(data: Dict[str, Any]) -> AnalysisResult:
    """Typed view of a response payload; malformed payloads degrade to their raw JSON."""
    try:
        return AnalysisResult.model_validate(data)
    except PydanticValidationError:
        return AnalysisResult(
            summary=str(data.get("summary") or "The analysis could not be displayed in full."),
            full_text=json.dumps(data, indent=2, ensure_ascii=False),
        )
