from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

FALLBACK_SUMMARY_CHARS = 200

DEFAULT_FALLBACK_FLOWCHART = (
    "flowchart TD\n"
    "    A[Scenario] --> B[Analysis Complete]\n"
    "    B --> C[Review Results]\n"
    "    C --> D[Make Decision]"
)


class WireModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class ProsCons(WireModel):
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class ChartData(WireModel):
    title: str = ""
    type: Literal["line", "bar"] = "line"
    x_axis: str = ""
    y_axis: str = ""
    data: list[dict[str, Any]] = Field(default_factory=list)


class AnalysisResult(WireModel):
    model_config = ConfigDict(extra="allow")

    summary: str = ""
    key_factors: list[str] = Field(default_factory=list)
    analysis: ProsCons = Field(default_factory=ProsCons)
    recommendation: str = ""
    metrics: list[str] = Field(default_factory=list)
    mermaid_chart: Optional[str] = None
    chart_data: Optional[ChartData] = None

    # fallback / presentation-only fields
    full_text: Optional[str] = None
    error: bool = False
    error_type: Optional[str] = None

    @field_validator("chart_data", mode="before")
    @classmethod
    def _drop_unrenderable_chart(cls, value: Any) -> Any:
        # a chart the renderer can't draw is omitted rather than failing the whole result
        if value is None or isinstance(value, ChartData):
            return value
        try:
            return ChartData.model_validate(value)
        except PydanticValidationError:
            return None


class FallbackResult(WireModel):
    summary: str
    key_factors: list[str] = Field(default_factory=lambda: ["Analysis provided as text"])
    analysis: ProsCons = Field(
        default_factory=lambda: ProsCons(
            pros=["See detailed analysis"],
            cons=["Review all considerations"],
        )
    )
    recommendation: str = "Please review the full analysis"
    metrics: list[str] = Field(default_factory=lambda: ["Detailed analysis available"])
    mermaid_chart: str = DEFAULT_FALLBACK_FLOWCHART
    full_text: str

    @classmethod
    def from_text(cls, raw_text: str) -> "FallbackResult":
        return cls(
            summary=raw_text[:FALLBACK_SUMMARY_CHARS] + "...",
            full_text=raw_text,
        )


class AnalysisResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


class ErrorEnvelope(WireModel):
    error: str
    details: Optional[str] = None
    user_message: Optional[str] = None
