from pydantic import BaseModel, StrictStr, field_validator


class AnalysisRequest(BaseModel):
    input: StrictStr

    @field_validator("input")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        # the untrimmed text is what gets sent to the model
        if not value.strip():
            raise ValueError("Input is required")
        return value
