from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from evalico.core.settings import Settings, get_settings
from evalico.main import app
from evalico.routes.analyze import get_analyzer
from evalico.services.analyzer import DecisionAnalyzer

SAMPLE_ANALYSIS = {
    "summary": "Buying now locks in today's price but at a high rate.",
    "keyFactors": ["Interest rates", "Home prices", "Time horizon"],
    "analysis": {
        "pros": ["Start building equity", "Avoid rising prices"],
        "cons": ["Higher monthly payment", "Less flexibility"],
    },
    "recommendation": "Wait six months unless you plan to stay ten years or more.",
    "metrics": ["Mortgage rate", "Price-to-rent ratio"],
    "mermaidChart": "flowchart TD\n    A[Now] --> B{Buy?}\n    B -->|Yes| C[Own]\n    B -->|No| D[Rent]",
    "chartData": {
        "title": "Cost of Buying vs Renting",
        "type": "bar",
        "xAxis": "Years",
        "yAxis": "Total cost ($)",
        "data": [
            {"name": "Year 1", "Buy": 30000, "Rent": 24000},
            {"name": "Year 5", "Buy": 140000, "Rent": 130000},
        ],
    },
}


class FakeLLM:
    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    async def generate_text(self, system: str, user: str) -> str:
        self.calls.append({"system": system, "user": user})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def settings() -> Settings:
    return Settings(GEMINI_API_KEY="test-key", api_base_url=None)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM(text=json.dumps(SAMPLE_ANALYSIS))


@pytest.fixture
def client(settings, fake_llm):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_analyzer] = lambda: DecisionAnalyzer(settings, llm=fake_llm)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
