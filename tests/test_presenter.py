from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from evalico.schemas.analysis import ChartData
from evalico.services.charts import PALETTE, chart_data_to_chartjs
from evalico.services.presenter import (
    CONNECTIVITY_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    SERVER_ERROR_MESSAGE,
    AnalysisClient,
    DecisionSession,
    InvalidTransition,
    SessionState,
    describe_failure,
)

from conftest import SAMPLE_ANALYSIS


def _client_for(handler) -> AnalysisClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    return AnalysisClient(http)


def _run(session: DecisionSession):
    return asyncio.run(session.submit())


def test_describe_failure_reads_structured_payload():
    payload = json.dumps({"error": "Rate limit exceeded", "details": "429", "userMessage": "Slow down"})
    assert describe_failure(payload) == ("Slow down", "429")


def test_describe_failure_heuristics():
    assert describe_failure("Failed to fetch: ConnectError")[0] == CONNECTIVITY_MESSAGE
    assert describe_failure("HTTP 500: response is not JSON")[0] == SERVER_ERROR_MESSAGE
    assert describe_failure("something odd")[0] == GENERIC_ERROR_MESSAGE


def test_describe_failure_without_user_message_uses_generic():
    assert describe_failure('{"error": "Input is required"}')[0] == GENERIC_ERROR_MESSAGE


def test_successful_submission_shows_result():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "data": SAMPLE_ANALYSIS})

    session = DecisionSession(_client_for(handler))
    assert session.state is SessionState.IDLE
    session.edit("  buy or rent?  ")
    assert session.state is SessionState.EDITING

    result = _run(session)
    assert seen["body"] == {"input": "buy or rent?"}
    assert session.state is SessionState.SHOWING_RESULT
    assert result.summary == SAMPLE_ANALYSIS["summary"]
    assert not result.error


def test_error_payload_becomes_error_analysis():
    def handler(request):
        return httpx.Response(
            429,
            json={"error": "Rate limit exceeded", "details": "quota", "userMessage": "We're receiving high traffic."},
        )

    session = DecisionSession(_client_for(handler))
    session.edit("anything")
    result = _run(session)
    assert session.state is SessionState.SHOWING_RESULT
    assert result.error is True
    assert result.error_type == "api_error"
    assert result.summary == "We're receiving high traffic."
    assert result.key_factors == ["quota"]
    assert result.analysis.pros == [] and result.metrics == []


def test_unreachable_endpoint_shows_connectivity_message():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    session = DecisionSession(_client_for(handler))
    session.edit("anything")
    assert _run(session).summary == CONNECTIVITY_MESSAGE


def test_non_json_500_shows_server_message():
    session = DecisionSession(_client_for(lambda request: httpx.Response(500, text="")))
    session.edit("anything")
    assert _run(session).summary == SERVER_ERROR_MESSAGE


def test_blank_input_is_not_submitted():
    def handler(request):
        raise AssertionError("should not be called")

    session = DecisionSession(_client_for(handler))
    session.edit("   ")
    assert _run(session) is None
    assert session.state is SessionState.EDITING


def test_invalid_transitions():
    session = DecisionSession(_client_for(lambda r: httpx.Response(200, json={"success": True, "data": {}})))
    with pytest.raises(InvalidTransition):
        _run(session)

    session.edit("x")
    _run(session)
    with pytest.raises(InvalidTransition):
        session.edit("y")

    session.start_over()
    assert session.state is SessionState.IDLE
    assert session.result is None and session.input == ""


def test_view_uses_default_diagram_and_chart_config():
    session = DecisionSession(_client_for(lambda r: httpx.Response(200, json={"success": True, "data": {"summary": "S"}})))
    session.edit("x")
    _run(session)
    view = session.view()
    assert view["diagram"] == "flowchart TD\n    A[Start] --> B[Loading...]"
    assert view["chartjs"] is None


def test_chart_data_to_chartjs():
    chart = ChartData.model_validate(SAMPLE_ANALYSIS["chartData"])
    config = chart_data_to_chartjs(chart)
    assert config["type"] == "bar"
    assert config["data"]["labels"] == ["Year 1", "Year 5"]
    datasets = config["data"]["datasets"]
    assert [d["label"] for d in datasets] == ["Buy", "Rent"]
    assert datasets[0]["data"] == [30000, 140000]
    assert [d["backgroundColor"] for d in datasets] == PALETTE[:2]
    assert config["options"]["scales"]["y"]["title"]["text"] == "Total cost ($)"


def test_empty_chart_has_no_config():
    assert chart_data_to_chartjs(ChartData(type="line", data=[])) is None
    assert chart_data_to_chartjs(None) is None
