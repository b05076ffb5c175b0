from __future__ import annotations

from typing import Any, Dict, List, Optional

from evalico.schemas.analysis import ChartData

PALETTE = ["#B8956F", "#6B5A44", "#D4B896", "#8B7355"]

DEFAULT_DIAGRAM = "flowchart TD\n    A[Start] --> B[Loading...]"


def series_keys(rows: List[Dict[str, Any]]) -> List[str]:
    """Every key of the first record except ``name`` is one series."""
    if not rows:
        return []
    return [k for k in rows[0].keys() if k != "name"]


def chart_data_to_chartjs(chart: Optional[ChartData]) -> Optional[Dict[str, Any]]:
    """
    DETERMINISTICALLY convert chartData records to a Chart.js configuration.

    Input:  {"type": "line", "data": [{"name": "Year 1", "Option A": 1200, ...}, ...]}
    Output: {"type": "line", "data": {"labels": [...], "datasets": [...]}, "options": {...}}
    """
    if chart is None or not chart.data:
        return None

    labels = [str(row.get("name", "")) for row in chart.data]
    datasets = []
    for i, key in enumerate(series_keys(chart.data)):
        color = PALETTE[i % len(PALETTE)]
        dataset: Dict[str, Any] = {
            "label": key,
            "data": [row.get(key) for row in chart.data],
            "backgroundColor": color,
            "borderColor": color,
        }
        if chart.type == "line":
            dataset.update({"borderWidth": 4, "pointRadius": 5, "pointHoverRadius": 7, "tension": 0.4, "fill": False})
        else:
            dataset.update({"borderRadius": 2})
        datasets.append(dataset)

    return {
        "type": chart.type,
        "data": {"labels": labels, "datasets": datasets},
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {
                "title": {"display": bool(chart.title), "text": chart.title},
                "legend": {"display": True},
            },
            "scales": {
                "x": {"title": {"display": bool(chart.x_axis), "text": chart.x_axis}},
                "y": {
                    "beginAtZero": True,
                    "title": {"display": bool(chart.y_axis), "text": chart.y_axis},
                },
            },
        },
    }
