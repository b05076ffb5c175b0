from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from evalico.core.settings import PROJECT_ROOT, Settings, get_settings
from evalico.services.presenter import AnalysisClient, DecisionSession, open_http_client

router = APIRouter(tags=["ui"])
templates = Jinja2Templates(directory=str(PROJECT_ROOT / "templates"))


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    session = DecisionSession()
    return templates.TemplateResponse(request, "index.html", session.view())


@router.post("/", response_class=HTMLResponse)
async def submit_scenario(
    request: Request,
    input: str = Form(""),
    settings: Settings = Depends(get_settings),
):
    async with open_http_client(request.app, settings.api_base_url, settings.api_timeout) as http:
        session = DecisionSession(AnalysisClient(http))
        session.edit(input)
        await session.submit()
    return templates.TemplateResponse(request, "index.html", session.view())
