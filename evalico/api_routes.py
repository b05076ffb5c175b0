from __future__ import annotations
from fastapi import APIRouter
from evalico.routes.analyze import router as analyze_router
from evalico.routes.health import router as health_router
from evalico.routes.ui import router as ui_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(analyze_router)
router.include_router(ui_router)
