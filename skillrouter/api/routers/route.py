"""Routing endpoints — detect a project and pick skills for a request."""

import logging

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from skillrouter.api.deps import get_fetcher, get_router
from skillrouter.models.detection import DetectionResult
from skillrouter.models.route import RouteResult
from skillrouter.prompts import build_skill_context
from skillrouter.routing.detector import detect_project

logger = logging.getLogger(__name__)
router = APIRouter(tags=["routing"])


# ── Request models ──────────────────────────────────


class DetectRequest(BaseModel):
    root: str


class RouteRequest(BaseModel):
    query: str
    root: str | None = None
    project_types: list[str] | None = None
    max_skills: int | None = Field(default=None, ge=1)
    fetch_guidelines: bool = False


class RouteResponse(BaseModel):
    result: RouteResult
    context: str


# ── Endpoints ───────────────────────────────────────


@router.post("/detect")
async def detect(body: DetectRequest) -> DetectionResult:
    # Detection walks the file system
    return await run_in_threadpool(detect_project, body.root)


@router.post("/route")
async def route(body: RouteRequest) -> RouteResponse:
    """Run both routing layers and render the selected skills."""
    skill_router = get_router()
    result = await run_in_threadpool(
        skill_router.route,
        body.query,
        project_types=body.project_types,
        root=body.root,
        max_skills=body.max_skills,
    )

    guidelines = None
    if body.fetch_guidelines:
        selected = [skill_router.skills[m.name] for m in result.selected]
        guidelines = await get_fetcher().fetch_for(selected)

    context = build_skill_context(result, skill_router.skills, guidelines)
    return RouteResponse(result=result, context=context)
