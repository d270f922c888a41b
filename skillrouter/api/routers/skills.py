"""Skill catalogue endpoints."""

from fastapi import APIRouter

from skillrouter.api.deps import get_router
from skillrouter.models.detection import ProjectType

router = APIRouter(tags=["skills"])


@router.get("/skills")
async def list_skills(project_type: str | None = None) -> list[dict]:
    """List skill metadata, optionally limited to one project type (Layer 1)."""
    skill_router = get_router()
    if project_type:
        skills = skill_router.available([ProjectType.parse(project_type)])
    else:
        skills = skill_router.available([])
    return [s.summary() for s in skills]


@router.get("/skills/{name}")
async def get_skill(name: str) -> dict:
    skill = get_router().get(name)
    return {**skill.summary(), "prompt_text": skill.prompt_text}
