"""Routing decision models."""

from pydantic import BaseModel, Field

from skillrouter.models.detection import ProjectType


class SkillMatch(BaseModel):
    """How one skill fared against a request."""

    name: str
    description: str = ""
    score: int = 0
    matched_triggers: list[str] = Field(default_factory=list)
    always: bool = False
    skip_reason: str | None = None

    @property
    def selected(self) -> bool:
        return self.skip_reason is None and (self.always or self.score > 0)


class RouteResult(BaseModel):
    """Outcome of both routing layers for a single request.

    - available: skill names left after project-type filtering (Layer 1)
    - selected: skills to present, best match first (Layer 2)
    - skipped: skills whose triggers matched but a skip condition excluded them
    """

    query: str
    project_types: list[ProjectType] = Field(default_factory=list)
    available: list[str] = Field(default_factory=list)
    selected: list[SkillMatch] = Field(default_factory=list)
    skipped: list[SkillMatch] = Field(default_factory=list)

    @property
    def selected_names(self) -> list[str]:
        return [m.name for m in self.selected]
