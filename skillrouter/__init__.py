"""Route web front-end skill documents by project type and request keywords."""

from skillrouter.errors import (
    GuidelineFetchError,
    InvalidProjectTypeError,
    ProjectNotFoundError,
    SkillParseError,
    SkillRouterError,
    UnknownSkillError,
)
from skillrouter.models import DetectionResult, ProjectType, RouteResult, SkillMatch
from skillrouter.routing import RoutingTable, SkillRouter, detect_project
from skillrouter.skills import Skill, SkillLoader

__version__ = "0.1.0"

__all__ = [
    "DetectionResult",
    "GuidelineFetchError",
    "InvalidProjectTypeError",
    "ProjectNotFoundError",
    "ProjectType",
    "RouteResult",
    "RoutingTable",
    "Skill",
    "SkillLoader",
    "SkillMatch",
    "SkillParseError",
    "SkillRouter",
    "SkillRouterError",
    "UnknownSkillError",
    "detect_project",
]
