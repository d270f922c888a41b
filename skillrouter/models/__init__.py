"""Data models for skillrouter."""

from skillrouter.models.detection import DetectionResult, ProjectType
from skillrouter.models.route import RouteResult, SkillMatch

__all__ = [
    "DetectionResult",
    "ProjectType",
    "RouteResult",
    "SkillMatch",
]
