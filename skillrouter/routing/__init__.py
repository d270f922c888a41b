"""Two-layer skill routing: project type detection, then request keywords."""

from skillrouter.routing.detector import INDICATORS, Indicator, detect_project
from skillrouter.routing.matcher import match_skill, normalize, phrase_in
from skillrouter.routing.router import SkillRouter
from skillrouter.routing.table import RouteEntry, RoutingTable

__all__ = [
    "INDICATORS",
    "Indicator",
    "RouteEntry",
    "RoutingTable",
    "SkillRouter",
    "detect_project",
    "match_skill",
    "normalize",
    "phrase_in",
]
