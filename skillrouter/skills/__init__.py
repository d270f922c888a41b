"""Skill system — markdown guidance documents with routing metadata."""

from pathlib import Path

from skillrouter.skills.loader import SkillLoader
from skillrouter.skills.models import Skill


def bundled_skills_dir() -> Path:
    """Directory of the skill documents shipped with the package."""
    return Path(__file__).parent / "bundled"


def bundled_guide_path() -> Path:
    """Markdown guide holding the bundled routing table."""
    return bundled_skills_dir() / "GUIDE.md"


__all__ = ["Skill", "SkillLoader", "bundled_guide_path", "bundled_skills_dir"]
