"""Skill data model — a markdown guidance document plus routing metadata."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Skill:
    """A guidance document loaded from a markdown file.

    Skills carry advice for one web front-end concern (React rendering,
    App Router patterns, form validation, ...). The metadata decides when a
    skill is offered:

    - project_types: project types the skill applies to (empty = any project)
    - triggers: keywords or phrases in a request that select the skill
    - skip_when: phrases (or ``project:<type>``) that exclude the skill
    - always: offer whenever the skill applies to the project, no keyword needed
    """

    name: str
    description: str = ""
    triggers: list[str] = field(default_factory=list)
    skip_when: list[str] = field(default_factory=list)
    project_types: list[str] = field(default_factory=list)
    always: bool = False
    priority: int = 0
    guideline_url: str | None = None
    prompt_text: str = ""
    source: Path | None = None

    @property
    def is_universal(self) -> bool:
        return not self.project_types

    def summary(self) -> dict:
        """Metadata without the document body."""
        return {
            "name": self.name,
            "description": self.description,
            "triggers": list(self.triggers),
            "skip_when": list(self.skip_when),
            "project_types": list(self.project_types),
            "always": self.always,
            "priority": self.priority,
            "guideline_url": self.guideline_url,
            "source": str(self.source) if self.source else None,
        }
