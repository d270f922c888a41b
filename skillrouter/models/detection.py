"""Project type detection result."""

from enum import Enum

from pydantic import BaseModel, Field

from skillrouter.errors import InvalidProjectTypeError


class ProjectType(str, Enum):
    """Front-end project types, in reporting order."""

    NEXTJS = "nextjs"
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"
    SHOPIFY_LIQUID = "shopify-liquid"
    HTML = "html"

    @classmethod
    def parse(cls, value: str) -> "ProjectType":
        """Look up a type by value, accepting a few common spellings."""
        key = value.strip().lower().replace("_", "-").replace(" ", "-")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidProjectTypeError(value) from None


_ALIASES = {
    "next": "nextjs",
    "next.js": "nextjs",
    "shopify": "shopify-liquid",
    "liquid": "shopify-liquid",
    "nuxt": "vue",
    "static": "html",
}


class DetectionResult(BaseModel):
    """Project types found under a root directory.

    ``evidence`` holds one human-readable line per matched indicator,
    e.g. ``"next.config.mjs -> nextjs"``.
    """

    root: str
    project_types: list[ProjectType] = Field(default_factory=list)
    evidence: list[str] = Field(default_factory=list)

    @property
    def is_unknown(self) -> bool:
        return not self.project_types
