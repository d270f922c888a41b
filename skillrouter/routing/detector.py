"""Layer 1 — detect the project type from file-system indicators."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from skillrouter.errors import ProjectNotFoundError
from skillrouter.models.detection import DetectionResult, ProjectType

logger = logging.getLogger(__name__)


class IndicatorKind(str, Enum):
    FILE = "file"  # glob relative to the project root
    DEPENDENCY = "dependency"  # package.json dependency name


@dataclass(frozen=True)
class Indicator:
    """One row of the detection table."""

    project_type: ProjectType
    kind: IndicatorKind
    pattern: str
    implies: tuple[ProjectType, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        if self.kind is IndicatorKind.DEPENDENCY:
            return f"package.json dependency '{self.pattern}'"
        return self.pattern


_F = IndicatorKind.FILE
_D = IndicatorKind.DEPENDENCY

INDICATORS: tuple[Indicator, ...] = (
    # Next.js
    Indicator(ProjectType.NEXTJS, _F, "next.config.js", (ProjectType.REACT,)),
    Indicator(ProjectType.NEXTJS, _F, "next.config.mjs", (ProjectType.REACT,)),
    Indicator(ProjectType.NEXTJS, _F, "next.config.cjs", (ProjectType.REACT,)),
    Indicator(ProjectType.NEXTJS, _F, "next.config.ts", (ProjectType.REACT,)),
    Indicator(ProjectType.NEXTJS, _D, "next", (ProjectType.REACT,)),
    # React
    Indicator(ProjectType.REACT, _D, "react"),
    # Vue / Nuxt
    Indicator(ProjectType.VUE, _F, "vue.config.*"),
    Indicator(ProjectType.VUE, _F, "nuxt.config.*"),
    Indicator(ProjectType.VUE, _D, "vue"),
    Indicator(ProjectType.VUE, _D, "nuxt"),
    # Angular
    Indicator(ProjectType.ANGULAR, _F, "angular.json"),
    Indicator(ProjectType.ANGULAR, _D, "@angular/core"),
    # Shopify themes
    Indicator(ProjectType.SHOPIFY_LIQUID, _F, "layout/theme.liquid"),
    Indicator(ProjectType.SHOPIFY_LIQUID, _F, "config/settings_schema.json"),
    Indicator(ProjectType.SHOPIFY_LIQUID, _F, "sections/*.liquid"),
    Indicator(ProjectType.SHOPIFY_LIQUID, _F, "shopify.theme.toml"),
    # Plain HTML, only reported when nothing else matched
    Indicator(ProjectType.HTML, _F, "index.html"),
    Indicator(ProjectType.HTML, _F, "public/index.html"),
    Indicator(ProjectType.HTML, _F, "*.html"),
)

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")


def read_dependencies(root: Path) -> set[str]:
    """Names of all packages declared in ``root/package.json``."""
    pkg = root / "package.json"
    if not pkg.is_file():
        return set()

    try:
        data = json.loads(pkg.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Unreadable package.json at %s: %s", pkg, e)
        return set()

    if not isinstance(data, dict):
        logger.warning("package.json at %s is not an object, ignoring", pkg)
        return set()

    deps: set[str] = set()
    for section in DEPENDENCY_SECTIONS:
        value = data.get(section)
        if isinstance(value, dict):
            deps.update(value.keys())
    return deps


def _file_matches(root: Path, pattern: str) -> str | None:
    """Relative path of the first file matching the glob, if any."""
    for hit in sorted(root.glob(pattern)):
        if hit.is_file():
            return hit.relative_to(root).as_posix()
    return None


def detect_project(
    root: str | Path,
    indicators: tuple[Indicator, ...] = INDICATORS,
) -> DetectionResult:
    """Evaluate the indicator table against a project directory."""
    root_path = Path(root).expanduser()
    if not root_path.is_dir():
        raise ProjectNotFoundError(str(root_path))

    deps = read_dependencies(root_path)
    found: set[ProjectType] = set()
    evidence: list[str] = []
    html_evidence: list[str] = []

    for ind in indicators:
        if ind.kind is IndicatorKind.DEPENDENCY:
            hit = ind.describe() if ind.pattern in deps else None
        else:
            hit = _file_matches(root_path, ind.pattern)
        if hit is None:
            continue

        line = f"{hit} -> {ind.project_type.value}"
        if ind.project_type is ProjectType.HTML:
            html_evidence.append(line)
            continue

        found.add(ind.project_type)
        found.update(ind.implies)
        evidence.append(line)

    if not found and html_evidence:
        found.add(ProjectType.HTML)
        evidence.append(html_evidence[0])

    ordered = [t for t in ProjectType if t in found]
    logger.debug("Detected %s in %s", [t.value for t in ordered], root_path)
    return DetectionResult(root=str(root_path), project_types=ordered, evidence=evidence)
