"""SkillRouter — compose project-type filtering and keyword matching."""

import logging
from pathlib import Path
from typing import Iterable

from skillrouter.config.settings import Settings
from skillrouter.errors import UnknownSkillError
from skillrouter.models.detection import ProjectType
from skillrouter.models.route import RouteResult, SkillMatch
from skillrouter.routing.detector import detect_project
from skillrouter.routing.matcher import match_skill, normalize
from skillrouter.routing.table import RoutingTable
from skillrouter.skills import SkillLoader, bundled_guide_path, bundled_skills_dir
from skillrouter.skills.models import Skill

logger = logging.getLogger(__name__)


class SkillRouter:
    """Pick the skills to present for a request in a given project.

    Layer 1 keeps skills that apply to the detected project types (skills
    without project types apply everywhere). Layer 2 keeps the ones whose
    triggers occur in the request, drops those hit by a skip condition, and
    ranks the rest.

    Example:
        router = SkillRouter.from_settings(get_settings())
        result = router.route("why does my server component re-render?", root=".")
        for match in result.selected:
            print(match.name, match.matched_triggers)
    """

    def __init__(self, skills: list[Skill], max_skills: int = 5):
        self.skills: dict[str, Skill] = {s.name: s for s in skills}
        self.max_skills = max_skills

    @classmethod
    def from_settings(cls, settings: Settings) -> "SkillRouter":
        """Load bundled and configured skill directories and apply the guide table."""
        dirs: list[str | Path] = []
        if settings.include_bundled:
            dirs.append(bundled_skills_dir())
        dirs.extend(settings.skills_dirs)
        skills = SkillLoader.load_many(dirs)

        guide = settings.guide_path or (bundled_guide_path() if settings.include_bundled else None)
        if guide:
            skills = RoutingTable.from_file(guide).apply(skills)

        logger.info("Skill router ready with %d skills: %s", len(skills), [s.name for s in skills])
        return cls(skills, max_skills=settings.max_skills)

    def get(self, name: str) -> Skill:
        try:
            return self.skills[name.strip().lower()]
        except KeyError:
            raise UnknownSkillError(name) from None

    def available(self, project_types: Iterable[ProjectType | str]) -> list[Skill]:
        """Layer 1: skills that apply to any of the given project types.

        With no detected type there is nothing to filter on, so every skill
        is available.
        """
        detected = {t.value if isinstance(t, ProjectType) else str(t) for t in project_types}
        skills = sorted(self.skills.values(), key=lambda s: s.name)
        if not detected:
            return skills
        return [s for s in skills if s.is_universal or detected.intersection(s.project_types)]

    def _rank(self, match: SkillMatch) -> tuple:
        return (-match.score, -self.skills[match.name].priority, match.name)

    def route(
        self,
        query: str,
        project_types: Iterable[ProjectType | str] | None = None,
        root: str | Path | None = None,
        max_skills: int | None = None,
    ) -> RouteResult:
        """Run both routing layers for one request.

        Explicit ``project_types`` win over detection; ``root`` is only
        inspected when no types are given.
        """
        if project_types is None and root is not None:
            types = detect_project(root).project_types
        else:
            types = [t if isinstance(t, ProjectType) else ProjectType.parse(t) for t in project_types or []]

        limit = self.max_skills if max_skills is None else max_skills
        if limit < 1:
            raise ValueError(f"max_skills must be at least 1, got {limit}")
        available = self.available(types)
        text = normalize(query)

        always: list[SkillMatch] = []
        keyword: list[SkillMatch] = []
        skipped: list[SkillMatch] = []
        for skill in available:
            match = match_skill(skill, text, types)
            if match.skip_reason is not None:
                skipped.append(match)
            elif skill.always:
                always.append(match)
            elif match.score:
                keyword.append(match)

        keyword.sort(key=self._rank)
        if len(keyword) > limit:
            logger.debug("Dropping %d lower-ranked skills", len(keyword) - limit)
            keyword = keyword[:limit]

        selected = sorted(keyword + always, key=self._rank)
        logger.info(
            "Routed %r for %s: selected=%s skipped=%s",
            query[:80],
            [t.value for t in types] or "unknown project",
            [m.name for m in selected],
            [m.name for m in skipped],
        )
        return RouteResult(
            query=query,
            project_types=types,
            available=[s.name for s in available],
            selected=selected,
            skipped=skipped,
        )
