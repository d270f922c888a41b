"""Layer 2 — match a free-text request against a skill's keywords."""

import re
from functools import lru_cache
from typing import Iterable

from skillrouter.models.detection import ProjectType
from skillrouter.models.route import SkillMatch
from skillrouter.skills.models import Skill

PROJECT_CONDITION_PREFIX = "project:"


def normalize(text: str) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join(text.lower().split())


@lru_cache(maxsize=1024)
def _phrase_pattern(phrase: str) -> re.Pattern:
    # Inner whitespace in the phrase matches any run of whitespace or hyphens,
    # so "server component" also hits "server-component".
    parts = [re.escape(p) for p in phrase.split()]
    body = r"[\s\-]+".join(parts)
    return re.compile(rf"(?<![a-z0-9]){body}(?:e?s)?(?![a-z0-9])")


def phrase_in(phrase: str, text: str) -> bool:
    """Whether ``phrase`` occurs in ``text`` as whole words.

    Both sides are compared case-insensitively; a plural ``s``/``es`` after
    the phrase is accepted.
    """
    phrase = normalize(phrase)
    if not phrase:
        return False
    return _phrase_pattern(phrase).search(normalize(text)) is not None


def _skip_reason(
    skill: Skill,
    query: str,
    project_types: Iterable[ProjectType | str],
) -> str | None:
    detected = {t.value if isinstance(t, ProjectType) else str(t) for t in project_types}
    for condition in skill.skip_when:
        if condition.startswith(PROJECT_CONDITION_PREFIX):
            wanted = condition[len(PROJECT_CONDITION_PREFIX) :].strip()
            if wanted in detected:
                return f"project type is {wanted}"
        elif phrase_in(condition, query):
            return f"request mentions '{condition}'"
    return None


def match_skill(
    skill: Skill,
    query: str,
    project_types: Iterable[ProjectType | str] = (),
) -> SkillMatch:
    """Score one skill against a request.

    The score is the number of distinct triggers found in the request. A
    matching skip condition excludes the skill whatever its score.
    """
    matched = [t for t in skill.triggers if phrase_in(t, query)]
    result = SkillMatch(
        name=skill.name,
        description=skill.description,
        score=len(matched),
        matched_triggers=matched,
        always=skill.always,
    )
    if result.score or skill.always:
        result.skip_reason = _skip_reason(skill, query, project_types)
    return result
