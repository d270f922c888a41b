"""Render routed skills into a Markdown context block for an agent prompt."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skillrouter.models.route import RouteResult
    from skillrouter.remote.guidelines import GuidelineDocument
    from skillrouter.skills.models import Skill


def build_skill_context(
    result: RouteResult,
    skills: dict[str, Skill],
    guidelines: dict[str, GuidelineDocument] | None = None,
) -> str:
    """Compose: detected project + one section per selected skill + live guidelines."""
    types = ", ".join(t.value for t in result.project_types) or "unknown"
    header = f"""\
## Project Context
- Project type: {types}
- Request: {result.query.strip() or "(empty)"}"""

    skill_parts = []
    for match in result.selected:
        skill = skills.get(match.name)
        if skill is None:
            continue
        title = f"### {skill.name}: {skill.description}" if skill.description else f"### {skill.name}"
        lines = [title]
        if match.matched_triggers:
            lines.append(f"_Matched: {', '.join(match.matched_triggers)}_")
        if skill.prompt_text:
            lines.append(skill.prompt_text)
        skill_parts.append("\n".join(lines))
    skills_section = "\n\n".join(skill_parts) if skill_parts else "(no skills matched)"

    out = f"""{header}

## Skills
{skills_section}"""

    if guidelines:
        guide_parts = [
            f"### {name} (live from {doc.url})\n{doc.text.strip()}" for name, doc in guidelines.items()
        ]
        out += "\n\n## Live Guidelines\n" + "\n\n".join(guide_parts)

    return out
