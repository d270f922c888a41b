"""SkillLoader — reads skill markdown files and parses YAML frontmatter."""

import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from skillrouter.errors import SkillParseError
from skillrouter.skills.models import Skill

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
# Markdown files in a skills directory that are documentation, not skills
RESERVED_FILENAMES = {"GUIDE.md", "README.md"}


class SkillLoader:
    """Load skills from markdown files in a directory.

    Skills are either flat ``<name>.md`` files or ``<name>/SKILL.md`` folders.
    Each file can have optional YAML frontmatter between --- delimiters:

        ---
        name: react-query
        description: Server state with TanStack Query
        project_types: [react, nextjs]
        triggers: [react query, usequery, cache invalidation]
        skip_when: [swr]
        guideline_url: https://example.com/react-query.md
        ---
        # React Query
        [guidance here]

    If no frontmatter is present, the file stem (or folder name) is used as the name.
    """

    @staticmethod
    def load(skills_dir: str | Path) -> list[Skill]:
        """Load all skill documents from the given directory."""
        skills_path = Path(skills_dir)
        if not skills_path.is_dir():
            logger.warning("Skills directory not found: %s", skills_path)
            return []

        files = [p for p in skills_path.glob("*.md") if p.name not in RESERVED_FILENAMES]
        files += list(skills_path.glob(f"*/{SKILL_FILENAME}"))

        skills: list[Skill] = []
        for md_file in sorted(files):
            try:
                skill = SkillLoader.parse_file(md_file)
            except (OSError, UnicodeDecodeError, SkillParseError):
                logger.warning("Failed to parse skill file: %s", md_file, exc_info=True)
                continue
            skills.append(skill)
            logger.debug("Loaded skill: %s from %s", skill.name, md_file)

        logger.info("Loaded %d skills from %s", len(skills), skills_path)
        return skills

    @staticmethod
    def load_many(dirs: Iterable[str | Path]) -> list[Skill]:
        """Load several directories; later skills replace earlier ones by name."""
        by_name: dict[str, Skill] = {}
        for d in dirs:
            for skill in SkillLoader.load(d):
                if skill.name in by_name:
                    logger.info(
                        "Skill %s from %s overrides %s",
                        skill.name,
                        skill.source,
                        by_name[skill.name].source,
                    )
                by_name[skill.name] = skill
        return sorted(by_name.values(), key=lambda s: s.name)

    @staticmethod
    def parse_file(path: Path) -> Skill:
        """Parse a single skill markdown file."""
        raw = path.read_text(encoding="utf-8")
        default_name = path.parent.name if path.name == SKILL_FILENAME else path.stem
        skill = SkillLoader.parse(raw, default_name)
        skill.source = path
        return skill

    @staticmethod
    def parse(text: str, default_name: str) -> Skill:
        """Build a Skill from markdown text."""
        meta, body = SkillLoader._split_frontmatter(text)

        name = str(meta.get("name") or default_name).strip().lower()
        if not name:
            raise SkillParseError(default_name, "empty skill name")

        try:
            priority = int(meta.get("priority", 0) or 0)
        except (TypeError, ValueError):
            raise SkillParseError(name, f"priority must be an integer, got {meta.get('priority')!r}")

        url = meta.get("guideline_url")
        return Skill(
            name=name,
            description=str(meta.get("description", "") or "").strip(),
            triggers=_as_list(meta.get("triggers", meta.get("keywords"))),
            skip_when=_as_list(meta.get("skip_when", meta.get("skip"))),
            project_types=_as_list(meta.get("project_types")),
            always=bool(meta.get("always", False)),
            priority=priority,
            guideline_url=str(url).strip() if url else None,
            prompt_text=body.strip(),
        )

    @staticmethod
    def _split_frontmatter(text: str) -> tuple[dict, str]:
        """Split YAML frontmatter from markdown body.

        Returns (metadata_dict, body_text). If no frontmatter, returns ({}, full_text).
        """
        stripped = text.strip()
        if not stripped.startswith("---"):
            return {}, text

        # The closing delimiter must sit on its own line
        end_idx = stripped.find("\n---", 3)
        if end_idx == -1:
            return {}, text

        frontmatter_str = stripped[3:end_idx].strip()
        body = stripped[end_idx + 4 :]

        try:
            meta = yaml.safe_load(frontmatter_str) or {}
        except yaml.YAMLError:
            logger.warning("Invalid YAML frontmatter, ignoring")
            meta = {}

        if not isinstance(meta, dict):
            meta = {}

        return meta, body


def _as_list(value: Any) -> list[str]:
    """Coerce a YAML list or comma-separated string into clean lower-case items."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value if v is not None]
    else:
        items = [str(value)]

    seen: list[str] = []
    for item in items:
        cleaned = " ".join(item.strip().lower().split())
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen
