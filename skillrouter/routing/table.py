"""Routing table embedded in a Markdown guide.

The guide carries one or more GitHub pipe tables such as:

    | Skill       | Project types | Triggers            | Skip when |
    |-------------|---------------|---------------------|-----------|
    | react-query | react, nextjs | mutation, prefetch  | swr       |

Any table with a ``Skill`` column and a ``Triggers`` (or ``Keywords``)
column is read; other tables in the document are ignored.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path

from skillrouter.skills.models import Skill

logger = logging.getLogger(__name__)

_SEPARATOR_CELL = re.compile(r"^:?-{3,}:?$")
_EMPTY_CELLS = {"", "-", "—", "–", "n/a", "none"}

_COLUMN_ALIASES = {
    "skill": "skill",
    "skills": "skill",
    "name": "skill",
    "triggers": "triggers",
    "trigger keywords": "triggers",
    "keywords": "triggers",
    "skip when": "skip_when",
    "skip": "skip_when",
    "skip conditions": "skip_when",
    "project types": "project_types",
    "project type": "project_types",
    "projects": "project_types",
}


@dataclass
class RouteEntry:
    """One row of the routing table."""

    skill: str
    triggers: list[str] = field(default_factory=list)
    skip_when: list[str] = field(default_factory=list)
    project_types: list[str] = field(default_factory=list)


def _split_row(line: str) -> list[str]:
    inner = line.strip()
    if inner.startswith("|"):
        inner = inner[1:]
    if inner.endswith("|"):
        inner = inner[:-1]
    return [cell.strip() for cell in inner.split("|")]


def _cell_items(cell: str) -> list[str]:
    items: list[str] = []
    for part in cell.replace("`", "").split(","):
        cleaned = " ".join(part.strip().lower().split())
        if cleaned not in _EMPTY_CELLS and cleaned not in items:
            items.append(cleaned)
    return items


def _merge(base: list[str], extra: list[str]) -> list[str]:
    return base + [item for item in extra if item not in base]


class RoutingTable:
    """Skill name → trigger keywords → skip conditions."""

    def __init__(self, entries: list[RouteEntry] | None = None):
        self.entries: dict[str, RouteEntry] = {}
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: RouteEntry) -> None:
        """Add an entry, merging with an existing row for the same skill."""
        existing = self.entries.get(entry.skill)
        if existing is None:
            self.entries[entry.skill] = entry
            return
        existing.triggers = _merge(existing.triggers, entry.triggers)
        existing.skip_when = _merge(existing.skip_when, entry.skip_when)
        existing.project_types = _merge(existing.project_types, entry.project_types)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def get(self, name: str) -> RouteEntry | None:
        return self.entries.get(name)

    @classmethod
    def from_markdown(cls, text: str) -> "RoutingTable":
        table = cls()
        lines = text.splitlines()
        i = 0
        while i < len(lines) - 1:
            header, sep = lines[i], lines[i + 1]
            if "|" in header and cls._is_separator(sep):
                columns = [_COLUMN_ALIASES.get(c.lower()) for c in _split_row(header)]
                i += 2
                body: list[str] = []
                while i < len(lines) and lines[i].strip().startswith("|"):
                    body.append(lines[i])
                    i += 1
                if "skill" in columns and "triggers" in columns:
                    for row in body:
                        entry = cls._parse_row(columns, _split_row(row))
                        if entry is not None:
                            table.add(entry)
                continue
            i += 1
        return table

    @classmethod
    def from_file(cls, path: str | Path) -> "RoutingTable":
        guide = Path(path)
        if not guide.is_file():
            logger.warning("Routing guide not found: %s", guide)
            return cls()
        table = cls.from_markdown(guide.read_text(encoding="utf-8"))
        logger.info("Loaded %d routing entries from %s", len(table), guide)
        return table

    @staticmethod
    def _is_separator(line: str) -> bool:
        if "-" not in line or "|" not in line:
            return False
        cells = [c for c in _split_row(line) if c]
        return bool(cells) and all(_SEPARATOR_CELL.match(c) for c in cells)

    @staticmethod
    def _parse_row(columns: list[str | None], cells: list[str]) -> RouteEntry | None:
        values: dict[str, list[str]] = {}
        for column, cell in zip(columns, cells):
            if column is not None:
                values[column] = _cell_items(cell)

        names = values.get("skill") or []
        if not names:
            return None
        return RouteEntry(
            skill=names[0],
            triggers=values.get("triggers", []),
            skip_when=values.get("skip_when", []),
            project_types=values.get("project_types", []),
        )

    def apply(self, skills: list[Skill]) -> list[Skill]:
        """Return copies of ``skills`` with table rows merged into their metadata.

        Triggers and skip conditions are unioned; project types from the table
        replace the skill's own when the row names any.
        """
        known = {s.name for s in skills}
        for name in self.entries:
            if name not in known:
                logger.warning("Routing table names unknown skill: %s", name)

        merged: list[Skill] = []
        for skill in skills:
            entry = self.entries.get(skill.name)
            if entry is None:
                merged.append(skill)
                continue
            merged.append(
                replace(
                    skill,
                    triggers=_merge(skill.triggers, entry.triggers),
                    skip_when=_merge(skill.skip_when, entry.skip_when),
                    project_types=list(entry.project_types) or list(skill.project_types),
                )
            )
        return merged
