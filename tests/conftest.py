"""Shared fixtures: skill documents, fake projects, isolated settings."""

import json
import os
from pathlib import Path

import pytest

from skillrouter.config.settings import Settings, get_settings
from skillrouter.skills.models import Skill


def write_skill(directory: Path, filename: str, text: str) -> Path:
    path = directory / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_project(root: Path, files: dict[str, str] | None = None, package: dict | None = None) -> Path:
    """Create a fake front-end project under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in (files or {}).items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    if package is not None:
        (root / "package.json").write_text(json.dumps(package), encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep SKILLROUTER_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("SKILLROUTER_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, fetch_retry_delay=0.0)


@pytest.fixture
def sample_skills() -> list[Skill]:
    return [
        Skill(
            name="react-rendering",
            description="React rendering",
            triggers=["react", "rerender", "hook"],
            skip_when=["project:vue"],
            project_types=["react", "nextjs"],
        ),
        Skill(
            name="app-router",
            description="Next.js App Router",
            triggers=["server component", "app router", "layout"],
            skip_when=["pages router"],
            project_types=["nextjs"],
            priority=2,
        ),
        Skill(
            name="react-query",
            description="TanStack Query",
            triggers=["react query", "usequery", "cache"],
            skip_when=["swr"],
            project_types=["react", "nextjs"],
        ),
        Skill(
            name="vue-basics",
            description="Vue",
            triggers=["vue", "composable"],
            project_types=["vue"],
        ),
        Skill(
            name="liquid",
            description="Shopify themes",
            triggers=["section", "liquid"],
            project_types=["shopify-liquid"],
            always=True,
        ),
        Skill(
            name="a11y",
            description="Accessibility",
            triggers=["accessibility", "aria", "form"],
        ),
    ]
