"""Shared dependencies for API endpoints."""

import logging

from skillrouter.config.settings import Settings, get_settings
from skillrouter.remote.guidelines import GuidelineFetcher
from skillrouter.routing.router import SkillRouter

logger = logging.getLogger(__name__)

_router: SkillRouter | None = None
_fetcher: GuidelineFetcher | None = None


async def init_deps(settings: Settings | None = None) -> None:
    """Load skills and open the guideline session (called on app startup)."""
    global _router, _fetcher
    settings = settings or get_settings()
    _router = SkillRouter.from_settings(settings)
    _fetcher = GuidelineFetcher(settings)
    await _fetcher.__aenter__()
    logger.info("API dependencies ready (%d skills)", len(_router.skills))


async def close_deps() -> None:
    """Close shared dependencies (called on app shutdown)."""
    global _router, _fetcher
    if _fetcher:
        await _fetcher.__aexit__(None, None, None)
    _fetcher = None
    _router = None


def get_router() -> SkillRouter:
    """Get the shared SkillRouter."""
    if _router is None:
        raise RuntimeError("SkillRouter not initialized; call init_deps() first")
    return _router


def get_fetcher() -> GuidelineFetcher:
    """Get the shared GuidelineFetcher."""
    if _fetcher is None:
        raise RuntimeError("GuidelineFetcher not initialized; call init_deps() first")
    return _fetcher
