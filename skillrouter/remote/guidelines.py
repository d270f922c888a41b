"""Fetch live guideline text referenced by skills, with retry and caching."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable, Optional, Self
from urllib.parse import urlparse

import aiohttp

from skillrouter.config.settings import Settings, get_settings
from skillrouter.errors import GuidelineFetchError
from skillrouter.skills.models import Skill
from skillrouter.utils.retry import RetryConfig, retry_with_result
from skillrouter.utils.ttl_cache import TTLCache

logger = logging.getLogger(__name__)


@dataclass
class GuidelineDocument:
    """Guideline text fetched from a remote URL."""

    url: str
    text: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    from_cache: bool = False


class GuidelineFetcher:
    """Download guideline documents over HTTP.

    Supports two usage patterns:

    1. Context manager (one session for several fetches):
        async with GuidelineFetcher() as fetcher:
            doc = await fetcher.fetch(url)

    2. Standalone calls (a temporary session per fetch):
        doc = await GuidelineFetcher().fetch(url)

    Bodies are kept in a TTL cache shared by every fetch through this
    instance, so repeated routes do not hit the network.
    """

    HEADERS = {
        "User-Agent": "skillrouter/0.1 (+guideline fetcher)",
        "Accept": "text/markdown, text/plain;q=0.9, */*;q=0.5",
    }

    def __init__(self, settings: Optional[Settings] = None, cache: Optional[TTLCache] = None):
        self.settings = settings or get_settings()
        self.cache = cache or TTLCache(
            max_size=self.settings.guideline_cache_size,
            ttl_seconds=self.settings.guideline_cache_ttl,
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> Self:
        self._session = aiohttp.ClientSession(headers=self.HEADERS)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    @property
    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_retries=self.settings.fetch_max_retries,
            delay=self.settings.fetch_retry_delay,
            exceptions=(aiohttp.ClientError, asyncio.TimeoutError),
        )

    async def _do_fetch(self, url: str) -> str:
        """Single attempt; raises on any failure."""
        if self._session:
            return await self._fetch_with_session(self._session, url)
        async with aiohttp.ClientSession(headers=self.HEADERS) as session:
            return await self._fetch_with_session(session, url)

    async def _fetch_with_session(self, session: aiohttp.ClientSession, url: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.settings.fetch_timeout)
        async with session.get(url, timeout=timeout) as resp:
            if resp.status != 200:
                raise aiohttp.ClientError(f"HTTP {resp.status}")
            try:
                text = await resp.text()
            except UnicodeDecodeError as e:
                raise aiohttp.ClientError(f"Undecodable body: {e.reason}") from e
            if not text.strip():
                raise aiohttp.ClientError("Empty response body")
            return text

    async def fetch(self, url: str) -> GuidelineDocument:
        """Fetch guideline text, serving from cache when fresh.

        Raises GuidelineFetchError for non-HTTP URLs and after all retries fail.
        """
        scheme = urlparse(url).scheme.lower()
        if scheme not in ("http", "https"):
            raise GuidelineFetchError(url, f"unsupported URL scheme '{scheme or 'none'}'")

        cached: Optional[GuidelineDocument] = self.cache.get(url)
        if cached is not None:
            logger.debug("Guideline cache hit: %s", url)
            return replace(cached, from_cache=True)

        result = await retry_with_result(self._do_fetch, url, config=self.retry_config)
        if not result.success:
            reason = str(result.error) if result.error else "Unknown error"
            logger.warning("Failed to fetch %s: %s (%d attempts)", url, reason, result.attempts)
            raise GuidelineFetchError(url, reason, result.attempts)

        doc = GuidelineDocument(url=url, text=result.value)
        self.cache.put(url, doc)
        logger.info("Fetched guidelines from %s (%d chars, %d attempts)", url, len(doc.text), result.attempts)
        return doc

    async def fetch_for(self, skills: Iterable[Skill]) -> dict[str, GuidelineDocument]:
        """Fetch the guideline URL of every skill that has one.

        Failures are logged and left out of the result; one unreachable URL
        does not stop the others.
        """
        by_url: dict[str, list[str]] = {}
        for s in skills:
            if s.guideline_url:
                by_url.setdefault(s.guideline_url, []).append(s.name)
        if not by_url:
            return {}

        # One request per distinct URL, shared by every skill that names it
        docs = await asyncio.gather(
            *(self.fetch(url) for url in by_url),
            return_exceptions=True,
        )

        fetched: dict[str, GuidelineDocument] = {}
        for (url, names), doc in zip(by_url.items(), docs):
            if isinstance(doc, GuidelineFetchError):
                logger.warning("Skipping guidelines for %s: %s", ", ".join(names), doc)
                continue
            if isinstance(doc, BaseException):
                raise doc
            for name in names:
                fetched[name] = doc
        return fetched
