"""Tests for GuidelineFetcher. The network is never touched."""

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from skillrouter.errors import GuidelineFetchError
from skillrouter.remote.guidelines import GuidelineFetcher
from skillrouter.skills.models import Skill

URL = "https://example.com/guidelines.md"


class FakeTransport:
    """Replays a script of results for _do_fetch; exceptions are raised."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[str] = []

    async def __call__(self, url: str) -> str:
        self.calls.append(url)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fetcher(settings, monkeypatch):
    settings.fetch_max_retries = 2
    return GuidelineFetcher(settings)


async def test_fetch_and_cache(fetcher, monkeypatch):
    transport = FakeTransport("# Rules\n- be nice")
    monkeypatch.setattr(fetcher, "_do_fetch", transport)

    first = await fetcher.fetch(URL)
    second = await fetcher.fetch(URL)

    assert first.text == "# Rules\n- be nice"
    assert first.from_cache is False
    assert second.from_cache is True
    assert second.text == first.text
    assert transport.calls == [URL]


async def test_retries_transient_errors(fetcher, monkeypatch):
    transport = FakeTransport(
        aiohttp.ClientError("HTTP 503"),
        aiohttp.ClientError("HTTP 503"),
        "ok",
    )
    monkeypatch.setattr(fetcher, "_do_fetch", transport)

    doc = await fetcher.fetch(URL)

    assert doc.text == "ok"
    assert len(transport.calls) == 3


async def test_gives_up_after_retries(fetcher, monkeypatch):
    transport = FakeTransport(aiohttp.ClientError("HTTP 500"))
    monkeypatch.setattr(fetcher, "_do_fetch", transport)

    with pytest.raises(GuidelineFetchError) as exc_info:
        await fetcher.fetch(URL)

    assert exc_info.value.attempts == 3
    assert "HTTP 500" in str(exc_info.value)
    assert len(transport.calls) == 3
    assert URL not in fetcher.cache


async def test_unexpected_errors_propagate(fetcher, monkeypatch):
    monkeypatch.setattr(fetcher, "_do_fetch", FakeTransport(ValueError("boom")))

    with pytest.raises(ValueError):
        await fetcher.fetch(URL)


@pytest.mark.parametrize("url", ["file:///etc/passwd", "guidelines.md", "ftp://example.com/x"])
async def test_rejects_non_http_urls(fetcher, monkeypatch, url):
    transport = FakeTransport("never")
    monkeypatch.setattr(fetcher, "_do_fetch", transport)

    with pytest.raises(GuidelineFetchError):
        await fetcher.fetch(url)
    assert transport.calls == []


async def test_fetch_for_skips_failures(fetcher, monkeypatch):
    good = "https://example.com/good.md"
    bad = "https://example.com/bad.md"

    async def transport(url: str) -> str:
        if url == bad:
            raise aiohttp.ClientError("HTTP 404")
        return f"text from {url}"

    monkeypatch.setattr(fetcher, "_do_fetch", transport)
    skills = [
        Skill(name="a", guideline_url=good),
        Skill(name="b", guideline_url=bad),
        Skill(name="c"),
    ]

    docs = await fetcher.fetch_for(skills)

    assert list(docs) == ["a"]
    assert docs["a"].text == f"text from {good}"


async def test_fetch_for_without_urls(fetcher):
    assert await fetcher.fetch_for([Skill(name="plain")]) == {}


async def test_context_manager_owns_session(settings):
    async with GuidelineFetcher(settings) as fetcher:
        assert fetcher._session is not None
        session = fetcher._session
    assert fetcher._session is None
    assert session.closed


async def test_fetch_for_requests_shared_url_once(fetcher, monkeypatch):
    calls = []

    async def transport(url: str) -> str:
        calls.append(url)
        await asyncio.sleep(0)
        return "shared rules"

    monkeypatch.setattr(fetcher, "_do_fetch", transport)
    skills = [
        Skill(name="review", guideline_url=URL),
        Skill(name="audit", guideline_url=URL),
    ]

    docs = await fetcher.fetch_for(skills)

    assert calls == [URL]
    assert sorted(docs) == ["audit", "review"]
    assert docs["audit"].text == docs["review"].text == "shared rules"


async def test_undecodable_body_is_skipped(settings):
    async def handler(request: web.Request) -> web.Response:
        return web.Response(body=b"\xff\xfe\xfa bad", content_type="text/markdown", charset="utf-8")

    app = web.Application()
    app.router.add_get("/g.md", handler)
    settings.fetch_max_retries = 0

    async with TestServer(app) as server:
        url = str(server.make_url("/g.md"))
        fetcher = GuidelineFetcher(settings)

        with pytest.raises(GuidelineFetchError) as exc_info:
            await fetcher.fetch(url)
        assert "Undecodable body" in str(exc_info.value)

        assert await fetcher.fetch_for([Skill(name="broken", guideline_url=url)]) == {}
