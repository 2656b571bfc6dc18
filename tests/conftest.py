"""
Shared fixtures for the WebCheck Pro tests.

The external engines are replaced by in-memory doubles so the audit core and
the HTTP app can be exercised without Chromium, Lighthouse or the network.
"""

import asyncio

import pytest

from webcheck.cache import ResultCache
from webcheck.core.errors import EngineFailure
from webcheck.core.orchestrator import AuditOrchestrator
from webcheck.core.queue import AuditScheduler

ALL_SECURITY_HEADERS = {
    "content-security-policy": "default-src 'self'",
    "strict-transport-security": "max-age=31536000",
    "x-frame-options": "DENY",
    "x-content-type-options": "nosniff",
}


def make_lhr(performance=0.9, accessibility=0.8, seo=0.7):
    categories = {}
    for name, score in (("performance", performance), ("accessibility", accessibility), ("seo", seo)):
        if score is not None:
            categories[name] = {"score": score}
    return {"categories": categories}


class FakeEngine:
    """Stand-in for an audit engine: returns a canned payload or raises."""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []

    async def run(self, url):
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lighthouse():
    return FakeEngine(result=make_lhr())


@pytest.fixture
def axe():
    return FakeEngine(result={"violations": [{"id": "image-alt"}, {"id": "color-contrast"}]})


@pytest.fixture
def header_source():
    return FakeEngine(result=dict(ALL_SECURITY_HEADERS))


@pytest.fixture
def orchestrator(lighthouse, axe, header_source, clock):
    return AuditOrchestrator(
        cache=ResultCache(clock=clock),
        scheduler=AuditScheduler(concurrency=1),
        performance_engine=lighthouse,
        accessibility_engine=axe,
        header_source=header_source,
    )


@pytest.fixture
def failing_lighthouse():
    return FakeEngine(error=EngineFailure("lighthouse", "boom"))
