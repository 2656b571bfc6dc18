import asyncio
import datetime
import logging
from typing import Any, Dict, Mapping, NamedTuple, Optional, Protocol, Tuple

from ..cache import ResultCache
from ..models.schema import AuditResult, Radar
from .audit import compute_smart_score
from .errors import InvalidURLError
from .parsers import analyze_headers
from .queue import AuditScheduler
from .utils import category_score, normalize_url

log = logging.getLogger("webcheck")

SECURITY_BASELINE = 80
SECURITY_HEADER_PENALTY = 10


class PerformanceEngine(Protocol):
    async def run(self, url: str) -> Mapping[str, Any]: ...


class AccessibilityEngine(Protocol):
    async def run(self, url: str) -> Mapping[str, Any]: ...


class HeaderSource(Protocol):
    async def run(self, url: str) -> Mapping[str, str]: ...


class AuditOutcome(NamedTuple):
    result: AuditResult
    cached: bool


def utc_timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AuditOrchestrator:
    """Runs one audit per request: normalize, check cache, run the engines
    inside a scheduler slot, score, and cache the result.

    With ``single_flight`` on, concurrent requests for the same uncached
    target wait on one shared pipeline instead of each queuing their own.
    """

    def __init__(
        self,
        cache: ResultCache,
        scheduler: AuditScheduler,
        performance_engine: PerformanceEngine,
        accessibility_engine: AccessibilityEngine,
        header_source: HeaderSource,
        single_flight: bool = True,
    ):
        self.cache = cache
        self.scheduler = scheduler
        self.performance_engine = performance_engine
        self.accessibility_engine = accessibility_engine
        self.header_source = header_source
        self.single_flight = single_flight
        self._inflight: Dict[str, "asyncio.Future[AuditResult]"] = {}

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def _target(self, raw_url) -> str:
        target = normalize_url(raw_url)
        if not target:
            raise InvalidURLError(raw_url)
        return target

    def lookup(self, raw_url) -> Tuple[str, Optional[AuditResult]]:
        """Normalized target and its cached result, if any. Runs nothing."""
        target = self._target(raw_url)
        entry = self.cache.get(target)
        return target, (entry.data if entry else None)

    async def audit(self, raw_url) -> AuditOutcome:
        target = self._target(raw_url)

        entry = self.cache.get(target)
        if entry is not None:
            log.info("Returning cached audit for %s", target)
            return AuditOutcome(entry.data, True)

        if not self.single_flight:
            return AuditOutcome(await self._enqueue(target), False)

        shared = self._inflight.get(target)
        if shared is None:
            shared = asyncio.ensure_future(self._enqueue(target))
            self._inflight[target] = shared
            shared.add_done_callback(lambda fut: self._forget(target, fut))
        else:
            log.info("Joining in-flight audit for %s", target)
        # a cancelled waiter must not cancel the pipeline others share
        return AuditOutcome(await asyncio.shield(shared), False)

    def _forget(self, target: str, future: "asyncio.Future[AuditResult]"):
        if self._inflight.get(target) is future:
            del self._inflight[target]
        # waiters re-raise the error themselves; mark it retrieved either way
        if not future.cancelled():
            future.exception()

    async def _enqueue(self, target: str) -> AuditResult:
        return await self.scheduler.submit(lambda: self._run_pipeline(target))

    async def _fetch_header_findings(self, target: str) -> list:
        try:
            headers = await self.header_source.run(target)
        except Exception as e:
            log.warning("Header fetch failed for %s: %s", target, e)
            return []
        return analyze_headers({k.lower(): v for k, v in headers.items()})

    async def _run_pipeline(self, target: str) -> AuditResult:
        log.info("Starting audit for %s", target)
        lhr = await self.performance_engine.run(target)
        axe = await self.accessibility_engine.run(target)
        header_checks = await self._fetch_header_findings(target)

        performance = category_score(lhr, "performance")
        accessibility = category_score(lhr, "accessibility")
        seo = category_score(lhr, "seo")
        security = SECURITY_BASELINE - (SECURITY_HEADER_PENALTY if header_checks else 0)

        score = compute_smart_score(
            performance=performance,
            seo=seo,
            security=security,
            accessibility=accessibility,
            header_checks=header_checks,
            axe=axe,
        )

        violations = (axe or {}).get("violations")
        result = AuditResult(
            url=target,
            timestamp=utc_timestamp(),
            performance=performance,
            accessibility=accessibility,
            seo=seo,
            security=security,
            header_checks=header_checks,
            axe_summary=f"{len(violations)} issues" if violations is not None else "N/A",
            axe_details=list(violations or []),
            smart_score=score.final_score,
            smart_grade=score.grade,
            smart_label=score.label,
            penalties=score.penalties,
            suggestions=score.suggestions,
            radar=Radar(performance=performance, seo=seo, security=security, accessibility=accessibility),
        )

        self.cache.set(target, result)
        log.info("Audit finished for %s: %s (%s)", target, result.smart_score, result.smart_grade)
        return result
