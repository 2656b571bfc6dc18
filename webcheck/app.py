# app.py
import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .admin import router as admin_router
from .cache import ResultCache
from .config import Settings
from .core.errors import EngineFailure, InvalidURLError
from .core.fetchers import AxeEngine, HeaderFetcher, LighthouseEngine
from .core.orchestrator import AuditOrchestrator
from .core.queue import AuditScheduler
from .middleware import SecurityHeadersMiddleware
from .models.schema import HealthResponse
from .ratelimit import RateLimiter, RateLimitExceeded, rate_limit_handler
from .report import render_report_pdf

# ---------- logging ----------
log = logging.getLogger("webcheck")

PdfRenderer = Callable[[str, dict], Awaitable[bytes]]


def build_orchestrator(settings: Settings) -> AuditOrchestrator:
    """Wire the process-wide cache, scheduler and engines together."""
    return AuditOrchestrator(
        cache=ResultCache(max_entries=settings.cache_max_entries, ttl=settings.cache_ttl),
        scheduler=AuditScheduler(concurrency=settings.audit_concurrency),
        performance_engine=LighthouseEngine(binary=settings.lighthouse_bin),
        accessibility_engine=AxeEngine(
            script_path=settings.axe_script_path,
            script_url=settings.axe_script_url,
            navigation_timeout_ms=settings.navigation_timeout_ms,
        ),
        header_source=HeaderFetcher(timeout=settings.header_fetch_timeout),
        single_flight=settings.single_flight,
    )


def invalid_url():
    return JSONResponse(status_code=400, content={"error": "Invalid url"})


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[AuditOrchestrator] = None,
    limiter: Optional[RateLimiter] = None,
    render_pdf: Optional[PdfRenderer] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    orchestrator = orchestrator or build_orchestrator(settings)
    limiter = limiter or RateLimiter(
        redis_url=settings.redis_url,
        limit=settings.rate_limit_max,
        window=settings.rate_limit_window,
    )
    render_pdf = render_pdf or render_report_pdf
    logging.basicConfig(level=settings.log_level)
    logging.getLogger().setLevel(settings.log_level)
    log.setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await limiter.connect()
        log.info("WebCheck Pro backend ready ✅")
        yield
        await limiter.close()

    app = FastAPI(title="WebCheck Pro", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.orchestrator = orchestrator
    app.state.limiter = limiter

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.include_router(admin_router)

    # ---------- health ----------
    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(
            ok=True,
            message="WebCheck Pro backend healthy",
            queue={**orchestrator.scheduler.stats(), "inflight": orchestrator.inflight},
            cache_size=len(orchestrator.cache),
        )

    # ---------- audit ----------
    @app.get("/audit", dependencies=[Depends(limiter.check)])
    async def audit(url: Optional[str] = None):
        try:
            outcome = await orchestrator.audit(url)
        except InvalidURLError:
            return invalid_url()
        except EngineFailure as e:
            log.error("Audit failed for %s (%s engine): %s", url, e.engine, e)
            return JSONResponse(status_code=500, content={"error": "Audit failed", "message": str(e)})
        except Exception as e:
            log.exception("Audit error for %s", url)
            return JSONResponse(status_code=500, content={"error": "Audit failed", "message": str(e)})

        payload = outcome.result.to_payload()
        if outcome.cached:
            payload["cached"] = True
        return payload

    # ---------- PDF report ----------
    @app.get("/report", dependencies=[Depends(limiter.check)])
    async def report(url: Optional[str] = None):
        try:
            target, result = orchestrator.lookup(url)
        except InvalidURLError:
            return invalid_url()

        data = result.to_payload() if result else {}
        try:
            pdf = await render_pdf(target, data)
        except Exception as e:
            log.exception("Report rendering failed for %s", target)
            return JSONResponse(status_code=500, content={"error": "Report failed", "message": str(e)})
        return Response(content=pdf, media_type="application/pdf")

    return app


app = create_app()
