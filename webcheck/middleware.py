from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

DEFAULT_CSP = "default-src 'self'; frame-ancestors 'none'; object-src 'none'"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the security headers this service itself audits for."""

    def __init__(self, app, csp: str = DEFAULT_CSP, hsts_max_age: int = 15552000):
        super().__init__(app)
        self.csp = csp
        self.hsts_max_age = hsts_max_age

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = self.csp
        response.headers["Strict-Transport-Security"] = f"max-age={self.hsts_max_age}; includeSubDomains"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response
