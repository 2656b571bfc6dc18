# config.py
import os
from typing import Optional

from pydantic import BaseModel


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    cache_max_entries: int = 200
    cache_ttl: float = 15 * 60  # seconds
    audit_concurrency: int = 1
    single_flight: bool = True

    redis_url: Optional[str] = "redis://localhost:6379/0"
    rate_limit_max: int = 6
    rate_limit_window: int = 60  # seconds
    admin_token: str = "changeme_admin_token"

    lighthouse_bin: str = "lighthouse"
    axe_script_path: Optional[str] = None
    axe_script_url: str = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.10.2/axe.min.js"
    navigation_timeout_ms: int = 30000
    header_fetch_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 4000)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cache_max_entries=int(os.getenv("CACHE_MAX_ENTRIES", 200)),
            cache_ttl=float(os.getenv("CACHE_TTL", 15 * 60)),
            audit_concurrency=int(os.getenv("AUDIT_CONCURRENCY", 1)),
            single_flight=_env_bool("SINGLE_FLIGHT", "1"),
            # empty REDIS_URL disables rate limiting
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0") or None,
            rate_limit_max=int(os.getenv("RATE_LIMIT_MAX", 6)),
            rate_limit_window=int(os.getenv("RATE_LIMIT_WINDOW", 60)),
            admin_token=os.getenv("ADMIN_TOKEN", "changeme_admin_token"),
            lighthouse_bin=os.getenv("LIGHTHOUSE_BIN", "lighthouse"),
            axe_script_path=os.getenv("AXE_SCRIPT_PATH") or None,
            axe_script_url=os.getenv(
                "AXE_SCRIPT_URL",
                "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.10.2/axe.min.js",
            ),
            navigation_timeout_ms=int(os.getenv("NAVIGATION_TIMEOUT_MS", 30000)),
            header_fetch_timeout=float(os.getenv("HEADER_FETCH_TIMEOUT", 30)),
        )
