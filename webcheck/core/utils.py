import math
import re
from typing import Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_http_url = TypeAdapter(AnyHttpUrl)


def default_headers():
    return {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
    }


def normalize_url(raw) -> Optional[str]:
    """Return the canonical form of ``raw`` or None if it is not a usable URL.

    Scheme-less input is treated as https. Never raises.
    """
    if not isinstance(raw, str):
        return None
    u = raw if _SCHEME_RE.match(raw) else "https://" + raw
    try:
        return str(_http_url.validate_python(u))
    except ValidationError:
        return None


def round_half_up(value: float) -> int:
    # round() is banker's rounding; scores round .5 upwards
    return int(math.floor(value + 0.5))


def category_score(lhr: dict, name: str) -> int:
    """Lighthouse category score scaled to 0-100, 0 when missing."""
    score = ((lhr or {}).get("categories") or {}).get(name, {}) or {}
    value = score.get("score") if isinstance(score, dict) else None
    return round_half_up(value * 100) if value else 0
