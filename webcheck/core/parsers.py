from typing import List, Mapping

# (header name, finding) in check order
REQUIRED_HEADERS = (
    ("content-security-policy", "Missing CSP"),
    ("strict-transport-security", "Missing HSTS"),
    ("x-frame-options", "Missing X-Frame-Options"),
    ("x-content-type-options", "Missing X-Content-Type-Options"),
)


def analyze_headers(headers: Mapping[str, str]) -> List[str]:
    """List the required security headers missing from a response.

    ``headers`` must be keyed by lower-cased header name. Only presence is
    checked; an empty value counts as missing.
    """
    return [finding for name, finding in REQUIRED_HEADERS if not headers.get(name)]
