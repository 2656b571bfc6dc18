"""
Unit tests for the security header checker.
"""

from webcheck.core.parsers import analyze_headers

from conftest import ALL_SECURITY_HEADERS


def test_all_headers_present():
    assert analyze_headers(ALL_SECURITY_HEADERS) == []


def test_missing_csp_and_hsts_in_order():
    headers = {"x-frame-options": "DENY", "x-content-type-options": "nosniff"}
    assert analyze_headers(headers) == ["Missing CSP", "Missing HSTS"]


def test_no_headers_reports_all_in_check_order():
    assert analyze_headers({}) == [
        "Missing CSP",
        "Missing HSTS",
        "Missing X-Frame-Options",
        "Missing X-Content-Type-Options",
    ]


def test_empty_value_counts_as_missing():
    headers = dict(ALL_SECURITY_HEADERS, **{"x-frame-options": ""})
    assert analyze_headers(headers) == ["Missing X-Frame-Options"]


def test_header_values_are_not_validated():
    headers = {name: "nonsense" for name in ALL_SECURITY_HEADERS}
    assert analyze_headers(headers) == []
