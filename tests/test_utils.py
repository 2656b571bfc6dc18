"""
Unit tests for URL normalization and score helpers.
"""

import pytest

from webcheck.core.utils import category_score, normalize_url, round_half_up


class TestNormalizeUrl:
    @pytest.mark.parametrize("raw", ["example.com", "example.com/a/b?q=1", "sub.example.org:8080/x"])
    def test_missing_scheme_defaults_to_https(self, raw):
        assert normalize_url(raw) == normalize_url("https://" + raw)
        assert normalize_url(raw).startswith("https://")

    def test_keeps_http_scheme(self):
        assert normalize_url("http://example.com/page").startswith("http://example.com")

    def test_scheme_check_is_case_insensitive(self):
        assert normalize_url("HTTPS://example.com/a") == "https://example.com/a"

    def test_lowercases_host(self):
        assert normalize_url("https://EXAMPLE.Com/Path") == "https://example.com/Path"

    def test_drops_default_port(self):
        assert normalize_url("https://example.com:443/a") == "https://example.com/a"

    @pytest.mark.parametrize(
        "raw",
        ["example.com", "HTTP://Example.COM/a/../b", "https://example.com:443", "example.com/search?q=a b"],
    )
    def test_idempotent(self, raw):
        once = normalize_url(raw)
        assert once is not None
        assert normalize_url(once) == once

    def test_long_url_is_accepted(self):
        raw = "https://example.com/" + "a" * 3000
        once = normalize_url(raw)
        assert once == raw
        assert normalize_url(once) == once

    def test_long_query_string_is_accepted(self):
        raw = "example.com/landing?utm=" + "x" * 2500
        assert normalize_url(raw) == "https://example.com/landing?utm=" + "x" * 2500

    @pytest.mark.parametrize("raw", ["", "::::", "http://", "https://", "https:// /"])
    def test_malformed_input_is_rejected(self, raw):
        assert normalize_url(raw) is None

    @pytest.mark.parametrize("raw", [None, 42, ["example.com"]])
    def test_non_string_input_is_rejected(self, raw):
        assert normalize_url(raw) is None


class TestScoreHelpers:
    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (56.25, 56), (93.75, 94), (-0.5, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_category_score_scales_to_percent(self):
        lhr = {"categories": {"performance": {"score": 0.875}}}
        assert category_score(lhr, "performance") == 88

    @pytest.mark.parametrize(
        "lhr",
        [
            {},
            None,
            {"categories": {}},
            {"categories": {"performance": {}}},
            {"categories": {"performance": {"score": None}}},
            {"categories": {"performance": {"score": 0}}},
        ],
    )
    def test_category_score_missing_is_zero(self, lhr):
        assert category_score(lhr, "performance") == 0
