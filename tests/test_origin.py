"""Tests for configured origin entries."""

import pytest

from fastapi_cors_shield.origin import Origin, origin_pattern


class TestOriginPattern:
    """`*` becomes "any characters", everything else is literal."""

    def test_dots_are_escaped(self):
        """Test that dots in a wildcard origin are escaped."""
        assert origin_pattern("*.example.com") == r".*\.example\.com"

    def test_no_wildcard_is_fully_escaped(self):
        """Test that an origin without wildcards is fully escaped."""
        assert origin_pattern("https://a.com") == r"https://a\.com"


class TestOrigin:
    """Origin entries lowercase their value and compare case-insensitively."""

    def test_exact_origin_is_lowercased(self):
        """Test that exact origins are compared lowercased."""
        origin = Origin.from_config("https://App.Example.com")
        assert origin.value == "https://app.example.com"
        assert origin.is_wildcard is False
        assert origin.allows_for("HTTPS://APP.EXAMPLE.COM") is True
        assert origin.allows_for("https://app.example.com.evil.com") is False

    @pytest.mark.parametrize(
        "candidate",
        ["https://api.example.com", "http://api.example.com", "https://a.b.example.com"],
    )
    def test_wildcard_accepts_subdomains(self, candidate):
        """Test that a wildcard origin accepts subdomains."""
        origin = Origin.from_config("http*://*.example.com")
        assert origin.is_wildcard is True
        assert origin.allows_for(candidate) is True

    @pytest.mark.parametrize(
        "candidate",
        [
            "https://evil.com/example.com",
            "https://example.com.evil.com",
            "https://evilexample.com",
            "ftp://api.example.com",
        ],
    )
    def test_wildcard_rejects_spoofed_origins(self, candidate):
        """Test that a wildcard origin rejects spoofed hosts."""
        origin = Origin.from_config("http*://*.example.com")
        assert origin.allows_for(candidate) is False

    def test_https_wildcard_requires_https_prefix(self):
        """Test that an https wildcard requires the https prefix."""
        origin = Origin.from_config("https*://*.example.com")
        assert origin.allows_for("https://api.example.com") is True
        assert origin.allows_for("https://example.com.evil.com") is False

    def test_wildcard_is_full_match(self):
        """Test that wildcard origins must match the whole candidate."""
        origin = Origin.from_config("https://*.trusted.com")
        assert origin.allows_for("evil.com/https://x.trusted.com") is False
        assert origin.allows_for("https://x.trusted.com/evil") is False

    def test_wildcard_with_regex_metacharacters_compiles(self):
        """Test that regex metacharacters around a wildcard are matched literally."""
        origin = Origin.from_config("https://(a|b)[*].example.com?")
        assert origin.is_wildcard is True
        assert origin.allows_for("https://(a|b)[x].example.com?") is True
        assert origin.allows_for("https://a[x].example.com") is False
