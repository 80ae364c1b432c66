"""
Portfolio API — CORS Helper Unit Tests
=======================================

What:  Origin selection for Access-Control-Allow-Origin.
"""

from starlette.responses import Response

from portfolio.middleware.cors import apply_cors_headers, resolve_allowed_origin


class TestResolveAllowedOrigin:

    def test_wildcard(self):
        assert resolve_allowed_origin(["*"], "https://anywhere.example") == "*"

    def test_single_origin_sent_as_is(self):
        assert resolve_allowed_origin(["https://studio.example"], "https://evil.example") == (
            "https://studio.example"
        )

    def test_allowlist_echoes_listed_origin(self):
        origins = ["https://studio.example", "https://admin.studio.example"]
        assert resolve_allowed_origin(origins, "https://admin.studio.example") == (
            "https://admin.studio.example"
        )

    def test_allowlist_falls_back_to_first(self):
        origins = ["https://studio.example", "https://admin.studio.example"]
        assert resolve_allowed_origin(origins, "https://evil.example") == "https://studio.example"
        assert resolve_allowed_origin(origins, None) == "https://studio.example"

    def test_empty_config_means_wildcard(self):
        assert resolve_allowed_origin([], None) == "*"


class TestApplyCorsHeaders:

    def test_all_headers_set(self):
        response = apply_cors_headers(Response(), origins=["*"])
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "GET, POST, PUT, DELETE, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert "vary" not in response.headers

    def test_vary_on_allowlist(self):
        response = apply_cors_headers(
            Response(), "https://b.example", origins=["https://a.example", "https://b.example"]
        )
        assert response.headers["access-control-allow-origin"] == "https://b.example"
        assert response.headers["vary"] == "Origin"
