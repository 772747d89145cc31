"""Tests for SecurityHeadersMiddleware in elitefitness/middleware/security.py."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from elitefitness.middleware.security import DEFAULT_CSP, SecurityHeadersMiddleware


def _app(**options) -> Starlette:
    def homepage(request):
        return PlainTextResponse("ok")

    app = Starlette(routes=[Route("/", homepage)])
    app.add_middleware(SecurityHeadersMiddleware, **options)
    return app


class TestSecurityMiddleware:
    """Verify security headers are set on responses."""

    def test_csp_headers_present(self, client):
        resp = client.get("/healthz")
        csp = resp.headers.get("Content-Security-Policy", "")
        assert "default-src 'self'" in csp
        assert "script-src 'self'" in csp

    def test_csp_allows_unsplash_images(self, client):
        """Program and trainer photos are loaded from images.unsplash.com."""
        resp = client.get("/healthz")
        csp = resp.headers["Content-Security-Policy"]
        assert "img-src 'self' data: https://images.unsplash.com" in csp

    def test_xframe_options_deny(self, client):
        resp = client.get("/healthz")
        assert resp.headers.get("X-Frame-Options") == "DENY"

    def test_content_type_nosniff(self, client):
        resp = client.get("/healthz")
        assert resp.headers.get("X-Content-Type-Options") == "nosniff"

    def test_referrer_and_permissions_policy(self, client):
        resp = client.get("/healthz")
        assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "camera=()" in resp.headers["Permissions-Policy"]

    def test_cross_origin_headers(self, client):
        resp = client.get("/healthz")
        assert resp.headers.get("Cross-Origin-Opener-Policy") == "same-origin"
        assert resp.headers.get("Cross-Origin-Resource-Policy") == "same-origin"

    def test_no_hsts_over_plain_http(self, client):
        resp = client.get("/healthz")
        assert "Strict-Transport-Security" not in resp.headers

    def test_request_id_header(self, client):
        resp = client.get("/healthz")
        assert resp.headers.get("X-Request-ID")


class TestSecurityMiddlewareOptions:
    def test_hsts_on_https(self):
        tc = TestClient(_app(), base_url="https://elitefitness.example")
        resp = tc.get("/")
        assert resp.headers["Strict-Transport-Security"].startswith("max-age=")

    def test_hsts_honors_forwarded_proto(self):
        tc = TestClient(_app(), base_url="http://elitefitness.example")
        resp = tc.get("/", headers={"X-Forwarded-Proto": "https"})
        assert "Strict-Transport-Security" in resp.headers

    def test_hsts_on_skip_host(self):
        tc = TestClient(
            _app(skip_hsts_hosts={"elitefitness.example"}),
            base_url="https://elitefitness.example",
        )
        resp = tc.get("/")
        assert "Strict-Transport-Security" not in resp.headers

    def test_report_only_mode(self):
        tc = TestClient(_app(report_only=True))
        resp = tc.get("/")
        assert "Content-Security-Policy" not in resp.headers
        assert resp.headers["Content-Security-Policy-Report-Only"] == "; ".join(
            DEFAULT_CSP
        )

    def test_custom_directives(self):
        tc = TestClient(_app(csp_directives=["default-src 'none'"]))
        resp = tc.get("/")
        assert resp.headers["Content-Security-Policy"] == "default-src 'none'"


class TestPageCaching:
    def test_landing_page_is_not_cached(self, client):
        resp = client.get("/", headers={"Accept": "text/html"})
        assert resp.headers["Cache-Control"] == "no-store"

    def test_static_assets_keep_long_cache(self, client):
        resp = client.get("/static/css/site.css")
        assert "immutable" in resp.headers["Cache-Control"]

    def test_no_store_can_be_disabled(self):
        from starlette.responses import HTMLResponse

        def page(request):
            return HTMLResponse("<p>ok</p>")

        app = Starlette(routes=[Route("/", page)])
        app.add_middleware(SecurityHeadersMiddleware, no_store_html=False)
        resp = TestClient(app).get("/")
        assert "Cache-Control" not in resp.headers
