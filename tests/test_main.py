"""Tests for the short links HTTP API."""

import logging
import re

import pytest
from fastapi.testclient import TestClient

from shortlinks.core.config import Settings, settings
from shortlinks.core.errors import ErrorKind, ShortenerError
from shortlinks.core.middleware import SECURITY_HEADERS
from shortlinks.core.rate_limit import limiter
from shortlinks.main import app, create_app
from shortlinks.models.link import LinkRecord
from shortlinks.services.shortener import get_service
from shortlinks.storage import MemoryLinkStore

from conftest import BASE_URL, FixedAllocator, make_service

SHORT_URL_PATTERN = re.compile(re.escape(BASE_URL) + r"/([0-9a-f]{8})")


def link_id_of(response) -> str:
    return response.json()["shortUrl"].rsplit("/", 1)[-1]


class BrokenStore(MemoryLinkStore):
    def get(self, link_id):
        raise RuntimeError("store unavailable")


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns ok status and a timestamp."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data


class TestShortenEndpoint:
    """Tests for POST /shorten endpoint."""

    def test_shorten_success(self, client):
        """Test creating a short link successfully."""
        response = client.post("/shorten", json={"url": "https://example.com"})
        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"shortUrl", "originalUrl"}
        assert data["originalUrl"] == "https://example.com"
        assert SHORT_URL_PATTERN.fullmatch(data["shortUrl"])

    def test_shorten_alias_route(self, client):
        """Test the deprecated /shortenUrl alias behaves like /shorten."""
        response = client.post("/shortenUrl", json={"url": "https://example.com"})
        assert response.status_code == 200
        data = response.json()
        assert data["originalUrl"] == "https://example.com"
        assert SHORT_URL_PATTERN.fullmatch(data["shortUrl"])

    def test_alias_is_marked_deprecated(self, client):
        """Test the OpenAPI schema flags the alias."""
        paths = client.get("/openapi.json").json()["paths"]
        assert paths["/shortenUrl"]["post"].get("deprecated") is True
        assert not paths["/shorten"]["post"].get("deprecated", False)

    def test_shorten_twice_gives_two_links(self, client, service):
        """Test the same URL is never deduplicated."""
        first = client.post("/shorten", json={"url": "https://example.com"})
        second = client.post("/shorten", json={"url": "https://example.com"})
        assert link_id_of(first) != link_id_of(second)
        assert service.store.size() == 2

    def test_missing_url(self, client):
        """Test an empty body is rejected."""
        response = client.post("/shorten", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    def test_malicious_url(self, client, service):
        """Test a javascript URL is rejected and nothing is stored."""
        response = client.post("/shorten", json={"url": "javascript:alert('xss')"})
        assert response.status_code == 400
        assert re.search(r"protocol|malicious", response.json()["error"])
        assert service.store.size() == 0

    def test_invalid_url(self, client):
        """Test an unparsable URL is rejected."""
        response = client.post("/shorten", json={"url": "invalid-url"})
        assert response.status_code == 400
        assert re.search(r"Invalid URL", response.json()["error"])

    def test_url_too_long(self, client):
        """Test a URL over the configured maximum is rejected."""
        url = "https://example.com/" + "a" * settings.max_url_length
        response = client.post("/shorten", json={"url": url})
        assert response.status_code == 400
        assert re.search(r"too long", response.json()["error"])

    def test_non_string_url(self, client):
        """Test a wrongly typed body field is a 400."""
        response = client.post("/shorten", json={"url": 123})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_invalid_json(self, client):
        """Test a malformed JSON body is a 400."""
        response = client.post(
            "/shorten",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON format"}


class TestRedirectEndpoint:
    """Tests for GET /{link_id} endpoint."""

    def test_redirect_success(self, client):
        """Test successful redirect."""
        create_response = client.post("/shorten", json={"url": "https://example.com"})
        link_id = link_id_of(create_response)

        response = client.get(f"/{link_id}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com"

    def test_redirect_not_found(self, client):
        """Test redirect for an unknown link id."""
        response = client.get("/doesnotexist", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"error": "Link not found"}

    def test_redirect_malformed_id(self, client):
        """Test a malformed link id is reported as not found."""
        response = client.get("/not-an-id", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"error": "Link not found"}

    def test_failed_lookup_does_not_change_store(self, client, service):
        """Test misses leave the store untouched."""
        client.post("/shorten", json={"url": "https://example.com"})
        client.get("/deadbeef", follow_redirects=False)
        assert service.store.size() == 1

    def test_redirect_is_repeatable(self, client):
        """Test the same link resolves the same way every time."""
        link_id = link_id_of(client.post("/shorten", json={"url": "https://example.com/a?b=c"}))
        for _ in range(3):
            response = client.get(f"/{link_id}", follow_redirects=False)
            assert response.headers["location"] == "https://example.com/a?b=c"


class TestErrorMapping:
    """Tests for server-side failures."""

    def test_allocation_exhausted_is_500(self):
        """Test id exhaustion maps to an internal error."""
        store = MemoryLinkStore()
        store.put_if_absent(LinkRecord(id="aaaa0000", original_url="https://taken.com"))
        exhausted = make_service(store=store, allocator=FixedAllocator(["aaaa0000"]))
        app.dependency_overrides[get_service] = lambda: exhausted

        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.post("/shorten", json={"url": "https://example.com"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert store.size() == 1

    def test_unexpected_exception_is_500(self, caplog):
        """Test unhandled exceptions are rendered, logged and keep the security headers."""
        caplog.set_level(logging.INFO, logger="shortlinks.http")
        app.dependency_overrides[get_service] = lambda: make_service(store=BrokenStore())

        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.get("/deadbeef", follow_redirects=False)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "details": "store unavailable"}
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value
        assert any(
            "GET /deadbeef" in record.getMessage() and "Status: 500" in record.getMessage()
            for record in caplog.records
        )

    def test_unexpected_exception_hides_details_outside_development(self):
        """Test production responses do not leak the exception text."""
        production = create_app(Settings(environment="production"))
        production.dependency_overrides[get_service] = lambda: make_service(store=BrokenStore())

        with TestClient(production, raise_server_exceptions=False) as client:
            response = client.get("/deadbeef", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_error_constructors(self):
        """Test rate limit and internal errors carry their kind and status."""
        limited = ShortenerError.rate_limited(60)
        assert limited.kind is ErrorKind.RATE_LIMITED
        assert limited.status_code == 429
        assert limited.retry_after == 60

        internal = ShortenerError.internal("boom")
        assert internal.kind is ErrorKind.INTERNAL
        assert internal.status_code == 500
        assert internal.reason == "boom"


class TestMiddleware:
    """Tests for headers and rate limiting."""

    def test_security_headers(self, client):
        """Test every response carries the security headers."""
        response = client.get("/health")
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_rate_limit(self, client, monkeypatch):
        """Test shorten requests beyond the limit get a 429."""
        monkeypatch.setattr(settings, "rate_limit_max_requests", 3)

        for _ in range(3):
            response = client.post("/shorten", json={"url": "https://example.com"})
            assert response.status_code == 200

        response = client.post("/shorten", json={"url": "https://example.com"})
        assert response.status_code == 429
        data = response.json()
        assert "Too many requests" in data["error"]
        assert data["retryAfter"] == settings.rate_limit_window_seconds
        assert response.headers["Retry-After"] == str(settings.rate_limit_window_seconds)

    def test_health_is_not_rate_limited(self, client, monkeypatch):
        """Test health checks are exempt from the limit."""
        monkeypatch.setattr(settings, "rate_limit_max_requests", 1)
        for _ in range(5):
            assert client.get("/health").status_code == 200

class TestAppConfiguration:
    """Tests for apps built from explicit settings."""

    @pytest.fixture
    def custom_client(self):
        custom = create_app(Settings(base_url="https://custom.example", max_url_length=30))
        limiter.reset()
        with TestClient(custom, raise_server_exceptions=False) as client:
            yield client
        limiter.reset()

    def test_service_uses_app_settings(self, custom_client):
        """Test the configured base URL is used for short links."""
        response = custom_client.post("/shorten", json={"url": "https://example.com"})
        assert response.status_code == 200
        assert response.json()["shortUrl"].startswith("https://custom.example/")

    def test_validator_uses_app_settings(self, custom_client):
        """Test the configured maximum length is enforced."""
        url = "https://example.com/" + "a" * 20
        assert len(url) == 40
        response = custom_client.post("/shorten", json={"url": url})
        assert response.status_code == 400
        assert re.search(r"too long", response.json()["error"])

    def test_lifespan_builds_service_from_settings(self, custom_client):
        """Test startup stores the configured service on the app."""
        service = custom_client.app.state.service
        assert service.base_url == "https://custom.example"
        assert service.validator.max_length == 30


class TestCors:
    """Tests for the CORS policy."""

    def test_origins_are_comma_separated(self):
        config = Settings(cors_origin="https://a.com, https://b.com,")
        assert config.cors_origins == ["https://a.com", "https://b.com"]

    def test_default_allows_any_origin(self, client):
        response = client.get("/health", headers={"Origin": "https://anywhere.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_configured_origins_with_credentials(self):
        """Test listed origins are echoed back and others are not."""
        config = Settings(cors_origin="https://a.com,https://b.com", cors_credentials=True)
        with TestClient(create_app(config)) as client:
            allowed = client.get("/health", headers={"Origin": "https://b.com"})
            denied = client.get("/health", headers={"Origin": "https://evil.com"})

        assert allowed.headers["access-control-allow-origin"] == "https://b.com"
        assert allowed.headers["access-control-allow-credentials"] == "true"
        assert "access-control-allow-origin" not in denied.headers

    def test_preflight_for_configured_origin(self):
        config = Settings(cors_origin="https://a.com")
        with TestClient(create_app(config)) as client:
            response = client.options(
                "/shorten",
                headers={
                    "Origin": "https://a.com",
                    "Access-Control-Request-Method": "POST",
                },
            )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://a.com"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
