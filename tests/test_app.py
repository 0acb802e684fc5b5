"""Tests for the HTTP surface."""

import logging
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import listing
from onenote_sections import config
from onenote_sections.app import api, get_exchanger, get_http_client, get_settings

URL = "/api/list-sections"
HEADERS = {"Authorization": "Bearer user-jwt"}


@pytest.fixture
def client(settings, graph, exchanger):
    async def http_client():
        async with httpx.AsyncClient(transport=graph.transport) as c:
            yield c

    api.dependency_overrides[get_settings] = lambda: settings
    api.dependency_overrides[get_http_client] = http_client
    api.dependency_overrides[get_exchanger] = lambda: exchanger
    yield TestClient(api)
    api.dependency_overrides.clear()


class TestListSectionsRoute:
    def test_round_trip(self, client, graph):
        graph.add("/v1.0/me/onenote/notebooks", listing({"id": "N1", "displayName": "Sales"}))
        graph.add(
            "/v1.0/me/onenote/notebooks/N1/sections",
            listing({"id": "S1", "displayName": "Intro"}, {"id": "S2", "displayName": "Notes"}),
        )
        resp = client.post(URL, json={"notebookName": "Sales"}, headers=HEADERS)
        assert resp.status_code == 200
        assert resp.json() == [
            {"sectionId": "S1", "sectionName": "Intro", "notebookId": "N1", "notebookName": "Sales"},
            {"sectionId": "S2", "sectionName": "Notes", "notebookId": "N1", "notebookName": "Sales"},
        ]

    def test_throttled_once_then_succeeds(self, client, graph):
        graph.add(
            "/v1.0/me/onenote/notebooks",
            httpx.Response(429, headers={"Retry-After": "1"}),
            listing({"id": "N1", "displayName": "Sales"}),
        )
        graph.add("/v1.0/me/onenote/notebooks/N1/sections", listing({"id": "S1", "displayName": "Intro"}))
        start = time.monotonic()
        resp = client.post(URL, json={"notebookName": "Sales"}, headers=HEADERS)
        assert time.monotonic() - start >= 1.0
        assert resp.status_code == 200
        assert len(resp.json()) == 1

    def test_missing_authorization_header(self, client, exchanger):
        resp = client.post(URL, json={"notebookName": "Sales"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Missing user bearer token"}
        assert exchanger.calls == []

    def test_empty_body(self, client, graph):
        resp = client.post(URL, headers=HEADERS)
        assert resp.status_code == 400
        assert resp.json() == {"error": "notebookName required"}

    def test_invalid_json_body(self, client, graph):
        resp = client.post(URL, content=b"{not json", headers={**HEADERS, "Content-Type": "application/json"})
        assert resp.status_code == 400
        assert graph.requests == []

    def test_notebook_not_found(self, client, graph):
        graph.add("/v1.0/me/onenote/notebooks", listing())
        resp = client.post(URL, json={"notebookName": "Sales"}, headers=HEADERS)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Notebook not found"}

    def test_upstream_listing_404(self, client, graph):
        graph.add("/v1.0/me/onenote/notebooks", httpx.Response(404, text="ResourceNotFound"))
        resp = client.post(URL, json={"notebookName": "Sales"}, headers=HEADERS)
        assert resp.status_code == 500
        assert "ResourceNotFound" in resp.json()["error"]

    def test_missing_configuration(self, client, graph):
        api.dependency_overrides[get_settings] = lambda: config.Settings(tenant_id="t", client_id="c")
        resp = client.post(URL, json={"notebookName": "Sales"}, headers=HEADERS)
        assert resp.status_code == 500
        assert graph.requests == []


class TestHealth:
    def test_health(self):
        resp = TestClient(api).get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestDependencies:
    def test_settings_read_once(self, monkeypatch):
        get_settings.cache_clear()
        monkeypatch.setenv("TENANT_ID", "first")
        first = get_settings()
        monkeypatch.setenv("TENANT_ID", "second")
        assert get_settings() is first
        get_settings.cache_clear()

    def test_exchanger_uses_settings(self, settings):
        exchanger = get_exchanger(settings)
        assert exchanger._settings is settings


IDENTITY_ENV = {"TENANT_ID": "tenant", "CLIENT_ID": "client", "CLIENT_SECRET": "secret"}


@pytest.fixture
def fresh_settings(monkeypatch):
    """Clear cached settings and identity variables around a test."""
    for name in (*IDENTITY_ENV, "MAX_RETRY_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
    api.dependency_overrides.clear()


class TestStartup:
    def test_missing_identity_values_warn_without_crashing(self, fresh_settings, caplog):
        with caplog.at_level(logging.WARNING, logger="onenote_sections.app"):
            with TestClient(api) as c:
                resp = c.get("/health")
        assert resp.status_code == 200
        assert "Missing configuration: TENANT_ID, CLIENT_ID, CLIENT_SECRET" in caplog.text

    def test_invalid_retry_ceiling_warns_without_crashing(self, fresh_settings, caplog):
        for name, value in IDENTITY_ENV.items():
            fresh_settings.setenv(name, value)
        fresh_settings.setenv("MAX_RETRY_ATTEMPTS", "abc")
        with caplog.at_level(logging.WARNING, logger="onenote_sections.app"):
            with TestClient(api) as c:
                resp = c.get("/health")
        assert resp.status_code == 200
        assert "Invalid configuration: MAX_RETRY_ATTEMPTS must be an integer" in caplog.text

    def test_invalid_retry_ceiling_answers_json_500(self, fresh_settings, graph, exchanger):
        for name, value in IDENTITY_ENV.items():
            fresh_settings.setenv(name, value)
        fresh_settings.setenv("MAX_RETRY_ATTEMPTS", "abc")

        async def http_client():
            async with httpx.AsyncClient(transport=graph.transport) as c:
                yield c

        api.dependency_overrides[get_http_client] = http_client
        api.dependency_overrides[get_exchanger] = lambda: exchanger
        with TestClient(api) as c:
            resp = c.post(URL, json={"notebookName": "Sales"}, headers=HEADERS)
        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        assert "MAX_RETRY_ATTEMPTS" in resp.json()["error"]
        assert graph.requests == []
        assert exchanger.calls == []
