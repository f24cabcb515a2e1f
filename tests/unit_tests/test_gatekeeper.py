"""Tests for the session gatekeeper middleware."""

from datetime import timedelta

import pytest

from qto.application.services.session_service import issue_session_token
from qto.config import get_settings
from qto.core.middleware import is_protected_path, is_public_path

COOKIE = get_settings().SESSION_COOKIE_NAME


def _cleared_cookie(response) -> bool:
    header = response.headers.get("set-cookie", "")
    return header.startswith(f"{COOKIE}=") and "Max-Age=0" in header


class TestPathClassification:
    @pytest.mark.parametrize(
        "path",
        ["/", "/login", "/register", "/logout", "/session", "/health", "/docs", "/openapi.json", "/static/app.css", "/images/logo.png"],
    )
    def test_public(self, path):
        assert is_public_path(path)

    @pytest.mark.parametrize("path", ["/projects", "/projects/3", "/projects/3/items", "/projects/items/9"])
    def test_protected(self, path):
        assert is_protected_path(path)
        assert not is_public_path(path)

    def test_prefix_lookalike_is_not_protected(self):
        assert not is_protected_path("/projectsarchive")


class TestAnonymous:
    def test_public_paths_pass(self, client):
        assert client.get("/health").status_code == 200
        assert client.get("/").status_code == 200
        assert client.get("/login").status_code == 200

    def test_protected_path_redirects_to_login(self, client):
        response = client.get("/projects")

        assert response.status_code == 303
        assert response.headers["location"] == "/login?redirected=true"

    def test_write_to_protected_path_redirects(self, client):
        response = client.post("/projects", json={"project_name": "Sneaky"})

        assert response.status_code == 303
        assert response.headers["location"] == "/login?redirected=true"

    def test_unknown_path_redirects_to_login(self, client):
        response = client.get("/admin/panel")

        assert response.status_code == 303
        assert response.headers["location"] == "/login?from=middleware"


class TestBadSession:
    def test_forged_token_on_protected_path(self, client):
        client.cookies.set(COOKIE, "not.a.token")

        response = client.get("/projects")

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert _cleared_cookie(response)

    def test_expired_token_on_protected_path(self, client, manager):
        client.cookies.set(COOKIE, issue_session_token(manager, expires_delta=timedelta(seconds=-5)))

        response = client.get("/projects/1")

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert _cleared_cookie(response)

    def test_bad_token_on_public_path_passes_and_clears(self, client):
        client.cookies.set(COOKIE, "garbage")

        response = client.get("/session")

        assert response.status_code == 200
        assert response.json()["is_logged_in"] is False
        assert _cleared_cookie(response)


class TestAuthenticated:
    def test_login_page_redirects_home(self, login_as, manager):
        client = login_as(manager)

        response = client.get("/login")

        assert response.status_code == 303
        assert response.headers["location"] == "/projects"

    def test_register_page_redirects_home(self, login_as, manager):
        response = login_as(manager).get("/register")

        assert response.status_code == 303
        assert response.headers["location"] == "/projects"

    def test_protected_path_served(self, login_as, manager):
        response = login_as(manager).get("/projects")

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_path_reaches_router(self, login_as, manager):
        assert login_as(manager).get("/admin/panel").status_code == 404
