"""FastAPI application fixtures."""

import pytest
from fastapi.testclient import TestClient

from qto.application.services.session_service import issue_session_token
from qto.config import get_settings
from qto.infrastructure.database import get_db
from qto.main import app


@pytest.fixture
def client(session_factory):
    """Test client bound to the per-test database. Lifespan is not run."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    test_client = TestClient(app, follow_redirects=False)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client):
    """Put a valid session cookie for the given actor on the test client."""

    def _login_as(actor):
        client.cookies.set(get_settings().SESSION_COOKIE_NAME, issue_session_token(actor))
        return client

    return _login_as
