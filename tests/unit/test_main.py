"""
Unit tests for backend/main.py
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from unittest.mock import patch

from api.deps import get_settings as deps_get_settings
from backend.main import create_app, _init_sentry, _configure_cors, _log_store_config
from backend.settings import Settings, get_settings


def _configured_settings(**overrides):
    values = dict(
        environment="test",
        github_token="ghp_test",
        github_owner="acme",
        github_repo="fitness-data",
        file_path="data/exercises.json",
        _env_file=None,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.mark.unit
class TestCreateApp:
    """Test the create_app() factory function."""

    def test_create_app_returns_fastapi_instance(self):
        """create_app() should return a FastAPI application instance."""
        settings = Settings(environment="test", _env_file=None)
        app = create_app(settings=settings)
        assert isinstance(app, FastAPI)

    def test_create_app_uses_default_settings_when_none_provided(self):
        """create_app() should use get_settings() when no settings provided."""
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_settings = Settings(environment="test", _env_file=None)
            mock_get_settings.return_value = mock_settings

            app = create_app(settings=None)

            mock_get_settings.assert_called_once()
            assert isinstance(app, FastAPI)

    def test_create_app_configures_app_metadata(self):
        """create_app() should configure app title and version."""
        settings = Settings(environment="test", _env_file=None)
        app = create_app(settings=settings)

        assert app.title == "Exercise Catalog Editor"
        assert app.version == "1.0.0"

    def test_create_app_registers_catalog_routes(self):
        """Catalog routes answer 503 without GitHub config; unknown paths 404."""
        settings = Settings(environment="test", github_token=None, _env_file=None)
        app = create_app(settings=settings)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[deps_get_settings] = lambda: settings
        client = TestClient(app)

        assert client.get("/api/exercises").status_code == 503
        assert client.post("/save-exercise", data={}).status_code == 503
        assert client.get("/health").status_code == 200
        assert client.get("/api/unknown").status_code == 404


@pytest.mark.unit
class TestInitSentry:
    """Test Sentry initialization."""

    def test_init_sentry_skipped_when_no_dsn(self):
        """Sentry should not be initialized when DSN is not set."""
        settings = Settings(sentry_dsn=None, _env_file=None)

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_not_called()

    def test_init_sentry_called_when_dsn_provided(self):
        """Sentry should be initialized when DSN is provided."""
        settings = Settings(
            sentry_dsn="https://test@sentry.io/123",
            environment="test",
            _env_file=None
        )

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once_with(
                dsn="https://test@sentry.io/123",
                environment="test",
                traces_sample_rate=0.1,
            )


@pytest.mark.unit
class TestConfigureCors:
    """Test CORS configuration."""

    def test_configure_cors_adds_middleware(self):
        """_configure_cors should add CORS middleware to the app."""
        app = FastAPI()
        initial_middleware_count = len(app.user_middleware)

        _configure_cors(app, Settings(_env_file=None))

        assert len(app.user_middleware) == initial_middleware_count + 1

    def test_configure_cors_includes_extra_origins(self):
        app = FastAPI()
        _configure_cors(app, Settings(cors_allowed_origins="https://editor.example", _env_file=None))

        origins = app.user_middleware[-1].kwargs["allow_origins"]
        assert "https://editor.example" in origins
        assert "http://localhost:3000" in origins


@pytest.mark.unit
class TestLogStoreConfig:
    """Test store configuration logging."""

    def test_logs_target_when_configured(self, caplog):
        with caplog.at_level("INFO"):
            _log_store_config(_configured_settings(commit_branch="catalog"))

        assert "acme/fitness-data:data/exercises.json@catalog" in caplog.text

    def test_warns_when_not_configured(self, caplog):
        settings = Settings(environment="test", github_token=None, _env_file=None)

        with caplog.at_level("WARNING"):
            _log_store_config(settings)

        assert "GitHub store not configured" in caplog.text


@pytest.mark.integration
class TestAppIntegration:
    """Integration tests for the created app."""

    def test_health_endpoint(self):
        """Created app should answer the health check."""
        settings = _configured_settings()
        app = create_app(settings=settings)
        app.dependency_overrides[get_settings] = lambda: settings

        client = TestClient(app)
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "store_configured": True}

    def test_editor_page_served_at_root(self):
        """The editor UI is served from the site root."""
        app = create_app(settings=Settings(environment="test", _env_file=None))

        client = TestClient(app)
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert 'action="/save-exercise"' in response.text

    def test_cors_allows_requests(self):
        """CORS should allow cross-origin requests."""
        settings = _configured_settings()
        app = create_app(settings=settings)
        app.dependency_overrides[get_settings] = lambda: settings

        client = TestClient(app)
        response = client.get(
            "/health",
            headers={"Origin": "http://localhost:3000"}
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


@pytest.mark.unit
class TestMultipleAppInstances:
    """Test that multiple app instances can be created."""

    def test_create_multiple_independent_apps(self):
        """Should be able to create multiple independent app instances."""
        app1 = create_app(settings=Settings(environment="test", _env_file=None))
        app2 = create_app(settings=Settings(environment="production", _env_file=None))

        assert app1 is not app2
        assert isinstance(app1, FastAPI)
        assert isinstance(app2, FastAPI)
