"""Tests for settings loading and application wiring."""

import logging

import pytest

from devices_api.core.config import Settings, get_settings
from devices_api.core.logging import configure_logging
from devices_api.main import create_app


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.api_prefix == "/device-service/v1"
        assert settings.pagination.default_size == 10
        assert settings.database_url.startswith("sqlite+aiosqlite://")

    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")
        monkeypatch.setenv("PAGINATION__MAX_SIZE", "25")
        monkeypatch.setenv("LOGGING__LEVEL", "warning")

        settings = Settings()

        assert settings.database_url == "sqlite+aiosqlite:///./other.db"
        assert settings.pagination.max_size == 25
        assert settings.log_level == "WARNING"

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestLogging:
    def test_configure_sets_package_level(self) -> None:
        configure_logging(Settings(logging={"level": "warning"}))

        assert logging.getLogger("devices_api").level == logging.WARNING

    def test_debug_forces_debug_level(self) -> None:
        configure_logging(Settings(debug=True))

        assert logging.getLogger("devices_api").level == logging.DEBUG


class TestApplication:
    def test_routes_mounted_under_prefix(self) -> None:
        paths = create_app().openapi()["paths"]

        assert set(paths["/device-service/v1/devices"]) == {"get", "post"}
        assert set(paths["/device-service/v1/devices/{device_id}"]) == {"get", "patch", "delete"}

    def test_device_path_resolves_by_endpoint_name(self) -> None:
        app = create_app()

        assert app.url_path_for("get_device", device_id=1) == "/device-service/v1/devices/1"

    def test_state_filter_documents_each_state(self) -> None:
        parameters = create_app().openapi()["paths"]["/device-service/v1/devices"]["get"]["parameters"]
        state = next(parameter for parameter in parameters if parameter["name"] == "state")

        assert "IN_USE: Device is currently being used" in state["description"]
