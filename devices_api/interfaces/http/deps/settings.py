"""Settings dependency, overridable in tests."""

from devices_api.core.config import Settings, get_settings


def get_app_settings() -> Settings:
    return get_settings()


__all__ = ["get_app_settings"]
