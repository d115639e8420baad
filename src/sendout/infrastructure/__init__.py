"""Infrastructure layer - provider clients and configuration."""

from sendout.infrastructure.settings import ServiceConfig, get_settings, load_service_config

__all__ = [
    "ServiceConfig",
    "get_settings",
    "load_service_config",
]
