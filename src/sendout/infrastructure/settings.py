"""Provider configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sendout.domain.errors import ConfigurationError

POSTMARK_API_URL = "https://api.postmarkapp.com"


class ServiceConfig(BaseSettings):
    """Configuration for one provider client.

    Tokens are ``SecretStr`` so they print as ``**********`` in reprs,
    tracebacks and logs. Read them with ``get_secret_value()`` only where a
    request header is built.
    """

    model_config = SettingsConfigDict(
        env_prefix="POSTMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    base_url: str = POSTMARK_API_URL
    server_token: SecretStr
    account_token: SecretStr | None = None

    # Must be a sender signature verified with the provider; used when a
    # message has no explicit sender.
    from_email: str

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value


def load_service_config(**overrides) -> ServiceConfig:
    """Build a ``ServiceConfig`` from the environment plus ``overrides``.

    Pydantic's own error echoes input values, so it is replaced by one that
    names the offending fields only.
    """
    try:
        return ServiceConfig(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) or "config" for err in e.errors()})
        raise ConfigurationError(f"invalid service configuration: {', '.join(fields)}") from None


@lru_cache
def get_settings() -> ServiceConfig:
    """Get cached settings instance."""
    return load_service_config()
