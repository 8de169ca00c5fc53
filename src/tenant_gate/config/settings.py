"""
Engine configuration for tenant-gate.

Settings are read once from the environment (prefix ``TENANT_GATE_``) or a
``.env`` file and injected into the services that need them.
"""
from functools import lru_cache
from typing import Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    AuthMethod,
    LockBackend,
    RoutePaths,
    SessionLifetime,
    SESSION_COOKIE_NAME,
)


class TenantGateSettings(BaseSettings):
    """Settings for the authorization and entitlement engine."""

    model_config = SettingsConfigDict(
        env_prefix="TENANT_GATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Session issuance
    session_ttl_password: int = Field(default=SessionLifetime.PASSWORD, gt=0)
    session_ttl_pin: int = Field(default=SessionLifetime.PIN, gt=0)
    session_ttl_oauth: int = Field(default=SessionLifetime.OAUTH, gt=0)
    session_token_bytes: int = Field(default=32, ge=16, le=128)
    session_cookie_name: str = Field(default=SESSION_COOKIE_NAME)

    # Per-tenant serialization of module enable/disable
    lock_backend: LockBackend = Field(default=LockBackend.MEMORY)

    # Redirect targets for rejected requests
    login_path: str = Field(default=RoutePaths.LOGIN)
    select_tenant_path: str = Field(default=RoutePaths.SELECT_TENANT)
    tenant_home_path: str = Field(default=RoutePaths.TENANT_HOME)

    # Logging
    log_verbosity: str = Field(default="NORMAL")
    log_format: str = Field(default="simple")

    @field_validator("tenant_home_path")
    @classmethod
    def _tenant_home_has_slug(cls, value: str) -> str:
        if "{slug}" not in value:
            raise ValueError("tenant_home_path must contain a '{slug}' placeholder")
        return value

    def session_lifetimes(self) -> Dict[AuthMethod, int]:
        """Session lifetime in seconds per authentication method."""
        return {
            AuthMethod.PASSWORD: self.session_ttl_password,
            AuthMethod.PIN: self.session_ttl_pin,
            AuthMethod.OAUTH: self.session_ttl_oauth,
        }

    def tenant_home(self, slug: str) -> str:
        """Route for a tenant's home page."""
        return self.tenant_home_path.format(slug=slug)


@lru_cache()
def get_settings() -> TenantGateSettings:
    """Get cached settings instance."""
    return TenantGateSettings()
