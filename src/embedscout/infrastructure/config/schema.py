"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_CONFIG

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

_SITE = DEFAULT_CONFIG["site"]
_HTTP = DEFAULT_CONFIG["http"]
_LOGGING = DEFAULT_CONFIG["logging"]


def _normalize_origin(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected URL string, got: {type(value)!r}")
    value = value.strip().rstrip("/")
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"URL must start with http:// or https://: {value!r}")
    return value


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (site/http/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(
        default=DEFAULT_CONFIG["app_name"], description="Application name."
    )
    environment: Environment = Field(
        default=DEFAULT_CONFIG["environment"],
        description="Runtime environment (affects defaults like log format).",
    )

    # Embed site (YAML section: site.*)
    embed_site_url: str = Field(
        default=_SITE["embed_url"],
        validation_alias=AliasChoices(
            "embed_site_url",
            AliasPath("site", "embed_url"),
        ),
        description="Origin serving /embed/{movie,tv} pages.",
    )
    default_base_domain: str = Field(
        default=_SITE["default_base_domain"],
        validation_alias=AliasChoices(
            "default_base_domain",
            AliasPath("site", "default_base_domain"),
        ),
        description="Player origin used when the embed iframe gives none.",
    )
    redirect_prefix: str = Field(
        default=_SITE["redirect_prefix"],
        validation_alias=AliasChoices(
            "redirect_prefix",
            AliasPath("site", "redirect_prefix"),
        ),
        description="Path prefix of pro-redirect pages.",
    )
    decoy_scripts: list[str] = Field(
        default_factory=lambda: list(_SITE["decoy_scripts"]),
        validation_alias=AliasChoices(
            "decoy_scripts",
            AliasPath("site", "decoy_scripts"),
        ),
        description="Script names skipped when picking the key-bearing script.",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=_HTTP["timeout_seconds"],
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds per request.",
    )
    http_follow_redirects: bool = Field(
        default=_HTTP["follow_redirects"],
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default=_HTTP["user_agent"],
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default=_LOGGING["level"],
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("embed_site_url", "default_base_domain", mode="before")
    @classmethod
    def _validate_origins(cls, v: Any) -> str:
        return _normalize_origin(v)

    @field_validator("redirect_prefix")
    @classmethod
    def _validate_prefix(cls, v: str) -> str:
        if not (v.startswith("/") and v.endswith("/")) or len(v) < 3:
            raise ValueError("redirect_prefix must look like '/name/'")
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "site": {
                "embed_url": self.embed_site_url,
                "default_base_domain": self.default_base_domain,
                "redirect_prefix": self.redirect_prefix,
                "decoy_scripts": list(self.decoy_scripts),
            },
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read EMBEDSCOUT_* variables, converts
    them to a dict of set values and merges that over YAML/defaults before
    AppConfig validation.

    Supported env var examples (flat, explicit):
    - EMBEDSCOUT_EMBED_SITE_URL
    - EMBEDSCOUT_DEFAULT_BASE_DOMAIN
    - EMBEDSCOUT_HTTP_TIMEOUT_SECONDS
    - EMBEDSCOUT_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="EMBEDSCOUT_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    embed_site_url: Optional[str] = None
    default_base_domain: Optional[str] = None
    redirect_prefix: Optional[str] = None
    decoy_scripts: Optional[list[str]] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
