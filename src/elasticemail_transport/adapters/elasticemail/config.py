"""Elastic Email configuration model and loader.

Provides the ElasticEmailConfig Pydantic model for validated, immutable
provider settings and the loader function to create it from configuration
dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_BASE_URL = "https://api.elasticemail.com/v4"


class ElasticEmailConfig(BaseModel):
    """Validated, immutable Elastic Email settings.

    Example:
        >>> config = ElasticEmailConfig(
        ...     api_key="secret",
        ...     from_address="noreply@example.com"
        ... )
        >>> config.base_url
        'https://api.elasticemail.com/v4'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    from_address: str | None = None
    recipients: list[str] = Field(default_factory=list)

    @field_validator("recipients", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings to single-element lists.

        Handles environment variables and .env files that provide single strings
        instead of TOML arrays. Empty strings become empty lists.

        Examples:
            >>> ElasticEmailConfig._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> ElasticEmailConfig._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return cast(list[str], v)
        return []

    @field_validator("api_key", "from_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" so an
        unset key never reaches the provider as an empty credential.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _validate_config(self) -> ElasticEmailConfig:
        """Validate configuration values.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> ElasticEmailConfig(timeout=-5.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if not self.base_url.startswith(("https://", "http://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")

        if self.from_address is not None:
            validate_email_address(self.from_address)

        for recipient in self.recipients:
            validate_email_address(recipient)

        return self

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = ElasticEmailConfig(api_key="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"ElasticEmailConfig({', '.join(fields)})"


def load_elasticemail_config_from_dict(config_dict: Mapping[str, Any]) -> ElasticEmailConfig:
    """Load ElasticEmailConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed model.
    Single-parse validation at the boundary with no intermediate conversions.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have an 'elasticemail' section.

    Returns:
        Configured provider settings with defaults for missing values.

    Example:
        >>> config = load_elasticemail_config_from_dict(
        ...     {"elasticemail": {"api_key": "k", "from_address": "a@example.com"}}
        ... )
        >>> config.from_address
        'a@example.com'
        >>> load_elasticemail_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("elasticemail", {})

    # Non-mapping sections (e.g. "elasticemail": "invalid") fail validation
    if not isinstance(section, Mapping):
        return ElasticEmailConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return ElasticEmailConfig.model_validate(raw)


__all__ = [
    "DEFAULT_BASE_URL",
    "ElasticEmailConfig",
    "load_elasticemail_config_from_dict",
]
