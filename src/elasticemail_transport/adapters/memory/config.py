"""In-memory configuration adapters for testing.

Provides configuration functions that satisfy the same Protocols as
production adapters but operate entirely in memory -- no filesystem,
no lib_layered_config file discovery.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_layered_config import Config

from ...domain.enums import OutputFormat
from ..elasticemail.config import ElasticEmailConfig


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """No-op display -- satisfies the DisplayConfig protocol."""


def load_elasticemail_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> ElasticEmailConfig:
    """Parse provider config from dict using the real Pydantic model."""
    raw = config_dict.get("elasticemail", {})
    return ElasticEmailConfig.model_validate(raw if raw else {})


__all__ = [
    "display_config_in_memory",
    "get_config_in_memory",
    "load_elasticemail_config_from_dict_in_memory",
]
