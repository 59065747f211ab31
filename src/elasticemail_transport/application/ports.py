"""Application ports: Protocol definitions for adapter functions and clients.

Callable ports define a ``__call__`` method whose signature exactly matches
the corresponding adapter function, so module-level functions satisfy them
via structural subtyping (PEP 544). :class:`TransactionalEmailClient` is the
one object port: the provider capability the transport sends through.

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``ElasticEmailConfig``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.models import OutboundPayload, SendReceipt

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.elasticemail.config import ElasticEmailConfig


class TransactionalEmailClient(Protocol):
    """Provider capability: deliver one transactional payload or raise."""

    def emails_transactional_post(self, payload: OutboundPayload) -> SendReceipt: ...


class ClosableEmailClient(TransactionalEmailClient, Protocol):
    """A provider client whose connections the caller releases with ``close``."""

    def close(self) -> None: ...


class CreateProviderClient(Protocol):
    """Build a provider client from validated provider settings."""

    def __call__(self, config: ElasticEmailConfig) -> ClosableEmailClient: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadElasticEmailConfigFromDict(Protocol):
    """Load ElasticEmailConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> ElasticEmailConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "ClosableEmailClient",
    "CreateProviderClient",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadElasticEmailConfigFromDict",
    "TransactionalEmailClient",
]
