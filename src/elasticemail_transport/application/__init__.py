"""Application layer - port definitions.

Contains the Protocol definitions that adapter implementations satisfy.

Contents:
    * :mod:`.ports` - Callable and client Protocol definitions
"""

from __future__ import annotations

from .ports import (
    ClosableEmailClient,
    CreateProviderClient,
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadElasticEmailConfigFromDict,
    TransactionalEmailClient,
)

__all__ = [
    "ClosableEmailClient",
    "CreateProviderClient",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadElasticEmailConfigFromDict",
    "TransactionalEmailClient",
]
