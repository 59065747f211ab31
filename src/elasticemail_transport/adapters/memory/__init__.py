"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.provider` - In-memory provider client (ProviderSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    load_elasticemail_config_from_dict_in_memory,
)
from .logging import init_logging_in_memory
from .provider import ProviderSpy

# Static conformance assertions
if TYPE_CHECKING:
    from elasticemail_transport.application.ports import (
        CreateProviderClient,
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadElasticEmailConfigFromDict,
        TransactionalEmailClient,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_config: LoadElasticEmailConfigFromDict = load_elasticemail_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_client: TransactionalEmailClient = ProviderSpy()
    _assert_create_client: CreateProviderClient = ProviderSpy().create_client

__all__ = [
    "ProviderSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_elasticemail_config_from_dict_in_memory",
]
