"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Provider services
from ..adapters.elasticemail.client import create_elasticemail_client
from ..adapters.elasticemail.config import load_elasticemail_config_from_dict

# Logging services
from ..adapters.logging.setup import init_logging

# Static conformance assertions, checked by pyright only.
if TYPE_CHECKING:
    from ..adapters.memory.provider import ProviderSpy
    from ..application.ports import (
        CreateProviderClient,
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadElasticEmailConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_create_provider_client: CreateProviderClient = create_elasticemail_client
    _assert_load_elasticemail_config_from_dict: LoadElasticEmailConfigFromDict = load_elasticemail_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    load_elasticemail_config_from_dict: LoadElasticEmailConfigFromDict
    create_provider_client: CreateProviderClient
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        load_elasticemail_config_from_dict=load_elasticemail_config_from_dict,
        create_provider_client=create_elasticemail_client,
        init_logging=init_logging,
    )


def build_testing(*, spy: ProviderSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: ProviderSpy that stands in for the Elastic Email client. A fresh
            one is created when omitted; pass your own to assert on the
            payloads a command sent.
    """
    from ..adapters.memory import (
        ProviderSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_elasticemail_config_from_dict_in_memory,
    )

    provider_spy = spy if spy is not None else ProviderSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        load_elasticemail_config_from_dict=load_elasticemail_config_from_dict_in_memory,
        create_provider_client=provider_spy.create_client,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "display_config",
    "get_config",
    # Provider
    "create_elasticemail_client",
    "load_elasticemail_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
