"""Elastic Email adapter - transactional sends over the provider's HTTP API.

Structure:
    * :mod:`.config` - Provider configuration model and loader
    * :mod:`.wire` - OutboundPayload to JSON request mapping
    * :mod:`.client` - httpx client for ``POST /emails/transactional``
    * :mod:`.transport` - The mail transport sending ``EmailMessage`` objects

Contents:
    * :class:`.transport.ElasticEmailTransport` - Primary sending interface
    * :class:`.client.ElasticEmailClient` - Provider HTTP client
    * :class:`.config.ElasticEmailConfig` - Provider configuration container
    * :func:`.config.load_elasticemail_config_from_dict` - Config dict loader
"""

from __future__ import annotations

from .client import ElasticEmailClient, create_elasticemail_client
from .config import ElasticEmailConfig, load_elasticemail_config_from_dict
from .transport import ElasticEmailTransport, ProviderAccepted, ProviderRejected, ProviderResult
from .wire import encode_payload, payload_to_wire

__all__ = [
    "ElasticEmailClient",
    "ElasticEmailConfig",
    "ElasticEmailTransport",
    "ProviderAccepted",
    "ProviderRejected",
    "ProviderResult",
    "create_elasticemail_client",
    "encode_payload",
    "load_elasticemail_config_from_dict",
    "payload_to_wire",
]
