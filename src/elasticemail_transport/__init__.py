"""Send ``email.message.EmailMessage`` objects through Elastic Email.

The public surface routes imports through the architectural layers:

- Domain exports: send events, the dispatcher, results, and errors
- Adapter exports: the transport, the HTTP client, and its configuration
- Composition exports: wired configuration loading
- Metadata: package information
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .adapters.elasticemail import (
    ElasticEmailClient,
    ElasticEmailConfig,
    ElasticEmailTransport,
    load_elasticemail_config_from_dict,
)
from .composition import get_config
from .domain.enums import SendResult
from .domain.errors import ConfigurationError, InvalidMessageError, ProviderSendError
from .domain.events import EventDispatcher, SendEvent, SendListener
from .domain.models import SendOutcome

__all__ = [
    "ConfigurationError",
    "ElasticEmailClient",
    "ElasticEmailConfig",
    "ElasticEmailTransport",
    "EventDispatcher",
    "InvalidMessageError",
    "ProviderSendError",
    "SendEvent",
    "SendListener",
    "SendOutcome",
    "SendResult",
    "get_config",
    "load_elasticemail_config_from_dict",
    "print_info",
]
