"""Domain layer - pure message translation with no I/O or framework dependencies.

Contains the value objects, events, and translation functions that turn an
``EmailMessage`` into the provider's transactional payload.

Contents:
    * :mod:`.models` - Payload value objects and address formatting
    * :mod:`.translation` - Message-to-payload translation functions
    * :mod:`.events` - Send events and the listener dispatcher
    * :mod:`.enums` - Domain enumerations
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import BodyContentType, OutputFormat, SendPhase, SendResult
from .errors import ConfigurationError, InvalidMessageError, ProviderSendError
from .events import EventDispatcher, SendEvent, SendListener
from .models import (
    Address,
    Attachment,
    BodyPart,
    EmailContent,
    OutboundPayload,
    SendOutcome,
    SendReceipt,
    TransactionalRecipients,
    format_address,
)
from .translation import (
    HEADERS_TO_BYPASS,
    build_payload,
    build_recipients,
    project_attachments,
    project_headers,
    read_addresses,
    resolve_body,
)

__all__ = [
    # Models
    "Address",
    "Attachment",
    "BodyPart",
    "EmailContent",
    "OutboundPayload",
    "SendOutcome",
    "SendReceipt",
    "TransactionalRecipients",
    "format_address",
    # Translation
    "HEADERS_TO_BYPASS",
    "build_payload",
    "build_recipients",
    "project_attachments",
    "project_headers",
    "read_addresses",
    "resolve_body",
    # Events
    "EventDispatcher",
    "SendEvent",
    "SendListener",
    # Enums
    "BodyContentType",
    "OutputFormat",
    "SendPhase",
    "SendResult",
    # Errors
    "ConfigurationError",
    "InvalidMessageError",
    "ProviderSendError",
]
