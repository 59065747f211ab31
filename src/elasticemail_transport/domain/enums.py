"""Type-safe domain enums for body content, send results, and event phases."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class BodyContentType(str, Enum):
    """Kind of a message body part as understood by the provider.

    Values are the provider's wire names.

    Example:
        >>> BodyContentType.PLAIN_TEXT.value
        'PlainText'
        >>> BodyContentType.HTML == "HTML"
        True
    """

    HTML = "HTML"
    PLAIN_TEXT = "PlainText"


class SendResult(str, Enum):
    """Outcome recorded on a send event.

    ``PENDING`` is the state of a freshly created event; the transport only
    ever sets ``SUCCESS`` or ``FAILED``. ``TENTATIVE`` exists for listeners
    and transports that accept part of a recipient list.

    Example:
        >>> SendResult.SUCCESS.value
        'success'
    """

    PENDING = "pending"
    SUCCESS = "success"
    TENTATIVE = "tentative"
    FAILED = "failed"


class SendPhase(str, Enum):
    """Phases at which send listeners are notified.

    Example:
        >>> SendPhase.BEFORE_SEND_PERFORMED.value
        'beforeSendPerformed'
        >>> SendPhase.SEND_PERFORMED.handler_name
        'send_performed'
    """

    BEFORE_SEND_PERFORMED = "beforeSendPerformed"
    SEND_PERFORMED = "sendPerformed"

    @property
    def handler_name(self) -> str:
        """Name of the listener method invoked for this phase."""
        return _HANDLER_NAMES[self]


_HANDLER_NAMES: dict[SendPhase, str] = {
    SendPhase.BEFORE_SEND_PERFORMED: "before_send_performed",
    SendPhase.SEND_PERFORMED: "send_performed",
}


__all__ = [
    "BodyContentType",
    "OutputFormat",
    "SendPhase",
    "SendResult",
]
