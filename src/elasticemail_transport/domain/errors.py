"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from elasticemail_transport.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No Elastic Email API key configured")
        >>> str(err)
        'No Elastic Email API key configured'
    """


class InvalidMessageError(ValueError):
    """The message cannot be sent as composed.

    Raised synchronously, before any network interaction, when the message
    lacks a ``To`` recipient. Inherits from ValueError so callers validating
    input with ``except ValueError`` keep catching it.

    Example:
        >>> from elasticemail_transport.domain.errors import InvalidMessageError
        >>> err = InvalidMessageError("Cannot send message without a recipient")
        >>> isinstance(err, ValueError)
        True
    """


class ProviderSendError(Exception):
    """The provider rejected or failed to accept a transactional send.

    Raised by provider clients for HTTP error statuses and transport-level
    failures. The transport converts it into a FAILED outcome and never
    re-raises it to the caller.

    Attributes:
        status_code: HTTP status returned by the provider, or None when the
            request never produced a response.

    Example:
        >>> err = ProviderSendError("Unauthorized", status_code=401)
        >>> str(err), err.status_code
        ('Unauthorized', 401)
        >>> ProviderSendError("Connection refused").status_code is None
        True
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "ConfigurationError",
    "InvalidMessageError",
    "ProviderSendError",
]
