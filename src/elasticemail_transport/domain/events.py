"""Send events and the observer list that delivers them to listeners.

A listener is any object exposing ``before_send_performed(event)`` and/or
``send_performed(event)``. Listeners are notified synchronously in the
order they were registered; a listener lacking the method for a phase is
skipped for that phase.

Contents:
    * :class:`SendEvent` - Mutable event shared by all listeners of one send.
    * :class:`SendListener` - Structural type of a full listener.
    * :class:`EventDispatcher` - Observer list creating and dispatching events.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from email.message import EmailMessage
from typing import Any, Protocol

from .enums import SendPhase, SendResult

logger = logging.getLogger(__name__)


class SendEvent:
    """State shared between the transport and its listeners for one send.

    Listeners may cancel the send during ``beforeSendPerformed``; the
    transport fills in ``result`` and ``failed_recipients`` before
    ``sendPerformed``.

    Example:
        >>> event = SendEvent(source=None, message=EmailMessage())
        >>> event.result
        <SendResult.PENDING: 'pending'>
        >>> event.cancel_bubble()
        >>> event.bubble_cancelled
        True
    """

    def __init__(self, *, source: Any, message: EmailMessage) -> None:
        self.source = source
        self.message = message
        self.result = SendResult.PENDING
        self.failed_recipients: tuple[str, ...] = ()
        self._bubble_cancelled = False

    @property
    def bubble_cancelled(self) -> bool:
        """Whether a listener asked to stop the send."""
        return self._bubble_cancelled

    def cancel_bubble(self, cancel: bool = True) -> None:
        """Mark the event cancelled (or un-cancel it with ``cancel=False``)."""
        self._bubble_cancelled = cancel

    def set_result(self, result: SendResult) -> None:
        self.result = result

    def set_failed_recipients(self, recipients: Sequence[str]) -> None:
        self.failed_recipients = tuple(recipients)


class SendListener(Protocol):
    """A listener interested in both send phases."""

    def before_send_performed(self, event: SendEvent) -> None: ...

    def send_performed(self, event: SendEvent) -> None: ...


class EventDispatcher:
    """Plain observer list for send events.

    Example:
        >>> class Veto:
        ...     def before_send_performed(self, event):
        ...         event.cancel_bubble()
        >>> dispatcher = EventDispatcher()
        >>> dispatcher.register(Veto())
        >>> event = dispatcher.create_send_event(None, EmailMessage())
        >>> dispatcher.notify(SendPhase.BEFORE_SEND_PERFORMED, event)
        >>> event.bubble_cancelled
        True
    """

    def __init__(self) -> None:
        self._listeners: list[object] = []

    @property
    def listeners(self) -> tuple[object, ...]:
        return tuple(self._listeners)

    def register(self, listener: object) -> None:
        """Append *listener*; registering the same object twice is a no-op."""
        if any(existing is listener for existing in self._listeners):
            return
        self._listeners.append(listener)

    def create_send_event(self, source: Any, message: EmailMessage) -> SendEvent | None:
        """Return a fresh event for one send of *message* by *source*."""
        return SendEvent(source=source, message=message)

    def notify(self, phase: SendPhase, event: SendEvent) -> None:
        """Call each listener's handler for *phase* in registration order.

        Dispatch stops at the first listener that leaves the event cancelled.
        """
        for listener in tuple(self._listeners):
            handler = getattr(listener, phase.handler_name, None)
            if not callable(handler):
                continue
            handler(event)
            if event.bubble_cancelled:
                logger.debug(
                    "Send event cancelled by listener",
                    extra={"phase": phase.value, "listener": type(listener).__name__},
                )
                break


__all__ = [
    "EventDispatcher",
    "SendEvent",
    "SendListener",
]
