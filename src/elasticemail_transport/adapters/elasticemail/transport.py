"""Mail transport sending ``EmailMessage`` objects through Elastic Email.

Provides :class:`ElasticEmailTransport`, which runs one send as a strict
pipeline: listener veto and recipient guard, payload translation, a single
provider call, then outcome reporting through the return value and the
``sendPerformed`` event.

Provider failures never escape :meth:`ElasticEmailTransport.send`; they are
reported as a FAILED outcome in which every ``To`` recipient failed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from email.message import EmailMessage

from elasticemail_transport.application.ports import TransactionalEmailClient
from elasticemail_transport.domain.enums import SendPhase, SendResult
from elasticemail_transport.domain.errors import InvalidMessageError
from elasticemail_transport.domain.events import EventDispatcher
from elasticemail_transport.domain.models import OutboundPayload, SendOutcome, SendReceipt
from elasticemail_transport.domain.translation import build_payload, read_addresses

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProviderAccepted:
    """The provider took the whole transactional send."""

    receipt: SendReceipt


@dataclass(frozen=True, slots=True)
class ProviderRejected:
    """The provider call raised; the whole ``To`` list counts as failed."""

    error: Exception


ProviderResult = ProviderAccepted | ProviderRejected


class ElasticEmailTransport:
    """Transport delivering messages through a transactional-send client.

    The transport has no connection lifecycle of its own: it is always
    started and always answers pings. Both collaborators belong to the
    caller and are never closed here.

    Args:
        client: Provider capability performing the actual send.
        dispatcher: Observer list notified before and after each send. A
            private dispatcher is created when omitted.

    Example:
        >>> from elasticemail_transport.adapters.memory import ProviderSpy
        >>> spy = ProviderSpy()
        >>> transport = ElasticEmailTransport(client=spy)
        >>> msg = EmailMessage()
        >>> msg["From"] = "shop@example.com"
        >>> msg["To"] = "Ann <ann@example.com>, bob@example.com"
        >>> msg.set_content("Your order shipped.")
        >>> transport.send(msg).accepted
        2
        >>> spy.payloads[0].to
        ('Ann <ann@example.com>', 'bob@example.com')
    """

    def __init__(self, *, client: TransactionalEmailClient, dispatcher: EventDispatcher | None = None) -> None:
        self._client = client
        self._dispatcher = dispatcher if dispatcher is not None else EventDispatcher()

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    def is_started(self) -> bool:
        return True

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def ping(self) -> bool:
        return True

    def register_plugin(self, listener: object) -> None:
        """Register a send listener with the event dispatcher."""
        self._dispatcher.register(listener)

    def send(self, message: EmailMessage, failed_recipients: Sequence[str] = ()) -> SendOutcome:
        """Send *message* with exactly one provider call.

        Args:
            message: Message to deliver; only read, never modified.
            failed_recipients: Failed recipients already known to the caller.
                Returned unchanged when the send is cancelled or succeeds.

        Returns:
            Accepted ``To`` count, failed recipients, and final status. A
            cancelled send accepts 0 and keeps status ``PENDING``.

        Raises:
            InvalidMessageError: When the message has no ``To`` recipient.
        """
        failed = tuple(failed_recipients)

        event = self._dispatcher.create_send_event(self, message)
        if event is not None:
            self._dispatcher.notify(SendPhase.BEFORE_SEND_PERFORMED, event)
            if event.bubble_cancelled:
                logger.info("Send cancelled by listener", extra={"subject": str(message.get("Subject", ""))})
                return SendOutcome(accepted=0, failed_recipients=failed)

        if not read_addresses(message, "To"):
            raise InvalidMessageError("Cannot send message without a recipient")

        payload = build_payload(message)
        sent = len(payload.to)

        logger.info(
            "Sending message via Elastic Email",
            extra={
                "recipients": list(payload.to),
                "subject": payload.content.subject,
                "attachment_count": len(payload.content.attachments),
            },
        )

        result = self._invoke(payload)
        if isinstance(result, ProviderAccepted):
            status = SendResult.SUCCESS
            logger.info(
                "Message sent successfully",
                extra={"recipients": list(payload.to), "transaction_id": result.receipt.transaction_id},
            )
        else:
            failed = payload.to
            sent = 0
            status = SendResult.FAILED
            logger.warning(
                "Elastic Email send failed",
                extra={"recipients": list(failed), "error": str(result.error), "error_type": type(result.error).__name__},
            )

        if event is not None:
            event.set_result(status)
            event.set_failed_recipients(failed)
            self._dispatcher.notify(SendPhase.SEND_PERFORMED, event)

        return SendOutcome(accepted=sent, failed_recipients=failed, status=status)

    def _invoke(self, payload: OutboundPayload) -> ProviderResult:
        """Call the provider once and capture the outcome as a value."""
        try:
            receipt = self._client.emails_transactional_post(payload)
        except Exception as exc:
            # Any client failure means nothing was delivered.
            logger.debug("Provider call raised", exc_info=True)
            return ProviderRejected(exc)
        return ProviderAccepted(receipt)


__all__ = [
    "ElasticEmailTransport",
    "ProviderAccepted",
    "ProviderRejected",
    "ProviderResult",
]
