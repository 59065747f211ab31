"""Value objects for the provider-facing transactional payload.

Every object is frozen and built fresh per send call; nothing here is
cached or shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import BodyContentType, SendResult


@dataclass(frozen=True, slots=True)
class Address:
    """An email address with an optional display name.

    Example:
        >>> Address("ann@example.com", "Ann").format()
        'Ann <ann@example.com>'
        >>> Address("ann@example.com").format()
        'ann@example.com'
    """

    email: str
    name: str | None = None

    def format(self) -> str:
        """Render the address for transmission."""
        return format_address(self.email, self.name)


def format_address(email: str, name: str | None = None) -> str:
    """Return ``"Name <email>"`` when *name* is non-empty, else *email*.

    Example:
        >>> format_address("a@x.com", "")
        'a@x.com'
        >>> format_address("a@x.com", "Ann")
        'Ann <a@x.com>'
    """
    if name:
        return f"{name} <{email}>"
    return email


@dataclass(frozen=True, slots=True)
class BodyPart:
    """One body of the message, either HTML or plain text."""

    content_type: BodyContentType
    content: str


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attachment carried verbatim to the provider."""

    name: str | None
    content_type: str
    binary_content: bytes


@dataclass(frozen=True, slots=True)
class TransactionalRecipients:
    """Formatted recipients by role; an empty role is ``None``, never ``()``."""

    to: tuple[str, ...] | None = None
    cc: tuple[str, ...] | None = None
    bcc: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class EmailContent:
    """Content block of a transactional message."""

    from_: str
    subject: str | None = None
    reply_to: str | None = None
    body: tuple[BodyPart, ...] = ()
    headers: dict[str, str] = field(default_factory=dict)
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True, slots=True)
class OutboundPayload:
    """The translated request handed to the provider client."""

    recipients: TransactionalRecipients
    content: EmailContent

    @property
    def to(self) -> tuple[str, ...]:
        """Formatted ``To`` recipients, empty when the role is absent."""
        return self.recipients.to or ()


@dataclass(frozen=True, slots=True)
class SendReceipt:
    """Identifiers the provider returns for an accepted send."""

    transaction_id: str | None = None
    message_id: str | None = None


@dataclass(frozen=True, slots=True)
class SendOutcome:
    """What a single ``send`` call achieved.

    Attributes:
        accepted: Number of ``To`` recipients the provider accepted.
        failed_recipients: Recipients reported as failed.
        status: Final result; ``PENDING`` when a listener cancelled the send.
    """

    accepted: int
    failed_recipients: tuple[str, ...] = ()
    status: SendResult = SendResult.PENDING


__all__ = [
    "Address",
    "Attachment",
    "BodyPart",
    "EmailContent",
    "OutboundPayload",
    "SendOutcome",
    "SendReceipt",
    "TransactionalRecipients",
    "format_address",
]
