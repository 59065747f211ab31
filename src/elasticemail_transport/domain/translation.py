"""Pure functions translating an ``EmailMessage`` into an OutboundPayload.

Messages are expected to use ``email.policy.default`` (the
``EmailMessage`` API). None of these functions modify the message; calling
them twice on the same message yields equal results.

Contents:
    * :func:`read_addresses` - Parse an address header into Address values.
    * :func:`build_recipients` - Formatted to/cc/bcc lists.
    * :func:`resolve_body` - At most one HTML and one plain-text body.
    * :func:`project_headers` - Custom headers outside the bypass set.
    * :func:`project_attachments` - File attachments in document order.
    * :func:`build_payload` - The complete provider request.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from email.message import EmailMessage
from email.utils import getaddresses

from .enums import BodyContentType
from .models import (
    Address,
    Attachment,
    BodyPart,
    EmailContent,
    OutboundPayload,
    TransactionalRecipients,
)

#: Header names represented structurally elsewhere in the payload.
HEADERS_TO_BYPASS: frozenset[str] = frozenset({"from", "to", "cc", "bcc", "subject", "content-type"})

_TEXT_PLAIN = "text/plain"
_TEXT_HTML = "text/html"


def read_addresses(message: EmailMessage, header: str) -> list[Address]:
    """Return the addresses of every *header* field, in order.

    Example:
        >>> msg = EmailMessage()
        >>> msg["To"] = "Ann <ann@example.com>, bob@example.com"
        >>> read_addresses(msg, "To")
        [Address(email='ann@example.com', name='Ann'), Address(email='bob@example.com', name=None)]
        >>> read_addresses(msg, "Cc")
        []
    """
    values = [str(value) for value in message.get_all(header, [])]
    return [Address(email, name or None) for name, email in getaddresses(values) if email]


def _formatted(message: EmailMessage, header: str) -> list[str]:
    return [address.format() for address in read_addresses(message, header)]


def _role(addresses: list[str]) -> tuple[str, ...] | None:
    return tuple(addresses) if addresses else None


def build_recipients(message: EmailMessage) -> TransactionalRecipients:
    """Collect formatted to/cc/bcc recipients; empty roles become ``None``."""
    return TransactionalRecipients(
        to=_role(_formatted(message, "To")),
        cc=_role(_formatted(message, "Cc")),
        bcc=_role(_formatted(message, "Bcc")),
    )


def _known_charset(charset: str | None) -> bool:
    if charset is None:
        return True
    try:
        codecs.lookup(charset)
    except LookupError:
        return False
    return True


def _text_of(part: EmailMessage) -> str | None:
    # A message composed without set_content() has no body at all.
    if part.get_payload() is None:
        return None
    charset = part.get_content_charset()
    if part.get_content_maintype() == "text" and _known_charset(charset):
        return str(part.get_content())
    # Non-text bodies, and charsets Python cannot decode (the email package
    # itself writes ``unknown-8bit``), are read from the raw bytes.
    raw = part.get_payload(decode=True)
    if not isinstance(raw, bytes):
        return None
    return raw.decode(charset if _known_charset(charset) and charset else "utf-8", errors="replace")


def _is_opaque(part: EmailMessage) -> bool:
    """True for parts whose inner structure belongs to someone else."""
    return part.is_attachment() or part.get_content_maintype() == "message"


def _sub_parts(message: EmailMessage) -> Iterator[EmailMessage]:
    """Yield the parts below *message*, depth-first in document order.

    Nested multiparts are entered; attachments and ``message/*`` parts
    (forwarded mail) are yielded whole and never entered.
    """
    # A multipart whose boundary is missing parses with a str payload.
    if not message.is_multipart():
        return
    for part in message.iter_parts():
        if part.is_multipart() and not _is_opaque(part):  # type: ignore[arg-type]
            yield from _sub_parts(part)  # type: ignore[arg-type]
        else:
            yield part  # type: ignore[misc]


def _attachment_bytes(part: EmailMessage) -> bytes:
    if part.get_content_type() == "message/rfc822":
        return part.get_content().as_bytes()
    payload = part.get_payload(decode=True)
    return payload if isinstance(payload, bytes) else b""


def resolve_body(message: EmailMessage) -> list[BodyPart]:
    """Resolve at most one HTML and one plain-text body.

    A top-level ``text/plain`` body is the plain-text candidate; any other
    top-level body is the HTML candidate. Sub-parts of type ``text/html`` or
    ``text/plain`` then overwrite the matching candidate, so the last one
    encountered wins. Attachments and forwarded messages never count as bodies.

    Example:
        >>> msg = EmailMessage()
        >>> msg.set_content("<p>Hi</p>", subtype="html")
        >>> msg.add_alternative("Hi")
        >>> [(part.content_type.value, part.content.strip()) for part in resolve_body(msg)]
        [('HTML', '<p>Hi</p>'), ('PlainText', 'Hi')]
    """
    body_html: str | None = None
    body_text: str | None = None

    if not message.is_multipart():
        if message.get_content_type() == _TEXT_PLAIN:
            body_text = _text_of(message)
        else:
            body_html = _text_of(message)

    for part in _sub_parts(message):
        if _is_opaque(part):
            continue
        content_type = part.get_content_type()
        if content_type == _TEXT_HTML:
            body_html = _text_of(part)
        elif content_type == _TEXT_PLAIN:
            body_text = _text_of(part)

    bodies: list[BodyPart] = []
    if body_html is not None:
        bodies.append(BodyPart(BodyContentType.HTML, body_html))
    if body_text is not None:
        bodies.append(BodyPart(BodyContentType.PLAIN_TEXT, body_text))
    return bodies


def project_headers(message: EmailMessage) -> dict[str, str]:
    """Copy every header outside :data:`HEADERS_TO_BYPASS`.

    Names keep their declared casing; a repeated name keeps its last value.

    Example:
        >>> msg = EmailMessage()
        >>> msg["FROM"] = "a@example.com"
        >>> msg["X-Custom"] = "v"
        >>> project_headers(msg)
        {'X-Custom': 'v'}
    """
    headers: dict[str, str] = {}
    for name, value in message.items():
        if name.lower() in HEADERS_TO_BYPASS:
            continue
        headers[name] = str(value)
    return headers


def project_attachments(message: EmailMessage) -> list[Attachment]:
    """Return every part with an ``attachment`` disposition, in order.

    An attached ``message/rfc822`` is one attachment carrying the whole
    serialized message; its own parts are not projected.
    """
    attachments: list[Attachment] = []
    for part in _sub_parts(message):
        if not part.is_attachment():
            continue
        attachments.append(
            Attachment(
                name=part.get_filename(),
                content_type=part.get_content_type(),
                binary_content=_attachment_bytes(part),
            )
        )
    return attachments


def build_payload(message: EmailMessage) -> OutboundPayload:
    """Translate *message* into the provider's transactional request."""
    reply_to = _formatted(message, "Reply-To")
    subject = message.get("Subject")

    return OutboundPayload(
        recipients=build_recipients(message),
        content=EmailContent(
            from_=", ".join(_formatted(message, "From")),
            subject=str(subject) if subject is not None else None,
            reply_to=", ".join(reply_to) if reply_to else None,
            body=tuple(resolve_body(message)),
            headers=project_headers(message),
            attachments=tuple(project_attachments(message)),
        ),
    )


__all__ = [
    "HEADERS_TO_BYPASS",
    "build_payload",
    "build_recipients",
    "project_attachments",
    "project_headers",
    "read_addresses",
    "resolve_body",
]
