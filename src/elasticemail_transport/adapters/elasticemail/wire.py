"""Serialize an OutboundPayload into Elastic Email's JSON request shape.

The v4 API expects PascalCase keys (``EmailTransactionalMessageData``);
absent values are omitted rather than sent as ``null`` and binary attachment
content travels base64-encoded.
"""

from __future__ import annotations

import base64
from typing import Any

import orjson

from elasticemail_transport.domain.models import Attachment, BodyPart, OutboundPayload, TransactionalRecipients


def _without_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _recipients_to_wire(recipients: TransactionalRecipients) -> dict[str, Any]:
    return _without_none(
        {
            "To": list(recipients.to) if recipients.to is not None else None,
            "CC": list(recipients.cc) if recipients.cc is not None else None,
            "BCC": list(recipients.bcc) if recipients.bcc is not None else None,
        }
    )


def _body_to_wire(part: BodyPart) -> dict[str, Any]:
    return {"ContentType": part.content_type.value, "Content": part.content}


def _attachment_to_wire(attachment: Attachment) -> dict[str, Any]:
    return _without_none(
        {
            "BinaryContent": base64.b64encode(attachment.binary_content).decode("ascii"),
            "Name": attachment.name,
            "ContentType": attachment.content_type,
        }
    )


def payload_to_wire(payload: OutboundPayload) -> dict[str, Any]:
    """Map *payload* onto the provider's request structure.

    Example:
        >>> from elasticemail_transport.domain.models import EmailContent
        >>> payload = OutboundPayload(
        ...     recipients=TransactionalRecipients(to=("a@example.com",)),
        ...     content=EmailContent(from_="b@example.com", subject="Hi"),
        ... )
        >>> payload_to_wire(payload)["Recipients"]
        {'To': ['a@example.com']}
        >>> sorted(payload_to_wire(payload)["Content"])
        ['Attachments', 'Body', 'From', 'Headers', 'Subject']
    """
    content = payload.content
    return {
        "Recipients": _recipients_to_wire(payload.recipients),
        "Content": _without_none(
            {
                "Body": [_body_to_wire(part) for part in content.body],
                "From": content.from_,
                "Subject": content.subject,
                "ReplyTo": content.reply_to,
                "Headers": dict(content.headers),
                "Attachments": [_attachment_to_wire(item) for item in content.attachments],
            }
        ),
    }


def encode_payload(payload: OutboundPayload) -> bytes:
    """Return the JSON request body for *payload*."""
    return orjson.dumps(payload_to_wire(payload))


__all__ = ["encode_payload", "payload_to_wire"]
