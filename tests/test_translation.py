"""EmailMessage to OutboundPayload translation: recipients, bodies, headers, attachments."""

from __future__ import annotations

from collections.abc import Callable
from email.message import EmailMessage

import pytest

from elasticemail_transport.domain.enums import BodyContentType
from elasticemail_transport.domain.models import Address, Attachment, BodyPart
from elasticemail_transport.domain.translation import (
    HEADERS_TO_BYPASS,
    build_payload,
    build_recipients,
    project_attachments,
    project_headers,
    read_addresses,
    resolve_body,
)


def _addressed(**headers: str) -> EmailMessage:
    message = EmailMessage()
    for name, value in headers.items():
        message[name.replace("_", "-")] = value
    return message


def _text_part(text: str, subtype: str = "plain") -> EmailMessage:
    part = EmailMessage()
    part.set_content(text, subtype=subtype)
    return part


# ======================== Addresses and recipients ========================


@pytest.mark.os_agnostic
def test_read_addresses_keeps_order_and_drops_empty_names() -> None:
    message = _addressed(To="Ann <ann@example.com>, bob@example.com")

    assert read_addresses(message, "To") == [Address("ann@example.com", "Ann"), Address("bob@example.com")]


@pytest.mark.os_agnostic
def test_read_addresses_of_missing_header_is_empty() -> None:
    assert read_addresses(EmailMessage(), "Cc") == []


@pytest.mark.os_agnostic
def test_build_recipients_formats_every_role(rich_message: EmailMessage) -> None:
    rich_message["Bcc"] = "Audit <audit@example.com>"

    recipients = build_recipients(rich_message)

    assert recipients.to == ("Ann <ann@example.com>",)
    assert recipients.cc == ("carl@example.com",)
    assert recipients.bcc == ("Audit <audit@example.com>",)


@pytest.mark.os_agnostic
def test_build_recipients_leaves_absent_roles_as_none(plain_message: EmailMessage) -> None:
    """An absent role is None, never an empty tuple."""
    recipients = build_recipients(plain_message)

    assert recipients.to == ("Ann <ann@example.com>", "bob@example.com")
    assert recipients.cc is None
    assert recipients.bcc is None


# ======================== Body resolution ========================


@pytest.mark.os_agnostic
def test_plain_single_part_message_yields_one_plain_body(plain_message: EmailMessage) -> None:
    assert resolve_body(plain_message) == [BodyPart(BodyContentType.PLAIN_TEXT, "Your order is on its way.\n")]


@pytest.mark.os_agnostic
def test_html_single_part_message_yields_one_html_body() -> None:
    message = _text_part("<b>Sale</b>", subtype="html")

    assert resolve_body(message) == [BodyPart(BodyContentType.HTML, "<b>Sale</b>\n")]


@pytest.mark.os_agnostic
def test_non_text_top_level_body_counts_as_html() -> None:
    """Anything that is not exactly text/plain at the top level is the HTML candidate."""
    message = EmailMessage()
    message.set_content(b"raw", maintype="application", subtype="octet-stream")

    bodies = resolve_body(message)

    assert [body.content_type for body in bodies] == [BodyContentType.HTML]
    assert bodies[0].content == "raw"


@pytest.mark.os_agnostic
def test_alternative_message_lists_html_before_plain(rich_message: EmailMessage) -> None:
    bodies = resolve_body(rich_message)

    assert bodies == [
        BodyPart(BodyContentType.HTML, "<p>HTML invoice</p>\n"),
        BodyPart(BodyContentType.PLAIN_TEXT, "Plain invoice\n"),
    ]


@pytest.mark.os_agnostic
def test_html_first_even_when_plain_part_comes_second() -> None:
    message = _text_part("<p>Hi</p>", subtype="html")
    message.add_alternative("Hi")

    assert [body.content_type for body in resolve_body(message)] == [
        BodyContentType.HTML,
        BodyContentType.PLAIN_TEXT,
    ]


@pytest.mark.os_agnostic
def test_later_sub_part_of_same_type_overwrites_earlier_one() -> None:
    """Last write wins among sub-parts of one content type."""
    message = EmailMessage()
    message.make_mixed()
    message.attach(_text_part("first"))
    message.attach(_text_part("second"))

    assert resolve_body(message) == [BodyPart(BodyContentType.PLAIN_TEXT, "second\n")]


@pytest.mark.os_agnostic
def test_text_attachment_is_not_a_body() -> None:
    message = _text_part("Report attached")
    message.add_attachment(b"col1,col2", maintype="text", subtype="plain", filename="report.txt")

    assert resolve_body(message) == [BodyPart(BodyContentType.PLAIN_TEXT, "Report attached\n")]


@pytest.mark.os_agnostic
def test_message_without_content_has_no_body() -> None:
    message = _addressed(To="ann@example.com")

    assert resolve_body(message) == []


# ======================== Header projection ========================


@pytest.mark.os_agnostic
def test_bypass_set_is_the_structural_headers() -> None:
    assert frozenset({"from", "to", "cc", "bcc", "subject", "content-type"}) == HEADERS_TO_BYPASS


@pytest.mark.os_agnostic
def test_structural_headers_never_reach_custom_headers(rich_message: EmailMessage) -> None:
    rich_message["Bcc"] = "audit@example.com"

    names = {name.lower() for name in project_headers(rich_message)}

    assert names.isdisjoint(HEADERS_TO_BYPASS)


@pytest.mark.os_agnostic
def test_custom_headers_are_forwarded_with_original_casing(rich_message: EmailMessage) -> None:
    headers = project_headers(rich_message)

    assert headers["X-Campaign"] == "spring"
    assert headers["Reply-To"] == "Support <support@example.com>"


@pytest.mark.os_agnostic
def test_bypass_match_ignores_case() -> None:
    message = _addressed(SUBJECT="Hi", x_trace="abc")

    assert project_headers(message) == {"x-trace": "abc"}


@pytest.mark.os_agnostic
def test_repeated_header_keeps_last_value() -> None:
    message = EmailMessage()
    message["X-Tag"] = "first"
    message["X-Tag"] = "second"

    assert project_headers(message) == {"X-Tag": "second"}


@pytest.mark.os_agnostic
def test_content_transfer_encoding_is_not_bypassed(plain_message: EmailMessage) -> None:
    """Only Content-Type is bypassed among the Content-* headers."""
    assert "Content-Transfer-Encoding" in project_headers(plain_message)


# ======================== Attachment projection ========================


@pytest.mark.os_agnostic
def test_attachment_projection_carries_name_type_and_bytes(rich_message: EmailMessage) -> None:
    assert project_attachments(rich_message) == [
        Attachment(name="invoice.pdf", content_type="application/pdf", binary_content=b"%PDF-1.4 fake")
    ]


@pytest.mark.os_agnostic
def test_attachments_keep_document_order() -> None:
    message = _text_part("Two files")
    message.add_attachment(b"a", maintype="application", subtype="octet-stream", filename="a.bin")
    message.add_attachment(b"b", maintype="image", subtype="png", filename="b.png")

    assert [(item.name, item.content_type) for item in project_attachments(message)] == [
        ("a.bin", "application/octet-stream"),
        ("b.png", "image/png"),
    ]


@pytest.mark.os_agnostic
def test_attachment_without_filename_has_no_name() -> None:
    message = _text_part("Unnamed")
    message.add_attachment(b"data", maintype="application", subtype="octet-stream")

    assert project_attachments(message)[0].name is None


@pytest.mark.os_agnostic
def test_message_without_attachments_projects_none(plain_message: EmailMessage) -> None:
    assert project_attachments(plain_message) == []


# ======================== Whole payload ========================


@pytest.mark.os_agnostic
def test_build_payload_fills_every_content_field(rich_message: EmailMessage) -> None:
    payload = build_payload(rich_message)

    assert payload.content.from_ == "Shop <shop@example.com>"
    assert payload.content.subject == "Invoice"
    assert payload.content.reply_to == "Support <support@example.com>"
    assert len(payload.content.body) == 2
    assert len(payload.content.attachments) == 1
    assert payload.to == ("Ann <ann@example.com>",)


@pytest.mark.os_agnostic
def test_build_payload_joins_multiple_senders_and_reply_tos() -> None:
    message = _addressed(
        From="a@example.com, Bee <b@example.com>",
        To="ann@example.com",
        Reply_To="help@example.com, Desk <desk@example.com>",
    )

    content = build_payload(message).content

    assert content.from_ == "a@example.com, Bee <b@example.com>"
    assert content.reply_to == "help@example.com, Desk <desk@example.com>"


@pytest.mark.os_agnostic
def test_build_payload_without_subject_or_reply_to_leaves_them_absent() -> None:
    content = build_payload(_addressed(From="a@example.com", To="ann@example.com")).content

    assert content.subject is None
    assert content.reply_to is None


@pytest.mark.os_agnostic
def test_build_payload_is_idempotent(rich_message: EmailMessage) -> None:
    assert build_payload(rich_message) == build_payload(rich_message)


@pytest.mark.os_agnostic
def test_build_payload_does_not_modify_the_message(rich_message: EmailMessage) -> None:
    before = rich_message.as_bytes()

    build_payload(rich_message)

    assert rich_message.as_bytes() == before


@pytest.mark.os_agnostic
def test_two_html_sub_parts_yield_only_the_last_one() -> None:
    message = EmailMessage()
    message.make_mixed()
    message.attach(_text_part("<p>old</p>", subtype="html"))
    message.attach(_text_part("<p>new</p>", subtype="html"))

    assert resolve_body(message) == [BodyPart(BodyContentType.HTML, "<p>new</p>\n")]


@pytest.mark.os_agnostic
def test_only_custom_header_survives_projection() -> None:
    message = _addressed(From="a@example.com", To="b@example.com", Subject="Hi", X_Custom="v")

    assert project_headers(message) == {"X-Custom": "v"}


@pytest.mark.os_agnostic
def test_translation_functions_are_repeatable(rich_message: EmailMessage) -> None:
    assert resolve_body(rich_message) == resolve_body(rich_message)
    assert project_headers(rich_message) == project_headers(rich_message)
    assert project_attachments(rich_message) == project_attachments(rich_message)


# ======================== Nested and stored MIME ========================

LoadEml = Callable[[str], EmailMessage]


def _forwarding(inner_body: str = "INNER BODY") -> EmailMessage:
    inner = _addressed(From="carl@example.com", To="ann@example.com", Subject="Quarterly")
    inner.set_content(inner_body)
    outer = _text_part("OUTER BODY")
    outer.add_attachment(inner, filename="fwd.eml")
    return outer


@pytest.mark.os_agnostic
def test_forwarded_message_body_does_not_replace_the_outer_body() -> None:
    bodies = resolve_body(_forwarding())

    assert [(body.content_type, body.content.strip()) for body in bodies] == [
        (BodyContentType.PLAIN_TEXT, "OUTER BODY"),
    ]


@pytest.mark.os_agnostic
def test_forwarded_message_is_one_attachment_holding_the_whole_message() -> None:
    attachments = project_attachments(_forwarding())

    assert [(item.name, item.content_type) for item in attachments] == [("fwd.eml", "message/rfc822")]
    assert b"Subject: Quarterly" in attachments[0].binary_content
    assert b"INNER BODY" in attachments[0].binary_content


@pytest.mark.os_agnostic
def test_stored_forward_keeps_outer_body_and_ignores_inner_alternatives(load_eml: LoadEml) -> None:
    message = load_eml("forwarded.eml")

    bodies = resolve_body(message)

    assert [(body.content_type, body.content.strip()) for body in bodies] == [
        (BodyContentType.PLAIN_TEXT, "See the forwarded message below."),
    ]


@pytest.mark.os_agnostic
def test_stored_forward_projects_the_attached_message_once(load_eml: LoadEml) -> None:
    attachments = project_attachments(load_eml("forwarded.eml"))

    assert len(attachments) == 1
    assert attachments[0].name == "quarterly.eml"
    assert attachments[0].content_type == "message/rfc822"
    assert b"Inner plain body." in attachments[0].binary_content
    assert b"<p>Inner HTML body.</p>" in attachments[0].binary_content


@pytest.mark.os_agnostic
def test_mixed_wrapping_alternative_and_related_finds_both_bodies(load_eml: LoadEml) -> None:
    bodies = resolve_body(load_eml("nested_alternative.eml"))

    assert [body.content_type for body in bodies] == [BodyContentType.HTML, BodyContentType.PLAIN_TEXT]
    assert bodies[0].content.startswith("<p>Invoice attached.")
    assert bodies[1].content.strip() == "Invoice attached."


@pytest.mark.os_agnostic
def test_inline_related_image_is_neither_body_nor_attachment(load_eml: LoadEml) -> None:
    attachments = project_attachments(load_eml("nested_alternative.eml"))

    assert attachments == [
        Attachment(name="invoice.pdf", content_type="application/pdf", binary_content=b"%PDF-1.4 fake")
    ]


@pytest.mark.os_agnostic
def test_quoted_printable_latin1_body_is_decoded(load_eml: LoadEml) -> None:
    bodies = resolve_body(load_eml("latin1_quoted_printable.eml"))

    assert [body.content.strip() for body in bodies] == ["Café crème brûlée"]


@pytest.mark.os_agnostic
def test_unknown_charset_body_is_read_as_utf8_with_replacement(load_eml: LoadEml) -> None:
    """``unknown-8bit`` has no codec; undecodable bytes become U+FFFD instead of raising."""
    bodies = resolve_body(load_eml("unknown_8bit.eml"))

    assert bodies == [BodyPart(BodyContentType.PLAIN_TEXT, "Caf\ufffd open\n")]


@pytest.mark.os_agnostic
def test_unknown_charset_message_still_builds_a_payload(load_eml: LoadEml) -> None:
    payload = build_payload(load_eml("unknown_8bit.eml"))

    assert payload.to == ("ann@example.com",)
    assert payload.content.subject == "Legacy"
    assert payload.content.body[0].content_type is BodyContentType.PLAIN_TEXT
