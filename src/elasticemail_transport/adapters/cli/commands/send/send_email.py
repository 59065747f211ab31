"""Send email CLI command.

Composes an ``EmailMessage`` from command-line options and sends it through
:class:`~elasticemail_transport.adapters.elasticemail.ElasticEmailTransport`.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence
from email.message import EmailMessage
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import deliver, fail, load_provider_config

logger = logging.getLogger(__name__)


def _parse_headers(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> tuple[tuple[str, str], ...]:
    """Split each ``NAME=VALUE`` option into a header pair.

    Raises:
        click.BadParameter: When ``=`` or the name is missing.
    """
    headers: list[tuple[str, str]] = []
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", ctx=ctx, param=param)
        headers.append((name.strip(), value))
    return tuple(headers)


def _attach_file(message: EmailMessage, path: Path) -> None:
    """Attach *path* with a content type guessed from its name."""
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    maintype, _, subtype = content_type.partition("/")
    message.add_attachment(path.read_bytes(), maintype=maintype, subtype=subtype, filename=path.name)


def build_message(
    *,
    from_address: str,
    recipients: Sequence[str],
    subject: str | None = None,
    body: str = "",
    body_html: str = "",
    cc: Sequence[str] = (),
    bcc: Sequence[str] = (),
    reply_to: Sequence[str] = (),
    headers: Sequence[tuple[str, str]] = (),
    attachments: Sequence[Path] = (),
) -> EmailMessage:
    """Assemble an ``EmailMessage`` from plain values.

    A plain-text body is always present unless only *body_html* is given;
    with both, the HTML is added as an alternative. Address headers are left
    out when their sequence is empty.

    Raises:
        FileNotFoundError: When an attachment path does not exist.
        ValueError: When a custom header duplicates a unique header.

    Example:
        >>> msg = build_message(
        ...     from_address="shop@example.com", recipients=["ann@example.com"], subject="Hi", body="Hello"
        ... )
        >>> str(msg["To"]), msg.get_content_type()
        ('ann@example.com', 'text/plain')
        >>> build_message(from_address="shop@example.com", recipients=[], body_html="<p>x</p>").get_content_type()
        'text/html'
    """
    message = EmailMessage()
    message["From"] = from_address
    for header, values in (("To", recipients), ("Cc", cc), ("Bcc", bcc), ("Reply-To", reply_to)):
        if values:
            message[header] = ", ".join(values)
    if subject is not None:
        message["Subject"] = subject

    if body_html and not body:
        message.set_content(body_html, subtype="html")
    else:
        message.set_content(body)
        if body_html:
            message.add_alternative(body_html, subtype="html")

    for path in attachments:
        _attach_file(message, path)
    # set_content clears Content-* headers, so custom headers go last.
    for name, value in headers:
        message[name] = value
    return message


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    help="Recipient address (repeatable; defaults to elasticemail.recipients)",
)
@click.option("--cc", multiple=True, help="Carbon-copy address (repeatable)")
@click.option("--bcc", multiple=True, help="Blind carbon-copy address (repeatable)")
@click.option("--reply-to", "reply_to", multiple=True, help="Reply-To address (repeatable)")
@click.option(
    "--from", "from_address", default=None, help="Sender address (defaults to elasticemail.from_address)"
)
@click.option("--subject", default=None, help="Subject line")
@click.option("--body", default="", help="Plain-text body")
@click.option("--body-html", default="", help="HTML body (sent alongside the plain-text body when both are given)")
@click.option(
    "--header",
    "headers",
    multiple=True,
    metavar="NAME=VALUE",
    callback=_parse_headers,
    help="Extra header forwarded to Elastic Email (repeatable)",
)
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="File to attach (repeatable)",
)
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    recipients: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    reply_to: tuple[str, ...],
    from_address: str | None,
    subject: str | None,
    body: str,
    body_html: str,
    headers: tuple[tuple[str, str], ...],
    attachments: tuple[Path, ...],
) -> None:
    """Compose a message from options and send it through Elastic Email."""
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-email", "recipients": list(recipients) or None, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        provider_config = load_provider_config(cli_ctx.config, cli_ctx.services)

        sender = from_address or provider_config.from_address
        if sender is None:
            fail(
                "elasticemail.from_address is empty",
                "No sender address",
                "No sender. Pass --from or set elasticemail.from_address",
                exit_code=ExitCode.CONFIG_ERROR,
            )

        try:
            message = build_message(
                from_address=sender,
                recipients=recipients or provider_config.recipients,
                subject=subject,
                body=body,
                body_html=body_html,
                cc=cc,
                bcc=bcc,
                reply_to=reply_to,
                headers=headers,
                attachments=attachments,
            )
        except FileNotFoundError as exc:
            fail(exc, "Attachment file not found", "Attachment file not found", exit_code=ExitCode.FILE_NOT_FOUND)
        except ValueError as exc:
            fail(exc, "Invalid message options", "Invalid message options", exit_code=ExitCode.INVALID_ARGUMENT)

        logger.info(
            "Sending email",
            extra={"has_html": bool(body_html), "attachment_count": len(attachments), "header_count": len(headers)},
        )
        deliver(cli_ctx.services, provider_config, message)


__all__ = ["build_message", "cli_send_email"]
