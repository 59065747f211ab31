"""Send a stored RFC 5322 message file through Elastic Email."""

from __future__ import annotations

import logging
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from pathlib import Path
from typing import cast

import lib_log_rich.runtime
import rich_click as click

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import deliver, fail, load_provider_config

logger = logging.getLogger(__name__)


def read_eml(path: Path) -> EmailMessage:
    """Parse *path* into an ``EmailMessage`` using the modern email policy.

    Raises:
        FileNotFoundError: When *path* does not exist.
    """
    with path.open("rb") as handle:
        return cast(EmailMessage, BytesParser(policy=policy.default).parse(handle))


@click.command("send-eml", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def cli_send_eml(ctx: click.Context, path: Path) -> None:
    """Send the message stored in PATH (an .eml file) as-is."""
    cli_ctx = get_cli_context(ctx)

    with lib_log_rich.runtime.bind(job_id="cli-send-eml", extra={"command": "send-eml", "path": str(path)}):
        provider_config = load_provider_config(cli_ctx.config, cli_ctx.services)
        try:
            message = read_eml(path)
        except FileNotFoundError as exc:
            fail(exc, "Message file not found", "Message file not found", exit_code=ExitCode.FILE_NOT_FOUND)

        logger.info("Sending stored message", extra={"subject": str(message.get("Subject", ""))})
        deliver(cli_ctx.services, provider_config, message)


__all__ = ["cli_send_eml", "read_eml"]
