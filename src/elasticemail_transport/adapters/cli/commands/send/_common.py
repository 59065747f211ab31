"""Shared plumbing for the send commands.

Loads provider settings, runs one transport send, and maps every failure to
an :class:`ExitCode`.
"""

from __future__ import annotations

import logging
from contextlib import closing
from email.message import EmailMessage
from typing import TYPE_CHECKING, NoReturn

import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from elasticemail_transport.adapters.elasticemail import ElasticEmailConfig, ElasticEmailTransport
from elasticemail_transport.domain.enums import SendResult
from elasticemail_transport.domain.errors import ConfigurationError, InvalidMessageError
from elasticemail_transport.domain.models import SendOutcome

from ...exit_codes import ExitCode

if TYPE_CHECKING:
    from elasticemail_transport.composition import AppServices

logger = logging.getLogger(__name__)


def fail(detail: object, log_message: str, user_message: str, *, exit_code: ExitCode) -> NoReturn:
    """Log, tell the user, and exit with *exit_code*."""
    extra: dict[str, str] = {"error": str(detail)}
    if isinstance(detail, BaseException):
        extra["error_type"] = type(detail).__name__
    logger.error(log_message, extra=extra)
    click.echo(f"\nError: {user_message} - {detail}", err=True)
    raise SystemExit(exit_code)


def load_provider_config(config: Config, services: AppServices) -> ElasticEmailConfig:
    """Validate the ``[elasticemail]`` section and insist on an API key.

    Raises:
        SystemExit: CONFIG_ERROR (78) when the section is invalid or has no key.
    """
    try:
        provider_config = services.load_elasticemail_config_from_dict(config.as_dict())
    except ValidationError as exc:
        fail(
            exc,
            "Invalid Elastic Email configuration",
            "Invalid [elasticemail] configuration",
            exit_code=ExitCode.CONFIG_ERROR,
        )

    if provider_config.api_key is None:
        fail(
            "elasticemail.api_key is empty",
            "No Elastic Email API key configured",
            "No API key configured. Set elasticemail.api_key in a config file or pass --set elasticemail.api_key=...",
            exit_code=ExitCode.CONFIG_ERROR,
        )
    return provider_config


def deliver(services: AppServices, provider_config: ElasticEmailConfig, message: EmailMessage) -> SendOutcome:
    """Send *message* through a fresh transport and report the outcome.

    The provider client is closed afterwards whatever happens.

    Raises:
        SystemExit: CONFIG_ERROR (78) when no client can be built,
            INVALID_ARGUMENT (22) for a message without recipients, and
            PROVIDER_FAILURE (69) when Elastic Email did not take the message.
    """
    try:
        client = services.create_provider_client(provider_config)
    except ConfigurationError as exc:
        fail(exc, "Elastic Email client configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR)

    with closing(client):
        try:
            outcome = ElasticEmailTransport(client=client).send(message)
        except InvalidMessageError as exc:
            fail(exc, "Invalid message", "Invalid message", exit_code=ExitCode.INVALID_ARGUMENT)

    if outcome.status is SendResult.FAILED:
        fail(
            ", ".join(outcome.failed_recipients),
            "Elastic Email send failed",
            "Elastic Email did not accept the message for",
            exit_code=ExitCode.PROVIDER_FAILURE,
        )

    click.echo(f"\nMessage accepted by Elastic Email for {outcome.accepted} recipient(s).")
    logger.info("Message sent via CLI", extra={"accepted": outcome.accepted})
    return outcome


__all__ = ["deliver", "fail", "load_provider_config"]
