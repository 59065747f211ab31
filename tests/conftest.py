"""Shared pytest fixtures for transport, client, and CLI tests.

All shared fixtures live here and are picked up through conftest discovery.
Fixture names read as plain English so test signatures document their setup.
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields, replace
from email.message import EmailMessage
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from elasticemail_transport.adapters.memory import ProviderSpy
    from elasticemail_transport.composition import AppServices

_COVERAGE_BASENAME = ".coverage.elasticemail_transport"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete SQLite sidecar files a crashed run may have left behind."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Keep the coverage database on a local temp directory.

    Runs before pytest-cov creates its ``Coverage()`` object, so the
    ``COVERAGE_FILE`` value applies however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load the project ``.env`` when present."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

#: Settings that let the send commands reach the provider client.
READY_PROVIDER_SETTINGS: dict[str, Any] = {
    "api_key": "test-api-key",
    "from_address": "shop@example.com",
    "recipients": ["ops@example.com"],
}


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` when parsing output so log lines on stderr do not
    leak into assertions.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory."""
    from elasticemail_transport.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test.

    Only clears before, since a test may monkeypatch ``get_config`` away.
    """
    from elasticemail_transport.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from plain dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a factory that wires a fixed Config into otherwise in-memory services.

    ``display_config`` stays the production Rich renderer so config output
    can be asserted on.

    Example:
        def test_section(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"elasticemail": {"timeout": 5}})
            result = cli_runner.invoke(cli, ["config"], obj=factory)
    """
    from elasticemail_transport.adapters.config.display import display_config
    from elasticemail_transport.composition import build_testing

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(build_testing(), get_config=_fake_get_config, display_config=display_config)
        return lambda: services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose ``get_config`` records every profile it is asked for."""
    from elasticemail_transport.composition import build_testing

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        services = replace(build_testing(), get_config=_capturing_get_config)
        return lambda: services

    return _inject


@dataclass
class ProviderCliContext:
    """Services factory plus the ProviderSpy it sends through."""

    factory: Callable[[], Any]
    spy: ProviderSpy


@pytest.fixture
def provider_cli_context(
    clear_config_cache: None,
) -> Callable[..., ProviderCliContext]:
    """Create send-command test context with an ``[elasticemail]`` section and a spy.

    Pass the section contents; ``READY_PROVIDER_SETTINGS`` is used when omitted.

    Example:
        def test_send(cli_runner, provider_cli_context) -> None:
            ctx = provider_cli_context()
            result = cli_runner.invoke(cli, ["send-email", "--subject", "Hi"], obj=ctx.factory)
            assert ctx.spy.payloads[0].to == ("ops@example.com",)
    """
    from elasticemail_transport.adapters.memory import ProviderSpy as ProviderSpyImpl
    from elasticemail_transport.composition import build_testing

    def _create(settings: dict[str, Any] | None = None) -> ProviderCliContext:
        spy = ProviderSpyImpl()
        section = dict(READY_PROVIDER_SETTINGS if settings is None else settings)
        config = Config({"elasticemail": section}, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(build_testing(spy=spy), get_config=_fake_get_config)
        return ProviderCliContext(factory=lambda: services, spy=spy)

    return _create


@pytest.fixture
def plain_message() -> EmailMessage:
    """A single-part plain-text message with one named and one bare recipient."""
    message = EmailMessage()
    message["From"] = "Shop <shop@example.com>"
    message["To"] = "Ann <ann@example.com>, bob@example.com"
    message["Subject"] = "Order shipped"
    message.set_content("Your order is on its way.")
    return message


@pytest.fixture
def rich_message() -> EmailMessage:
    """A multipart/mixed message with alternative bodies, cc, reply-to, a custom header, and an attachment."""
    message = EmailMessage()
    message["From"] = "Shop <shop@example.com>"
    message["To"] = "Ann <ann@example.com>"
    message["Cc"] = "carl@example.com"
    message["Reply-To"] = "Support <support@example.com>"
    message["Subject"] = "Invoice"
    message["X-Campaign"] = "spring"
    message.set_content("Plain invoice")
    message.add_alternative("<p>HTML invoice</p>", subtype="html")
    message.add_attachment(b"%PDF-1.4 fake", maintype="application", subtype="pdf", filename="invoice.pdf")
    return message


EML_FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def eml_path() -> Callable[[str], Path]:
    """Return the path of a stored ``.eml`` file under ``tests/fixtures``."""

    def _path(name: str) -> Path:
        return EML_FIXTURES / name

    return _path


@pytest.fixture
def load_eml(eml_path: Callable[[str], Path]) -> Callable[[str], EmailMessage]:
    """Parse a stored ``.eml`` file the way ``send-eml`` reads it."""
    from email import policy
    from email.parser import BytesParser

    def _load(name: str) -> EmailMessage:
        return BytesParser(policy=policy.default).parsebytes(eml_path(name).read_bytes())  # type: ignore[return-value]

    return _load
