"""In-memory provider client for testing.

Provides a client that satisfies the same Protocols as the production
Elastic Email client but performs no HTTP requests.

Contents:
    * :class:`ProviderSpy` - Captures transactional payloads for test assertions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...domain.models import OutboundPayload, SendReceipt
from ..elasticemail.config import ElasticEmailConfig


def _empty_payload_list() -> list[OutboundPayload]:
    """Create an empty typed list for payload records."""
    return []


def _empty_config_list() -> list[ElasticEmailConfig]:
    return []


@dataclass
class ProviderSpy:
    """Captures provider calls for test assertions.

    Each test should create its own ProviderSpy instance to avoid cross-test
    pollution. ``create_client`` matches the ``CreateProviderClient`` port and
    hands out the spy itself.

    Attributes:
        payloads: Every payload passed to ``emails_transactional_post``.
        configs: Every configuration passed to ``create_client``.
        raise_exception: When set, sends record the payload then raise it.
        close_count: Number of ``close`` calls.

    Example:
        >>> from elasticemail_transport.domain.models import EmailContent, TransactionalRecipients
        >>> spy = ProviderSpy()
        >>> payload = OutboundPayload(TransactionalRecipients(to=("a@example.com",)), EmailContent(from_="b@example.com"))
        >>> spy.emails_transactional_post(payload).transaction_id
        'spy-1'
        >>> len(spy.payloads)
        1
    """

    payloads: list[OutboundPayload] = field(default_factory=_empty_payload_list)
    configs: list[ElasticEmailConfig] = field(default_factory=_empty_config_list)
    raise_exception: Exception | None = None
    close_count: int = 0

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.payloads.clear()
        self.configs.clear()
        self.raise_exception = None
        self.close_count = 0

    @property
    def call_count(self) -> int:
        return len(self.payloads)

    def emails_transactional_post(self, payload: OutboundPayload) -> SendReceipt:
        """Record the payload and succeed unless ``raise_exception`` is set.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.payloads.append(payload)
        if self.raise_exception is not None:
            raise self.raise_exception
        number = len(self.payloads)
        return SendReceipt(transaction_id=f"spy-{number}", message_id=f"spy-message-{number}")

    def close(self) -> None:
        """Count releases so tests can assert the caller closed the client."""
        self.close_count += 1

    def create_client(self, config: ElasticEmailConfig) -> ProviderSpy:
        """Record *config* and return this spy as the provider client."""
        self.configs.append(config)
        return self


__all__ = ["ProviderSpy"]
