"""HTTP client for Elastic Email's transactional send endpoint.

A thin httpx wrapper: one POST per call, no retries of its own. Any retry,
pooling, or timeout policy lives in the injected ``httpx.Client``.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
import orjson

from elasticemail_transport import __init__conf__
from elasticemail_transport.domain.errors import ConfigurationError, ProviderSendError
from elasticemail_transport.domain.models import OutboundPayload, SendReceipt

from .config import DEFAULT_BASE_URL, ElasticEmailConfig
from .wire import encode_payload

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-ElasticEmail-ApiKey"
TRANSACTIONAL_PATH = "/emails/transactional"

# Longest slice of an error response body quoted in exception messages
_ERROR_BODY_LIMIT = 200


def _error_detail(response: httpx.Response) -> str:
    """Extract a short human-readable reason from an error response."""
    try:
        data: Any = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.text[:_ERROR_BODY_LIMIT] or response.reason_phrase
    if isinstance(data, dict):
        for key in ("Error", "error", "message", "Message"):
            value = data.get(key)
            if value:
                return str(value)
    return response.reason_phrase


def _receipt_from(response: httpx.Response) -> SendReceipt:
    try:
        data: Any = orjson.loads(response.content) if response.content else {}
    except orjson.JSONDecodeError:
        data = {}
    if not isinstance(data, dict):
        return SendReceipt()
    return SendReceipt(
        transaction_id=data.get("TransactionID"),
        message_id=data.get("MessageID"),
    )


class ElasticEmailClient:
    """Send OutboundPayloads through ``POST /emails/transactional``.

    Args:
        api_key: Elastic Email API key sent in the ``X-ElasticEmail-ApiKey`` header.
        base_url: API root, e.g. ``https://api.elasticemail.com/v4``.
        timeout: Request timeout in seconds for a client this object creates.
        http_client: Optional pre-built httpx client. When given, the caller
            owns it and :meth:`close` leaves it open.

    Example:
        >>> def handler(request):
        ...     return httpx.Response(200, json={"TransactionID": "t-1", "MessageID": "m-1"})
        >>> http = httpx.Client(transport=httpx.MockTransport(handler))
        >>> client = ElasticEmailClient(api_key="k", http_client=http)
        >>> from elasticemail_transport.domain.models import EmailContent, TransactionalRecipients
        >>> payload = OutboundPayload(TransactionalRecipients(to=("a@example.com",)), EmailContent(from_="b@example.com"))
        >>> client.emails_transactional_post(payload).transaction_id
        't-1'
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + TRANSACTIONAL_PATH
        self._headers = {
            API_KEY_HEADER: api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"{__init__conf__.name}/{__init__conf__.version}",
        }
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: ElasticEmailConfig) -> ElasticEmailClient:
        """Build a client from validated settings.

        Raises:
            ConfigurationError: When no API key is configured.
        """
        if config.api_key is None:
            raise ConfigurationError("No Elastic Email API key configured (elasticemail.api_key is empty)")
        return cls(api_key=config.api_key, base_url=config.base_url, timeout=config.timeout)

    def emails_transactional_post(self, payload: OutboundPayload) -> SendReceipt:
        """Deliver *payload* in one request.

        Raises:
            ProviderSendError: On transport failures and non-2xx responses.
        """
        try:
            response = self._http.post(self._url, content=encode_payload(payload), headers=self._headers)
        except httpx.HTTPError as exc:
            raise ProviderSendError(f"Elastic Email request failed: {exc}") from exc

        if response.is_error:
            raise ProviderSendError(
                f"Elastic Email rejected the message ({response.status_code}): {_error_detail(response)}",
                status_code=response.status_code,
            )

        receipt = _receipt_from(response)
        logger.debug("Elastic Email accepted message", extra={"transaction_id": receipt.transaction_id})
        return receipt

    def close(self) -> None:
        """Close the underlying httpx client if this object created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> ElasticEmailClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def create_elasticemail_client(config: ElasticEmailConfig) -> ElasticEmailClient:
    """Production provider-client factory satisfying ``CreateProviderClient``."""
    return ElasticEmailClient.from_config(config)


__all__ = [
    "API_KEY_HEADER",
    "ElasticEmailClient",
    "TRANSACTIONAL_PATH",
    "create_elasticemail_client",
]
