"""HTTP client for the remote image-generation backend.

The backend is a black box: it generates the image, applies the user's plan
and enforces per-user quotas.  This module only speaks its wire protocol.

Protocol
--------
Request (``POST <backend_url>``, JSON)::

    {"prompt": "...", "user_id": "<userEmail>", "plan": "free"}

Response (JSON)::

    {"image": "<url or data URI>", "remaining": 4, "plan": "free"}

or, when the backend refuses the request::

    {"error": "limit exceeded"}

Error Handling
--------------
Every failure surfaces as one of two exception types so that the HTTP layer
can map it to a status code without inspecting ``httpx`` internals:

- :class:`BackendError` — the backend answered with an ``error`` field.
- :class:`TransportError` — the request could not be completed or the answer
  could not be understood (network failure, invalid JSON, non-object body,
  HTTP error status without an ``error`` field).
  :class:`BackendTimeoutError` is the timeout flavour of it.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from imagegate.core.config import GatewayConfig

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """The backend reported an explicit error (quota exhausted, bad plan, ...).

    The message is the backend's own ``error`` string and is safe to relay.
    """

    pass


class TransportError(Exception):
    """The backend call failed before a usable answer was obtained."""

    pass


class BackendTimeoutError(TransportError):
    """The backend did not answer within the configured time budget."""

    pass


class BackendRequest(BaseModel):
    """Normalized payload sent to the backend."""

    prompt: str
    user_id: str
    plan: str


class BackendResponse(BaseModel):
    """Successful backend answer.  Unknown keys are ignored."""

    image: str | None = None
    remaining: int | float | None = None
    plan: str | None = None


class BackendClient:
    """Async client for the image-generation backend.

    One instance is shared by all requests of a process; it holds no
    per-request state, only the pooled ``httpx.AsyncClient``.

    Attributes:
        _config (GatewayConfig):
            Application configuration (backend URL).
        _client (httpx.AsyncClient):
            Underlying connection pool.
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            config: Application configuration instance.
            transport: Optional ``httpx`` transport.  Tests pass an
                ``httpx.MockTransport`` here; production leaves it ``None``.
        """
        self._config = config
        # Timeouts are enforced by the caller's race (see imagegate.core.timeout),
        # so the pool itself never gives up on its own.
        self._client = httpx.AsyncClient(transport=transport, timeout=None)

    @property
    def url(self) -> str:
        return self._config.backend_url

    async def generate(self, payload: BackendRequest) -> BackendResponse:
        """POST *payload* to the backend and parse its answer.

        Args:
            payload: Normalized request body.

        Returns:
            The parsed backend answer.

        Raises:
            BackendError: The answer carries an ``error`` field.
            TransportError: Network failure, invalid JSON, a non-object body,
                or an HTTP error status without an ``error`` field.
        """
        try:
            response = await self._client.post(self.url, json=payload.model_dump())
        except httpx.HTTPError as e:
            raise TransportError(f"Backend request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Backend returned invalid JSON (status {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise TransportError(f"Backend returned a non-object body: {type(data).__name__}")

        error = data.get("error")
        if error:
            message = error if isinstance(error, str) else str(error)
            logger.info(f"Backend refused request (status {response.status_code}): {message}")
            raise BackendError(message)

        if response.status_code >= 400:
            raise TransportError(f"Backend request failed with status {response.status_code}")

        try:
            return BackendResponse.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError("Backend returned a malformed body") from e

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
