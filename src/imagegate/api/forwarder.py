"""Request forwarding from the public endpoint to the image backend.

:class:`RequestForwarder` is the only piece of request logic in the gateway:

1. Normalize the validated client request into a :class:`BackendRequest`
   (``userEmail`` becomes ``user_id``, a missing plan becomes the default).
2. Issue exactly one backend call, bounded by the configured timeout.
3. Shape the backend answer into a :class:`GenerateImageResponse`.

Errors are not converted here.  :class:`~imagegate.core.backend.BackendError`,
:class:`~imagegate.core.backend.TransportError` and its timeout subclass
propagate to the ``POST /api/generate-images`` route in
:mod:`imagegate.api.main`, whose ``try``/``except`` block owns the mapping to
HTTP status codes.
"""

from __future__ import annotations

import logging

from imagegate.api.models import GenerateImageRequest, GenerateImageResponse
from imagegate.core.backend import BackendClient, BackendRequest
from imagegate.core.config import GatewayConfig
from imagegate.core.timeout import with_timeout

logger = logging.getLogger(__name__)


class RequestForwarder:
    """Forwards validated generation requests to the backend.

    Stateless apart from its collaborators, so one instance serves every
    request of the process.
    """

    def __init__(self, config: GatewayConfig, client: BackendClient) -> None:
        self._config = config
        self._client = client

    def build_backend_request(self, req: GenerateImageRequest) -> BackendRequest:
        """Build the normalized backend payload for *req*."""
        return BackendRequest(
            prompt=req.prompt,
            user_id=req.user_email,
            plan=req.plan or self._config.default_plan,
        )

    async def forward(self, req: GenerateImageRequest) -> GenerateImageResponse:
        """Send *req* to the backend and return the client-facing answer.

        Args:
            req: Validated client request.

        Returns:
            Success body carrying the backend's ``image``, ``remaining`` and
            ``plan`` values.

        Raises:
            BackendError: The backend refused the request.
            BackendTimeoutError: The backend did not answer in time.
            TransportError: The backend call failed otherwise.
        """
        payload = self.build_backend_request(req)
        logger.info(
            f"Forwarding generation request: prompt_len={len(payload.prompt)} "
            f"plan={payload.plan} provider={req.provider} model={req.model_id}"
        )

        result = await with_timeout(
            self._client.generate(payload),
            self._config.backend_timeout_seconds,
        )

        return GenerateImageResponse(
            provider=self._config.provider_label,
            image=result.image,
            remaining=result.remaining,
            plan=result.plan,
        )
