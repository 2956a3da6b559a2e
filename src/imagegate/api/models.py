"""Pydantic request and response models for the Image Gateway API.

These models define the JSON schema of the client-facing endpoint.  The
backend wire models (:class:`~imagegate.core.backend.BackendRequest` and
:class:`~imagegate.core.backend.BackendResponse`) live next to the client
that speaks that protocol.

Models
------
GenerateImageRequest
    Validated payload of ``POST /api/generate-images``.
GenerateImageResponse
    Success body relayed to the caller.
ErrorResponse
    Body of every non-200 answer produced by the gateway.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GenerateImageRequest(BaseModel):
    """Request body for the ``POST /api/generate-images`` endpoint.

    The frontend sends camelCase keys (``userEmail``, ``modelId``); the
    snake_case attribute names are accepted as well.

    Attributes:
        prompt: Text prompt, already stripped of surrounding whitespace.
        user_email: Identifier of the end user, forwarded as ``user_id``.
        plan: Subscription plan hint.  ``None`` means "use the default plan".
        provider: Optional provider key (see
            :class:`~imagegate.core.providers.ImageProvider`).
        model_id: Optional model identifier hint.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(
        ...,
        min_length=1,
        description="Text prompt describing the image.",
    )
    user_email: str = Field(
        ...,
        alias="userEmail",
        min_length=1,
        description="User identifier (the login e-mail).",
    )
    plan: str | None = Field(
        default=None,
        description="Plan name; the gateway default is used when omitted.",
    )
    provider: str | None = Field(
        default=None,
        description="Provider key hint (e.g. 'pollinations').",
    )
    model_id: str | None = Field(
        default=None,
        alias="modelId",
        description="Model identifier hint.",
    )


class GenerateImageResponse(BaseModel):
    """Success body of ``POST /api/generate-images``.

    Attributes:
        provider: Label of the service that produced the image.
        image: Opaque image reference returned by the backend (URL or data URI).
        remaining: Quota left for the user, as reported by the backend.
        plan: Plan the backend applied to the request.
    """

    provider: str
    image: str | None = None
    remaining: int | float | None = None
    plan: str | None = None


class ErrorResponse(BaseModel):
    """Error body returned for every non-200 status."""

    error: str
