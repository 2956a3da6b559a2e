"""Validation utilities for incoming generation requests."""

import logging

from pydantic import ValidationError as PydanticValidationError

from imagegate.api.models import GenerateImageRequest
from imagegate.core.providers import is_known_provider

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when the client's request is incomplete or
    malformed.  The message is returned to the caller verbatim with HTTP 400.
    """

    pass


def _clean(value):
    """Strip string values; blank strings become ``None``."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def validate_generate_request(
    body, *, require_model_selection: bool = False
) -> GenerateImageRequest:
    """Turn a decoded JSON body into a :class:`GenerateImageRequest`.

    Args:
        body: The decoded JSON body (anything ``json.loads`` may return).
        require_model_selection: Require ``provider`` and ``modelId``.

    Returns:
        The validated request.

    Raises:
        ValidationError: If the body is not an object, a required field is
            missing or blank, or ``provider`` is not a recognized key.
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    prompt = _clean(body.get("prompt"))
    user_email = _clean(body.get("userEmail", body.get("user_email")))
    if not prompt or not user_email:
        raise ValidationError("Missing prompt or userEmail")

    provider = _clean(body.get("provider"))
    model_id = _clean(body.get("modelId", body.get("model_id")))
    if require_model_selection and (not provider or not model_id):
        raise ValidationError("Missing provider or modelId")

    if provider is not None and not is_known_provider(provider):
        raise ValidationError(f"Unknown provider: {provider}")

    try:
        return GenerateImageRequest(
            prompt=prompt,
            user_email=user_email,
            plan=_clean(body.get("plan")),
            provider=provider,
            model_id=model_id,
        )
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        logger.warning(f"Rejected request with invalid field types: {fields}")
        raise ValidationError(f"Invalid request fields: {fields}") from e
