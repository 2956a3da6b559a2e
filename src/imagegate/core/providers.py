"""Catalogue of image providers a client may ask for.

Clients can send a ``provider`` key and a ``modelId`` hint alongside their
prompt.  The gateway does not route on these values (provider selection is
performed by the backend) but it does reject provider keys it does not know,
and it publishes the catalogue via ``GET /api/providers`` so that frontends
can build their model pickers.
"""

from __future__ import annotations

from enum import Enum


class ImageProvider(str, Enum):
    """Recognized provider keys."""

    POLLINATIONS = "pollinations"
    FLUX = "flux"
    STABILITY = "stability"
    OPENAI = "openai"


# Known model ids per provider.  Informational only: unknown model ids are
# forwarded as-is because the backend owns the final decision.
PROVIDER_MODELS: dict[ImageProvider, tuple[str, ...]] = {
    ImageProvider.POLLINATIONS: ("flux", "turbo"),
    ImageProvider.FLUX: ("flux-schnell", "flux-dev"),
    ImageProvider.STABILITY: ("sdxl", "sd3-medium"),
    ImageProvider.OPENAI: ("dall-e-3", "gpt-image-1"),
}


def is_known_provider(key) -> bool:
    """Return ``True`` if *key* is one of the :class:`ImageProvider` values.

    Anything that is not a non-empty string (e.g. a JSON list or object sent
    as ``provider``) is unknown.
    """
    if not isinstance(key, str) or not key:
        return False
    return key in {p.value for p in ImageProvider}


def list_providers() -> list[dict]:
    """Return the catalogue as JSON-serialisable dictionaries.

    Returns:
        List of ``{"id": <provider key>, "models": [<model id>, ...]}``
        entries in declaration order.
    """
    return [{"id": p.value, "models": list(PROVIDER_MODELS.get(p, ()))} for p in ImageProvider]
