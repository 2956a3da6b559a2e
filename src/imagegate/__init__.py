"""Image Gateway - forwards image-generation prompts to a remote backend."""

__version__ = "0.1.0"

from imagegate.core.config import GatewayConfig, config

__all__ = [
    "GatewayConfig",
    "config",
]
