"""Core functionality for the Image Gateway.

- **GatewayConfig / config**: Configuration management using Pydantic Settings
- **BackendClient**: Async ``httpx`` client for the image-generation backend
- **with_timeout**: Latency bound for backend calls
- **ImageProvider**: Catalogue of provider keys clients may request

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration, IMAGEGATE_ prefix, optional .env file

2. **Backend Layer** (backend.py, timeout.py):
   - Wire models for the backend protocol
   - Typed errors: BackendError, TransportError, BackendTimeoutError

3. **Catalogue** (providers.py):
   - Recognized provider keys and their known model ids
"""

from imagegate.core.backend import (
    BackendClient,
    BackendError,
    BackendRequest,
    BackendResponse,
    BackendTimeoutError,
    TransportError,
)
from imagegate.core.config import GatewayConfig, config
from imagegate.core.providers import ImageProvider, list_providers
from imagegate.core.timeout import with_timeout

__all__ = [
    "BackendClient",
    "BackendError",
    "BackendRequest",
    "BackendResponse",
    "BackendTimeoutError",
    "TransportError",
    "GatewayConfig",
    "config",
    "ImageProvider",
    "list_providers",
    "with_timeout",
]
