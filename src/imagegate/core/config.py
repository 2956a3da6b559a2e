"""Configuration management for the Image Gateway.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the IMAGEGATE_ prefix,
allowing deployment-specific overrides without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (IMAGEGATE_* prefix)
2. .env file in the working directory
3. Default values defined in GatewayConfig

Example .env file:
    IMAGEGATE_BACKEND_URL=https://image-backend-pbt7.onrender.com/generate
    IMAGEGATE_BACKEND_TIMEOUT_SECONDS=45
    IMAGEGATE_BACKEND_ERROR_STATUS=403
    IMAGEGATE_REQUIRE_MODEL_SELECTION=false

Setting IMAGEGATE_BACKEND_TIMEOUT_SECONDS=None disables the backend timeout.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The FastAPI application reads it once when building the forwarder.

Usage Example
-------------
    from imagegate.core.config import config

    print(config.backend_url)
    print(config.backend_timeout_seconds)

Request Modes
-------------
The gateway supports two request shapes:
- Simple mode (default): only ``prompt`` and ``userEmail`` are required.
- Strict mode (``require_model_selection=True``): ``provider`` and ``modelId``
  are required as well, and ``provider`` must be a recognized key.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND_URL = "https://image-backend-pbt7.onrender.com/generate"


class GatewayConfig(BaseSettings):
    """Main configuration for the Image Gateway.

    Attributes
    ----------
    Backend Settings:
        backend_url : str
            Fixed endpoint that receives the normalized generation payload
        backend_timeout_seconds : float | None
            Upper bound on a single backend call; ``None`` disables the race
        backend_error_status : int
            HTTP status used when the backend reports an explicit error

    Request Settings:
        default_plan : str
            Plan forwarded when the client omits one
        provider_label : str
            ``provider`` value reported back to the client on success
        require_model_selection : bool
            Require ``provider`` and ``modelId`` on every request

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Bind port for uvicorn (1024-65535)
        cors_origins : str
            Comma-separated list of allowed origins, or ``*``
        log_level : str
            Root logging level applied by the CLI entry point

    Examples
    --------
        >>> custom = GatewayConfig(backend_timeout_seconds=10, backend_error_status=500)
        >>> custom.backend_error_status
        500
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMAGEGATE_",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="None",
    )

    # Backend settings
    backend_url: str = Field(
        default=DEFAULT_BACKEND_URL,
        description="Image-generation backend endpoint (POST, JSON body)",
    )
    backend_timeout_seconds: float | None = Field(
        default=60.0,
        description="Seconds to wait for the backend before giving up (None = no limit)",
        gt=0,
    )
    backend_error_status: int = Field(
        default=403,
        description="Status returned when the backend answers with an error field",
    )

    # Request settings
    default_plan: str = Field(
        default="free",
        description="Plan forwarded when the client does not supply one",
    )
    provider_label: str = Field(
        default="pollinations-backend",
        description="Provider name reported to the client on success",
    )
    require_model_selection: bool = Field(
        default=False,
        description="Require provider and modelId on every request",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated allowed CORS origins",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the CLI entry point",
    )

    @field_validator("backend_error_status")
    @classmethod
    def _check_error_status(cls, value: int) -> int:
        if value not in (403, 500):
            raise ValueError("backend_error_status must be 403 or 500")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        """Return ``cors_origins`` split into a list, ignoring blank entries."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Global configuration instance
# Loaded from environment variables (IMAGEGATE_* prefix) and .env file.
config = GatewayConfig()
