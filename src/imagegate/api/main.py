"""Image Gateway — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI application factory, the module-level ``app`` instance, all REST
routes, and the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The gateway is a stateless forwarder:

- **Validation** of the client's JSON body happens in
  :mod:`imagegate.api.validation`; failures answer 400.
- **Forwarding** is performed by :class:`~imagegate.api.forwarder.RequestForwarder`,
  which issues one bounded call through a shared
  :class:`~imagegate.core.backend.BackendClient`.
- **Error mapping** happens at the route boundary: every failure becomes an
  ``{"error": ...}`` body with a status code, and internal exception details
  are logged, never returned.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
POST      ``/api/generate-images``      Forward a prompt to the backend
GET       ``/api/providers``            Provider/model catalogue
GET       ``/api/health``               Liveness probe
========  ============================  ====================================

Status Codes (``POST /api/generate-images``)
--------------------------------------------
- 200 — ``{provider, image, remaining, plan}``
- 400 — missing/invalid fields or a body that is not a JSON object
- 403 — backend reported an error (500 when ``backend_error_status=500``)
- 500 — timeout, network failure, malformed backend answer, anything else

Usage
-----
CLI (installed entry point)::

    imagegate

Direct invocation::

    python -m imagegate.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from imagegate import __version__
from imagegate.api.forwarder import RequestForwarder
from imagegate.api.models import ErrorResponse, GenerateImageResponse
from imagegate.api.validation import ValidationError, validate_generate_request
from imagegate.core.backend import BackendClient, BackendError, BackendTimeoutError, TransportError
from imagegate.core.config import GatewayConfig, config
from imagegate.core.providers import list_providers

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to generate image. Try again later."
TIMEOUT_MESSAGE = "Image generation timed out. Try again later."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    app_config: GatewayConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_config: Configuration to use.  Defaults to the global
            :data:`~imagegate.core.config.config` instance.
        transport: Optional ``httpx`` transport handed to the backend client
            (tests inject ``httpx.MockTransport``).

    Returns:
        A configured FastAPI application.
    """
    cfg = app_config if app_config is not None else config

    # -----------------------------------------------------------------------
    # Application lifecycle: backend client setup and teardown.
    # -----------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create the shared backend client on startup and close it on shutdown."""
        client = BackendClient(cfg, transport=transport)
        app.state.forwarder = RequestForwarder(cfg, client)
        logger.info(f"Backend client initialised for {cfg.backend_url}")

        yield  # Application runs here.

        await client.aclose()
        logger.info("Backend client closed on shutdown.")

    app = FastAPI(
        title="Image Gateway",
        description="Forwards image-generation prompts to a remote backend.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Routes.
    # -----------------------------------------------------------------------

    @app.post(
        "/api/generate-images",
        response_model=GenerateImageResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
            403: {"model": ErrorResponse, "description": "Backend refused the request"},
            500: {"model": ErrorResponse, "description": "Backend failure or timeout"},
        },
    )
    async def generate_images(request: Request):
        """Validate the client's prompt and forward it to the backend.

        The raw body is read here rather than bound to a Pydantic parameter so
        that incomplete requests answer 400 with the gateway's own message
        instead of FastAPI's 422.

        Returns:
            ``GenerateImageResponse`` as JSON, or an ``{"error": ...}`` body.
        """
        try:
            try:
                body = await request.json()
            except ValueError as e:
                raise ValidationError("Request body must be valid JSON") from e

            req = validate_generate_request(
                body, require_model_selection=cfg.require_model_selection
            )
            result = await request.app.state.forwarder.forward(req)
        except ValidationError as e:
            logger.info(f"Rejected generation request: {e}")
            return _error(400, str(e))
        except BackendError as e:
            return _error(cfg.backend_error_status, str(e))
        except BackendTimeoutError:
            logger.error("Backend timed out", exc_info=True)
            return _error(500, TIMEOUT_MESSAGE)
        except TransportError:
            logger.error("Error calling backend", exc_info=True)
            return _error(500, GENERIC_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Unexpected error while generating image")
            return _error(500, GENERIC_FAILURE_MESSAGE)

        return result.model_dump()

    @app.get("/api/providers")
    async def get_providers() -> dict:
        """Return the provider catalogue for frontend model pickers.

        Returns:
            Dictionary with ``providers`` (list of ``{id, models}``) and
            ``require_model_selection``.
        """
        return {
            "providers": list_providers(),
            "require_model_selection": cfg.require_model_selection,
        }

    @app.get("/api/health")
    async def health() -> dict:
        """Liveness probe.  Does not contact the backend."""
        return {"status": "ok", "version": __version__}

    return app


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~imagegate.core.config.config`
    (``IMAGEGATE_SERVER_HOST``, ``IMAGEGATE_SERVER_PORT``,
    ``IMAGEGATE_LOG_LEVEL``).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``imagegate`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "imagegate.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
