"""Image Gateway — FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request/response
models, request validation, and the request forwarder.

Modules
-------
main
    FastAPI application factory, route handlers, and the ``main()`` CLI
    entry point.
models
    Pydantic models for the client-facing request and response bodies.
validation
    Required-field and provider checks that answer 400.
forwarder
    Normalizes a request and relays it to the backend.
"""
