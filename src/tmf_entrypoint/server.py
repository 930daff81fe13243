"""HTTP application for the TMF discovery entrypoint."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response
from starlette.routing import Route

from .config import Settings
from .links import (
    ERROR_BODY,
    ERROR_STATUS,
    EntrypointResponder,
    render_document,
    strip_trailing_slash,
)
from .logging import log_request, log_response
from .openapi import SpecificationLoader

logger = logging.getLogger(__name__)


def build_app(settings: Settings, loader: Optional[Any] = None) -> Starlette:
    """Build the Starlette app.

    ``loader`` is anything with a ``get_specification()`` accessor; by default
    the document is read from ``settings.openapi_source``.
    """
    if loader is None:
        loader = SpecificationLoader(
            settings.openapi_source, cache_seconds=settings.openapi_cache_seconds
        )
    identity = settings.identity()
    responder = EntrypointResponder(
        loader.get_specification, identity, settings.default_base_path
    )
    base = strip_trailing_slash(settings.default_base_path)

    def entrypoint(_request: Request) -> Response:
        status_code, content = responder()
        return Response(content, status_code=status_code, media_type="application/json")

    def openapi_document(_request: Request) -> Response:
        try:
            spec = loader.get_specification()
            if spec is None:
                return JSONResponse({"error": "Not Found"}, status_code=404)
            content = render_document(spec)
        except Exception as exc:
            logger.error("Failed to serve OpenAPI spec: %s", exc, exc_info=exc)
            return JSONResponse(ERROR_BODY, status_code=ERROR_STATUS)
        return Response(content, media_type="application/json")

    async def api_docs(_request: Request) -> HTMLResponse:
        return HTMLResponse(_swagger_ui_html(f"{base}/openapi", identity.component_name))

    async def healthcheck(_request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "component": identity.component_name,
                "release": identity.release_name,
            }
        )

    routes: List[Route] = [
        Route("/", entrypoint, methods=["GET"]),
        Route("/health", healthcheck, methods=["GET"]),
    ]
    if base:
        routes.extend(
            [
                Route(base, entrypoint, methods=["GET"]),
                Route(f"{base}/", entrypoint, methods=["GET"]),
            ]
        )
    routes.extend(
        [
            Route(f"{base}/openapi", openapi_document, methods=["GET"]),
            Route(f"{base}/api-docs", api_docs, methods=["GET"]),
        ]
    )

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["*"],
        ),
        Middleware(RequestLoggingMiddleware),
    ]
    return Starlette(routes=routes, middleware=middleware)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):  # type: ignore[no-untyped-def]
        log_request(logger, request.method, request.url.path, request.headers)
        response = await call_next(request)
        log_response(logger, response.status_code, request.url.path)
        return response


def _swagger_ui_html(openapi_url: str, title: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>{title} - Swagger UI</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    window.ui = SwaggerUIBundle({{url: "{openapi_url}", dom_id: "#swagger-ui"}});
  </script>
</body>
</html>
"""
