"""Publishing: wrap a ``paths`` object into a full OpenAPI 3.0 document and
serve it next to Swagger UI on a FastAPI application."""

import copy

from pydantic import BaseModel

SECURITY_SCHEMES = {
    "BearerAuth": {
        "type": "apiKey",
        "in": "header",
        "name": "Authorization",
        "description": "Enter your JWT token (without 'Bearer ' prefix)",
    },
}


class ApiInfo(BaseModel):
    """The info block and server URL of the published document."""

    title: str = "API Docs"
    version: str = "1.0.0"
    description: str = "API Documentation"
    server_url: str = "http://localhost:3000"


def build_openapi_document(paths: dict, info: ApiInfo | None = None, enabled: bool = True) -> dict | None:
    """Full OpenAPI document around ``paths``; None when publishing is disabled."""
    if not enabled:
        return None
    info = info or ApiInfo()
    return {
        "openapi": "3.0.0",
        "info": {"title": info.title, "version": info.version, "description": info.description},
        "servers": [{"url": info.server_url}],
        "components": {"securitySchemes": copy.deepcopy(SECURITY_SCHEMES)},
        "security": [{"BearerAuth": []}],
        "paths": dict(paths),
    }


def mount_docs(app, paths: dict, info: ApiInfo | None = None, enabled: bool = True, docs_url: str = "/api-docs") -> None:
    """Serve the document at ``{docs_url}/openapi.json`` and Swagger UI at ``docs_url``.

    ``app`` is a FastAPI application. Nothing is registered when disabled.
    """
    document = build_openapi_document(paths, info, enabled)
    if document is None:
        return

    from fastapi.openapi.docs import get_swagger_ui_html
    from fastapi.responses import HTMLResponse, JSONResponse

    docs_url = docs_url.rstrip("/")
    openapi_url = f"{docs_url}/openapi.json"
    title = document["info"]["title"]

    def openapi_json() -> JSONResponse:
        return JSONResponse(document)

    def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(
            openapi_url=openapi_url,
            title=title,
            swagger_ui_parameters={"persistAuthorization": True},
        )

    app.add_api_route(openapi_url, openapi_json, methods=["GET"], include_in_schema=False)
    app.add_api_route(docs_url, swagger_ui, methods=["GET"], include_in_schema=False)
