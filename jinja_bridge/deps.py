# jinja_bridge/deps.py
"""
FastAPI dependencies
--------------------
Wires one process-wide JinjaRenderer to a FastAPI app: the URL helpers
resolve routes through the app's router and absolute URLs against the
incoming request.

Usage:
    app = FastAPI(dependencies=[Depends(bind_request)])
    init_renderer(app)

    @app.get("/posts/{slug}", name="post")
    async def post(slug: str):
        return render_response("blog::post", {"slug": slug})
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from .factory import create_renderer
from .helpers import ServerUrlHelper, UrlHelper
from .render import JinjaRenderer
from .schemas import TemplatesConfig
from .settings import settings

__all__ = ["init_renderer", "get_renderer", "close_renderer", "bind_request", "render_response"]

logger = logging.getLogger(__name__)

# Singletons
_renderer: Optional[JinjaRenderer] = None
_url_helper: Optional[UrlHelper] = None
_server_url_helper: Optional[ServerUrlHelper] = None


def init_renderer(app: FastAPI, config: Optional[TemplatesConfig] = None) -> JinjaRenderer:
    """
    Create the shared renderer for `app`.
    Config defaults to the environment-backed settings.
    """
    global _renderer, _url_helper, _server_url_helper

    config = config or TemplatesConfig.from_settings(settings)
    _url_helper = UrlHelper(app)
    _server_url_helper = ServerUrlHelper(settings.BASE_URL)
    _renderer = create_renderer(config, url_helper=_url_helper, server_url_helper=_server_url_helper)

    logger.debug(f"Renderer ready with {len(_renderer.get_paths())} template path(s)")
    return _renderer


def get_renderer() -> JinjaRenderer:
    """Return the shared renderer (usable as a FastAPI dependency)."""
    if _renderer is None:
        raise RuntimeError("Renderer not initialised; call init_renderer(app) at startup.")
    return _renderer


def close_renderer() -> None:
    """Drop the shared renderer and helpers."""
    global _renderer, _url_helper, _server_url_helper
    _renderer = None
    _url_helper = None
    _server_url_helper = None


async def bind_request(request: Request) -> None:
    """
    Bind the request's base URL and matched route to the URL helpers.
    Must stay async: the values are ContextVars and have to be set in the
    request's own task.
    """
    if _server_url_helper is not None:
        _server_url_helper.set_uri(str(request.base_url))
    if _url_helper is not None:
        route = request.scope.get("route")
        _url_helper.set_route_result(getattr(route, "name", None), request.path_params)


def render_response(name: str, params: Any = None, *, status_code: int = 200) -> HTMLResponse:
    """Render a template into an HTMLResponse."""
    return HTMLResponse(get_renderer().render(name, params), status_code=status_code)
