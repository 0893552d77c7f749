# jinja_bridge/helpers.py
"""
URL helpers used by the template functions.

- UrlHelper: route name + params -> relative path (via a Starlette/FastAPI
  router's url_path_for), with query string and fragment.
- ServerUrlHelper: relative path -> absolute URL against the current
  request's base URL (or a configured one).

Per-request state (matched route, base URL) lives in ContextVars, so
concurrent requests never see each other's values.
"""

from __future__ import annotations

import re
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import urlencode, urlsplit, urlunsplit

__all__ = [
    "PathGenerator",
    "AbsoluteUrlGenerator",
    "RouteUrlSource",
    "RouteResult",
    "UrlHelper",
    "ServerUrlHelper",
]

_ABSOLUTE_RE = re.compile(r"^([a-z][a-z0-9+.-]*:)?//", re.IGNORECASE)


# --- Capabilities ------------------------------------------------------------

class PathGenerator(Protocol):
    def generate(
        self,
        route_name: Optional[str] = None,
        route_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
        fragment: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str: ...


class AbsoluteUrlGenerator(Protocol):
    def generate(self, path: str = "") -> str: ...


class RouteUrlSource(Protocol):
    """Anything with Starlette's url_path_for (app, router, APIRouter)."""

    def url_path_for(self, name: str, /, **path_params: Any) -> Any: ...


# --- Route -> path -----------------------------------------------------------

@dataclass(frozen=True)
class RouteResult:
    """The route matched for the current request."""
    name: Optional[str]
    params: Dict[str, Any] = field(default_factory=dict)


class UrlHelper:
    """Generate relative URLs for named routes."""

    def __init__(self, router: RouteUrlSource):
        self.router = router
        self._route_result: ContextVar[Optional[RouteResult]] = ContextVar(
            f"route_result_{id(self)}", default=None
        )

    def set_route_result(self, name: Optional[str], params: Optional[Mapping[str, Any]] = None) -> None:
        self._route_result.set(RouteResult(name=name, params=dict(params or {})))

    def get_route_result(self) -> Optional[RouteResult]:
        return self._route_result.get()

    def generate(
        self,
        route_name: Optional[str] = None,
        route_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
        fragment: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Build "/path?query#fragment" for a route.

        options["reuse_result_params"] (default True) starts from the matched
        route's params; explicit route_params override them.

        Raises:
            RuntimeError: no route name given and no route matched.
            starlette.routing.NoMatchFound: unknown route or params.
        """
        options = options or {}
        result = self.get_route_result()

        if route_name is None:
            if result is None or not result.name:
                raise RuntimeError("Attempting to use matched result when none was injected; aborting")
            route_name = result.name

        params: Dict[str, Any] = {}
        if result is not None and options.get("reuse_result_params", True):
            params.update(result.params)
        params.update(route_params or {})

        path = str(self.router.url_path_for(route_name, **params))

        if query_params:
            path += "?" + urlencode(query_params, doseq=True)
        if fragment:
            path += "#" + fragment
        return path


# --- Path -> absolute URL ----------------------------------------------------

class ServerUrlHelper:
    """Turn paths into absolute URLs."""

    def __init__(self, base_url: str = ""):
        self.base_url = base_url or ""
        self._uri: ContextVar[Optional[str]] = ContextVar(f"server_uri_{id(self)}", default=None)

    def set_uri(self, url: str) -> None:
        """Bind the current request's base URL (e.g. request.base_url)."""
        self._uri.set(str(url))

    def generate(self, path: str = "") -> str:
        base = self._uri.get() or self.base_url
        path = path or ""
        if not base or _ABSOLUTE_RE.match(path):
            return path

        scheme, netloc, base_path, _, _ = urlsplit(base)
        if not path:
            return urlunsplit((scheme, netloc, base_path, "", ""))

        _, _, rel_path, query, frag = urlsplit(path)
        if not rel_path.startswith("/"):
            rel_path = base_path.rstrip("/") + "/" + rel_path
        return urlunsplit((scheme, netloc, rel_path, query, frag))
