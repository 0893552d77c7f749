# jinja_bridge/extension.py
"""
URL functions for templates: path(), url(), absolute_url(), asset().

path() and url() go through the route-to-path helper; url() and
absolute_url() go through the server URL helper. asset() is local string
concatenation: assets_url + path + "?v=<version>" (no encoding).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from jinja2 import Environment

from .helpers import AbsoluteUrlGenerator, PathGenerator

__all__ = ["UrlFunction", "UrlExtension"]


class UrlFunction(str, Enum):
    """Template function names."""

    PATH = "path"
    URL = "url"
    ABSOLUTE_URL = "absolute_url"
    ASSET = "asset"


def _is_empty_version(version: Any) -> bool:
    # 0 and "0" are real versions
    return version is None or version == ""


class UrlExtension:
    """Binds the URL template functions to two URL helpers."""

    def __init__(
        self,
        server_url_helper: AbsoluteUrlGenerator,
        url_helper: PathGenerator,
        assets_url: Optional[str] = "",
        assets_version: Optional[Union[str, int]] = "",
    ):
        self.server_url_helper = server_url_helper
        self.url_helper = url_helper
        self.assets_url = assets_url or ""
        self.assets_version = assets_version

    def get_functions(self) -> Dict[UrlFunction, Callable[..., str]]:
        return {
            UrlFunction.PATH: self.render_uri,
            UrlFunction.URL: self.render_url,
            UrlFunction.ABSOLUTE_URL: self.render_url_from_path,
            UrlFunction.ASSET: self.render_asset_url,
        }

    def register(self, environment: Environment) -> None:
        environment.globals.update({fn.value: func for fn, func in self.get_functions().items()})

    def render_uri(
        self,
        route: Optional[str] = None,
        route_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
        fragment: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Relative path for a route, e.g. {{ path('article_show', {'id': 3}) }}
        -> "/article/3".
        """
        return self.url_helper.generate(
            route,
            route_params or {},
            query_params or {},
            fragment,
            options or {},
        )

    def render_url(
        self,
        route: Optional[str] = None,
        route_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
        fragment: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Absolute URL for a route: the path() result passed to the server URL helper."""
        return self.server_url_helper.generate(
            self.render_uri(route, route_params, query_params, fragment, options)
        )

    def render_url_from_path(self, path: str = "") -> str:
        """Absolute URL for an already known path."""
        return self.server_url_helper.generate(path)

    def render_asset_url(self, path: str, version: Optional[Union[str, int]] = None) -> str:
        """
        Asset URL with optional cache-buster, e.g.
        {{ asset('css/app.css', version=3) }} -> "css/app.css?v=3".
        """
        asset_version = version if not _is_empty_version(version) else self.assets_version
        suffix = "" if _is_empty_version(asset_version) else f"?v={asset_version}"
        return f"{self.assets_url}{path}{suffix}"
