# jinja_bridge/factory.py
"""
Factories: build a configured Jinja2 Environment and JinjaRenderer.
"""

from __future__ import annotations

import logging
from typing import Optional, Type

from jinja2 import (
    BaseLoader,
    DebugUndefined,
    Environment,
    FileSystemBytecodeCache,
    StrictUndefined,
    Undefined,
    select_autoescape,
)

from .extension import UrlExtension
from .helpers import AbsoluteUrlGenerator, PathGenerator
from .loader import NamespacedFileSystemLoader
from .render import JinjaRenderer
from .schemas import TemplatesConfig

__all__ = ["create_environment", "create_renderer"]

logger = logging.getLogger(__name__)


def _undefined_for(config: TemplatesConfig) -> Type[Undefined]:
    if config.strict_variables:
        return StrictUndefined   # fail fast on missing keys
    if config.debug:
        return DebugUndefined    # leave {{ missing }} visible in output
    return Undefined


def create_environment(
    config: Optional[TemplatesConfig] = None,
    loader: Optional[BaseLoader] = None,
    url_helper: Optional[PathGenerator] = None,
    server_url_helper: Optional[AbsoluteUrlGenerator] = None,
) -> Environment:
    """
    Create a Jinja2 environment from config.

    The URL functions are registered only when both helpers are given.

    Raises:
        ValueError: if exactly one of the URL helpers is given.
    """
    config = config or TemplatesConfig()

    if (url_helper is None) != (server_url_helper is None):
        missing = "url_helper" if url_helper is None else "server_url_helper"
        raise ValueError(f"URL functions need both helpers; missing {missing}")

    autoescape = (
        select_autoescape(enabled_extensions=config.autoescape)
        if isinstance(config.autoescape, list)
        else config.autoescape
    )

    env = Environment(
        loader=loader or NamespacedFileSystemLoader(),
        autoescape=autoescape,
        undefined=_undefined_for(config),
        auto_reload=config.auto_reload,
        optimized=config.optimizations,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        extensions=config.extensions,
        bytecode_cache=FileSystemBytecodeCache(config.cache_dir) if config.cache_dir else None,
    )

    if url_helper is not None and server_url_helper is not None:
        UrlExtension(
            server_url_helper,
            url_helper,
            config.assets_url,
            config.assets_version,
        ).register(env)

    env.globals.update(config.globals)

    logger.debug(
        f"Created Jinja2 environment (undefined={env.undefined.__name__}, "
        f"cache={'on' if config.cache_dir else 'off'}, url_functions={url_helper is not None})"
    )
    return env


def create_renderer(
    config: Optional[TemplatesConfig] = None,
    url_helper: Optional[PathGenerator] = None,
    server_url_helper: Optional[AbsoluteUrlGenerator] = None,
) -> JinjaRenderer:
    """
    Create a renderer with every configured template path registered.

    Raises:
        LoaderError: if a configured directory does not exist.
    """
    config = config or TemplatesConfig()
    env = create_environment(config, url_helper=url_helper, server_url_helper=server_url_helper)
    renderer = JinjaRenderer(env, config.extension)

    for namespace, paths in config.paths.items():
        for path in paths:
            renderer.add_path(path, namespace or None)

    return renderer
