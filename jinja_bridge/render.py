# jinja_bridge/render.py
"""
Template rendering: thin adapter over a Jinja2 Environment.

Design:
- Names like "blog::post" become "@blog/post.html" (namespace + suffix).
- Default params (global < raw name < normalised name) merge under the
  caller's params.
- Jinja2 errors, and errors raised inside template functions, propagate
  untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from jinja2 import Environment

from .extension import UrlExtension
from .loader import MAIN_NAMESPACE, LoaderError, NamespacedFileSystemLoader, PathLike
from .params import DefaultParamsMixin, merge_recursive, normalize_params
from .schemas import DEFAULT_EXTENSION, TemplatePath

__all__ = ["JinjaRenderer"]

logger = logging.getLogger(__name__)

# "namespace::template" -> "@namespace/template"
_NAMESPACED_RE = re.compile(r"^([^:]+)::(.*)$")
_EXTENSION_RE = re.compile(r"\.[a-z]+$", re.IGNORECASE | re.ASCII)


class JinjaRenderer(DefaultParamsMixin):
    """Render templates by name through a Jinja2 environment."""

    def __init__(self, environment: Optional[Environment] = None, suffix: Any = DEFAULT_EXTENSION):
        """
        Args:
            environment: Pre-built environment. When None, a default
                environment over a NamespacedFileSystemLoader is created.
                When it has no loader, a default loader is attached.
            suffix: Extension appended to names without one. Non-strings
                fall back to "html".
        """
        if environment is None:
            environment = Environment(loader=NamespacedFileSystemLoader())

        if environment.loader is None:
            environment.loader = NamespacedFileSystemLoader()

        self.environment = environment
        self.loader = environment.loader
        self.suffix = suffix if isinstance(suffix, str) else DEFAULT_EXTENSION
        self._default_params = {}

        logger.debug(f"Initialized renderer ({type(self.loader).__name__}, suffix={self.suffix})")

    def render(self, name: str, params: Any = None) -> str:
        """
        Render a template by name with params.

        Raises:
            jinja2.TemplateNotFound, jinja2.TemplateSyntaxError,
            jinja2.UndefinedError: straight from Jinja2.
        """
        params = normalize_params(params)

        # Defaults: global < requested name < normalized name
        defaults = self.merge_params(name, {})
        name = self.normalize_template(name)
        defaults = merge_recursive(defaults, self.get_default_params(name))

        return self.environment.get_template(name).render(merge_recursive(defaults, params))

    def add_path(self, path: PathLike, namespace: Optional[str] = None) -> None:
        """
        Add a template directory, optionally under a namespace.

        Raises:
            LoaderError: if the directory is rejected by the loader.
        """
        if not isinstance(self.loader, NamespacedFileSystemLoader):
            raise LoaderError(f"{type(self.loader).__name__} does not support adding template paths.")
        self.loader.add_path(path, namespace or MAIN_NAMESPACE)

    def get_paths(self) -> List[TemplatePath]:
        """Registered template directories, main namespace reported as None."""
        if not isinstance(self.loader, NamespacedFileSystemLoader):
            return []

        paths: List[TemplatePath] = []
        for namespace in self.loader.get_namespaces():
            name = namespace if namespace != MAIN_NAMESPACE else None
            for path in self.loader.get_paths(namespace):
                paths.append(TemplatePath(path=path, namespace=name))
        return paths

    def add_extension(self, extension: UrlExtension) -> None:
        """Expose an extension's functions to templates."""
        extension.register(self.environment)

    def normalize_template(self, template: str) -> str:
        """
        Normalize namespaced template.

        Normalizes templates in the format "namespace::template" to
        "@namespace/template", then appends the suffix if no extension
        is present.
        """
        template = _NAMESPACED_RE.sub(r"@\1/\2", template, count=1)
        if not _EXTENSION_RE.search(template):
            return f"{template}.{self.suffix}"
        return template
