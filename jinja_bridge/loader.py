# jinja_bridge/loader.py
"""
Namespaced filesystem loader for Jinja2.

Template names:
- "@blog/post.html" -> "post.html" searched in the "blog" namespace paths.
- "post.html"       -> searched in the main namespace paths.

Each namespace keeps an ordered list of directories; lookups inside a
namespace are delegated to jinja2.FileSystemLoader, so the first directory
holding the file wins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from jinja2 import BaseLoader, Environment, FileSystemLoader, TemplateNotFound
from jinja2.exceptions import TemplateError

__all__ = ["MAIN_NAMESPACE", "LoaderError", "NamespacedFileSystemLoader"]

logger = logging.getLogger(__name__)

MAIN_NAMESPACE = "__main__"

PathLike = Union[str, "os.PathLike[str]"]


class LoaderError(TemplateError):
    """Raised when a template directory cannot be registered."""


def _check_path(path: PathLike) -> str:
    raw = os.fspath(path)
    if not Path(raw).is_dir():
        raise LoaderError(f'The "{raw}" directory does not exist.')
    # keep "/" usable as a root
    return raw.rstrip("/\\") or raw


class NamespacedFileSystemLoader(BaseLoader):
    """Load templates from directories grouped by namespace."""

    def __init__(
        self,
        paths: Optional[Iterable[PathLike]] = None,
        encoding: str = "utf-8",
        followlinks: bool = False,
    ):
        self.encoding = encoding
        self.followlinks = followlinks
        self._paths: Dict[str, List[str]] = {}
        if paths:
            self.set_paths(paths)

    # --- Registration --------------------------------------------------------

    def get_namespaces(self) -> List[str]:
        return list(self._paths)

    def get_paths(self, namespace: str = MAIN_NAMESPACE) -> List[str]:
        return list(self._paths.get(namespace, []))

    def set_paths(self, paths: Union[PathLike, Iterable[PathLike]], namespace: str = MAIN_NAMESPACE) -> None:
        if isinstance(paths, (str, os.PathLike)):
            paths = [paths]
        checked = [_check_path(p) for p in paths]
        self._paths[namespace] = checked

    def add_path(self, path: PathLike, namespace: str = MAIN_NAMESPACE) -> None:
        """
        Append a directory to a namespace.

        Raises:
            LoaderError: if the directory does not exist.
        """
        checked = _check_path(path)
        self._paths.setdefault(namespace, []).append(checked)
        logger.debug(f"Registered template path {checked} (namespace={namespace})")

    def prepend_path(self, path: PathLike, namespace: str = MAIN_NAMESPACE) -> None:
        """Insert a directory ahead of the namespace's existing ones."""
        checked = _check_path(path)
        self._paths.setdefault(namespace, []).insert(0, checked)
        logger.debug(f"Prepended template path {checked} (namespace={namespace})")

    # --- Jinja2 loader API ---------------------------------------------------

    def _split_name(self, template: str) -> Tuple[str, str]:
        if template.startswith("@"):
            namespace, sep, name = template[1:].partition("/")
            if not sep or not namespace:
                raise TemplateNotFound(template, f'Malformed namespaced template name "{template}".')
            return namespace, name
        return MAIN_NAMESPACE, template

    def get_source(self, environment: Environment, template: str) -> Tuple[str, Optional[str], Optional[Callable[[], bool]]]:
        namespace, name = self._split_name(template)
        paths = self._paths.get(namespace)
        if not paths:
            raise TemplateNotFound(template, f'There are no registered paths for namespace "{namespace}".')
        try:
            return FileSystemLoader(paths, encoding=self.encoding, followlinks=self.followlinks).get_source(
                environment, name
            )
        except TemplateNotFound as ex:
            raise TemplateNotFound(template) from ex

    def list_templates(self) -> List[str]:
        found: List[str] = []
        for namespace, paths in self._paths.items():
            names = FileSystemLoader(paths, encoding=self.encoding, followlinks=self.followlinks).list_templates()
            if namespace != MAIN_NAMESPACE:
                names = [f"@{namespace}/{n}" for n in names]
            found.extend(names)
        return sorted(set(found))
