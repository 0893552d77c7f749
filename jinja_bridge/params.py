# jinja_bridge/params.py
"""
Template parameters: accept loose containers, merge registered defaults.

Design:
- normalize_params() turns whatever the caller passed (mapping, model,
  dataclass, pairs, plain object) into a dict.
- DefaultParamsMixin keeps defaults per template name; "*" applies to all.
- Merging is recursive for nested mappings; caller values always win.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, Dict

from pydantic import BaseModel

__all__ = ["TEMPLATE_ALL", "InvalidArgumentError", "DefaultParamsMixin", "normalize_params", "merge_recursive"]

# Defaults registered under this name apply to every template
TEMPLATE_ALL = "*"


class InvalidArgumentError(ValueError):
    """Raised for unusable parameter containers or default registrations."""


def normalize_params(params: Any) -> Dict[str, Any]:
    """
    Cast template parameters to a plain dict.

    Raises:
        InvalidArgumentError: for scalars and other unsupported values.
    """
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return dict(params)
    if isinstance(params, BaseModel):
        return params.model_dump()
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        # shallow, like reading public properties
        return {f.name: getattr(params, f.name) for f in dataclasses.fields(params)}
    if isinstance(params, (str, bytes, int, float, bool)):
        raise InvalidArgumentError(
            f"Template parameters must be a mapping or object; received {type(params).__name__}"
        )
    if isinstance(params, Iterable):
        try:
            return dict(params)
        except (TypeError, ValueError) as ex:
            raise InvalidArgumentError(f"Template parameters must be key/value pairs: {ex}") from ex
    if hasattr(params, "__dict__"):
        return {k: v for k, v in vars(params).items() if not k.startswith("_")}
    raise InvalidArgumentError(
        f"Template parameters must be a mapping or object; received {type(params).__name__}"
    )


def merge_recursive(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return `base` with `override` applied on top; nested mappings are merged."""
    out: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = out.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            out[key] = merge_recursive(current, value)
        else:
            out[key] = value
    return out


class DefaultParamsMixin:
    """Per-template default parameters."""

    _default_params: Dict[str, Dict[str, Any]]

    def add_default_param(self, template_name: str, param: str, value: Any) -> None:
        """
        Register a default parameter for a template (or TEMPLATE_ALL).

        Raises:
            InvalidArgumentError: when the template name or param is empty.
        """
        if not isinstance(template_name, str) or not template_name:
            raise InvalidArgumentError("template_name must be a non-empty string")
        if not isinstance(param, str) or not param:
            raise InvalidArgumentError("param must be a non-empty string")

        if not hasattr(self, "_default_params"):
            self._default_params = {}
        self._default_params.setdefault(template_name, {})[param] = value

    def get_default_params(self, template: str) -> Dict[str, Any]:
        """Defaults registered for exactly `template` (globals not included)."""
        return dict(getattr(self, "_default_params", {}).get(template, {}))

    def merge_params(self, template: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Layer global defaults < template defaults < `params`."""
        defaults = merge_recursive(self.get_default_params(TEMPLATE_ALL), self.get_default_params(template))
        return merge_recursive(defaults, params)
