# jinja_bridge/schemas.py
"""
Data schemas: registered template paths and renderer configuration.

Design:
- Pydantic v2 with strict config (extra fields forbidden).
- Every TemplatesConfig field is optional; defaults are documented inline.
- Loose inputs (bare path lists, non-string extensions) are normalised
  before validation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .settings import Settings

__all__ = ["TemplatePath", "TemplatesConfig", "DEFAULT_EXTENSION"]

DEFAULT_EXTENSION = "html"


class _StrictModel(BaseModel):
    """Base: forbid unknown fields, strip whitespace in strings."""
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
        populate_by_name=True,
        arbitrary_types_allowed=False,
    )


class TemplatePath(_StrictModel):
    """A template directory and the namespace it is registered under."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Template root directory.")
    namespace: Optional[str] = Field(default=None, description="Namespace; None for the main namespace.")


class TemplatesConfig(_StrictModel):
    """Renderer + environment configuration."""

    # Lookup
    paths: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Namespace -> directories. '' is the main namespace; a bare list means main.",
        examples=[{"": ["templates"], "blog": ["templates/blog"]}],
    )
    extension: str = Field(
        default=DEFAULT_EXTENSION,
        description="Suffix appended to template names without one. Non-strings fall back to 'html'.",
    )

    # Asset/URL functions
    assets_url: str = Field(default="", description="Prefix for asset() URLs, e.g. a CDN host.")
    assets_version: Optional[Union[str, int]] = Field(
        default="",
        description="Default ?v= cache-buster for asset(); None/'' disables it, 0 does not.",
    )

    # Jinja2 environment
    debug: bool = Field(default=False, description="Use DebugUndefined (unless strict_variables).")
    strict_variables: bool = Field(default=True, description="Use StrictUndefined: fail fast on missing keys.")
    auto_reload: bool = Field(default=False, description="Recheck template sources on every load.")
    autoescape: Union[bool, List[str]] = Field(
        default_factory=lambda: ["html", "htm", "xml"],
        description="True/False, or file extensions to autoescape.",
    )
    trim_blocks: bool = Field(default=True, description="Remove the first newline after a block tag.")
    lstrip_blocks: bool = Field(default=True, description="Strip whitespace before block tags.")
    cache_dir: Optional[str] = Field(default=None, description="Bytecode cache directory; None disables it.")
    optimizations: bool = Field(default=True, description="Let the Jinja2 compiler optimise templates.")
    extensions: List[str] = Field(default_factory=list, description="Jinja2 extension import paths.")
    globals: Dict[str, Any] = Field(default_factory=dict, description="Variables available to all templates.")

    @field_validator("paths", mode="before")
    @classmethod
    def _coerce_paths(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, str):
            return {"": [v]}
        if isinstance(v, (list, tuple)):
            return {"": list(v)}
        if isinstance(v, dict):
            out: Dict[str, List[Any]] = {}
            for ns, dirs in v.items():
                # numeric or missing keys mean the main namespace
                key = ns if isinstance(ns, str) else ""
                items = [dirs] if isinstance(dirs, str) else list(dirs)
                out.setdefault(key, []).extend(str(d) for d in items)
            return out
        return v

    @field_validator("extension", mode="before")
    @classmethod
    def _coerce_extension(cls, v: Any) -> str:
        return v if isinstance(v, str) else DEFAULT_EXTENSION

    @classmethod
    def from_settings(cls, s: Settings) -> "TemplatesConfig":
        """Build the config from environment-backed Settings."""
        return cls(
            paths=s.template_paths(),
            extension=s.TEMPLATE_EXTENSION,
            assets_url=s.ASSETS_URL,
            assets_version=s.ASSETS_VERSION,
            debug=s.JINJA_DEBUG,
            strict_variables=s.JINJA_STRICT_VARIABLES,
            auto_reload=s.JINJA_AUTO_RELOAD,
            cache_dir=s.JINJA_CACHE_DIR,
        )
