# jinja_bridge/settings.py
"""
Settings: load .env, expose template directories, asset and Jinja2 options.
- TEMPLATES_DIR is the main namespace; it is skipped when missing.
- TEMPLATE_NAMESPACES adds named directories: "blog=/srv/blog;admin=/srv/admin".
- Boolean flags accept 1/true/yes/on.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Dict, List, Optional
from pathlib import Path
from dotenv import load_dotenv

__all__ = ["settings", "Settings"]

# Load .env from repo root
ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = ROOT / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)  # dev-friendly: .env wins locally


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    # Template lookup
    TEMPLATES_DIR: str = os.getenv("TEMPLATES_DIR", str(ROOT / "templates"))
    TEMPLATE_NAMESPACES: str = os.getenv("TEMPLATE_NAMESPACES", "")
    TEMPLATE_EXTENSION: str = os.getenv("TEMPLATE_EXTENSION", "html")

    # URLs
    ASSETS_URL: str = os.getenv("ASSETS_URL", "")
    ASSETS_VERSION: str = os.getenv("ASSETS_VERSION", "")
    BASE_URL: str = os.getenv("BASE_URL", "")

    # Jinja2
    JINJA_CACHE_DIR: Optional[str] = os.getenv("JINJA_CACHE_DIR") or None
    JINJA_DEBUG: bool = _flag("JINJA_DEBUG")
    JINJA_STRICT_VARIABLES: bool = _flag("JINJA_STRICT_VARIABLES", "1")
    JINJA_AUTO_RELOAD: bool = _flag("JINJA_AUTO_RELOAD")

    def template_paths(self) -> Dict[str, List[str]]:
        """Namespace -> directories; "" is the main namespace."""
        paths: Dict[str, List[str]] = {}
        if self.TEMPLATES_DIR and Path(self.TEMPLATES_DIR).is_dir():
            paths[""] = [self.TEMPLATES_DIR]

        for chunk in self.TEMPLATE_NAMESPACES.split(";"):
            if "=" not in chunk:
                continue
            ns, _, directory = chunk.partition("=")
            ns, directory = ns.strip(), directory.strip()
            if directory:
                paths.setdefault(ns, []).append(directory)
        return paths


settings = Settings()
