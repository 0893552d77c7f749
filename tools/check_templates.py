"""
Dev utility: verify template directories + list the templates they expose.
- Reads the same .env settings as the app.
- Prints paths per namespace, then every discoverable template.
- Optional: exits non-zero on failure for CI.

This is not required for running the app.
"""

from __future__ import annotations

import sys
from typing import Optional

from jinja_bridge.factory import create_renderer
from jinja_bridge.loader import LoaderError
from jinja_bridge.schemas import TemplatesConfig
from jinja_bridge.settings import settings


def main(config: Optional[TemplatesConfig] = None) -> int:
    config = config or TemplatesConfig.from_settings(settings)
    print("Extension:", config.extension)
    print("Assets   :", config.assets_url or "—", f"(v={config.assets_version or '—'})")

    if not config.paths:
        print("No template paths. Set TEMPLATES_DIR or TEMPLATE_NAMESPACES in .env")
        return 1

    try:
        renderer = create_renderer(config)
    except LoaderError as e:
        print("Paths ❌ ", str(e))
        return 2

    for tp in renderer.get_paths():
        print(f"{tp.namespace or '(main)':16} {tp.path}")

    templates = renderer.environment.list_templates()
    print(f"Templates ({len(templates)}):")
    for name in templates:
        print("  ", name)

    return 0 if templates else 3


if __name__ == "__main__":
    sys.exit(main())
