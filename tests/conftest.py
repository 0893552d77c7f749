from pathlib import Path
from typing import Dict

import pytest


def write_templates(root: Path, files: Dict[str, str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for name, body in files.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(body, encoding="utf-8")
    return root


@pytest.fixture
def main_dir(tmp_path: Path) -> Path:
    return write_templates(
        tmp_path / "main",
        {
            "plain.html": "plain {{ name }}",
            "layout.html": "<main>{% block body %}{% endblock %}</main>",
            "emails/welcome.txt": "Hi {{ name }}",
        },
    )


@pytest.fixture
def blog_dir(tmp_path: Path) -> Path:
    return write_templates(
        tmp_path / "blog",
        {
            "post.html": "{% extends 'layout.html' %}{% block body %}{{ title }}{% endblock %}",
            "post.twig": "twig {{ title }}",
        },
    )
