from pathlib import Path

import pytest
from jinja2 import Environment, TemplateNotFound

from jinja_bridge.loader import MAIN_NAMESPACE, LoaderError, NamespacedFileSystemLoader


def test_add_path_rejects_missing_directory(tmp_path: Path) -> None:
    loader = NamespacedFileSystemLoader()
    with pytest.raises(LoaderError):
        loader.add_path(tmp_path / "nope")
    assert loader.get_namespaces() == []


def test_add_path_strips_trailing_separator(main_dir: Path) -> None:
    loader = NamespacedFileSystemLoader()
    loader.add_path(str(main_dir) + "/")
    assert loader.get_paths() == [str(main_dir)]


def test_namespaces_in_registration_order(main_dir: Path, blog_dir: Path) -> None:
    loader = NamespacedFileSystemLoader()
    loader.add_path(blog_dir, "blog")
    loader.add_path(main_dir)
    assert loader.get_namespaces() == ["blog", MAIN_NAMESPACE]
    assert loader.get_paths("blog") == [str(blog_dir)]
    assert loader.get_paths("unknown") == []


def test_prepend_and_set_paths(main_dir: Path, blog_dir: Path) -> None:
    loader = NamespacedFileSystemLoader([main_dir])
    loader.prepend_path(blog_dir)
    assert loader.get_paths() == [str(blog_dir), str(main_dir)]

    loader.set_paths([main_dir])
    assert loader.get_paths() == [str(main_dir)]


def test_first_directory_wins(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    for d, body in ((first, "first"), (second, "second")):
        d.mkdir()
        (d / "page.html").write_text(body, encoding="utf-8")

    loader = NamespacedFileSystemLoader()
    loader.add_path(first)
    loader.add_path(second)
    env = Environment(loader=loader)
    assert env.get_template("page.html").render() == "first"


def test_resolves_main_and_namespaced_names(main_dir: Path, blog_dir: Path) -> None:
    loader = NamespacedFileSystemLoader()
    loader.add_path(main_dir)
    loader.add_path(blog_dir, "blog")
    env = Environment(loader=loader)

    assert env.get_template("plain.html").render(name="x") == "plain x"
    assert env.get_template("@blog/post.twig").render(title="T") == "twig T"
    # extends resolves the layout in the main namespace
    assert env.get_template("@blog/post.html").render(title="T") == "<main>T</main>"


@pytest.mark.parametrize("name", ["@blog", "@/post.html", "@other/post.html", "@blog/missing.html", "missing.html"])
def test_unresolvable_names_raise_template_not_found(main_dir: Path, blog_dir: Path, name: str) -> None:
    loader = NamespacedFileSystemLoader()
    loader.add_path(main_dir)
    loader.add_path(blog_dir, "blog")
    with pytest.raises(TemplateNotFound) as exc:
        Environment(loader=loader).get_template(name)
    assert exc.value.name == name


def test_list_templates_prefixes_namespaces(main_dir: Path, blog_dir: Path) -> None:
    loader = NamespacedFileSystemLoader()
    loader.add_path(main_dir)
    loader.add_path(blog_dir, "blog")
    assert loader.list_templates() == [
        "@blog/post.html",
        "@blog/post.twig",
        "emails/welcome.txt",
        "layout.html",
        "plain.html",
    ]
