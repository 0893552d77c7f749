from pathlib import Path

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from jinja2 import TemplateNotFound

from jinja_bridge import deps
from jinja_bridge.schemas import TemplatesConfig


@pytest.fixture
def client(tmp_path: Path):
    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "post.html").write_text(
        "{{ slug }}|{{ path() }}|{{ url('post', {'slug': 'other'}) }}|{{ asset('app.css') }}",
        encoding="utf-8",
    )

    app = FastAPI(dependencies=[Depends(deps.bind_request)])

    @app.get("/posts/{slug}", name="post")
    async def post(slug: str):
        return deps.render_response("blog::post", {"slug": slug})

    @app.get("/missing", name="missing")
    async def missing():
        return deps.render_response("nope", status_code=404)

    deps.init_renderer(
        app,
        TemplatesConfig(paths={"blog": [str(blog)]}, assets_url="/static/", assets_version="7"),
    )
    yield TestClient(app)
    deps.close_renderer()


def test_renders_urls_against_request(client: TestClient) -> None:
    resp = client.get("/posts/hello")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text == "hello|/posts/hello|http://testserver/posts/other|/static/app.css?v=7"


def test_render_errors_propagate(client: TestClient) -> None:
    with pytest.raises(TemplateNotFound):
        client.get("/missing")


def test_get_renderer_requires_init() -> None:
    deps.close_renderer()
    with pytest.raises(RuntimeError):
        deps.get_renderer()


def test_init_renderer_returns_shared_instance(tmp_path: Path) -> None:
    renderer = deps.init_renderer(FastAPI(), TemplatesConfig(paths=[str(tmp_path)]))
    try:
        assert deps.get_renderer() is renderer
        assert [p.path for p in renderer.get_paths()] == [str(tmp_path)]
    finally:
        deps.close_renderer()
