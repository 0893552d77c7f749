import pytest
from starlette.responses import PlainTextResponse
from starlette.routing import NoMatchFound, Route, Router

from jinja_bridge.helpers import ServerUrlHelper, UrlHelper


async def _endpoint(request):
    return PlainTextResponse("ok")


@pytest.fixture
def router() -> Router:
    return Router(
        routes=[
            Route("/", _endpoint, name="home"),
            Route("/posts/{slug}", _endpoint, name="post"),
            Route("/posts/{slug}/comments/{comment_id:int}", _endpoint, name="comment"),
        ]
    )


def test_generate_plain_route(router: Router) -> None:
    assert UrlHelper(router).generate("home") == "/"
    assert UrlHelper(router).generate("post", {"slug": "hello"}) == "/posts/hello"


def test_generate_with_query_and_fragment(router: Router) -> None:
    url = UrlHelper(router).generate("post", {"slug": "hello"}, {"page": 2, "tag": ["a", "b"]}, "top")
    assert url == "/posts/hello?page=2&tag=a&tag=b#top"


def test_empty_fragment_and_query_are_dropped(router: Router) -> None:
    assert UrlHelper(router).generate("post", {"slug": "x"}, {}, "") == "/posts/x"


def test_unknown_route_raises(router: Router) -> None:
    with pytest.raises(NoMatchFound):
        UrlHelper(router).generate("nope")


def test_missing_route_name_without_result_raises(router: Router) -> None:
    with pytest.raises(RuntimeError):
        UrlHelper(router).generate()


def test_reuses_matched_route_params(router: Router) -> None:
    helper = UrlHelper(router)
    helper.set_route_result("comment", {"slug": "hello", "comment_id": 7})

    assert helper.generate() == "/posts/hello/comments/7"
    assert helper.generate(route_params={"comment_id": 8}) == "/posts/hello/comments/8"
    assert helper.generate("post", {"slug": "other"}, options={"reuse_result_params": False}) == "/posts/other"


def test_route_result_is_per_helper(router: Router) -> None:
    first, second = UrlHelper(router), UrlHelper(router)
    first.set_route_result("home")
    assert first.get_route_result().name == "home"
    assert second.get_route_result() is None


def test_server_url_without_base_returns_path() -> None:
    assert ServerUrlHelper().generate("/foo") == "/foo"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", "https://example.com/app/"),
        ("/foo", "https://example.com/foo"),
        ("foo/bar", "https://example.com/app/foo/bar"),
        ("foo?x=1#y", "https://example.com/app/foo?x=1#y"),
        ("https://cdn.example.com/x.png", "https://cdn.example.com/x.png"),
        ("//cdn.example.com/x.png", "//cdn.example.com/x.png"),
    ],
)
def test_server_url_joins_against_base(path: str, expected: str) -> None:
    assert ServerUrlHelper("https://example.com/app/").generate(path) == expected


def test_server_url_drops_base_query_and_fragment() -> None:
    assert ServerUrlHelper("https://example.com/app?q=1#f").generate() == "https://example.com/app"


def test_bound_uri_takes_precedence_over_configured_base() -> None:
    helper = ServerUrlHelper("https://configured.example.com/")
    helper.set_uri("http://testserver/")
    assert helper.generate("/a") == "http://testserver/a"
