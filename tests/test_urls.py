import pytest

from feed_sanitizer.urls import MalformedUrlError, complete_url, has_allowed_scheme


def test_relative_url_resolved_against_base():
    assert (
        complete_url("http://example.com/feed/", "img/pic.png")
        == "http://example.com/feed/img/pic.png"
    )


def test_root_relative_and_protocol_relative_urls():
    assert complete_url("http://example.com/feed/", "/a.png") == "http://example.com/a.png"
    assert complete_url("https://example.com/", "//cdn.example.org/a.png") == "https://cdn.example.org/a.png"


def test_absolute_url_returned_unchanged():
    url = "https://images.example.org/a.png?size=2"
    assert complete_url("http://example.com/feed/", url) == url


def test_surrounding_whitespace_ignored():
    assert complete_url("http://example.com/", "  a.png ") == "http://example.com/a.png"


def test_relative_url_needs_absolute_base():
    with pytest.raises(MalformedUrlError):
        complete_url("", "a.png")
    with pytest.raises(MalformedUrlError):
        complete_url("example.com/feed", "a.png")


def test_unparseable_url_raises_malformed_url_error():
    with pytest.raises(MalformedUrlError):
        complete_url("http://example.com/", "http://[broken/a.png")
    assert issubclass(MalformedUrlError, ValueError)


def test_has_allowed_scheme():
    protocols = {"http", "https"}
    assert has_allowed_scheme("a.png", protocols)
    assert has_allowed_scheme("//cdn.example.org/a.png", protocols)
    assert has_allowed_scheme("HTTPS://example.com/a.png", protocols)
    assert not has_allowed_scheme("ftp://files.example/a.png", protocols)
    assert not has_allowed_scheme("mailto:a@b.c", protocols)
    assert not has_allowed_scheme(" java\tscript:alert(1)", protocols)
