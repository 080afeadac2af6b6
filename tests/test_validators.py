import pytest

from feed_sanitizer.sanitizer import validators


@pytest.mark.parametrize(
    "value, expected",
    [
        ("123", "123"),
        ("12.5", "12"),
        ("0", "0"),
        ("12.", "12"),
        (".5", None),
        ("", None),
        ("12px", None),
        ("-1", None),
        ("1e3", None),
        ("１２", None),
    ],
)
def test_integer_value(value, expected):
    assert validators.integer_value("img", "width", value) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/embed/abc123",
        "http://youtube.com/embed/abc123",
        "http://player.vimeo.com/video/42",
        "http://www.dailymotion.com/embed/video/x7",
    ],
)
def test_video_sources_accepted(url):
    assert validators.video_attribute("iframe", "src", url) == url


@pytest.mark.parametrize(
    "url",
    [
        "http://evil.com/embed/x",
        "https://www.youtube.com/embed/",
        "https://player.vimeo.com/video/42",
        "http://www.youtube.com.evil.com/embed/x",
        "javascript:alert(1)//http://www.youtube.com/embed/x",
    ],
)
def test_other_sources_rejected(url):
    assert validators.video_attribute("iframe", "src", url) is None


def test_video_dimensions_pass_through_and_other_attributes_rejected():
    assert validators.video_attribute("iframe", "width", "100%") == "100%"
    assert validators.video_attribute("iframe", "height", "315") == "315"
    assert validators.video_attribute("iframe", "onload", "x()") is None


def test_inline_style_rejects_blank_values():
    assert validators.inline_style("p", "style", "color: red;") == "color: red;"
    assert validators.inline_style("p", "style", "  ") is None


class RecordingLogger:
    def __init__(self):
        self.warnings = []

    def warning(self, event, **kwargs):
        self.warnings.append((event, kwargs))


def test_image_src_rewriter_makes_url_absolute():
    rewrite = validators.image_src_rewriter("http://example.com/feed/")
    assert rewrite("img", "src", "img/pic.png") == "http://example.com/feed/img/pic.png"
    assert rewrite("img", "src", "http://other.org/x.png") == "http://other.org/x.png"


def test_image_src_rewriter_keeps_value_when_resolution_fails(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(validators, "logger", recorder)

    rewrite = validators.image_src_rewriter("not a url")
    assert rewrite("img", "src", "pic.png") == "pic.png"

    assert len(recorder.warnings) == 1
    event, context = recorder.warnings[0]
    assert event == "image_src_resolution_failed"
    assert context["url"] == "pic.png"
    assert context["base_url"] == "not a url"
