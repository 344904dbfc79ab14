"""Tests for the HTTP render service client."""

from unittest.mock import Mock

import pytest
import requests

from pdf.renderer import HttpRenderer, PrintOptions, RenderError


@pytest.fixture
def options():
    return PrintOptions(
        margin_top=0.4,
        margin_bottom=0.4,
        margin_left=0.4,
        margin_right=0.4,
        landscape=False,
        paper_width=8.27,
        paper_height=11.69,
        print_background=True,
        display_header_footer=True,
        header_template="<span>6502</span>",
    )


def make_session(response=None, error=None):
    session = Mock(spec=requests.Session)
    session.headers = {}
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return session


def ok_response(content=b"%PDF-1.7"):
    response = Mock()
    response.content = content
    response.raise_for_status.return_value = None
    return response


class TestHttpRenderer:
    """Tests for HttpRenderer.render."""

    def test_posts_url_and_options(self, options):
        session = make_session(ok_response())
        renderer = HttpRenderer("http://render/print", timeout=30, session=session)

        assert renderer.render("http://site/6502/_print/", options) == b"%PDF-1.7"

        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args == ("http://render/print",)
        assert kwargs["json"]["url"] == "http://site/6502/_print/"
        assert kwargs["json"]["options"]["header_template"] == "<span>6502</span>"
        assert kwargs["timeout"] == 30

    def test_timeout_raises_render_error(self, options):
        session = make_session(error=requests.exceptions.Timeout())
        renderer = HttpRenderer("http://render/print", session=session)

        with pytest.raises(RenderError, match="timed out"):
            renderer.render("http://site/6502/_print/", options)

    def test_http_error_raises_render_error(self, options):
        response = ok_response()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("502 Bad Gateway")
        renderer = HttpRenderer("http://render/print", session=make_session(response))

        with pytest.raises(RenderError, match="502"):
            renderer.render("http://site/6502/_print/", options)

    def test_empty_document_raises(self, options):
        renderer = HttpRenderer("http://render/print", session=make_session(ok_response(b"")))

        with pytest.raises(RenderError, match="empty"):
            renderer.render("http://site/6502/_print/", options)

    def test_context_manager_closes_session(self):
        session = make_session(ok_response())
        with HttpRenderer("http://render/print", session=session):
            pass
        session.close.assert_called_once()
