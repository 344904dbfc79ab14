"""Tests for the PDF CLI."""

from unittest.mock import MagicMock

import pytest

from pdf import cli
from pdf.renderer import RenderError

CONFIG = """site:
  url: http://docs.example/
pdf:
  footer: "<span>${title}</span>"
books:
  - id: "6502"
    title: 6502 Reference
  - id: bbc
    title: BBC Micro
"""


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.delenv("DISABLE_PDF", raising=False)
    path = tmp_path / "books.yaml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def renderer(monkeypatch):
    instance = MagicMock()
    instance.__enter__.return_value = instance
    instance.render.return_value = b"%PDF-1.7"
    factory = MagicMock(return_value=instance)
    monkeypatch.setattr(cli, "HttpRenderer", factory)
    return instance


def render_args(config, tmp_path, *extra):
    return [
        "render",
        "--config",
        str(config),
        "--static-dir",
        str(tmp_path / "static"),
        "--render-url",
        "http://render/print",
        *extra,
    ]


class TestRenderCommand:
    """Tests for the render subcommand."""

    def test_renders_every_book(self, config, renderer, tmp_path):
        """Test every configured book is rendered from the site print view."""
        code = cli.main(render_args(config, tmp_path))

        assert code == 0
        urls = [call.args[0] for call in renderer.render.call_args_list]
        assert urls == ["http://docs.example/6502/_print/", "http://docs.example/bbc/_print/"]
        assert (tmp_path / "static" / "static" / "book" / "bbc.pdf").read_bytes() == b"%PDF-1.7"

    def test_footer_defaults_expanded(self, config, renderer, tmp_path):
        """Test shared pdf defaults reach each book's print options."""
        cli.main(render_args(config, tmp_path, "--book", "bbc"))

        options = renderer.render.call_args.args[1]
        assert options.footer_template == "<span>BBC Micro</span>"

    def test_disable_flag(self, config, renderer, tmp_path):
        """Test -p skips rendering."""
        code = cli.main(render_args(config, tmp_path, "-p"))

        assert code == 0
        renderer.render.assert_not_called()

    def test_disable_from_environment(self, config, renderer, tmp_path, monkeypatch):
        """Test DISABLE_PDF skips rendering."""
        monkeypatch.setenv("DISABLE_PDF", "true")

        assert cli.main(render_args(config, tmp_path)) == 0
        renderer.render.assert_not_called()

    def test_failed_book_sets_exit_code(self, config, renderer, tmp_path):
        """Test a failed render is reported and the other book still renders."""
        renderer.render.side_effect = [RenderError("navigation failed"), b"%PDF-1.7"]

        code = cli.main(render_args(config, tmp_path))

        assert code == 1
        assert (tmp_path / "static" / "static" / "book" / "bbc.pdf").exists()
        assert not (tmp_path / "static" / "static" / "book" / "6502.pdf").exists()
