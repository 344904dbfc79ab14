"""Tests for the API reference generator."""

import logging

import pytest
import yaml

from books.models import Book
from pipeline.handler import BuildContext
from pipeline.orchestrator import GenerationOrchestrator
from pipeline.registry import GeneratorRegistry
from reference import register_reference_generators
from reference.api import ApiIndexGenerator, api_entries

OSBYTE = """---
title: OSBYTE
api:
  - name: OSWRCH
    addr: FFEE
    title: Write character
  - name: OSBYTE
    addr: FFF4
    title: Misc OS calls
  - name: osasci
    addr: FFE3
    title: Write ASCII
---
"""


def front_matter(path):
    return yaml.safe_load(path.read_text(encoding="utf-8").split("---\n")[1])


@pytest.fixture
def book(tmp_path):
    book = Book(id="bbc", generate=["api"], content_root=tmp_path / "content")
    book.content_path.mkdir(parents=True)
    (book.content_path / "osbyte.html").write_text(OSBYTE, encoding="utf-8")
    return book


class TestApiEntries:
    """Tests for parsing api front matter."""

    def test_parses_addresses(self):
        entries = api_entries({"api": [{"name": "OSWRCH", "addr": "FFEE"}, "junk"]})
        assert len(entries) == 1
        assert entries[0].call == 0xFFEE

    def test_bad_address_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            entries = api_entries({"api": [{"name": "OSFOO", "addr": "nope"}]})

        assert entries[0].call == 0
        assert 'Failed to parse addr "nope" for OSFOO' in caplog.text


class TestApiIndexGenerator:
    """Tests for the generated indices."""

    def test_writes_both_indices(self, book):
        registry = ApiIndexGenerator().register(GeneratorRegistry())

        GenerationOrchestrator(registry).run([book])

        by_addr = front_matter(book.content_path / "reference" / "api" / "_index.html")
        by_name = front_matter(book.content_path / "reference" / "apiName" / "_index.html")
        assert [e["name"] for e in by_addr["api"]] == ["osasci", "OSWRCH", "OSBYTE"]
        assert [e["name"] for e in by_name["api"]] == ["osasci", "OSBYTE", "OSWRCH"]
        assert by_addr["nometa"] is True

    def test_extract_once_per_book(self, book):
        generator = ApiIndexGenerator()
        ctx = BuildContext()

        generator.extract(ctx, book)
        generator.extract(ctx, book)

        assert len(generator.entries["bbc"]) == 3

    def test_register_all(self):
        registry = register_reference_generators(GeneratorRegistry())
        assert registry.names() == ["api", "opcodes"]
