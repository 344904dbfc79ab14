"""Tests for front matter parsing and scanning."""

import pytest

from reference.frontmatter import FrontMatterError, parse_front_matter, scan_front_matter


class TestParseFrontMatter:
    """Tests for parse_front_matter."""

    def test_splits_meta_and_body(self):
        meta, body = parse_front_matter("---\ntitle: ADC\nop: ADC\n---\n<p>Add</p>\n")
        assert meta == {"title": "ADC", "op": "ADC"}
        assert body == "<p>Add</p>\n"

    def test_no_front_matter(self):
        assert parse_front_matter("<p>plain</p>") == ({}, "<p>plain</p>")

    def test_empty_front_matter(self):
        assert parse_front_matter("---\n---\nbody") == ({}, "body")

    def test_unterminated(self):
        with pytest.raises(FrontMatterError, match="Unterminated"):
            parse_front_matter("---\ntitle: x\n")

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError):
            parse_front_matter("---\ntitle: [\n---\n")

    def test_not_a_mapping(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            parse_front_matter("---\n- a\n---\n")


class TestScanFrontMatter:
    """Tests for scanning a content tree."""

    def test_skips_reference_and_other_suffixes(self, tmp_path):
        (tmp_path / "inst").mkdir()
        (tmp_path / "inst" / "adc.html").write_text("---\nop: ADC\n---\n", encoding="utf-8")
        (tmp_path / "inst" / "notes.md").write_text("---\nop: MD\n---\n", encoding="utf-8")
        (tmp_path / "plain.html").write_text("<p>no meta</p>", encoding="utf-8")
        (tmp_path / "reference" / "opcodes").mkdir(parents=True)
        (tmp_path / "reference" / "opcodes" / "_index.html").write_text(
            "---\nop: GENERATED\n---\n", encoding="utf-8"
        )

        found = list(scan_front_matter(tmp_path))

        assert [meta["op"] for _, meta in found] == ["ADC"]

    def test_missing_directory(self, tmp_path):
        assert list(scan_front_matter(tmp_path / "missing")) == []
