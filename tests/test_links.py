"""Tests for internal link validation."""

from __future__ import annotations

import time

from mdoutline.links import explicit_anchor_ids, iter_internal_links, validate_links
from mdoutline.parser import parse_document


class TestValidateLinks:
    """Tests for validate_links function."""

    def test_valid_document_has_no_broken_anchors(self, sample_markdown: str) -> None:
        """All links in the sample resolve."""
        assert validate_links(parse_document(sample_markdown)) == []

    def test_reports_single_missing_target(self) -> None:
        """A link to #nonexistent-section is reported exactly once."""
        document = parse_document(
            "# Intro\n\nJump to [details](#nonexistent-section).\n"
        )

        broken = validate_links(document)

        assert len(broken) == 1
        assert broken[0].anchor == "nonexistent-section"
        assert broken[0].section == "Intro"
        assert broken[0].text == "details"
        assert broken[0].line == 3

    def test_preamble_links_have_no_section(self) -> None:
        """Broken links before the first heading report section None."""
        broken = validate_links(parse_document("[x](#missing)\n\n# A\n"))

        assert len(broken) == 1
        assert broken[0].section is None

    def test_line_points_inside_multiline_paragraph(self) -> None:
        """The reported line is the line of the link within its block."""
        document = parse_document("# A\nfirst line\nsecond [x](#gone)\n")

        assert validate_links(document)[0].line == 3

    def test_results_follow_document_order(self) -> None:
        """Broken anchors are listed in the order they appear."""
        document = parse_document(
            "# A\n[one](#z-one) and [two](#a-two)\n## B\n[three](#m-three)\n"
        )

        assert [b.anchor for b in validate_links(document)] == [
            "z-one",
            "a-two",
            "m-three",
        ]

    def test_code_is_not_scanned(self) -> None:
        """Links inside fenced code and inline code spans are ignored."""
        text = "# A\n```md\n[x](#missing)\n```\n\nUse `[y](#also-missing)` here.\n"

        assert validate_links(parse_document(text)) == []

    def test_external_and_cross_file_links_ignored(self) -> None:
        """Only same-document fragments are validated."""
        text = (
            "# A\n[site](https://example.com#frag) [other](other.md#x) "
            "[mail](mailto:a@b.c) [top](#)\n"
        )

        assert validate_links(parse_document(text)) == []

    def test_images_are_not_links(self) -> None:
        """Image references are not treated as anchor links."""
        assert validate_links(parse_document("# A\n![diagram](#figure-1)\n")) == []

    def test_reference_definitions(self) -> None:
        """Reference-style link definitions are checked."""
        document = parse_document("# A\nSee [b][ref].\n\n[ref]: #b-section\n")

        broken = validate_links(document)

        assert [b.anchor for b in broken] == ["b-section"]
        assert broken[0].line == 4

    def test_html_anchor_links(self) -> None:
        """Raw HTML <a href> links are checked."""
        document = parse_document('# A\n<a href="#a">ok</a> <a href="#nope">bad</a>\n')

        broken = validate_links(document)

        assert [b.anchor for b in broken] == ["nope"]
        assert broken[0].text == "bad"

    def test_explicit_html_ids_are_valid_targets(self) -> None:
        """A link to an id declared in raw HTML is not broken."""
        text = '# A\n<a id="custom-spot"></a>\n\n[go](#custom-spot)\n'

        assert validate_links(parse_document(text)) == []

    def test_links_in_tables(self) -> None:
        """Table cells are scanned for links."""
        text = "# A\n| Topic |\n| --- |\n| [x](#missing) |\n"

        broken = validate_links(parse_document(text))

        assert [(b.anchor, b.line) for b in broken] == [("missing", 4)]

    def test_percent_encoded_target(self) -> None:
        """Percent-encoded fragments are decoded before lookup."""
        document = parse_document("# Café\n[x](#caf%C3%A9)\n")

        assert validate_links(document) == []

    def test_html_and_markdown_links_keep_source_order(self) -> None:
        """An HTML link before a Markdown link in one block is reported first."""
        document = parse_document('# A\n<a href="#first">f</a> then [second](#second)\n')

        assert [b.anchor for b in validate_links(document)] == ["first", "second"]

    def test_html_link_line_inside_paragraph(self) -> None:
        """HTML links report the line they sit on, not the block start."""
        document = parse_document('# A\nline one\n<a href="#gone">g</a>\n')

        broken = validate_links(document)

        assert [(b.anchor, b.line) for b in broken] == [("gone", 3)]

    def test_html_links_interleaved_across_lines(self) -> None:
        """Mixed link forms over several lines come back in reading order."""
        text = (
            "# A\n"
            "[one](#one) <a href='#two'>2</a>\n"
            "<a href='#three'>3</a> [four](#four)\n"
        )

        broken = validate_links(parse_document(text))

        assert [(b.anchor, b.line) for b in broken] == [
            ("one", 2),
            ("two", 2),
            ("three", 3),
            ("four", 3),
        ]

    def test_unclosed_brackets_scan_quickly(self) -> None:
        """A long run of unmatched brackets does not stall link scanning."""
        document = parse_document("# A\n" + "[" * 20_000 + "\n")

        started = time.perf_counter()
        broken = validate_links(document)
        elapsed = time.perf_counter() - started

        assert broken == []
        assert elapsed < 1.0


class TestLinkHelpers:
    """Tests for iter_internal_links and explicit_anchor_ids."""

    def test_iter_internal_links(self, sample_markdown: str) -> None:
        """Collects every same-document reference."""
        anchors = [link.anchor for link in iter_internal_links(parse_document(sample_markdown))]

        assert anchors == ["functions", "meaningful-names", "clean-code"]

    def test_explicit_anchor_ids(self) -> None:
        """Collects id and name attributes from raw HTML."""
        document = parse_document('<span id="one"></span>\n\n# A\n<a name="two"></a>\n')

        assert explicit_anchor_ids(document) == {"one", "two"}
