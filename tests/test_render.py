"""Tests for rendering documents."""

from __future__ import annotations

from bs4 import BeautifulSoup

from mdoutline.parser import parse_document
from mdoutline.render import render_html, render_markdown, render_outline
from mdoutline.schemas import Section


def _shape(sections: tuple[Section, ...]) -> list[tuple[str, int, list]]:
    return [(s.title, s.level, _shape(s.children)) for s in sections]


class TestRenderOutline:
    """Tests for render_outline function."""

    def test_heading_lines_only(self, sample_markdown: str) -> None:
        """Outputs one heading line per section."""
        outline = render_outline(parse_document(sample_markdown))

        assert outline == (
            "# Clean Code\n"
            "## Meaningful Names\n"
            "## Functions\n"
            "### Arguments\n"
            "# Summary"
        )

    def test_round_trip_preserves_hierarchy(self, sample_markdown: str) -> None:
        """Re-parsing the outline gives the same titles and nesting."""
        document = parse_document(sample_markdown)

        reparsed = parse_document(render_outline(document))

        assert _shape(reparsed.sections) == _shape(document.sections)
        assert reparsed.anchors() == document.anchors()

    def test_round_trip_with_duplicates_and_shallow_root(self) -> None:
        """Round trip holds for repeated titles and a level-2 root."""
        document = parse_document("## Setup\n### Setup\n## Setup\n# Closing #\n")

        reparsed = parse_document(render_outline(document))

        assert _shape(reparsed.sections) == _shape(document.sections)


class TestRenderMarkdown:
    """Tests for render_markdown function."""

    def test_reparses_to_same_blocks(self, sample_markdown: str) -> None:
        """Rendered Markdown parses back to the same sections and blocks."""
        document = parse_document(sample_markdown)

        reparsed = parse_document(render_markdown(document))

        assert _shape(reparsed.sections) == _shape(document.sections)
        original_blocks = [
            b.model_dump(exclude={"line"}) for s in document.iter_sections() for b in s.blocks
        ]
        reparsed_blocks = [
            b.model_dump(exclude={"line"}) for s in reparsed.iter_sections() for b in s.blocks
        ]
        assert reparsed_blocks == original_blocks

    def test_code_fence_preserved(self) -> None:
        """Code blocks keep their fence and language."""
        document = parse_document("~~~sql\nSELECT 1;\n~~~\n")

        assert render_markdown(document) == "~~~sql\nSELECT 1;\n~~~"

    def test_blank_code_body_survives_round_trip(self) -> None:
        """Blank lines inside a fence are rendered and re-parsed intact."""
        for source in ("```\n\n```", "```\n```", "```text\n\n\nx\n```"):
            document = parse_document(source)

            rendered = render_markdown(document)

            assert rendered == source
            assert parse_document(rendered).preamble == document.preamble


class TestRenderHtml:
    """Tests for render_html function."""

    def test_sections_have_anchor_ids(self, sample_markdown: str) -> None:
        """Every section element carries its anchor as id."""
        soup = BeautifulSoup(render_html(parse_document(sample_markdown)), "html.parser")

        ids = [tag["id"] for tag in soup.find_all("section")]
        assert ids == ["clean-code", "meaningful-names", "functions", "arguments", "summary"]

    def test_nesting_and_heading_levels(self, sample_markdown: str) -> None:
        """Child sections are nested inside their parent section."""
        soup = BeautifulSoup(render_html(parse_document(sample_markdown)), "html.parser")

        arguments = soup.find("section", id="arguments")
        assert arguments.find_parent("section")["id"] == "functions"
        assert arguments.find("h3").get_text() == "Arguments"

    def test_code_and_table_elements(self, sample_markdown: str) -> None:
        """Code becomes pre/code with a language class; tables keep cells."""
        soup = BeautifulSoup(render_html(parse_document(sample_markdown)), "html.parser")

        code = soup.find("code")
        assert "language-python" in code.get("class", [])
        assert "elapsed_days = 3" in code.get_text()
        assert [th.get_text() for th in soup.find_all("th")] == ["Rule", "Why"]
        assert len(soup.find("tbody").find_all("tr")) == 2

    def test_inline_links_become_anchors(self, sample_markdown: str) -> None:
        """Markdown links in paragraphs are rendered as <a href>."""
        soup = BeautifulSoup(render_html(parse_document(sample_markdown)), "html.parser")

        hrefs = [a["href"] for a in soup.find_all("a")]
        assert hrefs == ["#functions", "#meaningful-names", "#clean-code"]

    def test_text_is_escaped(self) -> None:
        """Paragraph text is escaped rather than interpreted as markup."""
        html = render_html(parse_document("# A\n1 < 2 & 3\n"))

        assert "1 &lt; 2 &amp; 3" in html
