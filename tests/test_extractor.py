"""Tests for frontmatter extraction in full and metadata-only mode."""

import io
from pathlib import Path

from agent_skills.extractor import read_frontmatter, split_document
from agent_skills.models import DiagnosticCode

PATH = Path("skills/demo/SKILL.md")


class _GuardedStream(io.StringIO):
    """A stream that fails when a line after the closing delimiter is read."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.delimiters_seen = 0

    def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
        assert self.delimiters_seen < 2, "read past the closing delimiter"
        line = super().readline(size)
        if line.strip() == "---":
            self.delimiters_seen += 1
        return line


class TestSplitDocument:
    """Tests for the full mode."""

    def test_split(self) -> None:
        """Test a document splits into block and body."""
        text = "---\nname: demo\ndescription: A demo\n---\n\n# Title\n\nBody.\n"

        frontmatter, diagnostics = split_document(text, PATH)

        assert diagnostics == []
        assert frontmatter is not None
        assert frontmatter.text == "name: demo\ndescription: A demo"
        assert frontmatter.body == "# Title\n\nBody."
        assert frontmatter.first_line == 1

    def test_horizontal_rule_stays_in_body(self) -> None:
        """Test a later `---` line is part of the body."""
        text = "---\nname: demo\n---\nIntro\n\n---\n\nMore\n"

        frontmatter, _ = split_document(text, PATH)

        assert frontmatter is not None
        assert frontmatter.body == "Intro\n\n---\n\nMore"

    def test_empty_body(self) -> None:
        """Test a document without body yields an empty body."""
        frontmatter, diagnostics = split_document("---\nname: demo\n---\n", PATH)

        assert diagnostics == []
        assert frontmatter is not None
        assert frontmatter.body == ""

    def test_missing_opening_delimiter(self) -> None:
        """Test a document without frontmatter is rejected."""
        frontmatter, diagnostics = split_document("# Just markdown\n", PATH)

        assert frontmatter is None
        assert [d.code for d in diagnostics] == [DiagnosticCode.FRONTMATTER_INVALID]
        assert diagnostics[0].path == PATH
        assert "opening" in diagnostics[0].message

    def test_missing_closing_delimiter(self) -> None:
        """Test an unterminated block is rejected."""
        frontmatter, diagnostics = split_document(
            "---\nname: demo\ndescription: A demo\n", PATH
        )

        assert frontmatter is None
        assert [d.code for d in diagnostics] == [DiagnosticCode.FRONTMATTER_INVALID]
        assert "closing" in diagnostics[0].message

    def test_longer_dash_run_is_not_a_delimiter(self) -> None:
        """Test only exact `---` lines delimit the block."""
        frontmatter, diagnostics = split_document(
            "---\nname: demo\n-----\nbody\n", PATH
        )

        assert frontmatter is None
        assert diagnostics[0].code == DiagnosticCode.FRONTMATTER_INVALID

    def test_dashes_inside_value_stay_in_block(self) -> None:
        """Test a `---` inside a YAML value does not end the block."""
        frontmatter, diagnostics = split_document(
            "---\nname: demo\ntitle: a---b\n---\nbody\n", PATH
        )

        assert diagnostics == []
        assert frontmatter is not None
        assert frontmatter.text == "name: demo\ntitle: a---b"
        assert frontmatter.body == "body"

    def test_first_line_after_leading_text(self) -> None:
        """Test the block position accounts for lines before the delimiter."""
        frontmatter, _ = split_document("\n\n---\nname: demo\n---\nbody\n", PATH)

        assert frontmatter is not None
        assert frontmatter.first_line == 3


class TestReadFrontmatter:
    """Tests for the metadata-only mode."""

    def test_stops_at_closing_delimiter(self) -> None:
        """Test nothing after the closing delimiter is read."""
        stream = _GuardedStream(
            "---\nname: demo\ndescription: A demo\n---\n" + "body\n" * 1000
        )

        frontmatter, diagnostics = read_frontmatter(stream, PATH)

        assert diagnostics == []
        assert frontmatter is not None
        assert frontmatter.text == "name: demo\ndescription: A demo"
        assert frontmatter.body is None
        assert frontmatter.first_line == 2

    def test_same_block_as_full_mode(self) -> None:
        """Test both modes extract the same block text."""
        text = "---\nname: demo\ndescription: A demo\ntags: [a, b]\n---\nBody\n"

        full, _ = split_document(text, PATH)
        partial, _ = read_frontmatter(io.StringIO(text), PATH)

        assert full is not None
        assert partial is not None
        assert full.text == partial.text

    def test_first_line_must_be_delimiter(self) -> None:
        """Test a stream not starting with `---` is rejected."""
        frontmatter, diagnostics = read_frontmatter(
            io.StringIO("# Title\n---\nname: demo\n---\n"), PATH
        )

        assert frontmatter is None
        assert diagnostics[0].code == DiagnosticCode.FRONTMATTER_INVALID
        assert "first line" in diagnostics[0].message

    def test_missing_closing_delimiter(self) -> None:
        """Test an unterminated block is rejected."""
        frontmatter, diagnostics = read_frontmatter(
            io.StringIO("---\nname: demo\n"), PATH
        )

        assert frontmatter is None
        assert diagnostics[0].code == DiagnosticCode.FRONTMATTER_INVALID
        assert "closing" in diagnostics[0].message

    def test_exceeds_max_chars(self) -> None:
        """Test an oversized block is rejected without reading further."""
        text = "---\n" + "key: value\n" * 100 + "---\n"

        frontmatter, diagnostics = read_frontmatter(io.StringIO(text), PATH, 50)

        assert frontmatter is None
        assert diagnostics[0].code == DiagnosticCode.FRONTMATTER_INVALID
        assert "exceeds 50 characters" in diagnostics[0].message

    def test_single_long_line_exceeds_max_chars(self) -> None:
        """Test a single line longer than the cap is rejected."""
        text = "---\ndescription: " + "x" * 500 + "\n---\n"

        frontmatter, diagnostics = read_frontmatter(io.StringIO(text), PATH, 100)

        assert frontmatter is None
        assert "exceeds 100 characters" in diagnostics[0].message

    def test_block_at_max_chars_accepted(self) -> None:
        """Test a block of exactly the cap is accepted."""
        block = "name: demo\n"
        text = "---\n" + block + "---\n"

        frontmatter, diagnostics = read_frontmatter(
            io.StringIO(text), PATH, len(block)
        )

        assert diagnostics == []
        assert frontmatter is not None
        assert frontmatter.block == block


def test_split_and_rejoin() -> None:
    """Test rejoining block and body reproduces an equivalent document."""
    text = "---\nname: demo\ndescription: A demo\n---\n\nIntro\n\n---\n\nOutro\n"
    frontmatter, _ = split_document(text, PATH)
    assert frontmatter is not None

    rejoined = f"---\n{frontmatter.text}\n---\n{frontmatter.body}\n"
    again, diagnostics = split_document(rejoined, PATH)

    assert diagnostics == []
    assert again is not None
    assert again.text == frontmatter.text
    assert again.body == frontmatter.body
