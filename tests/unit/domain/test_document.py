"""Unit tests for DocumentIndex."""

import pytest

from natspec_guard.domain.document import DocumentIndex


class TestDocumentIndex:
    """Line splitting and offset lookup."""

    def test_trailing_newline_yields_final_empty_line(self) -> None:
        doc = DocumentIndex("a\nbc\n")

        assert len(doc) == 3
        assert [(line.start, line.end, line.content) for line in doc.lines] == [
            (0, 1, "a"),
            (2, 4, "bc"),
            (5, 5, ""),
        ]

    def test_no_trailing_newline(self) -> None:
        doc = DocumentIndex("a\nb")
        assert len(doc) == 2
        assert doc.line_text(1) == "b"

    def test_empty_text_has_one_line(self) -> None:
        doc = DocumentIndex("")
        assert len(doc) == 1
        assert doc.line_index_of(0) == 0

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [(0, 0), (1, 0), (2, 1), (3, 1), (4, 1), (5, 2)],
    )
    def test_line_index_of(self, offset: int, expected: int) -> None:
        """The newline character belongs to the line it terminates."""
        assert DocumentIndex("a\nbc\n").line_index_of(offset) == expected

    @pytest.mark.parametrize("offset", [-1, 6, 100])
    def test_line_index_of_rejects_out_of_range(self, offset: int) -> None:
        with pytest.raises(ValueError):
            DocumentIndex("a\nbc\n").line_index_of(offset)

    def test_indent_of(self) -> None:
        doc = DocumentIndex("contract C {\n    uint x;\n\tuint y;\n}")
        assert doc.indent_of(0) == ""
        assert doc.indent_of(1) == "    "
        assert doc.indent_of(2) == "\t"

    def test_getitem_returns_line_span(self) -> None:
        doc = DocumentIndex("x\ny")
        assert doc[1].index == 1
        assert doc[1].start == 2
        assert doc.text == "x\ny"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("a\r\nb\r\n", "\r\n"), ("a\nb\r\n", "\n"), ("no newline", "\n"), ("\r\n", "\n")],
    )
    def test_newline_follows_first_line(self, text: str, expected: str) -> None:
        assert DocumentIndex(text).newline == expected

    def test_body_end_excludes_carriage_return(self) -> None:
        doc = DocumentIndex("ab\r\ncd\n")
        assert doc[0].content == "ab\r"
        assert doc[0].body_end == 2
        assert doc[1].body_end == doc[1].end == 7
