"""
Tests for analyzer.blocks — line numbering, table and signature detection.
"""

import pytest

from analyzer.blocks import (
    SourceLine,
    detect_signatures,
    detect_tables,
    is_table_row,
    split_lines,
)
from data_model.documents import SignatureBlock, TableRef


def test_split_lines_keeps_raw_numbering():
    assert split_lines("a\n\n  b  \n") == [SourceLine(1, "a"), SourceLine(3, "b")]


def test_split_lines_counts_only_newlines():
    assert split_lines("x\x0cy\r\nz\u2028w") == [SourceLine(1, "x\x0cy"), SourceLine(2, "z\u2028w")]
    tables, _ = detect_tables(split_lines("x\x0cy\n| a | b |\n| c | d |"))
    assert tables == [TableRef(description="Table", location="2")]


def test_split_lines_empty():
    assert split_lines("") == []
    assert split_lines(" \n\t\n") == []


# ── Tables ───────────────────────────────────────────────────────────

class TestTables:

    @pytest.mark.parametrize("line", ["| a | b |", "a | b | c", "Name   Amount", "Item\tPrice"])
    def test_table_rows(self, line):
        assert is_table_row(line)

    @pytest.mark.parametrize("line", ["a|b", "one two", "plain prose line"])
    def test_not_table_rows(self, line):
        assert not is_table_row(line)

    def test_three_pipe_rows_give_one_table(self):
        lines = split_lines("Header\n| a | b |\n| c | d |\n| e | f |\nFooter")
        tables, consumed = detect_tables(lines)
        assert tables == [TableRef(description="Table", location="2")]
        assert consumed == {1, 2, 3}

    def test_caption_from_preceding_line(self):
        lines = split_lines("Schedule 2 - Rates\n\n| A | B |\n| 1 | 2 |\nAfter text.")
        tables, consumed = detect_tables(lines)
        assert tables == [TableRef(description="Schedule 2 - Rates", location="3")]
        assert consumed == {1, 2}

    def test_single_row_is_not_a_table(self):
        tables, consumed = detect_tables(split_lines("| a | b |\ntext"))
        assert tables == []
        assert consumed == set()

    def test_row_confirmed_by_second_next_line(self):
        lines = split_lines("| a | b |\nprose\n| c | d |")
        tables, consumed = detect_tables(lines)
        assert tables == [TableRef(description="Table", location="1")]
        assert consumed == {0}


# ── Signatures ───────────────────────────────────────────────────────

class TestSignatures:

    def test_name_position_and_date(self):
        lines = ["Signature: ______________", "John Smith", "Managing Director", "Date: 15/01/2024"]
        assert detect_signatures(lines) == [
            SignatureBlock(name="John Smith", position="Managing Director", date="15/01/2024"),
        ]

    def test_labelled_fields(self):
        lines = ["Signed by:", "Name: Jane Roe", "Title: Chief Executive", "Date: 01/03/2024"]
        assert detect_signatures(lines) == [
            SignatureBlock(name="Jane Roe", position="Chief Executive", date="01/03/2024"),
        ]

    def test_name_from_signed_by_line(self):
        [block] = detect_signatures(["Signed by Alice Brown"])
        assert block.name == "Alice Brown"

    def test_following_lines_are_skipped(self):
        lines = ["Signature:", "A Person", "Signature:", "B Person", "x", "Signature:", "C Person"]
        blocks = detect_signatures(lines)
        assert [b.name for b in blocks] == ["A Person", "C Person"]
        assert blocks[0].position == "B Person"
        assert blocks[1].position is None

    def test_underscore_rule_triggers(self):
        [block] = detect_signatures(["__________________", "Mary Major"])
        assert block.name == "Mary Major"
        assert block.date is None

    def test_no_trigger(self):
        assert detect_signatures(["Nothing here", "at all"]) == []
