"""
Tests for analyzer.segmenter — clause state machine and section fallback.
"""

from analyzer.segmenter import find_title, has_clause_markers, segment_clauses, segment_sections
from data_model.documents import Clause, Section, Subclause


# ── Clause mode ──────────────────────────────────────────────────────

class TestSegmentClauses:

    def test_clause_example(self, clause_contract):
        clauses = segment_clauses(clause_contract.splitlines())
        assert clauses == [
            Clause(
                number="1",
                title="Term",
                content="This is term text.",
                subclauses=[Subclause("1.1", "First sub."), Subclause("1.2", "Second sub.")],
            ),
            Clause(number="2", title="Payment", content="Payment text.", subclauses=[]),
        ]

    def test_title_taken_from_next_line(self):
        clauses = segment_clauses(["Article IV", "Payment Terms", "The buyer pays."])
        assert clauses == [Clause("IV", "Payment Terms", "The buyer pays.", [])]

    def test_title_not_taken_when_next_line_starts_with_digit(self):
        clauses = segment_clauses(["CLAUSE 3", "3.1 Sub text"])
        assert clauses[0].title is None
        assert clauses[0].subclauses == [Subclause("3.1", "Sub text")]

    def test_prose_after_first_subclause_is_dropped(self):
        lines = [
            "CLAUSE 1: Term",
            "Opening prose.",
            "(a) first item",
            "Trailing prose that belongs nowhere.",
            "(b) second item",
        ]
        [clause] = segment_clauses(lines)
        assert clause.content == "Opening prose."
        assert [s.number for s in clause.subclauses] == ["(a)", "(b)"]
        assert "Trailing" not in clause.content

    def test_repeated_number_starts_new_clause(self):
        clauses = segment_clauses(["CLAUSE 1: A", "one", "CLAUSE 1: B", "two"])
        assert [(c.number, c.title, c.content) for c in clauses] == [
            ("1", "A", "one"),
            ("1", "B", "two"),
        ]

    def test_marker_on_next_line_is_not_a_title(self):
        clauses = segment_clauses(["Article 1", "Article 2: Fees", "Fees are due."])
        assert clauses == [
            Clause("1", None, "", []),
            Clause("2", "Fees", "Fees are due.", []),
        ]

    def test_preamble_before_first_clause_is_ignored(self):
        clauses = segment_clauses(["Preamble text.", "CLAUSE 1: Term", "Body."])
        assert len(clauses) == 1
        assert clauses[0].content == "Body."

    def test_multiline_prose_is_newline_joined(self):
        [clause] = segment_clauses(["CLAUSE 1: Term", "First line.", "Second line."])
        assert clause.content == "First line.\nSecond line."


# ── Section mode ─────────────────────────────────────────────────────

class TestSegmentSections:

    def test_headings_split_sections(self):
        lines = [
            "SERVICE REPORT",
            "This report describes work.",
            "II. FINDINGS",
            "All good.",
            "2.1 DETAILS",
            "More detail.",
        ]
        sections = segment_sections(lines, {})
        assert sections == [
            Section("SERVICE REPORT", "This report describes work.", 1),
            Section("II. FINDINGS", "All good.", 1),
            Section("2.1 DETAILS", "More detail.", 3),
        ]

    def test_mixed_case_subsection_headings(self):
        lines = [
            "1. Scope of Work",
            "Overview.",
            "2.1 Scope",
            "Detail.",
            "a) General",
            "Fine print.",
        ]
        sections = segment_sections(lines, {})
        assert [(s.heading, s.level) for s in sections] == [
            ("1. Scope of Work", 2),
            ("2.1 Scope", 3),
            ("a) General", 4),
        ]

    def test_content_before_first_heading(self):
        sections = segment_sections(["Loose text.", "NOTES", "Body."], {})
        assert sections[0] == Section(None, "Loose text.", 1)
        assert sections[1].heading == "NOTES"

    def test_heading_without_content_is_not_pushed(self):
        sections = segment_sections(["FIRST", "SECOND", "Body."], {})
        assert sections == [Section("SECOND", "Body.", 1)]

    def test_heading_label_value_feeds_key_information(self):
        key_info: dict[str, str] = {}
        segment_sections(["CASE NO: 45678", "Hearing notes."], key_info)
        assert key_info == {"Case Number": "45678"}

    def test_date_heading_uses_context(self):
        key_info: dict[str, str] = {}
        segment_sections(["DATE OF HEARING", "12/03/2024", "Notes."], key_info)
        assert key_info["Document Date"] == "12/03/2024"

    def test_heading_info_does_not_overwrite(self):
        key_info = {"Document Date": "01/01/2020"}
        segment_sections(["DATE OF HEARING", "12/03/2024"], key_info)
        assert key_info["Document Date"] == "01/01/2020"


# ── Helpers ──────────────────────────────────────────────────────────

def test_has_clause_markers():
    assert has_clause_markers(["intro", "Article 1 Scope"])
    assert not has_clause_markers(["intro", "see Article 1"])


def test_find_title():
    assert find_title(["some prose", "MASTER AGREEMENT", "OTHER"]) == "MASTER AGREEMENT"
    assert find_title(["only prose here"]) is None


def test_find_title_skips_subclauses():
    lines = ["CLAUSE 1: Term", "1.1 First sub.", "CLAUSE 2: Payment"]
    assert find_title(lines) is None
    assert find_title(["2.1 Scope", "Detail."]) == "2.1 Scope"
