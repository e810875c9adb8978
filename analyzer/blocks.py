"""
analyzer/blocks.py — podział tekstu na linie oraz detektory bloków
wielolinijkowych: tabel i podpisów.

Kluczowe funkcje:
  split_lines(text)        -> list[SourceLine]   (puste linie usunięte)
  detect_tables(lines)     -> (list[TableRef], set[int])
  detect_signatures(texts) -> list[SignatureBlock]
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from data_model.documents import SignatureBlock, TableRef
from analyzer.classifier import is_signature_trigger
from analyzer.line_patterns import (
    DATE_LABEL_RE,
    DATE_SHAPE_RE,
    NAME_LABEL_RE,
    POSITION_LABEL_RE,
    SIGNATURE_RULE_RE,
    SIGNED_BY_RE,
    TABLE_CAPTION_RE,
    TABLE_COLUMN_GAP_RE,
)

# Ile linii przed / po wyzwalaczu należy do okna bloku podpisu.
_SIGNATURE_LOOKBEHIND = 2
_SIGNATURE_LOOKAHEAD = 3
# Po zapisaniu bloku pomijamy tyle kolejnych linii.
_SIGNATURE_SKIP = 3
_SIGNATURE_FIELD_MAX_LEN = 60

_DEFAULT_TABLE_DESCRIPTION = "Table"


class SourceLine(NamedTuple):
    number: int     # 1-based numer linii w surowym tekście
    text: str       # linia po strip()


def split_lines(text: str) -> list[SourceLine]:
    """
    Dzieli tekst na przycięte, niepuste linie z zachowaniem numeracji.

    Granicą linii jest wyłącznie znak nowej linii; form feed i separatory
    Unicode zostają w treści linii.
    """
    return [
        SourceLine(number, stripped)
        for number, raw in enumerate(text.split("\n"), start=1)
        if (stripped := raw.strip())
    ]


# ---------------------------------------------------------------------------
# Tabele
# ---------------------------------------------------------------------------

def is_table_row(line: str) -> bool:
    """Wiersz tabeli: >= 2 znaki '|' albo kolumny rozdzielone 3+ spacjami."""
    return line.count("|") >= 2 or TABLE_COLUMN_GAP_RE.search(line) is not None


def detect_tables(lines: Sequence[SourceLine]) -> tuple[list[TableRef], set[int]]:
    """
    Wykrywa ciągi wierszy tabelarycznych.

    Kandydat jest potwierdzony, jeśli co najmniej jedna z dwóch następnych
    linii też jest wierszem tabeli. Wszystkie kolejne wiersze ciągu są
    zużywane (ich indeksy w zwracanym zbiorze) i nie trafiają do segmentacji.
    """
    tables: list[TableRef] = []
    consumed: set[int] = set()

    i = 0
    while i < len(lines):
        if not is_table_row(lines[i].text) or not any(
            is_table_row(nxt.text) for nxt in lines[i + 1:i + 3]
        ):
            i += 1
            continue

        tables.append(TableRef(
            description=_table_description(lines, i),
            location=str(lines[i].number),
        ))
        j = i
        while j < len(lines) and is_table_row(lines[j].text):
            consumed.add(j)
            j += 1
        i = j

    return tables, consumed


def _table_description(lines: Sequence[SourceLine], start: int) -> str:
    """Najbliższa wcześniejsza linia z "table" / "schedule"."""
    for line in reversed(lines[:start]):
        if TABLE_CAPTION_RE.search(line.text):
            return line.text
    return _DEFAULT_TABLE_DESCRIPTION


# ---------------------------------------------------------------------------
# Podpisy
# ---------------------------------------------------------------------------

def detect_signatures(lines: Sequence[str]) -> list[SignatureBlock]:
    """
    Dla każdej linii-wyzwalacza ("signature", "signed by", linia z podkreśleń)
    buduje SignatureBlock z okna ±2–3 linii i pomija trzy kolejne linie.
    """
    blocks: list[SignatureBlock] = []
    i = 0
    while i < len(lines):
        if not is_signature_trigger(lines[i]):
            i += 1
            continue
        blocks.append(_read_signature_block(lines, i))
        i += _SIGNATURE_SKIP + 1
    return blocks


def _read_signature_block(lines: Sequence[str], trigger: int) -> SignatureBlock:
    before = list(range(max(0, trigger - _SIGNATURE_LOOKBEHIND), trigger))
    after = list(range(trigger + 1, min(len(lines), trigger + 1 + _SIGNATURE_LOOKAHEAD)))

    name: str | None = None
    position: str | None = None
    date: str | None = None
    name_index: int | None = None

    m = SIGNED_BY_RE.search(lines[trigger])
    if m:
        name = m.group("name").strip(" :") or None

    # Etykiety "Name:", "Title:", "Date:" mają pierwszeństwo przed zgadywaniem.
    for j in [*after, *before]:
        text = lines[j]
        if name is None and (label := NAME_LABEL_RE.match(text)):
            name = _field_value(label.group("value"))
            name_index = j if name else None
        elif position is None and (label := POSITION_LABEL_RE.match(text)):
            position = _field_value(label.group("value"))

    for j in [trigger, *after, *before]:
        date = _date_value(lines[j])
        if date:
            break

    if name is None:
        for j in [*after, *reversed(before)]:
            if _is_field_candidate(lines[j]):
                name = lines[j]
                name_index = j
                break

    if position is None and name_index is not None:
        window_end = after[-1] if after else trigger
        for j in range(name_index + 1, window_end + 1):
            if j != trigger and _is_field_candidate(lines[j]):
                position = lines[j]
                break

    return SignatureBlock(name=name, position=position, date=date)


def _field_value(value: str) -> str | None:
    value = value.strip()
    if not value or not any(c.isalnum() for c in value):
        return None
    return value


def _date_value(text: str) -> str | None:
    m = DATE_SHAPE_RE.search(text)
    if m:
        return m.group(0)
    if "date" in text.lower():
        label = DATE_LABEL_RE.match(text)
        if label:
            return _field_value(label.group("value"))
    return None


def _is_field_candidate(text: str) -> bool:
    """Linia nadająca się na nazwisko / stanowisko."""
    if len(text) > _SIGNATURE_FIELD_MAX_LEN or not any(c.isalpha() for c in text):
        return False
    if SIGNATURE_RULE_RE.search(text) or set(text) <= {"_", "-", " ", "."}:
        return False
    if is_signature_trigger(text) or DATE_SHAPE_RE.search(text) or "date" in text.lower():
        return False
    if NAME_LABEL_RE.match(text) or POSITION_LABEL_RE.match(text):
        return False
    return True
