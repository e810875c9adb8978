"""
analyzer/extractors.py — ekstraktory "key information" i encji z pełnego tekstu.

Wszystkie funkcje są czyste. Jedynym efektem ubocznym jest zapis do
przekazanego słownika key_information, zawsze przez put_first():
pierwszy zapis danej etykiety wygrywa, puste wartości są odrzucane.

Kolejność wywołań w analyze():
  1. extract_document_type_info  — "Document Type" (+ "Invoice Number", "Total Amount")
  2. extract_party_info          — "Party A", "Party B"
  3. extract_date_info           — "Document Date"
  4. extract_heading_info        — dla każdego nagłówka w trybie sekcji

Funkcje metadanych (OCRMetadata):
  extract_parties, extract_dates, extract_keywords, find_legal_terms,
  classify_document_type, determine_confidentiality, estimate_page_count
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence

from analyzer.line_patterns import DATE_SHAPE_RE


def _p(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, flags | re.UNICODE)


DEFAULT_DOCUMENT_TYPE = "Legal Document"


def put_first(key_information: dict[str, str], label: str, value: str | None) -> bool:
    """Zapisuje etykietę tylko gdy jej nie ma i wartość jest niepusta."""
    if value is None:
        return False
    value = value.strip()
    if not value or label in key_information:
        return False
    key_information[label] = value
    return True


# ---------------------------------------------------------------------------
# Typ dokumentu
# ---------------------------------------------------------------------------

# (typ, warunek na tekście lower-case); pierwsza pasująca reguła wygrywa.
_DOCUMENT_TYPE_RULES: list[tuple[str, Callable[[str], bool]]] = [
    ("Agreement",        lambda t: "agreement" in t and "between" in t),
    ("Invoice",          lambda t: "invoice" in t or "amount due" in t),
    ("Contract",         lambda t: "contract" in t or ("terms" in t and "conditions" in t)),
    ("Insurance Policy", lambda t: "policy" in t and "insurance" in t),
    ("Receipt",          lambda t: "receipt" in t),
    # szersze kategorie z pierwotnego klasyfikatora metadanych
    ("Legal Filing",     lambda t: any(w in t for w in ("court", "case no", "plaintiff", "defendant"))),
    ("Property Document", lambda t: any(w in t for w in ("deed", "property", "conveyance"))),
    ("Testimony/Affidavit", lambda t: any(w in t for w in ("testimony", "witness", "affirm", "swear"))),
]

_FILE_NAME_TYPES: list[tuple[str, str]] = [
    ("invoice",   "Invoice"),
    ("receipt",   "Receipt"),
    ("agreement", "Agreement"),
    ("contract",  "Contract"),
    ("deed",      "Property Document"),
    ("affidavit", "Testimony/Affidavit"),
]

# Słowa etykiet ("INVOICE DATE", "INVOICE TOTAL") nie są numerem faktury.
_INVOICE_LABEL_WORDS = r"(?:DATE|DATED|DUE|TOTAL|AMOUNT|NUMBER|PERIOD|TO)"

INVOICE_NUMBER_RE = _p(
    r"\b(?i:invoice|reference|ref)(?:[ \t]+(?i:no\.?|number|#))?[:.\t ]+"
    rf"(?!{_INVOICE_LABEL_WORDS}(?![A-Z0-9\-]))"
    r"(?P<value>[A-Z0-9][A-Z0-9\-]{2,})"
)

TOTAL_AMOUNT_RE = _p(
    r"\b(?i:total(?:[ \t]+(?:amount|due|payable))?|amount[ \t]+due|balance[ \t]+due|grand[ \t]+total)"
    r"[ \t]*[:.]?[ \t]*(?:[$€£₹][ \t]*|(?i:rs\.?|inr|usd|eur)[ \t]*)?"
    r"(?P<value>\d[\d,]*(?:\.\d{1,2})?)"
)


def match_document_type(text: str, file_name_hint: str = "") -> str | None:
    """Typ dokumentu z treści, potem z nazwy pliku; None gdy nic nie pasuje."""
    lower = text.lower()
    for doc_type, test in _DOCUMENT_TYPE_RULES:
        if test(lower):
            return doc_type
    lower_name = file_name_hint.lower()
    for needle, doc_type in _FILE_NAME_TYPES:
        if needle in lower_name:
            return doc_type
    return None


def classify_document_type(text: str, file_name_hint: str = "") -> str:
    return match_document_type(text, file_name_hint) or DEFAULT_DOCUMENT_TYPE


def extract_total_amount(text: str) -> str | None:
    m = TOTAL_AMOUNT_RE.search(text)
    return m.group("value").rstrip(",") if m else None


def extract_document_type_info(
    text: str,
    file_name_hint: str,
    key_information: dict[str, str],
) -> str | None:
    doc_type = match_document_type(text, file_name_hint)
    put_first(key_information, "Document Type", doc_type)
    if doc_type == "Invoice":
        m = INVOICE_NUMBER_RE.search(text)
        if m:
            put_first(key_information, "Invoice Number", m.group("value"))
        put_first(key_information, "Total Amount", extract_total_amount(text))
    return doc_type


# ---------------------------------------------------------------------------
# Strony umowy
# ---------------------------------------------------------------------------

BETWEEN_RE = _p(r"between\s+([^.]{3,50})\s+and\s+([^.]{3,50})", re.IGNORECASE)

_PARTY_PATTERNS: list[re.Pattern[str]] = [
    _p(r"\b(?:Mr|Mrs|Ms|Dr|Prof)\.[ \t]+[A-Z][A-Za-z]+(?:[ \t]+[A-Z][A-Za-z]+){0,3}"),
    _p(r"\b[A-Z][A-Z&.]*(?:[ \t]+[A-Z][A-Z&.]*){0,5}(?=,[ \t]+(?:a corporation|a company|an individual))"),
    _p(
        r"\b[A-Z][A-Za-z&.]*(?:[ \t]+[A-Z][A-Za-z&.]*){0,5}[ \t]+"
        r"(?i:pvt\.?[ \t]+ltd\.?|ltd\.?|limited|inc\.?|llc|llp|corp\.?|corporation)(?!\w)"
    ),
    _p(r"(?:PLAINTIFF|DEFENDANT|PETITIONER|RESPONDENT)S?[ \t]*:[ \t]*(?P<name>[A-Z][^\n]{2,48})"),
]

_PARTY_MIN_LEN = 4
_PARTY_MAX_LEN = 49


def _clean_party(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip(" \t,;:-")


def extract_party_info(text: str, key_information: dict[str, str]) -> None:
    m = BETWEEN_RE.search(text)
    if not m:
        return
    put_first(key_information, "Party A", _clean_party(m.group(1)))
    put_first(key_information, "Party B", _clean_party(m.group(2)))


def extract_parties(text: str) -> list[str]:
    """Lista stron (osoby, spółki, strony postępowania); duplikaty dokładne usunięte."""
    parties: list[str] = []
    for regex in _PARTY_PATTERNS:
        for m in regex.finditer(text):
            party = _clean_party(m.groupdict().get("name") or m.group(0))
            if _PARTY_MIN_LEN <= len(party) <= _PARTY_MAX_LEN and party not in parties:
                parties.append(party)
    return parties


# ---------------------------------------------------------------------------
# Daty
# ---------------------------------------------------------------------------

DATED_RE = _p(r"(?:dated|date)[:.\s]+(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4})", re.IGNORECASE)

_MONTHS_FULL = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
)

_DATE_PATTERNS: list[re.Pattern[str]] = [
    _p(rf"\b\d{{1,2}}(?:st|nd|rd|th)?\s(?:day\sof\s)?(?:{_MONTHS_FULL}),?\s\d{{4}}\b", re.IGNORECASE),
    _p(r"\b\d{1,2}[/.\-]\d{1,2}[/.\-]\d{4}\b"),
    _p(r"\b\d{4}[/.\-]\d{1,2}[/.\-]\d{1,2}\b"),
    _p(r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s\d{1,2}(?:st|nd|rd|th)?,?\s\d{4}\b", re.IGNORECASE),
]


def extract_dates(text: str) -> list[str]:
    """Daty w kolejności występowania w tekście; nakładające się trafienia pomijane."""
    found: list[tuple[int, int, str]] = []
    for regex in _DATE_PATTERNS:
        for m in regex.finditer(text):
            found.append((m.start(), m.end(), m.group(0)))
    found.sort(key=lambda f: (f[0], -f[1]))

    dates: list[str] = []
    last_end = -1
    for start, end, value in found:
        if start < last_end:
            continue
        last_end = end
        if value not in dates:
            dates.append(value)
    return dates


def extract_date_info(text: str, key_information: dict[str, str]) -> None:
    if "Document Date" in key_information:
        return
    m = DATED_RE.search(text)
    if m:
        put_first(key_information, "Document Date", m.group(1))
        return
    dates = extract_dates(text)
    if dates:
        put_first(key_information, "Document Date", dates[0])


# ---------------------------------------------------------------------------
# Nagłówki "ETYKIETA: wartość" i nagłówki-słowa kluczowe
# ---------------------------------------------------------------------------

_LABEL_VALUE_RE = _p(r"^(?P<label>[A-Za-z][A-Za-z .#/&'-]{1,30}?)\s*:\s*(?P<value>\S.*)$")

_LABEL_SYNONYMS: list[tuple[re.Pattern[str], str]] = [
    (_p(r"^invoice(?:\s*(?:no\.?|number|#|id))?$", re.I), "Invoice Number"),
    (_p(r"^(?:total(?:\s+(?:amount|due|payable))?|amount\s+due|balance\s+due|grand\s+total)$", re.I), "Total Amount"),
    (_p(r"^(?:date|dated|document\s+date|invoice\s+date|date\s+of\s+issue)$", re.I), "Document Date"),
    (_p(r"^(?:ref|reference)(?:\s*(?:no\.?|number|#))?$", re.I), "Reference Number"),
    (_p(r"^case\s*(?:no\.?|number|#)$", re.I), "Case Number"),
    (_p(r"^policy\s*(?:no\.?|number|#)$", re.I), "Policy Number"),
    (_p(r"^receipt\s*(?:no\.?|number|#)$", re.I), "Receipt Number"),
    (_p(r"^(?:id|id\s*(?:no\.?|number)|identification\s*(?:no\.?|number))$", re.I), "ID Number"),
]

_PARTIES_HEADING_RE = _p(r"\b(?:parties|between)\b", re.IGNORECASE)
_DATE_HEADING_RE = _p(r"\bdate[d]?\b", re.IGNORECASE)
_AMOUNT_HEADING_RE = _p(r"\b(?:total|amount)\b", re.IGNORECASE)
_AMOUNT_VALUE_RE = _p(r"\d[\d,]*(?:\.\d{1,2})?")


def canonical_label(label: str) -> str:
    """Mapuje etykietę nagłówka na stałą etykietę key information."""
    label = re.sub(r"\s+", " ", label).strip(" .")
    for regex, canonical in _LABEL_SYNONYMS:
        if regex.match(label):
            return canonical
    return label.title()


def extract_heading_info(
    heading: str,
    context: Sequence[str],
    key_information: dict[str, str],
) -> None:
    """
    Key information z nagłówka i 1–2 kolejnych linii.

    "INVOICE NO: INV-1"   → "Invoice Number": "INV-1"
    "TOTAL DUE: $10.00"   → "Total Amount": "10.00"
    "DATE" + "01/02/2024" → "Document Date": "01/02/2024"
    "PARTIES" + "ABC Ltd" → "Parties": "ABC Ltd"
    """
    m = _LABEL_VALUE_RE.match(heading)
    if m:
        label = canonical_label(m.group("label"))
        value = m.group("value").strip()
        if label == "Total Amount":
            amount = _AMOUNT_VALUE_RE.search(value)
            value = amount.group(0).rstrip(",") if amount else ""
        put_first(key_information, label, value)
        return

    if _DATE_HEADING_RE.search(heading):
        for line in context:
            d = DATE_SHAPE_RE.search(line)
            if d:
                put_first(key_information, "Document Date", d.group(0))
                return

    if _AMOUNT_HEADING_RE.search(heading):
        for line in context:
            amount = _AMOUNT_VALUE_RE.search(line)
            if amount:
                put_first(key_information, "Total Amount", amount.group(0).rstrip(","))
                return

    if _PARTIES_HEADING_RE.search(heading) and context:
        put_first(key_information, "Parties", context[0])


# ---------------------------------------------------------------------------
# Terminy prawne i słowa kluczowe
# ---------------------------------------------------------------------------

LEGAL_TERMS: tuple[str, ...] = (
    "whereas", "hereinafter", "herein", "hereby", "hereto", "heretofore",
    "thereof", "therein", "notwithstanding", "force majeure", "inter alia",
    "bona fide", "prima facie", "mutatis mutandis", "pro rata", "ab initio",
    "de facto", "de jure", "ex parte", "in lieu of", "sub judice",
    "res judicata", "ultra vires", "indemnify", "indemnification",
    "jurisdiction", "arbitration", "covenant", "warranty", "liability",
    "severability", "waiver", "governing law", "confidentiality",
    "termination", "breach", "consideration", "affidavit",
)


def find_legal_terms(text: str) -> list[str]:
    """Terminy z LEGAL_TERMS zawarte w tekście (dopasowanie podciągu, bez granic słów)."""
    lower = text.lower()
    return [term for term in LEGAL_TERMS if term in lower]


LEGAL_KEYWORDS: tuple[str, ...] = (
    "agreement", "contract", "deed", "testimony", "court", "witness",
    "plaintiff", "defendant", "legal", "document", "evidence", "property",
    "jurisdiction", "liability", "obligation", "settlement", "clause",
    "arbitration", "confidential", "binding", "warranty", "termination",
    "dispute", "damages", "negligence", "breach", "remedy", "covenant",
    "indemnify", "injunction", "mediation", "statute", "lawsuit",
    "affidavit", "stipulation", "provision", "recital", "whereas", "herein",
    "executor", "trustee", "probate", "fiduciary", "beneficiary", "litigation",
)

_CAPS_PHRASE_RE = _p(r"\b[A-Z]{2,}(?:[ \t][A-Z]+){0,3}\b")
_STOP_WORDS = {"and", "the", "or", "of", "to", "in", "for", "with", "by", "at", "from"}


def extract_keywords(text: str) -> list[str]:
    """Słowa kluczowe: słownik (granice słów) + frazy WIELKIMI literami."""
    lower = text.lower()
    keywords: list[str] = [
        kw for kw in LEGAL_KEYWORDS
        if re.search(rf"\b{re.escape(kw)}\b", lower)
    ]
    for m in _CAPS_PHRASE_RE.finditer(text):
        phrase = m.group(0).lower()
        if len(phrase) > 3 and phrase not in _STOP_WORDS and phrase not in keywords:
            keywords.append(phrase)
    return keywords


# ---------------------------------------------------------------------------
# Poufność i liczniki
# ---------------------------------------------------------------------------

def determine_confidentiality(text: str) -> str:
    lower = text.lower()
    if any(w in lower for w in ("confidential", "private", "not for distribution")):
        if "highly confidential" in lower or "strictly confidential" in lower:
            return "Highly Confidential"
        return "Confidential"
    if "internal use" in lower or "internal only" in lower:
        return "Internal Use Only"
    if "public" in lower or "for distribution" in lower:
        return "Public"
    return "Standard"


_WORDS_PER_PAGE = 500


def count_words(text: str) -> int:
    return len(text.split())


def estimate_page_count(text: str) -> int:
    return max(1, math.ceil(count_words(text) / _WORDS_PER_PAGE))


def recognition_quality(confidence: float) -> str:
    if confidence >= 0.85:
        return "high"
    if confidence >= 0.6:
        return "medium"
    return "low"
