"""html_parser/parser.py — strona HTML do zwykłego tekstu (wejście analizatora)."""

from __future__ import annotations

import logging
import re

import requests
from bs4 import BeautifulSoup, Tag

log = logging.getLogger(__name__)

# Tagi blokowe (determinują granice linii tekstu)
_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_BLOCK_TAGS: set[str] = {
    "div", "p", "article", "section", "main", "aside", "nav",
    "header", "footer", "blockquote", "pre",
    "li", "ul", "ol",
    "table", "thead", "tbody", "tfoot", "tr",
    "form", "fieldset", "details", "summary",
} | _HEADING_TAGS

# Tagi zawierające szum (nie treść)
_NOISE_TAGS = {"script", "style", "noscript", "template"}

_CELL_TAGS = {"td", "th"}

_WS_RE = re.compile(r"[ \t ]+")

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


def _text_of(el: Tag) -> str:
    return _WS_RE.sub(" ", el.get_text(" ", strip=True)).strip()


def _extract_blocks(body: Tag) -> list[tuple[bool, str]]:
    """
    Przechodzi drzewo DOM i zwraca spłaszczoną listę bloków:
      (is_heading, text)

    Reguła unikania duplikowania treści:
    - Nagłówek (h1–h6): emituje cały swój tekst, bez rekurencji w dzieci.
    - Wiersz tabeli (tr): komórki w jednej linii "| a | b |".
    - Blok liściasty (brak blokowych dzieci): emituje cały swój tekst.
    - Blok kontenerowy (ma blokowe dzieci): rekuruje w dzieci, sam nie emituje.
    """
    blocks: list[tuple[bool, str]] = []

    def walk(el: Tag) -> None:
        name = el.name
        if name in _NOISE_TAGS:
            return
        if name in _HEADING_TAGS:
            text = _text_of(el)
            if text:
                blocks.append((True, text))
            return
        if name == "tr":
            cells = [_text_of(c) for c in el.find_all(_CELL_TAGS, recursive=False)]
            if any(cells):
                blocks.append((False, "| " + " | ".join(cells) + " |"))
            return
        if name in _BLOCK_TAGS:
            has_block_child = any(
                isinstance(c, Tag) and c.name in _BLOCK_TAGS
                for c in el.children
            )
            if not has_block_child:
                text = _text_of(el)
                if text:
                    blocks.append((False, text))
                return
        for child in el.children:
            if isinstance(child, Tag):
                walk(child)

    for child in body.children:
        if isinstance(child, Tag):
            walk(child)

    return blocks


def html_to_text(html: str) -> str:
    """
    Zamienia dokument HTML na tekst: każdy blok w osobnej linii,
    przed nagłówkiem pusta linia. Skrypty i style są pomijane.
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(_NOISE_TAGS):
        tag.decompose()

    body: Tag = soup.find("body") or soup  # type: ignore[assignment]
    lines: list[str] = []
    for is_heading, text in _extract_blocks(body):
        if is_heading and lines:
            lines.append("")
        lines.append(text)
    return "\n".join(lines)


def fetch_html_text(url: str, timeout: float = 30) -> str:
    """Pobiera stronę HTML z podanego URL i zwraca jej tekst."""
    resp = requests.get(url, timeout=timeout, headers={"User-Agent": _USER_AGENT})
    resp.raise_for_status()
    resp.encoding = resp.apparent_encoding or "utf-8"
    log.debug("fetch_html_text(%s): %d bajtów", url, len(resp.content))
    return html_to_text(resp.text)
