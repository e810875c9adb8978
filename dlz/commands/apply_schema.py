"""Komenda: dlz apply-schema — tworzy tabele repozytorium dokumentów w PostgreSQL."""

from __future__ import annotations

import argparse
import pathlib
import re

from rich import box
from rich.console import Console
from rich.table import Table

from dlz._db import get_connection

console = Console()

ROOT        = pathlib.Path(__file__).resolve().parent.parent.parent
SCHEMA_PATH = ROOT / "db" / "schema.sql"

_DOLLAR_QUOTE = "$$"
_FIRST_WORDS_RE = re.compile(r"^\s*((?:\S+\s+){0,5}\S+)")


# ---------------------------------------------------------------------------
# Podział pliku SQL
# ---------------------------------------------------------------------------

def split_statements(sql: str) -> list[str]:
    """
    Instrukcje SQL z pliku schematu, w kolejności występowania.

    Granica instrukcji: średnik na końcu linii poza blokiem $$ ... $$
    (DO $$ BEGIN ... END $$). Komentarze "--" między instrukcjami
    nie trafiają do wyniku.
    """
    statements: list[str] = []
    pending: list[str] = []
    inside_block = False

    for line in sql.splitlines(keepends=True):
        between_statements = not pending and not inside_block
        if between_statements and line.lstrip().startswith("--"):
            continue
        pending.append(line)
        if line.count(_DOLLAR_QUOTE) % 2:
            inside_block = not inside_block
        if not inside_block and line.rstrip().endswith(";"):
            _push(statements, pending)
            pending = []

    _push(statements, pending)
    return statements


def _push(statements: list[str], lines: list[str]) -> None:
    statement = "".join(lines).strip()
    if statement:
        statements.append(statement)


def statement_label(statement: str) -> str:
    """Krótki opis instrukcji do podglądu, np. "CREATE TABLE IF NOT EXISTS document"."""
    m = _FIRST_WORDS_RE.match(statement)
    label = m.group(1) if m else statement
    return " ".join(label.split()).rstrip(" (;")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def _show_plan(schema_path: pathlib.Path, stmts: list[str]) -> None:
    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white", expand=False)
    table.add_column("#", justify="right", no_wrap=True, style="dim")
    table.add_column("INSTRUKCJA", no_wrap=True, style="cyan")
    for n, stmt in enumerate(stmts, start=1):
        table.add_row(str(n), statement_label(stmt))
    console.print(f"[bold]{schema_path}[/bold]")
    console.print(table)


def run(args: argparse.Namespace) -> None:
    schema_path = pathlib.Path(args.schema) if args.schema else SCHEMA_PATH
    if not schema_path.exists():
        console.print(f"[red]Brak pliku schematu:[/red] {schema_path}")
        raise SystemExit(1)

    stmts = split_statements(schema_path.read_text(encoding="utf-8"))
    if args.dry_run:
        _show_plan(schema_path, stmts)
        return

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    # Typ certificate_status musi istnieć przed CREATE TABLE certificate:
    # każda instrukcja zatwierdzana osobno.
    conn.autocommit = True
    try:
        with conn.cursor() as cur:
            for stmt in stmts:
                cur.execute(stmt)
    except Exception as e:
        console.print(f"[red]Błąd wykonania schematu:[/red] {e}")
        raise SystemExit(1)
    finally:
        conn.close()

    console.print(f"[green]Schemat zastosowany:[/green] {schema_path} ({len(stmts)} instrukcji)")


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply-schema",
        help="Tworzy tabele document / certificate w PostgreSQL (idempotentne).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje db/schema.sql na bazie wskazanej przez PGHOST, PGPORT, PGDATABASE,
PGUSER i PGPASSWORD. Plik można uruchamiać wielokrotnie.

Przykłady:
  dlz apply-schema
  dlz apply-schema --dry-run
        """,
    )
    p.add_argument("--schema", metavar="PLIK", default=None,
                   help="Alternatywny plik schematu (domyślnie: db/schema.sql).")
    p.add_argument("--dry-run", action="store_true",
                   help="Tylko wypisz instrukcje, bez łączenia z bazą.")
    p.set_defaults(func=run)
