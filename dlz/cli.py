"""
dlz — narzędzie CLI dla DocuLegalize.

Użycie:
  dlz [--verbose] <komenda> [opcje]

Komendy:
  analyze             Analizuje strukturę pliku i wypisuje wynik (bez zapisu).
  ingest              Analizuje plik i zapisuje dokument w repozytorium.
  ingest-url          Pobiera stronę HTML, analizuje i zapisuje dokument.
  documents           Listuje dokumenty w repozytorium.
  export              Eksportuje strukturę zapisanego dokumentu.
  delete              Usuwa dokument z repozytorium.
  certificate         Wystawia certyfikat Section 65B dla dokumentu.
  verify-certificate  Weryfikuje certyfikat Section 65B.
  apply-schema        Aplikuje db/schema.sql do bazy danych (idempotentne).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252; wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from dlz._config import load_env
from dlz._logging import configure_logging
from dlz.commands import analyze as cmd_analyze
from dlz.commands import ingest as cmd_ingest
from dlz.commands import ingest_url as cmd_ingest_url
from dlz.commands import documents as cmd_documents
from dlz.commands import export as cmd_export
from dlz.commands import delete as cmd_delete
from dlz.commands import certificate as cmd_certificate
from dlz.commands import verify_certificate as cmd_verify_certificate
from dlz.commands import apply_schema as cmd_apply_schema


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dlz",
        description="DocuLegalize — analiza struktury dokumentów prawnych.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="dlz 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Logi diagnostyczne (DEBUG) na stderr.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_analyze.add_parser(subparsers)
    cmd_ingest.add_parser(subparsers)
    cmd_ingest_url.add_parser(subparsers)
    cmd_documents.add_parser(subparsers)
    cmd_export.add_parser(subparsers)
    cmd_delete.add_parser(subparsers)
    cmd_certificate.add_parser(subparsers)
    cmd_verify_certificate.add_parser(subparsers)
    cmd_apply_schema.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
