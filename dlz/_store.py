"""Wybór repozytorium dokumentów dla komend dlz (json | db)."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from data_model.records import Document
from dlz import _config
from store.repository import (
    DocumentNotFoundError,
    DocumentRepository,
    JsonFileDocumentRepository,
    PostgresDocumentRepository,
)

console = Console()


def open_repository(kind: str | None = None, path: str | pathlib.Path | None = None) -> DocumentRepository:
    kind = kind or _config.store_kind()
    if kind == "db":
        from dlz._db import get_connection
        return PostgresDocumentRepository(get_connection)
    if kind == "json":
        try:
            return JsonFileDocumentRepository(path or _config.store_path())
        except ValueError as e:
            console.print(f"[red]Błąd repozytorium:[/red] {e}")
            raise SystemExit(1)
    console.print(f"[red]Nieznany typ repozytorium:[/red] {kind} (oczekiwano json | db)")
    raise SystemExit(1)


def repository_from_args(args: argparse.Namespace) -> DocumentRepository:
    return open_repository(getattr(args, "store", None), getattr(args, "store_path", None))


def get_document_or_exit(repo: DocumentRepository, doc_id: str) -> Document:
    try:
        return repo.get(doc_id)
    except DocumentNotFoundError:
        console.print(f"[red]Brak dokumentu:[/red] {doc_id}")
        raise SystemExit(1)
    except Exception as e:
        console.print(f"[red]Błąd odczytu repozytorium:[/red] {e}")
        raise SystemExit(1)


def add_store_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--store",
        choices=["json", "db"],
        default=None,
        help="Repozytorium dokumentów: json lub db (domyślnie: $DLZ_STORE lub json).",
    )
    p.add_argument(
        "--store-path",
        metavar="PLIK",
        default=None,
        help="Plik repozytorium json (domyślnie: $DLZ_STORE_PATH lub documents.json).",
    )
