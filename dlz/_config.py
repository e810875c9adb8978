"""Konfiguracja dlz — zmienne środowiskowe, opcjonalnie z pliku .env w katalogu projektu."""

from __future__ import annotations

import os
import pathlib

from dotenv import load_dotenv

ROOT     = pathlib.Path(__file__).resolve().parent.parent
ENV_PATH = ROOT / ".env"

DEFAULT_STORE      = "json"
DEFAULT_STORE_PATH = "documents.json"
DEFAULT_ISSUER     = "DocuLegalize"


def load_env() -> None:
    """Wczytuje .env (jeśli istnieje); zmienne już ustawione w środowisku mają pierwszeństwo."""
    load_dotenv(ENV_PATH, override=False)


def store_kind() -> str:
    return os.getenv("DLZ_STORE", DEFAULT_STORE)


def store_path() -> pathlib.Path:
    return pathlib.Path(os.getenv("DLZ_STORE_PATH", DEFAULT_STORE_PATH))


def default_issuer() -> str:
    return os.getenv("DLZ_ISSUER", DEFAULT_ISSUER)
