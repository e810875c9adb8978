from .repository import (
    CertificateNotFoundError,
    DocumentNotFoundError,
    DocumentRepository,
    InMemoryDocumentRepository,
    JsonFileDocumentRepository,
    PostgresDocumentRepository,
    certificate_from_dict,
    certificate_to_dict,
    document_from_dict,
    document_to_dict,
    save_extracted_text,
)

__all__ = [
    "CertificateNotFoundError",
    "DocumentNotFoundError",
    "DocumentRepository",
    "InMemoryDocumentRepository",
    "JsonFileDocumentRepository",
    "PostgresDocumentRepository",
    "certificate_from_dict",
    "certificate_to_dict",
    "document_from_dict",
    "document_to_dict",
    "save_extracted_text",
]
