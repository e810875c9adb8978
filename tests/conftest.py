"""Shared pytest fixtures: sample OCR texts used across the analyzer tests."""

import logging

import pytest


CLAUSE_CONTRACT = (
    "CLAUSE 1: Term\n"
    "This is term text.\n"
    "1.1 First sub.\n"
    "1.2 Second sub.\n"
    "CLAUSE 2: Payment\n"
    "Payment text."
)

SERVICE_AGREEMENT = """\
SERVICE AGREEMENT

This Agreement is made between ABC Corp and XYZ Limited.
Dated: 15/01/2024

"Services" means the consulting services described in Schedule 1.
The parties shall comply with Section 65B of the Indian Evidence Act, 1872.

Schedule 1 - Fees
| Item | Amount |
| Audit | 1,000 |
| Review | 500 |

WHEREAS the parties agree to the terms herein.

Signature: ______________
John Smith
Managing Director
Date: 15/01/2024
"""

INVOICE = """\
INVOICE NO: INV-2024-001
Bill to: Acme Retail
Consulting hours billed for January.
TOTAL DUE: $1,250.00
"""


@pytest.fixture
def clause_contract() -> str:
    return CLAUSE_CONTRACT


@pytest.fixture
def service_agreement() -> str:
    return SERVICE_AGREEMENT


@pytest.fixture
def invoice_text() -> str:
    return INVOICE


@pytest.fixture
def restore_root_logger():
    """Reset root logger handlers after tests that configure logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
