"""Store layer - owns the document, its persistence and its mutations.

This module re-exports the public store functions for easy importing.
"""

from moneygoes.store.document import (
    DATA_KEY,
    IdGenerator,
    add_expense,
    clear_month_expenses,
    default_document,
    delete_expense,
    export_json,
    find_expense,
    import_json,
    load_or_default,
    save,
    update_budget,
    update_expense,
)
from moneygoes.store.session import Session
from moneygoes.store.storage import FileStorage, MemoryStorage, Storage, get_data_dir

__all__ = [
    # Storage
    "FileStorage",
    "MemoryStorage",
    "Storage",
    "get_data_dir",
    # Document
    "DATA_KEY",
    "IdGenerator",
    "add_expense",
    "clear_month_expenses",
    "default_document",
    "delete_expense",
    "export_json",
    "find_expense",
    "import_json",
    "load_or_default",
    "save",
    "update_budget",
    "update_expense",
    # Session
    "Session",
]
