"""
Stores for projects, ledger entries, role rates and labor-day records.
"""

from project_finance.stores.base import (
    TABLE_NAMES,
    AdminStore,
    ReadOnlyStore,
    RestrictedStore,
    restricted,
)
from project_finance.stores.factory import create_store
from project_finance.stores.json_store import JsonFileStore
from project_finance.stores.memory_store import InMemoryStore

__all__ = [
    "AdminStore",
    "InMemoryStore",
    "JsonFileStore",
    "ReadOnlyStore",
    "RestrictedStore",
    "TABLE_NAMES",
    "create_store",
    "restricted",
]
