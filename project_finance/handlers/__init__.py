"""
Request handlers: validate a payload, call the store, log the outcome.

Each handler takes an explicitly constructed store handle. Read handlers
accept any ReadOnlyStore; write handlers need an AdminStore.
"""

from project_finance.handlers import (
    health,
    labor_days,
    ledger,
    projects,
    role_rates,
    spending,
)

__all__ = ["health", "labor_days", "ledger", "projects", "role_rates", "spending"]
