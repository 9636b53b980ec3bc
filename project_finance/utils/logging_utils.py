"""Structured log fields for finance operations.

Handlers and the reconciler tag every record they emit with the project and
operation they work on, so JSON logs can be filtered per project. Batch runs
(reconciling every project, bulk imports) also carry a correlation id that
ties their per-project records together.
"""

import functools
import logging
import threading
import time
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

_local = threading.local()

REDACTED = "***REDACTED***"

# Matched against lower-cased keys with dashes read as underscores,
# so "x-api-key" and "Authorization" are both caught.
SECRET_KEY_PARTS = ("api_key", "private_key", "authorization", "token", "secret")


def _current_fields() -> Dict[str, Any]:
    return getattr(_local, "fields", {})


class LogContext:
    """
    Attach fields to every log record emitted inside the block.

    Contexts nest: inner fields are added to (and may shadow) outer ones,
    and the outer set is restored on exit.

    Example:
        with LogContext(project_id="proj-001", operation="reconcile_ledger"):
            logger.info("Reconciling project totals")
    """

    def __init__(self, **fields):
        self.fields = fields
        self._outer: Optional[Dict[str, Any]] = None

    def __enter__(self):
        self._outer = _current_fields()
        _local.fields = {**self._outer, **self.fields}
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _local.fields = self._outer or {}
        return False


def project_context(
    project_id: Optional[str], operation: str, **fields
) -> LogContext:
    """Context for one operation on one project."""
    return LogContext(project_id=project_id, operation=operation, **fields)


def batch_context(operation: str, **fields) -> LogContext:
    """Context for a multi-project run, tagged with a fresh correlation id."""
    return LogContext(operation=operation, correlation_id=str(uuid.uuid4()), **fields)


class ContextFieldFilter(logging.Filter):
    """Copies the active LogContext fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _current_fields().items():
            setattr(record, key, value)
        return True


def _is_secret(key: str) -> bool:
    normalized = key.lower().replace("-", "_")
    return any(part in normalized for part in SECRET_KEY_PARTS)


def redact(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy a mapping with credential values replaced, recursing into nested
    mappings. Used before logging request headers and payloads.

    Example:
        >>> redact({"x-api-key": "abc", "year": "2024"})
        {'x-api-key': '***REDACTED***', 'year': '2024'}
    """
    cleaned: Dict[str, Any] = {}
    for key, value in data.items():
        if _is_secret(str(key)):
            cleaned[key] = None if value is None else REDACTED
        elif isinstance(value, Mapping):
            cleaned[key] = redact(value)
        else:
            cleaned[key] = value
    return cleaned


def log_calls(level: int = logging.DEBUG) -> Callable:
    """
    Decorator logging a call with its arguments and how long it took.

    Failures are logged with their traceback and re-raised.

    Example:
        @log_calls()
        def build_table(self, project_id, year):
            ...
        # DEBUG ... build_table('proj-001', '2024') finished in 3.1 ms
    """

    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            # Skip self on methods
            shown = args[1:] if args and hasattr(args[0], func.__name__) else args
            call = ", ".join(
                [repr(a) for a in shown] + [f"{k}={v!r}" for k, v in kwargs.items()]
            )
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception(f"{func.__name__}({call}) failed")
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log(level, f"{func.__name__}({call}) finished in {elapsed_ms:.1f} ms")
            return result

        return wrapper

    return decorator
