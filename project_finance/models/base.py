"""Base model for all data models in the project finance tracker.

This module provides a base Pydantic model with common configuration
and the numeric coercion shared by the money and labor-day fields.
"""

import datetime as dt
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


def utc_now() -> dt.datetime:
    """Current UTC timestamp used for created_at fields."""
    return dt.datetime.now(dt.timezone.utc)


def to_decimal(value: Any) -> Decimal:
    """Convert a numeric value (or numeric string) to Decimal.

    Floats go through str() so 7.33 becomes Decimal('7.33') rather than
    its binary expansion.

    Raises:
        ValueError: If the value cannot be converted
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Cannot convert {value!r} to Decimal: {e}")
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to a finite Decimal")
    return result


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - Serialization to/from dictionaries
    - Arbitrary types support for dates and decimals

    Example:
        >>> class Team(BaseDataModel):
        ...     name: str
        ...     size: int
        >>> team = Team(name="Platform", size=4)
        >>> team.model_dump()
        {'name': 'Platform', 'size': 4}
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )
