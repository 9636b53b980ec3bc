"""Payload validation shared by the request handlers."""

from typing import Any, Dict, Iterable, Mapping, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from project_finance.errors import ValidationError
from project_finance.models.base import BaseDataModel

ModelT = TypeVar("ModelT", bound=BaseDataModel)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(payload: Mapping[str, Any], *fields: str) -> None:
    """Raise ValidationError naming the first required field that is missing.

    Example:
        >>> require_fields({"project_id": "p1"}, "project_id", "amount")
        Traceback (most recent call last):
        ...
        project_finance.errors.ValidationError: Missing required field: amount
    """
    for name in fields:
        if _is_missing(payload.get(name)):
            raise ValidationError(f"Missing required field: {name}", field=name)


def pick_fields(payload: Mapping[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """Keep only the allowed keys that are present in the payload."""
    return {name: payload[name] for name in allowed if name in payload}


def build_model(model_cls: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """Validate data into a model, reporting failures as ValidationError."""
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = first.get("msg", str(e))
        raise ValidationError(
            f"Invalid {field}: {message}" if field else message, field=field
        ) from e
