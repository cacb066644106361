"""Schema Validator — turns arbitrary JSON into typed request models.

Malformed input is an expected outcome, so ``validate_payload`` never raises
for it.  It returns a ``ValidationOutcome`` holding either the model instance
or one ``FieldError`` per violated rule, with dotted camelCase field paths
(``projectDetails.selectedRecommendations``) ready for a 400 response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from advisor.models.response_models import FieldError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ValidationOutcome(Generic[ModelT]):
    value: Optional[ModelT] = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def failed_fields(self) -> set[str]:
        return {e.field for e in self.errors}


def validate_payload(model: type[ModelT], data: Any) -> ValidationOutcome[ModelT]:
    """Validate ``data`` against ``model``; collect field errors instead of raising."""
    try:
        return ValidationOutcome(value=model.model_validate(data))
    except ValidationError as exc:
        return ValidationOutcome(errors=[_to_field_error(err) for err in exc.errors()])


def _to_field_error(err: dict[str, Any]) -> FieldError:
    path = ".".join(str(part) for part in err.get("loc", ())) or "body"
    return FieldError(field=path, message=_friendly_message(err), type=err.get("type", ""))


def _friendly_message(err: dict[str, Any]) -> str:
    err_type = err.get("type", "")
    ctx = err.get("ctx") or {}

    if err_type == "missing":
        return "is required"
    if err_type == "too_short":
        n = ctx.get("min_length", 1)
        return f"must contain at least {n} element{'s' if n != 1 else ''}"
    if err_type == "string_too_short" and ctx.get("min_length", 1) == 1:
        return "must not be empty"
    if err_type == "literal_error":
        return f"must be one of {ctx.get('expected', '')}".strip()
    if err_type == "value_error" and "email address" in err.get("msg", ""):
        return "invalid format"
    return err.get("msg", "invalid value")
