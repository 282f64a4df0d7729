from typing import Any, Iterable, TypeVar
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

_REQUEST_LOCATIONS = ("body", "query", "path", "header")


class ApiModel(BaseModel):
    # JSON is camelCase, Python attributes stay snake_case; unknown keys are dropped
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        str_strip_whitespace = True


class MessageOut(ApiModel):
    message: str


class SubmissionOut(ApiModel):
    id: int
    message: str


def blank_to_none(value: Any) -> Any:
    """Optional form fields arrive as "" when left empty."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def field_errors(errors: Iterable[dict]) -> list[dict]:
    """Flatten pydantic/FastAPI error dicts into [{field, message}, ...]."""
    out = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        out.append({"field": field, "message": err.get("msg", "Invalid value")})
    return out


class PayloadValidationError(Exception):
    def __init__(self, errors: list[dict]):
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(f"Validation failed for: {fields}")


M = TypeVar("M", bound=BaseModel)


def validate_payload(model: type[M], data: Any) -> M:
    """Parse ``data`` into ``model`` or raise PayloadValidationError listing every bad field."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise PayloadValidationError(field_errors(exc.errors())) from exc
