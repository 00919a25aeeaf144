"""Errors raised while turning parsed input into subscription drafts."""

from typing import Iterable, List, Optional


class NormalizationError(ValueError):
    """Base class for field problems found by the normalizer."""

    kind = "normalization_error"

    def __init__(self, fields: Iterable[str], reason: str):
        self.fields: List[str] = list(fields)
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> dict:
        return {"error": self.kind, "fields": self.fields, "message": self.reason}


class MissingFieldError(NormalizationError):
    """A required field is absent after defaults have been applied."""

    kind = "missing_field"

    def __init__(self, fields: Iterable[str], source: str = "input"):
        fields = list(fields)
        super().__init__(fields, f"Could not determine {', '.join(fields)} from {source}")


class FieldTypeError(NormalizationError):
    """A field is present but has the wrong shape."""

    kind = "field_type_error"

    def __init__(self, field: str, expected: str):
        self.field = field
        self.expected = expected
        super().__init__([field], f"{field} must be {expected}")


class FieldValueError(NormalizationError):
    """A field is present but outside its allowed set of values."""

    kind = "field_value_error"

    def __init__(self, field: str, allowed: Iterable[str]):
        self.field = field
        self.allowed = list(allowed)
        super().__init__([field], f"{field} must be one of {', '.join(self.allowed)}")


class ParseError(Exception):
    """The AI parsing call failed or returned something unusable."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
