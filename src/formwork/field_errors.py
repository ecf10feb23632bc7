"""Field errors: value-comparable validation outcomes.

A ``FieldError`` is a plain frozen value: an ``ErrorCode`` plus the bound
or detail that explains it. Two errors are equal when their code, bound and
detail are equal, so checks read naturally::

    assert template.validate("Sam") == [FieldError.too_short(4)]

``QualifiedError`` pairs a ``FieldError`` with the name of the field it
belongs to, for form-level reporting.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCode(StrEnum):
    """Every kind of field error formwork reports."""

    MISSING = "missing"
    NOT_CONVERTIBLE = "not_convertible"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID = "invalid"
    MULTIPLE_VALUES = "multiple_values"
    CUSTOM = "custom"


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MISSING: "is missing",
    ErrorCode.NOT_CONVERTIBLE: "is not a valid {detail}",
    ErrorCode.TOO_SMALL: "is too small (minimum: {bound})",
    ErrorCode.TOO_BIG: "is too big (maximum: {bound})",
    ErrorCode.TOO_SHORT: "is too short (minimum: {bound} characters)",
    ErrorCode.TOO_LONG: "is too long (maximum: {bound} characters)",
    ErrorCode.INVALID: "{detail}",
    ErrorCode.MULTIPLE_VALUES: "was submitted more than once",
    ErrorCode.CUSTOM: "{detail}",
}


@dataclass(frozen=True, slots=True)
class FieldError:
    """One problem with one field's submission.

    Attributes:
        code: What went wrong.
        bound: The violated limit for range and length errors.
        detail: Kind name for ``NOT_CONVERTIBLE``, message text for
            ``INVALID`` and ``CUSTOM``.
    """

    code: ErrorCode
    bound: int | float | None = None
    detail: str = ""

    @property
    def message(self) -> str:
        """Human-readable English message (no field name)."""
        return _MESSAGES[self.code].format(bound=self.bound, detail=self.detail)

    def __str__(self) -> str:
        return self.message

    # -- Constructors --

    @classmethod
    def missing(cls) -> FieldError:
        return cls(ErrorCode.MISSING)

    @classmethod
    def not_convertible(cls, kind: str) -> FieldError:
        return cls(ErrorCode.NOT_CONVERTIBLE, detail=kind)

    @classmethod
    def too_small(cls, minimum: int | float) -> FieldError:
        return cls(ErrorCode.TOO_SMALL, bound=minimum)

    @classmethod
    def too_big(cls, maximum: int | float) -> FieldError:
        return cls(ErrorCode.TOO_BIG, bound=maximum)

    @classmethod
    def too_short(cls, minimum: int) -> FieldError:
        return cls(ErrorCode.TOO_SHORT, bound=minimum)

    @classmethod
    def too_long(cls, maximum: int) -> FieldError:
        return cls(ErrorCode.TOO_LONG, bound=maximum)

    @classmethod
    def invalid(cls, message: str) -> FieldError:
        """A format rule rejected the value."""
        return cls(ErrorCode.INVALID, detail=message)

    @classmethod
    def multiple_values(cls) -> FieldError:
        return cls(ErrorCode.MULTIPLE_VALUES)

    @classmethod
    def custom(cls, message: str) -> FieldError:
        """An error attached by a form-level custom validator."""
        return cls(ErrorCode.CUSTOM, detail=message)


@dataclass(frozen=True, slots=True)
class QualifiedError:
    """A ``FieldError`` tagged with the field it belongs to."""

    field_name: str
    error: FieldError

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    def __str__(self) -> str:
        return f"{self.field_name}: {self.error}"
