"""Field templates: how one named field is parsed and validated.

Every template satisfies the ``FieldTemplate`` protocol::

    template.name                 # field name
    template.kind                 # FieldKind discriminant
    template.parse(raw)           # -> (value | None, FieldError | None)
    template.validate(value)      # -> list[FieldError]

``parse`` turns one raw submitted string into the kind's Python type.
An empty string parses to ``None`` (absent) for every kind except text,
so "omitted" and "submitted empty" both end up as a missing value rather
than a parse failure. ``validate`` receives whatever ``parse`` produced
and may rely on it being ``None`` or the declared type.

Templates are frozen dataclasses. Inconsistent configuration raises
``ConfigurationError`` at construction time::

    IntegerTemplate("age", minimum=10, maximum=1)   # ConfigurationError

New kinds only need to implement the protocol; ``FormTemplate`` never
special-cases a kind.
"""

import math
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Protocol, TypeVar, runtime_checkable

from formwork.errors import ConfigurationError
from formwork.field_errors import FieldError
from formwork.rules import Rule

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Sign, leading zeros, significant digits
_INTEGER_RE = re.compile(r"([+-]?)0*([0-9]+)")
_INT64_DIGITS = len(str(INT64_MAX))
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


class FieldKind(StrEnum):
    """The data kind a field parses to."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


T = TypeVar("T")


@runtime_checkable
class FieldTemplate(Protocol[T]):
    """Structural interface shared by every field kind."""

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> FieldKind: ...

    def parse(self, raw: str) -> tuple[T | None, FieldError | None]: ...

    def validate(self, value: T | None) -> list[FieldError]: ...


def _check_name(name: str) -> None:
    if not name:
        msg = "Field templates need a non-empty name"
        raise ConfigurationError(msg)


def _check_range(name: str, minimum: float | None, maximum: float | None) -> None:
    if minimum is not None and maximum is not None and minimum > maximum:
        msg = f"Field {name!r}: minimum ({minimum}) is greater than maximum ({maximum})"
        raise ConfigurationError(msg)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TextTemplate:
    """Free text. Lengths are counted in characters and bounds are inclusive.

    Empty text is only ever checked by ``required``; ``min_length`` and
    the rules apply to non-empty values.
    """

    kind: ClassVar[FieldKind] = FieldKind.TEXT

    name: str
    required: bool = False
    min_length: int = 0
    max_length: int | None = None
    rules: tuple[Rule, ...] = ()

    def __post_init__(self) -> None:
        _check_name(self.name)
        if self.min_length < 0:
            msg = f"Field {self.name!r}: min_length cannot be negative"
            raise ConfigurationError(msg)
        _check_range(self.name, self.min_length, self.max_length)

    def parse(self, raw: str) -> tuple[str | None, FieldError | None]:
        return raw, None

    def validate(self, value: str | None) -> list[FieldError]:
        if not value:
            return [FieldError.missing()] if self.required else []

        errors: list[FieldError] = []
        if len(value) < self.min_length:
            errors.append(FieldError.too_short(self.min_length))
        if self.max_length is not None and len(value) > self.max_length:
            errors.append(FieldError.too_long(self.max_length))
        for rule in self.rules:
            error = rule(value)
            if error is not None:
                errors.append(error)
        return errors


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IntegerTemplate:
    """Base-10 signed 64-bit integer with inclusive bounds.

    The minimum defaults to 0; pass a negative ``minimum`` to accept
    negative numbers.

    Accepts an optional sign followed by ASCII digits; leading zeros are
    ignored. Whitespace, underscores and values outside the 64-bit range
    are not convertible.
    """

    kind: ClassVar[FieldKind] = FieldKind.INTEGER

    name: str
    required: bool = False
    minimum: int = 0
    maximum: int = INT64_MAX

    def __post_init__(self) -> None:
        _check_name(self.name)
        for bound in (self.minimum, self.maximum):
            if not INT64_MIN <= bound <= INT64_MAX:
                msg = f"Field {self.name!r}: bound {bound} is outside the 64-bit range"
                raise ConfigurationError(msg)
        _check_range(self.name, self.minimum, self.maximum)

    def parse(self, raw: str) -> tuple[int | None, FieldError | None]:
        if raw == "":
            return None, None
        match = _INTEGER_RE.fullmatch(raw)
        if match is None:
            return None, FieldError.not_convertible("integer")
        sign, digits = match.groups()
        if len(digits) > _INT64_DIGITS:
            return None, FieldError.not_convertible("integer")
        value = int(sign + digits)
        if not INT64_MIN <= value <= INT64_MAX:
            return None, FieldError.not_convertible("integer")
        return value, None

    def validate(self, value: int | None) -> list[FieldError]:
        if value is None:
            return [FieldError.missing()] if self.required else []
        if value < self.minimum:
            return [FieldError.too_small(self.minimum)]
        if value > self.maximum:
            return [FieldError.too_big(self.maximum)]
        return []


@dataclass(frozen=True, slots=True)
class FloatTemplate:
    """Finite decimal number with optional inclusive bounds.

    ``nan``, ``inf`` and values that overflow to infinity are rejected.
    """

    kind: ClassVar[FieldKind] = FieldKind.FLOAT

    name: str
    required: bool = False
    minimum: float | None = None
    maximum: float | None = None

    def __post_init__(self) -> None:
        _check_name(self.name)
        _check_range(self.name, self.minimum, self.maximum)

    def parse(self, raw: str) -> tuple[float | None, FieldError | None]:
        if raw == "":
            return None, None
        if _FLOAT_RE.fullmatch(raw) is None:
            return None, FieldError.not_convertible("number")
        value = float(raw)
        if not math.isfinite(value):
            return None, FieldError.not_convertible("number")
        return value, None

    def validate(self, value: float | None) -> list[FieldError]:
        if value is None:
            return [FieldError.missing()] if self.required else []
        if self.minimum is not None and value < self.minimum:
            return [FieldError.too_small(self.minimum)]
        if self.maximum is not None and value > self.maximum:
            return [FieldError.too_big(self.maximum)]
        return []


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BooleanTemplate:
    """Checkbox-style flag.

    ``true``/``1``/``yes``/``on`` parse to ``True`` and
    ``false``/``0``/``no``/``off`` to ``False`` (case-insensitive).
    A required boolean must be ``True``: an unticked box counts as missing.
    """

    kind: ClassVar[FieldKind] = FieldKind.BOOLEAN

    name: str
    required: bool = False

    def __post_init__(self) -> None:
        _check_name(self.name)

    def parse(self, raw: str) -> tuple[bool | None, FieldError | None]:
        if raw == "":
            return None, None
        lowered = raw.lower()
        if lowered in _TRUE_VALUES:
            return True, None
        if lowered in _FALSE_VALUES:
            return False, None
        return None, FieldError.not_convertible("boolean")

    def validate(self, value: bool | None) -> list[FieldError]:
        if self.required and value is not True:
            return [FieldError.missing()]
        return []
