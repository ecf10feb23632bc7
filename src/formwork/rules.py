"""Format rules for text fields.

A rule is a callable that inspects a non-empty text value and returns a
``FieldError`` when the value is rejected, or ``None`` when it passes::

    def no_spaces(value: str) -> FieldError | None:
        if " " in value:
            return FieldError.invalid("Must not contain spaces")
        return None

    TextTemplate("username", required=True, rules=(no_spaces,))

Rules never see empty values: presence is the ``required`` flag's job.
Parameterized rules are factory functions that return a rule.
"""

import re
from collections.abc import Callable
from typing import TypeAlias

from formwork.field_errors import FieldError

Rule: TypeAlias = Callable[[str], FieldError | None]


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

# Scheme + host
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def email(value: str) -> FieldError | None:
    """Value must look like an email address."""
    if _EMAIL_RE.match(value) is None:
        return FieldError.invalid("Must be a valid email address")
    return None


def url(value: str) -> FieldError | None:
    """Value must be an http or https URL."""
    if _URL_RE.match(value) is None:
        return FieldError.invalid("Must be a valid URL")
    return None


def matches(pattern: str, message: str | None = None) -> Rule:
    """Value must match *pattern* in full."""
    compiled = re.compile(pattern)

    def check(value: str) -> FieldError | None:
        if compiled.fullmatch(value) is None:
            return FieldError.invalid(message or f"Must match pattern: {pattern}")
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Rule:
    """Value must be one of *choices*."""
    allowed = frozenset(choices)
    options = ", ".join(sorted(allowed))

    def check(value: str) -> FieldError | None:
        if value not in allowed:
            return FieldError.invalid(f"Must be one of: {options}")
        return None

    return check
