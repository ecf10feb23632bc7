"""Shared type aliases used across formwork modules."""

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

from formwork._internal.multimap import MultiValueMapping

if TYPE_CHECKING:
    from formwork.form import FormInstance

# Decoded submission: field name -> submitted values (a bare string counts as one value)
Submissions: TypeAlias = Mapping[str, Sequence[str] | str] | MultiValueMapping

# Parsed value of any built-in kind; None means absent
ParsedValue: TypeAlias = str | int | float | bool | None

# Form-level hook: inspects the whole instance and adjusts field errors in place
CustomValidator: TypeAlias = Callable[["FormInstance"], Any]
