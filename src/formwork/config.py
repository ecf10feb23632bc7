"""Form configuration.

FormConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from enum import StrEnum


class MultiValuePolicy(StrEnum):
    """How a field submitted more than once is resolved.

    ``LAST`` mirrors how repeated form keys usually resolve (the final
    value wins). ``REJECT`` records a ``MULTIPLE_VALUES`` error instead.
    """

    LAST = "last"
    FIRST = "first"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Form parsing configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(multi_value=MultiValuePolicy.REJECT, strip_whitespace=True)
    """

    # Repeated keys
    multi_value: MultiValuePolicy = MultiValuePolicy.LAST

    # Strip surrounding whitespace before parsing (raw text is kept as submitted)
    strip_whitespace: bool = False
