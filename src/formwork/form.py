"""Form templates and form instances: the parse/validate engine.

A ``FormTemplate`` is defined once, at startup, from field templates.
Every submission then goes through the same two steps::

    signup = FormTemplate(
        TextTemplate("name", required=True, max_length=30),
        IntegerTemplate("age", maximum=1000),
    )

    form = signup.parse({"name": ["David"], "age": ["30"]})
    signup.validate(form)
    if not form.is_valid:
        return render("signup.html", form=form.submissions(), errors=form.error_messages())

``parse`` never fails as a whole: each field records its own raw text,
parsed value and parse error. ``validate`` then fills every field's error
list and finally runs the optional custom validator, which sees the
per-field outcome and may change any field's errors (cross-field checks
such as password confirmation).

The template freezes on first use. ``add_field()`` after that raises
``ConfigurationError``; a frozen template can be shared between threads.
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from formwork._internal.multimap import MultiValueMapping
from formwork._internal.types import CustomValidator, ParsedValue, Submissions
from formwork.config import FormConfig, MultiValuePolicy
from formwork.errors import ConfigurationError
from formwork.field_errors import FieldError, QualifiedError
from formwork.fields import FieldKind, FieldTemplate

logger = logging.getLogger("formwork.form")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class FieldResult:
    """One field's outcome within a ``FormInstance``.

    Attributes:
        name: Field name.
        kind: Data kind of ``value``, taken from the field template.
        raw: Submitted text, ``""`` when the field was absent.
        value: Parsed value, or ``None`` when absent or unparsable.
        parse_error: Why ``raw`` could not be parsed, if it could not.
        errors: Every problem found for this field; empty when valid.
    """

    name: str
    kind: FieldKind
    raw: str = ""
    value: ParsedValue = None
    parse_error: FieldError | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def error(self) -> FieldError | None:
        """The first error, for UIs that show one message per field."""
        return self.errors[0] if self.errors else None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def set_error(self, error: FieldError) -> None:
        """Replace all errors with *error*."""
        self.errors = [error]

    def add_error(self, error: FieldError) -> None:
        self.errors.append(error)

    def clear_errors(self) -> None:
        self.errors = []


@dataclass(slots=True)
class FormInstance:
    """Per-submission results, keyed by field name.

    Holds one ``FieldResult`` per field of the template that created it.
    Truthy when valid, so you can write::

        if not form:
            ...
    """

    fields: dict[str, FieldResult]

    def __getitem__(self, name: str) -> FieldResult:
        return self.fields[name]

    def __iter__(self) -> Iterator[FieldResult]:
        return iter(self.fields.values())

    @property
    def is_valid(self) -> bool:
        """True if no field has an error. Recomputed on every access."""
        return all(result.is_valid for result in self.fields.values())

    def __bool__(self) -> bool:
        return self.is_valid

    @property
    def errors(self) -> list[QualifiedError]:
        """Every field error, tagged with its field name, in field order."""
        return [
            QualifiedError(result.name, error)
            for result in self.fields.values()
            for error in result.errors
        ]

    def values(self) -> dict[str, ParsedValue]:
        """Parsed values by field name."""
        return {name: result.value for name, result in self.fields.items()}

    def submissions(self) -> dict[str, str]:
        """Raw submitted text by field name, for re-populating a form."""
        return {name: result.raw for name, result in self.fields.items()}

    def error_messages(self) -> dict[str, list[str]]:
        """Messages for the fields that have errors::

            {"age": ["is too small (minimum: 0)"]}
        """
        return {
            name: [error.message for error in result.errors]
            for name, result in self.fields.items()
            if result.errors
        }


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------


class FormTemplate:
    """A named registry of field templates and a factory for form instances.

    Args:
        *templates: Field templates to register, in display order.
        config: Parsing configuration. Defaults to ``FormConfig()``.
        custom_validate: Optional hook called once per ``validate()``,
            after every field has been validated.
    """

    __slots__ = ("_fields", "_freeze_lock", "_frozen", "config", "custom_validate")

    def __init__(
        self,
        *templates: FieldTemplate[Any],
        config: FormConfig | None = None,
        custom_validate: CustomValidator | None = None,
    ) -> None:
        self.config = config or FormConfig()
        self.custom_validate = custom_validate
        self._fields: dict[str, FieldTemplate[Any]] = {}
        self._frozen = False
        self._freeze_lock = threading.Lock()
        for template in templates:
            self.add_field(template)

    @property
    def fields(self) -> Mapping[str, FieldTemplate[Any]]:
        """Registered field templates (read-only view)."""
        return MappingProxyType(self._fields)

    # -- Registration --

    def add_field(self, template: FieldTemplate[Any]) -> None:
        """Register *template* under its name. A later registration wins."""
        self._check_not_frozen()
        if template.name in self._fields:
            logger.debug("Replacing field template %r", template.name)
        self._fields[template.name] = template

    def custom_validator(self, func: Callable[[FormInstance], Any]) -> Callable[[FormInstance], Any]:
        """Decorator form of setting ``custom_validate``.

        Usage::

            @signup.custom_validator
            def passwords_match(form: FormInstance) -> None:
                if form["confirm"].value != form["password"].value:
                    form["confirm"].set_error(FieldError.custom("Passwords do not match"))
        """
        self.custom_validate = func
        return func

    # -- Parse --

    def parse(self, submissions: Submissions) -> FormInstance:
        """Parse a decoded submission into a new ``FormInstance``.

        Fields missing from *submissions* keep empty raw text and an absent
        value. Submitted keys that are not registered fields are ignored.

        *submissions* may map names to lists of values or to single
        strings. Multi-dicts exposing ``get_list`` (``FormData``) or
        ``getlist`` (Werkzeug, Starlette) are read through those methods,
        so repeated keys go through the multi-value policy.
        """
        self._ensure_frozen()
        instance = FormInstance(
            {name: self._parse_field(template, submissions) for name, template in self._fields.items()}
        )

        unknown = [key for key in submissions if key not in self._fields]
        if unknown:
            logger.debug("Ignoring unknown submitted fields: %s", ", ".join(sorted(unknown)))

        return instance

    def new(self) -> FormInstance:
        """A blank instance for first display: no raw text, no errors.

        Each field's value is whatever its template parses ``""`` to.
        """
        self._ensure_frozen()
        fields: dict[str, FieldResult] = {}
        for name, template in self._fields.items():
            value, _ = template.parse("")
            fields[name] = FieldResult(name, template.kind, value=value)
        return FormInstance(fields)

    def _parse_field(self, template: FieldTemplate[Any], submissions: Submissions) -> FieldResult:
        result = FieldResult(template.name, template.kind)
        submitted = _submitted_values(submissions, template.name)
        if not submitted:
            return result

        result.raw, error = self._select_value(template.name, submitted)
        if error is None:
            text = result.raw.strip() if self.config.strip_whitespace else result.raw
            result.value, error = template.parse(text)

        if error is not None:
            result.parse_error = error
            result.errors = [error]
        return result

    def _select_value(self, name: str, submitted: list[str]) -> tuple[str, FieldError | None]:
        if len(submitted) == 1:
            return submitted[0], None

        policy = self.config.multi_value
        logger.debug("Field %r submitted %d times (policy: %s)", name, len(submitted), policy)
        if policy is MultiValuePolicy.FIRST:
            return submitted[0], None
        if policy is MultiValuePolicy.REJECT:
            return submitted[-1], FieldError.multiple_values()
        return submitted[-1], None

    # -- Validate --

    def validate(self, instance: FormInstance) -> None:
        """Validate *instance* in place.

        Rebuilds every field's error list: a recorded parse error is kept
        as the field's only error, otherwise the template's ``validate``
        runs on the parsed value. The custom validator, if any, runs once
        afterwards.

        Raises:
            ValueError: If *instance* was not created by this template.
        """
        self._ensure_frozen()
        if instance.fields.keys() != self._fields.keys():
            msg = "Form instance fields do not match this form template"
            raise ValueError(msg)

        for name, template in self._fields.items():
            result = instance.fields[name]
            if result.parse_error is not None:
                result.errors = [result.parse_error]
            else:
                result.errors = template.validate(result.value)

        if self.custom_validate is not None:
            self.custom_validate(instance)

        logger.debug(
            "Validated %d field(s): %s",
            len(instance.fields),
            "valid" if instance.is_valid else f"{len(instance.errors)} error(s)",
        )

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        """Close registration. Safe to call from concurrent first users."""
        if self._frozen:
            return
        with self._freeze_lock:
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot add fields to a form template that is already in use. "
                "Register every field before the first parse(), new() or validate()."
            )
            raise ConfigurationError(msg)


def _submitted_values(submissions: Submissions, name: str) -> list[str]:
    """All values submitted for *name*, in order; empty when absent."""
    if isinstance(submissions, MultiValueMapping):
        return submissions.get_list(name) if name in submissions else []
    # Werkzeug MultiDict, Starlette FormData: get() returns a single value
    getlist = getattr(submissions, "getlist", None)
    if callable(getlist):
        return list(getlist(name)) if name in submissions else []
    value = submissions.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)
