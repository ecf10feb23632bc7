"""Formwork exception hierarchy.

Exceptions are reserved for programmer and configuration mistakes. Bad user
input never raises: it is recorded as a ``FieldError`` value on the field
(see ``formwork.field_errors``).
"""


class FormworkError(Exception):
    """Base for all formwork-specific errors."""


class ConfigurationError(FormworkError):
    """Raised when a field or form template is configured incorrectly.

    Typically raised while the form is being defined at startup: a template
    with inconsistent bounds, or ``add_field()`` on a form that is already
    in use.
    """
