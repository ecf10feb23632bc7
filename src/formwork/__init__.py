"""Formwork: typed parsing and validation of form submissions.

Turns multi-valued raw text submissions into typed values, validates each
field, and reports per-field errors plus an overall verdict.

Basic usage::

    from formwork import FormTemplate, IntegerTemplate, TextTemplate

    person = FormTemplate(
        TextTemplate("name", max_length=30),
        IntegerTemplate("age", maximum=1000),
    )

    form = person.parse({"name": ["David"], "age": ["30"]})
    person.validate(form)
    form.is_valid          # True
    form["age"].value      # 30

Decoding request bodies (``pip install formwork[multipart]`` for multipart)::

    from formwork.http.forms import parse_form_data
    form = person.parse(parse_form_data(body, content_type))
"""

__version__ = "0.1.0"
__all__ = [
    "BooleanTemplate",
    "ConfigurationError",
    "ErrorCode",
    "FieldError",
    "FieldKind",
    "FieldResult",
    "FieldTemplate",
    "FloatTemplate",
    "FormConfig",
    "FormData",
    "FormInstance",
    "FormTemplate",
    "FormworkError",
    "IntegerTemplate",
    "MultiValuePolicy",
    "QualifiedError",
    "TextTemplate",
    "parse_form_data",
    "parse_query_string",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "BooleanTemplate": "formwork.fields",
    "ConfigurationError": "formwork.errors",
    "ErrorCode": "formwork.field_errors",
    "FieldError": "formwork.field_errors",
    "FieldKind": "formwork.fields",
    "FieldResult": "formwork.form",
    "FieldTemplate": "formwork.fields",
    "FloatTemplate": "formwork.fields",
    "FormConfig": "formwork.config",
    "FormData": "formwork.http.forms",
    "FormInstance": "formwork.form",
    "FormTemplate": "formwork.form",
    "FormworkError": "formwork.errors",
    "IntegerTemplate": "formwork.fields",
    "MultiValuePolicy": "formwork.config",
    "QualifiedError": "formwork.field_errors",
    "TextTemplate": "formwork.fields",
    "parse_form_data": "formwork.http.forms",
    "parse_query_string": "formwork.http.forms",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formwork`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
