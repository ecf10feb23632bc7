"""Tests for formwork.__init__: lazy import registry covers all public names."""

import pytest

import formwork


@pytest.mark.parametrize("name", formwork.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(formwork, name)
    assert obj is not None, f"formwork.{name} resolved to None"


def test_all_names_in_lazy_registry() -> None:
    """Every name in __all__ has a corresponding entry in _LAZY_IMPORTS."""
    missing = set(formwork.__all__) - set(formwork._LAZY_IMPORTS)
    assert not missing, f"Names in __all__ but not in _LAZY_IMPORTS: {sorted(missing)}"


def test_lazy_registry_no_extras() -> None:
    """Every name in _LAZY_IMPORTS should be in __all__ (public API contract)."""
    extras = set(formwork._LAZY_IMPORTS) - set(formwork.__all__)
    assert not extras, f"Names in _LAZY_IMPORTS but not in __all__: {sorted(extras)}"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        formwork.__getattr__("ThisDoesNotExist")


def test_top_level_round_trip() -> None:
    from formwork import FormTemplate, IntegerTemplate, TextTemplate

    person = FormTemplate(TextTemplate("name", max_length=30), IntegerTemplate("age", maximum=1000))
    form = person.parse({"name": ["David"], "age": ["30"]})
    person.validate(form)
    assert form.is_valid
    assert form["age"].value == 30
