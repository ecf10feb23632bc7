"""Tests for formwork.field_errors: error values and messages."""

import pytest

from formwork.field_errors import ErrorCode, FieldError, QualifiedError


class TestEquality:
    def test_equal_by_value(self) -> None:
        assert FieldError.too_short(4) == FieldError(ErrorCode.TOO_SHORT, bound=4)
        assert FieldError.missing() == FieldError.missing()

    def test_bound_matters(self) -> None:
        assert FieldError.too_big(100) != FieldError.too_big(99)

    def test_code_matters(self) -> None:
        assert FieldError.too_small(0) != FieldError.too_big(0)

    def test_custom_compares_message(self) -> None:
        assert FieldError.custom("a") == FieldError.custom("a")
        assert FieldError.custom("a") != FieldError.custom("b")

    def test_hashable(self) -> None:
        assert len({FieldError.missing(), FieldError.missing(), FieldError.too_long(3)}) == 2

    def test_frozen(self) -> None:
        error = FieldError.missing()
        with pytest.raises(AttributeError):
            error.code = ErrorCode.CUSTOM  # type: ignore[misc]


class TestMessages:
    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (FieldError.missing(), "is missing"),
            (FieldError.not_convertible("integer"), "is not a valid integer"),
            (FieldError.too_small(0), "is too small (minimum: 0)"),
            (FieldError.too_big(100), "is too big (maximum: 100)"),
            (FieldError.too_short(4), "is too short (minimum: 4 characters)"),
            (FieldError.too_long(6), "is too long (maximum: 6 characters)"),
            (FieldError.invalid("Must be a valid URL"), "Must be a valid URL"),
            (FieldError.multiple_values(), "was submitted more than once"),
            (FieldError.custom("Passwords do not match"), "Passwords do not match"),
        ],
    )
    def test_message(self, error: FieldError, message: str) -> None:
        assert error.message == message
        assert str(error) == message


class TestQualifiedError:
    def test_str_includes_field_name(self) -> None:
        qualified = QualifiedError("age", FieldError.too_small(0))
        assert str(qualified) == "age: is too small (minimum: 0)"

    def test_code_passthrough(self) -> None:
        assert QualifiedError("name", FieldError.missing()).code is ErrorCode.MISSING

    def test_equality(self) -> None:
        assert QualifiedError("a", FieldError.missing()) == QualifiedError("a", FieldError.missing())
        assert QualifiedError("a", FieldError.missing()) != QualifiedError("b", FieldError.missing())
