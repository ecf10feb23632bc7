"""Tests for formwork.rules: format rules for text fields."""

from formwork.field_errors import ErrorCode, FieldError
from formwork.rules import email, matches, one_of, url


class TestEmail:
    def test_valid(self) -> None:
        assert email("user@example.com") is None

    def test_valid_with_dots(self) -> None:
        assert email("first.last@sub.domain.org") is None

    def test_missing_at(self) -> None:
        assert email("userexample.com") == FieldError.invalid("Must be a valid email address")

    def test_missing_domain(self) -> None:
        assert email("user@") is not None


class TestUrl:
    def test_valid_https(self) -> None:
        assert url("https://example.com") is None

    def test_valid_http(self) -> None:
        assert url("http://example.com/path?q=1") is None

    def test_no_scheme(self) -> None:
        assert url("example.com") is not None

    def test_ftp_rejected(self) -> None:
        assert url("ftp://example.com") is not None


class TestMatches:
    def test_full_match_required(self) -> None:
        rule = matches(r"\d{3}")
        assert rule("123") is None
        assert rule("1234") is not None

    def test_default_message(self) -> None:
        error = matches(r"\d+")("abc")
        assert error is not None
        assert error.message == r"Must match pattern: \d+"

    def test_custom_message(self) -> None:
        error = matches(r"\d+", message="Numbers only")("abc")
        assert error == FieldError.invalid("Numbers only")


class TestOneOf:
    def test_valid_choice(self) -> None:
        assert one_of("red", "green", "blue")("red") is None

    def test_invalid_choice(self) -> None:
        error = one_of("red", "green", "blue")("purple")
        assert error is not None
        assert error.code is ErrorCode.INVALID
        assert error.message == "Must be one of: blue, green, red"
