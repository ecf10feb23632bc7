"""Decoding request bodies into submissions: URL-encoded and multipart.

Produces ``FormData``, the multi-valued mapping ``FormTemplate.parse()``
consumes::

    data = parse_form_data(body, request.headers["content-type"])
    form = signup.parse(data)

``python-multipart`` is an optional dependency (``pip install formwork[multipart]``).
URL-encoded bodies and query strings use stdlib ``urllib.parse``, no extra
dependency. Bytes that are not valid UTF-8 decode to U+FFFD in both
encodings. File parts of a multipart body are dropped: formwork handles
text fields only.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import parse_qs

from formwork.errors import ConfigurationError

logger = logging.getLogger("formwork.http")


class FormData(Mapping[str, str]):
    """Immutable decoded form data.

    Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.

    Usage::

        data = FormData({"tag": ["a", "b"]})
        data["tag"]            # "a"
        data.get_list("tag")   # ["a", "b"]
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.items())
        return f"FormData({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def parse_query_string(query_string: bytes | str) -> FormData:
    """Decode a URL query string (without the leading ``?``)."""
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    return FormData(parse_qs(query_string, keep_blank_values=True))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Decode a form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Returns:
        Decoded FormData instance.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If content type is not a supported form encoding,
            or a multipart content type has no boundary.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return FormData(parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True))

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Decode multipart text fields using python-multipart."""
    try:
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install formwork[multipart]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}

    # Current part state
    headers: dict[str, str] = {}
    header_field = ""
    content = bytearray()

    def on_part_begin() -> None:
        nonlocal headers, content
        headers = {}
        content = bytearray()

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        content.extend(chunk[start:end])

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        nonlocal header_field
        header_field = chunk[start:end].decode("latin-1").lower()

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        headers[header_field] = headers.get(header_field, "") + chunk[start:end].decode("latin-1")

    def on_part_end() -> None:
        disposition = headers.get("content-disposition")
        if disposition is None:
            return
        _, params = parse_options_header(disposition.encode("latin-1"))
        name = params.get(b"name")
        if name is None:
            return
        field_name = name.decode("utf-8")
        if b"filename" in params:
            logger.debug("Dropping uploaded file in multipart field %r", field_name)
            return
        data.setdefault(field_name, []).append(content.decode("utf-8", errors="replace"))

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data)
