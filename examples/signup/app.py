"""Signup: registration form with typed fields and a cross-field check.

Demonstrates formwork end to end without a web framework: decode a
URL-encoded body, parse it against a ``FormTemplate``, validate, and turn
the outcome into a status code plus a JSON-ready payload.

Credentials are stored in memory; this is a demo, not production auth.

Demonstrates:
- ``TextTemplate`` with ``required``, length bounds and format rules
- ``IntegerTemplate`` and ``BooleanTemplate``
- ``@form.custom_validator`` for password confirmation and duplicate usernames
- ``form.submissions()`` / ``form.error_messages()`` for re-rendering

Run:
    python app.py
"""

import json
from typing import Any

from formwork import (
    BooleanTemplate,
    FieldError,
    FormConfig,
    FormInstance,
    FormTemplate,
    IntegerTemplate,
    TextTemplate,
    parse_form_data,
)
from formwork.rules import email, matches

# ---------------------------------------------------------------------------
# Form definition
# ---------------------------------------------------------------------------

signup_form = FormTemplate(
    TextTemplate(
        "username",
        required=True,
        min_length=3,
        max_length=30,
        rules=(matches(r"[a-zA-Z0-9_]+", message="Only letters, numbers, and underscores allowed"),),
    ),
    TextTemplate("email", required=True, rules=(email,)),
    IntegerTemplate("age", minimum=13, maximum=130),
    TextTemplate("password", required=True, min_length=8, max_length=128),
    TextTemplate("confirm_password", required=True),
    BooleanTemplate("terms", required=True),
    config=FormConfig(strip_whitespace=True),
)

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

_users: list[dict[str, Any]] = []


@signup_form.custom_validator
def _check_signup(form: FormInstance) -> None:
    """Cross-field rules: confirmation must match, usernames are unique."""
    confirm = form["confirm_password"]
    if confirm.is_valid and confirm.value != form["password"].value:
        confirm.set_error(FieldError.custom("Passwords do not match"))

    username = form["username"]
    if username.is_valid and any(user["username"] == username.value for user in _users):
        username.set_error(FieldError.custom("This username is already taken"))


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def signup_page() -> dict[str, Any]:
    """Blank form for first display."""
    form = signup_form.new()
    return {"form": form.submissions(), "errors": {}}


def do_signup(body: bytes, content_type: str) -> tuple[int, dict[str, Any]]:
    """Handle a registration form submission."""
    form = signup_form.parse(parse_form_data(body, content_type))
    signup_form.validate(form)

    if not form:
        submitted = form.submissions()
        submitted["password"] = submitted["confirm_password"] = ""
        return 422, {"form": submitted, "errors": form.error_messages()}

    values = form.values()
    _users.append({"username": values["username"], "email": values["email"], "age": values["age"]})
    return 201, {"username": values["username"]}


if __name__ == "__main__":
    status, payload = do_signup(
        b"username=ada&email=ada%40example.com&age=36&password=analytical&confirm_password=analytical&terms=on",
        "application/x-www-form-urlencoded",
    )
    print(status, json.dumps(payload, indent=2))
