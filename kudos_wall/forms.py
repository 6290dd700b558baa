"""Client-side form validation.

Each validator returns ``{field: message}``; an empty dict means the form
may be submitted. Nothing here talks to the backend.
"""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8

_FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "password": "Password",
    "confirm_password": "Confirm password",
}


def _required(fields: dict[str, str]) -> dict[str, str]:
    return {
        key: f"{_FIELD_LABELS.get(key, key.capitalize())} is required"
        for key, value in fields.items()
        if not (value or "").strip()
    }


def validate_login(email: str, password: str) -> dict[str, str]:
    errors = _required({"email": email, "password": password})
    if "email" not in errors and not EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email address"
    return errors


def validate_registration(name: str, email: str, password: str, confirm_password: str) -> dict[str, str]:
    errors = _required(
        {"name": name, "email": email, "password": password, "confirm_password": confirm_password}
    )
    if email and "email" not in errors and not EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email address"
    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if password and confirm_password and password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    return errors
