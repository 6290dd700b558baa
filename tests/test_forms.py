"""Tests for client-side form validation."""

from kudos_wall.forms import validate_login, validate_registration


def test_valid_login_has_no_errors():
    assert validate_login("lead@example.com", "password123") == {}


def test_login_required_fields():
    assert validate_login("", "") == {"email": "Email is required", "password": "Password is required"}


def test_login_rejects_malformed_email():
    assert validate_login("not-an-email", "x") == {"email": "Please enter a valid email address"}


def test_valid_registration_has_no_errors():
    assert validate_registration("Nia", "nia@example.com", "password123", "password123") == {}


def test_registration_required_fields():
    errors = validate_registration("", "", "", "")
    assert errors == {
        "name": "Name is required",
        "email": "Email is required",
        "password": "Password is required",
        "confirm_password": "Confirm password is required",
    }


def test_registration_password_rules():
    errors = validate_registration("Nia", "nia@example.com", "short", "different")
    assert errors["password"] == "Password must be at least 8 characters"
    assert errors["confirm_password"] == "Passwords do not match"


def test_registration_password_exactly_minimum_length():
    assert validate_registration("Nia", "nia@example.com", "12345678", "12345678") == {}
