"""
Tests for the field validation rules.
"""

import pytest

from utils.validators import (
    validate_full_name,
    validate_login,
    validate_password,
    validate_signup,
    validate_task_title,
)


class TestPasswordComplexity:
    @pytest.mark.parametrize(
        "password",
        ["short1A", "alllowercase1", "ALLUPPER1", "NoDigitsHere"],
    )
    def test_rejects_weak_passwords(self, password):
        assert validate_password(password)

    def test_accepts_good_password(self):
        assert validate_password("GoodPass1") == []

    def test_too_short_message(self):
        errors = validate_password("short1A")
        assert [e.message for e in errors] == ["Password must be at least 8 characters"]

    def test_missing_password(self):
        errors = validate_password("")
        assert len(errors) == 1
        assert errors[0].field == "password"

    def test_new_password_field_label(self):
        errors = validate_password("weak", field="newPassword")
        assert all(e.field == "newPassword" for e in errors)
        assert errors[0].message.startswith("New password")


class TestSignup:
    def test_valid_signup(self):
        assert validate_signup("Jane Doe", "jane@example.com", "GoodPass1") == []

    def test_weak_signup_reports_errors(self):
        errors = validate_signup("Jo", "a@b.com", "Weak")
        assert errors
        assert {e.field for e in errors} == {"password"}

    def test_every_bad_field_is_reported(self):
        errors = validate_signup(" J ", "not-an-email", "Weak")
        assert {e.field for e in errors} == {"fullName", "email", "password"}

    @pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.com", "@b.com", "a@.com "])
    def test_rejects_bad_email_shapes(self, email):
        errors = validate_signup("Jane", email, "GoodPass1")
        assert [e.field for e in errors] == ["email"]


class TestOtherRules:
    def test_full_name_is_trimmed(self):
        assert validate_full_name("  A  ") is not None
        assert validate_full_name("  Al ") is None

    def test_login_requires_both_fields(self):
        assert {e.field for e in validate_login("", "")} == {"email", "password"}
        assert validate_login("a@b.com", "x") == []

    def test_task_title(self):
        assert validate_task_title("   ") is not None
        assert validate_task_title(None) is not None
        assert validate_task_title(" Buy milk ") is None


class TestUpperBounds:
    def test_password_over_72_bytes(self):
        errors = validate_password("GoodPass1" + "a" * 80)
        assert [e.message for e in errors] == ["Password must be at most 72 bytes"]

    def test_password_limit_counts_bytes(self):
        # 8 three-byte characters plus "Aa1": 11 characters, 27 bytes
        assert validate_password("Aa1" + "€" * 8) == []
        assert validate_password("Aa1" + "€" * 24)

    def test_password_at_limit_accepted(self):
        assert validate_password("GoodPass1" + "a" * 63) == []

    def test_full_name_too_long(self):
        error = validate_full_name("x" * 129)
        assert error is not None
        assert error.message == "Name must be at most 128 characters"
        assert validate_full_name("x" * 128) is None

    def test_email_too_long(self):
        long_email = "a" * 290 + "@example.com"
        errors = validate_signup("Jane", long_email, "GoodPass1")
        assert [(e.field, e.message) for e in errors] == [
            ("email", "Email must be at most 255 characters")
        ]
