import pytest

from exam_app.core.services.identity_handoff import IdentityHandoff, is_email_valid, validate_login


@pytest.mark.parametrize("email", ["ana@example.com", "A.B@uni.edu.br"])
def test_valid_emails(email):
    assert is_email_valid(email)


@pytest.mark.parametrize("email", ["ana", "ana@example", "ana @example.com", "@example.com"])
def test_invalid_emails(email):
    assert not is_email_valid(email)


def test_validate_login_messages():
    assert validate_login("", "ana@example.com") == "Name is required."
    assert validate_login("Ana", "  ") == "Email is required."
    assert validate_login("Ana", "nope") == "Please enter a valid email address."
    assert validate_login("Ana", "ana@example.com") is None


def test_handoff_store_load_clear():
    handoff = IdentityHandoff()
    assert handoff.load() is None

    identity = handoff.store("  Ana ", " ana@example.com ")

    assert (identity.user_name, identity.email) == ("Ana", "ana@example.com")
    assert handoff.load() == identity
    handoff.clear()
    assert handoff.load() is None
