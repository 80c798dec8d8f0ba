import pytest

from storerating.core.errors import ValidationFailed
from storerating.core.validators import (
    is_valid_address,
    is_valid_email,
    is_valid_name,
    is_valid_password,
    is_valid_score,
    validate_registration,
    validate_score,
)


def test_name_length_bounds():
    assert not is_valid_name("x" * 19)
    assert is_valid_name("x" * 20)
    assert is_valid_name("x" * 60)
    assert not is_valid_name("x" * 61)
    assert not is_valid_name(None)


@pytest.mark.parametrize("email", ["jq@ex.com", "a.b@c.d.e", "n@x.com"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.d", "a@@b.c", "@b.c", "a@b.", ""])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_password_rules():
    assert is_valid_password("Abcdef1!")
    assert is_valid_password("ABCDEFGHIJKLMNO&")
    assert not is_valid_password("Abc1!")  # too short
    assert not is_valid_password("Abcdefghijklmnop!")  # 17 chars
    assert not is_valid_password("abcdef1!")  # no uppercase
    assert not is_valid_password("Abcdef12")  # no special


def test_address_bounds():
    assert not is_valid_address("")
    assert is_valid_address("1")
    assert is_valid_address("a" * 400)
    assert not is_valid_address("a" * 401)


def test_score_accepts_only_integers_in_range():
    assert all(is_valid_score(s) for s in range(1, 6))
    for bad in (0, 6, 3.5, "3", True, None):
        assert not is_valid_score(bad)
    assert validate_score(4) == 4
    with pytest.raises(ValidationFailed):
        validate_score(7)


def test_registration_reports_every_failing_field():
    with pytest.raises(ValidationFailed) as exc:
        validate_registration("short", "bad", "weak", "")
    assert exc.value.fields == ["name", "email", "password", "address"]


def test_registration_passes_valid_input():
    validate_registration("Jonathan Q. Publicsmith II", "jq@ex.com", "Abcdef1!", "1 A St")
