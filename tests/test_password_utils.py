import pytest

from storefront.utils import password_utils


def test_hash_is_not_plaintext_and_verifies():
    hashed = password_utils.get_password_hash("password123")
    assert hashed != "password123"
    assert password_utils.verify_password("password123", hashed)


@pytest.mark.parametrize("attempt", ["password124", "PASSWORD123", "", "password123 "])
def test_verify_rejects_anything_but_the_original(attempt):
    hashed = password_utils.get_password_hash("password123")
    assert not password_utils.verify_password(attempt, hashed)


def test_same_password_hashes_differently():
    assert password_utils.get_password_hash("secret1") != password_utils.get_password_hash("secret1")


def test_malformed_hash_is_a_mismatch():
    assert password_utils.verify_password("password123", "not-a-bcrypt-hash") is False


@pytest.mark.parametrize(
    "password, strong",
    [
        ("abc123", True),
        ("password123", True),
        ("ab12", False),
        ("abcdefgh", False),
        ("12345678", False),
    ],
)
def test_password_strength(password, strong):
    assert password_utils.is_password_strong(password) is strong


def test_dummy_verify_uses_the_hash_context(mocker):
    spy = mocker.spy(password_utils.bcrypt_context, "dummy_verify")
    password_utils.dummy_verify()
    spy.assert_called_once()
