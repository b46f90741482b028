from datetime import datetime, timezone

import pytest

from storefront.auth.authorization import authorize, is_owner, ensure_owner, is_local_url, login_redirect
from storefront.auth.models import Identity
from storefront.core.exceptions import AuthorizationError
from storefront.users.models import Role


def identity(username="alice", role="Customer"):
    return Identity(
        user_id="1",
        username=username,
        email=f"{username}@example.com",
        first_name=username.title(),
        last_name="Test",
        role=role,
        expires_at=datetime(2030, 1, 1, tzinfo=timezone.utc),
    )


def test_public_action_allows_anonymous():
    assert authorize(None, []) is True


def test_anonymous_is_denied_on_protected_action():
    assert authorize(None, [Role.CUSTOMER]) is False


def test_role_must_be_in_the_allowed_set():
    assert authorize(identity(role="Customer"), [Role.CUSTOMER, Role.ADMIN]) is True
    assert authorize(identity(role="Customer"), [Role.ADMIN]) is False
    assert authorize(identity(role="Admin"), [Role.ADMIN]) is True


def test_owner_is_a_case_insensitive_substring_match():
    assert is_owner(identity("alice"), "Alice Johnson") is True
    assert is_owner(identity("alice"), "Bob") is False


def test_loose_match_also_accepts_longer_names():
    # Known limitation: short usernames match unrelated customers
    assert is_owner(identity("al"), "Alice Johnson") is True


def test_admin_owns_everything():
    assert is_owner(identity("admin", role="Admin"), "Bob") is True


def test_anonymous_owns_nothing():
    assert is_owner(None, "Alice Johnson") is False


def test_ensure_owner_raises_access_denied():
    with pytest.raises(AuthorizationError) as exc_info:
        ensure_owner(identity("alice"), "Bob", "order", "7")

    error = exc_info.value
    assert error.status_code == 403
    assert error.redirect == "/account/access-denied"
    assert error.context["reason"] == "ownership"


@pytest.mark.parametrize(
    "url, local",
    [
        ("/orders/my", True),
        ("/products?q=mouse", True),
        ("https://evil.example.com/", False),
        ("//evil.example.com", False),
        ("orders", False),
        (None, False),
    ],
)
def test_is_local_url(url, local):
    assert is_local_url(url) is local


def test_admin_lands_on_dashboard_regardless_of_return_url():
    assert login_redirect(identity("admin", role="Admin"), "/orders/my") == "/admin"


def test_customer_returns_to_local_deep_link():
    assert login_redirect(identity("alice"), "/orders/my") == "/orders/my"


def test_customer_ignores_external_return_url():
    assert login_redirect(identity("alice"), "https://evil.example.com/") == "/"
    assert login_redirect(identity("alice")) == "/"


def test_is_admin_reads_the_role_claim():
    assert identity("admin", role="Admin").is_admin is True
    assert identity("alice").is_admin is False
