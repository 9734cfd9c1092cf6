"""Tests for password hashing (bcrypt with SHA-256 pre-hash)."""

from app.infrastructure.security.password import (
    PasswordHasher,
    get_password_hash,
    verify_password,
)


def test_hash_is_not_plaintext_and_verifies() -> None:
    hashed = get_password_hash("p1", rounds=4)
    assert hashed != "p1"
    assert verify_password("p1", hashed)
    assert not verify_password("p2", hashed)


def test_hash_is_salted() -> None:
    assert get_password_hash("same", rounds=4) != get_password_hash("same", rounds=4)


def test_long_passwords_are_not_truncated() -> None:
    base = "x" * 80
    hashed = get_password_hash(base + "a", rounds=4)
    assert not verify_password(base + "b", hashed)


def test_verify_with_malformed_hash_returns_false() -> None:
    assert verify_password("p1", "not-a-bcrypt-hash") is False


def test_password_hasher_uses_rounds() -> None:
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash_password("secret")
    assert hashed.startswith("$2b$04$")
    assert hasher.verify_password("secret", hashed)
