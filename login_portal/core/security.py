# File: login_portal/core/security.py

"""
Credential hashing helpers.

Secrets are never stored as entered: they are hashed with a per-secret
bcrypt salt and checked with bcrypt's own comparison.
"""

import hmac
from functools import lru_cache
from typing import Optional

import bcrypt

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

DEFAULT_ROUNDS = 12


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("ascii")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Check a plain secret against a stored bcrypt hash.

    A missing or malformed hash never matches.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    # Checked against when the login identifier is unknown, so that the
    # not-found path costs one hash comparison like the wrong-secret path.
    return hash_password("login-portal-dummy-secret", rounds=rounds)


def burn_password_check(password: str, rounds: int = DEFAULT_ROUNDS) -> None:
    verify_password(password, dummy_hash(rounds))


def tokens_match(supplied: Optional[str], expected: str) -> bool:
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))
