"""
Password helpers for the user and auth resources.

Passwords are never stored or compared in plain text: ``hash_password``
derives a PBKDF2‑HMAC‑SHA256 digest with a random 16‑byte salt and
``verify_password`` recomputes it and compares in constant time.  The
stored format is ``"<iterations>$<salt hex>$<hash hex>"``; the iteration
count travels with the hash so the work factor can be raised without
invalidating existing hashes.

The API never returns password material; ``strip_password`` produces
the public view of a user record.
"""

import hashlib
import hmac
import os
from typing import Any, Dict, Optional

from .config import settings


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : Optional[int]
        PBKDF2 work factor.  Defaults to
        ``settings.password_hash_iterations``.

    Returns
    -------
    str
        ``"<iterations>$<salt hex>$<hash hex>"``.
    """
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{rounds}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against a stored hash string.

    ``hashed_password`` must be in the format produced by
    :func:`hash_password`; malformed hashes never match.
    """
    if not hashed_password:
        return False
    parts = hashed_password.split("$")
    if len(parts) != 3:
        return False
    try:
        rounds = int(parts[0])
        salt_hex, hash_hex = parts[1], parts[2]
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(dk, stored_hash)


def strip_password(user: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a user record without its ``password`` field."""
    return {key: value for key, value in user.items() if key != "password"}
