"""
MyGram Backend - Password Hashing
==================================

What:  One-way salted password hashing with constant-time verification.
How:   PBKDF2-HMAC-SHA256 with a random 16-byte salt per password. The stored
       string is self-describing so the work factor can be raised later
       without invalidating existing hashes:

           pbkdf2:sha256:<iterations>$<salt hex>$<digest hex>

Who:   UserService (register hashes, authenticate verifies).
"""

import hashlib
import hmac
import secrets

SCHEME = "pbkdf2:sha256"


class PasswordHasher:
    """Injected hashing capability; one instance per application."""

    def __init__(self, iterations: int = 100_000):
        self.iterations = iterations

    def _derive(self, password: str, salt: str, iterations: int) -> str:
        dk = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
        return dk.hex()

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(16)
        digest = self._derive(password, salt, self.iterations)
        return f"{SCHEME}:{self.iterations}${salt}${digest}"

    def verify(self, password: str, password_hash: str) -> bool:
        """Check `password` against a stored hash; malformed hashes never match."""
        parts = password_hash.split("$")
        if len(parts) != 3 or not parts[0].startswith(SCHEME + ":"):
            return False
        header, salt, stored_digest = parts
        try:
            iterations = int(header.rsplit(":", 1)[1])
        except ValueError:
            return False
        if iterations <= 0:
            return False
        candidate = self._derive(password, salt, iterations)
        return hmac.compare_digest(candidate, stored_digest)
