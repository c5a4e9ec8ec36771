# Security package init
"""
MyGram Backend - Security Primitives
=====================================

    - tokens.py:     TokenService (JWT issue/verify) and bearer extraction
    - passwords.py:  PasswordHasher (PBKDF2-SHA256, constant-time verify)
"""

from mygram.security.passwords import PasswordHasher
from mygram.security.tokens import TokenService, extract_bearer_token

__all__ = ["PasswordHasher", "TokenService", "extract_bearer_token"]
