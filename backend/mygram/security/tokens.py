"""
MyGram Backend - Identity Token Service
========================================

What:  Issues and verifies signed, time-limited identity tokens (JWT).
How:   PyJWT with a symmetric HMAC secret from Settings. A token carries the
       numeric user id in the `user_id` claim plus `iat` and `exp`.
Who:   UserService issues tokens on login; the `get_current_user_id`
       dependency verifies them on every authenticated request.

Failure mapping:
    no usable Authorization header      → MissingTokenError
    bad signature / format / claims     → InvalidTokenError
    valid signature, `exp` in the past  → TokenExpiredError
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from mygram.exceptions import InvalidTokenError, MissingTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

SUBJECT_CLAIM = "user_id"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an `Authorization: Bearer <token>` header value.

    The header is split on single spaces and the second segment is the
    token. Anything with fewer than two segments, including an absent
    header, counts as no token at all.
    """
    segments = (authorization or "").split(" ")
    if len(segments) < 2:
        raise MissingTokenError()
    return segments[1]


class TokenService:
    """
    Stateless JWT issuer/verifier.

    Constructed once in create_app() and shared through app.state; it holds
    configuration only, never per-request data.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiry_hours: int = 24):
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime = timedelta(hours=expiry_hours)

    def issue(self, subject_id: int, now: Optional[datetime] = None) -> str:
        """Sign a token for `subject_id` that expires `lifetime` after `now`."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            SUBJECT_CLAIM: subject_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """
        Validate signature and expiry, returning the subject user id.

        Raises:
            TokenExpiredError: signature is fine but the token has expired
            InvalidTokenError: anything else wrong with the token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired bearer token")
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected invalid bearer token: %s", type(e).__name__)
            raise InvalidTokenError()

        subject = payload.get(SUBJECT_CLAIM)
        # bool is an int subclass; a true/false subject is still malformed
        if not isinstance(subject, int) or isinstance(subject, bool):
            raise InvalidTokenError(context={"reason": "missing subject claim"})
        return subject

    def verify_header(self, authorization: Optional[str]) -> int:
        """Extract and verify in one step; used by the auth dependency."""
        return self.verify(extract_bearer_token(authorization))
