"""Password hashing and JWT bearer tokens."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from student_records_api.errors import ConfigurationError, InfrastructureError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


# PUBLIC_INTERFACE
class PasswordHasher:
    """Salted one-way password digests (bcrypt via passlib)."""

    def __init__(self, rounds: Optional[int] = None):
        options = {"bcrypt__rounds": rounds} if rounds else {}
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", **options)
        self._dummy_digest = None

    def hash(self, plaintext: str) -> str:
        """Returns a fresh salted digest; two calls on the same input differ."""
        try:
            return self._context.hash(plaintext)
        except (ValueError, TypeError, MemoryError) as exc:
            logger.exception("Password hashing failed")
            raise InfrastructureError("Error hashing password", exc) from exc

    def verify(self, plaintext: str, digest: Optional[str]) -> bool:
        """Constant-time check; malformed or missing digests simply don't match."""
        if not plaintext or not digest:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            return False

    def burn(self, plaintext: str) -> None:
        """Spends one verification against a throwaway digest.

        Used when there is no stored digest to check, so that the caller's
        timing matches a real failed verification.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self.hash("placeholder-password")
        self.verify(plaintext or "", self._dummy_digest)


# PUBLIC_INTERFACE
class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    The only claim carried is the student id (``sub``). Verification never
    touches the store.
    """

    def __init__(self, secret: str, expires_delta: timedelta = DEFAULT_TOKEN_LIFETIME,
                 algorithm: str = ALGORITHM):
        if not secret:
            raise ConfigurationError("A signing secret is required for TokenService.")
        self._secret = secret
        self._algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, student_id: int) -> str:
        """Generates a JWT access token for the given student."""
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(student_id),
            "iat": now,
            "exp": now + self.expires_delta,
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=self._algorithm)
        except JWTError as exc:
            logger.exception("Token signing failed")
            raise InfrastructureError("Error issuing token", exc) from exc

    def verify(self, token: str) -> Optional[int]:
        """Returns the student id if signature and expiry hold, else None."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except JWTError as exc:
            logger.debug("Rejected token: %s", exc)
            return None
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject.isdigit():
            logger.debug("Rejected token with unusable subject")
            return None
        return int(subject)
