"""Registration and login."""

import logging
from typing import Optional, Tuple

from student_records_api.errors import AuthFailure, AuthenticationError, ValidationError
from student_records_api.schemas import LoginRequest, RegisterRequest, StudentOut
from student_records_api.security import PasswordHasher, TokenService
from student_records_api.store import DUPLICATE_EMAIL_MESSAGE, RecordStore

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _optional_text(value: Optional[str]) -> Optional[str]:
    return None if _blank(value) else value


def _canonical_email(email: str) -> str:
    return email.strip().lower()


def _check_password(password: str) -> None:
    # bcrypt rejects NUL bytes and ignores everything past 72 bytes.
    if "\x00" in password:
        raise ValidationError("Password must not contain NUL characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


# PUBLIC_INTERFACE
class AccountService:
    """Creates students and exchanges credentials for bearer tokens."""

    def __init__(self, store: RecordStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(self, payload: Optional[RegisterRequest]) -> Tuple[StudentOut, str]:
        payload = payload or RegisterRequest()
        if _blank(payload.name) or _blank(payload.email) or not payload.password:
            raise ValidationError("Name, email, and password are required")
        _check_password(payload.password)
        email = _canonical_email(payload.email)
        if self.store.find_student_by_email(email) is not None:
            raise ValidationError(DUPLICATE_EMAIL_MESSAGE)

        student = self.store.create_student(
            name=payload.name,
            email=email,
            hashed_password=self.hasher.hash(payload.password),
            age=payload.age,
            grade=_optional_text(payload.grade),
            major=_optional_text(payload.major),
        )
        logger.info("Registered student %s", student.id)
        return StudentOut.model_validate(student), self.tokens.issue(student.id)

    def login(self, payload: Optional[LoginRequest]) -> Tuple[StudentOut, str]:
        """
        Unknown email and wrong password fail identically. A digest is still
        verified for unknown emails so response timing does not reveal which.
        """
        payload = payload or LoginRequest()
        if _blank(payload.email) or not payload.password:
            raise ValidationError("Email and password are required")

        student = self.store.find_student_by_email(_canonical_email(payload.email))
        if student is None:
            self.hasher.burn(payload.password)
            logger.info("Login rejected: unknown email")
            raise AuthenticationError(AuthFailure.BAD_CREDENTIALS)
        if not self.hasher.verify(payload.password, student.password):
            logger.info("Login rejected: wrong password for student %s", student.id)
            raise AuthenticationError(AuthFailure.BAD_CREDENTIALS)

        return StudentOut.model_validate(student), self.tokens.issue(student.id)

