"""FastAPI dependencies: request-scoped store, services and the auth gate.

Long-lived collaborators (settings, session factory, hasher, token service)
are built once in ``create_app`` and kept on ``app.state``.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from student_records_api.accounts import AccountService
from student_records_api.errors import AuthFailure, AuthenticationError
from student_records_api.notes import NoteService
from student_records_api.schemas import StudentOut
from student_records_api.security import PasswordHasher, TokenService
from student_records_api.store import RecordStore

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches the gate instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


# DATABASE Dependency
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_note_service(store: RecordStore = Depends(get_store)) -> NoteService:
    return NoteService(store)


def get_account_service(
    store: RecordStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AccountService:
    return AccountService(store, hasher, tokens)


# PUBLIC_INTERFACE
def authenticate(token: Optional[str], tokens: TokenService, store: RecordStore) -> StudentOut:
    """Resolves a bearer token to a student.

    Raises:
        AuthenticationError: ``MISSING_TOKEN`` when no token was presented,
            ``INVALID_TOKEN`` for bad signature, expiry or an infrastructure
            fault while resolving, ``UNKNOWN_IDENTITY`` when the token names a
            student that does not exist.
    """
    if not token:
        raise AuthenticationError(AuthFailure.MISSING_TOKEN)

    try:
        student_id = tokens.verify(token)
        if student_id is None:
            logger.warning("Rejected invalid or expired token")
            raise AuthenticationError(AuthFailure.INVALID_TOKEN)
        student = store.find_student_by_id(student_id)
    except AuthenticationError:
        raise
    except Exception:
        logger.exception("Infrastructure fault while authenticating request")
        raise AuthenticationError(AuthFailure.INVALID_TOKEN)

    if student is None:
        logger.warning("Token references missing student %s", student_id)
        raise AuthenticationError(AuthFailure.UNKNOWN_IDENTITY)
    return student


def get_current_student(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    store: RecordStore = Depends(get_store),
) -> StudentOut:
    """Auth gate for protected routes; attaches the student to ``request.state``."""
    token = credentials.credentials if credentials is not None else None
    student = authenticate(token, tokens, store)
    request.state.student = student
    return student


CurrentStudent = Annotated[StudentOut, Depends(get_current_student)]
NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
