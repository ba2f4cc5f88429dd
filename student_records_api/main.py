"""FastAPI application factory for the student records API.

Run with ``python -m student_records_api.main`` or
``uvicorn student_records_api.main:create_app --factory``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from student_records_api import __version__
from student_records_api.config import Settings, load_settings
from student_records_api.errors import (
    AuthenticationError,
    InfrastructureError,
    StudentRecordsError,
)
from student_records_api.routes import auth, notes
from student_records_api.schemas import ErrorResponse
from student_records_api.security import PasswordHasher, TokenService
from student_records_db.db import build_engine, create_session_factory

logger = logging.getLogger(__name__)

API_TITLE = "Student Records System API"


# PUBLIC_INTERFACE
def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _error_body(message: str, error: Optional[str] = None) -> dict:
    return ErrorResponse(message=message, error=error).model_dump(exclude_none=True)


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Maps the error taxonomy (and framework errors) onto the JSON envelope."""

    def debug_enabled(request: Request) -> bool:
        return request.app.state.settings.debug

    @app.exception_handler(StudentRecordsError)
    def handle_domain_error(request: Request, exc: StudentRecordsError):
        headers = None
        error = None
        if isinstance(exc, AuthenticationError) and exc.is_token_failure:
            headers = {"WWW-Authenticate": "Bearer"}
        if isinstance(exc, InfrastructureError) and debug_enabled(request):
            error = exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.public_message, error),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    def handle_request_validation(request: Request, exc: RequestValidationError):
        error = str(exc.errors()) if debug_enabled(request) else None
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Invalid request body", error),
        )

    @app.exception_handler(StarletteHTTPException)
    def handle_http_exception(request: Request, exc: StarletteHTTPException):
        status_code = exc.status_code
        headers = getattr(exc, "headers", None)
        # A known path with an unsupported method is just another unmatched route.
        if status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            status_code = status.HTTP_404_NOT_FOUND
            message = "Route not found"
            headers = None
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=status_code,
            content=_error_body(message),
            headers=headers,
        )

    @app.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = str(exc) if debug_enabled(request) else None
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Something went wrong!", error),
        )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, session_factory=None) -> FastAPI:
    """
    Builds the application. Without explicit settings they are loaded from the
    environment, which fails fast when JWT_SECRET is missing.
    """
    if settings is None:
        settings = load_settings()
    if session_factory is None:
        session_factory = create_session_factory(build_engine(settings.database_url))

    app = FastAPI(
        title=API_TITLE,
        description="Student registration, bearer-token authentication and personal notes.",
        version=__version__,
        openapi_tags=[
            {"name": "Authentication", "description": "Student registration, login and profile"},
            {"name": "Notes", "description": "Create, update, view and delete notes"},
        ],
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        settings.jwt_secret, expires_delta=settings.access_token_expires
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/", summary="Service metadata", tags=["General"])
    def root():
        """API root: name, version and available endpoints."""
        return {
            "success": True,
            "message": f"Welcome to {API_TITLE}",
            "data": {
                "name": API_TITLE,
                "version": __version__,
                "endpoints": {
                    "auth": "/api/auth",
                    "notes": "/api/notes",
                },
                "features": {
                    "authentication": "Register and login with JWT",
                    "notes": "Create, read, update, delete notes (requires authentication)",
                },
                "docs": "/docs",
            },
        }

    app.include_router(auth.router)
    app.include_router(notes.router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    configure_logging(settings.debug)
    logger.info("Auth API: http://%s:%s/api/auth", settings.host, settings.port)
    logger.info("Notes API: http://%s:%s/api/notes", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
