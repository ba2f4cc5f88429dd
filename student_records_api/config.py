"""Process-wide configuration loaded from the environment.

Values may come from a ``.env`` file (python-dotenv). ``JWT_SECRET`` and
``DATABASE_URL`` are required; there are no insecure fallbacks.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from dotenv import load_dotenv

from student_records_db.db import get_database_url
from student_records_api.errors import ConfigurationError

DEFAULT_PORT = 3000
DEFAULT_TOKEN_EXPIRE_MINUTES = 60 * 24  # 24 hours


@dataclass(frozen=True)
class Settings:
    """Immutable application settings passed into ``create_app``."""

    jwt_secret: str
    database_url: str
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    environment: str = "production"
    access_token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES
    cors_allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    bcrypt_rounds: Optional[int] = None

    def __post_init__(self):
        if not self.jwt_secret or not self.jwt_secret.strip():
            raise ConfigurationError("JWT_SECRET must be set to a non-empty value.")

    @property
    def debug(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def access_token_expires(self) -> timedelta:
        return timedelta(minutes=self.access_token_expire_minutes)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.")


# PUBLIC_INTERFACE
def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build ``Settings`` from environment variables.

    Raises:
        ConfigurationError: If ``JWT_SECRET`` or ``DATABASE_URL`` is missing,
            or a numeric variable cannot be parsed.
    """
    load_dotenv(env_file)

    secret = os.getenv("JWT_SECRET", "")
    if not secret.strip():
        raise ConfigurationError("JWT_SECRET environment variable not set.")
    try:
        database_url = get_database_url()
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    origins = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    return Settings(
        jwt_secret=secret,
        database_url=database_url,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int_env("PORT", DEFAULT_PORT),
        environment=os.getenv("APP_ENV", "production"),
        access_token_expire_minutes=_int_env(
            "ACCESS_TOKEN_EXPIRE_MINUTES", DEFAULT_TOKEN_EXPIRE_MINUTES
        ),
        cors_allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
        bcrypt_rounds=_int_env("BCRYPT_ROUNDS", 0) or None,
    )
