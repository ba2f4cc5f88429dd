import pytest
from fastapi.testclient import TestClient

from student_records_api.config import Settings, load_settings
from student_records_api.errors import ConfigurationError, InfrastructureError
from student_records_api.main import create_app

@pytest.fixture
def clean_env(monkeypatch):
    for name in ("JWT_SECRET", "DATABASE_URL", "HOST", "PORT", "APP_ENV", "CORS_ALLOWED_ORIGINS",
                 "ACCESS_TOKEN_EXPIRE_MINUTES", "BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch

def test_missing_secret_is_fatal(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite://")
    with pytest.raises(ConfigurationError):
        load_settings()

def test_blank_secret_is_fatal(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite://")
    clean_env.setenv("JWT_SECRET", "   ")
    with pytest.raises(ConfigurationError):
        load_settings()

def test_missing_database_url_is_fatal(clean_env):
    clean_env.setenv("JWT_SECRET", "s3cret")
    with pytest.raises(ConfigurationError):
        load_settings()

def test_create_app_without_secret_fails(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite://")
    with pytest.raises(ConfigurationError):
        create_app()

def test_settings_from_env(clean_env):
    clean_env.setenv("JWT_SECRET", "s3cret")
    clean_env.setenv("DATABASE_URL", "sqlite://")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("APP_ENV", "development")
    clean_env.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test")
    settings = load_settings()
    assert settings.port == 8080
    assert settings.debug is True
    assert settings.cors_allowed_origins == ["http://a.test", "http://b.test"]
    assert settings.access_token_expire_minutes == 60 * 24

def test_bad_port_is_fatal(clean_env):
    clean_env.setenv("JWT_SECRET", "s3cret")
    clean_env.setenv("DATABASE_URL", "sqlite://")
    clean_env.setenv("PORT", "eighty")
    with pytest.raises(ConfigurationError):
        load_settings()

def test_settings_reject_empty_secret():
    with pytest.raises(ConfigurationError):
        Settings(jwt_secret="", database_url="sqlite://")

def _failing_app(environment):
    from student_records_api.dependencies import get_note_service, get_current_student
    from student_records_api.schemas import StudentOut

    app = create_app(Settings(jwt_secret="s3cret", database_url="sqlite://", environment=environment))

    class FailingNotes:
        def list(self, student_id):
            raise InfrastructureError("Error fetching notes", RuntimeError("disk on fire"))

    app.dependency_overrides[get_note_service] = lambda: FailingNotes()
    app.dependency_overrides[get_current_student] = lambda: StudentOut(
        id=1, name="Ann", email="ann@example.com", created_at="2024-01-01T00:00:00"
    )
    return app

def test_fault_detail_hidden_in_production():
    with TestClient(_failing_app("production")) as c:
        r = c.get("/api/notes")
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Error fetching notes"}

def test_fault_detail_shown_in_development():
    with TestClient(_failing_app("development")) as c:
        r = c.get("/api/notes")
    assert r.status_code == 500
    assert r.json()["error"] == "disk on fire"
