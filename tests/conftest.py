import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from student_records_api.config import Settings
from student_records_api.dependencies import get_db
from student_records_api.main import create_app
from student_records_api.security import PasswordHasher, TokenService
from student_records_api.store import RecordStore
from student_records_db.models import Base

TEST_SECRET = "test-signing-secret"

@pytest.fixture(scope="session")
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"

@pytest.fixture(scope="session")
def engine(sqlite_url):
    """Fixture for a persistent in-memory SQLite engine for the test session."""
    return create_engine(
        sqlite_url, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )

@pytest.fixture
def tables(engine):
    """Create tables for each test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(engine, tables):
    """Provide a SQLAlchemy session for isolated test usage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def settings(sqlite_url):
    return Settings(jwt_secret=TEST_SECRET, database_url=sqlite_url, bcrypt_rounds=4)

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app, db_session):
    """Fixture for FastAPI TestClient with test DB dependency override."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

@pytest.fixture
def store(db_session):
    return RecordStore(db_session)

@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)

@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)

@pytest.fixture
def student_data():
    """Returns default student data for registration."""
    return {
        "name": "Ann",
        "email": "ann@example.com",
        "password": "pw123",
        "age": 20,
        "grade": "Sophomore",
        "major": "Biology",
    }

@pytest.fixture
def second_student_data():
    """Returns a second student's data."""
    return {
        "name": "Bob",
        "email": "bob@example.com",
        "password": "bobpassword456",
    }

def register_and_auth(client, data):
    """Helper for registering a student and returning its bearer token."""
    r = client.post("/api/auth/register", json=data)
    assert r.status_code == 201
    return r.json()["data"]["token"]

@pytest.fixture
def auth_header(client, student_data):
    """Returns {'Authorization': 'Bearer <token>'} for the default student."""
    token = register_and_auth(client, student_data)
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def second_auth_header(client, second_student_data):
    """Returns auth header for the second student."""
    token = register_and_auth(client, second_student_data)
    return {"Authorization": f"Bearer {token}"}
