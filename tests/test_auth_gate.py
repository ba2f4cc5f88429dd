from datetime import timedelta

import pytest

from student_records_api.dependencies import authenticate
from student_records_api.errors import AuthFailure, AuthenticationError, InfrastructureError
from student_records_api.security import TokenService
from tests.conftest import TEST_SECRET

@pytest.fixture
def student(store, hasher):
    return store.create_student("Ann", "ann@example.com", hasher.hash("pw123"))

def _failure(token, tokens, store):
    with pytest.raises(AuthenticationError) as info:
        authenticate(token, tokens, store)
    return info.value.kind

def test_resolves_student(student, tokens, store):
    resolved = authenticate(tokens.issue(student.id), tokens, store)
    assert resolved.id == student.id
    assert resolved.name == "Ann"
    assert not hasattr(resolved, "password")

def test_missing_token(tokens, store):
    assert _failure(None, tokens, store) is AuthFailure.MISSING_TOKEN
    assert _failure("", tokens, store) is AuthFailure.MISSING_TOKEN

def test_invalid_token(student, tokens, store):
    expired = TokenService(TEST_SECRET, expires_delta=timedelta(seconds=-1)).issue(student.id)
    assert _failure(expired, tokens, store) is AuthFailure.INVALID_TOKEN
    assert _failure("garbage", tokens, store) is AuthFailure.INVALID_TOKEN

def test_invalid_token_does_not_touch_store(tokens):
    class ExplodingStore:
        def find_student_by_id(self, student_id):
            raise AssertionError("store consulted for an invalid token")

    assert _failure("garbage", tokens, ExplodingStore()) is AuthFailure.INVALID_TOKEN

def test_unknown_identity(tokens, store, tables):
    assert _failure(tokens.issue(999), tokens, store) is AuthFailure.UNKNOWN_IDENTITY

def test_unknown_identity_shares_missing_token_message():
    assert (str(AuthenticationError(AuthFailure.UNKNOWN_IDENTITY))
            == str(AuthenticationError(AuthFailure.MISSING_TOKEN)))

def test_store_fault_reported_as_invalid_token(tokens, caplog):
    class DownStore:
        def find_student_by_id(self, student_id):
            raise InfrastructureError("Error fetching student", RuntimeError("connection refused"))

    assert _failure(tokens.issue(1), tokens, DownStore()) is AuthFailure.INVALID_TOKEN
    assert "Infrastructure fault" in caplog.text
