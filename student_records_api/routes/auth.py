from typing import Optional

from fastapi import APIRouter, status

from student_records_api.dependencies import AccountServiceDep, CurrentStudent
from student_records_api.schemas import (
    ApiResponse,
    AuthPayload,
    LoginRequest,
    ProfilePayload,
    RegisterRequest,
)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


# PUBLIC_INTERFACE
@router.post("/register", response_model=ApiResponse[AuthPayload],
             status_code=status.HTTP_201_CREATED, summary="Register a new student")
def register(accounts: AccountServiceDep, payload: Optional[RegisterRequest] = None):
    """
    Register a new student.
    Returns the public student record (no password) and a bearer token.
    """
    student, token = accounts.register(payload)
    return ApiResponse[AuthPayload](
        message="Student registered successfully",
        data=AuthPayload(student=student, token=token),
    )

# PUBLIC_INTERFACE
@router.post("/login", response_model=ApiResponse[AuthPayload], summary="Login and get a bearer token")
def login(accounts: AccountServiceDep, payload: Optional[LoginRequest] = None):
    """
    Student login by email and password.
    """
    student, token = accounts.login(payload)
    return ApiResponse[AuthPayload](
        message="Login successful",
        data=AuthPayload(student=student, token=token),
    )

# PUBLIC_INTERFACE
@router.get("/profile", response_model=ApiResponse[ProfilePayload], summary="Get current student profile")
def profile(student: CurrentStudent):
    """
    Details of the authenticated student, as resolved by the auth gate.
    """
    return ApiResponse[ProfilePayload](
        message="Profile retrieved successfully",
        data=ProfilePayload(student=student),
    )
