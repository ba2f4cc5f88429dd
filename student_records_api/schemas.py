from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

T = TypeVar("T")


# Request bodies. Required fields are Optional here so that absence is
# reported through the uniform 400 envelope by the services.

class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=128)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    grade: Optional[str] = Field(None, max_length=64)
    major: Optional[str] = Field(None, max_length=128)

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class NoteWrite(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None


# Response payloads

class StudentOut(BaseModel):
    """Public projection of a student; never carries the password."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: Optional[int] = None
    grade: Optional[str] = None
    major: Optional[str] = None
    created_at: datetime

class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    student_id: int
    created_at: datetime
    updated_at: datetime

class AuthPayload(BaseModel):
    student: StudentOut
    token: str

class ProfilePayload(BaseModel):
    student: StudentOut

class ApiResponse(BaseModel, Generic[T]):
    """Success envelope shared by every endpoint."""
    success: bool = True
    message: str
    data: T

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None


