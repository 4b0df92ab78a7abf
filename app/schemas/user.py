"""
Pydantic schemas for users and authentication.
"""

from pydantic import EmailStr, Field, StrictBool
from typing import List
from app.schemas.common import ApiModel, ApiRequest


class UserLoginRequest(ApiRequest):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserRegisterRequest(ApiRequest):
    """Self-registration; never creates an admin."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Admin-only user creation; may create another admin."""
    is_admin: StrictBool = False


class UserUpdateRequest(ApiRequest):
    """Partial profile update. Admin rights cannot be changed here."""
    password: str = Field(None, min_length=5, max_length=72)
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    email: EmailStr = None


class TokenResponse(ApiModel):
    """JWT token response."""
    token: str


class UserResponse(ApiModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """Profile plus ids of jobs applied to."""
    jobs: List[int] = []


class UserEnvelope(ApiModel):
    user: UserResponse


class UserDetailEnvelope(ApiModel):
    user: UserDetailResponse


class UserListEnvelope(ApiModel):
    users: List[UserResponse]


class UserCreateResponse(ApiModel):
    user: UserResponse
    token: str


class AppliedResponse(ApiModel):
    applied: int
