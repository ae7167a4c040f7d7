"""
Pydantic schemas for User authentication, registration and profile.
"""

from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration. New accounts are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class UserCreateRequest(UserRegisterRequest):
    """Admin-only creation; may create other admins."""
    is_admin: bool = False


class UserUpdateRequest(BaseModel):
    """Partial update of a user's own profile."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class UserAuthRequest(BaseModel):
    """Request schema for login."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)

    class Config:
        extra = "forbid"


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserDetailResponse(UserResponse):
    jobs: List[int] = Field(default_factory=list, description="Ids of jobs applied to")


class UserEnvelope(BaseModel):
    user: UserResponse


class UserDetailEnvelope(BaseModel):
    user: UserDetailResponse


class UserCreateResponse(BaseModel):
    user: UserResponse
    token: str


class UserListResponse(BaseModel):
    users: List[UserResponse]


class UserDeletedResponse(BaseModel):
    deleted: str


class ApplicationResponse(BaseModel):
    applied: int
