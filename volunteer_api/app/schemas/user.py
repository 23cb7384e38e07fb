"""
Pydantic models for user data.

Passwords are never hashed by the API: clients send an already hashed
value as ``passwordHash`` and it is stored and compared as an opaque
string.  Volunteers fill ``fullName``/``nik``; organizations fill
``organizationName``/``npwp``.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel


class UserType(str, Enum):
    volunteer = "volunteer"
    organization = "organization"


class UserCreate(CamelModel):
    """Schema for registering a user."""

    email: str = Field(..., min_length=1, examples=["relawan@example.com"])
    password_hash: str = Field(..., min_length=1)
    user_type: UserType = Field(..., examples=["volunteer"])
    full_name: Optional[str] = Field(None, examples=["Budi Santoso"])
    nik: Optional[str] = Field(None, description="National identity number (volunteers)")
    organization_name: Optional[str] = None
    npwp: Optional[str] = Field(None, description="Tax identification number (organizations)")
    phone_number: Optional[str] = None


class UserLogin(CamelModel):
    email: str = Field(..., min_length=1)
    password_hash: str = Field(..., min_length=1)


class UserRead(CamelModel):
    """Public profile of a user.

    ``fullName`` holds the person's name for volunteers and the
    organization name for organizations.
    """

    id: str
    email: str
    user_type: UserType
    full_name: Optional[str] = None
    nik: Optional[str] = None
    npwp: Optional[str] = None
    phone_number: Optional[str] = None
    profile_image_path: Optional[str] = None


class UserRegistered(CamelModel):
    success: bool = True
    message: str = "Registration successful"
    user_id: str
    user_type: UserType


class LoginResult(CamelModel):
    success: bool = True
    message: str = "Login successful"
    user_id: str
    email: str
    user_type: UserType
    full_name: Optional[str] = None
