"""
MyGram Backend - User Request/Response Schemas
===============================================

Validation rules (part of the public API contract):
    register:  username required, email required and well formed,
               password at least 6 characters, age greater than 8
    login:     email well formed, password at least 6 characters
    update:    username and email may be empty (keep current value);
               a non-empty email must be well formed

The password never appears in any response model.
"""

from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, EmailStr, Field

MIN_PASSWORD_LENGTH = 6
MIN_AGE_EXCLUSIVE = 8


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserRegister(BaseModel):
    username: str = Field(min_length=1, description="Unique display name")
    email: EmailStr = Field(description="Unique email address", examples=["name@org.dom.ge"])
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, description="At least 6 characters")
    age: int = Field(gt=MIN_AGE_EXCLUSIVE, description="Minimum age is 9", examples=[23])


class UserLogin(BaseModel):
    email: EmailStr = Field(examples=["name@org.dom.ge"])
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class UserUpdate(BaseModel):
    """Leave a field empty to keep its current value."""

    username: str = Field(default="")
    email: Union[EmailStr, Literal[""]] = Field(default="")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserRegisterResponse(BaseModel):
    id: int
    username: str
    email: str
    age: int

    model_config = {"from_attributes": True}


class UserUpdateResponse(BaseModel):
    id: int
    username: str
    email: str
    age: int
    updated_at: datetime

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str = Field(description="Bearer token, valid for 24 hours", examples=["header.payload.signature"])
