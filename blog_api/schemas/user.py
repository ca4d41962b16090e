"""
Pydantic schemas for users
Request models carry every input rule; FastAPI reports all violations of a
body together and the error handler words them for the client
"""
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

from blog_api.schemas.messages import (
    NAME_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PASSWORD_STRENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    invalid_field,
)

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"

# Request Schemas (data coming FROM the client)

class RegisterRequest(BaseModel):
    """Schema for user registration request"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "Passw0rd",
                "firstName": "Alice",
                "lastName": "Liddell",
            }
        },
    )

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
        description="Letters, numbers and underscores",
    )
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="Password (min 6 characters, upper and lower case and a digit)",
    )
    first_name: Optional[str] = Field(None, alias="firstName", max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=NAME_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        has_lower = any("a" <= char <= "z" for char in value)
        has_upper = any("A" <= char <= "Z" for char in value)
        has_digit = any("0" <= char <= "9" for char in value)
        if not (has_lower and has_upper and has_digit):
            raise invalid_field(PASSWORD_STRENGTH)
        return value


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "alice@example.com", "password": "Passw0rd"}},
    )

    # Plain str; a malformed address fails like any unknown one
    email: str = Field(..., description="User email")
    password: str = Field(..., description="User password")

    @field_validator("email", "password")
    @classmethod
    def not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise invalid_field(f"{info.field_name.capitalize()} is required")
        return value


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields stay unchanged, null clears"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName", max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=NAME_MAX_LENGTH)
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    def provided_fields(self) -> dict:
        """Only the fields present in the request body, keyed by wire name"""
        return self.model_dump(by_alias=True, exclude_unset=True)

# Records (data going TO the client)

class UserRecord(BaseModel):
    """
    A user row
    password_hash is excluded from every serialization
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    password_hash: str = Field("", exclude=True, repr=False)
    first_name: Optional[str] = Field(None, serialization_alias="firstName")
    last_name: Optional[str] = Field(None, serialization_alias="lastName")
    avatar_url: Optional[str] = Field(None, serialization_alias="avatarUrl")
    is_active: bool = Field(True, serialization_alias="isActive")
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "UserRecord":
        return cls.model_validate(dict(row))

    def serialize(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
