"""Pydantic schemas for `User` domain objects."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _normalize_email(v: str) -> str:
	return v.strip().lower()


class UserCreate(BaseModel):
	name: str = Field(..., min_length=2, max_length=50)
	email: EmailStr
	password: str = Field(..., min_length=6, max_length=128)

	@field_validator("name")
	@classmethod
	def strip_name(cls, v: str) -> str:
		v = v.strip()
		if len(v) < 2:
			raise ValueError("Name must be between 2 and 50 characters")
		return v

	@field_validator("email")
	@classmethod
	def lowercase_email(cls, v: str) -> str:
		return _normalize_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"name": "John Doe",
			"email": "john@example.com",
			"password": "password123",
		}
	})


class UserLogin(BaseModel):
	email: EmailStr
	password: str = Field(..., min_length=1)

	@field_validator("email")
	@classmethod
	def lowercase_email(cls, v: str) -> str:
		return _normalize_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "john@example.com",
			"password": "password123",
		}
	})


class UserProfileUpdate(BaseModel):
	name: Optional[str] = Field(None, min_length=2, max_length=50)
	bio: Optional[str] = Field(None, max_length=500)
	avatar: Optional[str] = Field(None, max_length=500)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"name": "John D.",
			"bio": "Software developer and tech enthusiast",
			"avatar": "https://cdn.example.com/avatars/john.png",
		}
	})


class UserStatusUpdate(BaseModel):
	is_active: bool


class UserResponse(BaseModel):
	id: int
	name: str
	email: EmailStr
	role: str = Field(..., validation_alias="role_name")
	bio: Optional[str] = None
	avatar: Optional[str] = None
	is_active: bool
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True, populate_by_name=True, json_schema_extra={
		"example": {
			"id": 1,
			"name": "John Doe",
			"email": "john@example.com",
			"role": "user",
			"bio": "Software developer and tech enthusiast",
			"avatar": "",
			"is_active": True,
			"created_at": "2025-01-01T10:00:00Z",
			"updated_at": "2025-01-02T10:00:00Z",
		}
	})


class UserStatusResponse(BaseModel):
	id: int
	name: str
	email: EmailStr
	is_active: bool

	model_config = ConfigDict(from_attributes=True)


class UserData(BaseModel):
	user: UserResponse


class UserListData(BaseModel):
	users: List[UserResponse]


class UserStatusData(BaseModel):
	user: UserStatusResponse


class AuthData(BaseModel):
	user: UserResponse
	token: str
	token_type: str = "bearer"
