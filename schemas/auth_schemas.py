from pydantic import BaseModel, field_validator
from schemas.base import CamelModel


class Token(BaseModel):
    access_token: str
    token_type: str


class CreateUserRequest(BaseModel):
    username: str
    password: str

    @field_validator('username')
    @classmethod
    def validate_username(cls, value):
        value = value.strip()
        if not value:
            raise ValueError('Username is required')
        if len(value) < 3:
            raise ValueError('Username must be at least 3 characters')
        return value

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        if not value:
            raise ValueError('Password is required')
        if len(value) < 6:
            raise ValueError('Password must be at least 6 characters')
        return value


class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreate(CamelModel):
    """What the store needs to create a user: the password is already hashed."""
    username: str
    hashed_password: str


class UserRecord(CamelModel):
    id: int
    username: str
    hashed_password: str


class UserResponse(CamelModel):
    id: int
    username: str
