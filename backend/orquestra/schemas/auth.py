from pydantic import BaseModel, EmailStr, Field, model_validator
from datetime import datetime
from typing import Literal

from ..enums import UserRole

# Global admins are provisioned out of band, never through signup
SignupRole = Literal[
    UserRole.DEVELOPER.value,
    UserRole.SUPERVISOR.value,
    UserRole.TUTOR.value,
    UserRole.TEAM_LEADER.value,
    UserRole.PROJECT_MANAGER.value,
]

class SignupRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=50)
    confirm_password: str
    role: SignupRole = UserRole.DEVELOPER.value

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}

class SignupResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str

class LoginResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str
