from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from society.schemas.user import Role


class Session(BaseModel):
    """Identity issued by the auth provider for the current browser session."""

    user_id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    access_token: Optional[str] = None


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    flatNo: str = Field(min_length=1)
    contactNo: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = Role.RESIDENT
