from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    role: Optional[str] = None


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    company_name: str = Field(..., min_length=2)
    contact_person: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str
    profile_created: bool = True
