from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Literal, Optional
from datetime import datetime

Role = Literal["admin", "merchant", "customer"]


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    display_name: Optional[str] = None
    role: Literal["merchant", "customer"] = "customer"


class UserResponse(BaseModel):
    id: str
    email: EmailStr
    display_name: Optional[str] = None
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserLogin(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: str
    role: Role
    store_id: Optional[str] = None
    fallback: bool = False
