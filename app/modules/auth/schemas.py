from pydantic import BaseModel, EmailStr
from typing import Optional

from app.modules.auth.session import SessionState


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    message: str = "Bem-vindo de volta ao sistema."


class SessionResponse(BaseModel):
    state: SessionState
    attempts: int
    user_id: Optional[str] = None
    error: Optional[str] = None
