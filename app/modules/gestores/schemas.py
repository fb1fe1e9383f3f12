from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class GestorCreate(BaseModel):
    nome: str
    email: Optional[str] = None


class GestorUpdate(BaseModel):
    nome: Optional[str] = None
    email: Optional[str] = None


class GestorResponse(BaseModel):
    id: int
    nome: str
    email: Optional[str] = None
    ativo: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
