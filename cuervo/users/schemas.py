# cuervo/users/schemas.py
from pydantic import BaseModel, EmailStr, Field, AliasChoices

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    # Acepta display_name | displayName | name
    display_name: str | None = Field(
        default=None,
        max_length=120,
        validation_alias=AliasChoices("display_name", "displayName", "name"),
    )

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class UserOut(BaseModel):
    id: str
    email: EmailStr
    display_name: str | None = None

    class Config:
        from_attributes = True
