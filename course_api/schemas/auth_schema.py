from pydantic import BaseModel, EmailStr, Field


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminSessionOut(BaseModel):
    email: str
    token: str
    expires_in: int


class AdminMeOut(BaseModel):
    email: str
