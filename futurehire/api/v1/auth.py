# futurehire/api/v1/auth.py
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field

from futurehire.api.v1.deps import get_auth_service
from futurehire.models.identity import UserSummary
from futurehire.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])

class SignupIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    mobile: Optional[str] = Field(None, max_length=32)
    password: str = Field(..., min_length=4, max_length=128)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class AuthOut(BaseModel):
    message: str
    token: str
    user: UserSummary

@router.post("/signup", response_model=AuthOut)
async def signup(payload: SignupIn, auth: AuthService = Depends(get_auth_service)):
    issued = await auth.signup(payload.name, payload.email, payload.mobile, payload.password)
    return {"message": "User created", "token": issued.token, "user": issued.user}

@router.post("/login", response_model=AuthOut)
async def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    issued = await auth.login(payload.email, payload.password)
    return {"message": "Login successful", "token": issued.token, "user": issued.user}
