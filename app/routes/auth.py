"""
auth.py
-------
Registration, login, access-token refresh and the current user's profile.

Usage:
    POST /api/v1/auth/register  {email, password, name, timezone?}
    POST /api/v1/auth/login     {email, password}
    POST /api/v1/auth/refresh   {refreshToken}
    GET  /api/v1/auth/me        Authorization: Bearer <accessToken>
"""

from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.auth_request import LoginRequest, RefreshRequest, RegisterRequest
from app.models.api.auth_response import AuthResponse, RefreshResponse
from app.models.domain.user_domain import UserProfile
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: AsyncDatabase = Depends(get_database)):
    return await AuthService(db).register(body.email, body.password, body.name, body.timezone)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: AsyncDatabase = Depends(get_database)):
    return await AuthService(db).login(body.email, body.password)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(body: RefreshRequest):
    return RefreshResponse(access_token=AuthService.refresh_access_token(body.refresh_token))


@router.get("/me", response_model=UserProfile)
async def me(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await AuthService(db).get_profile(user_id)
