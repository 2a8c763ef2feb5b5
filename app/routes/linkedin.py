"""
linkedin.py
-----------
LinkedIn account connection (OAuth 2.0 authorization-code flow).

Flow:
    1. GET  /api/v1/linkedin/auth      -> {authUrl} with a single-use state
    2. user consents on LinkedIn, which redirects back with ?code&state
    3. GET  /api/v1/linkedin/callback  -> tokens exchanged and stored encrypted
    4. POST /api/v1/linkedin/disconnect clears the integration record
"""

from fastapi import APIRouter, Depends, Query
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.user_response import (
    LinkedInAuthUrlResponse,
    LinkedInCallbackResponse,
    MessageResponse,
)
from app.services.linkedin_oauth_service import LinkedInOAuthService

router = APIRouter(prefix="/linkedin", tags=["linkedin"])


@router.get("/auth", response_model=LinkedInAuthUrlResponse)
async def start_auth(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    auth_url = await LinkedInOAuthService(db).get_authorization_url(user_id)
    return LinkedInAuthUrlResponse(auth_url=auth_url)


@router.get("/callback", response_model=LinkedInCallbackResponse)
async def callback(
    code: str = Query(..., min_length=1),
    state: str = Query(..., min_length=1),
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await LinkedInOAuthService(db).handle_callback(code, state, user_id=user_id)


@router.post("/disconnect", response_model=MessageResponse)
async def disconnect(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    await LinkedInOAuthService(db).disconnect(user_id)
    return MessageResponse(message="LinkedIn disconnected successfully")
