"""
User settings and weekly quota usage.
"""

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.user_request import SettingsPatch
from app.models.api.user_response import WeeklyQuotaResponse
from app.models.domain.user_domain import UserProfile
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/settings", response_model=UserProfile)
async def get_settings(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await UserService(db).get_settings(user_id)


@router.put("/me/settings", response_model=UserProfile)
async def update_settings(
    body: SettingsPatch,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await UserService(db).update_settings(user_id, body)


@router.get("/me/quota", response_model=WeeklyQuotaResponse)
async def get_quota(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    """Connections and posts used this week, in the user's timezone."""
    return await UserService(db).get_weekly_quota(user_id)
