"""
Shared route dependencies.
"""

from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.repositories.user_repository import UserRepository


async def current_user_timezone(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
) -> str:
    """The caller's IANA timezone, used to place weekly quota boundaries."""
    user = await UserRepository(db).find_by_id(user_id)
    return user.timezone or "UTC"
