"""
API middleware for identity and common concerns.
Authentication happens upstream; the gateway forwards the user ID in a header.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.core.config import settings
from app.db.session import get_db
from app.db.repositories.user_repository import UserRepository
from app.models.user import User


async def require_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the current user from the identity header.
    
    Usage:
        @router.get("/endpoint")
        async def my_endpoint(
            current_user: User = Depends(require_current_user)
        ):
            ...
    
    Raises:
        HTTPException: 401 if the header is missing or malformed, 404 if the user is unknown
    """
    user_id_str = request.headers.get(settings.USER_ID_HEADER)
    if not user_id_str:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.USER_ID_HEADER} header",
        )
    
    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID in identity header",
        )
    
    user = await UserRepository(db).get(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    
    return user
