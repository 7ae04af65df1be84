"""
User profile and calendar configuration API endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.api.v1.middleware import require_current_user
from app.controllers.user_controller import UserController
from app.models.user import User
from app.schemas.user import (
    CalendarConfig,
    CalendarConfigUpdate,
    UserCreate,
    UserResponse,
    UserUpdate,
)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Register a user profile."""
    controller = UserController(db)
    return await controller.create_user(user_data)


@router.get("/me", response_model=UserResponse)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> UserResponse:
    """Get the current user's profile."""
    controller = UserController(db)
    return await controller.get_user(current_user.id)


@router.put("/me", response_model=UserResponse)
async def update_profile(
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> UserResponse:
    """Update the current user's names."""
    controller = UserController(db)
    return await controller.update_profile(current_user.id, user_data)


@router.get("/me/config", response_model=CalendarConfig)
async def get_config(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> CalendarConfig:
    """Get the current user's calendar configuration."""
    controller = UserController(db)
    return await controller.get_config(current_user.id)


@router.put("/me/config", response_model=CalendarConfig)
async def update_config(
    patch: CalendarConfigUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> CalendarConfig:
    """Partially update the current user's calendar configuration."""
    controller = UserController(db)
    return await controller.update_config(current_user.id, patch)
