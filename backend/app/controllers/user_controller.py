"""
User controller.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.services.user_service import UserService
from app.schemas.user import (
    CalendarConfig,
    CalendarConfigUpdate,
    UserCreate,
    UserResponse,
    UserUpdate,
)


class UserController(BaseController):
    """Controller for user profile and configuration operations."""
    
    def __init__(self, session: AsyncSession):
        self.user_service = UserService(session)
    
    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """Register a user profile."""
        return await self.user_service.create_user(user_data)
    
    async def get_user(self, user_id: UUID) -> UserResponse:
        """Get user profile."""
        return await self.user_service.get_user(user_id)
    
    async def update_profile(self, user_id: UUID, user_data: UserUpdate) -> UserResponse:
        """Update profile names."""
        return await self.user_service.update_profile(user_id, user_data)
    
    async def get_config(self, user_id: UUID) -> CalendarConfig:
        """Get calendar configuration."""
        return await self.user_service.get_config(user_id)
    
    async def update_config(self, user_id: UUID, patch: CalendarConfigUpdate) -> CalendarConfig:
        """Partially update calendar configuration."""
        return await self.user_service.update_config(user_id, patch)
