"""
User service with profile and calendar configuration logic.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, NotFoundError, RangeError
from app.db.repositories.user_repository import UserRepository
from app.models.user import User
from app.schemas.user import (
    CalendarConfig,
    CalendarConfigUpdate,
    UserCreate,
    UserResponse,
    UserUpdate,
    merge_calendar_config,
)
from app.services.base_service import BaseService
from app.utils.date_utils import local_today

logger = logging.getLogger(__name__)


def calendar_config_for(user: User) -> CalendarConfig:
    """Typed calendar configuration for a stored user; missing keys take defaults."""
    return CalendarConfig.model_validate(user.internship_config or {})


class UserService(BaseService):
    """Service for user profile operations."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
    
    async def create_user(self, user_data: UserCreate, today: Optional[date] = None) -> UserResponse:
        """Register a user profile with an optional initial configuration."""
        email = user_data.email.strip().lower()
        if await self.user_repo.get_by_email(email):
            raise DuplicateKeyError("A user with this email already exists", details={"email": email})
        
        config = CalendarConfig()
        if user_data.internship_config is not None:
            config = self._apply_config_patch(config, user_data.internship_config, today)
        
        try:
            user = await self.user_repo.create(
                email=email,
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                internship_config=config.model_dump(mode="json"),
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if await self.user_repo.get_by_email(email):
                raise DuplicateKeyError("A user with this email already exists", details={"email": email}) from e
            raise
        
        logger.info("User created", extra={"user_id": str(user.id)})
        return UserResponse.model_validate(user)
    
    async def get_user_model(self, user_id: UUID) -> User:
        """Load the user row or raise NotFoundError."""
        user = await self.user_repo.get(user_id)
        if not user:
            raise NotFoundError("User not found", details={"user_id": str(user_id)})
        return user
    
    async def get_user(self, user_id: UUID) -> UserResponse:
        """Get user profile by ID."""
        user = await self.get_user_model(user_id)
        return UserResponse.model_validate(user)
    
    async def update_profile(self, user_id: UUID, user_data: UserUpdate) -> UserResponse:
        """Update profile names."""
        user = await self.get_user_model(user_id)
        update_dict = user_data.model_dump(exclude_unset=True)
        if update_dict:
            user = await self.user_repo.update(user, **update_dict)
            await self.session.commit()
        return UserResponse.model_validate(user)
    
    async def get_config(self, user_id: UUID) -> CalendarConfig:
        """Get the user's calendar configuration."""
        user = await self.get_user_model(user_id)
        return calendar_config_for(user)
    
    async def update_config(
        self,
        user_id: UUID,
        patch: CalendarConfigUpdate,
        today: Optional[date] = None,
    ) -> CalendarConfig:
        """
        Merge a partial update into the stored configuration.
        
        The merged value is validated as a whole and written back as one document.
        """
        user = await self.get_user_model(user_id)
        config = self._apply_config_patch(calendar_config_for(user), patch, today)
        await self.user_repo.update(user, internship_config=config.model_dump(mode="json"))
        await self.session.commit()
        logger.info(
            "Calendar configuration updated",
            extra={"user_id": str(user_id), "fields": sorted(patch.model_dump(exclude_unset=True))},
        )
        return config
    
    @staticmethod
    def _apply_config_patch(
        current: CalendarConfig,
        patch: CalendarConfigUpdate,
        today: Optional[date],
    ) -> CalendarConfig:
        today = today or local_today()
        if patch.start_date is not None and patch.start_date > today:
            raise RangeError(
                "Start date cannot be in the future",
                details={"start_date": patch.start_date.isoformat()},
            )
        return merge_calendar_config(current, patch)
