from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List
import logging

from ..models.user import User, UserRole
from ..schemas.user import UserCreateRequest, UserUpdateRequest
from ..errors import RideShiftError, ValidationError, NotFoundError, ConflictError

logger = logging.getLogger(__name__)

INITIAL_RATING = 5.0


class UserService:

    async def list_users(
        self,
        db: AsyncSession,
        farcaster_id: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> List[User]:
        stmt = select(User)
        if farcaster_id:
            stmt = stmt.where(User.farcaster_id == farcaster_id)
        if role:
            stmt = stmt.where(User.role == role)

        result = await db.execute(stmt.order_by(User.pk))
        return list(result.scalars().all())

    async def get_user(
        self, farcaster_id: str, db: AsyncSession, for_update: bool = False
    ) -> Optional[User]:
        stmt = select(User).where(User.farcaster_id == farcaster_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user(self, user_data: UserCreateRequest, db: AsyncSession) -> User:
        """Register a user; every new user starts on a perfect rating"""
        try:
            if await self.get_user(user_data.farcaster_id, db):
                raise ConflictError("User already exists")

            user = User(
                farcaster_id=user_data.farcaster_id,
                wallet_address=user_data.wallet_address,
                role=user_data.role,
                rating=INITIAL_RATING,
            )
            db.add(user)
            await db.commit()

            logger.info(f"Created user {user.farcaster_id} as {user.role.value}")
            return user

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create user: {e}")
            raise

    async def update_user(self, update_data: UserUpdateRequest, db: AsyncSession) -> User:
        try:
            user = await self.get_user(update_data.farcaster_id, db, for_update=True)
            if not user:
                raise NotFoundError("User not found")

            changes = update_data.model_dump(exclude={"farcaster_id"}, exclude_unset=True)
            for field, value in changes.items():
                if value is None:
                    raise ValidationError(f"{field} cannot be null")
                setattr(user, field, value)

            await db.commit()

            logger.info(f"Updated user {user.farcaster_id}: {sorted(changes)}")
            return user

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to update user: {e}")
            raise
