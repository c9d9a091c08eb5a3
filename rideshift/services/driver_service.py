from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List
import logging

from ..models.driver import DriverProfile, VerificationStatus, DriverAction
from ..schemas.driver import DriverCreateRequest, DriverUpdateRequest
from ..errors import RideShiftError, ValidationError, InvalidStateError, NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class DriverService:

    async def list_profiles(
        self,
        db: AsyncSession,
        user_id: Optional[str] = None,
        verification_status: Optional[VerificationStatus] = None,
    ) -> List[DriverProfile]:
        """Driver profiles matching every given filter, in insertion order"""
        stmt = select(DriverProfile)
        if user_id:
            stmt = stmt.where(DriverProfile.user_id == user_id)
        if verification_status:
            stmt = stmt.where(DriverProfile.verification_status == verification_status)

        result = await db.execute(stmt.order_by(DriverProfile.pk))
        return list(result.scalars().all())

    async def get_profile(
        self, user_id: str, db: AsyncSession, for_update: bool = False
    ) -> Optional[DriverProfile]:
        stmt = select(DriverProfile).where(DriverProfile.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_profile(
        self, profile_data: DriverCreateRequest, db: AsyncSession
    ) -> DriverProfile:
        """Register a driver; starts pending and inactive"""
        try:
            if await self.get_profile(profile_data.user_id, db):
                raise ConflictError("Driver profile already exists")

            profile = DriverProfile(
                user_id=profile_data.user_id,
                vehicle_details=profile_data.vehicle_details,
                license_number=profile_data.license_number,
                verification_status=VerificationStatus.PENDING,
                active_status=False,
            )
            db.add(profile)
            await db.commit()

            logger.info(f"Created driver profile for {profile.user_id}")
            return profile

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create driver profile: {e}")
            raise

    async def update_profile(
        self, update_data: DriverUpdateRequest, db: AsyncSession
    ) -> DriverProfile:
        """Overwrite vehicle and licence details"""
        try:
            profile = await self.get_profile(update_data.user_id, db, for_update=True)
            if not profile:
                raise NotFoundError("Driver profile not found")

            changes = update_data.model_dump(exclude={"user_id"}, exclude_unset=True)
            for field, value in changes.items():
                if value is None:
                    raise ValidationError(f"{field} cannot be null")
                setattr(profile, field, value)

            await db.commit()

            logger.info(f"Updated driver profile {profile.user_id}: {sorted(changes)}")
            return profile

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to update driver profile: {e}")
            raise

    async def apply_action(self, user_id: str, action: str, db: AsyncSession) -> DriverProfile:
        """Verification and activation transitions"""
        try:
            driver_action = DriverAction(action)
        except ValueError:
            raise ValidationError("Invalid action")

        try:
            profile = await self.get_profile(user_id, db, for_update=True)
            if not profile:
                raise NotFoundError("Driver profile not found")

            if driver_action == DriverAction.VERIFY:
                profile.verification_status = VerificationStatus.VERIFIED
                profile.active_status = True
            elif driver_action == DriverAction.REJECT:
                profile.verification_status = VerificationStatus.REJECTED
                profile.active_status = False
            elif driver_action == DriverAction.ACTIVATE:
                if profile.verification_status != VerificationStatus.VERIFIED:
                    logger.warning(f"Driver {user_id} is not verified, activation refused")
                    raise InvalidStateError("Driver must be verified before activation")
                profile.active_status = True
            elif driver_action == DriverAction.DEACTIVATE:
                profile.active_status = False

            await db.commit()

            logger.info(
                f"Driver {user_id} {driver_action.value}: "
                f"{profile.verification_status.value}, active={profile.active_status}"
            )
            return profile

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to apply {action} to driver {user_id}: {e}")
            raise
