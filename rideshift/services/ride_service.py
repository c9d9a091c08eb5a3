from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List
import logging
from decimal import Decimal

from ..models.ride import Ride, RideStatus, RideAction
from ..schemas.ride import RideCreateRequest, RideUpdateRequest
from ..config import settings
from ..errors import RideShiftError, ValidationError, InvalidStateError, NotFoundError
from ..utils.clock import utcnow, generate_ride_id
from .pricing import calculate_fare, check_commission_rate

logger = logging.getLogger(__name__)

# Required source state per action; None means the action fires from any state
ACTION_SOURCE_STATES = {
    RideAction.ACCEPT: None,
    RideAction.START: RideStatus.ACCEPTED,
    RideAction.COMPLETE: RideStatus.IN_PROGRESS,
    RideAction.CANCEL: None,
}

_ACTION_STATE_ERRORS = {
    RideAction.START: "Ride must be accepted before starting",
    RideAction.COMPLETE: "Ride must be in progress before completing",
}


class RideService:

    def calculate_estimated_fare(self, commission_rate: float) -> Decimal:
        """Fare for the fixed mock trip (pickup/dropoff are not geocoded)"""
        return calculate_fare(
            settings.mock_ride_distance_m,
            settings.mock_ride_duration_s,
            commission_rate,
        )

    async def list_rides(
        self,
        db: AsyncSession,
        status: Optional[RideStatus] = None,
        requester_id: Optional[str] = None,
        driver_id: Optional[str] = None,
    ) -> List[Ride]:
        """Rides matching every given filter, in insertion order"""
        stmt = select(Ride)
        if status:
            stmt = stmt.where(Ride.status == status)
        if requester_id:
            stmt = stmt.where(Ride.requester_id == requester_id)
        if driver_id:
            stmt = stmt.where(Ride.driver_id == driver_id)

        result = await db.execute(stmt.order_by(Ride.pk))
        return list(result.scalars().all())

    async def get_ride_by_id(
        self, ride_id: str, db: AsyncSession, for_update: bool = False
    ) -> Optional[Ride]:
        """Get ride by ID"""
        stmt = select(Ride).where(Ride.ride_id == ride_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_ride(self, ride_data: RideCreateRequest, db: AsyncSession) -> Ride:
        """Create a new ride request"""
        commission_rate = settings.default_commission_rate
        if ride_data.commission_rate is not None:
            commission_rate = check_commission_rate(ride_data.commission_rate)

        try:
            ride = Ride(
                ride_id=generate_ride_id(),
                requester_id=ride_data.requester_id,
                pickup_location=ride_data.pickup_location,
                dropoff_location=ride_data.dropoff_location,
                requested_at=utcnow(),
                fare_amount=self.calculate_estimated_fare(commission_rate),
                commission_rate=commission_rate,
                status=RideStatus.REQUESTED,
            )

            db.add(ride)
            await db.commit()

            logger.info(f"Created ride {ride.ride_id} for requester {ride.requester_id}")
            return ride

        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create ride: {e}")
            raise

    async def update_ride(self, update_data: RideUpdateRequest, db: AsyncSession) -> Ride:
        """Overwrite the editable fields of a ride"""
        try:
            ride = await self.get_ride_by_id(update_data.ride_id, db, for_update=True)
            if not ride:
                raise NotFoundError("Ride not found")

            changes = update_data.model_dump(exclude={"ride_id"}, exclude_unset=True)
            for field, value in changes.items():
                if value is None:
                    raise ValidationError(f"{field} cannot be null")
                setattr(ride, field, value)

            await db.commit()

            logger.info(f"Updated ride {ride.ride_id}: {sorted(changes)}")
            return ride

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to update ride: {e}")
            raise

    async def apply_action(
        self,
        ride_id: str,
        action: str,
        db: AsyncSession,
        driver_id: Optional[str] = None,
    ) -> Ride:
        """Run a named lifecycle transition on a ride"""
        try:
            ride_action = RideAction(action)
        except ValueError:
            raise ValidationError("Invalid action")

        if ride_action == RideAction.ACCEPT and not driver_id:
            raise ValidationError("driver_id is required for accept action")

        try:
            ride = await self.get_ride_by_id(ride_id, db, for_update=True)
            if not ride:
                raise NotFoundError("Ride not found")

            required = ACTION_SOURCE_STATES[ride_action]
            if required is not None and ride.status != required:
                logger.warning(
                    f"Rejected {ride_action.value} on ride {ride_id} in status {ride.status.value}"
                )
                raise InvalidStateError(_ACTION_STATE_ERRORS[ride_action])

            if ride_action == RideAction.ACCEPT:
                ride.driver_id = driver_id
                ride.status = RideStatus.ACCEPTED
            elif ride_action == RideAction.START:
                ride.pickup_at = utcnow()
                ride.status = RideStatus.IN_PROGRESS
            elif ride_action == RideAction.COMPLETE:
                ride.completed_at = utcnow()
                ride.status = RideStatus.COMPLETED
            elif ride_action == RideAction.CANCEL:
                ride.status = RideStatus.CANCELLED

            await db.commit()

            logger.info(f"Ride {ride_id} -> {ride.status.value} ({ride_action.value})")
            return ride

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to apply {action} to ride {ride_id}: {e}")
            raise

    async def get_open_rides_for_user(self, user_id: str, db: AsyncSession) -> List[Ride]:
        """Rides the user requested or drives that are not yet finished"""
        stmt = (
            select(Ride)
            .where((Ride.requester_id == user_id) | (Ride.driver_id == user_id))
            .where(Ride.status.notin_([RideStatus.COMPLETED, RideStatus.CANCELLED]))
            .order_by(Ride.pk)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
