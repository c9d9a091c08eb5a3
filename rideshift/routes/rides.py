from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from ..database import get_db
from ..errors import RideShiftError
from ..models.ride import RideStatus
from ..schemas.ride import (
    RideCreateRequest,
    RideUpdateRequest,
    RideActionRequest,
    RideResponse,
)
from ..services.ride_service import RideService
from ..services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rides", tags=["rides"])

# Service instances
ride_service = RideService()
event_service = EventService()


@router.get("", response_model=List[RideResponse])
async def list_rides(
    ride_status: Optional[RideStatus] = Query(None, alias="status"),
    requester_id: Optional[str] = None,
    driver_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """List rides, optionally filtered by status, requester and driver"""
    try:
        rides = await ride_service.list_rides(
            db, status=ride_status, requester_id=requester_id, driver_id=driver_id
        )
        return [RideResponse.model_validate(ride) for ride in rides]

    except Exception as e:
        logger.error(f"Failed to fetch rides: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.post("", response_model=RideResponse, status_code=status.HTTP_201_CREATED)
async def request_ride(
    ride_data: RideCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Request a new ride"""
    try:
        ride = await ride_service.create_ride(ride_data, db)
        await event_service.ride_event("ride_requested", ride)
        return RideResponse.model_validate(ride)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to request ride: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.put("", response_model=RideResponse)
async def update_ride(
    update_data: RideUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Overwrite a ride's pickup and dropoff"""
    try:
        ride = await ride_service.update_ride(update_data, db)
        return RideResponse.model_validate(ride)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to update ride: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.patch("", response_model=RideResponse)
async def ride_action(
    action_data: RideActionRequest,
    db: AsyncSession = Depends(get_db),
):
    """Accept, start, complete or cancel a ride"""
    try:
        ride = await ride_service.apply_action(
            action_data.ride_id,
            action_data.action,
            db,
            driver_id=action_data.driver_id,
        )
        await event_service.ride_event(f"ride_{ride.status.value}", ride)
        return RideResponse.model_validate(ride)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to update ride: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
