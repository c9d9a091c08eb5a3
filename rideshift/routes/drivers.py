from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from ..database import get_db
from ..errors import RideShiftError
from ..models.driver import VerificationStatus
from ..schemas.driver import (
    DriverCreateRequest,
    DriverUpdateRequest,
    DriverActionRequest,
    DriverProfileResponse,
)
from ..services.driver_service import DriverService
from ..services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drivers", tags=["drivers"])
driver_service = DriverService()
event_service = EventService()


@router.get("", response_model=List[DriverProfileResponse])
async def list_driver_profiles(
    user_id: Optional[str] = None,
    verification_status: Optional[VerificationStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    """List driver profiles, optionally by user and verification status"""
    try:
        profiles = await driver_service.list_profiles(
            db, user_id=user_id, verification_status=verification_status
        )
        return [DriverProfileResponse.model_validate(profile) for profile in profiles]

    except Exception as e:
        logger.error(f"Failed to fetch driver profiles: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.post("", response_model=DriverProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_driver_profile(
    profile_data: DriverCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Submit a driver profile for verification"""
    try:
        profile = await driver_service.create_profile(profile_data, db)
        await event_service.driver_event("driver_registered", profile)
        return DriverProfileResponse.model_validate(profile)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to create driver profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.put("", response_model=DriverProfileResponse)
async def update_driver_profile(
    update_data: DriverUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        profile = await driver_service.update_profile(update_data, db)
        return DriverProfileResponse.model_validate(profile)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to update driver profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.patch("", response_model=DriverProfileResponse)
async def driver_action(
    action_data: DriverActionRequest,
    db: AsyncSession = Depends(get_db),
):
    """Verify, reject, activate or deactivate a driver"""
    try:
        profile = await driver_service.apply_action(action_data.user_id, action_data.action, db)
        await event_service.driver_event(f"driver_{action_data.action}", profile)
        return DriverProfileResponse.model_validate(profile)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to update driver profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
