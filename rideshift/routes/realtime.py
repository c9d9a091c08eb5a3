from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from ..database import get_db
from ..errors import RideShiftError, ValidationError
from ..schemas.realtime import RealtimeMessage
from ..services.realtime_service import RealtimeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ws", tags=["realtime"])
realtime_service = RealtimeService()


@router.get("")
async def poll_updates(
    response: Response,
    action: Optional[str] = None,
    user_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Latest ride, driver or governance updates for a user"""
    try:
        if not action or not user_id:
            raise ValidationError("action and user_id parameters are required")

        payload = await realtime_service.poll(action, user_id, db)
        response.headers["Cache-Control"] = "no-cache"
        return payload

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error in realtime API: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.post("")
async def handle_message(message: RealtimeMessage):
    """Subscribe, unsubscribe or ping"""
    try:
        return realtime_service.handle_message(message)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error handling realtime message: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
