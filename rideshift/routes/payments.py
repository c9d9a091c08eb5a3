from fastapi import APIRouter, HTTPException, status
from typing import Optional
import logging

from ..errors import RideShiftError, ValidationError
from ..schemas.payment import (
    PaymentRequest,
    GasEstimateRequest,
    PaymentResponse,
    PaymentStatusResponse,
    GasEstimateResponse,
)
from ..services.payment_service import PaymentService
from ..services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])
payment_service = PaymentService()
event_service = EventService()


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def process_payment(payment: PaymentRequest):
    """Pay a driver for a ride (simulated transfer)"""
    try:
        result = await payment_service.process_payment(payment)
        await event_service.payment_event("payment_completed", result)
        return result

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error processing payment: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.get("", response_model=PaymentStatusResponse)
async def get_payment_status(transaction_hash: Optional[str] = None):
    try:
        if not transaction_hash:
            raise ValidationError("transaction_hash parameter is required")
        return await payment_service.get_payment_status(transaction_hash)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error checking payment status: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.put("", response_model=GasEstimateResponse)
async def estimate_gas(request: GasEstimateRequest):
    """Gas estimate for a payment"""
    try:
        return payment_service.estimate_gas(request)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error estimating gas: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
