from fastapi import APIRouter, HTTPException, status
from typing import Optional
import logging

from ..errors import RideShiftError, ValidationError
from ..schemas.nft import (
    MintRequest,
    TransferRequest,
    MintResponse,
    TokenMetadataResponse,
    TransferResponse,
)
from ..services.nft_service import NFTService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nft", tags=["nft"])
nft_service = NFTService()


@router.post("", response_model=MintResponse, status_code=status.HTTP_201_CREATED)
async def mint_driver_nft(request: MintRequest):
    """Mint a driver credential NFT (simulated)"""
    try:
        return await nft_service.mint(request)

    except Exception as e:
        logger.error(f"Error minting NFT: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.get("", response_model=TokenMetadataResponse)
async def get_nft_metadata(token_id: Optional[str] = None):
    try:
        if not token_id:
            raise ValidationError("token_id parameter is required")
        return nft_service.get_metadata(token_id)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error fetching NFT metadata: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.put("", response_model=TransferResponse)
async def transfer_nft(request: TransferRequest):
    try:
        return await nft_service.transfer(request)

    except Exception as e:
        logger.error(f"Error transferring NFT: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
