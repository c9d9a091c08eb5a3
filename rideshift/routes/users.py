from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from ..database import get_db
from ..errors import RideShiftError, NotFoundError
from ..models.user import UserRole
from ..schemas.user import UserCreateRequest, UserUpdateRequest, UserResponse
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])
user_service = UserService()


@router.get("", response_model=List[UserResponse])
async def list_users(
    farcaster_id: Optional[str] = None,
    role: Optional[UserRole] = None,
    db: AsyncSession = Depends(get_db),
):
    try:
        users = await user_service.list_users(db, farcaster_id=farcaster_id, role=role)
        return [UserResponse.model_validate(user) for user in users]

    except Exception as e:
        logger.error(f"Failed to fetch users: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.get("/{farcaster_id}", response_model=UserResponse)
async def get_user(farcaster_id: str, db: AsyncSession = Depends(get_db)):
    """Look up a single user by Farcaster id"""
    try:
        user = await user_service.get_user(farcaster_id, db)
        if not user:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch user {farcaster_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await user_service.create_user(user_data, db)
        return UserResponse.model_validate(user)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.put("", response_model=UserResponse)
async def update_user(
    update_data: UserUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await user_service.update_user(update_data, db)
        return UserResponse.model_validate(user)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to update user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
