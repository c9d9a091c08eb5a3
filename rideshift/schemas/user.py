from pydantic import BaseModel, Field
from typing import Optional
from ..models.user import UserRole


class UserCreateRequest(BaseModel):
    farcaster_id: str = Field(..., min_length=1, max_length=128)
    wallet_address: str = Field(..., min_length=1, max_length=64)
    role: UserRole = UserRole.RIDER


class UserUpdateRequest(BaseModel):
    farcaster_id: str = Field(..., min_length=1)
    wallet_address: Optional[str] = Field(None, min_length=1, max_length=64)
    role: Optional[UserRole] = None
    rating: Optional[float] = Field(None, ge=0, le=5)

    class Config:
        extra = "forbid"


class UserResponse(BaseModel):
    farcaster_id: str
    wallet_address: str
    role: UserRole
    rating: float

    class Config:
        from_attributes = True
