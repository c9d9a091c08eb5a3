from pydantic import BaseModel, Field
from typing import Optional
from ..models.driver import VerificationStatus


# Request schemas
class DriverCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128)
    vehicle_details: str = Field(..., min_length=1, max_length=500)
    license_number: str = Field(..., min_length=1, max_length=64)


class DriverUpdateRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    vehicle_details: Optional[str] = Field(None, min_length=1, max_length=500)
    license_number: Optional[str] = Field(None, min_length=1, max_length=64)

    class Config:
        extra = "forbid"


class DriverActionRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)


# Response schemas
class DriverProfileResponse(BaseModel):
    user_id: str
    vehicle_details: str
    license_number: str
    verification_status: VerificationStatus
    active_status: bool

    class Config:
        from_attributes = True
