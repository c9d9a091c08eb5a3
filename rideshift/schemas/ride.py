from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional
from datetime import datetime
from ..models.ride import RideStatus
from ..utils.formatting import format_currency
from .proposal import Rate


# Request schemas
class RideCreateRequest(BaseModel):
    requester_id: str = Field(..., min_length=1, max_length=128)
    pickup_location: str = Field(..., min_length=1, max_length=500)
    dropoff_location: str = Field(..., min_length=1, max_length=500)
    commission_rate: Optional[Rate] = None


class RideUpdateRequest(BaseModel):
    """Full update; only the listed fields may be written"""

    ride_id: str = Field(..., min_length=1)
    pickup_location: Optional[str] = Field(None, min_length=1, max_length=500)
    dropoff_location: Optional[str] = Field(None, min_length=1, max_length=500)

    class Config:
        extra = "forbid"


class RideActionRequest(BaseModel):
    ride_id: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)
    driver_id: Optional[str] = None


# Response schemas
class RideResponse(BaseModel):
    ride_id: str
    requester_id: str
    driver_id: Optional[str] = None
    pickup_location: str
    dropoff_location: str
    requested_at: datetime
    pickup_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    fare_amount: float
    commission_rate: float
    status: RideStatus

    @field_validator("fare_amount", mode="before")
    @classmethod
    def _fare_as_float(cls, value):
        # Numeric column hands back Decimal
        return float(value)

    @computed_field
    @property
    def fare_display(self) -> str:
        return format_currency(self.fare_amount)

    class Config:
        from_attributes = True
