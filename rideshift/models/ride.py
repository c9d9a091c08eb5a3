from sqlalchemy import Column, Integer, String, Numeric, Float, DateTime, Text, Enum
import enum
from ..database import Base
from ..utils.clock import utcnow


class RideStatus(str, enum.Enum):
    REQUESTED = "requested"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RideAction(str, enum.Enum):
    ACCEPT = "accept"
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"


class Ride(Base):
    __tablename__ = "rides"

    # Surrogate key, gives insertion order
    pk = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(String(64), unique=True, nullable=False, index=True)
    requester_id = Column(String(128), nullable=False, index=True)
    driver_id = Column(String(128), nullable=True, index=True)

    # Free-text locations
    pickup_location = Column(Text, nullable=False)
    dropoff_location = Column(Text, nullable=False)

    # Fare information
    fare_amount = Column(Numeric(10, 4), nullable=False)
    commission_rate = Column(Float, nullable=False)

    status = Column(Enum(RideStatus), nullable=False, default=RideStatus.REQUESTED)

    # Timestamps
    requested_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    pickup_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Ride(ride_id={self.ride_id}, status={self.status}, requester_id={self.requester_id})>"
