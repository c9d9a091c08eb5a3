from sqlalchemy import Column, Integer, String, Boolean, Text, Enum
import enum
from ..database import Base


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DriverAction(str, enum.Enum):
    VERIFY = "verify"
    REJECT = "reject"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"


class DriverProfile(Base):
    __tablename__ = "driver_profiles"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), unique=True, nullable=False, index=True)

    vehicle_details = Column(Text, nullable=False)
    license_number = Column(String(64), nullable=False)

    # Verification gate; active only once verified
    verification_status = Column(
        Enum(VerificationStatus), nullable=False, default=VerificationStatus.PENDING
    )
    active_status = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<DriverProfile(user_id={self.user_id}, verification={self.verification_status}, active={self.active_status})>"
