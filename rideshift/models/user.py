from sqlalchemy import Column, Integer, String, Float, Enum
import enum
from ..database import Base


class UserRole(str, enum.Enum):
    RIDER = "rider"
    DRIVER = "driver"


class User(Base):
    __tablename__ = "users"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    farcaster_id = Column(String(128), unique=True, nullable=False, index=True)
    wallet_address = Column(String(64), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.RIDER)
    rating = Column(Float, nullable=False, default=5.0)

    def __repr__(self):
        return f"<User(farcaster_id={self.farcaster_id}, role={self.role})>"
