from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import timedelta
from decimal import Decimal
import logging

from ..models import (
    CommissionProposal,
    DriverProfile,
    ProposalStatus,
    Ride,
    RideStatus,
    User,
    UserRole,
    VerificationStatus,
)
from ..utils.clock import utcnow

logger = logging.getLogger(__name__)


async def seed_demo_data(db: AsyncSession) -> bool:
    """Insert the demo rider, driver, ride and proposals into an empty store"""
    existing = await db.execute(select(User.pk).limit(1))
    if existing.first() is not None:
        logger.info("Store already populated, skipping demo data")
        return False

    now = utcnow()
    db.add_all([
        User(
            farcaster_id="demo-user",
            wallet_address="0x1234567890123456789012345678901234567890",
            role=UserRole.RIDER,
            rating=4.8,
        ),
        DriverProfile(
            user_id="demo-driver",
            vehicle_details="2020 Toyota Camry, Blue",
            license_number="DL123456789",
            verification_status=VerificationStatus.VERIFIED,
            active_status=True,
        ),
        Ride(
            ride_id="ride_001",
            requester_id="demo-user",
            driver_id="demo-driver",
            pickup_location="Times Square, New York",
            dropoff_location="Central Park, New York",
            requested_at=now - timedelta(hours=1),
            pickup_at=now - timedelta(minutes=55),
            completed_at=now - timedelta(minutes=50),
            fare_amount=Decimal("15.50"),
            commission_rate=0.15,
            status=RideStatus.COMPLETED,
        ),
        CommissionProposal(
            proposal_id="prop_001",
            proposer_id="demo-user",
            new_rate=0.12,
            status=ProposalStatus.PENDING,
            created_at=now - timedelta(days=1),
            vote_count=45,
        ),
        CommissionProposal(
            proposal_id="prop_002",
            proposer_id="demo-driver",
            new_rate=0.18,
            status=ProposalStatus.PENDING,
            created_at=now - timedelta(days=2),
            vote_count=23,
        ),
    ])
    await db.commit()

    logger.info("Seeded demo data")
    return True
