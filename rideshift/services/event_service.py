import logging
from typing import Dict, Any
import uuid

from ..models.ride import Ride
from ..models.driver import DriverProfile
from ..models.proposal import CommissionProposal
from ..utils.clock import utcnow
from ..utils.redis_client import redis_client

logger = logging.getLogger(__name__)


class EventService:
    """Publish lifecycle events via Redis"""

    # Event channels
    RIDE_EVENTS_CHANNEL = "ride-events"
    DRIVER_EVENTS_CHANNEL = "driver-events"
    GOVERNANCE_EVENTS_CHANNEL = "governance-events"
    PAYMENT_EVENTS_CHANNEL = "payment-events"

    def _build_event(self, event_type: str, event_data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "event_id": str(uuid.uuid4()),
            "event_type": event_type,
            "timestamp": utcnow().isoformat(),
            "service": "rideshift",
            "data": event_data,
        }

    async def publish(self, channel: str, event_type: str, event_data: Dict[str, Any]):
        """Publish an event; failures are logged, never raised to the caller"""
        try:
            await redis_client.publish_event(channel, self._build_event(event_type, event_data))
        except Exception as e:
            logger.error(f"Failed to publish {event_type} on {channel}: {e}")

    async def ride_event(self, event_type: str, ride: Ride):
        await self.publish(self.RIDE_EVENTS_CHANNEL, event_type, {
            "ride_id": ride.ride_id,
            "requester_id": ride.requester_id,
            "driver_id": ride.driver_id,
            "status": ride.status.value,
            "fare_amount": float(ride.fare_amount),
        })

    async def driver_event(self, event_type: str, profile: DriverProfile):
        await self.publish(self.DRIVER_EVENTS_CHANNEL, event_type, {
            "user_id": profile.user_id,
            "verification_status": profile.verification_status.value,
            "active_status": profile.active_status,
        })

    async def governance_event(self, event_type: str, proposal: CommissionProposal, **extra):
        await self.publish(self.GOVERNANCE_EVENTS_CHANNEL, event_type, {
            "proposal_id": proposal.proposal_id,
            "new_rate": proposal.new_rate,
            "vote_count": proposal.vote_count,
            "status": proposal.status.value,
            **extra,
        })

    async def payment_event(self, event_type: str, payment: Dict[str, Any]):
        await self.publish(self.PAYMENT_EVENTS_CHANNEL, event_type, payment)
