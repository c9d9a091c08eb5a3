from sqlalchemy.ext.asyncio import AsyncSession
import logging
from typing import Dict, Any

from ..config import settings
from ..errors import ValidationError
from ..models.proposal import ProposalStatus
from ..schemas.realtime import RealtimeMessage
from ..utils.clock import epoch_ms, simulate_latency
from .governance_service import GovernanceService
from .maps_service import MOCK_DRIVERS, estimate_travel_minutes
from .ride_service import RideService

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = ["rides", "drivers", "governance"]


class RealtimeService:
    """Polling stand-in for a websocket push channel"""

    def __init__(self):
        self.ride_service = RideService()
        self.governance_service = GovernanceService()

    async def poll(self, action: str, user_id: str, db: AsyncSession) -> Dict[str, Any]:
        if action == "ride-updates":
            rides = await self.ride_service.get_open_rides_for_user(user_id, db)
            payload = {
                "type": "ride_update",
                "user_id": user_id,
                "rides": [
                    {
                        "ride_id": ride.ride_id,
                        "status": ride.status.value,
                        "driver_id": ride.driver_id,
                    }
                    for ride in rides
                ],
            }
        elif action == "driver-location":
            payload = {
                "type": "driver_location",
                "user_id": user_id,
                "drivers": [
                    {
                        "driver_id": driver["id"],
                        "location": {"lat": driver["lat"], "lng": driver["lng"]},
                        "distance": driver["distance"],
                        "eta": max(1, estimate_travel_minutes(driver["distance"])),
                    }
                    for driver in MOCK_DRIVERS
                ],
            }
        elif action == "governance-updates":
            proposals = await self.governance_service.list_proposals(
                db, status=ProposalStatus.PENDING
            )
            payload = {
                "type": "governance_update",
                "user_id": user_id,
                "proposals": [
                    {
                        "proposal_id": proposal.proposal_id,
                        "vote_count": proposal.vote_count,
                        "status": proposal.status.value,
                    }
                    for proposal in proposals
                ],
            }
        else:
            raise ValidationError("Invalid action")

        await simulate_latency(settings.realtime_delay)
        return payload

    def handle_message(self, message: RealtimeMessage) -> Dict[str, Any]:
        data = message.data or {}

        if message.action == "subscribe":
            response = {
                "type": "subscription_confirmed",
                "user_id": message.user_id,
                "channels": data.get("channels") or DEFAULT_CHANNELS,
            }
        elif message.action == "unsubscribe":
            response = {
                "type": "unsubscription_confirmed",
                "user_id": message.user_id,
                "channels": data.get("channels") or [],
            }
        elif message.action == "ping":
            response = {"type": "pong", "user_id": message.user_id}
        else:
            raise ValidationError("Invalid action")

        response["timestamp"] = epoch_ms()
        logger.debug(f"Realtime {message.action} from {message.user_id}")
        return response
