import logging
import random
from typing import Dict, Any, Union

from ..config import settings
from ..schemas.nft import MintRequest, TransferRequest
from ..utils.clock import epoch_ms, random_hex, simulate_latency, utcnow
from .payment_service import GAS_PRICE_WEI, mock_transaction_hash

logger = logging.getLogger(__name__)

MINT_GAS_USED = 150000
TRANSFER_GAS_USED = 65000
IMAGE_BASE_URL = "https://via.placeholder.com/400x400/82e6b3/ffffff"


class NFTService:
    """Simulated driver-credential NFT contract"""

    def build_metadata(self, request: MintRequest) -> Dict[str, Any]:
        return {
            "name": f"RideShift Driver - {request.user_id}",
            "description": f"Verified RideShift driver NFT for {request.user_id}",
            "image": f"{IMAGE_BASE_URL}?text=Driver+NFT",
            "attributes": [
                {"trait_type": "Driver Status", "value": "Verified"},
                {"trait_type": "Vehicle", "value": request.driver_profile.vehicle_details},
                {"trait_type": "License", "value": request.driver_profile.license_number},
                {"trait_type": "Verification Date", "value": utcnow().date().isoformat()},
            ],
        }

    async def mint(self, request: MintRequest) -> Dict[str, Any]:
        await simulate_latency(settings.nft_mint_delay)

        token_id = random.randrange(1_000_000)
        logger.info(f"Minted driver NFT {token_id} for {request.user_id}")
        return {
            "user_id": request.user_id,
            "token_id": token_id,
            "transaction_hash": mock_transaction_hash(),
            "contract_address": settings.nft_contract_address,
            "metadata": self.build_metadata(request),
            "status": "minted",
            "timestamp": epoch_ms(),
            "gas_used": str(MINT_GAS_USED),
            "gas_price": str(GAS_PRICE_WEI),
        }

    def get_metadata(self, token_id: str) -> Dict[str, Any]:
        return {
            "token_id": token_id,
            "name": f"RideShift Driver #{token_id}",
            "description": "Verified RideShift driver NFT",
            "image": f"{IMAGE_BASE_URL}?text=Driver+NFT+{token_id}",
            "attributes": [
                {"trait_type": "Driver Status", "value": "Verified"},
                {"trait_type": "Rides Completed", "value": random.randint(1, 100)},
                {"trait_type": "Rating", "value": f"{random.uniform(3, 5):.1f}"},
            ],
            "owner": f"0x{random_hex(40)}",
            "contract_address": settings.nft_contract_address,
        }

    async def transfer(self, request: TransferRequest) -> Dict[str, Union[str, int]]:
        await simulate_latency(settings.nft_transfer_delay)

        logger.info(f"Transferred NFT {request.token_id} to {request.to_address}")
        return {
            "token_id": request.token_id,
            "from_address": request.from_address,
            "to_address": request.to_address,
            "transaction_hash": mock_transaction_hash(),
            "status": "transferred",
            "timestamp": epoch_ms(),
            "gas_used": str(TRANSFER_GAS_USED),
            "gas_price": str(GAS_PRICE_WEI),
        }
