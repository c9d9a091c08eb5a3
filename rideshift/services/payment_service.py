import logging
import random
from typing import Dict, Any

from ..config import settings
from ..errors import ValidationError
from ..schemas.payment import PaymentRequest, GasEstimateRequest
from ..utils.clock import epoch_ms, random_hex, simulate_latency

logger = logging.getLogger(__name__)

# Plain ETH transfer, 20 gwei
TRANSFER_GAS_LIMIT = 21000
GAS_PRICE_WEI = 20_000_000_000
MAX_FEE_PER_GAS_WEI = 40_000_000_000
MAX_PRIORITY_FEE_WEI = 2_000_000_000
ESTIMATED_COST_USD = "0.42"

BASE_BLOCK_NUMBER = 18_500_000


def mock_transaction_hash() -> str:
    return f"0x{random_hex(64)}"


class PaymentService:
    """Simulated wallet-to-wallet payment rail"""

    async def process_payment(self, payment: PaymentRequest) -> Dict[str, Any]:
        if payment.amount <= 0:
            raise ValidationError("Amount must be greater than 0")

        await simulate_latency(settings.payment_delay)

        result = {
            "ride_id": payment.ride_id,
            "amount": payment.amount,
            "from_address": payment.from_address,
            "to_address": payment.to_address,
            "transaction_hash": mock_transaction_hash(),
            "status": "completed",
            "timestamp": epoch_ms(),
            "gas_used": str(TRANSFER_GAS_LIMIT),
            "gas_price": str(GAS_PRICE_WEI),
        }
        logger.info(f"Processed payment of {payment.amount} for ride {payment.ride_id}")
        return result

    async def get_payment_status(self, transaction_hash: str) -> Dict[str, Any]:
        await simulate_latency(settings.payment_status_delay)

        return {
            "transaction_hash": transaction_hash,
            "status": "confirmed",
            "block_number": BASE_BLOCK_NUMBER + random.randrange(1000),
            "confirmations": random.randint(1, 12),
            "timestamp": epoch_ms(),
        }

    def estimate_gas(self, request: GasEstimateRequest) -> Dict[str, str]:
        if request.amount <= 0:
            raise ValidationError("Amount must be greater than 0")

        return {
            "gas_limit": str(TRANSFER_GAS_LIMIT),
            "gas_price": str(GAS_PRICE_WEI),
            "max_fee_per_gas": str(MAX_FEE_PER_GAS_WEI),
            "max_priority_fee_per_gas": str(MAX_PRIORITY_FEE_WEI),
            "estimated_cost": str(TRANSFER_GAS_LIMIT * GAS_PRICE_WEI),
            "estimated_cost_usd": ESTIMATED_COST_USD,
        }
