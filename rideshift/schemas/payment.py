from pydantic import BaseModel, Field


class PaymentRequest(BaseModel):
    ride_id: str = Field(..., min_length=1)
    amount: float
    from_address: str = Field(..., min_length=1)
    to_address: str = Field(..., min_length=1)


class GasEstimateRequest(BaseModel):
    amount: float
    to_address: str = Field(..., min_length=1)


class PaymentResponse(BaseModel):
    ride_id: str
    amount: float
    from_address: str
    to_address: str
    transaction_hash: str
    status: str
    timestamp: int
    gas_used: str
    gas_price: str


class PaymentStatusResponse(BaseModel):
    transaction_hash: str
    status: str
    block_number: int
    confirmations: int
    timestamp: int


class GasEstimateResponse(BaseModel):
    gas_limit: str
    gas_price: str
    max_fee_per_gas: str
    max_priority_fee_per_gas: str
    estimated_cost: str
    estimated_cost_usd: str
