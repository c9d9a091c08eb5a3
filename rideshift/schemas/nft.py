from pydantic import BaseModel, Field
from typing import Any, List, Union


class DriverCredentials(BaseModel):
    vehicle_details: str = Field(..., min_length=1)
    license_number: str = Field(..., min_length=1)


class MintRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    driver_profile: DriverCredentials


class TransferRequest(BaseModel):
    token_id: Union[int, str]
    from_address: str = Field(..., min_length=1)
    to_address: str = Field(..., min_length=1)


class NFTAttribute(BaseModel):
    trait_type: str
    value: Any


class NFTMetadata(BaseModel):
    name: str
    description: str
    image: str
    attributes: List[NFTAttribute]


class MintResponse(BaseModel):
    user_id: str
    token_id: int
    transaction_hash: str
    contract_address: str
    metadata: NFTMetadata
    status: str
    timestamp: int
    gas_used: str
    gas_price: str


class TokenMetadataResponse(NFTMetadata):
    token_id: str
    owner: str
    contract_address: str


class TransferResponse(BaseModel):
    token_id: Union[int, str]
    from_address: str
    to_address: str
    transaction_hash: str
    status: str
    timestamp: int
    gas_used: str
    gas_price: str
