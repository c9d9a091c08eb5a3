from pydantic import BaseModel, Field, StrictFloat, StrictInt
from typing import Optional, Union
from datetime import datetime
from ..models.proposal import ProposalStatus

# Rates must arrive as JSON numbers, not numeric strings
Rate = Union[StrictInt, StrictFloat]


class ProposalCreateRequest(BaseModel):
    proposer_id: str = Field(..., min_length=1, max_length=128)
    new_rate: Rate


class ProposalUpdateRequest(BaseModel):
    proposal_id: str = Field(..., min_length=1)
    new_rate: Optional[Rate] = None

    class Config:
        extra = "forbid"


class VoteRequest(BaseModel):
    proposal_id: str = Field(..., min_length=1)
    voter_id: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)


class ProposalResponse(BaseModel):
    proposal_id: str
    proposer_id: str
    new_rate: float
    status: ProposalStatus
    created_at: datetime
    vote_count: int

    class Config:
        from_attributes = True
