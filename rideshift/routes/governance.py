from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from ..database import get_db
from ..errors import RideShiftError
from ..models.proposal import ProposalStatus
from ..schemas.proposal import (
    ProposalCreateRequest,
    ProposalUpdateRequest,
    VoteRequest,
    ProposalResponse,
)
from ..services.governance_service import GovernanceService
from ..services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/governance", tags=["governance"])
governance_service = GovernanceService()
event_service = EventService()


@router.get("", response_model=List[ProposalResponse])
async def list_proposals(
    proposal_status: Optional[ProposalStatus] = Query(None, alias="status"),
    proposer_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    try:
        proposals = await governance_service.list_proposals(
            db, status=proposal_status, proposer_id=proposer_id
        )
        return [ProposalResponse.model_validate(proposal) for proposal in proposals]

    except Exception as e:
        logger.error(f"Failed to fetch proposals: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.post("", response_model=ProposalResponse, status_code=status.HTTP_201_CREATED)
async def create_proposal(
    proposal_data: ProposalCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Propose a new platform commission rate"""
    try:
        proposal = await governance_service.create_proposal(proposal_data, db)
        await event_service.governance_event("proposal_created", proposal)
        return ProposalResponse.model_validate(proposal)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to create proposal: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.put("", response_model=ProposalResponse)
async def update_proposal(
    update_data: ProposalUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        proposal = await governance_service.update_proposal(update_data, db)
        return ProposalResponse.model_validate(proposal)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to update proposal: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.patch("", response_model=ProposalResponse)
async def vote_on_proposal(
    vote_data: VoteRequest,
    db: AsyncSession = Depends(get_db),
):
    """Support or oppose a pending proposal"""
    try:
        proposal = await governance_service.vote(
            vote_data.proposal_id, vote_data.voter_id, vote_data.action, db
        )
        await event_service.governance_event(
            "proposal_voted", proposal, voter_id=vote_data.voter_id, vote=vote_data.action
        )
        return ProposalResponse.model_validate(proposal)

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Failed to vote on proposal: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
