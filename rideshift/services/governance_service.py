from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List
import logging

from ..models.proposal import CommissionProposal, ProposalStatus, VoteAction
from ..schemas.proposal import ProposalCreateRequest, ProposalUpdateRequest
from ..errors import RideShiftError, ValidationError, InvalidStateError, NotFoundError
from ..utils.clock import utcnow, generate_proposal_id
from .pricing import check_commission_rate

logger = logging.getLogger(__name__)


class GovernanceService:
    """Commission-rate proposals and their net vote tally.

    Nothing here moves a proposal out of ``pending``; approval and rejection
    are only reachable through an external process.
    """

    async def list_proposals(
        self,
        db: AsyncSession,
        status: Optional[ProposalStatus] = None,
        proposer_id: Optional[str] = None,
    ) -> List[CommissionProposal]:
        stmt = select(CommissionProposal)
        if status:
            stmt = stmt.where(CommissionProposal.status == status)
        if proposer_id:
            stmt = stmt.where(CommissionProposal.proposer_id == proposer_id)

        result = await db.execute(stmt.order_by(CommissionProposal.pk))
        return list(result.scalars().all())

    async def get_proposal(
        self, proposal_id: str, db: AsyncSession, for_update: bool = False
    ) -> Optional[CommissionProposal]:
        stmt = select(CommissionProposal).where(CommissionProposal.proposal_id == proposal_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_proposal(
        self, proposal_data: ProposalCreateRequest, db: AsyncSession
    ) -> CommissionProposal:
        new_rate = check_commission_rate(proposal_data.new_rate)

        try:
            proposal = CommissionProposal(
                proposal_id=generate_proposal_id(),
                proposer_id=proposal_data.proposer_id,
                new_rate=new_rate,
                status=ProposalStatus.PENDING,
                vote_count=0,
                created_at=utcnow(),
            )
            db.add(proposal)
            await db.commit()

            logger.info(f"Created proposal {proposal.proposal_id} for rate {new_rate}")
            return proposal

        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create proposal: {e}")
            raise

    async def update_proposal(
        self, update_data: ProposalUpdateRequest, db: AsyncSession
    ) -> CommissionProposal:
        try:
            proposal = await self.get_proposal(update_data.proposal_id, db, for_update=True)
            if not proposal:
                raise NotFoundError("Proposal not found")

            if "new_rate" in update_data.model_fields_set:
                if update_data.new_rate is None:
                    raise ValidationError("new_rate cannot be null")
                proposal.new_rate = check_commission_rate(update_data.new_rate)

            await db.commit()

            logger.info(f"Updated proposal {proposal.proposal_id}")
            return proposal

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to update proposal: {e}")
            raise

    async def vote(
        self, proposal_id: str, voter_id: str, action: str, db: AsyncSession
    ) -> CommissionProposal:
        """Add one to the tally for support, subtract one for oppose"""
        try:
            proposal = await self.get_proposal(proposal_id, db, for_update=True)
            if not proposal:
                raise NotFoundError("Proposal not found")

            if proposal.status != ProposalStatus.PENDING:
                raise InvalidStateError("Can only vote on pending proposals")

            try:
                vote_action = VoteAction(action)
            except ValueError:
                raise ValidationError('Invalid action. Use "support" or "oppose"')

            if vote_action == VoteAction.SUPPORT:
                proposal.vote_count += 1
            else:
                proposal.vote_count -= 1

            await db.commit()

            logger.info(
                f"{voter_id} voted {vote_action.value} on {proposal_id}, tally {proposal.vote_count}"
            )
            return proposal

        except RideShiftError:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to record vote on {proposal_id}: {e}")
            raise
