from sqlalchemy import Column, Integer, String, Float, DateTime, Enum
import enum
from ..database import Base
from ..utils.clock import utcnow


class ProposalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VoteAction(str, enum.Enum):
    SUPPORT = "support"
    OPPOSE = "oppose"


class CommissionProposal(Base):
    __tablename__ = "commission_proposals"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    proposal_id = Column(String(64), unique=True, nullable=False, index=True)
    proposer_id = Column(String(128), nullable=False, index=True)

    new_rate = Column(Float, nullable=False)
    status = Column(Enum(ProposalStatus), nullable=False, default=ProposalStatus.PENDING)

    # Net tally: support adds one, oppose subtracts one
    vote_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<CommissionProposal(proposal_id={self.proposal_id}, rate={self.new_rate}, votes={self.vote_count})>"
