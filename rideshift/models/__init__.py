from .ride import Ride, RideStatus, RideAction
from .driver import DriverProfile, VerificationStatus, DriverAction
from .proposal import CommissionProposal, ProposalStatus, VoteAction
from .user import User, UserRole

__all__ = [
    "Ride",
    "RideStatus",
    "RideAction",
    "DriverProfile",
    "VerificationStatus",
    "DriverAction",
    "CommissionProposal",
    "ProposalStatus",
    "VoteAction",
    "User",
    "UserRole",
]
