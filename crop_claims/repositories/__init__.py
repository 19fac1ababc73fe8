"""Repository layer modules."""

from crop_claims.repositories.claim_repository import ClaimLedger
from crop_claims.repositories.policy_repository import PolicyRepository

__all__ = [
    "ClaimLedger",
    "PolicyRepository",
]
