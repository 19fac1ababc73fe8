"""Repository for insurance policy lookups.

Policies are issued outside this service and are read-only here. The
default set mirrors the parcels linked in the land records registry for the
demo farmer.
"""

from typing import Dict, Iterable, List, Optional

from crop_claims.core.exceptions import PolicyNotFoundError
from crop_claims.schemas.claims import GovtDbStatus, Policy, Season
from crop_claims.services.adjudication.payout import calculate_premium
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)


def _seed_policy(
    policy_id: str,
    land_id: str,
    crop_type: str,
    season: Season,
    acres: float,
    sum_insured: int,
    implementing_agency: str,
    lat: float,
    lng: float,
) -> Policy:
    return Policy(
        id=policy_id,
        farmer_name="Ramesh Kumar",
        land_id=land_id,
        crop_type=crop_type,
        season=season,
        acres=acres,
        sum_insured=sum_insured,
        premium_paid=calculate_premium(sum_insured, season),
        implementing_agency=implementing_agency,
        location="Mandya, Karnataka",
        lat=lat,
        lng=lng,
        govt_db_status=GovtDbStatus.LINKED,
    )


DEFAULT_POLICIES = (
    _seed_policy("pol_01", "SVY-102/4", "Paddy (Rice)", Season.KHARIF, 2.5, 250_000, "AIC of India", 12.532981, 76.932119),
    _seed_policy("pol_02", "SVY-104/2", "Cotton", Season.KHARIF, 5.0, 500_000, "HDFC Ergo", 12.533500, 76.931500),
    _seed_policy("pol_03", "SVY-108/A", "Wheat", Season.RABI, 2.0, 150_000, "AIC of India", 12.531500, 76.933000),
)


class PolicyRepository:
    """Read-only, in-memory policy store."""

    def __init__(self, policies: Optional[Iterable[Policy]] = None):
        """Initialize repository.

        Args:
            policies: Policies to serve (defaults to DEFAULT_POLICIES)
        """
        source = DEFAULT_POLICIES if policies is None else policies
        self._policies: Dict[str, Policy] = {policy.id: policy for policy in source}

    def get_policy(self, policy_id: str) -> Policy:
        """Get policy by ID.

        Args:
            policy_id: Policy identifier

        Returns:
            Policy instance

        Raises:
            PolicyNotFoundError: If no policy has this ID
        """
        policy = self._policies.get(policy_id)
        if policy is None:
            LOGGER.warning("Policy lookup failed", extra={"policy_id": policy_id})
            raise PolicyNotFoundError(policy_id)
        return policy

    def list_policies(self, farmer_name: Optional[str] = None) -> List[Policy]:
        """List policies, optionally only those of one farmer."""
        policies = list(self._policies.values())
        if farmer_name:
            policies = [p for p in policies if p.farmer_name.lower() == farmer_name.lower()]
        return policies
