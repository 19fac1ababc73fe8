"""Append-only claim ledger.

Records are immutable once appended; there is no update or delete. Appends
are serialised so concurrent submissions cannot interleave.
"""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from crop_claims.schemas.claims import Claim, ClaimDecision, GroundTruth
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)


class ClaimLedger:
    """In-memory, append-only record of finalized claims."""

    def __init__(self):
        self._claims: List[Claim] = []
        self._lock = asyncio.Lock()

    @staticmethod
    def build_claim(decision: ClaimDecision, ground_truth: GroundTruth) -> Claim:
        """Convert an engine decision into a ledger record."""
        return Claim(
            id=uuid4().hex,
            policy_id=decision.policy_id,
            created_at=datetime.now(timezone.utc),
            disaster_type=decision.assessment.type,
            severity=decision.assessment.severity,
            status=decision.disposition,
            reason=decision.reason,
            computed_payout=decision.computed_payout,
            payout=decision.settlement_amount,
            citation=decision.citation,
            weather_source=ground_truth.weather.source,
            satellite_source=ground_truth.satellite.source,
        )

    async def append(self, claim: Claim) -> Claim:
        """Append a claim record.

        Args:
            claim: Record to append

        Returns:
            The appended record

        Raises:
            ValueError: If a record with the same ID is already in the ledger
        """
        async with self._lock:
            if any(existing.id == claim.id for existing in self._claims):
                raise ValueError(f"Claim {claim.id} already recorded")
            self._claims.append(claim)

        LOGGER.info(
            "Claim recorded",
            extra={
                "claim_id": claim.id,
                "policy_id": claim.policy_id,
                "status": claim.status.value,
                "payout": claim.payout,
            },
        )
        return claim

    async def record(self, decision: ClaimDecision, ground_truth: GroundTruth) -> Claim:
        """Build and append the ledger record for a decision."""
        return await self.append(self.build_claim(decision, ground_truth))

    def get(self, claim_id: str) -> Optional[Claim]:
        for claim in self._claims:
            if claim.id == claim_id:
                return claim
        return None

    def list_claims(self, policy_id: Optional[str] = None) -> List[Claim]:
        """List recorded claims, newest first."""
        claims = [c for c in self._claims if policy_id is None or c.policy_id == policy_id]
        return list(reversed(claims))

    def __len__(self) -> int:
        return len(self._claims)
