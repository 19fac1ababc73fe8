"""Single-shot claim disposition.

Submitted -> Rejected(CropMismatch) | Dismissed(NoDisaster) | UnderReview(FraudHigh) | Approved.
Every outcome is terminal; promotion out of UnderReview happens in manual review.
"""

from typing import Tuple

from crop_claims.schemas.claims import (
    DisasterAssessment,
    DisasterType,
    Disposition,
    DispositionReason,
    FraudRisk,
)


def decide_disposition(
    assessment: DisasterAssessment,
    fraud_risk: FraudRisk,
) -> Tuple[Disposition, DispositionReason]:
    """Route a claim, with crop mismatch dominating every other signal.

    Args:
        assessment: Sanitised classifier output
        fraud_risk: Effective fraud risk after ground truth escalation

    Returns:
        Tuple of (disposition, reason)
    """
    if not assessment.is_crop_match:
        return Disposition.REJECTED, DispositionReason.CROP_MISMATCH
    if assessment.type == DisasterType.NONE:
        return Disposition.DISMISSED, DispositionReason.NO_DISASTER
    if fraud_risk == FraudRisk.HIGH:
        return Disposition.UNDER_REVIEW, DispositionReason.FRAUD_HIGH
    return Disposition.APPROVED, DispositionReason.ELIGIBLE


def settlement_for(disposition: Disposition, computed_payout: int) -> int:
    """Amount released for payment; only approved claims settle."""
    if disposition == Disposition.APPROVED:
        return computed_payout
    return 0
