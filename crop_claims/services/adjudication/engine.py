"""Claim adjudication engine.

Turns an untrusted classifier verdict, the claim's ground truth and the
matched policy into a final ClaimDecision. Pure and synchronous; the caller
is responsible for persisting the result.
"""

from typing import Optional

from crop_claims.core.exceptions import ClassifierError, PolicyNotFoundError
from crop_claims.schemas.claims import (
    ClaimDecision,
    DisasterAssessment,
    Disposition,
    GroundTruth,
    Policy,
)
from crop_claims.services.adjudication.citations import citation_for
from crop_claims.services.adjudication.disposition import decide_disposition, settlement_for
from crop_claims.services.adjudication.payout import PayoutRules, compute_payout
from crop_claims.services.adjudication.verification import escalate_fraud_risk, verify_consistency
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

# Outcomes that never carry an indemnity, even for audit
_UNPRICED = (Disposition.REJECTED, Disposition.DISMISSED)


def rules_from_settings(app_settings) -> PayoutRules:
    """Build payout rules from application settings."""
    return PayoutRules(
        drought_on_account_cap_enabled=app_settings.drought_on_account_cap_enabled,
        drought_on_account_cap_ratio=app_settings.drought_on_account_cap_ratio,
    )


def adjudicate(
    assessment: DisasterAssessment,
    policy: Optional[Policy],
    ground_truth: GroundTruth,
    rules: Optional[PayoutRules] = None,
    escalate_on_inconsistency: bool = True,
) -> ClaimDecision:
    """Adjudicate one claim submission.

    Args:
        assessment: Sanitised classifier output
        policy: Resolved policy for the claimed parcel
        ground_truth: Weather and satellite signals fetched for the claim
        rules: Payout rules (defaults to the standard schedule)
        escalate_on_inconsistency: Let ground truth inconsistencies raise the fraud risk

    Returns:
        ClaimDecision with computed payout, settlement amount and citation

    Raises:
        PolicyNotFoundError: If no policy was resolved for the claim
        ClassifierError: If the assessment is the neutral failure placeholder
    """
    if policy is None:
        raise PolicyNotFoundError(message="Cannot adjudicate a claim without a resolved policy")
    if assessment.analysis_failed:
        raise ClassifierError("Cannot adjudicate a failed disaster assessment")

    report = verify_consistency(assessment, ground_truth)
    effective_risk = assessment.fraud_risk
    if escalate_on_inconsistency:
        effective_risk = escalate_fraud_risk(assessment.fraud_risk, report)

    disposition, reason = decide_disposition(assessment, effective_risk)

    computed_payout = 0
    if disposition not in _UNPRICED:
        computed_payout = compute_payout(assessment.severity, policy, assessment.type, rules)

    decision = ClaimDecision(
        policy_id=policy.id,
        disposition=disposition,
        reason=reason,
        computed_payout=computed_payout,
        settlement_amount=settlement_for(disposition, computed_payout),
        citation=citation_for(assessment.type),
        reported_fraud_risk=assessment.fraud_risk,
        effective_fraud_risk=effective_risk,
        verification=report,
        assessment=assessment,
    )

    LOGGER.info(
        f"Claim adjudicated: {decision.disposition.value}",
        extra={
            "policy_id": policy.id,
            "disaster_type": assessment.type.value,
            "severity": assessment.severity,
            "reason": reason.value,
            "computed_payout": computed_payout,
            "settlement_amount": decision.settlement_amount,
            "effective_fraud_risk": effective_risk.value,
        },
    )
    return decision
