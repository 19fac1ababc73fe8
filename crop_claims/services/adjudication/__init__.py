"""Deterministic claim adjudication: payout, citation, verification, disposition."""

from crop_claims.services.adjudication.citations import citation_for
from crop_claims.services.adjudication.disposition import decide_disposition, settlement_for
from crop_claims.services.adjudication.engine import adjudicate, rules_from_settings
from crop_claims.services.adjudication.payout import (
    DEFAULT_RULES,
    PayoutRules,
    calculate_premium,
    clamp_severity,
    compute_payout,
)
from crop_claims.services.adjudication.verification import escalate_fraud_risk, verify_consistency

__all__ = [
    "DEFAULT_RULES",
    "PayoutRules",
    "adjudicate",
    "calculate_premium",
    "citation_for",
    "clamp_severity",
    "compute_payout",
    "decide_disposition",
    "escalate_fraud_risk",
    "rules_from_settings",
    "settlement_for",
    "verify_consistency",
]
