"""PMFBY payout and premium calculation.

Reference: PMFBY Operational Guidelines.
- Clause 10.1: farmer share of premium (Kharif 2%, Rabi 1.5%)
- Clause 15.1.3: claim = shortfall percentage x sum insured
- Clause 15.3: localized calamity, individual farm assessment
- Clause 15.5: on-account payment for mid-season adversity
"""

import math
from dataclasses import dataclass
from typing import Union

from crop_claims.schemas.claims import DisasterType, Policy, Season

# Clause 15.3 localized calamities (hailstorm, inundation, natural fire)
CATASTROPHIC_TYPES = frozenset({DisasterType.FIRE, DisasterType.FLOOD, DisasterType.STORM})

PREMIUM_RATES = {
    Season.KHARIF: (2, 100),
    Season.RABI: (15, 1000),
}


@dataclass(frozen=True)
class PayoutRules:
    """Tunable thresholds of the indemnity schedule.

    Attributes:
        deductible_threshold: Severity below which no loss is indemnified
        catastrophic_threshold: Severity above which a localized calamity is a total loss
        drought_on_account_cap_enabled: Pay Drought claims as a capped on-account payment
        drought_on_account_cap_ratio: Fraction of sum insured payable on account
    """

    deductible_threshold: int = 20
    catastrophic_threshold: int = 80
    drought_on_account_cap_enabled: bool = False
    drought_on_account_cap_ratio: float = 0.25


DEFAULT_RULES = PayoutRules()


def clamp_severity(severity: Union[int, float]) -> int:
    """Clamp a severity reading into the 0-100 integer range (NaN reads as 0)."""
    if math.isnan(severity):
        return 0
    return int(max(0, min(100, severity)))


def compute_payout(
    severity: Union[int, float],
    policy: Policy,
    disaster_type: Union[DisasterType, str],
    rules: PayoutRules = None,
) -> int:
    """Compute the indemnity for an assessed yield loss.

    Args:
        severity: Assessed yield loss percentage; clamped to 0-100
        policy: Policy providing the sum insured ceiling
        disaster_type: Disaster category; unknown values price as no disaster type
        rules: Payout thresholds and switches (defaults to the standard schedule)

    Returns:
        Whole-number payout in [0, policy.sum_insured]
    """
    rules = rules or DEFAULT_RULES
    severity = clamp_severity(severity)
    disaster = DisasterType.parse(disaster_type) or DisasterType.NONE
    sum_insured = policy.sum_insured

    # Deductible: minimal loss is not covered
    if severity < rules.deductible_threshold:
        return 0

    payout = sum_insured * severity // 100

    if disaster in CATASTROPHIC_TYPES and severity > rules.catastrophic_threshold:
        payout = sum_insured

    # On-account payment pending crop cutting experiment data
    if disaster == DisasterType.DROUGHT and rules.drought_on_account_cap_enabled:
        payout = min(payout, int(sum_insured * rules.drought_on_account_cap_ratio))

    return max(0, min(payout, sum_insured))


def calculate_premium(sum_insured: int, season: Union[Season, str]) -> int:
    """Farmer share of the premium under Clause 10.1.

    Commercial and horticultural crops (5%) are not covered.
    """
    numerator, denominator = PREMIUM_RATES[Season(season)]
    return sum_insured * numerator // denominator
