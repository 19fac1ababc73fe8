"""Regulatory clause citations attached to every decision."""

from typing import Union

from crop_claims.schemas.claims import DisasterType

LOCALIZED_CALAMITY = "Clause 15.3: Localized Calamities (Inundation/Fire)"
MID_SEASON_ADVERSITY = "Clause 15.5: Mid-Season Adversity (On-Account Payment)"
STANDING_CROP_LOSS = "Clause 8.1.1: Yield Losses (Standing Crop)"
GENERAL_PROVISIONS = "PMFBY General Provisions"

CLAUSE_CITATIONS = {
    DisasterType.FLOOD: LOCALIZED_CALAMITY,
    DisasterType.STORM: LOCALIZED_CALAMITY,
    DisasterType.FIRE: LOCALIZED_CALAMITY,
    DisasterType.DROUGHT: MID_SEASON_ADVERSITY,
    DisasterType.PEST: STANDING_CROP_LOSS,
    DisasterType.DISEASE: STANDING_CROP_LOSS,
    DisasterType.NONE: GENERAL_PROVISIONS,
}


def citation_for(disaster_type: Union[DisasterType, str, None]) -> str:
    """Map a disaster type to its PMFBY clause, falling back to the general provisions."""
    disaster = DisasterType.parse(disaster_type)
    return CLAUSE_CITATIONS.get(disaster, GENERAL_PROVISIONS)
