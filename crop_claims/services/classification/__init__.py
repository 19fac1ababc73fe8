from crop_claims.services.classification.disaster_classifier import (
    DisasterClassifier,
    FixedResponseClassifier,
    LiveClassifier,
    failed_assessment,
    parse_assessment,
)

__all__ = [
    "DisasterClassifier",
    "FixedResponseClassifier",
    "LiveClassifier",
    "failed_assessment",
    "parse_assessment",
]
