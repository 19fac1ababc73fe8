"""Claim submission workflow.

policy lookup -> ground truth fan-out -> disaster classifier -> adjudication -> ledger.

The classifier is only invoked once both ground truth signals have resolved,
since they are part of its context. A failed classification abandons the
submission without touching the ledger.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from crop_claims.core.exceptions import ClassifierError, ValidationError
from crop_claims.repositories.claim_repository import ClaimLedger
from crop_claims.repositories.policy_repository import PolicyRepository
from crop_claims.schemas.claims import Claim, ClaimDecision, GroundTruth, Locale
from crop_claims.services.adjudication.engine import adjudicate
from crop_claims.services.adjudication.payout import PayoutRules
from crop_claims.services.base_service import BaseService
from crop_claims.services.classification.disaster_classifier import DisasterClassifier
from crop_claims.services.ground_truth.ground_truth_service import GroundTruthService


@dataclass(frozen=True)
class ClaimSubmission:
    """A farmer's damage report for one insured parcel."""

    policy_id: str
    lat: float
    lng: float
    image: bytes
    mime_type: str = "image/jpeg"
    locale: Locale = Locale.EN


@dataclass(frozen=True)
class ClaimOutcome:
    """Recorded claim together with the decision and evidence behind it."""

    claim: Claim
    decision: ClaimDecision
    ground_truth: GroundTruth


class ClaimService(BaseService):
    """Runs one claim submission end to end."""

    def __init__(
        self,
        policy_repository: PolicyRepository,
        ground_truth_service: GroundTruthService,
        classifier: DisasterClassifier,
        ledger: ClaimLedger,
        rules: Optional[PayoutRules] = None,
        escalate_on_inconsistency: bool = True,
        classifier_timeout: float = 60.0,
    ):
        super().__init__()
        self.policy_repository = policy_repository
        self.ground_truth_service = ground_truth_service
        self.classifier = classifier
        self.ledger = ledger
        self.rules = rules
        self.escalate_on_inconsistency = escalate_on_inconsistency
        self.classifier_timeout = classifier_timeout

    async def submit_claim(self, submission: ClaimSubmission) -> ClaimOutcome:
        """Adjudicate and record a claim submission.

        Args:
            submission: Damage report with photo and coordinates

        Returns:
            ClaimOutcome with the ledger record

        Raises:
            ValidationError: If the submission is malformed
            PolicyNotFoundError: If the policy does not exist
            ClassifierError: If the disaster classifier failed
        """
        return await self.execute(submission)

    def validate(self, submission: ClaimSubmission):
        if not submission.image:
            raise ValidationError("Damage photo is empty")
        if not -90 <= submission.lat <= 90 or not -180 <= submission.lng <= 180:
            raise ValidationError(f"Invalid coordinates: ({submission.lat}, {submission.lng})")

    async def run(self, submission: ClaimSubmission) -> ClaimOutcome:
        policy = self.policy_repository.get_policy(submission.policy_id)

        self.logger.info(
            "Claim submission received",
            extra={"policy_id": policy.id, "lat": submission.lat, "lng": submission.lng},
        )

        ground_truth = await self.ground_truth_service.fetch(submission.lat, submission.lng)

        try:
            assessment = await asyncio.wait_for(
                self.classifier.assess(
                    image=submission.image,
                    lat=submission.lat,
                    lng=submission.lng,
                    expected_crop=policy.crop_type,
                    ground_truth=ground_truth,
                    locale=submission.locale,
                    mime_type=submission.mime_type,
                ),
                timeout=self.classifier_timeout,
            )
        except asyncio.TimeoutError as e:
            self.logger.error(
                f"Claim abandoned: disaster classification exceeded {self.classifier_timeout}s",
                extra={"policy_id": policy.id},
            )
            raise ClassifierError("Disaster classification timed out", original_error=e)
        except Exception as e:
            self.logger.error(
                f"Claim abandoned: disaster classifier raised {e}",
                exc_info=True,
                extra={"policy_id": policy.id},
            )
            raise ClassifierError(f"Disaster classification failed: {e}", original_error=e)

        if assessment.analysis_failed:
            self.logger.error("Claim abandoned: disaster classification failed", extra={"policy_id": policy.id})
            raise ClassifierError(assessment.description)

        decision = adjudicate(
            assessment,
            policy,
            ground_truth,
            rules=self.rules,
            escalate_on_inconsistency=self.escalate_on_inconsistency,
        )
        claim = await self.ledger.record(decision, ground_truth)

        return ClaimOutcome(claim=claim, decision=decision, ground_truth=ground_truth)
