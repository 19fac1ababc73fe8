from typing import Optional

from pydantic import BaseModel, Field

from crop_claims.schemas.claims import Claim, ClaimDecision, GroundTruth, Policy


class HealthCheckResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service status
        version: Application version
        service: Service name
    """

    status: str = Field(
        default="healthy",
        description="Service health status",
        examples=["healthy", "unhealthy"],
    )
    version: str = Field(
        ...,
        description="Application version",
        examples=["0.1.0"],
    )
    service: str = Field(
        ...,
        description="Service name",
        examples=["Crop Claims - PMFBY claim triage service"],
    )


class ErrorResponse(BaseModel):
    """Error payload returned with non-2xx responses."""

    detail: str = Field(..., description="Human readable error message")


class PolicyResponse(BaseModel):
    """Policy with its premium recomputed under Clause 10.1."""

    policy: Policy
    expected_premium: int = Field(..., description="Farmer share of premium for the season")


class ClaimSubmissionResponse(BaseModel):
    """Response model for a processed claim submission.

    Attributes:
        claim: Ledger record created for the submission
        decision: Full adjudication decision, including the classifier assessment
        ground_truth: Weather and satellite signals used as evidence
        message: Short farmer-facing summary
    """

    claim: Claim
    decision: ClaimDecision
    ground_truth: GroundTruth
    message: Optional[str] = Field(default=None, description="Farmer-facing summary")
