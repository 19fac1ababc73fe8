"""Claim submission and ledger API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from crop_claims.core.exceptions import ClassifierError, PolicyNotFoundError, ValidationError
from crop_claims.dependencies import get_claim_ledger, get_claim_service
from crop_claims.models.request.claims import ClaimSubmissionRequest
from crop_claims.models.response.response import ClaimSubmissionResponse, ErrorResponse
from crop_claims.repositories.claim_repository import ClaimLedger
from crop_claims.schemas.claims import Claim, ClaimDecision, Disposition
from crop_claims.services.claim_service import ClaimService, ClaimSubmission
from crop_claims.services.classification.disaster_classifier import FAILURE_MESSAGES
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

OUTCOME_MESSAGES = {
    Disposition.APPROVED: "Claim approved. Payout of ₹{amount:,} will be credited to the linked bank account.",
    Disposition.UNDER_REVIEW: "Claim flagged for manual verification. Payout is on hold until review.",
    Disposition.REJECTED: "Claim rejected: the photographed crop does not match the insured crop.",
    Disposition.DISMISSED: "No crop damage detected. The report has been recorded for information.",
}


def _outcome_message(decision: ClaimDecision) -> str:
    return OUTCOME_MESSAGES[decision.disposition].format(amount=decision.settlement_amount)


@router.post(
    "",
    response_model=ClaimSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid submission", "model": ErrorResponse},
        404: {"description": "Policy not found", "model": ErrorResponse},
        502: {"description": "Damage assessment failed, resubmit", "model": ErrorResponse},
        503: {"description": "Damage assessment not configured", "model": ErrorResponse},
    },
    summary="Submit a crop damage claim",
    description="Fetch weather and satellite ground truth, assess the photo, compute the PMFBY payout and record the claim.",
    operation_id="submit_claim",
)
async def submit_claim(
    request: ClaimSubmissionRequest,
    claim_service: Annotated[ClaimService, Depends(get_claim_service)],
) -> ClaimSubmissionResponse:
    """Adjudicate and record a damage report.

    Args:
        request: Damage report with photo and coordinates
        claim_service: Claim workflow

    Returns:
        ClaimSubmissionResponse: Recorded claim with decision and evidence

    Raises:
        HTTPException: On invalid input, unknown policy or failed assessment
    """
    LOGGER.info("Received claim submission", extra={"policy_id": request.policy_id})

    try:
        submission = ClaimSubmission(
            policy_id=request.policy_id,
            lat=request.lat,
            lng=request.lng,
            image=request.decode_image(),
            mime_type=request.image_mime_type,
            locale=request.locale,
        )
        outcome = await claim_service.submit_claim(submission)

    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PolicyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ClassifierError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=FAILURE_MESSAGES[request.locale],
        )

    return ClaimSubmissionResponse(
        claim=outcome.claim,
        decision=outcome.decision,
        ground_truth=outcome.ground_truth,
        message=_outcome_message(outcome.decision),
    )


@router.get(
    "",
    response_model=List[Claim],
    summary="List recorded claims, newest first",
    operation_id="list_claims",
)
async def list_claims(
    ledger: Annotated[ClaimLedger, Depends(get_claim_ledger)],
    policy_id: Optional[str] = None,
) -> List[Claim]:
    return ledger.list_claims(policy_id)


@router.get(
    "/{claim_id}",
    response_model=Claim,
    responses={404: {"description": "Claim not found", "model": ErrorResponse}},
    summary="Get one recorded claim",
    operation_id="get_claim",
)
async def get_claim(
    claim_id: str,
    ledger: Annotated[ClaimLedger, Depends(get_claim_ledger)],
) -> Claim:
    claim = ledger.get(claim_id)
    if claim is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Claim not found: {claim_id}")
    return claim
