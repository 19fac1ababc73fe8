"""Policy lookup API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from crop_claims.core.exceptions import PolicyNotFoundError
from crop_claims.dependencies import get_policy_repository
from crop_claims.models.response.response import ErrorResponse, PolicyResponse
from crop_claims.repositories.policy_repository import PolicyRepository
from crop_claims.schemas.claims import Policy
from crop_claims.services.adjudication.payout import calculate_premium

router = APIRouter()


def _to_response(policy: Policy) -> PolicyResponse:
    return PolicyResponse(
        policy=policy,
        expected_premium=calculate_premium(policy.sum_insured, policy.season),
    )


@router.get(
    "",
    response_model=List[PolicyResponse],
    summary="List insured parcels",
    operation_id="list_policies",
)
async def list_policies(
    policy_repository: Annotated[PolicyRepository, Depends(get_policy_repository)],
    farmer_name: Optional[str] = None,
) -> List[PolicyResponse]:
    return [_to_response(p) for p in policy_repository.list_policies(farmer_name)]


@router.get(
    "/{policy_id}",
    response_model=PolicyResponse,
    responses={404: {"description": "Policy not found", "model": ErrorResponse}},
    summary="Get one policy",
    operation_id="get_policy",
)
async def get_policy(
    policy_id: str,
    policy_repository: Annotated[PolicyRepository, Depends(get_policy_repository)],
) -> PolicyResponse:
    try:
        return _to_response(policy_repository.get_policy(policy_id))
    except PolicyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
