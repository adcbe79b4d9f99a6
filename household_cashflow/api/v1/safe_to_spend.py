"""POST /v1/safe-to-spend - spendable balance before the next pay day"""

import logging

from fastapi import APIRouter, HTTPException, Request

from household_cashflow.api.dependencies import get_request_id
from household_cashflow.api.v1.schemas import SafeToSpendRequest, SafeToSpendResponse
from household_cashflow.domain.exceptions import DomainException
from household_cashflow.domain.safe_to_spend import compute_safe_to_spend
from household_cashflow.infrastructure.observability.logging import log_safe_to_spend
from household_cashflow.infrastructure.observability.metrics import record_safe_to_spend

router = APIRouter()


@router.post("/safe-to-spend", response_model=SafeToSpendResponse)
def get_safe_to_spend(request_body: SafeToSpendRequest, request: Request):
    """
    Compute how much can be spent before the next income lands.

    A negative amount is a valid answer: obligations due before pay day
    exceed the current balance.
    """
    request_id = get_request_id(request)
    try:
        result = compute_safe_to_spend(
            request_body.current_balance_cents,
            incomes=request_body.domain_incomes(),
            expenses=request_body.domain_expenses(),
            bnpl_plans=request_body.domain_bnpl_plans(),
            credit_cards=request_body.domain_credit_cards(),
            today=request_body.today,
        )
    except DomainException as e:
        logging.warning(f"Invalid safe-to-spend input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_safe_to_spend(result.safe_to_spend_cents)
    log_safe_to_spend(request_id, result.safe_to_spend_cents, result.days_until_pay)

    return SafeToSpendResponse.model_validate(result)
