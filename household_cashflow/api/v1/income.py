"""POST /v1/income/process - catch up on income that has landed"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from household_cashflow.api.dependencies import get_income_guard, get_request_id
from household_cashflow.api.v1.schemas import (
    IncomePaymentSchema,
    IncomeProcessRequest,
    IncomeProcessResponse,
    IncomeSchema,
)
from household_cashflow.domain.exceptions import DomainException
from household_cashflow.domain.income import process_due_income
from household_cashflow.infrastructure.observability.metrics import income_coalesced_counter, projection_counter
from household_cashflow.infrastructure.singleflight import SingleFlight

router = APIRouter()


@router.post("/income/process", response_model=IncomeProcessResponse)
async def process_income(
    request_body: IncomeProcessRequest,
    request: Request,
    guard: SingleFlight = Depends(get_income_guard),
):
    """
    Report pay dates that have passed and the advanced next pay dates.

    Identical requests arriving while one is being computed share its
    result, so a caller crediting accounts from the response never sees the
    same pay date computed twice concurrently.
    """
    request_id = get_request_id(request)
    key = request_body.model_dump_json()

    async def run():
        incomes = [i.to_domain() for i in request_body.incomes]
        return await run_in_threadpool(process_due_income, incomes, request_body.today)

    try:
        result, shared = await guard.do(key, run)
    except DomainException as e:
        logging.warning(f"Invalid income input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if shared:
        income_coalesced_counter.inc()
    projection_counter.labels(endpoint="income").inc()

    return IncomeProcessResponse(
        payments=[IncomePaymentSchema.model_validate(p) for p in result.payments],
        incomes=[IncomeSchema.model_validate(i, from_attributes=True) for i in result.incomes],
        total_credited_cents=result.total_credited_cents,
    )
