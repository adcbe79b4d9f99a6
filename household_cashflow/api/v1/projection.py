"""POST /v1/projection and /v1/upcoming-payments - balance forecasts"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from household_cashflow.api.dependencies import get_request_id, get_settings
from household_cashflow.api.v1.schemas import (
    DailyBalanceSchema,
    ObligationSchema,
    ProjectionRequest,
    ProjectionResponse,
    UpcomingPaymentsRequest,
    UpcomingPaymentsResponse,
)
from household_cashflow.config import Settings
from household_cashflow.domain.exceptions import DomainException
from household_cashflow.domain.position import monthly_commitments, net_position, upcoming_payments
from household_cashflow.domain.simulator import minimum_balance, project_cashflow
from household_cashflow.infrastructure.observability.metrics import projection_counter

router = APIRouter()


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(
    request_body: ProjectionRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Project the daily bank balance over the coming weeks.

    Returns:
        One balance per day from today to the end of the window (inclusive),
        with the events applied on each day
    """
    request_id = get_request_id(request)
    try:
        daily = project_cashflow(
            request_body.starting_balance_cents,
            incomes=request_body.domain_incomes(),
            expenses=request_body.domain_expenses(),
            bnpl_plans=request_body.domain_bnpl_plans(),
            credit_cards=request_body.domain_credit_cards(),
            weeks_ahead=request_body.weeks_ahead or settings.projection_weeks,
            extra_events=[e.to_domain() for e in request_body.extra_events],
            today=request_body.today,
        )
    except DomainException as e:
        logging.warning(f"Invalid projection input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    projection_counter.labels(endpoint="projection").inc()
    return ProjectionResponse(
        daily_balances=[DailyBalanceSchema.model_validate(d) for d in daily],
        minimum_balance_cents=minimum_balance(daily, request_body.starting_balance_cents),
    )


@router.post("/upcoming-payments", response_model=UpcomingPaymentsResponse)
def list_upcoming_payments(
    request_body: UpcomingPaymentsRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Obligations due in the next two weeks, the overall net position and average monthly outgoings"""
    request_id = get_request_id(request)
    try:
        expenses = request_body.domain_expenses()
        credit_cards = request_body.domain_credit_cards()
        bnpl_plans = request_body.domain_bnpl_plans()
        payments = upcoming_payments(
            expenses=expenses,
            bnpl_plans=bnpl_plans,
            credit_cards=credit_cards,
            days=request_body.days or settings.upcoming_payment_days,
            today=request_body.today,
        )
    except DomainException as e:
        logging.warning(f"Invalid upcoming payments input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    projection_counter.labels(endpoint="upcoming").inc()
    return UpcomingPaymentsResponse(
        payments=[ObligationSchema.model_validate(p) for p in payments],
        total_cents=sum(p.amount_cents for p in payments),
        net_position_cents=net_position(request_body.bank_balance_cents, credit_cards, bnpl_plans),
        monthly_commitments_cents=monthly_commitments(expenses, bnpl_plans, credit_cards),
    )
