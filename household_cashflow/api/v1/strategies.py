"""POST /v1/strategies - compare ways to pay for a purchase"""

import logging
import time
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from household_cashflow.api.dependencies import get_request_id, get_settings
from household_cashflow.api.v1.schemas import BalancePointSchema, StrategiesResponse, StrategyRequest, StrategySchema
from household_cashflow.config import Settings
from household_cashflow.domain.exceptions import DomainException
from household_cashflow.domain.strategies import build_baseline, rank_purchase_strategies
from household_cashflow.infrastructure.observability.logging import log_strategy_comparison
from household_cashflow.infrastructure.observability.metrics import projection_counter, record_strategies

router = APIRouter()


@router.post("/strategies", response_model=StrategiesResponse)
def create_strategy_comparison(
    request_body: StrategyRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Rank every way of paying for a purchase.

    Flow:
    1. Convert the snapshot into domain records
    2. Project the baseline cashflow once (without the purchase)
    3. Build, project, score and rank cash, card and BNPL strategies on top of it
    4. Return strategies with the same baseline for charting
    """
    start_time = time.time()
    request_id = get_request_id(request)
    weeks_ahead = request_body.weeks_ahead or settings.projection_weeks

    try:
        credit_cards = request_body.domain_credit_cards()
        baseline = build_baseline(
            request_body.starting_balance_cents,
            request_body.domain_incomes(),
            request_body.domain_expenses(),
            request_body.domain_bnpl_plans(),
            credit_cards,
            request_body.today or date.today(),
            weeks_ahead,
        )
        strategies = rank_purchase_strategies(
            request_body.price_cents,
            baseline,
            credit_cards=credit_cards,
            bnpl_accounts=[a.to_domain() for a in request_body.bnpl_accounts],
            savings_goals=[g.to_domain() for g in request_body.savings_goals],
            item=request_body.item,
        )
    except DomainException as e:
        logging.warning(f"Invalid strategy input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    available = [s for s in strategies if s.is_available]
    projection_counter.labels(endpoint="strategies").inc()
    record_strategies(strategies)
    log_strategy_comparison(
        request_id,
        request_body.price_cents,
        len(available),
        available[0].name if available else None,
        duration_ms,
    )

    return StrategiesResponse(
        item=request_body.item,
        price_cents=request_body.price_cents,
        strategies=[StrategySchema.model_validate(s) for s in strategies],
        baseline_projection=[BalancePointSchema.model_validate(d) for d in baseline.projection],
    )
