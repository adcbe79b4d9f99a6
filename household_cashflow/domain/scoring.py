"""Strategy scoring engine - ranks the ways of paying for a purchase"""

import math
from typing import List, Sequence

from household_cashflow.domain.models import PaymentStrategy

# End-of-window buffer that earns a full cashflow score ($100)
BALANCE_BASELINE_CENTS = 10_000
# Simplicity points lost per extra payment
PAYMENT_PENALTY = 15


def max_cost_cents(strategies: Sequence[PaymentStrategy], price_cents: int) -> int:
    """Largest total cost among available strategies, never below the price"""
    return max([s.total_cost_cents for s in strategies if s.is_available] + [price_cents])


def cost_score(total_fees_cents: int, max_cost: int) -> float:
    """100 for a fee-free plan, falling as fees approach the most expensive plan"""
    if max_cost <= 0:
        return 100.0
    return (1 - total_fees_cents / max_cost) * 100


def cashflow_score(min_balance_cents: int) -> float:
    """
    Stress of the lowest projected balance.

    A $100 buffer or more scores 100; zero scores 0 and a dip below zero
    starts again at 50, reaching 0 at -$100.
    """
    ratio = min_balance_cents / BALANCE_BASELINE_CENTS
    if min_balance_cents >= 0:
        return min(100.0, ratio * 100)
    return max(0.0, 50 + ratio * 50)


def simplicity_score(payment_count: int) -> float:
    return max(0.0, 100.0 - (payment_count - 1) * PAYMENT_PENALTY)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_strategy_score(strategy: PaymentStrategy, max_cost: int) -> int:
    """
    Calculate score from 0 (worst) to 100 (best).

    Scoring weights:
    - 40%: Cost (fees and interest relative to the dearest plan)
    - 40%: Cashflow stress (lowest projected balance)
    - 20%: Simplicity (fewer payments is better)
    """
    if not strategy.is_available:
        return 0

    score = (
        0.4 * cost_score(strategy.total_fees_cents, max_cost)
        + 0.4 * cashflow_score(strategy.minimum_projected_balance_cents)
        + 0.2 * simplicity_score(strategy.payment_count)
    )
    return min(100, max(0, _round_half_up(score)))


def score_strategies(strategies: Sequence[PaymentStrategy], price_cents: int) -> None:
    """Fill in ``score`` on every strategy relative to the others"""
    max_cost = max_cost_cents(strategies, price_cents)
    for strategy in strategies:
        strategy.score = calculate_strategy_score(strategy, max_cost)


def rank_strategies(strategies: Sequence[PaymentStrategy]) -> List[PaymentStrategy]:
    """Available strategies first, then by score; ties keep construction order"""
    return sorted(strategies, key=lambda s: (not s.is_available, -s.score))
