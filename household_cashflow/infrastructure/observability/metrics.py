"""Prometheus metrics for projection volume, strategy outcomes and request latency"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from household_cashflow.domain.models import PaymentStrategy

# Engine usage
projection_counter = Counter(
    "household_projection_total",
    "Cashflow computations served",
    ["endpoint"],  # projection | safe_to_spend | upcoming | strategies | income
)

strategy_counter = Counter(
    "household_strategy_total",
    "Payment strategies evaluated",
    ["provider", "outcome"],  # available | unavailable
)

negative_safe_to_spend_counter = Counter(
    "household_negative_safe_to_spend_total",
    "Pay cycles where obligations exceed the current balance",
)

income_coalesced_counter = Counter(
    "household_income_coalesced_total",
    "Income processing requests that joined an in-flight computation",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_strategies(strategies: Iterable[PaymentStrategy]) -> None:
    """Record availability of each strategy by provider"""
    for strategy in strategies:
        outcome = "available" if strategy.is_available else "unavailable"
        strategy_counter.labels(provider=strategy.provider_label, outcome=outcome).inc()


def record_safe_to_spend(safe_to_spend_cents: int) -> None:
    projection_counter.labels(endpoint="safe_to_spend").inc()
    if safe_to_spend_cents < 0:
        negative_safe_to_spend_counter.inc()
