"""Payment strategy builder for a hypothetical purchase"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from household_cashflow.domain.events import collect_events
from household_cashflow.domain.installments import (
    generate_instalment_schedule,
    generate_revolving_schedule,
    monthly_interest,
)
from household_cashflow.domain.models import (
    BnplAccount,
    BnplInstalmentPlan,
    CashEvent,
    CreditCardObligation,
    DailyBalance,
    EventKind,
    FixedExpense,
    IncomeSource,
    PaymentStrategy,
    SavingsGoal,
    ScheduledPayment,
    minimum_payment_for,
)
from household_cashflow.domain.providers import ProviderRules, get_provider_rules
from household_cashflow.domain.scoring import rank_strategies, score_strategies
from household_cashflow.domain.simulator import DEFAULT_WEEKS_AHEAD, minimum_balance, simulate
from household_cashflow.utils.date_utils import add_months, day_in_month
from household_cashflow.utils.money_utils import format_dollars

logger = logging.getLogger(__name__)

REVOLVE_MAX_MONTHS = 24
ZIP_PAY_MAX_MONTHS = 24
ZIP_PAY_MIN_REPAYMENT_CENTS = 4000


@dataclass
class Baseline:
    """Projection inputs shared by every strategy for one purchase"""

    starting_balance_cents: int
    events: List[CashEvent]
    window_start: date
    window_end: date
    projection: List[DailyBalance]

    def project(self, schedule: Sequence[ScheduledPayment], kind: EventKind) -> List[DailyBalance]:
        """Re-run the simulator with a strategy's payments on top of the baseline events"""
        payments = [CashEvent(p.date, p.label, -p.amount_cents, kind) for p in schedule]
        return simulate(self.starting_balance_cents, self.events + payments, self.window_start, self.window_end)


def build_baseline(
    starting_balance_cents: int,
    incomes: Iterable[IncomeSource],
    expenses: Iterable[FixedExpense],
    bnpl_plans: Iterable[BnplInstalmentPlan],
    credit_cards: Iterable[CreditCardObligation],
    today: date,
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
) -> Baseline:
    window_end = today + timedelta(weeks=weeks_ahead)
    events = collect_events(today, window_end, incomes, expenses, bnpl_plans, credit_cards)
    projection = simulate(starting_balance_cents, events, today, window_end)
    return Baseline(starting_balance_cents, events, today, window_end, projection)


def _available(
    name: str,
    provider_label: str,
    price_cents: int,
    fees_cents: int,
    schedule: List[ScheduledPayment],
    baseline: Baseline,
    kind: EventKind,
) -> PaymentStrategy:
    projection = baseline.project(schedule, kind)
    return PaymentStrategy(
        name=name,
        provider_label=provider_label,
        is_available=True,
        total_cost_cents=price_cents + fees_cents,
        total_fees_cents=fees_cents,
        payment_schedule=schedule,
        projected_daily_balances=projection,
        minimum_projected_balance_cents=minimum_balance(projection, baseline.starting_balance_cents),
    )


def _unavailable(name: str, provider_label: str, price_cents: int, reason: str, baseline: Baseline) -> PaymentStrategy:
    return PaymentStrategy(
        name=name,
        provider_label=provider_label,
        is_available=False,
        unavailable_reason=reason,
        total_cost_cents=price_cents,
        total_fees_cents=0,
        payment_schedule=[],
        projected_daily_balances=baseline.projection,
        minimum_projected_balance_cents=minimum_balance(baseline.projection, baseline.starting_balance_cents),
    )


def build_cash_strategy(price_cents: int, baseline: Baseline, today: date, item: str = "purchase") -> PaymentStrategy:
    """Pay the full price today from the bank balance"""
    name = "Cash / Debit"
    if baseline.starting_balance_cents < price_cents:
        return _unavailable(name, "cash", price_cents, "Insufficient funds", baseline)

    schedule = [ScheduledPayment(today, price_cents, f"Buy {item} (cash)")]
    return _available(name, "cash", price_cents, 0, schedule, baseline, EventKind.PURCHASE)


def next_card_due_date(card: CreditCardObligation, today: date) -> date:
    """Next statement due date: one month out, on the due day capped at 28"""
    next_month = add_months(today, 1)
    return day_in_month(next_month.year, next_month.month, min(card.due_day_of_month, 28))


def build_credit_card_strategies(
    card: CreditCardObligation, price_cents: int, baseline: Baseline, today: date
) -> List[PaymentStrategy]:
    """
    Pay-in-full and minimum-payment options for one card.

    A card without enough available credit yields a single unavailable entry.
    """
    if card.available_credit_cents < price_cents:
        reason = f"Insufficient limit ({format_dollars(card.available_credit_cents)} available)"
        return [_unavailable(f"{card.name} (Credit Card)", "credit_card", price_cents, reason, baseline)]

    due_date = next_card_due_date(card, today)
    pay_in_full = _available(
        f"{card.name} (Pay in Full)",
        "credit_card",
        price_cents,
        0,
        [ScheduledPayment(due_date, price_cents, "Pay in full by due date")],
        baseline,
        EventKind.CREDIT_CARD,
    )

    schedule, interest, remaining = generate_revolving_schedule(
        principal_cents=price_cents,
        payment_cents=minimum_payment_for(price_cents),
        annual_rate=card.annual_interest_rate,
        due_day=card.due_day_of_month,
        start_date=today,
        max_months=REVOLVE_MAX_MONTHS,
        label=card.name,
    )
    revolve = _available(
        f"{card.name} (Min Payments)",
        "credit_card",
        price_cents,
        interest,
        schedule,
        baseline,
        EventKind.CREDIT_CARD,
    )
    revolve.outstanding_after_schedule_cents = remaining
    if remaining > 0:
        logger.info(
            "Minimum payments still revolving after cap",
            extra={"card": card.name, "months": REVOLVE_MAX_MONTHS, "remaining_cents": remaining},
        )

    return [pay_in_full, revolve]


def zip_pay_schedule(price_cents: int, rules: ProviderRules, today: date) -> Tuple[List[ScheduledPayment], int]:
    """Flexible monthly repayments of $40 or 3% of what is left, whichever is greater"""
    schedule: List[ScheduledPayment] = []
    remaining = price_cents
    month = 0
    while remaining > 0 and month < ZIP_PAY_MAX_MONTHS:
        due = max(ZIP_PAY_MIN_REPAYMENT_CENTS, -(-remaining * 3 // 100))
        payment = min(due, remaining)
        schedule.append(ScheduledPayment(add_months(today, month + 1), payment, f"{rules.label} payment {month + 1}"))
        remaining -= payment
        month += 1

    # Account fee only for months with a repayment
    return schedule, rules.monthly_fee_cents * month


def zip_money_schedule(price_cents: int, rules: ProviderRules, today: date) -> Tuple[List[ScheduledPayment], int]:
    """
    Fixed monthly instalments with an interest-free period.

    Interest after the promo period is tracked as a fee only and does not
    change the instalment amounts.
    """
    schedule: List[ScheduledPayment] = []
    instalment = -(-price_cents // rules.instalments)
    remaining = price_cents
    fees = 0

    for i in range(rules.instalments):
        if remaining <= 0:
            break
        payment = min(instalment, remaining)
        interest_applies = i >= rules.interest_free_months
        label = f"{rules.label} payment {i + 1}" + (" (interest applies)" if interest_applies else "")
        schedule.append(ScheduledPayment(add_months(today, i + 1), payment, label))
        if interest_applies:
            fees += monthly_interest(remaining, rules.interest_rate)
        remaining -= payment

    fees += rules.monthly_fee_cents * len(schedule)
    return schedule, fees


def build_bnpl_strategy(
    account: BnplAccount, rules: ProviderRules, price_cents: int, baseline: Baseline, today: date
) -> PaymentStrategy:
    """Finance the purchase through one BNPL provider account"""
    if price_cents > account.available_limit_cents:
        reason = (
            f"Insufficient limit ({format_dollars(account.available_limit_cents)} available, "
            f"need {format_dollars(price_cents)})"
        )
        return _unavailable(rules.label, account.provider, price_cents, reason, baseline)

    if not rules.min_amount_cents <= price_cents <= rules.max_amount_cents:
        reason = (
            f"Amount outside range ({format_dollars(rules.min_amount_cents)} - "
            f"{format_dollars(rules.max_amount_cents)})"
        )
        return _unavailable(rules.label, account.provider, price_cents, reason, baseline)

    provider = account.provider.strip().lower()
    if provider == "zip_pay":
        schedule, fees = zip_pay_schedule(price_cents, rules, today)
    elif provider == "zip_money":
        schedule, fees = zip_money_schedule(price_cents, rules, today)
    else:
        schedule = generate_instalment_schedule(
            price_cents, rules.instalments, rules.frequency, start_date=today, label=rules.label
        )
        fees = 0

    return _available(rules.label, account.provider, price_cents, fees, schedule, baseline, EventKind.PURCHASE)


def apply_savings_impact(strategies: Sequence[PaymentStrategy], savings_goals: Iterable[SavingsGoal]) -> None:
    """How much of the outstanding savings target each available plan would consume"""
    shortfall = sum(g.shortfall_cents for g in savings_goals)
    for strategy in strategies:
        if strategy.is_available and shortfall > 0:
            strategy.savings_goal_impact_cents = min(strategy.total_cost_cents, shortfall)


def rank_purchase_strategies(
    price_cents: int,
    baseline: Baseline,
    credit_cards: Sequence[CreditCardObligation] = (),
    bnpl_accounts: Sequence[BnplAccount] = (),
    savings_goals: Iterable[SavingsGoal] = (),
    item: str = "purchase",
) -> List[PaymentStrategy]:
    """Build, score and rank every strategy against an already projected baseline"""
    today = baseline.window_start
    strategies: List[PaymentStrategy] = [build_cash_strategy(price_cents, baseline, today, item)]

    for card in credit_cards:
        strategies.extend(build_credit_card_strategies(card, price_cents, baseline, today))

    for account in bnpl_accounts:
        rules = get_provider_rules(account.provider)
        if rules is None:
            logger.debug("Skipping BNPL account with unknown provider", extra={"provider": account.provider})
            continue
        strategies.append(build_bnpl_strategy(account, rules, price_cents, baseline, today))

    apply_savings_impact(strategies, savings_goals)
    score_strategies(strategies, price_cents)
    return rank_strategies(strategies)


def compare_strategies(
    price_cents: int,
    starting_balance_cents: int,
    incomes: Iterable[IncomeSource] = (),
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Sequence[CreditCardObligation] = (),
    bnpl_accounts: Sequence[BnplAccount] = (),
    savings_goals: Iterable[SavingsGoal] = (),
    item: str = "purchase",
    today: Optional[date] = None,
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
) -> List[PaymentStrategy]:
    """
    Main entry point: build, score and rank every way to pay for a purchase.

    Flow:
    1. Project the baseline cashflow (existing income and obligations)
    2. Build cash, per-card and per-BNPL-provider strategies
    3. Re-project each available strategy with its own payments injected
    4. Attach savings impact, score and rank
    """
    today = today or date.today()
    baseline = build_baseline(
        starting_balance_cents, incomes, expenses, bnpl_plans, credit_cards, today, weeks_ahead
    )
    return rank_purchase_strategies(price_cents, baseline, credit_cards, bnpl_accounts, savings_goals, item)
