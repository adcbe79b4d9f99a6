"""BNPL provider rule tables"""

from dataclasses import dataclass
from typing import Dict, Optional

from household_cashflow.domain.models import Frequency


@dataclass(frozen=True)
class ProviderRules:
    """
    Repayment terms offered by a BNPL provider.

    Amounts are cents; ``interest_rate`` is an annual percentage (0 when
    interest-free). ``instalments`` is 1 for flexible-repayment accounts.
    """

    label: str
    instalments: int
    frequency: Frequency
    monthly_fee_cents: int
    interest_rate: float
    min_amount_cents: int
    max_amount_cents: int
    interest_free_months: int = 0


PROVIDER_RULES: Dict[str, ProviderRules] = {
    "afterpay": ProviderRules(
        label="Afterpay",
        instalments=4,
        frequency=Frequency.FORTNIGHTLY,
        monthly_fee_cents=0,
        interest_rate=0.0,
        min_amount_cents=100,
        max_amount_cents=200_000,  # $2000, varies by retailer
    ),
    "zip_pay": ProviderRules(
        label="Zip Pay",
        instalments=1,
        frequency=Frequency.MONTHLY,
        monthly_fee_cents=995,  # $9.95 account fee
        interest_rate=0.0,
        min_amount_cents=100,
        max_amount_cents=100_000,
    ),
    "zip_money": ProviderRules(
        label="Zip Money",
        instalments=12,
        frequency=Frequency.MONTHLY,
        monthly_fee_cents=995,
        interest_rate=19.9,
        min_amount_cents=100_000,
        max_amount_cents=500_000,
        interest_free_months=3,
    ),
    "paypal_pay4": ProviderRules(
        label="PayPal Pay in 4",
        instalments=4,
        frequency=Frequency.FORTNIGHTLY,
        monthly_fee_cents=0,
        interest_rate=0.0,
        min_amount_cents=3000,
        max_amount_cents=150_000,
    ),
}


def get_provider_rules(provider: str) -> Optional[ProviderRules]:
    return PROVIDER_RULES.get(provider.strip().lower())
