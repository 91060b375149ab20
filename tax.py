"""
Tax model: progressive federal brackets, flat state approximation,
Required Minimum Distributions and contribution limits.
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from accounts import AccountSet, RMD_ACCOUNTS, draw_from
from tax_utils import (
    CONTRIBUTION_LIMITS_2024,
    EMPLOYER_ACCOUNT_KINDS,
    INDIVIDUAL_ACCOUNT_KINDS,
    RMD_START_AGE,
    STATE_TAX_RATES,
    get_distribution_period,
    get_federal_brackets,
)


@dataclass
class RMDResult:
    """Outcome of an RMD lookup"""
    required: bool
    amount: float
    period: Optional[float]


def calculate_tax(taxable_income: float, tax_brackets: List[Tuple[float, float]]) -> float:
    """
    Calculate tax using progressive brackets.

    Args:
        taxable_income: Income subject to tax
        tax_brackets: List of (threshold, rate) tuples where threshold is the START of each bracket

    Returns:
        Total tax owed
    """
    if taxable_income <= 0 or not tax_brackets:
        return 0.0

    # Sort brackets by threshold to ensure proper order
    sorted_brackets = sorted(tax_brackets, key=lambda x: x[0])

    tax = 0.0
    remaining_income = taxable_income

    for i, (threshold, rate) in enumerate(sorted_brackets):
        if remaining_income <= 0:
            break

        if i + 1 < len(sorted_brackets):
            width = sorted_brackets[i + 1][0] - threshold
        else:
            width = math.inf  # No upper limit for highest bracket

        taxed_in_bracket = min(remaining_income, width)
        tax += taxed_in_bracket * rate
        remaining_income -= taxed_in_bracket

    return tax


def calculate_federal_tax(taxable_income: float, filing_status: str = "Single") -> float:
    """Federal income tax for "Single" or "MFJ" filers (2024 brackets)"""
    return calculate_tax(taxable_income, get_federal_brackets(filing_status))


def effective_tax_rate(taxable_income: float, filing_status: str = "Single") -> float:
    """Federal tax as a share of taxable income"""
    if taxable_income <= 0:
        return 0.0
    return calculate_federal_tax(taxable_income, filing_status) / taxable_income


def marginal_tax_rate(taxable_income: float, filing_status: str = "Single") -> float:
    """
    Rate applied to the next dollar of income.

    A bracket's upper bound is inclusive, so income exactly on a threshold
    is still taxed at the lower rate.
    """
    brackets = get_federal_brackets(filing_status)

    for i, (_, rate) in enumerate(brackets):
        upper = brackets[i + 1][0] if i + 1 < len(brackets) else math.inf
        if taxable_income <= upper:
            return rate

    return brackets[-1][1]


def estimate_withdrawal_tax_rate(withdrawal: float, ss_income: float) -> float:
    """
    Quick rate estimate for traditional-account withdrawals.

    Treats 85% of Social Security as taxable and returns the Single-filer
    bracket rate the combined income lands in.
    """
    total_income = withdrawal + ss_income * 0.85
    return marginal_tax_rate(total_income, "Single")


def calculate_state_tax(taxable_income: float, state_code: str) -> float:
    """
    State income tax as income times the state's top marginal rate.

    Returns 0 for states without an income tax and for unknown codes.
    """
    state = STATE_TAX_RATES.get(state_code)
    if state is None or not state['has_income_tax']:
        return 0.0
    return taxable_income * state['rate']


def get_state_list() -> List[Dict]:
    """All states sorted by name"""
    states = [
        {
            'code': code,
            'name': data['name'],
            'rate': data['rate'],
            'has_income_tax': data['has_income_tax'],
        }
        for code, data in STATE_TAX_RATES.items()
    ]
    return sorted(states, key=lambda s: s['name'])


def get_contribution_limit(account_kind: str, age: float) -> float:
    """
    Annual contribution limit for an account kind, with catch-up at 50+.

    Employer plans (401k) and individual accounts (IRA) have separate limits;
    taxable and unknown kinds return 0.
    """
    limits = CONTRIBUTION_LIMITS_2024
    catch_up_eligible = age >= limits['catch_up_age']

    if account_kind in EMPLOYER_ACCOUNT_KINDS:
        return limits['employer_base'] + (limits['employer_catch_up'] if catch_up_eligible else 0)
    if account_kind in INDIVIDUAL_ACCOUNT_KINDS:
        return limits['individual_base'] + (limits['individual_catch_up'] if catch_up_eligible else 0)
    return 0


def calculate_rmd(balances: AccountSet, age: float) -> RMDResult:
    """
    Required Minimum Distribution across the pre-tax accounts.

    Args:
        balances: Current account balances
        age: Age for the distribution year

    Returns:
        RMDResult; ``required`` is False below the statutory start age
    """
    if age < RMD_START_AGE:
        return RMDResult(required=False, amount=0.0, period=None)

    pre_tax_balance = balances.pre_tax_total()
    if pre_tax_balance <= 0:
        return RMDResult(required=True, amount=0.0, period=None)

    period = get_distribution_period(age)
    return RMDResult(required=True, amount=pre_tax_balance / period, period=period)


def apply_rmd(balances: AccountSet, rmd_amount: float) -> float:
    """
    Withdraw an RMD from the traditional 401k, then the traditional IRA.

    Returns:
        Amount actually withdrawn
    """
    if rmd_amount <= 0:
        return 0.0
    shortfall = draw_from(balances, RMD_ACCOUNTS, rmd_amount)
    return rmd_amount - shortfall
