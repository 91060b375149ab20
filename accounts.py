"""
Five-account ledger used by each simulation trial.
Applies market returns, contributions and the tax-efficient withdrawal waterfall.
"""
from dataclasses import dataclass, fields, replace
from typing import Optional, Tuple

# Taxable first, then pre-tax, Roth last
WITHDRAWAL_ORDER: Tuple[str, ...] = (
    'taxable',
    'traditional_401k',
    'traditional_ira',
    'roth_401k',
    'roth_ira',
)

# Pre-tax accounts subject to Required Minimum Distributions, in draw order
RMD_ACCOUNTS: Tuple[str, ...] = ('traditional_401k', 'traditional_ira')


@dataclass
class AccountSet:
    """Amounts held in (or contributed to) each of the five account kinds"""
    traditional_401k: float = 0.0
    roth_401k: float = 0.0
    traditional_ira: float = 0.0
    roth_ira: float = 0.0
    taxable: float = 0.0

    def total(self) -> float:
        return (self.traditional_401k + self.roth_401k + self.traditional_ira
                + self.roth_ira + self.taxable)

    def pre_tax_total(self) -> float:
        return self.traditional_401k + self.traditional_ira

    def copy(self) -> "AccountSet":
        return replace(self)


def draw_from(balances: AccountSet, names: Tuple[str, ...], amount: float) -> float:
    """
    Pull ``amount`` from the named accounts in order, capping each step at its balance.

    Returns:
        The unmet remainder (0 when fully satisfied)
    """
    remaining = amount
    for name in names:
        if remaining <= 0:
            break
        balance = getattr(balances, name)
        if balance > 0:
            take = min(balance, remaining)
            setattr(balances, name, balance - take)
            remaining -= take
    return max(0.0, remaining)


class AccountLedger:
    """Balances and fixed annual contributions for one trial"""

    def __init__(self, balances: AccountSet, contributions: Optional[AccountSet] = None):
        self.balances = balances
        self.contributions = contributions if contributions is not None else AccountSet()

    def apply_return(self, rate: float) -> None:
        """Grow every account by the same period return, flooring each balance at zero"""
        for f in fields(self.balances):
            setattr(self.balances, f.name, max(0.0, getattr(self.balances, f.name) * (1 + rate)))

    def add_contributions(self) -> None:
        for f in fields(self.balances):
            setattr(self.balances, f.name,
                    getattr(self.balances, f.name) + getattr(self.contributions, f.name))

    def deposit_taxable(self, amount: float) -> None:
        self.balances.taxable += amount

    def withdraw(self, amount: float) -> float:
        """
        Withdraw through the waterfall: taxable -> traditional 401k -> traditional IRA
        -> Roth 401k -> Roth IRA.

        Args:
            amount: Amount requested

        Returns:
            Shortfall that could not be covered (0 if fully satisfied)
        """
        if amount <= 0:
            return 0.0
        return draw_from(self.balances, WITHDRAWAL_ORDER, amount)

    def total_balance(self) -> float:
        return self.balances.total()


def initialize_accounts(params) -> AccountLedger:
    """
    Build a fresh ledger from simulation parameters.

    Advanced mode copies the five supplied balances and contributions; simple mode
    treats savings and contributions as a traditional 401k.
    """
    if params.advanced_mode and params.accounts is not None:
        balances = params.accounts.copy()
        contributions = (params.contributions.copy()
                         if params.contributions is not None else AccountSet())
    else:
        balances = AccountSet(traditional_401k=params.current_savings or 0.0)
        contributions = AccountSet(traditional_401k=params.annual_contribution or 0.0)

    return AccountLedger(balances, contributions)
