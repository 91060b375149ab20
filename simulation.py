"""
Monte Carlo retirement simulation engine with a five-account ledger,
RMDs, Social Security and life events.
Pure functions for simulation logic, decoupled from UI.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional

from accounts import AccountSet, initialize_accounts
from life_events import LifeEvent, get_life_event_impact
from returns import UniformSource, generate_normal_return, make_uniform_source
from stats_utils import (
    CurrencyFormatter,
    DEFAULT_BIN_COUNT,
    HistogramData,
    SimulationStatistics,
    format_currency_compact,
    get_histogram_data,
    get_statistics,
)
from tax import apply_rmd, calculate_rmd

logger = logging.getLogger(__name__)

BATCH_SIZE = 1_000
MAX_SAMPLE_PATHS = 30

OUTCOME_SUCCESS = "success"
OUTCOME_ACCUMULATION_SHORTFALL = "accumulation_shortfall"
OUTCOME_DEPLETED = "depleted"


@dataclass
class SimulationParams:
    """Parameters for Monte Carlo simulation"""
    current_age: int = 30
    retirement_age: int = 65
    years_in_retirement: int = 30
    num_simulations: int = 10_000
    random_seed: Optional[int] = None

    # Return model (annual, percent)
    expected_return: float = 7.0
    return_volatility: float = 15.0
    inflation_rate: float = 3.0

    # Spending in today's dollars, inflated each retirement year
    annual_spending: float = 60_000

    # Simple mode: everything in a traditional 401k
    current_savings: float = 100_000
    annual_contribution: float = 10_000

    # Advanced mode: explicit balances and contributions per account
    advanced_mode: bool = False
    accounts: Optional[AccountSet] = None
    contributions: Optional[AccountSet] = None

    # Social Security parameters
    ss_annual_benefit: float = 0.0
    ss_start_age: Optional[float] = None


class PathPoint(NamedTuple):
    """Total balance at an age"""
    age: float
    balance: float


@dataclass
class TrialResult:
    """Outcome of a single trial"""
    final_balance: float
    path: Optional[List[PathPoint]] = None
    outcome: str = OUTCOME_SUCCESS
    depletion_age: Optional[float] = None


class SimulationCancelled(RuntimeError):
    """Raised at a batch boundary when a run is cancelled or exceeds its deadline"""

    def __init__(self, completed: int, total: int, reason: str = "cancelled"):
        super().__init__(f"Simulation {reason} after {completed:,} of {total:,} trials")
        self.completed = completed
        self.total = total
        self.reason = reason


class RetirementSimulator:
    """Monte Carlo retirement simulation across five account kinds"""

    def __init__(self, params: SimulationParams,
                 life_events: Iterable[LifeEvent] = (),
                 uniform_source: Optional[UniformSource] = None,
                 format_currency: Optional[CurrencyFormatter] = None):
        self.params = params
        self.life_events = list(life_events)
        self.uniform_source = (uniform_source if uniform_source is not None
                               else make_uniform_source(params.random_seed))
        self.all_ending_balances: List[float] = []
        self.sample_paths: List[List[PathPoint]] = []
        self._format_currency = format_currency or format_currency_compact

    def _draw_return(self) -> float:
        return generate_normal_return(self.params.expected_return / 100,
                                      self.params.return_volatility / 100,
                                      self.uniform_source)

    def run_single_simulation(self, save_path: bool = False) -> TrialResult:
        """
        Run one trial: accumulation until retirement, then distribution.

        Args:
            save_path: Record (age, total balance) after each year

        Returns:
            TrialResult. A life-event deficit that exceeds every account during
            working years ends the trial with a zero balance; running out of money
            in retirement ends the loop early with the path kept.
        """
        p = self.params
        ledger = initialize_accounts(p)
        path = [PathPoint(p.current_age, ledger.total_balance())] if save_path else None

        # Accumulation phase (working years)
        for year in range(p.retirement_age - p.current_age):
            age = p.current_age + year

            ledger.apply_return(self._draw_return())
            ledger.add_contributions()

            net_event = get_life_event_impact(age, self.life_events).net
            if net_event >= 0:
                ledger.deposit_taxable(net_event)
            else:
                shortfall = ledger.withdraw(-net_event)
                if shortfall > 0:
                    return TrialResult(final_balance=0.0, path=path,
                                       outcome=OUTCOME_ACCUMULATION_SHORTFALL)

            if save_path:
                path.append(PathPoint(age + 1, ledger.total_balance()))

        # Distribution phase (retirement years)
        current_spending = p.annual_spending
        current_ss_benefit = p.ss_annual_benefit or 0.0
        ss_active = False
        inflation = p.inflation_rate / 100
        outcome = OUTCOME_SUCCESS
        depletion_age = None

        for year in range(p.years_in_retirement):
            age = p.retirement_age + year

            ledger.apply_return(self._draw_return())

            if p.ss_start_age and age >= p.ss_start_age:
                ss_active = True

            ss_this_year = current_ss_benefit if ss_active else 0.0
            impact = get_life_event_impact(age, self.life_events)
            net_spending_needed = current_spending - ss_this_year - impact.income + impact.expense

            # RMD comes out first and counts toward the year's spending
            rmd = calculate_rmd(ledger.balances, age)
            if rmd.required and rmd.amount > 0:
                net_spending_needed -= apply_rmd(ledger.balances, rmd.amount)

            if net_spending_needed > 0:
                ledger.withdraw(net_spending_needed)

            current_spending *= 1 + inflation
            if ss_active:
                # COLA approximated with the same inflation rate
                current_ss_benefit *= 1 + inflation

            total_balance = ledger.total_balance()
            if save_path:
                path.append(PathPoint(age + 1, total_balance))

            if total_balance <= 0:
                outcome = OUTCOME_DEPLETED
                depletion_age = age + 1
                break

        return TrialResult(final_balance=max(0.0, ledger.total_balance()), path=path,
                           outcome=outcome, depletion_age=depletion_age)

    def _reset_results(self) -> None:
        self.all_ending_balances = []
        self.sample_paths = []

    def _run_batch(self, batch_start: int, batch_end: int) -> None:
        for _ in range(batch_start, batch_end):
            save_path = len(self.sample_paths) < MAX_SAMPLE_PATHS
            result = self.run_single_simulation(save_path)
            self.all_ending_balances.append(result.final_balance)
            if save_path and result.path:
                self.sample_paths.append(result.path)

    @staticmethod
    def _progress(done: int, total: int) -> int:
        # Half-up rounding to a whole percent
        return int(done * 100 / total + 0.5)

    def _check_cancel(self, done: int, total: int,
                      cancel_check: Optional[Callable[[], bool]],
                      deadline: Optional[float]) -> None:
        if done >= total:
            return
        if cancel_check is not None and cancel_check():
            logger.warning("Simulation cancelled after %d of %d trials", done, total)
            raise SimulationCancelled(done, total)
        if deadline is not None and time.monotonic() >= deadline:
            logger.warning("Simulation deadline reached after %d of %d trials", done, total)
            raise SimulationCancelled(done, total, reason="timed out")

    def _run_batches(self, trial_count: Optional[int],
                     progress_callback: Optional[Callable[[int], None]],
                     cancel_check: Optional[Callable[[], bool]],
                     timeout: Optional[float]) -> Iterator[int]:
        """
        Run trials in batches of 1,000, yielding the completed count after each batch.

        Progress is reported before the yield; cancellation is checked once the
        caller resumes the generator.
        """
        total = self.params.num_simulations if trial_count is None else trial_count
        deadline = time.monotonic() + timeout if timeout is not None else None
        self._reset_results()
        logger.info("Running %d simulations", total)

        for batch_start in range(0, total, BATCH_SIZE):
            batch_end = min(batch_start + BATCH_SIZE, total)
            self._run_batch(batch_start, batch_end)
            logger.debug("Completed trials %d-%d", batch_start, batch_end)
            if progress_callback:
                progress_callback(self._progress(batch_end, total))
            yield batch_end
            self._check_cancel(batch_end, total, cancel_check, deadline)

        logger.info("Finished %d simulations", total)

    def run_simulations(self, trial_count: Optional[int] = None,
                        progress_callback: Optional[Callable[[int], None]] = None,
                        cancel_check: Optional[Callable[[], bool]] = None,
                        timeout: Optional[float] = None) -> List[float]:
        """
        Run many trials in batches of 1,000, reporting percent complete after each batch.

        Args:
            trial_count: Number of trials (defaults to params.num_simulations)
            progress_callback: Called with an integer percentage after each batch
            cancel_check: Evaluated at batch boundaries; True stops the run
            timeout: Seconds allowed before the run stops at the next batch boundary

        Returns:
            Final balance of every trial, in run order

        Raises:
            SimulationCancelled: When cancel_check or the timeout stops the run.
                Results completed so far stay on the simulator.
        """
        for _ in self._run_batches(trial_count, progress_callback, cancel_check, timeout):
            pass
        return self.all_ending_balances

    async def run_simulations_async(self, trial_count: Optional[int] = None,
                                    progress_callback: Optional[Callable[[int], None]] = None,
                                    cancel_check: Optional[Callable[[], bool]] = None,
                                    timeout: Optional[float] = None) -> List[float]:
        """Same as run_simulations, yielding to the event loop after every batch"""
        for _ in self._run_batches(trial_count, progress_callback, cancel_check, timeout):
            await asyncio.sleep(0)
        return self.all_ending_balances

    def get_statistics(self) -> SimulationStatistics:
        return get_statistics(self.all_ending_balances)

    def get_histogram_data(self, bin_count: int = DEFAULT_BIN_COUNT) -> HistogramData:
        return get_histogram_data(self.all_ending_balances, bin_count, self._format_currency)

    def format_currency(self, value: float) -> str:
        return self._format_currency(value)
