"""
Outcome statistics for Monte Carlo results: success rate, nearest-rank
percentiles and histogram bins.
"""
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

CurrencyFormatter = Callable[[float], str]

NO_DATA_LABEL = "No Data"
DEFAULT_BIN_COUNT = 15


@dataclass
class SimulationStatistics:
    """Summary of final balances across trials"""
    success_rate: float = 0.0
    median: float = 0.0
    percentile_10: float = 0.0
    percentile_90: float = 0.0


@dataclass
class HistogramData:
    """Bin labels and counts for a final-balance histogram"""
    labels: List[str] = field(default_factory=list)
    data: List[int] = field(default_factory=list)


def format_currency_compact(value: float) -> str:
    """Compact currency label, e.g. $1.2M, $350K, $999"""
    if abs(value) >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    elif abs(value) >= 1_000:
        return f"${value / 1_000:.0f}K"
    else:
        return f"${value:.0f}"


def _nearest_rank(sorted_values: np.ndarray, fraction: float) -> float:
    # floor(N * fraction) on the ascending sort; no interpolation
    index = min(int(math.floor(len(sorted_values) * fraction)), len(sorted_values) - 1)
    return float(sorted_values[index])


def get_statistics(final_balances: Optional[Sequence[float]]) -> SimulationStatistics:
    """
    Success rate and percentiles of final balances.

    Success means a strictly positive final balance. Percentiles index the
    ascending sort at floor(N * fraction).
    """
    if final_balances is None or len(final_balances) == 0:
        return SimulationStatistics()

    sorted_balances = np.sort(np.asarray(final_balances, dtype=float))
    n = len(sorted_balances)

    successes = int(np.count_nonzero(sorted_balances > 0))

    return SimulationStatistics(
        success_rate=successes * 100 / n,
        median=_nearest_rank(sorted_balances, 0.5),
        percentile_10=_nearest_rank(sorted_balances, 0.1),
        percentile_90=_nearest_rank(sorted_balances, 0.9),
    )


def get_percentile(data: Optional[Sequence[float]], percentile: float) -> float:
    """Nearest-rank percentile (0-100), clamped to the largest value"""
    if data is None or len(data) == 0:
        return 0.0
    sorted_values = np.sort(np.asarray(data, dtype=float))
    return _nearest_rank(sorted_values, percentile / 100)


def get_mean(data: Optional[Sequence[float]]) -> float:
    if data is None or len(data) == 0:
        return 0.0
    return float(np.mean(data))


def get_standard_deviation(data: Optional[Sequence[float]]) -> float:
    """Population standard deviation"""
    if data is None or len(data) == 0:
        return 0.0
    return float(np.std(data))


def get_histogram_data(final_balances: Optional[Sequence[float]],
                       bin_count: int = DEFAULT_BIN_COUNT,
                       format_currency: Optional[CurrencyFormatter] = None) -> HistogramData:
    """
    Equal-width histogram of final balances.

    Args:
        final_balances: Final balance per trial
        bin_count: Number of bins
        format_currency: Label formatter for each bin's starting value

    Returns:
        HistogramData whose counts sum to the number of balances
    """
    if final_balances is None or len(final_balances) == 0:
        return HistogramData(labels=[NO_DATA_LABEL], data=[0])

    formatter = format_currency or format_currency_compact
    values = np.asarray(final_balances, dtype=float)
    min_value = float(values.min())
    max_value = float(values.max())
    value_range = max_value - min_value

    # Zero range: unit-width bins with everything in the first
    bin_width = 1.0 if value_range == 0 else value_range / bin_count

    labels = [formatter(min_value + i * bin_width) for i in range(bin_count)]
    bins = [0] * bin_count

    for value in values:
        if value_range == 0:
            index = 0
        else:
            index = min(int(math.floor((value - min_value) / bin_width)), bin_count - 1)
        bins[index] += 1

    return HistogramData(labels=labels, data=bins)


def calculate_summary_stats(final_balances: Sequence[float]) -> Dict[str, float]:
    """Summary statistics for final balances"""
    stats = get_statistics(final_balances)
    return {
        'mean': get_mean(final_balances),
        'std': get_standard_deviation(final_balances),
        'p10': stats.percentile_10,
        'p50': stats.median,
        'p90': stats.percentile_90,
        'success_rate': stats.success_rate,
    }
