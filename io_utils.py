"""
IO utilities for handing simulation results to downstream consumers.
Tabular sample paths, CSV exports of final balances and summary reports.
"""
from datetime import datetime
from typing import Any, Dict, List, Sequence

import pandas as pd

from config_utils import params_to_dict
from simulation import PathPoint, RetirementSimulator
from stats_utils import calculate_summary_stats


def sample_paths_to_dataframe(paths: Sequence[List[PathPoint]]) -> pd.DataFrame:
    """
    Flatten sampled trial paths into a long-form DataFrame.

    Args:
        paths: One list of (age, balance) points per sampled trial

    Returns:
        DataFrame with columns trial, age, balance
    """
    rows = [
        {'trial': trial, 'age': point.age, 'balance': point.balance}
        for trial, path in enumerate(paths)
        for point in path
    ]
    return pd.DataFrame(rows, columns=['trial', 'age', 'balance'])


def export_final_balances_csv(final_balances: Sequence[float]) -> str:
    """
    Export final balances to CSV format.

    Args:
        final_balances: Final balance per trial

    Returns:
        CSV string
    """
    df = pd.DataFrame({
        'trial': range(1, len(final_balances) + 1),
        'final_balance': list(final_balances),
    })
    return df.to_csv(index=False)


def create_summary_report(simulator: RetirementSimulator) -> Dict[str, Any]:
    """
    Create comprehensive summary report.

    Args:
        simulator: Simulator that has completed a run; its params are reported

    Returns:
        Summary report dictionary
    """
    stats = simulator.get_statistics()
    summary = calculate_summary_stats(simulator.all_ending_balances)

    return {
        'metadata': {
            'generated_at': datetime.now().isoformat(),
            'num_simulations': len(simulator.all_ending_balances),
            'sample_paths': len(simulator.sample_paths),
        },
        'parameters': params_to_dict(simulator.params),
        'results': {
            'success_rate': stats.success_rate,
            'median': stats.median,
            'percentile_10': stats.percentile_10,
            'percentile_90': stats.percentile_90,
            'mean': summary['mean'],
            'std': summary['std'],
        },
    }
