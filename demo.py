#!/usr/bin/env python3
"""
Demo script showing how to use the retirement simulation modules programmatically.
This demonstrates the core functionality without any UI.
"""
import logging

from accounts import AccountSet
from life_events import LifeEvent
from simulation import SimulationParams, RetirementSimulator
from social_security import SocialSecurityCalculator
from stats_utils import calculate_summary_stats, format_currency_compact
from tax import calculate_federal_tax, calculate_state_tax, get_contribution_limit


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("Retirement Simulation Demo")
    print("=" * 50)

    # 1. Estimate Social Security
    ss = SocialSecurityCalculator()
    fra = ss.get_full_retirement_age(1990)
    pia = ss.estimate_pia(annual_income=95_000, years_worked=35)
    monthly = ss.adjust_benefit_for_age(pia, claim_age=68, fra=fra)
    print(f"\nSocial Security: FRA {fra:.2f}, PIA ${pia:,}, claiming at 68 -> ${monthly:,.0f}/month")

    # 2. Create simulation parameters
    params = SimulationParams(
        current_age=35,
        retirement_age=65,
        years_in_retirement=30,
        annual_spending=70_000,
        advanced_mode=True,
        accounts=AccountSet(traditional_401k=150_000, roth_401k=40_000,
                            traditional_ira=20_000, roth_ira=30_000, taxable=25_000),
        contributions=AccountSet(traditional_401k=15_000, roth_401k=5_000, roth_ira=7_000),
        ss_annual_benefit=ss.get_annual_benefit(monthly),
        ss_start_age=68,
        num_simulations=5_000,
        random_seed=42,
    )
    events = [
        LifeEvent("expense", 30_000, start_age=50, duration=4, name="College"),
        LifeEvent("income", 100_000, start_age=60, duration=1, name="Inheritance"),
    ]

    # 3. Run Monte Carlo simulation
    simulator = RetirementSimulator(params, events)
    simulator.run_simulations(progress_callback=lambda pct: print(f"   {pct}% complete"))

    stats = simulator.get_statistics()
    summary = calculate_summary_stats(simulator.all_ending_balances)
    print(f"\nSuccess Rate: {stats.success_rate:.1f}%")
    print(f"Final Balance (P10/P50/P90): {format_currency_compact(stats.percentile_10)} / "
          f"{format_currency_compact(stats.median)} / {format_currency_compact(stats.percentile_90)}")
    print(f"Mean: {format_currency_compact(summary['mean'])}")

    histogram = simulator.get_histogram_data(bin_count=10)
    for label, count in zip(histogram.labels, histogram.data):
        print(f"   {label:>8} {'#' * (count * 50 // max(1, max(histogram.data)))}")

    # 4. Tax helpers
    print("\nTax Calculation Demo:")
    print(f"   Federal tax on $120K (Single): ${calculate_federal_tax(120_000):,.0f}")
    print(f"   Federal tax on $120K (MFJ): ${calculate_federal_tax(120_000, 'MFJ'):,.0f}")
    print(f"   CA state tax on $120K: ${calculate_state_tax(120_000, 'CA'):,.0f}")
    print(f"   401k limit at 52: ${get_contribution_limit('traditional_401k', 52):,.0f}")


if __name__ == "__main__":
    main()
