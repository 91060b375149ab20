"""
Social Security calculations: Full Retirement Age, claiming-age adjustment
and a simplified Primary Insurance Amount estimate.
"""
import math
from typing import Optional, Tuple

from tax_utils import SOCIAL_SECURITY_2024

# (last birth year in band, FRA in years), ascending; later years get 67
FULL_RETIREMENT_AGE_TABLE: Tuple[Tuple[int, float], ...] = (
    (1937, 65),
    (1938, 65 + 2 / 12),
    (1939, 65 + 4 / 12),
    (1940, 65 + 6 / 12),
    (1941, 65 + 8 / 12),
    (1942, 65 + 10 / 12),
    (1954, 66),
    (1955, 66 + 2 / 12),
    (1956, 66 + 4 / 12),
    (1957, 66 + 6 / 12),
    (1958, 66 + 8 / 12),
    (1959, 66 + 10 / 12),
)
LATEST_FULL_RETIREMENT_AGE = 67

EARLY_REDUCTION_FIRST_MONTHS = 36
EARLY_REDUCTION_RATE_FIRST = 5 / 9 / 100   # per month, first 36 months
EARLY_REDUCTION_RATE_BEYOND = 5 / 12 / 100  # per month after that
DELAYED_CREDIT_PER_YEAR = 0.08

MAX_COMPUTATION_YEARS = 35
AIME_DIVISOR_MONTHS = MAX_COMPUTATION_YEARS * 12


class SocialSecurityCalculator:
    """Benefit estimates using 2024 bend points and wage base"""

    def __init__(self,
                 bend_point_1: Optional[float] = None,
                 bend_point_2: Optional[float] = None,
                 max_taxable_earnings: Optional[float] = None):
        self.bend_point_1 = (bend_point_1 if bend_point_1 is not None
                             else SOCIAL_SECURITY_2024['bend_point_1'])
        self.bend_point_2 = (bend_point_2 if bend_point_2 is not None
                             else SOCIAL_SECURITY_2024['bend_point_2'])
        self.max_taxable_earnings = (max_taxable_earnings if max_taxable_earnings is not None
                                     else SOCIAL_SECURITY_2024['max_taxable_earnings'])

    def get_full_retirement_age(self, birth_year: int) -> float:
        """Full Retirement Age in fractional years for a birth year"""
        for last_year, fra in FULL_RETIREMENT_AGE_TABLE:
            if birth_year <= last_year:
                return fra
        return LATEST_FULL_RETIREMENT_AGE

    def adjust_benefit_for_age(self, pia: float, claim_age: float, fra: float) -> float:
        """
        Adjust a monthly PIA for claiming before or after Full Retirement Age.

        Args:
            pia: Monthly benefit at FRA
            claim_age: Age benefits are claimed
            fra: Full Retirement Age

        Returns:
            Adjusted monthly benefit
        """
        months_diff = (claim_age - fra) * 12

        if months_diff < 0:
            months_early = abs(months_diff)
            first = min(months_early, EARLY_REDUCTION_FIRST_MONTHS)
            reduction = first * EARLY_REDUCTION_RATE_FIRST
            if months_early > EARLY_REDUCTION_FIRST_MONTHS:
                reduction += (months_early - EARLY_REDUCTION_FIRST_MONTHS) * EARLY_REDUCTION_RATE_BEYOND
            return pia * (1 - reduction)

        if months_diff > 0:
            delay_credits = (months_diff / 12) * DELAYED_CREDIT_PER_YEAR
            return pia * (1 + delay_credits)

        return pia

    def estimate_pia(self, annual_income: float, years_worked: float) -> int:
        """
        Estimate the monthly PIA from a representative annual income.

        AIME always divides by 420 months, so short careers are averaged with zeros.
        """
        capped_income = min(annual_income, self.max_taxable_earnings)
        effective_years = min(years_worked, MAX_COMPUTATION_YEARS)
        aime = capped_income * effective_years / AIME_DIVISOR_MONTHS

        rate_1 = SOCIAL_SECURITY_2024['replacement_1']
        rate_2 = SOCIAL_SECURITY_2024['replacement_2']
        rate_3 = SOCIAL_SECURITY_2024['replacement_3']

        if aime <= self.bend_point_1:
            pia = aime * rate_1
        elif aime <= self.bend_point_2:
            pia = self.bend_point_1 * rate_1 + (aime - self.bend_point_1) * rate_2
        else:
            pia = (self.bend_point_1 * rate_1
                   + (self.bend_point_2 - self.bend_point_1) * rate_2
                   + (aime - self.bend_point_2) * rate_3)

        # Half-up rounding, not banker's rounding
        return int(math.floor(pia + 0.5))

    def get_annual_benefit(self, monthly_benefit: float) -> float:
        return monthly_benefit * 12
