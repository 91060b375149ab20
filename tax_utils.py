"""
Tax, distribution and Social Security parameter tables (2024).
Sources: IRS Rev. Proc. 2023-34, IRS Notice 2023-75, IRS Publication 590-B,
Social Security Administration, Tax Foundation state rates.
"""
from typing import Any, Dict, List, Tuple

# Federal brackets as (threshold, rate), threshold is the START of each bracket
FEDERAL_TAX_BRACKETS: Dict[str, List[Tuple[float, float]]] = {
    'Single': [
        (0, 0.10),
        (11_600, 0.12),
        (47_150, 0.22),
        (100_525, 0.24),
        (191_950, 0.32),
        (243_725, 0.35),
        (609_350, 0.37),
    ],
    'MFJ': [
        (0, 0.10),
        (23_200, 0.12),
        (94_300, 0.22),
        (201_050, 0.24),
        (383_900, 0.32),
        (487_450, 0.35),
        (731_200, 0.37),
    ],
}

SOCIAL_SECURITY_2024: Dict[str, float] = {
    'max_taxable_earnings': 168_600,
    'bend_point_1': 1_174,  # Monthly AIME
    'bend_point_2': 7_078,  # Monthly AIME
    'replacement_1': 0.90,
    'replacement_2': 0.32,
    'replacement_3': 0.15,
    'cola_adjustment': 0.032,
}

CONTRIBUTION_LIMITS_2024: Dict[str, float] = {
    'employer_base': 23_000,
    'employer_catch_up': 7_500,  # Age 50+
    'individual_base': 7_000,
    'individual_catch_up': 1_000,  # Age 50+
    'catch_up_age': 50,
    # Roth IRA income phase-out ranges
    'roth_phase_out_start': 146_000,
    'roth_phase_out_end': 161_000,
    'roth_phase_out_start_mfj': 230_000,
    'roth_phase_out_end_mfj': 240_000,
}

EMPLOYER_ACCOUNT_KINDS = ('traditional_401k', 'roth_401k')
INDIVIDUAL_ACCOUNT_KINDS = ('traditional_ira', 'roth_ira')

# SECURE 2.0: RMDs begin at 73
RMD_START_AGE = 73

# Uniform Lifetime Table as (age, distribution period), ascending by age
RMD_UNIFORM_LIFETIME_TABLE: Tuple[Tuple[int, float], ...] = (
    (72, 27.4), (73, 26.5), (74, 25.5), (75, 24.6), (76, 23.7),
    (77, 22.9), (78, 22.0), (79, 21.1), (80, 20.2), (81, 19.4),
    (82, 18.5), (83, 17.7), (84, 16.8), (85, 16.0), (86, 15.2),
    (87, 14.4), (88, 13.7), (89, 12.9), (90, 12.2), (91, 11.5),
    (92, 10.8), (93, 10.1), (94, 9.5), (95, 8.9), (96, 8.4),
    (97, 7.8), (98, 7.3), (99, 6.8), (100, 6.4), (101, 6.0),
    (102, 5.6), (103, 5.2), (104, 4.9), (105, 4.6), (106, 4.3),
    (107, 4.1), (108, 3.9), (109, 3.7), (110, 3.5), (111, 3.4),
    (112, 3.3), (113, 3.1), (114, 3.0), (115, 2.9), (116, 2.8),
    (117, 2.7), (118, 2.5), (119, 2.3), (120, 2.0),
)
RMD_MIN_PERIOD = 2.0

# Top marginal rates; progressive states are deliberately overestimated
STATE_TAX_RATES: Dict[str, Dict[str, Any]] = {
    # No state income tax
    'AK': {'name': 'Alaska', 'rate': 0.0, 'has_income_tax': False},
    'FL': {'name': 'Florida', 'rate': 0.0, 'has_income_tax': False},
    'NV': {'name': 'Nevada', 'rate': 0.0, 'has_income_tax': False},
    'NH': {'name': 'New Hampshire', 'rate': 0.0, 'has_income_tax': False},
    'SD': {'name': 'South Dakota', 'rate': 0.0, 'has_income_tax': False},
    'TN': {'name': 'Tennessee', 'rate': 0.0, 'has_income_tax': False},
    'TX': {'name': 'Texas', 'rate': 0.0, 'has_income_tax': False},
    'WA': {'name': 'Washington', 'rate': 0.0, 'has_income_tax': False},
    'WY': {'name': 'Wyoming', 'rate': 0.0, 'has_income_tax': False},

    # Flat tax
    'AZ': {'name': 'Arizona', 'rate': 0.025, 'has_income_tax': True},
    'CO': {'name': 'Colorado', 'rate': 0.044, 'has_income_tax': True},
    'GA': {'name': 'Georgia', 'rate': 0.0549, 'has_income_tax': True},
    'ID': {'name': 'Idaho', 'rate': 0.058, 'has_income_tax': True},
    'IL': {'name': 'Illinois', 'rate': 0.0495, 'has_income_tax': True},
    'IN': {'name': 'Indiana', 'rate': 0.0305, 'has_income_tax': True},
    'KY': {'name': 'Kentucky', 'rate': 0.04, 'has_income_tax': True},
    'MA': {'name': 'Massachusetts', 'rate': 0.05, 'has_income_tax': True},
    'MI': {'name': 'Michigan', 'rate': 0.0425, 'has_income_tax': True},
    'NC': {'name': 'North Carolina', 'rate': 0.0475, 'has_income_tax': True},
    'PA': {'name': 'Pennsylvania', 'rate': 0.0307, 'has_income_tax': True},
    'UT': {'name': 'Utah', 'rate': 0.0465, 'has_income_tax': True},

    # Progressive (top marginal rate)
    'AL': {'name': 'Alabama', 'rate': 0.05, 'has_income_tax': True},
    'AR': {'name': 'Arkansas', 'rate': 0.044, 'has_income_tax': True},
    'CA': {'name': 'California', 'rate': 0.133, 'has_income_tax': True},
    'CT': {'name': 'Connecticut', 'rate': 0.0699, 'has_income_tax': True},
    'DE': {'name': 'Delaware', 'rate': 0.066, 'has_income_tax': True},
    'DC': {'name': 'District of Columbia', 'rate': 0.1075, 'has_income_tax': True},
    'HI': {'name': 'Hawaii', 'rate': 0.11, 'has_income_tax': True},
    'IA': {'name': 'Iowa', 'rate': 0.0575, 'has_income_tax': True},
    'KS': {'name': 'Kansas', 'rate': 0.057, 'has_income_tax': True},
    'LA': {'name': 'Louisiana', 'rate': 0.0425, 'has_income_tax': True},
    'ME': {'name': 'Maine', 'rate': 0.0715, 'has_income_tax': True},
    'MD': {'name': 'Maryland', 'rate': 0.0575, 'has_income_tax': True},
    'MN': {'name': 'Minnesota', 'rate': 0.0985, 'has_income_tax': True},
    'MS': {'name': 'Mississippi', 'rate': 0.05, 'has_income_tax': True},
    'MO': {'name': 'Missouri', 'rate': 0.048, 'has_income_tax': True},
    'MT': {'name': 'Montana', 'rate': 0.059, 'has_income_tax': True},
    'NE': {'name': 'Nebraska', 'rate': 0.0584, 'has_income_tax': True},
    'NJ': {'name': 'New Jersey', 'rate': 0.1075, 'has_income_tax': True},
    'NM': {'name': 'New Mexico', 'rate': 0.059, 'has_income_tax': True},
    'NY': {'name': 'New York', 'rate': 0.109, 'has_income_tax': True},
    'ND': {'name': 'North Dakota', 'rate': 0.025, 'has_income_tax': True},
    'OH': {'name': 'Ohio', 'rate': 0.035, 'has_income_tax': True},
    'OK': {'name': 'Oklahoma', 'rate': 0.0475, 'has_income_tax': True},
    'OR': {'name': 'Oregon', 'rate': 0.099, 'has_income_tax': True},
    'RI': {'name': 'Rhode Island', 'rate': 0.0599, 'has_income_tax': True},
    'SC': {'name': 'South Carolina', 'rate': 0.064, 'has_income_tax': True},
    'VT': {'name': 'Vermont', 'rate': 0.0875, 'has_income_tax': True},
    'VA': {'name': 'Virginia', 'rate': 0.0575, 'has_income_tax': True},
    'WV': {'name': 'West Virginia', 'rate': 0.0512, 'has_income_tax': True},
    'WI': {'name': 'Wisconsin', 'rate': 0.0765, 'has_income_tax': True},
}


def get_federal_brackets(filing_status: str) -> List[Tuple[float, float]]:
    """Federal brackets for a filing status; anything but MFJ is treated as Single"""
    if filing_status == 'MFJ':
        return FEDERAL_TAX_BRACKETS['MFJ']
    return FEDERAL_TAX_BRACKETS['Single']


def get_distribution_period(age: float) -> float:
    """
    Uniform Lifetime distribution period for an age.

    Ages are clamped into the table; past the last entry the minimum period applies.
    """
    first_age, first_period = RMD_UNIFORM_LIFETIME_TABLE[0]
    if age <= first_age:
        return first_period

    period = RMD_MIN_PERIOD
    for table_age, table_period in RMD_UNIFORM_LIFETIME_TABLE:
        if table_age > age:
            break
        period = table_period
    return period
