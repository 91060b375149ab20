"""
Unit tests for tax calculation, RMDs and contribution limits.
"""
import pytest
from accounts import AccountSet
from tax import (
    calculate_tax, calculate_federal_tax, calculate_state_tax,
    effective_tax_rate, marginal_tax_rate, estimate_withdrawal_tax_rate,
    get_state_list, get_contribution_limit, calculate_rmd, apply_rmd
)
from tax_utils import RMD_UNIFORM_LIFETIME_TABLE, get_distribution_period


class TestCalculateTax:
    """Test progressive tax calculation"""

    def test_no_tax_on_zero_income(self):
        """Test that zero taxable income yields zero tax"""
        brackets = [(0, 0.10), (50_000, 0.22), (100_000, 0.24)]
        assert calculate_tax(0, brackets) == 0

    def test_negative_income_yields_zero_tax(self):
        """Test that negative taxable income yields zero tax"""
        brackets = [(0, 0.10), (50_000, 0.22), (100_000, 0.24)]
        assert calculate_tax(-1000, brackets) == 0

    def test_two_bracket_tax(self):
        """Test tax calculation spanning two brackets"""
        brackets = [(0, 0.10), (50_000, 0.22), (100_000, 0.24)]

        # First bracket: 50,000 * 0.10 = 5,000
        # Second bracket: (75,000 - 50,000) * 0.22 = 5,500
        tax = calculate_tax(75_000, brackets)
        assert abs(tax - 10_500) < 1e-6

    def test_income_exceeds_all_brackets(self):
        """Test tax calculation when income exceeds all brackets"""
        brackets = [(0, 0.10), (50_000, 0.22), (100_000, 0.24)]

        # 5,000 + 11,000 + 100,000 * 0.24
        tax = calculate_tax(200_000, brackets)
        assert abs(tax - 40_000) < 1e-6

    def test_unsorted_brackets(self):
        """Test brackets are scanned in ascending threshold order"""
        brackets = [(100_000, 0.24), (0, 0.10), (50_000, 0.22)]
        assert abs(calculate_tax(75_000, brackets) - 10_500) < 1e-6

    def test_empty_brackets(self):
        """Test behavior with empty tax brackets"""
        assert calculate_tax(50_000, []) == 0


class TestFederalTax:
    """Test 2024 federal brackets"""

    def test_single_filer(self):
        """Test Single filer spanning three brackets"""
        # 11,600 * 0.10 + 35,550 * 0.12 + 2,850 * 0.22
        assert calculate_federal_tax(50_000, "Single") == pytest.approx(6_053)

    def test_mfj_filer(self):
        """Test married filing jointly spanning three brackets"""
        # 23,200 * 0.10 + 71,100 * 0.12 + 5,700 * 0.22
        assert calculate_federal_tax(100_000, "MFJ") == pytest.approx(12_106)

    def test_default_is_single(self):
        """Test default and unknown filing status use Single brackets"""
        assert calculate_federal_tax(50_000) == calculate_federal_tax(50_000, "Single")
        assert calculate_federal_tax(50_000, "HOH") == calculate_federal_tax(50_000, "Single")

    def test_top_bracket(self):
        """Test income in the 37% bracket"""
        below = calculate_federal_tax(700_000)
        above = calculate_federal_tax(701_000)
        assert above - below == pytest.approx(370)

    def test_zero_income(self):
        """Test zero income owes nothing"""
        assert calculate_federal_tax(0) == 0


class TestTaxRates:
    """Test effective and marginal tax rate calculations"""

    def test_effective_tax_rate(self):
        """Test effective tax rate calculation"""
        assert effective_tax_rate(50_000) == pytest.approx(6_053 / 50_000)

    def test_effective_rate_zero_income(self):
        """Test effective rate on zero income"""
        assert effective_tax_rate(0) == 0

    def test_marginal_tax_rate(self):
        """Test marginal tax rate calculation"""
        assert marginal_tax_rate(5_000) == 0.10
        assert marginal_tax_rate(11_600) == 0.10
        assert marginal_tax_rate(11_601) == 0.12
        assert marginal_tax_rate(150_000) == 0.24
        assert marginal_tax_rate(150_000, "MFJ") == 0.22

    def test_marginal_rate_above_all_brackets(self):
        """Test marginal rate when income exceeds all brackets"""
        assert marginal_tax_rate(2_000_000) == 0.37

    def test_withdrawal_rate_estimate(self):
        """Test 85% of Social Security counts toward the bracket"""
        assert estimate_withdrawal_tax_rate(10_000, 0) == 0.10
        # 40,000 + 20,000 * 0.85 = 57,000
        assert estimate_withdrawal_tax_rate(40_000, 20_000) == 0.22


class TestStateTax:
    """Test flat state tax approximation"""

    def test_progressive_state_uses_top_rate(self):
        """Test California taxed at its top marginal rate"""
        assert calculate_state_tax(100_000, "CA") == pytest.approx(13_300)

    def test_flat_state(self):
        """Test flat-tax state"""
        assert calculate_state_tax(100_000, "PA") == pytest.approx(3_070)

    def test_no_income_tax_state(self):
        """Test states with no income tax"""
        for state in ["TX", "FL", "WA", "NV"]:
            assert calculate_state_tax(100_000, state) == 0

    def test_unknown_state(self):
        """Test unknown state codes owe nothing"""
        assert calculate_state_tax(100_000, "ZZ") == 0

    def test_state_list_sorted_by_name(self):
        """Test state list is sorted and complete"""
        states = get_state_list()
        names = [s['name'] for s in states]
        assert names == sorted(names)
        assert len(states) == 51
        assert {'code', 'name', 'rate', 'has_income_tax'} <= set(states[0])


class TestContributionLimits:
    """Test contribution limit lookup"""

    def test_employer_plans(self):
        """Test 401k base and catch-up limits"""
        assert get_contribution_limit("traditional_401k", 30) == 23_000
        assert get_contribution_limit("roth_401k", 49) == 23_000
        assert get_contribution_limit("traditional_401k", 50) == 30_500

    def test_individual_accounts(self):
        """Test IRA base and catch-up limits"""
        assert get_contribution_limit("traditional_ira", 40) == 7_000
        assert get_contribution_limit("roth_ira", 50) == 8_000

    def test_other_accounts(self):
        """Test taxable and unknown kinds have no limit value"""
        assert get_contribution_limit("taxable", 40) == 0
        assert get_contribution_limit("hsa", 40) == 0


class TestRMD:
    """Test Required Minimum Distribution calculation"""

    def test_not_required_before_73(self):
        """Test no RMD below the start age"""
        balances = AccountSet(traditional_401k=500_000)
        for age in [60, 72]:
            rmd = calculate_rmd(balances, age)
            assert rmd.required is False
            assert rmd.amount == 0
            assert rmd.period is None

    def test_rmd_at_73(self):
        """Test RMD uses both pre-tax balances and the table period"""
        balances = AccountSet(traditional_401k=200_000, traditional_ira=65_000,
                              roth_401k=1_000_000, roth_ira=50_000, taxable=75_000)
        rmd = calculate_rmd(balances, 73)
        assert rmd.required is True
        assert rmd.period == 26.5
        assert rmd.amount == pytest.approx(265_000 / 26.5)

    def test_rmd_matches_formula_for_all_ages(self):
        """Test amount equals pre-tax sum over the period for every age"""
        balances = AccountSet(traditional_401k=300_000, traditional_ira=100_000)
        for age in range(73, 121):
            rmd = calculate_rmd(balances, age)
            assert rmd.amount == pytest.approx(400_000 / get_distribution_period(age))

    def test_period_non_increasing(self):
        """Test distribution periods never increase with age"""
        periods = [get_distribution_period(age) for age in range(72, 125)]
        assert all(a >= b for a, b in zip(periods, periods[1:]))

    def test_table_is_sorted(self):
        """Test lookup table ages ascend"""
        ages = [age for age, _ in RMD_UNIFORM_LIFETIME_TABLE]
        assert ages == sorted(ages)
        assert ages[0] == 72 and ages[-1] == 120

    def test_beyond_table_uses_minimum_period(self):
        """Test ages past 120 clamp to the minimum period"""
        balances = AccountSet(traditional_ira=10_000)
        rmd = calculate_rmd(balances, 125)
        assert rmd.period == 2.0
        assert rmd.amount == pytest.approx(5_000)

    def test_zero_pre_tax_balance(self):
        """Test required but zero when no pre-tax money remains"""
        rmd = calculate_rmd(AccountSet(roth_ira=100_000), 80)
        assert rmd.required is True
        assert rmd.amount == 0
        assert rmd.period is None


class TestApplyRMD:
    """Test RMD withdrawals from pre-tax accounts"""

    def test_401k_first_then_ira(self):
        """Test RMD drains the 401k before the IRA"""
        balances = AccountSet(traditional_401k=5_000, traditional_ira=20_000,
                              taxable=50_000, roth_ira=50_000)
        withdrawn = apply_rmd(balances, 10_000)
        assert withdrawn == 10_000
        assert balances.traditional_401k == 0
        assert balances.traditional_ira == 15_000
        assert balances.taxable == 50_000
        assert balances.roth_ira == 50_000

    def test_rmd_limited_to_pre_tax(self):
        """Test RMD never pulls from Roth or taxable accounts"""
        balances = AccountSet(traditional_401k=1_000, traditional_ira=2_000, taxable=10_000)
        withdrawn = apply_rmd(balances, 5_000)
        assert withdrawn == 3_000
        assert balances.pre_tax_total() == 0
        assert balances.taxable == 10_000

    def test_zero_amount(self):
        """Test zero RMD withdraws nothing"""
        balances = AccountSet(traditional_401k=1_000)
        assert apply_rmd(balances, 0) == 0
        assert balances.traditional_401k == 1_000
