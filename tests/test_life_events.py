"""
Unit tests for life event impact calculation.
"""
from life_events import LifeEvent, get_life_event_impact


class TestLifeEventImpact:
    """Test income and expense totals by age"""

    def test_no_events(self):
        """Test empty event list has no impact"""
        impact = get_life_event_impact(40, [])
        assert impact.expense == 0
        assert impact.income == 0

    def test_half_open_interval(self):
        """Test event is active from start_age up to but not including the end"""
        events = [LifeEvent("expense", 20_000, start_age=50, duration=4)]
        assert get_life_event_impact(49, events).expense == 0
        assert get_life_event_impact(50, events).expense == 20_000
        assert get_life_event_impact(53, events).expense == 20_000
        assert get_life_event_impact(54, events).expense == 0

    def test_totals_are_not_netted(self):
        """Test overlapping income and expense are reported separately"""
        events = [
            LifeEvent("expense", 20_000, start_age=50, duration=4),
            LifeEvent("expense", 5_000, start_age=52, duration=1),
            LifeEvent("income", 8_000, start_age=51, duration=10),
        ]
        impact = get_life_event_impact(52, events)
        assert impact.expense == 25_000
        assert impact.income == 8_000
        assert impact.net == -17_000

    def test_non_expense_counts_as_income(self):
        """Test any kind other than expense is treated as income"""
        events = [LifeEvent("windfall", 1_000, start_age=60, duration=1)]
        assert get_life_event_impact(60, events).income == 1_000

    def test_zero_duration_never_active(self):
        """Test a zero-length event contributes nothing"""
        events = [LifeEvent("income", 1_000, start_age=60, duration=0)]
        assert get_life_event_impact(60, events).income == 0


class TestLifeEventFromDict:
    """Test building events from config dictionaries"""

    def test_camel_case_keys(self):
        """Test camelCase keys are accepted"""
        event = LifeEvent.from_dict(
            {'name': 'College', 'type': 'expense', 'amount': 20_000, 'startAge': 50, 'duration': 4})
        assert event == LifeEvent("expense", 20_000, 50, 4, "College")

    def test_snake_case_keys(self):
        """Test snake_case keys are accepted"""
        event = LifeEvent.from_dict({'event_type': 'income', 'amount': 5_000, 'start_age': 62})
        assert event.event_type == "income"
        assert event.start_age == 62
        assert event.duration == 1
