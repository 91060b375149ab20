"""
Life events: one-time or recurring income and expenses keyed by age.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, NamedTuple

EVENT_INCOME = "income"
EVENT_EXPENSE = "expense"


@dataclass(frozen=True)
class LifeEvent:
    """An income or expense active for ages [start_age, start_age + duration)"""
    event_type: str
    amount: float
    start_age: float
    duration: float = 1
    name: str = ""

    def is_active(self, age: float) -> bool:
        return self.start_age <= age < self.start_age + self.duration

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifeEvent":
        """Build an event from a config dict (camelCase or snake_case keys)"""
        return cls(
            event_type=data.get('event_type', data.get('type', EVENT_EXPENSE)),
            amount=data.get('amount', 0),
            start_age=data.get('start_age', data.get('startAge', 0)),
            duration=data.get('duration', 1),
            name=data.get('name', data.get('description', '')),
        )


class LifeEventImpact(NamedTuple):
    """Unnetted event totals for a single age"""
    expense: float
    income: float

    @property
    def net(self) -> float:
        return self.income - self.expense


def get_life_event_impact(age: float, events: Iterable[LifeEvent]) -> LifeEventImpact:
    """
    Total the income and expense of every event active at ``age``.

    Anything that is not an expense counts as income.
    """
    expense = 0.0
    income = 0.0

    for event in events:
        if not event.is_active(age):
            continue
        if event.event_type == EVENT_EXPENSE:
            expense += event.amount
        else:
            income += event.amount

    return LifeEventImpact(expense=expense, income=income)
