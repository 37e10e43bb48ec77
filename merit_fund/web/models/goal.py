import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..constants.icons import DEFAULT_ICON

DEFAULT_DAILY_AMOUNT = 100


@dataclass
class Goal:
    """The single in-progress savings goal, persisted under the ``session`` key."""

    title: str = ''
    daily_amount: int = DEFAULT_DAILY_AMOUNT
    total_saved: int = 0
    saved_days: int = 0
    selected_icon: str = DEFAULT_ICON
    is_goal_set: bool = False
    last_save_date: str = ''

    # attribute name -> persisted field name
    FIELD_NAMES = {
        'title': 'goalTitle',
        'daily_amount': 'dailyAmount',
        'total_saved': 'totalSaved',
        'saved_days': 'savedDays',
        'selected_icon': 'selectedIcon',
        'is_goal_set': 'isGoalSet',
        'last_save_date': 'lastSaveDate',
    }

    def to_dict(self) -> Dict[str, Any]:
        """Convert goal to its persisted dictionary form."""
        return {key: getattr(self, attr) for attr, key in self.FIELD_NAMES.items()}

    @classmethod
    def from_dict(cls, data: dict, default_daily_amount: int = DEFAULT_DAILY_AMOUNT) -> 'Goal':
        """Create a Goal from a persisted dictionary.

        Each field is read independently; a missing or wrongly typed value
        falls back to that field's default.
        """
        goal = cls(daily_amount=default_daily_amount)
        if not isinstance(data, dict):
            return goal

        for attr, key in cls.FIELD_NAMES.items():
            value = data.get(key)
            default = getattr(goal, attr)
            # bool is a subclass of int, so compare exact types
            if value is not None and type(value) is type(default):
                setattr(goal, attr, value)
        return goal


@dataclass(frozen=True)
class CompletedGoal:
    """Immutable snapshot of a Goal taken when it is completed."""

    title: str
    total_amount: int
    days: int
    icon_name: str
    date: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def snapshot(cls, goal: Goal, now: Optional[datetime] = None) -> 'CompletedGoal':
        """Copy the completable fields of a goal into a new history entry."""
        return cls(
            title=goal.title,
            total_amount=goal.total_saved,
            days=goal.saved_days,
            icon_name=goal.selected_icon,
            date=now or datetime.now()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'totalAmount': self.total_amount,
            'days': self.days,
            'iconName': self.icon_name,
            'date': self.date.isoformat()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CompletedGoal':
        """Create an entry from a dictionary.

        Raises KeyError, TypeError or ValueError when the data is malformed.
        """
        for key in ('totalAmount', 'days'):
            if type(data[key]) is not int:
                raise TypeError(f"{key} must be an integer, got {data[key]!r}")
        if not isinstance(data['id'], str) or not isinstance(data['title'], str):
            raise TypeError("id and title must be strings")

        return cls(
            id=data['id'],
            title=data['title'],
            total_amount=data['totalAmount'],
            days=data['days'],
            icon_name=str(data['iconName']),
            date=datetime.fromisoformat(data['date'])
        )
