"""
Session State Store: the in-progress goal and its active flag.
"""
import logging
import re
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional

from ..constants.icons import normalize_icon
from ..models.goal import Goal, CompletedGoal, DEFAULT_DAILY_AMOUNT
from .history_service import HistoryService
from .notifier import ChangeNotifier
from .storage_service import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

SESSION_KEY = 'session'

# Optionally signed ASCII digits; no underscores or other scripts' numerals
AMOUNT_PATTERN = re.compile(r'[+-]?[0-9]+')


def localized_short_date(now: datetime) -> str:
    """The locale's short date representation, without time."""
    return now.strftime('%x')


class SessionService(ChangeNotifier):
    """Holds the current Goal; every field change is written through immediately.

    Listeners receive the name of the changed field, or ``'save'`` after a
    save has been recorded.
    """

    def __init__(self, store: KeyValueStore,
                 day_formatter: Callable[[datetime], str] = localized_short_date,
                 default_daily_amount: int = DEFAULT_DAILY_AMOUNT):
        super().__init__()
        self.store = store
        self.day_formatter = day_formatter
        self.default_daily_amount = default_daily_amount
        # Guards read-modify-write sequences when requests arrive on several threads
        self._lock = threading.RLock()
        self._goal = self._load()

    def _load(self) -> Goal:
        try:
            data = self.store.get(SESSION_KEY)
        except StorageError as e:
            logger.warning(f"Discarding unreadable session: {str(e)}")
            data = None

        if data is None:
            return self._default_goal()
        return Goal.from_dict(data, default_daily_amount=self.default_daily_amount)

    def _default_goal(self) -> Goal:
        return Goal(daily_amount=self.default_daily_amount)

    def _save(self) -> bool:
        try:
            self.store.set(SESSION_KEY, self._goal.to_dict())
            return True
        except Exception as e:
            logger.error(f"Error saving session: {str(e)}", exc_info=True)
            return False

    def _set(self, attr: str, value: Any) -> None:
        with self._lock:
            setattr(self._goal, attr, value)
            self._save()
        self.notify(attr)

    @property
    def goal(self) -> Goal:
        """A copy of the current goal."""
        return replace(self._goal)

    # Field accessors

    @property
    def title(self) -> str:
        return self._goal.title

    @title.setter
    def title(self, value: str):
        self._set('title', value)

    @property
    def daily_amount(self) -> int:
        return self._goal.daily_amount

    @daily_amount.setter
    def daily_amount(self, value: int):
        self._set('daily_amount', value)

    @property
    def total_saved(self) -> int:
        return self._goal.total_saved

    @total_saved.setter
    def total_saved(self, value: int):
        self._set('total_saved', value)

    @property
    def saved_days(self) -> int:
        return self._goal.saved_days

    @saved_days.setter
    def saved_days(self, value: int):
        self._set('saved_days', value)

    @property
    def selected_icon(self) -> str:
        return self._goal.selected_icon

    @selected_icon.setter
    def selected_icon(self, value: str):
        self._set('selected_icon', normalize_icon(value))

    @property
    def is_goal_set(self) -> bool:
        return self._goal.is_goal_set

    @is_goal_set.setter
    def is_goal_set(self, value: bool):
        self._set('is_goal_set', bool(value))

    @property
    def last_save_date(self) -> str:
        return self._goal.last_save_date

    @last_save_date.setter
    def last_save_date(self, value: str):
        self._set('last_save_date', value)

    # Operations

    def set_daily_amount_from_text(self, raw: str) -> int:
        """Parse free-text input into the daily amount.

        Unparseable text leaves the current amount in place.
        """
        text = str(raw).strip()
        if not AMOUNT_PATTERN.fullmatch(text):
            logger.debug(f"Ignoring non-numeric daily amount {raw!r}")
            return self.daily_amount

        amount = int(text)
        self.daily_amount = amount
        return amount

    def start_goal(self, title: str, amount_text: str, icon: str) -> Goal:
        """Populate a new goal from the setup form and mark it active."""
        with self._lock:
            self.title = str(title) if title is not None else ''
            self.set_daily_amount_from_text(amount_text)
            self.selected_icon = str(icon) if icon is not None else ''
            self.total_saved = 0
            self.saved_days = 0
            self.last_save_date = ''
            self.is_goal_set = True
            logger.info(f"Started goal {self.title!r} at {self.daily_amount} per day")
            return self.goal

    def record_save(self, now: Optional[datetime] = None) -> Goal:
        """Add one daily amount; count the day if it differs from the last save's day."""
        now = now or datetime.now()
        with self._lock:
            self.total_saved = self.total_saved + self.daily_amount

            today = self.day_formatter(now)
            if self.last_save_date != today:
                self.saved_days = self.saved_days + 1
                self.last_save_date = today

            logger.debug(f"Saved {self.daily_amount}: total {self.total_saved} over {self.saved_days} days")
            self.notify('save')
            return self.goal

    def complete_goal(self, history: HistoryService, now: Optional[datetime] = None) -> Optional[CompletedGoal]:
        """Move the active goal into history and reset the session."""
        with self._lock:
            if not self.is_goal_set:
                logger.warning("Complete requested with no active goal")
                return None

            entry = CompletedGoal.snapshot(self._goal, now)
            history.append(entry)
            self.reset()
            return entry

    def cancel_setup(self) -> None:
        """Abandon setup without recording anything."""
        self.is_goal_set = False

    def reset(self) -> None:
        """Restore every field to its default."""
        with self._lock:
            self._goal = self._default_goal()
            self._save()
        self.notify('reset')
