import logging
from typing import List, NamedTuple, Optional

from ..models.goal import CompletedGoal
from .notifier import ChangeNotifier
from .storage_service import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

HISTORY_KEY = 'history'


class HistorySummary(NamedTuple):
    count: int
    total_amount: int
    total_days: int


class HistoryService(ChangeNotifier):
    """Ordered list of completed goals, persisted as a whole on every change."""

    def __init__(self, store: KeyValueStore):
        super().__init__()
        self.store = store
        self._entries: List[CompletedGoal] = self._load()

    def _load(self) -> List[CompletedGoal]:
        """Decode stored history, starting empty if anything is wrong with it."""
        try:
            raw = self.store.get(HISTORY_KEY, [])
            if not isinstance(raw, list):
                raise TypeError(f"expected a list, got {type(raw).__name__}")
            entries = [CompletedGoal.from_dict(item) for item in raw]
        except (StorageError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding unreadable history: {str(e)}")
            return []

        logger.info(f"Loaded {len(entries)} completed goals")
        return entries

    def _save(self) -> bool:
        try:
            self.store.set(HISTORY_KEY, [entry.to_dict() for entry in self._entries])
            return True
        except Exception as e:
            logger.error(f"Error saving history: {str(e)}", exc_info=True)
            return False

    def append(self, entry: CompletedGoal) -> None:
        """Add a completed goal to the end of the history."""
        self._entries.append(entry)
        self._save()
        logger.info(f"Recorded completed goal {entry.title!r} ({entry.total_amount} over {entry.days} days)")
        self.notify('append')

    def remove(self, entry_id: str) -> bool:
        """Delete the entry with the given id. Returns False if there is none."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[index]
                self._save()
                logger.info(f"Deleted completed goal {entry_id}")
                self.notify('remove')
                return True
        return False

    def get(self, entry_id: str) -> Optional[CompletedGoal]:
        return next((entry for entry in self._entries if entry.id == entry_id), None)

    def all(self) -> List[CompletedGoal]:
        """All entries in insertion order."""
        return list(self._entries)

    def summary(self) -> HistorySummary:
        return HistorySummary(
            count=len(self._entries),
            total_amount=sum(entry.total_amount for entry in self._entries),
            total_days=sum(entry.days for entry in self._entries)
        )
