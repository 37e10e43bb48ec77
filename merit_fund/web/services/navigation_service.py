"""
Screen routing: picks which screen is presented and applies button events.
"""
import logging
import threading
from enum import Enum
from typing import Optional

from ..utils.error_handlers import ServiceError
from .history_service import HistoryService
from .session_service import SessionService

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    WELCOME = 'Welcome'
    SETUP = 'Setup'
    SAVING = 'Saving'
    SUCCESS = 'Success'


# event -> screens it may be dispatched from (None means any)
TRANSITIONS = {
    'start_plan': {Screen.WELCOME},
    'view_history': None,
    'dismiss_history': None,
    'confirm_setup': {Screen.SETUP},
    'cancel_setup': {Screen.SETUP},
    'save': {Screen.SAVING},
    'complete_goal': {Screen.SAVING},
    'acknowledge': {Screen.SUCCESS},
}

MODAL_EVENTS = {'view_history', 'dismiss_history'}

# form fields each event accepts; anything else in a payload is dropped
PAYLOAD_FIELDS = {
    'confirm_setup': ('title', 'amount', 'icon'),
}


class NavigationService:
    """Routes between Welcome, Setup, Saving and Success, plus the history modal.

    Only ``is_goal_set`` is persisted. ``current_path`` lives in memory, so a
    fresh process always opens on Welcome or Saving.
    """

    def __init__(self, session: SessionService, history: HistoryService):
        self.session = session
        self.history = history
        self.current_path = Screen.SAVING if session.is_goal_set else Screen.WELCOME
        self.show_history = False
        # One event at a time, even under a threaded server
        self._lock = threading.RLock()

    @property
    def current_screen(self) -> Screen:
        if not self.session.is_goal_set:
            return Screen.WELCOME if self.current_path == Screen.WELCOME else Screen.SETUP
        return Screen.SUCCESS if self.current_path == Screen.SUCCESS else Screen.SAVING

    def can_dispatch(self, event: str) -> bool:
        if event not in TRANSITIONS:
            return False
        if event == 'dismiss_history':
            return self.show_history
        if self.show_history and event not in MODAL_EVENTS:
            return False
        allowed = TRANSITIONS[event]
        return allowed is None or self.current_screen in allowed

    def dispatch(self, event: str, /, **payload) -> bool:
        """Apply an event. Events that don't fit the current screen are ignored.

        Returns True if the event was applied. Raises ServiceError for an
        event name that doesn't exist.
        """
        if event not in TRANSITIONS:
            raise ServiceError(f"Unknown event: {event}", 404)

        with self._lock:
            if not self.can_dispatch(event):
                logger.warning(f"Ignoring {event} on {self.current_screen.value} screen"
                               f"{' with history open' if self.show_history else ''}")
                return False

            kwargs = {key: payload[key] for key in PAYLOAD_FIELDS.get(event, ()) if key in payload}
            handler = getattr(self, f"_on_{event}")
            handler(**kwargs)
            logger.debug(f"{event} -> {self.current_screen.value}")
            return True

    def remove_history_entry(self, entry_id: str) -> bool:
        """Delete a completed goal, serialized with screen events."""
        with self._lock:
            return self.history.remove(entry_id)

    def _on_start_plan(self):
        self.current_path = Screen.SETUP

    def _on_view_history(self):
        self.show_history = True

    def _on_dismiss_history(self):
        self.show_history = False

    def _on_confirm_setup(self, title: str = '', amount: str = '', icon: Optional[str] = None):
        self.session.start_goal(title, amount, icon or '')
        self.current_path = Screen.SAVING

    def _on_cancel_setup(self):
        self.session.cancel_setup()
        self.current_path = Screen.WELCOME

    def _on_save(self):
        self.session.record_save()

    def _on_complete_goal(self):
        self.current_path = Screen.SUCCESS

    def _on_acknowledge(self):
        self.session.complete_goal(self.history)
        self.current_path = Screen.WELCOME
