"""
Fire-and-forget feedback for the save button: a haptic tap and "+amount" pulses.
"""
import logging
import threading
import uuid
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


def log_haptic(style: str) -> None:
    """Default haptic port; browsers vibrate from the rendered page instead."""
    logger.debug(f"Haptic impact ({style})")


class FeedbackService:
    """Reacts to recorded saves with a haptic impact and a transient pulse.

    Pulses are decoration only. Every save schedules one clear of the whole
    list after ``clear_delay`` seconds; timers are never cancelled.
    """

    def __init__(self, haptic: Callable[[str], None] = log_haptic, clear_delay: float = 0.6):
        self.haptic = haptic
        self.clear_delay = clear_delay
        self._pulses: List[str] = []
        self._lock = threading.Lock()

    def attach(self, session) -> None:
        """Subscribe to a session's change notifications."""
        session.subscribe(self.on_session_event)

    def on_session_event(self, event: str, source: Any = None) -> None:
        if event == 'save':
            self.trigger()

    def trigger(self) -> str:
        try:
            self.haptic('medium')
        except Exception as e:
            logger.warning(f"Haptic feedback failed: {str(e)}")

        pulse_id = uuid.uuid4().hex
        with self._lock:
            self._pulses.append(pulse_id)

        timer = threading.Timer(self.clear_delay, self.clear)
        timer.daemon = True
        timer.start()
        return pulse_id

    def clear(self) -> None:
        with self._lock:
            self._pulses.clear()

    @property
    def pulses(self) -> List[str]:
        with self._lock:
            return list(self._pulses)
