import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]


class ChangeNotifier:
    """Callback list that rendering layers register with for change notifications."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        """Register a listener called as ``listener(event, source)``."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on {event}: {str(e)}", exc_info=True)
