"""Per-app wiring of the stores, the screen controller and feedback."""
import logging
from pathlib import Path
from typing import Optional

from flask import current_app

from .feedback_service import FeedbackService
from .history_service import HistoryService
from .navigation_service import NavigationService
from .session_service import SessionService
from .storage_service import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'merit_fund'


class AppServices:
    """Everything a request handler needs, built once per Flask app."""

    def __init__(self, store: KeyValueStore, day_format: str = '%x',
                 default_daily_amount: int = 100, pulse_clear_delay: float = 0.6):
        self.store = store
        self.history = HistoryService(store)
        self.session = SessionService(
            store,
            day_formatter=lambda now: now.strftime(day_format),
            default_daily_amount=default_daily_amount
        )
        self.navigation = NavigationService(self.session, self.history)
        self.feedback = FeedbackService(clear_delay=pulse_clear_delay)
        self.feedback.attach(self.session)


def init_services(app, store: Optional[KeyValueStore] = None) -> AppServices:
    """Build the services from app config and register them on the app."""
    if store is None:
        store = JsonFileStore(Path(app.config['CACHED_DATA_DIR']))

    services = AppServices(
        store,
        day_format=app.config.get('DAY_FORMAT', '%x'),
        default_daily_amount=app.config.get('DEFAULT_DAILY_AMOUNT', 100),
        pulse_clear_delay=app.config.get('PULSE_CLEAR_DELAY', 0.6)
    )
    app.extensions[EXTENSION_KEY] = services
    logger.info(f"Opened on {services.navigation.current_screen.value} screen")
    return services


def get_services() -> AppServices:
    return current_app.extensions[EXTENSION_KEY]
