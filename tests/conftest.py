from datetime import datetime

import pytest

from merit_fund.web import create_app
from merit_fund.web.services.history_service import HistoryService
from merit_fund.web.services.session_service import SessionService
from merit_fund.web.services.storage_service import MemoryStore


def iso_day(now: datetime) -> str:
    return now.strftime('%Y-%m-%d')


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def history(store):
    return HistoryService(store)


@pytest.fixture
def session(store):
    return SessionService(store, day_formatter=iso_day)


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', test_config={
        'CACHED_DATA_DIR': tmp_path / 'cached_data',
        'LOGS_DIR': tmp_path / 'logs',
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
