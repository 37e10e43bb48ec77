import threading
from datetime import datetime

import pytest

from merit_fund.web.services.session_service import SessionService, localized_short_date
from merit_fund.web.services.storage_service import JsonFileStore, MemoryStore


def at(day: str, hour: int = 9) -> datetime:
    return datetime.fromisoformat(f"{day}T{hour:02d}:00:00")


def test_new_session_has_defaults(session):
    assert session.is_goal_set is False
    assert session.daily_amount == 100
    assert session.total_saved == 0


def test_every_set_is_persisted_immediately(store, session):
    session.title = 'Temple Fund'
    assert store.get('session')['goalTitle'] == 'Temple Fund'
    session.total_saved = 300
    assert store.get('session')['totalSaved'] == 300


def test_session_reloads_from_store(store, session):
    session.start_goal('Temple Fund', '50', 'my_icon2')
    reloaded = SessionService(store)
    assert reloaded.goal == session.goal


def test_corrupt_session_starts_from_defaults():
    store = MemoryStore()
    store.set_raw('session', '{"goalTitle": ')
    session = SessionService(store)
    assert session.goal.title == ''
    assert session.is_goal_set is False


@pytest.mark.parametrize('text, expected', [
    ('250', 250), ('  40 ', 40), ('0', 0), ('-5', -5), ('1000000', 1000000),
])
def test_daily_amount_from_integer_text(session, text, expected):
    assert session.set_daily_amount_from_text(text) == expected
    assert session.daily_amount == expected


@pytest.mark.parametrize('text', ['', 'abc', '12.5', '1e3', '100元', None])
def test_daily_amount_from_bad_text_keeps_previous(session, text):
    session.set_daily_amount_from_text('75')
    assert session.set_daily_amount_from_text(text) == 75
    assert session.daily_amount == 75


def test_daily_amount_from_bad_text_without_previous_is_default(session):
    session.set_daily_amount_from_text('oops')
    assert session.daily_amount == 100


def test_start_goal_populates_fields(session):
    session.start_goal('Temple Fund', '100', 'my_icon3')
    assert session.title == 'Temple Fund'
    assert session.daily_amount == 100
    assert session.selected_icon == 'my_icon3'
    assert session.is_goal_set is True


def test_start_goal_with_unknown_icon_uses_first(session):
    session.start_goal('', '10', 'rocket')
    assert session.selected_icon == 'my_icon1'
    assert session.title == ''


def test_saves_on_same_day_count_one_day(session):
    session.start_goal('A', '30', 'my_icon1')
    for hour in (8, 12, 23):
        session.record_save(at('2024-03-01', hour))
    assert session.total_saved == 90
    assert session.saved_days == 1
    assert session.last_save_date == '2024-03-01'


def test_saves_on_distinct_days_count_each_day(session):
    session.start_goal('A', '10', 'my_icon1')
    days = ['2024-03-01', '2024-03-02', '2024-03-05', '2024-04-01']
    for day in days:
        session.record_save(at(day, 8))
        session.record_save(at(day, 20))
    assert session.saved_days == len(days)
    assert session.total_saved == 2 * len(days) * 10


def test_day_check_compares_formatted_strings(store):
    # A coarse formatter puts every day of a month under one key
    session = SessionService(store, day_formatter=lambda now: now.strftime('%Y-%m'))
    session.start_goal('A', '10', 'my_icon1')
    session.record_save(at('2024-03-01'))
    session.record_save(at('2024-03-20'))
    assert session.saved_days == 1


def test_default_day_formatter_has_no_time():
    morning = localized_short_date(at('2024-03-01', 1))
    evening = localized_short_date(at('2024-03-01', 23))
    assert morning == evening
    assert morning != localized_short_date(at('2024-03-02', 1))


def test_temple_fund_scenario(session, history):
    session.start_goal('Temple Fund', '100', 'my_icon1')
    for _ in range(3):
        session.record_save(at('2024-01-01'))
    session.record_save(at('2024-01-02'))

    assert session.total_saved == 400
    assert session.saved_days == 2

    entry = session.complete_goal(history)

    entries = history.all()
    assert entries == [entry]
    assert (entry.title, entry.total_amount, entry.days) == ('Temple Fund', 400, 2)
    assert session.total_saved == 0
    assert session.saved_days == 0
    assert session.is_goal_set is False


def test_complete_resets_every_field(session, history):
    session.start_goal('Trip', '20', 'my_icon2')
    session.record_save(at('2024-05-05'))
    session.complete_goal(history)

    assert session.title == ''
    assert session.daily_amount == 100
    assert session.selected_icon == 'my_icon1'
    assert session.last_save_date == ''


def test_new_goal_same_day_counts_its_first_day(session, history):
    session.start_goal('First', '10', 'my_icon1')
    session.record_save(at('2024-05-05'))
    session.complete_goal(history)

    session.start_goal('Second', '10', 'my_icon1')
    session.record_save(at('2024-05-05', 18))
    assert session.saved_days == 1


def test_complete_without_active_goal_does_nothing(session, history):
    assert session.complete_goal(history) is None
    assert history.all() == []


def test_cancel_setup_creates_no_history(session, history):
    session.is_goal_set = True
    session.cancel_setup()
    assert session.is_goal_set is False
    assert history.all() == []


def test_listeners_receive_changes(session):
    events = []
    session.subscribe(lambda event, source: events.append(event))
    session.start_goal('A', '10', 'my_icon1')
    session.record_save(at('2024-01-01'))

    assert 'is_goal_set' in events
    assert events[-1] == 'save'


def test_failing_listener_does_not_block_save(session):
    def broken(event, source):
        raise RuntimeError('render failed')

    session.subscribe(broken)
    session.start_goal('A', '10', 'my_icon1')
    session.record_save(at('2024-01-01'))
    assert session.total_saved == 10


def test_unsubscribe_stops_notifications(session):
    events = []
    listener = session.subscribe(lambda event, source: events.append(event))
    session.unsubscribe(listener)
    session.title = 'A'
    assert events == []


def test_returned_goal_is_a_copy(session):
    goal = session.goal
    goal.total_saved = 999
    assert session.total_saved == 0


@pytest.mark.parametrize('text', ['1_000', '١٢', '５', '12 3'])
def test_daily_amount_accepts_only_ascii_digits(session, text):
    session.set_daily_amount_from_text('75')
    assert session.set_daily_amount_from_text(text) == 75


def test_daily_amount_accepts_explicit_plus_sign(session):
    assert session.set_daily_amount_from_text('+5') == 5


def test_stored_session_without_amount_uses_configured_default():
    store = MemoryStore({'session': {'goalTitle': 'Trip', 'dailyAmount': 'lots', 'isGoalSet': True}})
    session = SessionService(store, default_daily_amount=50)
    assert session.title == 'Trip'
    assert session.daily_amount == 50


def test_concurrent_saves_on_one_day_count_one_day(tmp_path):
    session = SessionService(JsonFileStore(tmp_path), day_formatter=lambda now: '2024-01-01')
    session.start_goal('A', '10', 'my_icon1')
    start = threading.Barrier(8)

    def tap():
        start.wait()
        session.record_save()

    threads = [threading.Thread(target=tap) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert session.total_saved == 80
    assert session.saved_days == 1
    assert SessionService(JsonFileStore(tmp_path)).saved_days == 1
