# app/api/check_ins/test_check_in_service.py
from datetime import date

import pytest

from app.core.errors import InvalidArgument, Unauthenticated
from app.utils.datetime_utils import DateTimeUtils

@pytest.fixture
def check_in_service(services):
    return services['check_ins']

def test_one_check_in_per_day(check_in_service, store):
    check_in_service.create_check_in("alice", "yes", date(2024, 3, 1))
    check_in_service.create_check_in("alice", "no", date(2024, 3, 1))

    records = store.query('check_ins', [('user_id', '==', "alice")])
    assert len(records) == 1
    assert records[0]['result'] == "no"
    assert records[0]['check_in_id'] == "alice_20240301"

def test_history_is_limited_to_month(check_in_service):
    for day in (date(2024, 2, 29), date(2024, 3, 15), date(2024, 3, 1), date(2024, 4, 1)):
        check_in_service.create_check_in("alice", "yes", day)
    check_in_service.create_check_in("bob", "yes", date(2024, 3, 2))

    history = check_in_service.get_history("alice", 2024, 3)

    assert [r['date'] for r in history] == ["2024-03-01", "2024-03-15"]

def test_history_validation(check_in_service):
    with pytest.raises(InvalidArgument):
        check_in_service.get_history("alice", 2024, 13)
    with pytest.raises(Unauthenticated):
        check_in_service.get_history(None, 2024, 3)

def test_today_stats(check_in_service):
    assert check_in_service.get_today_stats()['message'] == "今日还没有人打卡"

    check_in_service.create_check_in("alice", "yes")
    check_in_service.create_check_in("bob", "yes")
    check_in_service.create_check_in("carol", "no")

    stats = check_in_service.get_today_stats()
    assert stats['date'] == DateTimeUtils.to_date_string(DateTimeUtils.today())
    assert (stats['total_count'], stats['yes_count'], stats['no_count']) == (3, 2, 1)
    assert (stats['yes_percentage'], stats['no_percentage']) == (67, 33)
    assert stats['message'] == "今日 67% 的人赚了"

def test_check_in_routes(client, auth_headers):
    created = client.post('/api/check-ins', json={"result": "yes", "date": "2024-03-01"}, headers=auth_headers("alice"))
    invalid = client.post('/api/check-ins', json={"result": "maybe"}, headers=auth_headers("alice"))
    history = client.get('/api/check-ins/history?year=2024&month=3', headers=auth_headers("alice"))
    bad_month = client.get('/api/check-ins/history?year=2024&month=0', headers=auth_headers("alice"))

    assert created.status_code == 201
    assert created.get_json()['data']['date'] == "2024-03-01"
    assert invalid.status_code == 400
    assert [r['date'] for r in history.get_json()['data']] == ["2024-03-01"]
    assert bad_month.status_code == 400
    assert client.get('/api/check-ins/today').get_json()['success'] is True
