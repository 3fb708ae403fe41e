# app/api/users/test_user_stats_routes.py
"""
사용자 활동 통계 API 테스트
"""
import pytest

from app.core.errors import InvalidArgument

def test_user_stats(client, services, make_post):
    make_post(post_id="p1", user_id="alice", like_count=3)
    make_post(post_id="p2", user_id="alice", like_count=2)
    make_post(post_id="gone", user_id="alice", like_count=10, is_deleted=True)
    make_post(post_id="other", user_id="bob", like_count=7)
    services['check_ins'].create_check_in("alice", "yes")
    services['check_ins'].create_check_in("bob", "no")

    response = client.get('/api/users/alice/stats')

    assert response.status_code == 200
    assert response.get_json()['data'] == {
        "user_id": "alice",
        "check_in_count": 1,
        "post_count": 2,
        "total_like_count": 5,
    }

def test_user_without_activity(client):
    data = client.get('/api/users/nobody/stats').get_json()['data']

    assert (data['check_in_count'], data['post_count'], data['total_like_count']) == (0, 0, 0)

def test_negative_counters_are_not_summed(client, make_post):
    make_post(post_id="p1", user_id="alice", like_count=-2)
    make_post(post_id="p2", user_id="alice", like_count=4)

    assert client.get('/api/users/alice/stats').get_json()['data']['total_like_count'] == 4

def test_invalid_user_id(client, services):
    with pytest.raises(InvalidArgument):
        services['users'].get_user_stats("..")
    assert client.get('/api/users/__id__/stats').status_code == 400
