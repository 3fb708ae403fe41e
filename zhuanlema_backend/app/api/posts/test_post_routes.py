# app/api/posts/test_post_routes.py
"""
게시글 API 응답 봉투({success, data?, message?}) 테스트
"""

def test_create_post_and_list(client, auth_headers):
    response = client.post('/api/posts', json={"content": "  今天赚了  ", "tags": ["A股"]},
                           headers=auth_headers("alice"))

    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    post_id = body['data']['post_id']

    feed = client.get('/api/posts').get_json()
    assert feed['success'] is True
    assert [p['post_id'] for p in feed['data']['posts']] == [post_id]
    assert feed['data']['posts'][0]['content'] == "今天赚了"
    assert feed['data']['liked_post_ids'] == []

def test_create_post_requires_content(client, auth_headers):
    response = client.post('/api/posts', json={"content": "   "}, headers=auth_headers("alice"))

    assert response.status_code == 400
    body = response.get_json()
    assert body['success'] is False
    assert body['error_code'] == "INVALID_ARGUMENT"
    assert 'content' in body['details']

def test_create_post_requires_login(client):
    response = client.post('/api/posts', json={"content": "hello"})

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error_code": "UNAUTHENTICATED", "message": "未登录"}

def test_delete_post_envelope(client, store, auth_headers, make_post, make_post_like):
    make_post(post_id="post-1", user_id="alice")
    make_post_like(post_id="post-1", user_id="bob")

    response = client.delete('/api/posts/post-1', headers=auth_headers("alice"))

    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['post_id'] == "post-1"
    assert body['data']['cascade']['post_likes'] == {"ok": True, "count": 1}
    assert store.get('posts', "post-1")['is_deleted'] is True

def test_delete_post_with_body_access_token(client, store, make_token, make_post):
    make_post(post_id="post-1", user_id="alice")

    response = client.delete('/api/posts/post-1', json={"access_token": make_token("alice")})

    assert response.get_json()['success'] is True
    assert store.get('posts', "post-1")['is_deleted'] is True

def test_delete_post_errors(client, store, auth_headers, make_post):
    make_post(post_id="post-1", user_id="alice")

    forbidden = client.delete('/api/posts/post-1', headers=auth_headers("mallory"))
    missing = client.delete('/api/posts/nope', headers=auth_headers("alice"))
    anonymous = client.delete('/api/posts/post-1', headers={"Authorization": "Bearer not-a-jwt"})

    assert forbidden.status_code == 403
    assert forbidden.get_json()['error_code'] == "PERMISSION_DENIED"
    assert missing.status_code == 404
    assert missing.get_json()['message'] == "帖子不存在"
    assert anonymous.status_code == 401
    assert store.get('posts', "post-1")['is_deleted'] is False

def test_store_failure_becomes_internal_error(client, store, auth_headers, make_post):
    make_post(post_id="post-1", user_id="alice")
    store.failures.add(('update', 'posts'))

    response = client.delete('/api/posts/post-1', headers=auth_headers("alice"))

    assert response.status_code == 500
    body = response.get_json()
    assert body['success'] is False
    assert body['error_code'] == "INTERNAL"
    assert body['message'].startswith("删除帖子失败")

def test_like_and_unlike_post(client, auth_headers, make_post):
    make_post(post_id="post-1", user_id="alice")

    liked = client.post('/api/posts/post-1/like', headers=auth_headers("bob")).get_json()
    feed = client.get('/api/posts', headers=auth_headers("bob")).get_json()
    unliked = client.delete('/api/posts/post-1/like', headers=auth_headers("bob")).get_json()

    assert liked['data'] == {"post_id": "post-1", "like_count": 1, "is_liked": True}
    assert feed['data']['liked_post_ids'] == ["post-1"]
    assert unliked['data'] == {"post_id": "post-1", "like_count": 0, "is_liked": False}

def test_feed_limit_is_clamped(client, make_post):
    for i in range(3):
        make_post(post_id=f"p{i}", user_id="alice")

    body = client.get('/api/posts?limit=0').get_json()

    assert len(body['data']['posts']) == 1

def test_unknown_route_uses_envelope(client):
    response = client.get('/api/unknown')

    assert response.status_code == 404
    assert response.get_json()['success'] is False
