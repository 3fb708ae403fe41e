# app/api/comments/test_comment_routes.py
"""
댓글 API 테스트
"""

def test_comment_lifecycle(client, store, auth_headers, make_post):
    make_post(post_id="post-1", user_id="alice")

    created = client.post('/api/posts/post-1/comments', json={"content": "同意"}, headers=auth_headers("bob"))
    assert created.status_code == 201
    body = created.get_json()['data']
    comment_id = body['comment']['comment_id']
    assert body['comment_count'] == 1

    liked = client.post(f'/api/comments/{comment_id}/like', headers=auth_headers("carol")).get_json()
    assert liked['data'] == {"comment_id": comment_id, "like_count": 1, "is_liked": True}

    listing = client.get('/api/posts/post-1/comments', headers=auth_headers("carol")).get_json()['data']
    assert [c['comment_id'] for c in listing['comments']] == [comment_id]
    assert listing['liked_comment_ids'] == [comment_id]

    unliked = client.delete(f'/api/comments/{comment_id}/like', headers=auth_headers("carol")).get_json()
    assert unliked['data'] == {"comment_id": comment_id, "like_count": 0, "is_liked": False}

    deleted = client.delete(f'/api/comments/{comment_id}', headers=auth_headers("bob")).get_json()
    assert deleted['data'] == {"comment_id": comment_id, "comment_count": 0}
    assert client.get('/api/posts/post-1/comments').get_json()['data']['comments'] == []

def test_comment_requires_content_and_login(client, auth_headers, make_post):
    make_post(post_id="post-1")

    empty = client.post('/api/posts/post-1/comments', json={"content": ""}, headers=auth_headers("bob"))
    anonymous = client.post('/api/posts/post-1/comments', json={"content": "hi"})

    assert empty.status_code == 400
    assert anonymous.status_code == 401

def test_unlike_comment_without_login(client):
    response = client.delete('/api/comments/c1/like')

    assert response.status_code == 401
    assert response.get_json()['success'] is False

def test_comments_of_deleted_post_are_hidden(client, auth_headers, make_post, make_comment):
    make_post(post_id="post-1", user_id="alice")
    make_comment(comment_id="c1", post_id="post-1")

    client.delete('/api/posts/post-1', headers=auth_headers("alice"))

    assert client.get('/api/posts/post-1/comments').get_json()['data']['comments'] == []
