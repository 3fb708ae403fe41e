# conftest.py
"""
공용 pytest 픽스처

- 모든 테스트는 메모리 저장소(RecordingStore)로 동작하며 Firebase에 접속하지 않습니다.
- 인증 헤더는 flask_jwt_extended로 실제 액세스 토큰을 발급해 만듭니다.
"""
from dataclasses import asdict

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from app.models.comment import Comment
from app.models.like import PostLike, CommentLike
from app.models.post import Post
from app.services.document_store import InMemoryDocumentStore


class RecordingStore(InMemoryDocumentStore):
    """
    테스트용 저장소.
    - 쓰기 호출을 (메서드, 컬렉션)으로 writes에 기록합니다.
    - failures에 등록된 (메서드, 컬렉션) 조합에서는 실패합니다.
    - barriers[컬렉션]에 threading.Barrier를 두면 해당 컬렉션 조회 직후 스레드들이 서로를 기다립니다.
    """

    def __init__(self):
        super().__init__()
        self.writes = []
        self.failures = set()
        self.barriers = {}

    def _record(self, method, collection):
        self.writes.append((method, collection))
        if (method, collection) in self.failures:
            raise RuntimeError(f"simulated {method} failure on {collection}")

    def add(self, collection, data, doc_id=None):
        self._record('add', collection)
        return super().add(collection, data, doc_id)

    def create(self, collection, doc_id, data):
        self._record('create', collection)
        return super().create(collection, doc_id, data)

    def update(self, collection, doc_id, fields):
        self._record('update', collection)
        super().update(collection, doc_id, fields)

    def increment(self, collection, doc_id, field, delta):
        self._record('increment', collection)
        super().increment(collection, doc_id, field, delta)

    def remove(self, collection, doc_id):
        self._record('remove', collection)
        return super().remove(collection, doc_id)

    def query(self, collection, *args, **kwargs):
        result = super().query(collection, *args, **kwargs)
        barrier = self.barriers.get(collection)
        if barrier is not None:
            barrier.wait(timeout=5)
        return result

    def remove_where(self, collection, filters):
        self._record('remove_where', collection)
        return super().remove_where(collection, filters)

    def update_where(self, collection, filters, fields):
        self._record('update_where', collection)
        return super().update_where(collection, filters, fields)


@pytest.fixture
def store():
    return RecordingStore()

@pytest.fixture
def app(store):
    return create_app('testing', store=store)

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def services(app):
    return app.services

@pytest.fixture
def make_token(app):
    def _make(user_id):
        with app.app_context():
            return create_access_token(identity=user_id)
    return _make

@pytest.fixture
def auth_headers(make_token):
    def _headers(user_id):
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return _headers

@pytest.fixture
def make_post(store):
    """게시글 문서를 직접 저장합니다."""
    def _make(post_id="post-1", user_id="alice", **overrides):
        post = asdict(Post(post_id=post_id, user_id=user_id, nickname=user_id,
                           content="今天赚了", images=["img/1.png"], tags=["A股"]))
        post.update(overrides)
        store.add('posts', post, doc_id=post_id)
        return post
    return _make

@pytest.fixture
def make_comment(store):
    def _make(comment_id="comment-1", post_id="post-1", user_id="bob", **overrides):
        comment = asdict(Comment(comment_id=comment_id, post_id=post_id, user_id=user_id,
                                 nickname=user_id, content="同意"))
        comment.update(overrides)
        store.add('comments', comment, doc_id=comment_id)
        return comment
    return _make

@pytest.fixture
def make_post_like(store):
    def _make(post_id="post-1", user_id="bob", like_id=None):
        like = asdict(PostLike(like_id=like_id or f"post_{user_id}_{post_id}", post_id=post_id, user_id=user_id))
        store.add('post_likes', like, doc_id=like['like_id'])
        return like
    return _make

@pytest.fixture
def make_comment_like(store):
    def _make(comment_id="comment-1", post_id="post-1", user_id="carol", like_id=None):
        like = asdict(CommentLike(like_id=like_id or f"comment_{user_id}_{comment_id}",
                                  comment_id=comment_id, post_id=post_id, user_id=user_id))
        store.add('comment_likes', like, doc_id=like['like_id'])
        return like
    return _make
