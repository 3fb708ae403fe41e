# app/services/test_counters.py
from app.services.counters import read_counter, decrement_clamped, remove_likes
from app.services.document_store import InMemoryDocumentStore

def test_read_counter_defaults_to_zero():
    assert read_counter(None, 'like_count') == 0
    assert read_counter({'like_count': "3"}, 'like_count') == 0
    assert read_counter({'like_count': True}, 'like_count') == 0
    assert read_counter({'like_count': 4}, 'like_count') == 4

def test_decrement_clamped():
    store = InMemoryDocumentStore()
    store.add('comments', {'like_count': 2}, doc_id='c1')
    store.add('comments', {'like_count': 0}, doc_id='c2')

    assert decrement_clamped(store, 'comments', 'c1', 'like_count') == 1
    assert decrement_clamped(store, 'comments', 'c2', 'like_count') == 0
    assert store.get('comments', 'c2')['like_count'] == 0

def test_remove_likes_counts_only_its_own_deletions():
    store = InMemoryDocumentStore()
    for like_id in ("a", "b"):
        store.add('post_likes', {'like_id': like_id, 'post_id': 'p1', 'user_id': 'bob'}, doc_id=like_id)
    store.add('post_likes', {'like_id': 'c', 'post_id': 'p1', 'user_id': 'carol'}, doc_id='c')
    store.remove('post_likes', 'b')

    assert remove_likes(store, 'post_likes', [('user_id', '==', 'bob')]) == 1
    assert remove_likes(store, 'post_likes', [('user_id', '==', 'bob')]) == 0
    assert store.count('post_likes') == 1
