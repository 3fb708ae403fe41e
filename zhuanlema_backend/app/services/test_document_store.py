# app/services/test_document_store.py
"""
InMemoryDocumentStore가 Firestore와 같은 조회 의미를 따르는지 확인합니다.
"""
import pytest

from app.services.document_store import InMemoryDocumentStore, DocumentMissingError

@pytest.fixture
def memory_store():
    store = InMemoryDocumentStore()
    store.add('posts', {'n': 1, 'owner': 'a'}, doc_id='p1')
    store.add('posts', {'n': 3, 'owner': 'b'}, doc_id='p3')
    store.add('posts', {'n': 2, 'owner': 'a'}, doc_id='p2')
    store.add('posts', {'owner': 'a'}, doc_id='no-n')
    return store

def test_returned_documents_are_copies(memory_store):
    doc = memory_store.get('posts', 'p1')
    doc['n'] = 100

    assert memory_store.get('posts', 'p1')['n'] == 1

def test_query_filters_and_order(memory_store):
    result = memory_store.query('posts', [('owner', '==', 'a')], order_by='n', descending=True)

    # 정렬 필드가 없는 문서는 제외
    assert [d['n'] for d in result] == [2, 1]

def test_missing_field_never_matches(memory_store):
    assert memory_store.count('posts', [('n', '!=', 5)]) == 3

def test_query_start_after_and_offset(memory_store):
    assert [d['n'] for d in memory_store.query('posts', order_by='n', start_after='p1')] == [2, 3]
    assert [d['n'] for d in memory_store.query('posts', order_by='n', offset=1, limit=1)] == [2]

def test_in_operator(memory_store):
    assert memory_store.count('posts', [('n', 'in', [1, 3])]) == 2

def test_unknown_operator(memory_store):
    with pytest.raises(ValueError):
        memory_store.query('posts', [('n', 'array-contains', 1)])

def test_update_and_increment_missing_document(memory_store):
    with pytest.raises(DocumentMissingError):
        memory_store.update('posts', 'nope', {'n': 1})
    with pytest.raises(DocumentMissingError):
        memory_store.increment('posts', 'nope', 'n', 1)

def test_increment_treats_missing_field_as_zero(memory_store):
    memory_store.increment('posts', 'no-n', 'n', -1)

    assert memory_store.get('posts', 'no-n')['n'] == -1

def test_bulk_remove_and_update(memory_store):
    assert memory_store.update_where('posts', [('owner', '==', 'a')], {'flag': True}) == 3
    assert memory_store.remove_where('posts', [('flag', '==', True)]) == 3
    assert memory_store.remove_where('posts', [('flag', '==', True)]) == 0
    assert [d['owner'] for d in memory_store.query('posts')] == ['b']

def test_create_only_when_absent(memory_store):
    assert memory_store.create('likes', 'l1', {'n': 1}) is True
    assert memory_store.create('likes', 'l1', {'n': 2}) is False
    assert memory_store.get('likes', 'l1') == {'n': 1}

def test_remove_reports_whether_it_deleted(memory_store):
    assert memory_store.remove('posts', 'p1') is True
    assert memory_store.remove('posts', 'p1') is False
