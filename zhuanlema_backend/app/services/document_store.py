# app/services/document_store.py
"""
문서 저장소 추상화 모듈

서비스 계층은 Firestore 클라이언트를 직접 만들지 않고 생성자로 DocumentStore를 주입받습니다.
- FirestoreDocumentStore: 운영용 (firebase_admin)
- InMemoryDocumentStore: 테스트 및 로컬 실행용

필터는 (필드, 연산자, 값) 튜플의 시퀀스입니다. 지원 연산자: ==, !=, <, <=, >, >=, in
"""
import copy
import logging
import operator
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

logger = logging.getLogger(__name__)

Filter = Tuple[str, str, Any]
OrderBy = Union[str, Sequence[str], None]


class DocumentMissingError(LookupError):
    """존재하지 않는 문서를 수정하려고 할 때 발생합니다."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"{collection}/{doc_id} 문서가 존재하지 않습니다.")
        self.collection = collection
        self.doc_id = doc_id


def _order_fields(order_by: OrderBy) -> List[str]:
    if not order_by:
        return []
    if isinstance(order_by, str):
        return [order_by]
    return list(order_by)


class DocumentStore(ABC):
    """컬렉션/문서 단위의 최소 저장소 인터페이스."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """문서를 딕셔너리로 반환합니다. 없으면 None."""

    @abstractmethod
    def add(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        """문서를 저장(덮어쓰기)하고 문서 ID를 반환합니다."""

    @abstractmethod
    def create(self, collection: str, doc_id: str, data: Dict[str, Any]) -> bool:
        """
        문서가 없을 때만 원자적으로 생성합니다.
        이미 있으면 아무것도 쓰지 않고 False를 반환합니다.
        """

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """일부 필드를 갱신합니다. 문서가 없으면 DocumentMissingError."""

    @abstractmethod
    def increment(self, collection: str, doc_id: str, field: str, delta: int) -> None:
        """숫자 필드를 원자적으로 증감합니다. 문서가 없으면 DocumentMissingError."""

    @abstractmethod
    def remove(self, collection: str, doc_id: str) -> bool:
        """문서를 원자적으로 삭제합니다. 이 호출이 실제로 지웠으면 True, 이미 없었으면 False."""

    @abstractmethod
    def query(self, collection: str, filters: Sequence[Filter] = (), order_by: OrderBy = None,
              descending: bool = False, limit: Optional[int] = None, offset: int = 0,
              start_after: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        조건에 맞는 문서 목록을 반환합니다.
        start_after가 주어지면 해당 문서 ID 다음부터 조회하며 offset은 무시됩니다.
        """

    @abstractmethod
    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        """조건에 맞는 문서 수를 반환합니다."""

    @abstractmethod
    def remove_where(self, collection: str, filters: Sequence[Filter]) -> int:
        """조건에 맞는 문서를 모두 삭제하고 삭제한 개수를 반환합니다."""

    @abstractmethod
    def update_where(self, collection: str, filters: Sequence[Filter], fields: Dict[str, Any]) -> int:
        """조건에 맞는 문서를 모두 갱신하고 갱신한 개수를 반환합니다."""


class FirestoreDocumentStore(DocumentStore):
    """firebase_admin Firestore 클라이언트 기반 구현."""

    # Firestore 배치 쓰기 한도(500)보다 여유 있게 잡습니다.
    BATCH_SIZE = 400

    def __init__(self, client=None):
        self.db = client or firestore.client()

    def _filtered(self, collection: str, filters: Sequence[Filter]):
        query = self.db.collection(collection)
        for field, op, value in filters:
            query = query.where(filter=FieldFilter(field, op, value))
        return query

    def get(self, collection, doc_id):
        doc = self.db.collection(collection).document(doc_id).get()
        return doc.to_dict() if doc.exists else None

    def add(self, collection, data, doc_id=None):
        doc_id = doc_id or str(uuid.uuid4())
        self.db.collection(collection).document(doc_id).set(data)
        return doc_id

    def create(self, collection, doc_id, data):
        try:
            self.db.collection(collection).document(doc_id).create(data)
        except google_exceptions.Conflict:
            # ALREADY_EXISTS (AlreadyExists는 Conflict의 하위 클래스)
            return False
        return True

    def update(self, collection, doc_id, fields):
        try:
            self.db.collection(collection).document(doc_id).update(fields)
        except google_exceptions.NotFound:
            raise DocumentMissingError(collection, doc_id)

    def increment(self, collection, doc_id, field, delta):
        self.update(collection, doc_id, {field: firestore.Increment(delta)})

    def remove(self, collection, doc_id):
        try:
            self.db.collection(collection).document(doc_id).delete(option=self.db.write_option(exists=True))
        except google_exceptions.NotFound:
            return False
        return True

    def query(self, collection, filters=(), order_by=None, descending=False, limit=None, offset=0, start_after=None):
        query = self._filtered(collection, filters)
        direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
        for field in _order_fields(order_by):
            query = query.order_by(field, direction=direction)

        if start_after:
            cursor_doc = self.db.collection(collection).document(start_after).get()
            if cursor_doc.exists:
                query = query.start_after(cursor_doc)
        elif offset:
            query = query.offset(offset)

        if limit:
            query = query.limit(limit)
        return [doc.to_dict() for doc in query.stream()]

    def count(self, collection, filters=()):
        # 문서를 모두 읽지 않고 집계 쿼리로 개수만 가져옵니다.
        result = self._filtered(collection, filters).count().get()
        return result[0][0].value

    def _write_in_batches(self, collection, filters, write) -> int:
        batch = self.db.batch()
        pending = 0
        total = 0
        for doc in self._filtered(collection, filters).stream():
            write(batch, doc.reference)
            pending += 1
            total += 1
            if pending >= self.BATCH_SIZE:
                batch.commit()
                batch = self.db.batch()
                pending = 0
        if pending:
            batch.commit()
        return total

    def remove_where(self, collection, filters):
        return self._write_in_batches(collection, filters, lambda batch, ref: batch.delete(ref))

    def update_where(self, collection, filters, fields):
        return self._write_in_batches(collection, filters, lambda batch, ref: batch.update(ref, fields))


_MISSING = object()

_OPERATORS = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
    'in': lambda value, options: value in options,
}


class InMemoryDocumentStore(DocumentStore):
    """
    딕셔너리 기반 구현. Firestore와 같은 의미를 따릅니다.
    - 조회 결과는 복사본이므로 반환값을 수정해도 저장소에 영향이 없습니다.
    - 필드가 없는 문서는 어떤 필터에도 매칭되지 않습니다.
    - 모든 연산은 하나의 잠금 아래에서 실행되어 스레드 간에 원자적입니다.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def _docs(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    @staticmethod
    def _matches(data: Dict[str, Any], filters: Sequence[Filter]) -> bool:
        for field, op, value in filters:
            if op not in _OPERATORS:
                raise ValueError(f"지원하지 않는 필터 연산자입니다: {op}")
            current = data.get(field, _MISSING)
            if current is _MISSING or not _OPERATORS[op](current, value):
                return False
        return True

    def _select(self, collection, filters) -> List[Tuple[str, Dict[str, Any]]]:
        return [(doc_id, data) for doc_id, data in self._docs(collection).items() if self._matches(data, filters)]

    def get(self, collection, doc_id):
        with self._lock:
            data = self._docs(collection).get(doc_id)
            return copy.deepcopy(data) if data is not None else None

    def add(self, collection, data, doc_id=None):
        doc_id = doc_id or str(uuid.uuid4())
        with self._lock:
            self._docs(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    def create(self, collection, doc_id, data):
        with self._lock:
            docs = self._docs(collection)
            if doc_id in docs:
                return False
            docs[doc_id] = copy.deepcopy(data)
            return True

    def update(self, collection, doc_id, fields):
        with self._lock:
            docs = self._docs(collection)
            if doc_id not in docs:
                raise DocumentMissingError(collection, doc_id)
            docs[doc_id].update(copy.deepcopy(fields))

    def increment(self, collection, doc_id, field, delta):
        with self._lock:
            docs = self._docs(collection)
            if doc_id not in docs:
                raise DocumentMissingError(collection, doc_id)
            current = docs[doc_id].get(field)
            docs[doc_id][field] = (current if isinstance(current, (int, float)) else 0) + delta

    def remove(self, collection, doc_id):
        with self._lock:
            return self._docs(collection).pop(doc_id, None) is not None

    def query(self, collection, filters=(), order_by=None, descending=False, limit=None, offset=0, start_after=None):
        with self._lock:
            selected = self._select(collection, filters)
            fields = _order_fields(order_by)
            if fields:
                # Firestore처럼 정렬 필드가 없는 문서는 결과에서 제외합니다.
                selected = [(doc_id, data) for doc_id, data in selected if all(f in data for f in fields)]
                selected.sort(key=lambda item: tuple(item[1][f] for f in fields), reverse=descending)

            if start_after:
                ids = [doc_id for doc_id, _ in selected]
                if start_after in ids:
                    selected = selected[ids.index(start_after) + 1:]
            elif offset:
                selected = selected[offset:]

            if limit:
                selected = selected[:limit]
            return [copy.deepcopy(data) for _, data in selected]

    def count(self, collection, filters=()):
        with self._lock:
            return len(self._select(collection, filters))

    def remove_where(self, collection, filters):
        with self._lock:
            docs = self._docs(collection)
            matched = [doc_id for doc_id, _ in self._select(collection, filters)]
            for doc_id in matched:
                del docs[doc_id]
            return len(matched)

    def update_where(self, collection, filters, fields):
        with self._lock:
            matched = self._select(collection, filters)
            for _, data in matched:
                data.update(copy.deepcopy(fields))
            return len(matched)
