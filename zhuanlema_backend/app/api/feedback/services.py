# app/api/feedback/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional

from app.core.errors import Internal
from app.models.feedback import Feedback
from app.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

FEEDBACK = 'feedback'

class FeedbackService:
    """사용자 의견(피드백) 접수 서비스."""
    def __init__(self, store: DocumentStore):
        self.store = store

    def submit_feedback(self, content: str, contact: str = "", user_id: Optional[str] = None) -> str:
        feedback = Feedback(feedback_id=str(uuid.uuid4()), content=content, contact=contact, user_id=user_id)
        try:
            self.store.add(FEEDBACK, asdict(feedback), doc_id=feedback.feedback_id)
        except Exception as e:
            logger.error(f"피드백 저장 실패: {e}", exc_info=True)
            raise Internal(f"提交失败: {e}")
        logger.info(f"피드백 접수 (feedback_id: {feedback.feedback_id})")
        return feedback.feedback_id
