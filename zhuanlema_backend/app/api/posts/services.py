# app/api/posts/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, Tuple, List, Callable

from app.core.errors import ServiceError, NotFound, PermissionDenied, Internal
from app.models.like import PostLike
from app.models.notification import NotificationType
from app.models.post import Post
from app.services.counters import read_counter, decrement_clamped, remove_likes
from app.services.document_store import DocumentStore
from app.services.notification_service import NotificationService
from app.services.user_service import UserService
from app.utils.datetime_utils import DateTimeUtils
from app.utils.hot_score import calc_hot_score
from app.utils.validators import require_document_id, require_user_id

logger = logging.getLogger(__name__)

POSTS = 'posts'
POST_LIKES = 'post_likes'
COMMENTS = 'comments'
COMMENT_LIKES = 'comment_likes'

# Firestore 'in' 필터의 값 개수 제한
IN_QUERY_CHUNK = 30

class PostService:
    """
    게시글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 게시글 작성/조회/소프트 삭제, 좋아요/좋아요 취소를 처리합니다.
    - 저장소와 협력 서비스는 생성자로 주입받습니다.
    """
    def __init__(self, store: DocumentStore, user_service: UserService, notification_service: NotificationService):
        self.store = store
        self.user_service = user_service
        self.notification_service = notification_service

    def create_post(self, user_id: Optional[str], content: str, images: List[str], tags: List[str]) -> Dict[str, Any]:
        """새로운 게시글을 생성합니다."""
        user_id = require_user_id(user_id)
        try:
            new_post = Post(
                post_id=str(uuid.uuid4()),
                user_id=user_id,
                nickname=self.user_service.get_nickname(user_id),
                content=content,
                images=images,
                tags=tags
            )
            self.store.add(POSTS, asdict(new_post), doc_id=new_post.post_id)
            logger.info(f"게시글 생성 완료 (post_id: {new_post.post_id}, user_id: {user_id})")
            return asdict(new_post)
        except Exception as e:
            logger.error(f"게시글 생성 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise Internal(f"发布失败: {e}")

    def get_posts(self, current_user_id: Optional[str], limit: int, sort_by: str = "latest",
                  cursor: Optional[str] = None, offset: int = 0) -> Tuple[List[Dict[str, Any]], Optional[str], List[str]]:
        """
        삭제되지 않은 게시글 피드를 조회합니다.
        - sort_by: 'latest'(작성 시간 역순) 또는 'hot'(인기 점수 역순)
        - cursor(직전 페이지 마지막 post_id)가 없으면 offset 페이지네이션을 사용합니다.
        :return: (게시글 목록, 다음 커서, 현재 사용자가 좋아요한 post_id 목록)
        """
        order_by = ['hot_score', 'created_at'] if sort_by == 'hot' else 'created_at'
        try:
            posts = self.store.query(
                POSTS, [('is_deleted', '==', False)],
                order_by=order_by, descending=True,
                limit=limit, offset=offset, start_after=cursor
            )
            next_cursor = posts[-1]['post_id'] if posts else None

            liked_post_ids = []
            if current_user_id and posts:
                liked = self._check_likes_for_posts(current_user_id, [p['post_id'] for p in posts])
                liked_post_ids = [p['post_id'] for p in posts if p['post_id'] in liked]
            return posts, next_cursor, liked_post_ids
        except Exception as e:
            logger.error(f"게시글 목록 조회 실패: {e}", exc_info=True)
            raise Internal(f"获取帖子失败: {e}")

    def delete_post(self, post_id: Any, user_id: Optional[str]) -> Dict[str, Any]:
        """
        게시글을 소프트 삭제하고 종속 데이터를 정리합니다. (작성자 본인만 가능)

        1. 게시글 문서: is_deleted=True, deleted_at=now, content/images/tags 비움
        2. 후속 정리(각 단계 독립, 실패해도 삭제 자체는 성공):
           post_likes 삭제 -> comment_likes 삭제 -> comments 소프트 삭제
        이미 삭제된 게시글이면 아무 쓰기 없이 성공을 반환합니다.

        :return: {"post_id", "cascade": 단계별 결과}
        """
        post_id = require_document_id(post_id, "postId")
        user_id = require_user_id(user_id)

        try:
            post = self.store.get(POSTS, post_id)
            if not post:
                raise NotFound("帖子不存在")
            if post.get('user_id') != user_id:
                raise PermissionDenied("无权限删除该帖子")
            if post.get('is_deleted') is True:
                logger.info(f"이미 삭제된 게시글 (post_id: {post_id})")
                return {"post_id": post_id, "cascade": {}}

            now = DateTimeUtils.now()
            self.store.update(POSTS, post_id, {
                'is_deleted': True,
                'deleted_at': now,
                'content': "",
                'images': [],
                'tags': [],
            })
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"게시글 삭제 실패 (post_id: {post_id}): {e}", exc_info=True)
            raise Internal(f"删除帖子失败: {e}")

        cascade = {
            'post_likes': self._cascade_step(post_id, 'post_likes', lambda: self.store.remove_where(
                POST_LIKES, [('post_id', '==', post_id)])),
            'comment_likes': self._cascade_step(post_id, 'comment_likes', lambda: self.store.remove_where(
                COMMENT_LIKES, [('post_id', '==', post_id)])),
            'comments': self._cascade_step(post_id, 'comments', lambda: self.store.update_where(
                COMMENTS, [('post_id', '==', post_id), ('is_deleted', '==', False)],
                {'is_deleted': True, 'deleted_at': now, 'content': ""})),
        }
        logger.info(f"게시글 삭제 완료 (post_id: {post_id}, cascade: {cascade})")
        return {"post_id": post_id, "cascade": cascade}

    def _cascade_step(self, post_id: str, name: str, action: Callable[[], int]) -> Dict[str, Any]:
        """후속 정리 한 단계를 실행합니다. 실패는 기록만 하고 삼킵니다."""
        try:
            return {"ok": True, "count": action()}
        except Exception as e:
            logger.warning(f"게시글 삭제 후속 정리 실패 ({name}, post_id: {post_id}): {e}", exc_info=True)
            return {"ok": False, "count": 0, "error": str(e)}

    def like_post(self, post_id: Any, user_id: Optional[str]) -> Dict[str, Any]:
        """게시글에 좋아요를 누릅니다. 이미 누른 경우 카운터를 바꾸지 않고 현재 상태를 반환합니다."""
        post_id = require_document_id(post_id, "postId")
        user_id = require_user_id(user_id)

        try:
            post = self.store.get(POSTS, post_id)
            if not post or post.get('is_deleted') is True:
                raise NotFound("帖子不存在")

            existing = self.store.query(POST_LIKES, [('post_id', '==', post_id), ('user_id', '==', user_id)], limit=1)
            if existing:
                return {"post_id": post_id, "like_count": read_counter(post, 'like_count'), "is_liked": True}

            # 동시 요청 중 문서 생성에 성공한 한 건만 카운터를 올립니다.
            like = PostLike(like_id=f"post_{user_id}_{post_id}", post_id=post_id, user_id=user_id)
            if not self.store.create(POST_LIKES, like.like_id, asdict(like)):
                current = self.store.get(POSTS, post_id)
                return {"post_id": post_id, "like_count": read_counter(current, 'like_count'), "is_liked": True}
            self.store.increment(POSTS, post_id, 'like_count', 1)
            like_count = read_counter(self.store.get(POSTS, post_id), 'like_count')
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"게시글 좋아요 실패 (user_id: {user_id}, post_id: {post_id}): {e}", exc_info=True)
            raise Internal(f"点赞失败: {e}")

        self.refresh_hot_score(post_id)
        self.notification_service.create_notification(
            recipient_id=post.get('user_id'), sender_id=user_id,
            n_type=NotificationType.POST_LIKE, target_id=post_id,
            body=(post.get('content') or "")[:50]
        )
        return {"post_id": post_id, "like_count": like_count, "is_liked": True}

    def unlike_post(self, post_id: Any, user_id: Optional[str]) -> Dict[str, Any]:
        """
        게시글 좋아요를 취소합니다.
        중복 좋아요 기록도 모두 지우고, 카운터는 한 번만 감소시킨 뒤 실제 값을 재조회합니다.
        동시 취소 요청에서는 기록을 실제로 지운 요청만 카운터를 감소시킵니다.
        """
        post_id = require_document_id(post_id, "postId")
        user_id = require_user_id(user_id)

        try:
            removed = remove_likes(self.store, POST_LIKES, [('post_id', '==', post_id), ('user_id', '==', user_id)])
            post = self.store.get(POSTS, post_id)
            if not post:
                return {"post_id": post_id, "like_count": 0, "is_liked": False}

            like_count = read_counter(post, 'like_count')
            if removed:
                like_count = decrement_clamped(self.store, POSTS, post_id, 'like_count')
        except Exception as e:
            logger.error(f"게시글 좋아요 취소 실패 (user_id: {user_id}, post_id: {post_id}): {e}", exc_info=True)
            raise Internal(f"取消点赞失败: {e}")

        if removed:
            self.refresh_hot_score(post_id)
        return {"post_id": post_id, "like_count": max(0, like_count), "is_liked": False}

    def refresh_hot_score(self, post_id: str) -> Optional[float]:
        """게시글의 인기 점수를 다시 계산합니다. 실패해도 예외를 던지지 않습니다."""
        try:
            post = self.store.get(POSTS, post_id)
            if not post:
                return None
            hot_score = calc_hot_score(
                read_counter(post, 'like_count'),
                read_counter(post, 'comment_count'),
                post.get('created_at')
            )
            self.store.update(POSTS, post_id, {'hot_score': hot_score})
            return hot_score
        except Exception as e:
            logger.warning(f"인기 점수 갱신 실패 (post_id: {post_id}): {e}", exc_info=True)
            return None

    def _check_likes_for_posts(self, user_id: str, post_ids: List[str]) -> set:
        """주어진 게시글 ID 목록에 대해 사용자의 좋아요 여부를 일괄 확인합니다."""
        liked_post_ids = set()
        for i in range(0, len(post_ids), IN_QUERY_CHUNK):
            chunk_ids = post_ids[i:i + IN_QUERY_CHUNK]
            likes = self.store.query(POST_LIKES, [('user_id', '==', user_id), ('post_id', 'in', chunk_ids)])
            liked_post_ids.update(like.get('post_id') for like in likes)
        return liked_post_ids
