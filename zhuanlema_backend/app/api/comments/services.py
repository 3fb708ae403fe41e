# app/api/comments/services.py

import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List, Tuple

from app.api.posts.services import PostService, POSTS, COMMENTS, COMMENT_LIKES
from app.core.errors import ServiceError, NotFound, PermissionDenied, Internal
from app.models.comment import Comment
from app.models.like import CommentLike
from app.models.notification import NotificationType
from app.services.counters import read_counter, decrement_clamped, remove_likes
from app.services.document_store import DocumentStore
from app.services.notification_service import NotificationService
from app.services.user_service import UserService
from app.utils.datetime_utils import DateTimeUtils
from app.utils.validators import require_document_id, require_user_id

logger = logging.getLogger(__name__)

class CommentService:
    """
    댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 댓글 작성/조회/소프트 삭제, 좋아요/좋아요 취소와 알림 생성을 포함합니다.
    - 게시글 카운터와 인기 점수 갱신은 PostService에 위임합니다.
    """
    def __init__(self, store: DocumentStore, user_service: UserService,
                 notification_service: NotificationService, post_service: PostService):
        self.store = store
        self.user_service = user_service
        self.notification_service = notification_service
        self.post_service = post_service

    def create_comment(self, post_id: Any, user_id: Optional[str], content: str,
                       parent_id: Optional[str] = None) -> Dict[str, Any]:
        """
        새로운 댓글을 작성합니다.
        - parent_id가 같은 게시글의 댓글이면 답글 정보(reply_to_*)를 채웁니다.
        - 게시글의 comment_count를 1 증가시키고 게시글 작성자에게 알림을 보냅니다.
        """
        post_id = require_document_id(post_id, "postId")
        user_id = require_user_id(user_id)

        try:
            post = self.store.get(POSTS, post_id)
            if not post or post.get('is_deleted') is True:
                raise NotFound("帖子不存在")

            new_comment = Comment(
                comment_id=str(uuid.uuid4()),
                post_id=post_id,
                user_id=user_id,
                nickname=self.user_service.get_nickname(user_id),
                content=content
            )
            if parent_id:
                self._attach_reply(new_comment, parent_id)

            self.store.add(COMMENTS, asdict(new_comment), doc_id=new_comment.comment_id)
            self.store.increment(POSTS, post_id, 'comment_count', 1)
            comment_count = read_counter(self.store.get(POSTS, post_id), 'comment_count')
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"댓글 작성 실패 (post_id: {post_id}): {e}", exc_info=True)
            raise Internal(f"发表评论失败: {e}")

        self.post_service.refresh_hot_score(post_id)
        self.notification_service.create_notification(
            recipient_id=post.get('user_id'), sender_id=user_id,
            n_type=NotificationType.COMMENT, target_id=post_id, body=content[:50]
        )
        return {"comment": asdict(new_comment), "comment_count": comment_count}

    def _attach_reply(self, comment: Comment, parent_id: str) -> None:
        """부모 댓글이 존재하면 답글 정보를 채웁니다. 부모를 찾지 못하면 일반 댓글로 저장합니다."""
        try:
            parent = self.store.get(COMMENTS, parent_id)
        except Exception as e:
            logger.warning(f"부모 댓글 조회 실패 (parent_id: {parent_id}): {e}")
            return
        if not parent or parent.get('post_id') != comment.post_id:
            return
        comment.parent_id = parent_id
        comment.reply_to_comment_id = parent_id
        nickname = parent.get('nickname')
        if isinstance(nickname, str) and nickname.strip():
            comment.reply_to_nickname = nickname.strip()

    def get_comments_for_post(self, post_id: Any, current_user_id: Optional[str], limit: int,
                              offset: int = 0, sort_by: str = "latest") -> Tuple[List[Dict[str, Any]], List[str]]:
        """
        게시글의 삭제되지 않은 댓글을 조회합니다.
        - sort_by: 'latest'(작성 순) 또는 'hot'(좋아요 수 역순)
        :return: (댓글 목록, 현재 사용자가 좋아요한 comment_id 목록)
        """
        post_id = require_document_id(post_id, "postId")
        try:
            filters = [('post_id', '==', post_id), ('is_deleted', '==', False)]
            if sort_by == 'hot':
                comments = self.store.query(COMMENTS, filters, order_by=['like_count', 'created_at'],
                                            descending=True, limit=limit, offset=offset)
            else:
                comments = self.store.query(COMMENTS, filters, order_by='created_at', limit=limit, offset=offset)

            liked_comment_ids = []
            if current_user_id and comments:
                # comment_likes에 post_id가 있으므로 게시글 단위로 한 번에 조회합니다.
                likes = self.store.query(COMMENT_LIKES, [('user_id', '==', current_user_id), ('post_id', '==', post_id)])
                liked = {like.get('comment_id') for like in likes}
                liked_comment_ids = [c['comment_id'] for c in comments if c['comment_id'] in liked]
            return comments, liked_comment_ids
        except Exception as e:
            logger.error(f"댓글 목록 조회 실패 (post_id: {post_id}): {e}", exc_info=True)
            raise Internal(f"获取评论失败: {e}")

    def delete_comment(self, comment_id: Any, user_id: Optional[str]) -> Dict[str, Any]:
        """
        댓글을 소프트 삭제합니다. (작성자 본인만 가능)
        - 댓글 좋아요 기록 정리와 게시글 comment_count 감소는 best-effort로 처리합니다.
        - 이미 삭제된 댓글이면 쓰기 없이 성공을 반환합니다 (comment_count는 None).
        """
        comment_id = require_document_id(comment_id, "commentId")
        user_id = require_user_id(user_id)

        try:
            comment = self.store.get(COMMENTS, comment_id)
            if not comment:
                raise NotFound("评论不存在")
            if comment.get('user_id') != user_id:
                raise PermissionDenied("无权限撤回该评论")
            if comment.get('is_deleted') is True:
                return {"comment_id": comment_id, "comment_count": None}

            self.store.update(COMMENTS, comment_id, {
                'is_deleted': True,
                'deleted_at': DateTimeUtils.now(),
                'content': "",
            })
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"댓글 삭제 실패 (comment_id: {comment_id}): {e}", exc_info=True)
            raise Internal(f"撤回失败: {e}")

        try:
            self.store.remove_where(COMMENT_LIKES, [('comment_id', '==', comment_id)])
        except Exception as e:
            logger.warning(f"댓글 좋아요 기록 정리 실패 (comment_id: {comment_id}): {e}", exc_info=True)

        comment_count = None
        post_id = comment.get('post_id')
        if post_id:
            try:
                comment_count = decrement_clamped(self.store, POSTS, post_id, 'comment_count')
            except Exception as e:
                logger.warning(f"게시글 댓글 수 감소 실패 (post_id: {post_id}): {e}", exc_info=True)
            else:
                self.post_service.refresh_hot_score(post_id)

        return {"comment_id": comment_id, "comment_count": comment_count}

    def like_comment(self, comment_id: Any, user_id: Optional[str]) -> Dict[str, Any]:
        """댓글에 좋아요를 누릅니다. 이미 누른 경우 현재 상태를 그대로 반환합니다."""
        comment_id = require_document_id(comment_id, "commentId")
        user_id = require_user_id(user_id)

        try:
            comment = self.store.get(COMMENTS, comment_id)
            if not comment or not comment.get('post_id') or comment.get('is_deleted') is True:
                raise NotFound("评论不存在")

            existing = self.store.query(COMMENT_LIKES, [('comment_id', '==', comment_id), ('user_id', '==', user_id)], limit=1)
            if existing:
                return {"comment_id": comment_id, "like_count": read_counter(comment, 'like_count'), "is_liked": True}

            like = CommentLike(
                like_id=f"comment_{user_id}_{comment_id}",
                comment_id=comment_id,
                post_id=comment['post_id'],
                user_id=user_id
            )
            if not self.store.create(COMMENT_LIKES, like.like_id, asdict(like)):
                current = self.store.get(COMMENTS, comment_id)
                return {"comment_id": comment_id, "like_count": read_counter(current, 'like_count'), "is_liked": True}
            self.store.increment(COMMENTS, comment_id, 'like_count', 1)
            like_count = read_counter(self.store.get(COMMENTS, comment_id), 'like_count')
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"댓글 좋아요 실패 (comment_id: {comment_id}): {e}", exc_info=True)
            raise Internal(f"点赞评论失败: {e}")

        self.notification_service.create_notification(
            recipient_id=comment.get('user_id'), sender_id=user_id,
            n_type=NotificationType.COMMENT_LIKE, target_id=comment_id,
            body=(comment.get('content') or "")[:50]
        )
        return {"comment_id": comment_id, "like_count": like_count, "is_liked": True}

    def unlike_comment(self, comment_id: Any, user_id: Optional[str]) -> Dict[str, Any]:
        """
        댓글 좋아요를 취소하고 like_count를 보정합니다.

        1. (comment_id, user_id) 좋아요 기록을 모두 삭제 (중복 기록 허용)
        2. 삭제한 기록이 있으면 like_count를 1 감소 (하한 0)
        3. 실제 like_count를 재조회하고, 음수면 0으로 보정
        좋아요 기록이 없어도 성공이며 현재 값을 그대로 반환합니다.
        """
        comment_id = require_document_id(comment_id, "commentId")
        user_id = require_user_id(user_id)

        try:
            removed = remove_likes(self.store, COMMENT_LIKES, [('comment_id', '==', comment_id), ('user_id', '==', user_id)])
            comment = self.store.get(COMMENTS, comment_id)
            if not comment:
                # 댓글이 없으면 남은 좋아요 기록만 정리합니다.
                return {"comment_id": comment_id, "like_count": 0, "is_liked": False}

            like_count = read_counter(comment, 'like_count')
            if removed:
                like_count = decrement_clamped(self.store, COMMENTS, comment_id, 'like_count')
            elif like_count < 0:
                logger.warning(f"음수 like_count 보정 (comment_id: {comment_id}: {like_count} -> 0)")
                self.store.update(COMMENTS, comment_id, {'like_count': 0})
                like_count = 0
        except Exception as e:
            logger.error(f"댓글 좋아요 취소 실패 (comment_id: {comment_id}): {e}", exc_info=True)
            raise Internal(f"取消点赞评论失败: {e}")

        return {"comment_id": comment_id, "like_count": like_count, "is_liked": False}
