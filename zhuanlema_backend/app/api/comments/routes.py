# app/api/comments/routes.py
from flask import Blueprint, request, current_app

from app.api.comments.schemas import CommentCreateSchema, CommentResponseSchema
from app.api.posts.schemas import LikeStateSchema
from app.api.request_utils import current_user_id, json_body, page_limit, page_offset
from app.core.responses import success_response

comments_bp = Blueprint('comments_bp', __name__)

@comments_bp.route('/posts/<string:post_id>/comments', methods=['POST'])
def create_comment(post_id: str):
    """
    특정 게시글에 댓글(또는 parent_id를 지정한 답글)을 작성합니다.
    - 성공 시 생성된 댓글과 게시글의 새 댓글 수를 201 Created와 함께 반환합니다.
    """
    comment_service = current_app.services['comments']
    data = CommentCreateSchema().load(json_body())
    result = comment_service.create_comment(post_id, current_user_id(), data['content'], data.get('parent_id'))
    return success_response({
        "comment": CommentResponseSchema().dump(result['comment']),
        "comment_count": result['comment_count']
    }, status_code=201)

@comments_bp.route('/posts/<string:post_id>/comments', methods=['GET'])
def get_comments(post_id: str):
    """특정 게시글의 댓글 목록을 조회합니다. (sort_by=latest|hot)"""
    comment_service = current_app.services['comments']
    sort_by = request.args.get('sort_by', 'latest', type=str)
    comments, liked_comment_ids = comment_service.get_comments_for_post(
        post_id, current_user_id(), page_limit(), offset=page_offset(),
        sort_by='hot' if sort_by == 'hot' else 'latest'
    )
    return success_response({
        "comments": CommentResponseSchema(many=True).dump(comments),
        "liked_comment_ids": liked_comment_ids
    })

@comments_bp.route('/comments/<string:comment_id>', methods=['DELETE'])
def delete_comment(comment_id: str):
    """댓글을 철회(소프트 삭제)합니다. (작성자 본인만 가능)"""
    comment_service = current_app.services['comments']
    return success_response(comment_service.delete_comment(comment_id, current_user_id()))

@comments_bp.route('/comments/<string:comment_id>/like', methods=['POST'])
def like_comment(comment_id: str):
    comment_service = current_app.services['comments']
    result = comment_service.like_comment(comment_id, current_user_id())
    return success_response(LikeStateSchema().dump(result))

@comments_bp.route('/comments/<string:comment_id>/like', methods=['DELETE'])
def unlike_comment(comment_id: str):
    comment_service = current_app.services['comments']
    result = comment_service.unlike_comment(comment_id, current_user_id())
    return success_response(LikeStateSchema().dump(result))
