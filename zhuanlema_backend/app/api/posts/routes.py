# app/api/posts/routes.py
from flask import Blueprint, request, current_app

from app.api.posts.schemas import PostCreateSchema, PostResponseSchema, LikeStateSchema
from app.api.request_utils import current_user_id, json_body, page_limit, page_offset
from app.core.responses import success_response

posts_bp = Blueprint('posts_bp', __name__)

@posts_bp.route('', methods=['POST'])
def create_post():
    """
    새로운 게시글을 작성합니다.
    - 성공 시 post_id를 201 Created와 함께 반환합니다.
    """
    post_service = current_app.services['posts']
    data = PostCreateSchema().load(json_body())
    new_post = post_service.create_post(current_user_id(), data['content'], data['images'], data['tags'])
    return success_response({"post_id": new_post['post_id']}, status_code=201)

@posts_bp.route('', methods=['GET'])
def get_posts():
    """
    게시글 피드를 조회합니다. 비로그인 사용자도 조회할 수 있습니다.
    - sort_by=latest|hot, cursor(직전 페이지 마지막 post_id), offset
    """
    post_service = current_app.services['posts']
    sort_by = request.args.get('sort_by', 'latest', type=str)
    cursor = request.args.get('cursor', None, type=str) or None
    posts, next_cursor, liked_post_ids = post_service.get_posts(
        current_user_id(), page_limit(), sort_by='hot' if sort_by == 'hot' else 'latest',
        cursor=cursor, offset=page_offset()
    )
    return success_response({
        "posts": PostResponseSchema(many=True).dump(posts),
        "next_cursor": next_cursor,
        "liked_post_ids": liked_post_ids
    })

@posts_bp.route('/<string:post_id>', methods=['DELETE'])
def delete_post(post_id: str):
    """
    게시글을 소프트 삭제합니다. (작성자 본인만 가능)
    - 좋아요 기록과 댓글 정리 결과를 cascade 항목으로 함께 반환합니다.
    """
    post_service = current_app.services['posts']
    result = post_service.delete_post(post_id, current_user_id())
    return success_response(result)

@posts_bp.route('/<string:post_id>/like', methods=['POST'])
def like_post(post_id: str):
    post_service = current_app.services['posts']
    result = post_service.like_post(post_id, current_user_id())
    return success_response(LikeStateSchema().dump(result))

@posts_bp.route('/<string:post_id>/like', methods=['DELETE'])
def unlike_post(post_id: str):
    post_service = current_app.services['posts']
    result = post_service.unlike_post(post_id, current_user_id())
    return success_response(LikeStateSchema().dump(result))
