# app/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

# - 설정 및 공통 응답
from app.core.config import config_by_name
from app.core.errors import ServiceError, InvalidArgument, Internal
from app.core.responses import failure_response

# - API 블루프린트
from app.api.posts.routes import posts_bp
from app.api.comments.routes import comments_bp
from app.api.notifications.routes import notifications_bp
from app.api.feedback.routes import feedback_bp
from app.api.check_ins.routes import check_ins_bp
from app.api.users.routes import users_bp

# - 서비스 모듈
from app.services.document_store import DocumentStore, FirestoreDocumentStore, InMemoryDocumentStore
from app.services.identity_service import IdentityResolver, JwtIdentityResolver
from app.services.user_service import UserService
from app.services.notification_service import NotificationService
from app.api.posts.services import PostService
from app.api.comments.services import CommentService
from app.api.feedback.services import FeedbackService
from app.api.check_ins.services import CheckInService

def _create_store(app: Flask) -> DocumentStore:
    """설정된 STORE_BACKEND에 맞는 문서 저장소를 만듭니다."""
    if app.config['STORE_BACKEND'] == 'memory':
        logging.warning("In-memory document store 사용 중 (데이터가 유지되지 않습니다)")
        return InMemoryDocumentStore()

    if not firebase_admin._apps:
        cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
        if cred_path:
            if not os.path.exists(cred_path):
                raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
            cred = credentials.Certificate(cred_path)
        else:
            # Cloud Run / Functions 환경에서는 기본 서비스 계정을 사용합니다.
            cred = credentials.ApplicationDefault()
        options = {'projectId': app.config['FIREBASE_PROJECT_ID']} if app.config.get('FIREBASE_PROJECT_ID') else None
        firebase_admin.initialize_app(cred, options)
    return FirestoreDocumentStore()

def create_app(config_name: Optional[str] = None, store: Optional[DocumentStore] = None,
               identity_resolver: Optional[IdentityResolver] = None):
    """
    Flask 애플리케이션 팩토리 함수.
    테스트에서는 store와 identity_resolver를 직접 주입할 수 있습니다.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.debug and not app.testing:
        logging.basicConfig(level=app.config['LOG_LEVEL'], format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    JWTManager(app)

    if store is None:
        store = _create_store(app)

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}
    app.services['store'] = store
    app.services['identity'] = identity_resolver or JwtIdentityResolver()

    # 5-1. 다른 서비스의 기반이 되는 공용 서비스
    app.services['users'] = UserService(store)
    app.services['notifications'] = NotificationService(store, user_service=app.services['users'])

    # 5-2. 도메인 서비스
    app.services['posts'] = PostService(
        store,
        user_service=app.services['users'],
        notification_service=app.services['notifications']
    )
    app.services['comments'] = CommentService(
        store,
        user_service=app.services['users'],
        notification_service=app.services['notifications'],
        post_service=app.services['posts']
    )
    app.services['feedback'] = FeedbackService(store)
    app.services['check_ins'] = CheckInService(store)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(comments_bp, url_prefix='/api')
    app.register_blueprint(notifications_bp, url_prefix='/api/notifications')
    app.register_blueprint(feedback_bp, url_prefix='/api/feedback')
    app.register_blueprint(check_ins_bp, url_prefix='/api/check-ins')
    app.register_blueprint(users_bp, url_prefix='/api/users')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정 (모든 실패는 {"success": false, ...} 봉투로 응답)
    # =====================================================================================
    @app.errorhandler(ServiceError)
    def handle_service_error(err):
        return failure_response(err)

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        return failure_response(InvalidArgument("参数校验失败"), details=err.messages)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        error = ServiceError(err.description or err.name, status_code=err.code)
        error.error_code = err.name.upper().replace(" ", "_")
        return failure_response(error)

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return failure_response(Internal("服务器内部错误"))

    # =====================================================================================
    # 8. 앱 반환
    # =====================================================================================
    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
