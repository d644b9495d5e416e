from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_caching import Cache
from flask_wtf.csrf import CSRFProtect

# 初始化扩展对象 (暂不绑定 app)
db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
login_manager = LoginManager()
csrf = CSRFProtect()

# 配置 LoginManager
login_manager.login_message = '请先登录'
login_manager.login_message_category = 'warning'  # 消息类别
login_manager.session_protection = 'basic'


@login_manager.user_loader
def load_user(token):
    """Flask-Login 会话加载回调：会话中保存的是 JWT，本身即身份凭证"""
    from newsportal.services.auth_service import AuthService
    return AuthService.principal_from_token(token)


@login_manager.request_loader
def load_user_from_request(request):
    """API 客户端通过 Authorization: Bearer <token> 认证"""
    from newsportal.services.auth_service import AuthService
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return AuthService.principal_from_token(token.strip())


@login_manager.unauthorized_handler
def unauthorized():
    """API 返回 401 信封，页面跳转登录页并携带回调地址"""
    from flask import request, redirect, url_for, jsonify
    from newsportal.utils.i18n import resolve_language, t

    if request.path.startswith('/api/'):
        return jsonify({
            'success': False,
            'error': 'Unauthorized',
            'message': t('unauthorized'),
        }), 401

    lang = resolve_language((request.view_args or {}).get('lang'))
    return redirect(url_for('pages.login', lang=lang, callbackUrl=request.full_path.rstrip('?')))
