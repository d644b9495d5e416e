from functools import wraps
from flask import current_app, jsonify, request
from flask_login import current_user

from newsportal.extensions import db
from newsportal.exceptions import PortalError, PermissionDenied
from newsportal.utils.i18n import t


def api_endpoint(failure_key):
    """
    API 统一错误出口：
    - PortalError 按自身状态码转换为 JSON 信封
    - 其余异常回滚会话、记录日志，返回 500 与本地化提示
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except PortalError as e:
                db.session.rollback()
                return jsonify(e.to_dict()), e.code
            except Exception:
                db.session.rollback()
                current_app.logger.exception(f'{request.method} {request.path} error')
                return jsonify({
                    'success': False,
                    'error': 'Internal Server Error',
                    'message': t(failure_key),
                }), 500
        return decorated_function
    return decorator


def admin_required(message_key):
    """
    管理员权限装饰器（需在 login_required 之后使用）
    以数据库中的用户角色为准，会话对应的用户不存在同样视为无权限
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            from newsportal.services.auth_service import AuthService
            user = AuthService.find_session_user(current_user)
            if user is None or not user.is_admin:
                raise PermissionDenied(t(message_key))
            return f(*args, **kwargs)
        return decorated_function
    return decorator
