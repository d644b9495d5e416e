"""认证服务 - 管理员凭证校验与 JWT 会话令牌"""
import hmac
from datetime import datetime, timedelta, timezone

from flask import current_app
from jose import JWTError, jwt

from newsportal.extensions import db
from newsportal.exceptions import NotFoundError
from newsportal.models.auth import User, UserRole, SessionPrincipal
from newsportal.utils.i18n import t


class AuthService:
    """认证服务"""

    @staticmethod
    def authenticate(email, password):
        """
        校验登录凭证。系统只接受配置中的唯一管理员账号：
        首次登录成功时若用户记录不存在则自动创建（ADMIN）。
        失败返回 None。
        """
        email = (email or '').strip().lower()
        password = (password or '').strip()
        if not email or not password:
            return None

        admin_email = current_app.config['ADMIN_EMAIL'].strip().lower()
        admin_password = current_app.config['ADMIN_PASSWORD']
        email_ok = hmac.compare_digest(email.encode('utf-8'), admin_email.encode('utf-8'))
        password_ok = hmac.compare_digest(password.encode('utf-8'), admin_password.encode('utf-8'))
        if not (email_ok and password_ok):
            current_app.logger.warning(f'登录失败: {email}')
            return None

        user = User.query.filter_by(email=admin_email).first()
        if user is None:
            user = User(
                email=admin_email,
                name=current_app.config['ADMIN_NAME'],
                role=UserRole.ADMIN
            )
            db.session.add(user)
            db.session.commit()
            current_app.logger.info(f'已创建管理员账号: {admin_email}')
        return user

    @staticmethod
    def issue_token(user, expires_delta=None):
        """签发会话令牌，角色写入令牌声明"""
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(hours=current_app.config['JWT_EXPIRES_HOURS'])
        )
        claims = {
            'sub': user.email,
            'uid': user.id,
            'name': user.name,
            'role': user.role,
            'exp': expire,
        }
        return jwt.encode(claims, current_app.config['SECRET_KEY'],
                          algorithm=current_app.config['JWT_ALGORITHM'])

    @staticmethod
    def decode_token(token):
        """解码并校验令牌，无效或过期返回 None"""
        try:
            return jwt.decode(token, current_app.config['SECRET_KEY'],
                              algorithms=[current_app.config['JWT_ALGORITHM']])
        except JWTError:
            return None

    @staticmethod
    def principal_from_token(token):
        claims = AuthService.decode_token(token) if token else None
        if not claims or not claims.get('sub'):
            return None
        return SessionPrincipal(token, claims)

    @staticmethod
    def find_session_user(principal):
        """按会话邮箱查找数据库用户，不信任请求体中的任何身份字段"""
        email = getattr(principal, 'email', None)
        if not email:
            return None
        return User.query.filter_by(email=email).first()

    @staticmethod
    def resolve_session_user(principal):
        user = AuthService.find_session_user(principal)
        if user is None:
            raise NotFoundError(t('user_not_found'), error='User not found')
        return user
