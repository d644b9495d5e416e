from flask_login import UserMixin
from newsportal.extensions import db
from .base import BaseModel


class UserRole:
    """用户角色"""
    ADMIN = 'ADMIN'
    EDITOR = 'EDITOR'
    CONTRIBUTOR = 'CONTRIBUTOR'

    ALL = (ADMIN, EDITOR, CONTRIBUTOR)


class User(BaseModel):
    """用户（文章作者）"""
    __tablename__ = 'users'

    email = db.Column(db.String(128), unique=True, nullable=False, index=True)
    name = db.Column(db.String(128))
    role = db.Column(db.String(16), nullable=False, default=UserRole.EDITOR)

    # 作者关系仅作信息记录，删除用户不级联删除文章
    articles = db.relationship('Article', back_populates='author', lazy='dynamic')

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'


class SessionPrincipal(UserMixin):
    """
    当前会话主体，由 JWT 声明还原而来。
    role 取自令牌，供下游权限判断使用；get_id() 返回令牌本身，
    因此 Flask-Login 的 cookie 会话与 Bearer 请求共用同一种凭证。
    """

    def __init__(self, token, claims):
        self.token = token
        self.user_id = claims.get('uid')
        self.email = claims.get('sub')
        self.name = claims.get('name')
        self.role = claims.get('role')

    def get_id(self):
        return self.token

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def to_dict(self):
        return {
            'id': self.user_id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
        }
