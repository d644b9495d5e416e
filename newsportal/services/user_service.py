"""用户管理服务"""
from email_validator import validate_email, EmailNotValidError
from flask import current_app
from sqlalchemy import func, or_

from newsportal.extensions import db
from newsportal.exceptions import ValidationError, ConflictError
from newsportal.models.auth import User, UserRole
from newsportal.models.content import Article, ArticleStatus
from newsportal.utils.i18n import t
from newsportal.utils.text import isoformat


class UserService:

    @staticmethod
    def serialize(user, published_count=None):
        data = {
            'id': user.id,
            'email': user.email,
            'name': user.name,
            'role': user.role,
            'createdAt': isoformat(user.created_at),
            'updatedAt': isoformat(user.updated_at),
        }
        if published_count is not None:
            data['publishedArticles'] = published_count
        return data

    @staticmethod
    def list_users(page, limit, role=None, search=None):
        """分页用户列表，可按角色筛选、按姓名/邮箱模糊搜索"""
        query = User.query
        if role:
            query = query.filter(User.role == role)
        if search:
            query = query.filter(or_(
                User.name.icontains(search, autoescape=True),
                User.email.icontains(search, autoescape=True),
            ))

        pagination = query.order_by(User.created_at.desc(), User.id.desc()).paginate(
            page=page, per_page=limit, error_out=False
        )

        ids = [u.id for u in pagination.items]
        counts = {}
        if ids:
            counts = dict(db.session.query(Article.author_id, func.count(Article.id)).filter(
                Article.author_id.in_(ids),
                Article.status == ArticleStatus.PUBLISHED
            ).group_by(Article.author_id).all())

        return {
            'users': [UserService.serialize(u, counts.get(u.id, 0)) for u in pagination.items],
            'pagination': {
                'page': page,
                'limit': limit,
                'totalCount': pagination.total,
                'totalPages': pagination.pages,
            },
        }

    @staticmethod
    def create_user(data):
        """创建用户（不设置密码，系统仅接受配置的管理员登录）"""
        email = str(data.get('email') or '').strip().lower()
        role = data.get('role') or UserRole.EDITOR

        if not email:
            raise ValidationError(t('user_email_required'))
        try:
            email = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            raise ValidationError(t('user_email_invalid'))
        if role not in UserRole.ALL:
            raise ValidationError(t('user_role_invalid', role=role))

        if User.query.filter_by(email=email).first():
            raise ConflictError(t('user_email_exists'), error='Email already exists')

        user = User(email=email, name=data.get('name') or None, role=role)
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f'用户已创建 id={user.id} email={email} role={role}')
        return user
