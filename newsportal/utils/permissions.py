"""
权限工具：数据可见范围策略
"""
from newsportal.models.auth import UserRole
from newsportal.models.content import Article


def article_scope(role, user_id):
    """
    文章可见范围策略：(角色, 用户ID) -> 查询条件
    管理员可见全站，返回 None；其他角色仅可见本人撰写的文章。
    """
    if role == UserRole.ADMIN:
        return None
    return Article.author_id == user_id


def apply_article_scope(query, role, user_id):
    criterion = article_scope(role, user_id)
    if criterion is None:
        return query
    return query.filter(criterion)
