"""仪表盘统计服务 - 按角色限定统计范围"""
import calendar
from collections import Counter
from datetime import datetime

from flask import current_app
from sqlalchemy.orm import joinedload, selectinload

from newsportal.extensions import db
from newsportal.models.content import (
    Article, ArticleLocale, ArticleStatus, Category, CategoryLocale
)
from newsportal.services.query_service import ContentQueryService
from newsportal.utils.i18n import t
from newsportal.utils.permissions import article_scope, apply_article_scope


def months_ago(moment, months):
    """按自然月回退，日期超出目标月天数时取该月最后一天"""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class DashboardService:
    """仪表盘统计服务"""

    RECENT_LIMIT = 10
    TRAILING_MONTHS = 12

    @staticmethod
    def overview(role, user_id):
        base = apply_article_scope(Article.query, role, user_id)
        return {
            'totalArticles': base.count(),
            'publishedArticles': base.filter(Article.status == ArticleStatus.PUBLISHED).count(),
            'draftArticles': base.filter(Article.status == ArticleStatus.DRAFT).count(),
            'totalCategories': Category.query.count(),
        }

    @staticmethod
    def recent_activity(role, user_id, language):
        """最近更新的文章，标题取统计语言内容，缺失时以 slug 代替"""
        articles = apply_article_scope(Article.query, role, user_id).options(
            joinedload(Article.author)
        ).order_by(
            Article.updated_at.desc(), Article.id.desc()
        ).limit(DashboardService.RECENT_LIMIT).all()

        ids = [a.id for a in articles]
        titles = {}
        if ids:
            titles = dict(db.session.query(ArticleLocale.article_id, ArticleLocale.title).filter(
                ArticleLocale.article_id.in_(ids),
                ArticleLocale.language == language
            ).all())

        return [{
            'id': a.id,
            'slug': a.slug,
            'title': titles.get(a.id) or a.slug,
            'status': a.status,
            'updatedAt': a.updated_at.isoformat() if a.updated_at else None,
            'authorName': (a.author.name if a.author else None) or t('unknown_author'),
        } for a in articles]

    @staticmethod
    def articles_by_month(role, user_id, now=None):
        """近 12 个月内按创建月份统计的文章数，按月份升序"""
        now = now or datetime.utcnow()
        since = months_ago(now, DashboardService.TRAILING_MONTHS)
        query = apply_article_scope(
            db.session.query(Article.created_at).filter(Article.created_at >= since),
            role, user_id
        )
        buckets = Counter(created.strftime('%Y-%m') for (created,) in query.all())
        return [{'month': month, 'count': buckets[month]} for month in sorted(buckets)]

    @staticmethod
    def categories_with_count(role, user_id, language):
        counts = ContentQueryService.published_counts(scope=article_scope(role, user_id))
        categories = Category.query.filter(
            Category.locales.any(CategoryLocale.language == language)
        ).options(
            selectinload(Category.locales)
        ).order_by(Category.created_at.asc(), Category.id.asc()).all()
        return [c.to_dict(language=language, article_count=counts.get(c.id, 0)) for c in categories]

    @staticmethod
    def get_stats(user):
        """
        汇总仪表盘数据
        :param user: 会话对应的数据库用户；管理员看全站，其他角色只看本人文章
        """
        language = current_app.config['DASHBOARD_LANGUAGE']
        return {
            'overview': DashboardService.overview(user.role, user.id),
            'recentActivity': DashboardService.recent_activity(user.role, user.id, language),
            'articlesByMonth': DashboardService.articles_by_month(user.role, user.id),
            'categoriesWithCount': DashboardService.categories_with_count(user.role, user.id, language),
        }
