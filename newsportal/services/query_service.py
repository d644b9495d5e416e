"""内容查询服务 - 文章/分类的筛选、排序、分页与多语言解析"""
from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload

from newsportal.extensions import db
from newsportal.exceptions import NotFoundError
from newsportal.models.content import (
    Article, ArticleLocale, ArticleStatus, Category, CategoryLocale, article_categories
)
from newsportal.utils.i18n import t


class ArticleListQuery:
    """文章列表查询参数"""

    SORT_FIELDS = ('publishedAt', 'createdAt')
    SORT_ORDERS = ('asc', 'desc')

    def __init__(self, language, page=1, limit=10, category_slug=None, status=None,
                 search=None, featured_only=False, sort_by='createdAt', sort_order='desc'):
        self.language = language
        self.page = page
        self.limit = limit
        self.category_slug = category_slug or None
        self.status = status or None
        self.search = (search or '').strip() or None
        self.featured_only = featured_only
        # 无法识别的排序组合统一回退为 createdAt desc
        if sort_by in self.SORT_FIELDS and sort_order in self.SORT_ORDERS:
            self.sort_by, self.sort_order = sort_by, sort_order
        else:
            self.sort_by, self.sort_order = 'createdAt', 'desc'

    @property
    def offset(self):
        return (self.page - 1) * self.limit


class ContentQueryService:
    """内容查询服务"""

    @staticmethod
    def _order_by(sort_by, sort_order):
        column = Article.published_at if sort_by == 'publishedAt' else Article.created_at
        if sort_order == 'asc':
            primary = column.asc()
            tiebreak = Article.id.asc()
        else:
            primary = column.desc()
            tiebreak = Article.id.desc()
        if sort_by == 'publishedAt':
            primary = primary.nulls_last()
        return primary, tiebreak

    @staticmethod
    def build_article_query(params):
        """构建筛选后的文章查询（不含分页）"""
        lang = params.language
        # 请求语言缺失的文章直接排除，计数与分页同样以此为准
        query = Article.query.filter(Article.locales.any(ArticleLocale.language == lang))

        if params.status:
            query = query.filter(Article.status == params.status)

        if params.featured_only:
            query = query.filter(Article.featured.is_(True))

        if params.category_slug:
            query = query.filter(Article.categories.any(Category.slug == params.category_slug))

        if params.search:
            text = params.search
            query = query.filter(Article.locales.any(
                (ArticleLocale.language == lang) & or_(
                    ArticleLocale.title.icontains(text, autoescape=True),
                    ArticleLocale.content.icontains(text, autoescape=True),
                    ArticleLocale.excerpt.icontains(text, autoescape=True),
                )
            ))

        return query.order_by(*ContentQueryService._order_by(params.sort_by, params.sort_order))

    @staticmethod
    def list_articles(params):
        """
        分页获取文章列表
        每篇文章只携带请求语言的内容行，分类名称同样按请求语言输出
        """
        query = ContentQueryService.build_article_query(params).options(
            selectinload(Article.locales),
            selectinload(Article.categories).selectinload(Category.locales),
            selectinload(Article.author),
        )
        pagination = query.paginate(page=params.page, per_page=params.limit,
                                    error_out=False, count=True)

        return {
            'articles': [
                a.to_dict(language=params.language, full_content=False)
                for a in pagination.items
            ],
            'pagination': {
                'page': params.page,
                'limit': params.limit,
                'totalCount': pagination.total,
                'totalPages': pagination.pages,
            },
        }

    @staticmethod
    def get_article(article_id, language):
        """
        获取单篇文章：优先请求语言；若缺失则回退到第一条可用语言内容
        """
        article = db.session.get(Article, article_id, options=[
            selectinload(Article.locales),
            selectinload(Article.categories).selectinload(Category.locales),
        ])
        if article is None:
            raise NotFoundError(t('article_not_found'), error='Article not found')

        if article.locales_for(language):
            return article.to_dict(language=language)

        fallback = article.locales_for()[:1]
        if not fallback:
            raise NotFoundError(t('article_no_content'), error='No content available')
        return article.to_dict(language=language, locale_rows=fallback)

    @staticmethod
    def published_counts(scope=None):
        """各分类下已发布文章数 {category_id: count}，scope 为可选的文章范围条件"""
        query = db.session.query(
            article_categories.c.category_id,
            func.count(Article.id)
        ).join(
            Article, Article.id == article_categories.c.article_id
        ).filter(
            Article.status == ArticleStatus.PUBLISHED
        )
        if scope is not None:
            query = query.filter(scope)
        return dict(query.group_by(article_categories.c.category_id).all())

    @staticmethod
    def list_categories(language, include_article_count=False):
        """获取分类列表（仅含请求语言名称，缺失该语言名称的分类不输出）"""
        categories = Category.query.filter(
            Category.locales.any(CategoryLocale.language == language)
        ).options(
            selectinload(Category.locales)
        ).order_by(Category.created_at.asc(), Category.id.asc()).all()

        counts = ContentQueryService.published_counts() if include_article_count else None
        return [
            c.to_dict(
                language=language,
                article_count=counts.get(c.id, 0) if counts is not None else None
            )
            for c in categories
        ]

    @staticmethod
    def get_category(category_id, language):
        """获取单个分类，名称回退规则与单篇文章一致"""
        category = db.session.get(Category, category_id, options=[selectinload(Category.locales)])
        if category is None:
            raise NotFoundError(t('category_not_found'), error='Category not found')

        count = ContentQueryService.published_counts().get(category.id, 0)
        if category.locales_for(language):
            return category.to_dict(language=language, article_count=count)

        fallback = category.locales_for()[:1]
        if not fallback:
            raise NotFoundError(t('category_no_name'), error='No name available')
        return category.to_dict(locale_rows=fallback, article_count=count)
