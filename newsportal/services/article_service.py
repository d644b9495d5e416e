"""文章维护服务 - 创建/更新/删除、标识唯一性与发布状态流转"""
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from newsportal.extensions import db
from newsportal.exceptions import ValidationError, ConflictError, NotFoundError
from newsportal.models.content import Article, ArticleLocale, ArticleStatus, Category
from newsportal.utils.i18n import t
from newsportal.utils.text import slugify, parse_bool, parse_datetime


def normalize_slug(raw):
    slug = slugify(str(raw))
    if not slug:
        raise ValidationError(t('slug_empty'))
    return slug


def check_locale_languages(locales):
    seen = set()
    for locale in locales:
        language = locale['language']
        if language in seen:
            raise ValidationError(t('locale_duplicate', language=language), error='Invalid locale data')
        seen.add(language)


def resolve_published_at(status, current_published_at, explicit_published_at):
    """
    发布时间流转规则：
    - 非 PUBLISHED 状态一律清空
    - 首次进入 PUBLISHED：使用显式时间，否则取当前时间
    - 已发布后再次以 PUBLISHED 更新：显式时间可覆盖，否则保持原值
    """
    if status != ArticleStatus.PUBLISHED:
        return None
    if current_published_at is None:
        return explicit_published_at or datetime.utcnow()
    return explicit_published_at or current_published_at


class ArticleService:
    """文章维护服务"""

    @staticmethod
    def _clean_locales(locales):
        if not isinstance(locales, list) or not locales:
            raise ValidationError(t('article_invalid_input'))
        cleaned = []
        for locale in locales:
            if not isinstance(locale, dict) or not locale.get('language') \
                    or not locale.get('title') or not locale.get('content'):
                raise ValidationError(t('article_invalid_locale'), error='Invalid locale data')
            cleaned.append({
                'language': str(locale['language']).strip(),
                'title': locale['title'],
                'content': locale['content'],
                'excerpt': locale.get('excerpt') or None,
                'meta_description': locale.get('metaDescription') or None,
            })
        check_locale_languages(cleaned)
        return cleaned

    @staticmethod
    def _clean_status(status):
        if status not in ArticleStatus.ALL:
            raise ValidationError(t('status_invalid', status=status))
        return status

    @staticmethod
    def _clean_published_at(value):
        if value in (None, ''):
            return None
        parsed = parse_datetime(value)
        if parsed is None:
            raise ValidationError(t('published_at_invalid'))
        return parsed

    @staticmethod
    def _load_categories(category_ids):
        if not isinstance(category_ids, list):
            raise ValidationError(t('category_ids_invalid', ids=category_ids))
        try:
            ids = [int(cid) for cid in category_ids]
        except (TypeError, ValueError):
            raise ValidationError(t('category_ids_invalid', ids=category_ids))
        if not ids:
            return []
        found = Category.query.filter(Category.id.in_(ids)).all()
        missing = sorted(set(ids) - {c.id for c in found})
        if missing:
            raise ValidationError(t('category_ids_invalid', ids=', '.join(map(str, missing))))
        return found

    @staticmethod
    def _slug_taken(slug, exclude_id=None):
        query = Article.query.filter(Article.slug == slug)
        if exclude_id is not None:
            query = query.filter(Article.id != exclude_id)
        return db.session.query(query.exists()).scalar()

    @staticmethod
    def _commit():
        """先查重只是乐观检查，并发写入时由数据库唯一约束兜底"""
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError(t('article_slug_exists'), error='Slug already exists')

    @staticmethod
    def _build_locales(cleaned):
        return [ArticleLocale(**locale) for locale in cleaned]

    @staticmethod
    def _reload(article_id):
        return db.session.get(Article, article_id, options=[
            selectinload(Article.locales),
            selectinload(Article.categories).selectinload(Category.locales),
            selectinload(Article.author),
        ], populate_existing=True)

    @staticmethod
    def create_article(data, author):
        """
        创建文章
        :param data: {slug, status?, featured?, locales[], categoryIds?, publishedAt?}
        :param author: 当前会话对应的用户，作者不从请求体读取
        """
        if not data.get('slug') or not data.get('locales'):
            raise ValidationError(t('article_invalid_input'))
        locales = ArticleService._clean_locales(data.get('locales'))
        slug = normalize_slug(data['slug'])
        status = ArticleService._clean_status(data.get('status') or ArticleStatus.DRAFT)
        published_at = ArticleService._clean_published_at(data.get('publishedAt'))
        categories = ArticleService._load_categories(data.get('categoryIds') or [])

        if ArticleService._slug_taken(slug):
            raise ConflictError(t('article_slug_exists'), error='Slug already exists')

        article = Article(
            slug=slug,
            status=status,
            featured=parse_bool(data.get('featured', False)),
            author_id=author.id,
            published_at=resolve_published_at(status, None, published_at),
        )
        article.locales = ArticleService._build_locales(locales)
        article.categories = categories
        db.session.add(article)
        ArticleService._commit()

        current_app.logger.info(f'文章已创建 id={article.id} slug={slug} by={author.email}')
        return ArticleService._reload(article.id)

    @staticmethod
    def update_article(article_id, data):
        """
        更新文章（局部字段更新，locales / categoryIds 为整体替换）
        """
        article = db.session.get(Article, article_id)
        if article is None:
            raise NotFoundError(t('article_not_found'), error='Article not found')

        # 先完成全部校验，再修改实体
        locales = None
        if data.get('locales') is not None:
            locales = ArticleService._clean_locales(data['locales'])
        categories = None
        if data.get('categoryIds') is not None:
            categories = ArticleService._load_categories(data['categoryIds'])
        status = article.status
        if data.get('status') is not None:
            status = ArticleService._clean_status(data['status'])
        explicit_published_at = ArticleService._clean_published_at(data.get('publishedAt'))

        if data.get('slug'):
            slug = normalize_slug(data['slug'])
            if slug != article.slug and ArticleService._slug_taken(slug, exclude_id=article.id):
                raise ConflictError(t('article_slug_exists'), error='Slug already exists')
            article.slug = slug

        article.status = status
        if data.get('featured') is not None:
            article.featured = parse_bool(data['featured'])
        article.published_at = resolve_published_at(status, article.published_at, explicit_published_at)

        if locales is not None:
            # 先删除全部旧语言行并落库，再整体插入新集合
            article.locales = []
            db.session.flush()
            article.locales = ArticleService._build_locales(locales)

        if categories is not None:
            article.categories = categories

        article.touch()
        ArticleService._commit()

        current_app.logger.info(f'文章已更新 id={article.id} slug={article.slug} status={article.status}')
        return ArticleService._reload(article.id)

    @staticmethod
    def delete_article(article_id):
        """删除文章（语言行级联删除，分类关联随之移除）"""
        article = db.session.get(Article, article_id)
        if article is None:
            raise NotFoundError(t('article_not_found'), error='Article not found')
        article.delete()
        current_app.logger.info(f'文章已删除 id={article_id}')
