"""分类维护服务"""
from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from newsportal.extensions import db
from newsportal.exceptions import ValidationError, ConflictError, NotFoundError, CategoryInUseError
from newsportal.models.content import Category, CategoryLocale, article_categories
from newsportal.services.article_service import normalize_slug, check_locale_languages
from newsportal.utils.i18n import t


class CategoryService:
    """分类维护服务，slug 唯一性与语言行整体替换规则与文章一致"""

    @staticmethod
    def _clean_locales(locales):
        if not isinstance(locales, list) or not locales:
            raise ValidationError(t('category_invalid_input'))
        cleaned = []
        for locale in locales:
            if not isinstance(locale, dict) or not locale.get('language') or not locale.get('name'):
                raise ValidationError(t('category_invalid_locale'), error='Invalid locale data')
            cleaned.append({
                'language': str(locale['language']).strip(),
                'name': locale['name'],
            })
        check_locale_languages(cleaned)
        return cleaned

    @staticmethod
    def _slug_taken(slug, exclude_id=None):
        query = Category.query.filter(Category.slug == slug)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return db.session.query(query.exists()).scalar()

    @staticmethod
    def _commit():
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError(t('category_slug_exists'), error='Slug already exists')

    @staticmethod
    def _reload(category_id):
        return db.session.get(Category, category_id, options=[selectinload(Category.locales)],
                              populate_existing=True)

    @staticmethod
    def article_count(category_id):
        """分类关联的文章总数（不区分状态）"""
        return db.session.query(func.count()).select_from(article_categories).filter(
            article_categories.c.category_id == category_id
        ).scalar()

    @staticmethod
    def create_category(data):
        """创建分类 :param data: {slug, locales: [{language, name}]}"""
        if not data.get('slug') or not data.get('locales'):
            raise ValidationError(t('category_invalid_input'))
        locales = CategoryService._clean_locales(data['locales'])
        slug = normalize_slug(data['slug'])

        if CategoryService._slug_taken(slug):
            raise ConflictError(t('category_slug_exists'), error='Slug already exists')

        category = Category(slug=slug)
        category.locales = [CategoryLocale(**locale) for locale in locales]
        db.session.add(category)
        CategoryService._commit()

        current_app.logger.info(f'分类已创建 id={category.id} slug={slug}')
        return CategoryService._reload(category.id)

    @staticmethod
    def update_category(category_id, data):
        category = db.session.get(Category, category_id)
        if category is None:
            raise NotFoundError(t('category_not_found'), error='Category not found')

        locales = None
        if data.get('locales') is not None:
            locales = CategoryService._clean_locales(data['locales'])

        if data.get('slug'):
            slug = normalize_slug(data['slug'])
            if slug != category.slug and CategoryService._slug_taken(slug, exclude_id=category.id):
                raise ConflictError(t('category_slug_exists'), error='Slug already exists')
            category.slug = slug

        if locales is not None:
            category.locales = []
            db.session.flush()
            category.locales = [CategoryLocale(**locale) for locale in locales]

        category.touch()
        CategoryService._commit()

        current_app.logger.info(f'分类已更新 id={category.id} slug={category.slug}')
        return CategoryService._reload(category.id)

    @staticmethod
    def delete_category(category_id):
        """删除分类：仍有文章关联时拒绝，并返回阻塞删除的文章数"""
        category = db.session.get(Category, category_id)
        if category is None:
            raise NotFoundError(t('category_not_found'), error='Category not found')

        count = CategoryService.article_count(category.id)
        if count > 0:
            raise CategoryInUseError(t('category_in_use', count=count), count)

        category.delete()
        current_app.logger.info(f'分类已删除 id={category_id}')
