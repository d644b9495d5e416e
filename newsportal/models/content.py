from newsportal.extensions import db
from newsportal.utils.text import isoformat
from .base import BaseModel

# 多对多关系表：文章 <-> 分类
article_categories = db.Table(
    'article_categories',
    db.Column('article_id', db.Integer, db.ForeignKey('articles.id', ondelete='CASCADE'), primary_key=True),
    db.Column('category_id', db.Integer, db.ForeignKey('categories.id'), primary_key=True)
)


class ArticleStatus:
    """文章状态"""
    DRAFT = 'DRAFT'
    PUBLISHED = 'PUBLISHED'
    ARCHIVED = 'ARCHIVED'

    ALL = (DRAFT, PUBLISHED, ARCHIVED)


class Article(BaseModel):
    """新闻文章（语言无关部分）"""
    __tablename__ = 'articles'

    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    status = db.Column(db.String(16), nullable=False, default=ArticleStatus.DRAFT, index=True)
    featured = db.Column(db.Boolean, nullable=False, default=False)
    published_at = db.Column(db.DateTime, nullable=True, index=True)

    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    author = db.relationship('User', back_populates='articles')
    locales = db.relationship('ArticleLocale', back_populates='article',
                              cascade='all, delete-orphan', order_by='ArticleLocale.id')
    categories = db.relationship('Category', secondary=article_categories,
                                 back_populates='articles', order_by='Category.created_at')

    def locales_for(self, language=None):
        if language is None:
            return list(self.locales)
        return [loc for loc in self.locales if loc.language == language]

    def to_dict(self, language=None, locale_rows=None, full_content=True):
        """
        language 为空时返回全部语言；locale_rows 可显式指定要输出的语言行
        （单篇回退场景）。列表接口 full_content=False 不输出正文。
        """
        rows = locale_rows if locale_rows is not None else self.locales_for(language)
        return {
            'id': self.id,
            'slug': self.slug,
            'status': self.status,
            'featured': self.featured,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
            'publishedAt': isoformat(self.published_at),
            'authorId': self.author_id,
            'locales': [loc.to_dict(full_content=full_content) for loc in rows],
            'categories': [cat.to_dict(language=language) for cat in self.categories],
            'author': {
                'id': self.author.id,
                'name': self.author.name,
            } if self.author else None,
        }

    def __repr__(self):
        return f'<Article {self.slug} [{self.status}]>'


class ArticleLocale(BaseModel):
    """文章的单语言内容"""
    __tablename__ = 'article_locales'
    __table_args__ = (
        db.UniqueConstraint('article_id', 'language', name='uq_article_locale_language'),
    )

    article_id = db.Column(db.Integer, db.ForeignKey('articles.id', ondelete='CASCADE'), nullable=False, index=True)
    language = db.Column(db.String(8), nullable=False, index=True)
    title = db.Column(db.String(512), nullable=False)
    content = db.Column(db.Text, nullable=False)  # Markdown 原文
    excerpt = db.Column(db.Text)
    meta_description = db.Column(db.String(512))

    article = db.relationship('Article', back_populates='locales')

    def to_dict(self, full_content=True):
        data = {
            'id': self.id,
            'language': self.language,
            'title': self.title,
            'excerpt': self.excerpt,
            'metaDescription': self.meta_description,
        }
        if full_content:
            data['content'] = self.content
            data['createdAt'] = isoformat(self.created_at)
            data['updatedAt'] = isoformat(self.updated_at)
        return data


class Category(BaseModel):
    """新闻分类"""
    __tablename__ = 'categories'

    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)

    locales = db.relationship('CategoryLocale', back_populates='category',
                              cascade='all, delete-orphan', order_by='CategoryLocale.id')
    articles = db.relationship('Article', secondary=article_categories,
                               back_populates='categories', lazy='dynamic')

    def locales_for(self, language=None):
        if language is None:
            return list(self.locales)
        return [loc for loc in self.locales if loc.language == language]

    def to_dict(self, language=None, locale_rows=None, article_count=None):
        rows = locale_rows if locale_rows is not None else self.locales_for(language)
        data = {
            'id': self.id,
            'slug': self.slug,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
            'locales': [loc.to_dict() for loc in rows],
        }
        if article_count is not None:
            data['articleCount'] = article_count
        return data

    def __repr__(self):
        return f'<Category {self.slug}>'


class CategoryLocale(BaseModel):
    """分类的单语言名称"""
    __tablename__ = 'category_locales'
    __table_args__ = (
        db.UniqueConstraint('category_id', 'language', name='uq_category_locale_language'),
    )

    category_id = db.Column(db.Integer, db.ForeignKey('categories.id', ondelete='CASCADE'), nullable=False, index=True)
    language = db.Column(db.String(8), nullable=False, index=True)
    name = db.Column(db.String(128), nullable=False)

    category = db.relationship('Category', back_populates='locales')

    def to_dict(self):
        return {
            'id': self.id,
            'language': self.language,
            'name': self.name,
        }
