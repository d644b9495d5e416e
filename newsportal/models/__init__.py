# 按照依赖顺序导入
from .base import BaseModel
from .auth import User, UserRole, SessionPrincipal
from .content import (
    Article, ArticleLocale, ArticleStatus,
    Category, CategoryLocale, article_categories
)
from .sys import SiteSetting
