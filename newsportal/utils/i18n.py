"""
多语言工具：内容语言解析与接口提示信息
"""
from flask import current_app, request, has_request_context


MESSAGES = {
    'zh': {
        'unauthorized': '请先登录',
        'forbidden_users': '只有管理员可以管理用户',
        'forbidden_settings': '只有管理员可以管理设置',
        'user_not_found': '用户不存在',
        'invalid_credentials': '邮箱或密码错误',
        'login_success': '登录成功',
        'logout_success': '已退出登录',
        'article_not_found': '文章不存在',
        'article_no_content': '文章暂无可用内容',
        'article_invalid_input': '请提供文章标识和至少一种语言的内容',
        'article_invalid_locale': '每种语言都需要提供标题和内容',
        'article_slug_exists': '文章标识已存在，请使用其他标识',
        'article_created': '文章创建成功',
        'article_updated': '文章更新成功',
        'article_deleted': '文章删除成功',
        'category_not_found': '分类不存在',
        'category_no_name': '分类暂无可用名称',
        'category_invalid_input': '请提供分类标识和至少一种语言的名称',
        'category_invalid_locale': '每种语言都需要提供名称',
        'category_slug_exists': '分类标识已存在，请使用其他标识',
        'category_created': '分类创建成功',
        'category_updated': '分类更新成功',
        'category_deleted': '分类删除成功',
        'category_in_use': '该分类下还有 {count} 篇文章，无法删除',
        'category_ids_invalid': '分类不存在: {ids}',
        'slug_empty': '标识规范化后为空，请使用字母或数字',
        'locale_duplicate': '同一种语言只能提供一份内容: {language}',
        'status_invalid': '无效的文章状态: {status}',
        'published_at_invalid': '发布时间格式无效',
        'user_email_required': '请提供邮箱地址',
        'user_email_invalid': '邮箱格式不正确',
        'user_role_invalid': '无效的用户角色: {role}',
        'user_email_exists': '该邮箱已被使用',
        'user_created': '用户创建成功',
        'settings_incomplete': '请提供完整设置项',
        'settings_language_invalid': '不支持的默认语言: {language}',
        'settings_theme_invalid': '不支持的主题: {theme}',
        'settings_updated': '设置已更新',
        'list_articles_failed': '获取文章列表失败',
        'get_article_failed': '获取文章失败',
        'create_article_failed': '创建文章失败',
        'update_article_failed': '更新文章失败',
        'delete_article_failed': '删除文章失败',
        'list_categories_failed': '获取分类列表失败',
        'get_category_failed': '获取分类失败',
        'create_category_failed': '创建分类失败',
        'update_category_failed': '更新分类失败',
        'delete_category_failed': '删除分类失败',
        'dashboard_failed': '获取统计数据失败',
        'list_users_failed': '获取用户列表失败',
        'create_user_failed': '创建用户失败',
        'get_settings_failed': '获取设置失败',
        'update_settings_failed': '更新设置失败',
        'not_found': '请求的资源不存在',
        'method_not_allowed': '不支持的请求方法',
        'internal_error': '服务器内部错误',
        'unknown_author': '未知',
    },
    'en': {
        'unauthorized': 'Please sign in first',
        'forbidden_users': 'Only administrators can manage users',
        'forbidden_settings': 'Only administrators can manage settings',
        'user_not_found': 'User not found',
        'invalid_credentials': 'Invalid email or password',
        'login_success': 'Signed in',
        'logout_success': 'Signed out',
        'article_not_found': 'Article not found',
        'article_no_content': 'No content available for this article',
        'article_invalid_input': 'Please provide a slug and content in at least one language',
        'article_invalid_locale': 'Every language needs a title and content',
        'article_slug_exists': 'Article slug already exists, please choose another',
        'article_created': 'Article created',
        'article_updated': 'Article updated',
        'article_deleted': 'Article deleted',
        'category_not_found': 'Category not found',
        'category_no_name': 'No name available for this category',
        'category_invalid_input': 'Please provide a slug and a name in at least one language',
        'category_invalid_locale': 'Every language needs a name',
        'category_slug_exists': 'Category slug already exists, please choose another',
        'category_created': 'Category created',
        'category_updated': 'Category updated',
        'category_deleted': 'Category deleted',
        'category_in_use': '{count} article(s) still belong to this category, it cannot be deleted',
        'category_ids_invalid': 'Unknown categories: {ids}',
        'slug_empty': 'Slug is empty after normalization, please use letters or digits',
        'locale_duplicate': 'Only one entry per language is allowed: {language}',
        'status_invalid': 'Invalid article status: {status}',
        'published_at_invalid': 'Invalid publish time',
        'user_email_required': 'Please provide an email address',
        'user_email_invalid': 'Invalid email address',
        'user_role_invalid': 'Invalid user role: {role}',
        'user_email_exists': 'Email is already in use',
        'user_created': 'User created',
        'settings_incomplete': 'Please provide all settings',
        'settings_language_invalid': 'Unsupported default language: {language}',
        'settings_theme_invalid': 'Unsupported theme: {theme}',
        'settings_updated': 'Settings updated',
        'list_articles_failed': 'Failed to load articles',
        'get_article_failed': 'Failed to load article',
        'create_article_failed': 'Failed to create article',
        'update_article_failed': 'Failed to update article',
        'delete_article_failed': 'Failed to delete article',
        'list_categories_failed': 'Failed to load categories',
        'get_category_failed': 'Failed to load category',
        'create_category_failed': 'Failed to create category',
        'update_category_failed': 'Failed to update category',
        'delete_category_failed': 'Failed to delete category',
        'dashboard_failed': 'Failed to load statistics',
        'list_users_failed': 'Failed to load users',
        'create_user_failed': 'Failed to create user',
        'get_settings_failed': 'Failed to load settings',
        'update_settings_failed': 'Failed to update settings',
        'not_found': 'The requested resource does not exist',
        'method_not_allowed': 'Method not allowed',
        'internal_error': 'Internal server error',
        'unknown_author': 'Unknown',
    },
}


def resolve_language(value):
    """受支持的语言原样返回，其余一律回退到默认语言"""
    supported = current_app.config['SUPPORTED_LANGUAGES']
    if value in supported:
        return value
    return current_app.config['DEFAULT_LANGUAGE']


def request_language():
    """提示信息语言：language 参数 > Accept-Language > 默认语言"""
    if not has_request_context():
        return current_app.config['DEFAULT_LANGUAGE']
    supported = current_app.config['SUPPORTED_LANGUAGES']
    lang = request.args.get('language')
    if lang in supported:
        return lang
    best = request.accept_languages.best_match(supported)
    return best or current_app.config['DEFAULT_LANGUAGE']


def t(key, lang=None, **kwargs):
    catalog = MESSAGES.get(lang or request_language(), MESSAGES['zh'])
    template = catalog.get(key) or MESSAGES['zh'].get(key, key)
    return template.format(**kwargs) if kwargs else template
