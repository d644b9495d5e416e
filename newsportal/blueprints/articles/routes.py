from flask import request, jsonify, current_app
from flask_login import login_required, current_user

from newsportal.extensions import db
from newsportal.blueprints.articles import articles_bp
from newsportal.services.auth_service import AuthService
from newsportal.services.article_service import ArticleService
from newsportal.services.fallback_data import mock_articles
from newsportal.services.query_service import ArticleListQuery, ContentQueryService
from newsportal.utils.decorators import api_endpoint
from newsportal.utils.i18n import resolve_language, t
from newsportal.utils.text import parse_int


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@articles_bp.route('', methods=['GET'])
@api_endpoint('list_articles_failed')
def list_articles():
    """文章列表：筛选 / 搜索 / 排序 / 分页"""
    language = resolve_language(request.args.get('language'))
    page = parse_int(request.args.get('page'), 1)
    limit = parse_int(request.args.get('limit'), current_app.config['DEFAULT_PAGE_SIZE'],
                      maximum=current_app.config['MAX_PAGE_SIZE'])

    params = ArticleListQuery(
        language=language,
        page=page,
        limit=limit,
        category_slug=request.args.get('category'),
        status=request.args.get('status'),
        search=request.args.get('search'),
        featured_only=request.args.get('featured') == 'true',
        sort_by=request.args.get('sortBy', 'createdAt'),
        sort_order=request.args.get('sortOrder', 'desc'),
    )

    try:
        data = ContentQueryService.list_articles(params)
    except Exception:
        if not current_app.config['CONTENT_FALLBACK_ENABLED']:
            raise
        # 公共列表降级为内置示例数据，页面不出现错误状态
        db.session.rollback()
        current_app.logger.exception('文章列表查询失败，返回内置示例数据')
        articles = mock_articles(language)
        data = {
            'articles': articles,
            'pagination': {
                'page': page,
                'limit': limit,
                'totalCount': len(articles),
                'totalPages': 1,
            },
        }

    return jsonify({'success': True, 'data': data})


@articles_bp.route('', methods=['POST'])
@login_required
@api_endpoint('create_article_failed')
def create_article():
    author = AuthService.resolve_session_user(current_user)
    article = ArticleService.create_article(_json_body(), author)
    return jsonify({
        'success': True,
        'data': article.to_dict(),
        'message': t('article_created')
    }), 201


@articles_bp.route('/<int:id>', methods=['GET'])
@api_endpoint('get_article_failed')
def get_article(id):
    """单篇文章，请求语言缺失时回退到第一条可用语言"""
    language = resolve_language(request.args.get('language'))
    data = ContentQueryService.get_article(id, language)
    return jsonify({'success': True, 'data': data})


@articles_bp.route('/<int:id>', methods=['PUT'])
@login_required
@api_endpoint('update_article_failed')
def update_article(id):
    article = ArticleService.update_article(id, _json_body())
    return jsonify({
        'success': True,
        'data': article.to_dict(),
        'message': t('article_updated')
    })


@articles_bp.route('/<int:id>', methods=['DELETE'])
@login_required
@api_endpoint('delete_article_failed')
def delete_article(id):
    ArticleService.delete_article(id)
    return jsonify({'success': True, 'message': t('article_deleted')})
