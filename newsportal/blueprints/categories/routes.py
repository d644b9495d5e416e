from flask import request, jsonify, current_app
from flask_login import login_required

from newsportal.extensions import db
from newsportal.blueprints.categories import categories_bp
from newsportal.services.category_service import CategoryService
from newsportal.services.fallback_data import mock_categories
from newsportal.services.query_service import ContentQueryService
from newsportal.utils.decorators import api_endpoint
from newsportal.utils.i18n import resolve_language, t


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@categories_bp.route('', methods=['GET'])
@api_endpoint('list_categories_failed')
def list_categories():
    """分类列表，includeArticleCount=true 时附带已发布文章数"""
    language = resolve_language(request.args.get('language'))
    include_count = request.args.get('includeArticleCount') == 'true'
    try:
        data = ContentQueryService.list_categories(language, include_count)
    except Exception:
        if not current_app.config['CONTENT_FALLBACK_ENABLED']:
            raise
        db.session.rollback()
        current_app.logger.exception('分类列表查询失败，返回内置示例数据')
        data = mock_categories(language, include_count)
    return jsonify({'success': True, 'data': data})


@categories_bp.route('', methods=['POST'])
@login_required
@api_endpoint('create_category_failed')
def create_category():
    category = CategoryService.create_category(_json_body())
    return jsonify({
        'success': True,
        'data': category.to_dict(),
        'message': t('category_created')
    }), 201


@categories_bp.route('/<int:id>', methods=['GET'])
@api_endpoint('get_category_failed')
def get_category(id):
    language = resolve_language(request.args.get('language'))
    return jsonify({'success': True, 'data': ContentQueryService.get_category(id, language)})


@categories_bp.route('/<int:id>', methods=['PUT'])
@login_required
@api_endpoint('update_category_failed')
def update_category(id):
    category = CategoryService.update_category(id, _json_body())
    return jsonify({
        'success': True,
        'data': category.to_dict(),
        'message': t('category_updated')
    })


@categories_bp.route('/<int:id>', methods=['DELETE'])
@login_required
@api_endpoint('delete_category_failed')
def delete_category(id):
    CategoryService.delete_category(id)
    return jsonify({'success': True, 'message': t('category_deleted')})
