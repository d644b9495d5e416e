from flask import request, jsonify, current_app
from flask_login import login_required

from newsportal.blueprints.users import users_bp
from newsportal.services.user_service import UserService
from newsportal.utils.decorators import api_endpoint, admin_required
from newsportal.utils.i18n import t
from newsportal.utils.text import parse_int


@users_bp.route('', methods=['GET'])
@login_required
@api_endpoint('list_users_failed')
@admin_required('forbidden_users')
def list_users():
    page = parse_int(request.args.get('page'), 1)
    limit = parse_int(request.args.get('limit'), current_app.config['DEFAULT_PAGE_SIZE'],
                      maximum=current_app.config['MAX_PAGE_SIZE'])
    data = UserService.list_users(
        page, limit,
        role=request.args.get('role'),
        search=(request.args.get('search') or '').strip() or None
    )
    return jsonify({'success': True, 'data': data})


@users_bp.route('', methods=['POST'])
@login_required
@api_endpoint('create_user_failed')
@admin_required('forbidden_users')
def create_user():
    body = request.get_json(silent=True)
    user = UserService.create_user(body if isinstance(body, dict) else {})
    return jsonify({
        'success': True,
        'data': UserService.serialize(user),
        'message': t('user_created')
    }), 201
