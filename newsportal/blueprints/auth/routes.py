from flask import request, jsonify
from flask_login import login_user, logout_user, login_required, current_user

from newsportal.blueprints.auth import auth_bp
from newsportal.exceptions import UnauthorizedError
from newsportal.services.auth_service import AuthService
from newsportal.utils.decorators import api_endpoint
from newsportal.utils.i18n import t


@auth_bp.route('/login', methods=['POST'])
@api_endpoint('internal_error')
def login():
    """凭证登录，返回会话令牌；同时写入 cookie 会话供页面使用"""
    body = request.get_json(silent=True)
    body = body if isinstance(body, dict) else {}

    user = AuthService.authenticate(body.get('email'), body.get('password'))
    if user is None:
        raise UnauthorizedError(t('invalid_credentials'))

    token = AuthService.issue_token(user)
    principal = AuthService.principal_from_token(token)
    login_user(principal)

    return jsonify({
        'success': True,
        'data': {'token': token, 'user': principal.to_dict()},
        'message': t('login_success')
    })


@auth_bp.route('/session', methods=['GET'])
@login_required
def session():
    return jsonify({'success': True, 'data': current_user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'success': True, 'message': t('logout_success')})
