from flask import request, jsonify
from flask_login import login_required

from newsportal.blueprints.settings import settings_bp
from newsportal.services.settings_service import SettingsService
from newsportal.utils.decorators import api_endpoint, admin_required
from newsportal.utils.i18n import t


@settings_bp.route('', methods=['GET'])
@login_required
@api_endpoint('get_settings_failed')
@admin_required('forbidden_settings')
def get_settings():
    return jsonify({'success': True, 'data': SettingsService.get_settings()})


@settings_bp.route('', methods=['PUT'])
@login_required
@api_endpoint('update_settings_failed')
@admin_required('forbidden_settings')
def update_settings():
    body = request.get_json(silent=True)
    data = SettingsService.update_settings(body if isinstance(body, dict) else {})
    return jsonify({'success': True, 'data': data, 'message': t('settings_updated')})
