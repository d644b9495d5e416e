from flask import jsonify
from flask_login import login_required, current_user

from newsportal.blueprints.dashboard import dashboard_bp
from newsportal.services.auth_service import AuthService
from newsportal.services.dashboard_service import DashboardService
from newsportal.utils.decorators import api_endpoint


@dashboard_bp.route('/stats')
@login_required
@api_endpoint('dashboard_failed')
def stats():
    """获取仪表盘统计数据（管理员全站，其他角色仅本人文章）"""
    user = AuthService.resolve_session_user(current_user)
    return jsonify({
        'success': True,
        'data': DashboardService.get_stats(user)
    })
