from urllib.parse import urlsplit

from flask import render_template, redirect, request, url_for, flash, abort, current_app
from flask_login import login_user, logout_user, login_required, current_user

from newsportal.blueprints.pages import pages_bp
from newsportal.blueprints.pages.forms import LoginForm
from newsportal.services.auth_service import AuthService
from newsportal.services.dashboard_service import DashboardService
from newsportal.utils.i18n import t


def _check_lang(lang):
    if lang not in current_app.config['SUPPORTED_LANGUAGES']:
        abort(404)


def _safe_callback(url, lang):
    """只接受站内相对地址，防止开放重定向"""
    if url:
        parts = urlsplit(url)
        if not parts.scheme and not parts.netloc and url.startswith('/') \
                and not url.startswith('//'):
            return url
    return url_for('pages.admin_index', lang=lang)


@pages_bp.route('/')
def index():
    return redirect(url_for('pages.admin_index', lang=current_app.config['DEFAULT_LANGUAGE']))


@pages_bp.route('/<lang>/login', methods=['GET', 'POST'])
def login(lang):
    _check_lang(lang)
    callback = request.args.get('callbackUrl')

    if current_user.is_authenticated:
        return redirect(_safe_callback(callback, lang))

    form = LoginForm()
    if request.method == 'GET':
        form.callback_url.data = callback

    if form.validate_on_submit():
        user = AuthService.authenticate(form.email.data, form.password.data)
        if user is None:
            flash(t('invalid_credentials', lang), 'danger')
            return render_template('auth/login.html', form=form, lang=lang), 401

        principal = AuthService.principal_from_token(AuthService.issue_token(user))
        login_user(principal)
        current_app.logger.info(f'后台登录: {user.email}')
        return redirect(_safe_callback(form.callback_url.data, lang))

    return render_template('auth/login.html', form=form, lang=lang)


@pages_bp.route('/<lang>/logout')
def logout(lang):
    _check_lang(lang)
    logout_user()
    flash(t('logout_success', lang), 'info')
    return redirect(url_for('pages.login', lang=lang))


@pages_bp.route('/<lang>/admin/')
@login_required
def admin_index(lang):
    """后台仪表盘页面"""
    _check_lang(lang)
    user = AuthService.find_session_user(current_user)
    if user is None:
        logout_user()
        return redirect(url_for('pages.login', lang=lang))
    stats = DashboardService.get_stats(user)
    return render_template('admin/dashboard.html', stats=stats, user=user, lang=lang)
