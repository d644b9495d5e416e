import logging
import os

import colorlog
from flask import Flask, jsonify, request, render_template

from config import config
from newsportal.extensions import db, migrate, login_manager, cache, csrf
from newsportal.exceptions import PortalError
from newsportal.utils.i18n import t

from newsportal import commands


def create_app(config_name='default'):
    """新闻门户应用工厂函数"""
    app = Flask(__name__)

    # 1. 加载配置
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # 2. 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)
    csrf.init_app(app)

    # 3. 配置日志
    configure_logging(app)

    # 4. 注册蓝图 (Blueprints)
    register_blueprints(app)

    # 5. 注册全局错误处理
    register_error_handlers(app)

    # 6. 注册 CLI 命令
    register_commands(app)

    # 7. 生产环境自动建表
    auto_init_database(app)

    return app


def auto_init_database(app):
    """生产环境首次启动时自动创建数据库表"""
    if os.environ.get('FLASK_ENV') != 'production' and not os.environ.get('DATABASE_URL'):
        return
    if app.testing:
        return
    with app.app_context():
        from sqlalchemy import inspect
        from newsportal import models  # noqa: F401

        tables = inspect(db.engine).get_table_names()
        if 'articles' not in tables:
            app.logger.info('首次启动，正在创建数据库表...')
            db.create_all()
            app.logger.info('数据库表创建完成')


def register_blueprints(app):
    """注册所有业务模块蓝图"""
    # 页面蓝图（登录、后台仪表盘）
    from newsportal.blueprints.pages import pages_bp
    app.register_blueprint(pages_bp)

    # 认证接口
    from newsportal.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # 文章接口
    from newsportal.blueprints.articles import articles_bp
    app.register_blueprint(articles_bp, url_prefix='/api/articles')

    # 分类接口
    from newsportal.blueprints.categories import categories_bp
    app.register_blueprint(categories_bp, url_prefix='/api/categories')

    # 仪表盘统计接口
    from newsportal.blueprints.dashboard import dashboard_bp
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')

    # 用户管理接口
    from newsportal.blueprints.users import users_bp
    app.register_blueprint(users_bp, url_prefix='/api/users')

    # 站点设置接口
    from newsportal.blueprints.settings import settings_bp
    app.register_blueprint(settings_bp, url_prefix='/api/settings')

    # JSON 接口使用 Bearer 令牌，不走表单 CSRF 校验
    for bp in (auth_bp, articles_bp, categories_bp, dashboard_bp, users_bp, settings_bp):
        csrf.exempt(bp)


def register_error_handlers(app):
    @app.errorhandler(PortalError)
    def handle_portal_error(e):
        db.session.rollback()
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(404)
    def page_not_found(e):
        if request.path.startswith('/api/'):
            return jsonify({'success': False, 'error': 'Not found', 'message': t('not_found')}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if request.path.startswith('/api/'):
            return jsonify({
                'success': False,
                'error': 'Method Not Allowed',
                'message': t('method_not_allowed')
            }), 405
        return e

    @app.errorhandler(500)
    def internal_server_error(e):
        db.session.rollback()
        if request.path.startswith('/api/'):
            return jsonify({
                'success': False,
                'error': 'Internal Server Error',
                'message': t('internal_error')
            }), 500
        return render_template('errors/500.html'), 500


def register_commands(app):
    """注册 Flask CLI 命令"""
    app.cli.add_command(commands.init_db)
    app.cli.add_command(commands.seed)
    app.cli.add_command(commands.forge)
    app.cli.add_command(commands.status)


def configure_logging(app):
    """配置彩色控制台日志，提升开发体验"""
    if app.debug:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)

        formatter = colorlog.ColoredFormatter(
            "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
            datefmt="%H:%M:%S",
            reset=True,
            log_colors={
                'DEBUG':    'cyan',
                'INFO':     'green',
                'WARNING':  'yellow',
                'ERROR':    'red',
                'CRITICAL': 'red,bg_white',
            },
            secondary_log_colors={},
            style='%'
        )
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)
        app.logger.setLevel(logging.INFO)
