import logging
import colorlog
from flask import Flask, jsonify
from postgrest.exceptions import APIError
from supabase import AuthError
from config import config
from portfolio.extensions import backend, login_manager, csrf
from portfolio.exceptions import PermissionDenied, PortfolioException

# 导入 commands 模块，用于注册 CLI 命令
from portfolio import commands

# Postgres insufficient_privilege，行级安全策略拒绝时返回
ROW_PERMISSION_DENIED = '42501'


def create_app(config_name='default', backend_client=None, client_factory=None):
    """
    作品集应用工厂函数
    backend_client: 可选，注入的应用级匿名客户端 (测试时传入替身)
    client_factory: 可选，为每个管理员会话创建新客户端的无参函数
    """
    app = Flask(__name__)

    # 1. 加载配置
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # 2. 配置日志
    configure_logging(app)

    # 3. 初始化扩展
    services = backend.init_app(app, client=backend_client, client_factory=client_factory)
    login_manager.init_app(app)
    csrf.init_app(app)

    # 4. 注册蓝图 (Blueprints)
    register_blueprints(app)

    # 5. 注册全局错误处理
    register_error_handlers(app)

    # 6. 注册 CLI 命令
    register_commands(app)

    # 7. 订阅认证状态变更
    register_auth_listener(app, services)

    return app


def register_blueprints(app):
    """注册所有业务模块蓝图"""
    # 公开站点蓝图
    from portfolio.blueprints.site import site_bp
    app.register_blueprint(site_bp)

    # 认证蓝图
    from portfolio.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')

    # 后台管理蓝图
    from portfolio.blueprints.admin import admin_bp
    app.register_blueprint(admin_bp, url_prefix='/admin')


def register_error_handlers(app):
    @app.errorhandler(PortfolioException)
    def handle_portfolio_exception(e):
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(APIError)
    def handle_backend_error(e):
        # 后端请求错误：原样返回后端的错误信息
        app.logger.error(f'Backend request failed: {e.message}')
        if e.code == ROW_PERMISSION_DENIED:
            return jsonify(PermissionDenied(e.message).to_dict()), 403
        return jsonify({'success': False, 'error': e.message, 'code': e.code}), 502

    @app.errorhandler(AuthError)
    def handle_auth_error(e):
        app.logger.warning(f'Auth request failed: {e.message}')
        return jsonify({'success': False, 'error': e.message}), 401

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({'success': False, 'error': 'Not found', 'code': 404}), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        return jsonify({'success': False, 'error': 'Internal server error', 'code': 500}), 500


def register_commands(app):
    """注册 Flask CLI 命令"""
    app.cli.add_command(commands.status)


def register_auth_listener(app, services):
    """记录每一次认证状态变更 (登录、登出、令牌刷新)"""
    def on_auth_change(event, user):
        email = getattr(user, 'email', None)
        app.logger.info(f'🔐 Auth state changed: {event} ({email or "anonymous"})')

    app.extensions['auth_subscription'] = services.subscribe_auth(on_auth_change)


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
        logging.getLogger('portfolio').addHandler(handler)
        logging.getLogger('portfolio').setLevel(logging.INFO)
