from functools import partial

from flask import current_app, g, session
from flask_login import LoginManager, logout_user
from flask_wtf.csrf import CSRFProtect
from supabase import AuthError

from portfolio.client import create_public_client
from portfolio.exceptions import AuthenticationRequired
from portfolio.services import (
    AnalyticsService, ArtworkService, AuthService, BlogService,
    ContactService, DashboardService, ImageUploader, UploadLocks,
)

# Flask 会话中保存管理员后端令牌的键
BACKEND_SESSION_KEY = 'backend_session'


class BackendServices:
    """
    一个客户端实例及建立在它之上的全部数据访问服务
    应用级实例使用从不登录的匿名客户端；管理员请求通过 for_session() 得到自己的实例
    """

    def __init__(self, client, cfg, client_factory=None, shared=None):
        self.client = client
        self.cfg = cfg
        self.client_factory = client_factory
        # 监听器与上传锁在应用级实例和所有会话实例之间共享
        self.shared = shared if shared is not None else {
            'auth_listeners': [],
            'upload_locks': UploadLocks(),
        }
        bucket = cfg.get('STORAGE_BUCKET', 'images')
        self.blog = BlogService(client, bucket=bucket)
        self.artworks = ArtworkService(client, bucket=bucket)
        self.contacts = ContactService(client)
        self.analytics = AnalyticsService(client)
        self.auth = AuthService(client)
        self.dashboard = DashboardService(self.blog, self.artworks, self.contacts, self.analytics)

    def subscribe_auth(self, callback):
        """注册认证状态监听器：当前实例立即订阅，之后创建的会话实例也会订阅"""
        self.shared['auth_listeners'].append(callback)
        return self.auth.subscribe(callback)

    def fresh(self):
        """新建一个没有会话的客户端及其服务 (登录用)"""
        scoped = BackendServices(self.client_factory(), self.cfg, self.client_factory, self.shared)
        scoped._attach_auth_listeners()
        return scoped

    def for_session(self, access_token, refresh_token):
        """新建客户端并恢复指定管理员的会话；令牌无效时后端认证异常原样抛出"""
        scoped = BackendServices(self.client_factory(), self.cfg, self.client_factory, self.shared)
        scoped.auth.restore_session(access_token, refresh_token)
        scoped._attach_auth_listeners()
        return scoped

    def new_uploader(self, owner=None):
        """每次上传新建一个上传助手；同一 owner 共用一把锁"""
        lock = self.shared['upload_locks'].for_key(owner) if owner else None
        return ImageUploader(
            self.client,
            bucket=self.cfg.get('STORAGE_BUCKET', 'images'),
            max_size_mb=self.cfg.get('UPLOAD_MAX_MB', 5),
            in_flight=lock,
        )

    def _attach_auth_listeners(self):
        for callback in self.shared['auth_listeners']:
            self.auth.subscribe(callback)


class Backend:
    """
    Supabase 后端扩展
    init_app 时注入 (或按配置创建) 匿名客户端，client_factory 用于为每个管理员会话创建新客户端
    """

    def __init__(self, app=None, client=None, client_factory=None):
        if app is not None:
            self.init_app(app, client, client_factory)

    def init_app(self, app, client=None, client_factory=None):
        if client_factory is None:
            client_factory = partial(create_public_client, app.config)
        if client is None:
            client = client_factory()
        services = BackendServices(client, app.config, client_factory)
        app.extensions['portfolio_backend'] = services
        return services


def get_backend():
    """当前请求的后端服务：管理员请求为其会话实例，其余为应用级匿名实例"""
    scoped = g.get('portfolio_backend')
    if scoped is not None:
        return scoped
    return current_app.extensions['portfolio_backend']


def store_backend_session(backend_session):
    session[BACKEND_SESSION_KEY] = {
        'access_token': backend_session.access_token,
        'refresh_token': backend_session.refresh_token,
    }


def clear_admin_session():
    session.pop(BACKEND_SESSION_KEY, None)
    session.pop('admin_email', None)
    session.pop('admin_created_at', None)


def bind_session_backend():
    """
    为当前请求恢复管理员自己的后端会话，之后 get_backend() 返回该会话实例
    后端拒绝令牌时清除登录状态并要求重新登录
    """
    tokens = session.get(BACKEND_SESSION_KEY)
    if not tokens:
        raise AuthenticationRequired()
    services = current_app.extensions['portfolio_backend']
    try:
        scoped = services.for_session(tokens['access_token'], tokens['refresh_token'])
    except AuthError as e:
        current_app.logger.warning(f'Admin backend session rejected: {e.message}')
        logout_user()
        clear_admin_session()
        raise AuthenticationRequired('Session expired, please sign in again')
    g.portfolio_backend = scoped
    return scoped


def sync_backend_session():
    """令牌在请求中被刷新时，把新令牌写回 Flask 会话"""
    scoped = g.get('portfolio_backend')
    if scoped is None or BACKEND_SESSION_KEY not in session:
        return
    current = scoped.auth.current_session()
    if current is not None and current.access_token != session[BACKEND_SESSION_KEY]['access_token']:
        store_backend_session(current)


# 初始化扩展对象 (暂不绑定 app)
backend = Backend()
login_manager = LoginManager()
csrf = CSRFProtect()

# 配置 LoginManager
login_manager.session_protection = 'strong'


@login_manager.user_loader
def load_user(user_id):
    """Flask-Login 用户加载回调：管理员身份与后端令牌在登录时写入会话"""
    from portfolio.models import AdminUser
    email = session.get('admin_email')
    if not email or not session.get(BACKEND_SESSION_KEY):
        return None
    return AdminUser(user_id, email, session.get('admin_created_at'))
