"""
认证网关
对 Supabase Auth 的薄封装：登录、注册、登出、当前用户查询，以及认证状态变更订阅
授权模型是二元的 (已登录 / 未登录)，表级权限由后端策略控制
"""
import logging

logger = logging.getLogger(__name__)


class AuthSubscription:
    """
    订阅句柄
    unsubscribe() 可重复调用；调用后回调不会再收到任何事件
    """

    def __init__(self, notifier, key):
        self._notifier = notifier
        self._key = key

    @property
    def active(self):
        return self._notifier.is_subscribed(self._key)

    def unsubscribe(self):
        self._notifier.remove(self._key)


class AuthStateNotifier:
    """
    认证状态发布/订阅
    - 第一个订阅者出现时向后端客户端注册唯一的监听器
    - 每次状态变更 (登录、登出、令牌刷新) 以 (event, user) 通知所有订阅者
    - 最后一个订阅者退订时从后端解除监听
    """

    def __init__(self, client):
        self.client = client
        self._listeners = {}
        self._next_key = 0
        self._backend_subscription = None

    def subscribe(self, callback):
        key = self._next_key
        self._next_key += 1
        self._listeners[key] = callback
        if self._backend_subscription is None:
            self._backend_subscription = self.client.auth.on_auth_state_change(self.dispatch)
        return AuthSubscription(self, key)

    def is_subscribed(self, key):
        return key in self._listeners

    def remove(self, key):
        if self._listeners.pop(key, None) is None:
            return
        if not self._listeners and self._backend_subscription is not None:
            self._backend_subscription.unsubscribe()
            self._backend_subscription = None

    def dispatch(self, event, session):
        """后端回调入口：session 为空表示已登出"""
        user = getattr(session, 'user', None) if session else None
        for callback in list(self._listeners.values()):
            try:
                callback(event, user)
            except Exception as e:
                logger.error(f'Auth state subscriber failed on {event}: {e}')


class AuthService:
    """认证网关"""

    def __init__(self, client):
        self.client = client
        self.notifier = AuthStateNotifier(client)

    def sign_in(self, email, password):
        """邮箱密码登录，失败时后端异常原样抛出"""
        response = self.client.auth.sign_in_with_password({'email': email, 'password': password})
        return response.user

    def sign_up(self, email, password):
        response = self.client.auth.sign_up({'email': email, 'password': password})
        return response.user

    def sign_out(self):
        """只注销本客户端持有的会话，同一账号的其他登录不受影响"""
        self.client.auth.sign_out({'scope': 'local'})

    def current_session(self):
        """本客户端持有的会话 (含 access_token / refresh_token)，未登录时为 None"""
        return self.client.auth.get_session()

    def restore_session(self, access_token, refresh_token):
        """
        用已保存的令牌恢复会话，令牌过期时后端会顺带刷新
        令牌无效时后端认证异常原样抛出
        """
        response = self.client.auth.set_session(access_token, refresh_token)
        return response.user

    def get_current_user(self):
        """当前会话用户，没有会话时返回 None"""
        response = self.client.auth.get_user()
        return response.user if response else None

    def is_authenticated(self):
        return self.get_current_user() is not None

    def subscribe(self, callback):
        """
        订阅认证状态变更
        callback(event, user)；返回 AuthSubscription，调用 unsubscribe() 取消
        """
        return self.notifier.subscribe(callback)
