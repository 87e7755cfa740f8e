"""
Supabase 后端客户端工厂
- 公开客户端：SUPABASE_URL + SUPABASE_ANON_KEY
  应用级的匿名客户端从不登录；每个管理员请求另建一个客户端并恢复该管理员自己的会话
- 服务端客户端：SUPABASE_SERVICE_ROLE_KEY，仅用于服务端管理任务
客户端实例通过依赖注入传给各个服务，不使用全局单例
"""
from supabase import Client, ClientOptions, create_client

from portfolio.exceptions import BackendConfigError


def _get(cfg, name):
    value = cfg.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _options():
    # 会话只保存在客户端实例内存中，不启动后台刷新线程
    return ClientOptions(auto_refresh_token=False, persist_session=False)


def missing_public_settings(cfg):
    """返回缺失的公开环境变量名列表"""
    return [name for name in ('SUPABASE_URL', 'SUPABASE_ANON_KEY') if not _get(cfg, name)]


def create_public_client(cfg) -> Client:
    """创建公开 (匿名 Key) 客户端，缺少环境变量时立即抛出 BackendConfigError"""
    missing = missing_public_settings(cfg)
    if missing:
        raise BackendConfigError(f"Missing {' and '.join(missing)} environment variable")
    return create_client(_get(cfg, 'SUPABASE_URL'), _get(cfg, 'SUPABASE_ANON_KEY'), options=_options())


def create_service_client(cfg) -> Client:
    """创建服务端 (service role) 客户端，不持久化会话也不自动刷新令牌"""
    url = _get(cfg, 'SUPABASE_URL')
    service_key = _get(cfg, 'SUPABASE_SERVICE_ROLE_KEY')
    if not url:
        raise BackendConfigError('Missing SUPABASE_URL environment variable')
    if not service_key:
        raise BackendConfigError('Missing SUPABASE_SERVICE_ROLE_KEY environment variable')
    return create_client(url, service_key, options=_options())
