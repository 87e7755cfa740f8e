"""后端连通性自检：环境变量 -> blog_categories 探测 -> 当前用户 -> 已发布文章"""
import logging

from portfolio.client import missing_public_settings

logger = logging.getLogger(__name__)


def run_self_test(services, cfg):
    """
    依次执行自检步骤，任何一步失败即停止
    Returns:
        dict: status 为 'success' 或 'error'
    """
    missing = missing_public_settings(cfg)
    result = {
        'status': 'testing',
        'env': {
            'SUPABASE_URL': 'SUPABASE_URL' not in missing,
            'SUPABASE_ANON_KEY': 'SUPABASE_ANON_KEY' not in missing,
        },
        'user': None,
        'published_posts': 0,
        'error': None,
    }
    if missing:
        result['status'] = 'error'
        result['error'] = f"Missing environment variables: {' '.join(missing)}"
        return result

    try:
        # 1. 探测连接
        services.client.table('blog_categories').select('*').limit(1).execute()
        # 2. 当前用户 (未登录时为 None)
        user = services.auth.get_current_user()
        result['user'] = getattr(user, 'email', None)
        # 3. 读取已发布文章
        result['published_posts'] = len(services.blog.get_published_posts())
        result['status'] = 'success'
    except Exception as e:
        logger.error(f'Backend self-test failed: {e}')
        result['status'] = 'error'
        result['error'] = getattr(e, 'message', None) or str(e)
    return result
