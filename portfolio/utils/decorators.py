from functools import wraps

from flask_login import current_user

from portfolio.exceptions import AuthenticationRequired


def admin_required(f):
    """
    后台路由守卫
    授权是二元的：只要持有有效会话即可访问后台
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthenticationRequired()
        return f(*args, **kwargs)
    return decorated_function
