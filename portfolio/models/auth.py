from flask_login import UserMixin


class AdminUser(UserMixin):
    """
    后台管理员 (Flask-Login 用户对象)
    身份由 Supabase Auth 提供，授权是二元的：已登录 / 未登录
    """

    def __init__(self, id, email=None, created_at=None):
        self.id = str(id)
        self.email = email
        self.created_at = created_at

    @classmethod
    def from_backend(cls, user):
        """从 Supabase 返回的 User 对象 (或字典) 构建"""
        if user is None:
            return None
        if isinstance(user, dict):
            return cls(user.get('id'), user.get('email'), user.get('created_at'))
        return cls(user.id, getattr(user, 'email', None), getattr(user, 'created_at', None))

    def to_dict(self):
        created_at = self.created_at
        if created_at is not None and not isinstance(created_at, str):
            created_at = created_at.isoformat()
        return {'id': self.id, 'email': self.email, 'created_at': created_at}

    def __repr__(self):
        return f'<AdminUser {self.email}>'
