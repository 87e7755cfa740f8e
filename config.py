import os
from dotenv import load_dotenv

# 加载 .env 环境变量
load_dotenv()


def _env_flag(name, default='true'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """基础配置类"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # Supabase 后端配置 (公开 URL + 匿名 Key；Service Key 仅限服务端使用)
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY')
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get('SUPABASE_SERVICE_ROLE_KEY')

    # 对象存储配置
    STORAGE_BUCKET = os.environ.get('STORAGE_BUCKET', 'images')
    UPLOAD_MAX_MB = int(os.environ.get('UPLOAD_MAX_MB', 5))
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 请求体上限 16MB

    # 列表与统计
    POSTS_PER_PAGE = int(os.environ.get('POSTS_PER_PAGE', 6))
    PAGE_VIEW_DAYS = int(os.environ.get('PAGE_VIEW_DAYS', 30))
    TRACK_PAGE_VIEWS = _env_flag('TRACK_PAGE_VIEWS')

    @staticmethod
    def init_app(app):
        pass


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False

    # 安全设置
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE', 'false')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)


class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    TRACK_PAGE_VIEWS = True
    SUPABASE_URL = 'https://test-project.supabase.co'
    SUPABASE_ANON_KEY = 'test-anon-key'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
