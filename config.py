import os
from dotenv import load_dotenv

# 加载 .env 环境变量
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    """基础配置类"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # 数据库配置
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_RECORD_QUERIES = True

    # 站点信息 (settings 表中没有记录时使用)
    WEBSITE_NAME = os.environ.get('WEBSITE_NAME', 'WarpBlog')
    WEBSITE_DESCRIPTION = os.environ.get('WEBSITE_DESCRIPTION', 'Just another blog')
    # 生成 RSS 绝对链接时使用的协议
    SESSION_HTTPS = os.environ.get('SESSION_HTTPS', 'false').lower() in ('1', 'true', 'yes')

    # 分页
    ARTICLES_PER_PAGE = int(os.environ.get('ARTICLES_PER_PAGE', 10))

    # 上传配置
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 限制最大请求体 16MB
    MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 封面图片解码后最大 5MB

    # 缓存配置 (默认使用 SimpleCache，生产环境可改 Redis)
    CACHE_TYPE = "SimpleCache"
    CACHE_DEFAULT_TIMEOUT = 300

    # RSS
    FEED_MAX_ITEMS = 20
    FEED_CACHE_TIMEOUT = 3600

    @staticmethod
    def init_app(app):
        pass

class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'warpblog.db')

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)
        # sqlite 文件所在目录必须存在
        instance_dir = os.path.join(basedir, 'instance')
        if not os.path.exists(instance_dir):
            os.makedirs(instance_dir)

class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False

    DATABASE_URL = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'warpblog_prod.db')
    # PostgreSQL URL 修正（部分平台使用 postgres://）
    if DATABASE_URL and DATABASE_URL.startswith('postgres://'):
        DATABASE_URL = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = DATABASE_URL

    # 安全设置
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')
    CACHE_REDIS_URL = os.environ.get('CACHE_REDIS_URL')

    @classmethod
    def init_app(cls, app):
        DevelopmentConfig.init_app(app)

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
