import logging
import colorlog
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from config import config
from warpblog.extensions import db, migrate, login_manager, cache
from warpblog.exceptions import ApiError, InternalError

# 导入 commands 模块，用于注册 CLI 命令
from warpblog import commands

__version__ = '1.0.0'


def create_app(config_name='default'):
    """WarpBlog 应用工厂函数"""
    app = Flask(__name__)

    # 1. 加载配置
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # 2. 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)

    # 3. 配置日志
    configure_logging(app)

    # 4. 注册蓝图 (Blueprints)
    register_blueprints(app)

    # 5. 注册全局错误处理
    register_error_handlers(app)

    # 6. 注册 CLI 命令
    register_commands(app)

    return app


def register_blueprints(app):
    """注册所有业务模块蓝图"""
    # 分类
    from warpblog.blueprints.categories import categories_bp
    app.register_blueprint(categories_bp, url_prefix='/api/categories')

    # 文章
    from warpblog.blueprints.articles import articles_bp
    app.register_blueprint(articles_bp, url_prefix='/api/articles')

    # 登录 / 当前用户
    from warpblog.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api')

    # 站点配置
    from warpblog.blueprints.settings import settings_bp
    app.register_blueprint(settings_bp, url_prefix='/api/settings')

    # 附件下载
    from warpblog.blueprints.files import files_bp
    app.register_blueprint(files_bp, url_prefix='/files')

    # RSS
    from warpblog.blueprints.feed import feed_bp
    app.register_blueprint(feed_bp, url_prefix='/feed')


def register_error_handlers(app):
    """所有错误统一转换为 JSON: {error, data, message, code, success}"""

    @app.errorhandler(ApiError)
    def api_error(e):
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(SQLAlchemyError)
    def store_error(e):
        db.session.rollback()
        app.logger.exception('store error')
        return jsonify(InternalError().to_dict()), 500

    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code >= 500:
            app.logger.error(f'http error {e.code}: {e.description}')
        error = 'resource:notfound' if e.code == 404 else f'http:{e.code}'
        return jsonify({
            'error': error,
            'data': None,
            'message': e.description,
            'code': e.code,
            'success': False
        }), e.code


def register_commands(app):
    """注册 Flask CLI 命令"""
    app.cli.add_command(commands.forge)
    app.cli.add_command(commands.status)
    app.cli.add_command(commands.create_user)


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
    if not app.testing:
        app.logger.setLevel(logging.INFO)
