import os
from warpblog import create_app, db, __version__
from warpblog.models import User, Role, Category, Article, Text, Attachment, Setting

PORT = 3000

# 从环境变量获取配置模式
# 支持 FLASK_ENV 或 FLASK_CONFIG
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name in ('development', 'dev'):
    config_name = 'development'

app = create_app(config_name)

@app.shell_context_processor
def make_shell_context():
    """
    配置 Flask Shell 上下文。
    允许在命令行中使用 'flask shell' 时自动导入 db 和模型。
    """
    return dict(
        db=db,
        app=app,
        User=User,
        Role=Role,
        Category=Category,
        Article=Article,
        Text=Text,
        Attachment=Attachment,
        Setting=Setting,
    )

if __name__ == '__main__':
    mode = 'production' if config_name == 'production' else 'development'
    app.logger.info(f'application version:{__version__} start in {mode} mode at {PORT}...')
    app.run(host='0.0.0.0', port=PORT)
