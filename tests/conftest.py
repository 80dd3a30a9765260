"""
pytest配置文件
提供测试夹具和配置
"""

import pytest
from flask import g
from warpblog import create_app
from warpblog.extensions import db as _db
from warpblog.models import User, Role, Category, Article, Text
from warpblog.utils.helpers import now_millis

PASSWORD = 'password'


@pytest.fixture
def app():
    """测试应用 (内存 SQLite + SimpleCache)"""
    app = create_app('testing')

    # 测试期间应用上下文一直处于推入状态，g 在请求之间共享；
    # 每个请求前清掉 Flask-Login 缓存的用户，让它按各自 client 的会话重新加载
    @app.before_request
    def reset_login_cache():
        g.pop('_login_user', None)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    """匿名客户端"""
    return app.test_client()


@pytest.fixture
def users(app):
    """每种角色一个用户，另加一个 EDITOR 用于所有权测试"""
    created = {}
    for role in Role:
        user = User(
            email=f'{role.name.lower()}@warpblog.io',
            name=f'{role.name.title()} User',
            password=PASSWORD,
            role=role
        )
        _db.session.add(user)
        created[role.name.lower()] = user
    other = User(email='other.editor@warpblog.io', name='Other Editor', password=PASSWORD, role=Role.EDITOR)
    _db.session.add(other)
    created['other_editor'] = other
    _db.session.commit()
    return created


@pytest.fixture
def login(app, users):
    """
    返回登录函数: login('admin') -> 已登录的 test client
    每次调用创建独立的 client，互不影响会话
    """
    def _login(name):
        client = app.test_client()
        user = users[name]
        response = client.post('/api/authenticate', json={'email': user.email, 'passwd': PASSWORD})
        assert response.status_code == 200, response.get_json()
        return client
    return _login


@pytest.fixture
def make_category(app):
    """直接写库创建分类"""
    def _make(name='Default', display_order=None, description=''):
        if display_order is None:
            display_order = Category.query.count()
        category = Category(name=name, description=description, display_order=display_order)
        _db.session.add(category)
        _db.session.commit()
        return category
    return _make


@pytest.fixture
def make_article(app):
    """直接写库创建文章及正文"""
    def _make(user, category, name='Hello', content='# Hello', publish_at=None, tags=''):
        article = Article(
            user_id=user.id,
            user_name=user.name,
            category_id=category.id,
            name=name,
            description=f'{name} description',
            tags=tags,
            publish_at=now_millis() - 1000 if publish_at is None else publish_at
        )
        _db.session.add(article)
        _db.session.flush()
        text = Text(ref_id=article.id, value=content)
        _db.session.add(text)
        _db.session.flush()
        article.content_id = text.id
        _db.session.commit()
        return article
    return _make
