from datetime import datetime, timedelta
from enum import IntEnum
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from warpblog.extensions import db
from .base import BaseModel


class Role(IntEnum):
    """
    用户角色
    数值越小权限越高：权限检查一律写成 user.role <= required
    """
    ADMIN = 0
    EDITOR = 1
    CONTRIBUTOR = 2
    SUBSCRIBER = 3


def has_role(user, required):
    """用户角色是否达到 required (匿名用户永远为 False)"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return user.role <= required


class User(UserMixin, BaseModel):
    """用户"""
    __tablename__ = 'users'
    __hidden_fields__ = ('password_hash', 'failed_login_attempts', 'locked_until')

    email = db.Column(db.String(128), unique=True, index=True, nullable=False)
    name = db.Column(db.String(64), nullable=False)
    password_hash = db.Column(db.String(256))
    role = db.Column(db.Integer, default=Role.SUBSCRIBER, nullable=False)
    image_url = db.Column(db.String(256))

    is_active_user = db.Column(db.Boolean, default=True)  # 封号开关
    last_login = db.Column(db.DateTime)

    # 安全字段
    failed_login_attempts = db.Column(db.Integer, default=0)
    locked_until = db.Column(db.DateTime, nullable=True)

    @property
    def password(self):
        raise AttributeError('password is not readable')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def is_locked(self):
        """检查账号是否被锁定"""
        return bool(self.locked_until and datetime.utcnow() < self.locked_until)

    def record_failed_login(self):
        """记录登录失败，连续 5 次锁定 30 分钟"""
        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1
        if self.failed_login_attempts >= 5:
            self.locked_until = datetime.utcnow() + timedelta(minutes=30)
        db.session.commit()

    def reset_failed_attempts(self):
        """重置失败次数"""
        self.failed_login_attempts = 0
        self.locked_until = None
        self.last_login = datetime.utcnow()
        db.session.commit()

    def has_role(self, required):
        return self.role <= required

    # Flask-Login 必须属性覆盖
    @property
    def is_active(self):
        return bool(self.is_active_user) and not self.is_locked()

    def __repr__(self):
        return f'<User {self.email}>'
