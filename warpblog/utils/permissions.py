"""
权限控制工具
提供装饰器和辅助函数用于检查用户角色

角色数值越小权限越高 (ADMIN=0 < EDITOR < CONTRIBUTOR < SUBSCRIBER)，
所有判断都通过 has_role(user, required) 即 user.role <= required 完成。
"""
from functools import wraps
from flask_login import current_user
from warpblog.exceptions import PermissionDenied
from warpblog.models.auth import Role, has_role


def get_current_user():
    """返回当前登录用户，匿名访问返回 None"""
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def check_permission(required):
    """
    检查当前用户角色，不满足时抛出 PermissionDenied
    返回当前用户，便于路由中直接使用
    """
    user = get_current_user()
    if not has_role(user, required):
        raise PermissionDenied()
    return user


def role_required(required):
    """
    角色检查装饰器

    用法:
        @role_required(Role.ADMIN)
        def create_category():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            check_permission(required)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    """管理员权限装饰器"""
    return role_required(Role.ADMIN)(f)


def is_owner_or_admin(user, user_id):
    """用户是否为资源所有者或管理员"""
    if user is None:
        return False
    return user.role == Role.ADMIN or user.id == user_id
