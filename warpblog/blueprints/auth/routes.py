from flask import jsonify, current_app
from flask_login import login_user, logout_user
from warpblog.blueprints.auth import auth_bp
from warpblog.blueprints.auth.forms import LoginForm
from warpblog.exceptions import PermissionDenied
from warpblog.models.auth import User, Role
from warpblog.utils.permissions import role_required, get_current_user
from warpblog.utils.validators import validate_form


@auth_bp.route('/authenticate', methods=['POST'])
def authenticate():
    """邮箱 + 密码登录，成功后写入会话 Cookie"""
    form = validate_form(LoginForm())
    user = User.query.filter_by(email=form.email.data.strip().lower()).first()

    # 1. 验证用户存在
    if user is None:
        raise PermissionDenied('Bad email or password.')

    # 2. 检查账号是否被锁定
    if user.is_locked():
        current_app.logger.warning(f'login attempt on locked account: {user.email}')
        raise PermissionDenied('Account is locked.')

    # 3. 验证密码
    if not user.verify_password(form.passwd.data):
        user.record_failed_login()
        raise PermissionDenied('Bad email or password.')

    # 4. 验证用户是否被封禁
    if not user.is_active_user:
        raise PermissionDenied('Account is disabled.')

    login_user(user, remember=form.remember.data)
    user.reset_failed_attempts()
    current_app.logger.info(f'user {user.id} signed in')
    return jsonify(user.to_dict())


@auth_bp.route('/signout', methods=['POST'])
def signout():
    logout_user()
    return jsonify({'signout': True})


@auth_bp.route('/users/me', methods=['GET'])
@role_required(Role.SUBSCRIBER)
def me():
    """当前登录用户"""
    return jsonify(get_current_user().to_dict())
