from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict
from warpblog.exceptions import InvalidParameter


class ApiForm(FlaskForm):
    """
    JSON / 表单请求体校验基类
    API 使用会话 Cookie + JSON，不启用 CSRF 令牌。
    JSON 中值为 null 的字段按未传处理。
    """
    class Meta:
        csrf = False

    def __init__(self, **kwargs):
        if 'formdata' not in kwargs and request.is_json:
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                payload = {}
            # 列表 / 对象会被 MultiDict 拆成多值或原样透传，只接受标量
            for name, value in payload.items():
                if isinstance(value, (list, dict)):
                    raise InvalidParameter(name)
            kwargs['formdata'] = ImmutableMultiDict(
                {k: v for k, v in payload.items() if v is not None})
        super().__init__(**kwargs)
