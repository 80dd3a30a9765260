"""
表单验证器
"""
import base64
import binascii
from wtforms.validators import ValidationError
from warpblog.exceptions import InvalidParameter


def validate_not_blank(form, field):
    """字段可以不传，但传了就不能为空"""
    if not field.raw_data:
        return
    value = field.raw_data[0]
    if value is None or not str(value).strip():
        raise ValidationError('Value must not be empty.')


def validate_tags(form, field):
    """验证标签总长度"""
    if field.data and len(field.data) > 1000:
        raise ValidationError('Tags are too long.')


def validate_base64_image(form, field):
    """验证 base64 编码的图片数据"""
    if not field.raw_data or not field.data:
        return
    try:
        base64.b64decode(field.data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError('Image must be base64 encoded.')


def validate_form(form):
    """
    校验表单，失败时把第一个字段错误转换为 InvalidParameter
    """
    if form.validate():
        return form
    name, errors = next(iter(form.errors.items()))
    raise InvalidParameter(name, errors[0] if errors else None)


def is_provided(field):
    """请求中是否包含该字段 (区分 '未传' 与 '传了空值')"""
    return bool(field.raw_data)


def provided_data(form):
    """只收集请求中出现过的字段，用于部分更新"""
    return {field.name: field.data for field in form if is_provided(field)}


def to_text(value):
    """表单过滤器：JSON 中的非字符串值转为字符串"""
    if value is None or isinstance(value, str):
        return value
    return str(value)
