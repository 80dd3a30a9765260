from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional
from warpblog.blueprints.forms import ApiForm
from warpblog.utils.validators import validate_not_blank, to_text

class CategoryForm(ApiForm):
    """新建分类"""
    name = StringField('name', filters=[to_text], validators=[DataRequired(), Length(max=100)])
    description = StringField('description', filters=[to_text], validators=[Optional(), Length(max=1000)])

class UpdateCategoryForm(ApiForm):
    """修改分类，字段均可选，但 name 传了就不能为空"""
    name = StringField('name', filters=[to_text], validators=[validate_not_blank, Length(max=100)])
    description = StringField('description', filters=[to_text], validators=[Optional(), Length(max=1000)])
