from wtforms import StringField, TextAreaField, IntegerField
from wtforms.validators import DataRequired, InputRequired, Length, Optional, NumberRange
from warpblog.blueprints.forms import ApiForm
from warpblog.utils.validators import validate_not_blank, validate_tags, validate_base64_image, to_text

class ArticleForm(ApiForm):
    """新建文章"""
    category_id = IntegerField('category_id', validators=[InputRequired()])
    name = StringField('name', filters=[to_text], validators=[DataRequired(), Length(max=100)])
    description = StringField('description', filters=[to_text], validators=[DataRequired(), Length(max=1000)])
    content = TextAreaField('content', filters=[to_text], validators=[DataRequired()])
    # 逗号分隔，保存前会被规范化
    tags = StringField('tags', filters=[to_text], validators=[Optional(), validate_tags])
    # 毫秒时间戳，默认当前时间
    publish_at = IntegerField('publish_at', validators=[Optional(), NumberRange(min=0)])
    # base64 编码的封面图片
    image = StringField('image', filters=[to_text], validators=[Optional(), validate_base64_image])

class UpdateArticleForm(ApiForm):
    """修改文章，只修改传入的字段"""
    category_id = IntegerField('category_id', validators=[Optional()])
    name = StringField('name', filters=[to_text], validators=[validate_not_blank, Length(max=100)])
    description = StringField('description', filters=[to_text], validators=[validate_not_blank, Length(max=1000)])
    content = TextAreaField('content', filters=[to_text], validators=[validate_not_blank])
    tags = StringField('tags', filters=[to_text], validators=[Optional(), validate_tags])
    publish_at = IntegerField('publish_at', validators=[Optional(), NumberRange(min=0)])
    image = StringField('image', filters=[to_text], validators=[Optional(), validate_base64_image])
