from wtforms import StringField
from wtforms.validators import Length
from warpblog.blueprints.forms import ApiForm
from warpblog.utils.validators import validate_not_blank, to_text

class WebsiteSettingsForm(ApiForm):
    """站点名称与描述"""
    name = StringField('name', filters=[to_text], validators=[validate_not_blank, Length(max=100)])
    description = StringField('description', filters=[to_text], validators=[Length(max=1000)])
