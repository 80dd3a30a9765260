from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email
from warpblog.blueprints.forms import ApiForm

class LoginForm(ApiForm):
    """用户登录"""
    email = StringField('email', validators=[
        DataRequired(message="Email is required."),
        Email(message="Invalid email.")
    ])
    passwd = PasswordField('passwd', validators=[
        DataRequired(message="Password is required.")
    ])
    remember = BooleanField('remember')
