from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, HiddenField, SubmitField
from wtforms.validators import DataRequired, Email


class LoginForm(FlaskForm):
    """后台登录表单"""
    email = StringField('电子邮箱', validators=[
        DataRequired(message="请输入邮箱地址"),
        Email(message="邮箱格式不正确")
    ])
    password = PasswordField('密码', validators=[
        DataRequired(message="请输入密码")
    ])
    callback_url = HiddenField()
    submit = SubmitField('登录')
