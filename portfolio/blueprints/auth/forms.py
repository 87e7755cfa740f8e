from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField
from wtforms.validators import DataRequired, Email

class LoginForm(FlaskForm):
    """后台登录表单 (会话随浏览器关闭失效，不提供记住登录)"""
    email = StringField('Email', validators=[
        DataRequired(message="Please enter your email"),
        Email(message="Invalid email address")
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message="Please enter your password")
    ])
    submit = SubmitField('Sign In')
