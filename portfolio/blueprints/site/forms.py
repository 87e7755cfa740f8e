from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SubmitField
from wtforms.validators import AnyOf, DataRequired, Email, Length, Optional

from portfolio.models.contact import BUDGET_CHOICES, TIMELINE_CHOICES


class ContactForm(FlaskForm):
    """公开联系表单"""
    name = StringField('Name', validators=[DataRequired(), Length(max=100)])
    email = StringField('Email', validators=[
        DataRequired(), Email(message='Please enter a valid email address')
    ])
    subject = StringField('Subject', validators=[DataRequired(), Length(max=200)])
    message = TextAreaField('Message', validators=[DataRequired(), Length(max=5000)])
    budget = StringField('Budget', validators=[Optional(), AnyOf(BUDGET_CHOICES)])
    timeline = StringField('Timeline', validators=[Optional(), AnyOf(TIMELINE_CHOICES)])
    submit = SubmitField('Send Message')
