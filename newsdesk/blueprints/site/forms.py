from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, HiddenField, SubmitField
from wtforms.validators import DataRequired, Email, Length, Optional


class CommentForm(FlaskForm):
    """Reader comment or reply"""
    name = StringField('Name', validators=[DataRequired(), Length(max=128)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=128)])
    content = TextAreaField('Comment', validators=[DataRequired(), Length(max=5000)])
    parent_id = HiddenField(validators=[Optional()])
    submit = SubmitField('Post comment')
