from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import (StringField, PasswordField, BooleanField, TextAreaField, SelectField,
                     SubmitField)
from wtforms.validators import DataRequired, Email, Length, Optional, URL

from newsdesk.utils.file_helper import ALLOWED_IMAGE_EXTENSIONS
from newsdesk.utils.validators import validate_slug, validate_color


class LoginForm(FlaskForm):
    email = StringField('Email', validators=[
        DataRequired(message='Please enter your email'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Please enter your password')
    ])
    remember_me = BooleanField('Keep me signed in')
    submit = SubmitField('Sign in')


class ArticleForm(FlaskForm):
    """Article editor; category/author choices are filled in by the view"""
    title = StringField('Title', validators=[DataRequired(), Length(max=256)])
    slug = StringField('Slug', validators=[Optional(), Length(max=256), validate_slug])
    excerpt = TextAreaField('Excerpt', validators=[Optional(), Length(max=1000)])
    # Markdown source
    content = TextAreaField('Content', validators=[DataRequired()])
    featured_image = StringField('Featured image URL', validators=[Optional(), Length(max=512)])
    image_file = FileField('Upload image', validators=[
        FileAllowed(sorted(ALLOWED_IMAGE_EXTENSIONS), 'Images only')
    ])
    category_id = SelectField('Category', choices=[], validate_choice=False)
    author_id = SelectField('Author', choices=[], validate_choice=False)
    tags = StringField('Tags', description='Comma separated')
    status = SelectField('Status', choices=[
        ('draft', 'Draft'),
        ('published', 'Published'),
        ('archived', 'Archived')
    ], default='draft')
    submit = SubmitField('Save article')


class CategoryForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(), Length(max=64)])
    slug = StringField('Slug', validators=[Optional(), Length(max=64), validate_slug])
    color = StringField('Color', default='#6366f1', validators=[Optional(), validate_color])
    description = TextAreaField('Description', validators=[Optional()])
    submit = SubmitField('Save category')


class AuthorForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(), Length(max=128)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=128)])
    role = SelectField('Role', choices=[
        ('author', 'Author'),
        ('editor', 'Editor'),
        ('admin', 'Admin')
    ], default='author')
    bio = TextAreaField('Bio', validators=[Optional()])
    avatar_url = StringField('Avatar URL', validators=[Optional(), URL(), Length(max=512)])
    password = PasswordField('Password', validators=[
        Optional(), Length(min=6, message='Password must be at least 6 characters')
    ])
    submit = SubmitField('Add author')


class SettingsForm(FlaskForm):
    site_name = StringField('Site name', validators=[DataRequired(), Length(max=128)])
    site_description = StringField('Site description', validators=[Optional(), Length(max=256)])
    site_url = StringField('Site URL', validators=[Optional(), URL(require_tld=False)])
    contact_email = StringField('Contact email', validators=[Optional(), Email()])
    admin_email = StringField('Admin email', validators=[Optional(), Email()])
    comments_enabled = BooleanField('Allow comments')
    registration_enabled = BooleanField('Allow registration')
    maintenance_mode = BooleanField('Maintenance mode')
    analytics_enabled = BooleanField('Analytics')
    email_notifications = BooleanField('Email notifications')
    submit = SubmitField('Save settings')
