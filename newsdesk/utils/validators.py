"""
Form validators
"""
from wtforms.validators import ValidationError
import re


def validate_slug(form, field):
    """Lowercase letters, digits and single hyphens"""
    if field.data:
        if not re.match(r'^[a-z0-9]+(?:-[a-z0-9]+)*$', field.data):
            raise ValidationError('Slugs may only contain lowercase letters, digits and hyphens')


def validate_color(form, field):
    """#rgb or #rrggbb"""
    if field.data:
        if not re.match(r'^#(?:[0-9a-fA-F]{3}){1,2}$', field.data):
            raise ValidationError('Enter a hex color such as #6366f1')
