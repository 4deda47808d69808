"""Catalog forms."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional
from storefront.forms.base import ApiForm


class CategoryForm(ApiForm):
    title = StringField('Title', validators=[
        DataRequired(message='Title is required'),
        Length(max=100)
    ])
    description = StringField('Description', validators=[Optional(), Length(max=255)])
