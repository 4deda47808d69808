"""Cart payload forms."""

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, NumberRange, Optional, Length
from storefront.forms.base import ApiForm


class WholeNumberField(IntegerField):
    """IntegerField that rejects JSON floats and booleans instead of truncating them."""

    def process_formdata(self, valuelist):
        if valuelist and isinstance(valuelist[0], (bool, float)):
            self.data = None
            raise ValueError(self.gettext('Not a valid integer value.'))
        super().process_formdata(valuelist)


class AddToCartForm(ApiForm):
    """Body of an add-to-cart request: ``{productId, quantity, size, color}``."""
    productId = WholeNumberField('Product', validators=[
        DataRequired(message='productId is required'),
        NumberRange(min=1, message='productId must be a positive integer')
    ])
    quantity = WholeNumberField('Quantity', default=1, validators=[
        Optional(),
        NumberRange(min=1, message='Quantity must be a positive integer')
    ])
    size = StringField('Size', validators=[Optional(), Length(max=50)])
    color = StringField('Color', validators=[Optional(), Length(max=50)])
