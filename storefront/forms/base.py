"""Base form for JSON request payloads."""

from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict
from storefront.errors import ValidationError


class ApiForm(FlaskForm):
    """FlaskForm fed from the JSON body that raises instead of re-rendering."""

    class Meta:
        csrf = False

    @classmethod
    def from_json(cls):
        payload = request.get_json(silent=True)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError('Request body must be a JSON object')
        # nulls count as missing; nested values never map onto a form field
        formdata = ImmutableMultiDict({
            key: value for key, value in payload.items()
            if value is not None and not isinstance(value, (dict, list))
        })
        return cls(formdata=formdata)

    def validate_or_raise(self):
        if not self.validate():
            raise ValidationError('Invalid request payload', errors=self.errors)
        return self
