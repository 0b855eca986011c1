from datetime import date, datetime

from flask import request
from werkzeug.datastructures import MultiDict
from wtforms import ValidationError

from models import db

DATETIME_FORMATS = [
    '%Y-%m-%dT%H:%M:%S.%fZ',
    '%Y-%m-%dT%H:%M:%SZ',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
]

DATE_FORMATS = ['%Y-%m-%d']


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def default_if_none(default):
    return lambda value: default if value is None else value


class RecordExists:
    """Validate that the submitted id (or every id of a list) names a row of ``model``"""

    def __init__(self, model, message=None):
        self.model = model
        self.message = message or f"Selected {model.__name__.lower()} does not exist"

    def __call__(self, form, field):
        values = field.data if isinstance(field.data, (list, tuple)) else [field.data]
        for value in values:
            if value is None:
                continue
            if db.session.get(self.model, value) is None:
                raise ValidationError(self.message)


def request_formdata():
    """Submitted fields as a MultiDict, whether the body is a form or JSON.

    JSON values are flattened to strings the way a browser would post them;
    lists become repeated keys and nulls are left out.
    """
    if not request.is_json:
        return request.form

    formdata = MultiDict()
    for key, value in (request.get_json(silent=True) or {}).items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                item = 'true' if item else 'false'
            formdata.add(key, str(item))
    return formdata


def form_defaults(form):
    """JSON-friendly values of every field except the CSRF token"""
    defaults = {}
    for name, field in form._fields.items():
        if name == 'csrf_token':
            continue
        value = field.data
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        defaults[name] = value
    return defaults
