"""Shaping of program application form definitions into fillable form data."""
from typing import Iterable

from pydantic import BaseModel

from linkhub.exceptions import UnknownFieldTypeError

SHORT_TEXT = 'short-text'
LONG_TEXT = 'long-text'
SELECT = 'select'
MULTIPLE_CHOICE = 'multiple-choice'
WEBSITE_AND_SOCIALS = 'website-and-socials'

FIELD_TYPES = (SHORT_TEXT, LONG_TEXT, SELECT, MULTIPLE_CHOICE, WEBSITE_AND_SOCIALS)


def _field_with_value(field: dict) -> dict:
    field_type = field.get('type')

    if field_type in (SHORT_TEXT, LONG_TEXT, SELECT):
        return {**field, 'value': ''}

    if field_type == MULTIPLE_CHOICE:
        multiple = (field.get('data') or {}).get('multiple', False)
        return {**field, 'value': [] if multiple else ''}

    if field_type == WEBSITE_AND_SOCIALS:
        return {
            **field,
            'data': [{**item, 'value': ''} for item in field.get('data') or []],
        }

    raise UnknownFieldTypeError(field_type)


def form_data_for_application_form_data(fields: Iterable) -> dict:
    """
    Give every application form field an empty value.

    Text and select fields get '', multiple-choice fields get [] when several
    options may be picked and '' otherwise, and website-and-socials fields get
    '' on each of their sub-items. Inputs are not modified.

    Raises:
        UnknownFieldTypeError: For a field type outside FIELD_TYPES
    """
    return {
        'fields': [
            _field_with_value(
                field.model_dump(by_alias=True, exclude_none=True) if isinstance(field, BaseModel) else field
            )
            for field in fields
        ]
    }
