"""
Program application form field definitions.

Each field is a member of a closed tagged union keyed by ``type``. Stored
definitions are validated through ``application_form_fields_adapter``.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _FieldModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldOption(_FieldModel):
    id: str
    value: str


class _BaseField(_FieldModel):
    id: str
    label: str
    required: bool = False
    locked: bool = False


class TextFieldData(_FieldModel):
    placeholder: Optional[str] = None
    max_length: Optional[int] = Field(default=None, ge=1)


class SelectFieldData(_FieldModel):
    options: List[FieldOption] = Field(default_factory=list)
    placeholder: Optional[str] = None


class MultipleChoiceFieldData(_FieldModel):
    options: List[FieldOption] = Field(default_factory=list)
    multiple: bool = False


class WebsiteAndSocialsItem(_FieldModel):
    type: Literal['website', 'youtube', 'twitter', 'linkedin', 'instagram', 'tiktok']
    required: bool = False


class ShortTextField(_BaseField):
    type: Literal['short-text']
    data: TextFieldData = Field(default_factory=TextFieldData)


class LongTextField(_BaseField):
    type: Literal['long-text']
    data: TextFieldData = Field(default_factory=TextFieldData)


class SelectField(_BaseField):
    type: Literal['select']
    data: SelectFieldData = Field(default_factory=SelectFieldData)


class MultipleChoiceField(_BaseField):
    type: Literal['multiple-choice']
    data: MultipleChoiceFieldData = Field(default_factory=MultipleChoiceFieldData)


class WebsiteAndSocialsField(_BaseField):
    type: Literal['website-and-socials']
    data: List[WebsiteAndSocialsItem] = Field(default_factory=list)


ProgramApplicationFormField = Annotated[
    Union[ShortTextField, LongTextField, SelectField, MultipleChoiceField, WebsiteAndSocialsField],
    Field(discriminator='type'),
]

application_form_fields_adapter = TypeAdapter(List[ProgramApplicationFormField])


def parse_application_form_fields(raw_fields) -> List[dict]:
    """Validate stored field definitions and return them as plain dicts."""
    fields = application_form_fields_adapter.validate_python(raw_fields or [])
    return [field.model_dump(by_alias=True, exclude_none=True) for field in fields]
