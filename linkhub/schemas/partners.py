"""Schemas for partner listings."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DICEBEAR_AVATAR_URL = 'https://api.dicebear.com/9.x/glass/svg?seed='


class PartnersQuerySchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    search: Optional[str] = None
    program_id: Optional[str] = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=100, ge=1, le=100)


class EnrolledPartnerSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: Optional[str] = None
    image: Optional[str] = None
    status: Optional[str] = None
    program_id: Optional[str] = None
    discount_id: Optional[str] = None


def partner_avatar_url(partner: dict) -> str:
    """Partner image, or a generated avatar keyed by the partner's name."""
    return partner.get('image') or f"{DICEBEAR_AVATAR_URL}{partner.get('name')}"
