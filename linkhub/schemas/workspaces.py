"""Request and response schemas for the workspace API."""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from linkhub.exceptions import ApiError
from linkhub.services.reserved_keys import is_reserved_key
from linkhub.utils.ids import prefix_workspace_id
from linkhub.utils.slugs import slugify, is_valid_slug


# Slugs that redirect to marketing/app pages and can never name a workspace
DEFAULT_REDIRECTS = {
    'home': 'https://linkhub.dev',
    'linkhub': 'https://linkhub.dev',
    'signin': 'https://app.linkhub.dev/login',
    'login': 'https://app.linkhub.dev/login',
    'register': 'https://app.linkhub.dev/register',
    'signup': 'https://app.linkhub.dev/register',
    'app': 'https://app.linkhub.dev',
    'api': 'https://linkhub.dev/docs/api-reference',
    'dashboard': 'https://app.linkhub.dev',
    'settings': 'https://app.linkhub.dev/settings',
    'docs': 'https://linkhub.dev/docs',
    'help': 'https://linkhub.dev/help',
    'blog': 'https://linkhub.dev/blog',
    'pricing': 'https://linkhub.dev/pricing',
    'stats': 'https://linkhub.dev/stats',
    'partners': 'https://partners.linkhub.dev',
}

RESERVED_SLUG_MESSAGE = 'Cannot use reserved slugs'


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------
#  Requests
# -----------------------------

class UpdateWorkspaceSchema(_CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=32)
    slug: Optional[str] = Field(default=None, min_length=3, max_length=48)
    logo: Optional[str] = None
    conversion_enabled: Optional[bool] = None
    allowed_hostnames: Optional[List[str]] = None
    default_folder_id: Optional[str] = None

    @field_validator('slug')
    @classmethod
    def slug_must_be_valid(cls, value):
        if value is None:
            return value
        value = slugify(value)
        if not is_valid_slug(value):
            raise ValueError('Slugs can only contain letters, numbers, and hyphens.')
        if value in DEFAULT_REDIRECTS:
            raise ValueError(RESERVED_SLUG_MESSAGE)
        return value


def validate_update_workspace(body) -> UpdateWorkspaceSchema:
    """
    Parse a workspace update body.

    The structural parse runs first; the reserved-key lookup against the
    edge config store is a separate step that must pass before the handler
    touches anything.
    """
    data = UpdateWorkspaceSchema.model_validate(body)
    if data.slug and is_reserved_key(data.slug):
        raise ApiError('unprocessable_entity', f'slug: {RESERVED_SLUG_MESSAGE}')
    return data


# -----------------------------
#  Responses
# -----------------------------

class DomainSchema(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    primary: bool = False
    verified: bool = False


class WorkspaceUserSchema(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    role: str
    default_folder_id: Optional[str] = None


class WorkspaceSchema(_CamelModel):
    id: str
    name: str
    slug: str
    logo: Optional[str] = None
    invite_code: Optional[str] = None
    plan: str
    billing_cycle_start: int
    usage: int
    usage_limit: int
    links_usage: int
    links_limit: int
    domains_limit: int
    tags_limit: int
    folders_usage: int
    folders_limit: int
    users_limit: int
    conversion_enabled: bool
    allowed_hostnames: List[str] = Field(default_factory=list)
    default_folder_id: Optional[str] = None
    created_at: Optional[datetime] = None
    users: List[WorkspaceUserSchema] = Field(default_factory=list)
    domains: List[DomainSchema] = Field(default_factory=list)
    flags: Dict[str, bool] = Field(default_factory=dict)

    @field_validator('allowed_hostnames', mode='before')
    @classmethod
    def null_hostnames_as_empty(cls, value):
        return value or []


class YearInReviewSchema(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    workspace_id: str
    year: int
    total_links: int
    total_clicks: int
    top_links: Optional[list] = None
    top_countries: Optional[list] = None
    sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


WORKSPACE_FIELDS = (
    'name', 'slug', 'logo', 'invite_code', 'plan', 'billing_cycle_start',
    'usage', 'usage_limit', 'links_usage', 'links_limit', 'domains_limit',
    'tags_limit', 'folders_usage', 'folders_limit', 'users_limit',
    'conversion_enabled', 'allowed_hostnames', 'default_folder_id', 'created_at',
)


def serialize_workspace(workspace, users=(), domains=(), flags=None) -> dict:
    """Map a Project row to its wire shape, tagging the id as ws_<id>."""
    data = {field: getattr(workspace, field) for field in WORKSPACE_FIELDS}
    data.update(
        id=prefix_workspace_id(workspace.id),
        users=[WorkspaceUserSchema.model_validate(user) for user in users],
        domains=[DomainSchema.model_validate(domain) for domain in domains],
        flags=flags or {},
    )
    return WorkspaceSchema.model_validate(data).model_dump(mode='json', by_alias=True)


def serialize_year_in_review(year_in_review) -> Optional[dict]:
    if year_in_review is None:
        return None
    return YearInReviewSchema.model_validate(year_in_review).model_dump(mode='json', by_alias=True)
