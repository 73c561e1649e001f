"""Pydantic schemas used across the project."""
import re
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from signature_studio.modules.assets.models import AssetType
from signature_studio.modules.templates.models import TemplateStatus
from signature_studio.modules.tenants.models import Plan
from signature_studio.modules.users.models import Role

_DOMAIN_PATTERN = r"^([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$"
_COLOR_PATTERN = r"^#[0-9a-fA-F]{3,8}$"
_FONT_PATTERN = r"^[A-Za-z0-9 ,'-]{1,60}$"


def _check_password_strength(value: str) -> str:
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
        raise ValueError("Password must contain at least one lowercase letter, one uppercase letter, and one number")
    return value


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=(total + limit - 1) // limit if limit else 0)


class MessageResponse(BaseModel):
    message: str


# -- tenants and users -----------------------------------------------------------------


class TenantResponse(BaseModel):
    id: str
    name: str
    domain: str
    plan: Plan
    max_users: Optional[int] = None
    max_templates: Optional[int] = None
    max_storage_mb: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    id: str
    tenant_id: str
    email: str
    role: Role
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserListItem(UserResponse):
    assignment_count: int = 0


class UserListResponse(BaseModel):
    users: list[UserListItem]
    pagination: Pagination


class UserCreateRequest(BaseModel):
    email: EmailStr
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    title: Optional[str] = Field(default=None, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    role: Role = Role.MEMBER
    password: Optional[str] = Field(default=None, min_length=8, max_length=72)

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, value: Any) -> Any:
        return Role.parse(value) if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: Optional[str]) -> Optional[str]:
        return _check_password_strength(value) if value else value


class UserCreateResponse(BaseModel):
    user: UserResponse
    temporary_password: Optional[str] = None


class UserUpdateRequest(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    title: Optional[str] = Field(default=None, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    role: Optional[Role] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=72)

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, value: Any) -> Any:
        return Role.parse(value) if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: Optional[str]) -> Optional[str]:
        return _check_password_strength(value) if value else value


class ResetPasswordRequest(BaseModel):
    password: Optional[str] = Field(default=None, min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: Optional[str]) -> Optional[str]:
        return _check_password_strength(value) if value else value


class ResetPasswordResponse(BaseModel):
    message: str
    temporary_password: Optional[str] = None


# -- auth -------------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    organization_name: str = Field(..., min_length=2, max_length=100)
    domain: str = Field(..., min_length=3, max_length=253, pattern=_DOMAIN_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=8, max_length=72)
    confirm_password: str

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return _check_password_strength(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    tenant: TenantResponse


class RefreshResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse
    tenant: TenantResponse


# -- templates --------------------------------------------------------------------------


class SignatureContent(BaseModel):
    """Editor fields; stored and returned with camelCase keys."""

    full_name: Optional[str] = Field(default=None, max_length=100)
    job_title: Optional[str] = Field(default=None, max_length=100)
    company: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=500)
    linked_in: Optional[str] = Field(default=None, max_length=500)
    twitter: Optional[str] = Field(default=None, max_length=500)
    instagram: Optional[str] = Field(default=None, max_length=500)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    promotional_image: Optional[str] = Field(default=None, max_length=500)
    promotional_link: Optional[str] = Field(default=None, max_length=500)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CustomStyles(BaseModel):
    name_font: str = Field(default="Arial", pattern=_FONT_PATTERN)
    name_size: float = Field(default=18, ge=8, le=72)
    name_color: str = Field(default="#2563eb", pattern=_COLOR_PATTERN)
    role_size: float = Field(default=14, ge=8, le=72)
    role_color: str = Field(default="#666666", pattern=_COLOR_PATTERN)
    company_size: float = Field(default=14, ge=8, le=72)
    company_color: str = Field(default="#666666", pattern=_COLOR_PATTERN)
    contact_size: float = Field(default=13, ge=8, le=72)
    contact_color: str = Field(default="#333333", pattern=_COLOR_PATTERN)
    link_color: str = Field(default="#2563eb", pattern=_COLOR_PATTERN)
    spacing: float = Field(default=8, ge=0, le=100)
    padding: float = Field(default=0, ge=0, le=100)
    logo_radius: float = Field(default=0, ge=0, le=100)
    promo_height: float = Field(default=80, ge=10, le=600)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_styles(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    content: SignatureContent = Field(default_factory=SignatureContent)
    formatting: str = Field(default="modern", max_length=30)
    custom_styles: Optional[CustomStyles] = None
    status: TemplateStatus = TemplateStatus.DRAFT
    is_default: bool = False
    is_shared: bool = False
    html_content: Optional[str] = None


class TemplateUpdateRequest(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    content: Optional[SignatureContent] = None
    formatting: Optional[str] = Field(default=None, max_length=30)
    custom_styles: Optional[CustomStyles] = None
    status: Optional[TemplateStatus] = None
    is_default: Optional[bool] = None
    is_shared: Optional[bool] = None
    html_content: Optional[str] = None


class TemplateDuplicateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)


class TemplateResponse(BaseModel):
    id: str
    tenant_id: str
    created_by: str
    author_name: Optional[str] = None
    name: str
    description: Optional[str] = None
    content: dict[str, Any]
    formatting: str
    custom_styles: Optional[dict[str, Any]] = None
    html_content: str
    status: TemplateStatus
    is_default: bool
    is_shared: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TemplateListResponse(BaseModel):
    templates: list[TemplateResponse]
    pagination: Pagination


class TemplateVersionResponse(BaseModel):
    id: str
    template_id: str
    version: int
    name: str
    html_content: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PreviewRequest(BaseModel):
    content: SignatureContent = Field(default_factory=SignatureContent)
    formatting: Optional[str] = Field(default=None, max_length=30)
    custom_styles: Optional[CustomStyles] = None


class PreviewResponse(BaseModel):
    html_content: str
    formatting: str


class PresetListResponse(BaseModel):
    presets: list[str]
    default: str


# -- assignments ------------------------------------------------------------------------


class AssignmentResponse(BaseModel):
    id: str
    user_id: str
    template_id: str
    assigned_by: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    template_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AssignmentListResponse(BaseModel):
    assignments: list[AssignmentResponse]
    pagination: Pagination


class AssignmentCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    template_id: str = Field(..., min_length=1)


class BulkAssignRequest(BaseModel):
    template_id: str = Field(..., min_length=1)
    user_ids: list[str] = Field(..., min_length=1, max_length=50)


class BulkAssignResponse(BaseModel):
    created: list[AssignmentResponse]
    skipped_user_ids: list[str]


class BulkUnassignRequest(BaseModel):
    assignment_ids: list[str] = Field(..., min_length=1, max_length=100)


class BulkDeleteResponse(BaseModel):
    deleted: int


class TemplateDetailResponse(TemplateResponse):
    assignments: list[AssignmentResponse] = Field(default_factory=list)


class UserProfileResponse(BaseModel):
    user: UserResponse
    tenant: TenantResponse
    assignments: list[AssignmentResponse]


# -- assets -----------------------------------------------------------------------------


class AssetResponse(BaseModel):
    id: str
    name: str
    filename: str
    mime_type: str
    size: int
    url: str
    type: AssetType
    description: Optional[str] = None
    uploaded_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AssetListResponse(BaseModel):
    assets: list[AssetResponse]
    pagination: Pagination


class MultipleUploadResponse(BaseModel):
    assets: list[AssetResponse]


class AssetTypeStats(BaseModel):
    count: int
    size: int
    size_formatted: str


class AssetStatsResponse(BaseModel):
    total_assets: int
    total_size: int
    total_size_formatted: str
    storage_limit: Optional[int] = None
    storage_limit_formatted: Optional[str] = None
    by_type: dict[str, AssetTypeStats]


# -- activity ---------------------------------------------------------------------------


class ActivityResponse(BaseModel):
    id: int
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    user_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ActivityListResponse(BaseModel):
    activity: list[ActivityResponse]


# -- misc -------------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    version: str
    environment: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Any] = None
    timestamp: datetime
    path: str
    method: str
