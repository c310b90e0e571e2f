from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from apollo_cms.schemas.pages.common import Url
from apollo_cms.services.slugs import PAGE_SLUG_RE

PAGE_STATUSES = ("Draft", "Published", "Review")
BlockType = Literal["Generic", "HeroText", "FooterContent", "CallToAction", "Testimonial"]
BlockStatus = Literal["Draft", "Published", "Archived"]

PERMISSIONS: dict[str, str] = {
    "manage_users": "Manage Users",
    "manage_settings": "Manage Settings",
    "manage_content": "Manage Content (Pages, Blocks)",
    "manage_schemas": "Manage Content Schemas",
    "view_content": "View Content",
    "manage_media": "Manage Media Library",
    "view_audit_logs": "View Audit Logs",
}


def _required_text(value: Optional[str], label: str, max_length: int | None = None, max_message: str | None = None) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValueError(f"{label} is required")
    if max_length is not None and len(text) > max_length:
        raise ValueError(max_message or f"{label} must be {max_length} characters or less")
    return text


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdminLogin(BaseModel):
    email: str
    password: str


class AdminToken(BaseModel):
    access_token: str
    token_type: str = "Bearer"


# Pages ----------------------------------------------------------------------

class PageBase(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)

    title: str = ""
    slug: str = ""
    status: Literal["Draft", "Published", "Review"] = "Draft"
    author: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value):
        return _required_text(value, "Title", 100)

    @field_validator("slug", mode="before")
    @classmethod
    def validate_slug(cls, value):
        text = _required_text(value, "Slug")
        if not PAGE_SLUG_RE.fullmatch(text):
            raise ValueError("Slug must be lowercase alphanumeric with hyphens")
        return text

    @field_validator("author", mode="before")
    @classmethod
    def validate_author(cls, value):
        return _required_text(value, "Author", 50, "Author name must be 50 characters or less")


# Content blocks -------------------------------------------------------------

class ContentBlockUpsert(ApiModel):
    name: str
    type: BlockType = "Generic"
    status: BlockStatus = "Draft"
    content: str

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value):
        text = str(value or "").strip()
        if not text:
            raise ValueError("Block name is required")
        if len(text) > 100:
            raise ValueError("Name must be 100 characters or less")
        return text

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, value):
        if not str(value or "").strip():
            raise ValueError("Content is required")
        return str(value)


# Access control -------------------------------------------------------------

class RoleUpsert(ApiModel):
    name: str
    description: Optional[str] = None
    permissions: list[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value):
        return _required_text(value, "Role name", 50)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > 200:
            raise ValueError("Description must be 200 characters or less")
        return value

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, value: list[str]) -> list[str]:
        unknown = [p for p in value if p not in PERMISSIONS]
        if unknown:
            raise ValueError(f"Unknown permissions: {', '.join(sorted(set(unknown)))}")
        # Keep first occurrence order, drop repeats.
        return list(dict.fromkeys(value))


class PermissionGrant(BaseModel):
    granted: bool


class UserUpsert(ApiModel):
    name: str
    email: str
    role: str
    photo_url: Optional[str] = None
    is_active: bool = True
    password: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value):
        return _required_text(value, "Name", 100)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value):
        text = _required_text(value, "Email").lower()
        if "@" not in text or text.startswith("@") or "." not in text.split("@", 1)[1]:
            raise ValueError("Invalid email address")
        return text

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, value):
        return _required_text(value, "Role")


# Dashboard ------------------------------------------------------------------

class TaskCreate(ApiModel):
    text: str
    assigned_to: list[str] = Field(default_factory=list)

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, value):
        return _required_text(value, "Task text", 500)


class NoteSummarizeIn(ApiModel):
    note_content: str = ""


class SchemaGenerateIn(ApiModel):
    json_content: str = ""


# Site settings --------------------------------------------------------------

class SiteSettingsIn(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    site_title: str = "Apollo CMS"
    site_tagline: str = ""
    site_url: Url = ""
    site_logo_url: Url = ""
    favicon_url: Url = ""
    default_language: str = "en"
    time_zone: str = "UTC"
    default_user_role: str = "Viewer"
    enable_2fa: bool = Field(False, alias="enable2FA")
    password_length: int = Field(8, ge=6)
    max_login_attempts: int = Field(5, ge=1)
    session_timeout: int = Field(30, ge=5)

    def as_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
