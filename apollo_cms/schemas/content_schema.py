"""Recursive content-schema definitions authored in the schema builder.

A ``SchemaField`` of type ``repeater`` owns an ordered list of child fields;
every other type is a leaf. Field ``name`` is the storage key of the value, so
it must be unique among its siblings.
"""
from __future__ import annotations

import re
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from apollo_cms.core.config import settings

FIELD_NAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
SCHEMA_SLUG_RE = re.compile(r"^[a-z0-9-]+$")


class FieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    IMAGE_URL = "image_url"
    RICH_TEXT = "rich_text"
    REPEATER = "repeater"


def new_field_id() -> str:
    return str(uuid.uuid4())


def _max_depth(info: ValidationInfo) -> int:
    context = info.context or {}
    return int(context.get("max_depth") or settings.SCHEMA_MAX_DEPTH)


class SchemaField(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(default_factory=new_field_id)
    name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    type: FieldType = Field(FieldType.TEXT, validate_default=True)
    required: bool = False
    fields: Optional[list[SchemaField]] = None

    @field_validator("id", mode="before")
    @classmethod
    def fill_missing_id(cls, value):
        text = str(value or "").strip()
        return text or new_field_id()

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not FIELD_NAME_RE.fullmatch(value):
            raise ValueError("Name must be alphanumeric with underscores")
        return value

    @field_validator("label")
    @classmethod
    def strip_label(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("Label is required")
        return text

    @model_validator(mode="after")
    def check_children(self) -> SchemaField:
        if self.type == FieldType.REPEATER.value:
            if not self.fields:
                raise ValueError("A repeater field needs at least one sub-field")
            ensure_unique_names(self.fields)
        elif self.fields:
            raise ValueError("Only repeater fields may define sub-fields")
        else:
            self.fields = None
        return self


def ensure_unique_names(fields: list[SchemaField]) -> None:
    seen: set[str] = set()
    for field in fields:
        if field.name in seen:
            raise ValueError(f'Duplicate field name "{field.name}"')
        seen.add(field.name)


def schema_depth(fields: list[SchemaField] | None) -> int:
    if not fields:
        return 0
    return 1 + max(schema_depth(field.fields) for field in fields)


class ContentSchemaIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    fields: list[SchemaField] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("Schema Name is required")
        return text

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        if not SCHEMA_SLUG_RE.fullmatch(value):
            raise ValueError("Slug must be lowercase and contain only letters, numbers, and hyphens")
        return value

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, value: list[SchemaField], info: ValidationInfo) -> list[SchemaField]:
        ensure_unique_names(value)
        limit = _max_depth(info)
        if schema_depth(value) > limit:
            raise ValueError(f"Fields may be nested at most {limit} levels deep")
        return value
