"""Draft state of a content schema while its field tree is being edited.

Fields are kept as plain dicts in wire shape so a half-finished draft (empty
names, a repeater without children yet) can exist; ``validate`` and ``submit``
apply the same rules as the API.
"""
from __future__ import annotations

import copy
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from apollo_cms.schemas.content_schema import ContentSchemaIn, FieldType, new_field_id
from apollo_cms.services.page_content import ContentValidationError, errors_by_path


class SchemaFieldNotFound(KeyError):
    pass


class SchemaDraft:
    def __init__(self, existing: dict[str, Any] | None = None):
        data = copy.deepcopy(existing) if existing else {}
        self.schema_id: Optional[str] = str(data["id"]) if data.get("id") else None
        self.name: str = str(data.get("name") or "")
        self.slug: str = str(data.get("slug") or "")
        self.description: str = str(data.get("description") or "")
        self.fields: list[dict[str, Any]] = data.get("fields") or []

    @property
    def slug_locked(self) -> bool:
        return self.schema_id is not None

    def set_slug(self, slug: str) -> None:
        if self.slug_locked and slug != self.slug:
            raise ValueError("Slug cannot be changed after the schema is created")
        self.slug = slug

    # Tree navigation --------------------------------------------------------

    def _walk(self, fields: list[dict[str, Any]]) -> Iterator[tuple[list[dict[str, Any]], dict[str, Any]]]:
        for field in fields:
            if not isinstance(field, dict):
                continue
            yield fields, field
            if isinstance(field.get("fields"), list):
                yield from self._walk(field["fields"])

    def _locate(self, field_id: str) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        for siblings, field in self._walk(self.fields):
            if field.get("id") == field_id:
                return siblings, field
        raise SchemaFieldNotFound(field_id)

    def get_field(self, field_id: str) -> dict[str, Any]:
        return self._locate(field_id)[1]

    # Editing ----------------------------------------------------------------

    def add_field(self, parent_id: str | None = None) -> dict[str, Any]:
        field = {
            "id": new_field_id(),
            "name": "",
            "label": "",
            "type": FieldType.TEXT.value,
            "required": False,
        }
        if parent_id is None:
            self.fields.append(field)
            return field
        parent = self.get_field(parent_id)
        if parent.get("type") != FieldType.REPEATER.value:
            raise ValueError("Sub-fields can only be added to a repeater field")
        parent.setdefault("fields", []).append(field)
        return field

    def remove_field(self, field_id: str) -> None:
        siblings, field = self._locate(field_id)
        siblings.remove(field)

    def update_field(self, field_id: str, **changes: Any) -> dict[str, Any]:
        field = self.get_field(field_id)
        if "type" in changes:
            self.change_field_type(field_id, changes.pop("type"))
        for key in ("name", "label", "required"):
            if key in changes:
                field[key] = changes.pop(key)
        if changes:
            raise ValueError(f"Unknown field attributes: {', '.join(sorted(changes))}")
        return field

    def change_field_type(self, field_id: str, field_type: FieldType | str) -> dict[str, Any]:
        new_type = FieldType(field_type).value
        field = self.get_field(field_id)
        if new_type == FieldType.REPEATER.value:
            if field.get("type") != new_type:
                field["fields"] = []
        else:
            # Sub-fields only exist on repeaters.
            field.pop("fields", None)
        field["type"] = new_type
        return field

    # Validation -------------------------------------------------------------

    def as_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description or None,
            "fields": copy.deepcopy(self.fields),
        }

    def submit(self) -> ContentSchemaIn:
        try:
            return ContentSchemaIn.model_validate(self.as_document())
        except ValidationError as exc:
            raise ContentValidationError(errors_by_path(exc))

    def validate(self) -> dict[str, str]:
        try:
            self.submit()
        except ContentValidationError as exc:
            return exc.errors
        return {}
