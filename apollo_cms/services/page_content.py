"""Page archetypes and their content models.

Every ``PageType`` maps to exactly one pydantic content model. All defaulting,
validation and repeating-section editing goes through this table, so adding an
archetype only means adding a model and one entry below.
"""
from __future__ import annotations

import copy
import typing
from enum import Enum
from typing import Any

from annotated_types import MaxLen, MinLen
from pydantic import BaseModel, ValidationError

from apollo_cms.schemas.pages.about_us import AboutUsPageContent
from apollo_cms.schemas.pages.admissions import AdmissionsPageContent
from apollo_cms.schemas.pages.centres import CentreDetailPageContent, CentresOverviewPageContent
from apollo_cms.schemas.pages.contact import ContactPageContent
from apollo_cms.schemas.pages.enquiry import EnquiryPageContent
from apollo_cms.schemas.pages.generic import GenericPageContent
from apollo_cms.schemas.pages.home import HomePageContent
from apollo_cms.schemas.pages.program_detail import ProgramDetailPageContent
from apollo_cms.schemas.pages.programs import ProgramsListingPageContent


class PageType(str, Enum):
    HOME = "home"
    ABOUT_US = "about-us"
    ADMISSIONS = "admissions"
    CONTACT = "contact"
    PROGRAMS = "programs"
    PROGRAM_DETAIL = "program-detail"
    CENTRES = "centres"
    CENTRE_DETAIL = "centre-detail"
    ENQUIRY = "enquiry"
    GENERIC = "generic"


PAGE_CONTENT_MODELS: dict[PageType, type[BaseModel]] = {
    PageType.HOME: HomePageContent,
    PageType.ABOUT_US: AboutUsPageContent,
    PageType.ADMISSIONS: AdmissionsPageContent,
    PageType.CONTACT: ContactPageContent,
    PageType.PROGRAMS: ProgramsListingPageContent,
    PageType.PROGRAM_DETAIL: ProgramDetailPageContent,
    PageType.CENTRES: CentresOverviewPageContent,
    PageType.CENTRE_DETAIL: CentreDetailPageContent,
    PageType.ENQUIRY: EnquiryPageContent,
    PageType.GENERIC: GenericPageContent,
}

_missing = set(PageType) - set(PAGE_CONTENT_MODELS)
if _missing:
    raise RuntimeError(f"Page types without a content model: {sorted(t.value for t in _missing)}")


class ContentValidationError(Exception):
    def __init__(self, errors: dict[str, str]):
        super().__init__("Content validation failed")
        self.errors = errors


class ContentBoundsError(Exception):
    pass


class ContentPathError(Exception):
    pass


def parse_page_type(raw: str | PageType) -> PageType:
    try:
        return PageType(raw)
    except ValueError:
        raise ContentValidationError({"pageType": f'Unknown page type "{raw}"'})


def content_model(page_type: PageType | str) -> type[BaseModel]:
    return PAGE_CONTENT_MODELS[parse_page_type(page_type)]


def dump_content(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def default_content(page_type: PageType | str) -> dict[str, Any]:
    return dump_content(content_model(page_type)())


def error_path(loc: tuple, prefix: str = "") -> str:
    parts = [str(p) for p in loc]
    if prefix:
        parts.insert(0, prefix)
    return ".".join(parts)


def errors_by_path(exc: ValidationError, prefix: str = "") -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in exc.errors():
        path = error_path(item.get("loc", ()), prefix) or prefix or "__root__"
        message = str(item.get("msg") or "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(path, message)
    return errors


def validate_content(page_type: PageType | str, data: Any) -> dict[str, Any]:
    model = content_model(page_type)
    try:
        parsed = model.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise ContentValidationError(errors_by_path(exc, "content"))
    return dump_content(parsed)


# Repeating sections ---------------------------------------------------------

class ListSpec(typing.NamedTuple):
    item_type: Any
    min_items: int | None
    max_items: int | None

    def new_item(self) -> Any:
        if isinstance(self.item_type, type) and issubclass(self.item_type, BaseModel):
            return dump_content(self.item_type())
        return ""


def _field_by_key(model: type[BaseModel], key: str):
    for name, info in model.model_fields.items():
        if key == (info.alias or name):
            return info
    raise ContentPathError(f'Unknown content section "{key}"')


def _list_item_type(annotation) -> Any:
    if typing.get_origin(annotation) is not list:
        return None
    args = typing.get_args(annotation)
    item = args[0] if args else Any
    if typing.get_origin(item) is typing.Annotated:
        item = typing.get_args(item)[0]
    return item


def _bounds(metadata: list) -> tuple[int | None, int | None]:
    min_items = max_items = None
    for meta in metadata:
        if isinstance(meta, MinLen):
            min_items = meta.min_length
        elif isinstance(meta, MaxLen):
            max_items = meta.max_length
    return min_items, max_items


def list_spec(page_type: PageType | str, path: str) -> ListSpec:
    """Resolve a dotted content path (``heroSection.slides.0.buttons``) to its list definition.

    Paths use the stored camelCase keys and numeric list indexes.
    """
    model: Any = content_model(page_type)
    spec: ListSpec | None = None
    for key in [p for p in path.split(".") if p]:
        if key.isdigit():
            if spec is None or not isinstance(spec.item_type, type) or not issubclass(spec.item_type, BaseModel):
                raise ContentPathError(f'"{path}" does not index a list of sections')
            model, spec = spec.item_type, None
            continue
        if spec is not None or not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise ContentPathError(f'"{path}" is not a content path')
        info = _field_by_key(model, key)
        item_type = _list_item_type(info.annotation)
        if item_type is not None:
            spec = ListSpec(item_type, *_bounds(info.metadata))
            model = None
        else:
            model = info.annotation
    if spec is None:
        raise ContentPathError(f'"{path}" is not a repeating section')
    return spec


def resolve_list(content: dict[str, Any], path: str) -> list:
    node: Any = content
    keys = [p for p in path.split(".") if p]
    for position, key in enumerate(keys):
        if isinstance(node, list):
            try:
                node = node[int(key)]
            except (ValueError, IndexError):
                raise ContentPathError(f'"{path}" points past the end of a list')
        elif isinstance(node, dict):
            node = node.setdefault(key, [] if position == len(keys) - 1 else {})
        else:
            raise ContentPathError(f'"{path}" is not a content path')
    if not isinstance(node, list):
        raise ContentPathError(f'"{path}" is not a repeating section')
    return node


def can_append(page_type: PageType | str, content: dict[str, Any], path: str) -> bool:
    spec = list_spec(page_type, path)
    return spec.max_items is None or len(resolve_list(content, path)) < spec.max_items


def can_remove(page_type: PageType | str, content: dict[str, Any], path: str) -> bool:
    spec = list_spec(page_type, path)
    items = resolve_list(content, path)
    return bool(items) and (spec.min_items is None or len(items) > spec.min_items)


def append_item(page_type: PageType | str, content: dict[str, Any], path: str) -> dict[str, Any]:
    if not can_append(page_type, content, path):
        raise ContentBoundsError(f'"{path}" already has the maximum number of items')
    updated = copy.deepcopy(content)
    resolve_list(updated, path).append(list_spec(page_type, path).new_item())
    return updated


def remove_item(page_type: PageType | str, content: dict[str, Any], path: str, index: int) -> dict[str, Any]:
    items = resolve_list(content, path)
    if index < 0 or index >= len(items):
        raise ContentPathError(f'No item {index} in "{path}"')
    if not can_remove(page_type, content, path):
        raise ContentBoundsError(f'"{path}" already has the minimum number of items')
    updated = copy.deepcopy(content)
    del resolve_list(updated, path)[index]
    return updated
