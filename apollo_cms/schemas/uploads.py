from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _UploadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MediaInitPayload(_UploadModel):
    file_name: str
    mime_type: str
    size_bytes: int


class MediaInitResponse(_UploadModel):
    method: str = "PRESIGNED_PUT"
    key: str
    presigned_url: str


class MediaCompletePayload(_UploadModel):
    key: str
    file_name: str
    mime_type: str
    size_bytes: int
    alt_text: Optional[str] = None


class MediaAltTextPayload(_UploadModel):
    alt_text: Optional[str] = None
