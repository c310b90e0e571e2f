from __future__ import annotations

import logging
import re
import uuid
from functools import lru_cache
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError

from apollo_cms.core.config import settings

logger = logging.getLogger(__name__)

MEDIA_PREFIX = "media"
PUT_URL_TTL_SECONDS = 900
GET_URL_TTL_SECONDS = 3600

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_MISSING_BUCKET_CODES = frozenset({"404", "NoSuchBucket", "NotFound"})
_OWNED_BUCKET_CODES = frozenset({"BucketAlreadyOwnedByYou", "BucketAlreadyExists"})


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def build_object_key(file_name: str, prefix: str = MEDIA_PREFIX) -> str:
    safe_name = _UNSAFE_NAME_CHARS.sub("_", str(file_name or "").strip()) or "file.bin"
    return f"{prefix.strip('/')}/{uuid.uuid4().hex}-{safe_name}"


def is_media_key(key: str) -> bool:
    text = str(key or "")
    return text.startswith(f"{MEDIA_PREFIX}/") and ".." not in text


class S3Storage:
    """Media library objects in one S3-compatible bucket.

    Browsers upload and download directly through presigned URLs; the API only
    signs, inspects and deletes.
    """

    def __init__(self, client=None, bucket: str | None = None):
        self.bucket = bucket or settings.S3_BUCKET
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
            use_ssl=settings.S3_USE_SSL,
        )
        self._bucket_ready = False

    def ensure_bucket(self) -> None:
        if self._bucket_ready:
            return
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except ClientError as exc:
            if _error_code(exc) not in _MISSING_BUCKET_CODES:
                raise
            self._create_bucket()
        self._bucket_ready = True

    def _create_bucket(self) -> None:
        params: dict = {"Bucket": self.bucket}
        if settings.S3_REGION and settings.S3_REGION != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": settings.S3_REGION}
        try:
            self.client.create_bucket(**params)
            logger.info("media_bucket_created bucket=%s", self.bucket)
        except ClientError as exc:
            if _error_code(exc) not in _OWNED_BUCKET_CODES:
                raise

    def _sign(self, operation: str, params: dict, expires_sec: int, http_method: str | None = None) -> str:
        self.ensure_bucket()
        kwargs = {"Params": {"Bucket": self.bucket, **params}, "ExpiresIn": expires_sec}
        if http_method:
            kwargs["HttpMethod"] = http_method
        return self.client.generate_presigned_url(operation, **kwargs)

    def create_presigned_put_url(self, key: str, mime_type: str, expires_sec: int = PUT_URL_TTL_SECONDS) -> str:
        return self._sign("put_object", {"Key": key, "ContentType": mime_type}, expires_sec, "PUT")

    def create_presigned_get_url(
        self,
        key: str,
        expires_sec: int = GET_URL_TTL_SECONDS,
        file_name: str | None = None,
    ) -> str:
        params = {"Key": key}
        if file_name:
            params["ResponseContentDisposition"] = f"inline; filename*=UTF-8''{quote(file_name)}"
        return self._sign("get_object", params, expires_sec)

    def head_object(self, key: str) -> dict:
        self.ensure_bucket()
        return self.client.head_object(Bucket=self.bucket, Key=key)

    def delete_object(self, key: str) -> None:
        self.ensure_bucket()
        self.client.delete_object(Bucket=self.bucket, Key=key)


@lru_cache(maxsize=1)
def get_s3_storage() -> S3Storage:
    return S3Storage()
