import unittest
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from apollo_cms.core.config import settings
from apollo_cms.models.media_item import MediaItem
from apollo_cms.services.s3_storage import S3Storage, build_object_key, is_media_key

from tests.admin.base import AdminApiTestBase


class _FakeS3Storage:
    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.fail_delete = False

    def create_presigned_put_url(self, key: str, mime_type: str, expires_sec: int = 900) -> str:
        return f"https://s3.local/{key}?expires={expires_sec}"

    def create_presigned_get_url(self, key: str, expires_sec: int = 3600, file_name: str | None = None) -> str:
        return f"https://s3.local/{key}?get=1"

    def head_object(self, key: str) -> dict:
        obj = self.objects.get(key)
        if obj is None:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        return {"ContentLength": obj["size"], "ContentType": obj["mime"]}

    def delete_object(self, key: str) -> None:
        if self.fail_delete:
            raise ClientError({"Error": {"Code": "500", "Message": "Boom"}}, "DeleteObject")
        self.objects.pop(key, None)
        self.deleted.append(key)


class ObjectKeyTests(unittest.TestCase):
    def test_keys_live_under_media_prefix(self):
        key = build_object_key("My Photo (1).png")
        self.assertTrue(key.startswith("media/"))
        self.assertTrue(key.endswith("-My_Photo_1_.png"))
        self.assertTrue(is_media_key(key))
        self.assertFalse(is_media_key("private/secret.pdf"))
        self.assertFalse(is_media_key("media/../private/secret.pdf"))


class S3StorageTests(unittest.TestCase):
    def test_missing_bucket_is_created_once(self):
        client = MagicMock()
        client.head_bucket.side_effect = ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket")
        client.generate_presigned_url.return_value = "https://s3.local/signed"
        storage = S3Storage(client=client, bucket="media-test")

        self.assertEqual(storage.create_presigned_put_url("media/a.png", "image/png"), "https://s3.local/signed")
        storage.create_presigned_get_url("media/a.png", file_name="a b.png")

        client.create_bucket.assert_called_once()
        client.head_bucket.assert_called_once()
        put_call, get_call = client.generate_presigned_url.call_args_list
        self.assertEqual(put_call.kwargs["HttpMethod"], "PUT")
        self.assertEqual(put_call.kwargs["Params"]["ContentType"], "image/png")
        self.assertIn("a%20b.png", get_call.kwargs["Params"]["ResponseContentDisposition"])

    def test_other_bucket_errors_propagate(self):
        client = MagicMock()
        client.head_bucket.side_effect = ClientError({"Error": {"Code": "403", "Message": "Denied"}}, "HeadBucket")
        with self.assertRaises(ClientError):
            S3Storage(client=client, bucket="media-test").head_object("media/a.png")


class MediaUploadsTests(AdminApiTestBase):
    def setUp(self):
        super().setUp()
        self.storage = _FakeS3Storage()
        patcher = patch("apollo_cms.api.admin.media.get_s3_storage", return_value=self.storage)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _init(self, headers, **overrides):
        body = {"fileName": "campus.jpg", "mimeType": "image/jpeg", "sizeBytes": 2048}
        body.update(overrides)
        return self.client.post("/api/admin/media/init", json=body, headers=headers)

    def test_upload_flow(self):
        headers = self._auth_headers(name="Ed")
        init = self._init(headers)
        self.assertEqual(init.status_code, 200)
        payload = init.json()
        self.assertEqual(payload["method"], "PRESIGNED_PUT")
        key = payload["key"]
        self.assertTrue(payload["presignedUrl"].startswith(f"https://s3.local/{key}"))

        self.storage.objects[key] = {"size": 2048, "mime": "image/jpeg"}
        completed = self.client.post(
            "/api/admin/media/complete",
            json={"key": key, "fileName": "campus.jpg", "mimeType": "image/jpeg", "sizeBytes": 2048, "altText": "Campus"},
            headers=headers,
        )
        self.assertEqual(completed.status_code, 201)
        item = completed.json()
        self.assertEqual(item["objectKey"], key)
        self.assertEqual(item["altText"], "Campus")

        fetched = self.client.get(f"/api/admin/media/{item['id']}", headers=headers).json()
        self.assertIn("?get=1", fetched["url"])

        patched = self.client.patch(f"/api/admin/media/{item['id']}", json={"altText": "Main campus"}, headers=headers)
        self.assertEqual(patched.json()["altText"], "Main campus")

        deleted = self.client.delete(f"/api/admin/media/{item['id']}", headers=headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(self.storage.deleted, [key])
        actions = sorted(r.action for r in self._audit_rows())
        self.assertEqual(actions, ["CREATE", "DELETE", "UPDATE"])

    def test_size_limits(self):
        headers = self._auth_headers()
        self.assertEqual(self._init(headers, sizeBytes=0).status_code, 400)
        too_big = self._init(headers, sizeBytes=settings.MAX_FILE_MB * 1024 * 1024 + 1)
        self.assertEqual(too_big.status_code, 400)

    def test_complete_requires_uploaded_object(self):
        headers = self._auth_headers()
        missing = self.client.post(
            "/api/admin/media/complete",
            json={"key": "media/abc-file.png", "fileName": "file.png", "mimeType": "image/png", "sizeBytes": 10},
            headers=headers,
        )
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.json()["detail"], "Uploaded file not found in storage")

        outside = self.client.post(
            "/api/admin/media/complete",
            json={"key": "private/file.png", "fileName": "file.png", "mimeType": "image/png", "sizeBytes": 10},
            headers=headers,
        )
        self.assertEqual(outside.status_code, 400)
        with self.SessionLocal() as db:
            self.assertEqual(db.query(MediaItem).count(), 0)

    def test_storage_delete_failure_keeps_row(self):
        headers = self._auth_headers()
        self.storage.objects["media/x-file.png"] = {"size": 10, "mime": "image/png"}
        item = self.client.post(
            "/api/admin/media/complete",
            json={"key": "media/x-file.png", "fileName": "file.png", "mimeType": "image/png", "sizeBytes": 10},
            headers=headers,
        ).json()
        self.storage.fail_delete = True
        response = self.client.delete(f"/api/admin/media/{item['id']}", headers=headers)
        self.assertEqual(response.status_code, 502)
        with self.SessionLocal() as db:
            self.assertEqual(db.query(MediaItem).count(), 1)
