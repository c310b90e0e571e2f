import json
from unittest.mock import Mock, patch

import httpx

from apollo_cms.core.config import settings
from apollo_cms.models.content_schema import ContentSchema

from tests.admin.base import AdminApiTestBase


def _schema_body(**overrides):
    body = {
        "name": "Jobs",
        "slug": "jobs",
        "description": "Open positions",
        "fields": [
            {
                "name": "jobs",
                "label": "Jobs",
                "type": "repeater",
                "fields": [{"name": "job_title", "label": "Job Title", "type": "text"}],
            }
        ],
    }
    body.update(overrides)
    return body


def _llm_reply(content: str, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    client = Mock()
    client.post.return_value = response
    client.__enter__ = Mock(return_value=client)
    client.__exit__ = Mock(return_value=False)
    return client


class ContentSchemasApiTests(AdminApiTestBase):
    def setUp(self):
        super().setUp()
        self._llm_key = settings.LLM_API_KEY
        settings.LLM_API_KEY = "test-key"

    def tearDown(self):
        settings.LLM_API_KEY = self._llm_key
        super().tearDown()

    def test_create_and_fetch(self):
        response = self.client.post("/api/admin/content-schemas", json=_schema_body(), headers=self._auth_headers())
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["fields"][0]["id"])
        self.assertTrue(body["fields"][0]["fields"][0]["id"])
        self.assertEqual([r.action for r in self._audit_rows()], ["CREATE"])

    def test_invalid_field_name_is_not_persisted(self):
        body = _schema_body(fields=[{"name": "User Name", "label": "User name", "type": "text"}])
        response = self.client.post("/api/admin/content-schemas", json=body, headers=self._auth_headers())
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["errors"]["fields.0.name"], "Name must be alphanumeric with underscores")
        with self.SessionLocal() as db:
            self.assertEqual(db.query(ContentSchema).count(), 0)

    def test_slug_is_unique_and_immutable(self):
        headers = self._auth_headers()
        created = self.client.post("/api/admin/content-schemas", json=_schema_body(), headers=headers).json()
        duplicate = self.client.post("/api/admin/content-schemas", json=_schema_body(name="Other"), headers=headers)
        self.assertEqual(duplicate.status_code, 409)

        renamed = self.client.patch(
            f"/api/admin/content-schemas/{created['id']}", json={"slug": "careers"}, headers=headers
        )
        self.assertEqual(renamed.status_code, 400)

        updated = self.client.patch(
            f"/api/admin/content-schemas/{created['id']}",
            json={"slug": "jobs", "name": "Careers", "fields": [{"name": "title", "label": "Title", "type": "text"}]},
            headers=headers,
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["name"], "Careers")
        self.assertEqual(updated.json()["slug"], "jobs")
        self.assertEqual(len(updated.json()["fields"]), 1)

    def test_delete(self):
        headers = self._auth_headers()
        created = self.client.post("/api/admin/content-schemas", json=_schema_body(), headers=headers).json()
        self.assertEqual(self.client.delete(f"/api/admin/content-schemas/{created['id']}", headers=headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/admin/content-schemas/{created['id']}", headers=headers).status_code, 404)

    def test_generate_schema_backfills_ids(self):
        generated = {
            "name": "Jobs",
            "slug": "jobs",
            "description": "Job listings",
            "fields": [
                {
                    "name": "jobs",
                    "label": "Jobs",
                    "type": "repeater",
                    "required": False,
                    "fields": [{"name": "job_title", "label": "Job Title", "type": "text", "required": False}],
                }
            ],
        }
        client = _llm_reply(json.dumps(generated))
        with patch("apollo_cms.services.llm_client.httpx.Client", return_value=client):
            response = self.client.post(
                "/api/admin/content-schemas/generate",
                json={"jsonContent": json.dumps({"jobs": [{"job_title": "string", "apply_button": "string"}]})},
                headers=self._auth_headers(),
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["slug"], "jobs")
        self.assertTrue(body["fields"][0]["id"])
        self.assertTrue(body["fields"][0]["fields"][0]["id"])
        sent = client.post.call_args.kwargs["json"]
        self.assertEqual(sent["response_format"], {"type": "json_object"})
        self.assertIn("apply_button", sent["messages"][1]["content"])

    def test_generate_rejects_invalid_json_input(self):
        response = self.client.post(
            "/api/admin/content-schemas/generate", json={"jsonContent": "{not json"}, headers=self._auth_headers()
        )
        self.assertEqual(response.status_code, 400)

    def test_generate_invalid_model_output(self):
        client = _llm_reply(json.dumps({"name": "Bad", "slug": "Bad Slug", "fields": []}))
        with patch("apollo_cms.services.llm_client.httpx.Client", return_value=client):
            response = self.client.post(
                "/api/admin/content-schemas/generate", json={"jsonContent": "{}"}, headers=self._auth_headers()
            )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"], "AI failed to generate a valid schema.")

    def test_generate_transport_error(self):
        client = _llm_reply("")
        client.post.side_effect = httpx.ConnectError("boom")
        with patch("apollo_cms.services.llm_client.httpx.Client", return_value=client):
            response = self.client.post(
                "/api/admin/content-schemas/generate", json={"jsonContent": "{}"}, headers=self._auth_headers()
            )
        self.assertEqual(response.status_code, 502)

    def test_generate_without_configuration(self):
        settings.LLM_API_KEY = ""
        response = self.client.post(
            "/api/admin/content-schemas/generate", json={"jsonContent": "{}"}, headers=self._auth_headers()
        )
        self.assertEqual(response.status_code, 503)
