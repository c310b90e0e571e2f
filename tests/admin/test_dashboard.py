import json
from unittest.mock import MagicMock, patch

from apollo_cms.core.config import settings
from apollo_cms.models.content_block import ContentBlock
from apollo_cms.models.page import Page

from tests.admin.base import AdminApiTestBase


class DashboardApiTests(AdminApiTestBase):
    def test_summary_counts_and_recent_content(self):
        with self.SessionLocal() as db:
            for idx, status in enumerate(["Draft", "Published", "Published", "Review"]):
                db.add(Page(title=f"Page {idx}", slug=f"page-{idx}", status=status, author="Admin", content={}))
            for idx in range(3):
                db.add(ContentBlock(name=f"Block {idx}", type="Generic", status="Draft", content="x"))
            db.commit()

        response = self.client.get("/api/admin/dashboard/summary", headers=self._auth_headers())
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["counts"]["pages"], 4)
        self.assertEqual(body["counts"]["contentBlocks"], 3)
        by_status = {item["status"]: item["count"] for item in body["pagesByStatus"]}
        self.assertEqual(by_status, {"Draft": 1, "Published": 2, "Review": 1})
        kinds = [item["kind"] for item in body["recentContent"]]
        self.assertEqual(kinds, ["page", "page", "page", "block", "block"])
        self.assertEqual(body["recentActivity"], [])

    def test_tasks_toggle_and_ordering(self):
        headers = self._auth_headers(sub="user-1", name="Ed")
        first = self.client.post("/api/admin/tasks", json={"text": "Write intro"}, headers=headers).json()
        second = self.client.post("/api/admin/tasks", json={"text": "Review footer"}, headers=headers).json()
        self.assertFalse(first["completed"])

        toggled = self.client.post(f"/api/admin/tasks/{second['id']}/toggle", headers=headers).json()
        self.assertTrue(toggled["completed"])
        self.assertIn("user-1", toggled["completedBy"])

        listed = self.client.get("/api/admin/tasks", headers=headers).json()
        self.assertEqual([t["id"] for t in listed], [first["id"], second["id"]])

        # Completion is per user.
        other = self.client.get("/api/admin/tasks", headers=self._auth_headers(sub="user-2")).json()
        self.assertFalse(any(t["completed"] for t in other))

        untoggled = self.client.post(f"/api/admin/tasks/{second['id']}/toggle", headers=headers).json()
        self.assertFalse(untoggled["completed"])

        actions = sorted(r.action for r in self._audit_rows())
        self.assertEqual(actions, ["CREATE", "CREATE", "TASK_COMPLETED"])

        self.assertEqual(self.client.delete(f"/api/admin/tasks/{first['id']}", headers=headers).status_code, 200)
        self.assertEqual(len(self.client.get("/api/admin/tasks", headers=headers).json()), 1)

    def test_empty_task_text_is_rejected(self):
        response = self.client.post("/api/admin/tasks", json={"text": "  "}, headers=self._auth_headers())
        self.assertEqual(response.status_code, 422)

    def test_note_summary(self):
        reply = MagicMock()
        reply.status_code = 200
        reply.json.return_value = {
            "choices": [{"message": {"content": json.dumps({"summary": "Plan launch.", "title": "Launch Plan"})}}]
        }
        client = MagicMock()
        client.__enter__.return_value = client
        client.post.return_value = reply
        with patch.object(settings, "LLM_API_KEY", "test-key"):
            with patch("apollo_cms.services.llm_client.httpx.Client", return_value=client):
                response = self.client.post(
                    "/api/admin/notes/summarize",
                    json={"noteContent": "We launch the new site next week."},
                    headers=self._auth_headers(),
                )
                empty = self.client.post(
                    "/api/admin/notes/summarize", json={"noteContent": ""}, headers=self._auth_headers()
                )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": "Plan launch.", "title": "Launch Plan"})
        self.assertEqual(empty.status_code, 400)

    def test_note_summary_model_failure(self):
        reply = MagicMock()
        reply.status_code = 500
        client = MagicMock()
        client.__enter__.return_value = client
        client.post.return_value = reply
        with patch.object(settings, "LLM_API_KEY", "test-key"):
            with patch("apollo_cms.services.llm_client.httpx.Client", return_value=client):
                response = self.client.post(
                    "/api/admin/notes/summarize", json={"noteContent": "hello"}, headers=self._auth_headers()
                )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"], "Failed to get a response from the AI model.")

    def test_analytics_reports_configuration_errors(self):
        headers = self._auth_headers()
        with patch.object(settings, "GA_PROPERTY_ID", ""):
            body = self.client.get("/api/admin/dashboard/analytics", headers=headers).json()
        self.assertEqual(body["error"], "MISSING_GA_PROPERTY_ID")

        with patch.object(settings, "GA_PROPERTY_ID", "123"):
            with patch.object(settings, "GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING", ""):
                body = self.client.get("/api/admin/dashboard/analytics", headers=headers).json()
            self.assertEqual(body["error"], "MISSING_CREDENTIALS_STRING")
            with patch.object(settings, "GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING", "{broken"):
                response = self.client.get("/api/admin/dashboard/analytics", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["error"], "INVALID_CREDENTIALS_JSON")
