import uuid

from apollo_cms.core.security import verify_password
from apollo_cms.models.user import User

from tests.admin.base import AdminApiTestBase


class AccessControlApiTests(AdminApiTestBase):
    def _admin(self, sub=None):
        return self._auth_headers(role="Admin", name="Root", sub=sub)

    def test_non_admin_is_forbidden(self):
        headers = self._auth_headers(role="Editor")
        self.assertEqual(self.client.get("/api/admin/roles/permissions", headers=headers).status_code, 403)
        self.assertEqual(self.client.post("/api/admin/users/query", json={}, headers=headers).status_code, 403)
        self.assertEqual(self.client.post("/api/admin/roles", json={"name": "X"}, headers=headers).status_code, 403)

    def test_permission_catalog(self):
        response = self.client.get("/api/admin/roles/permissions", headers=self._admin())
        self.assertEqual(response.status_code, 200)
        ids = [p["id"] for p in response.json()]
        self.assertIn("manage_content", ids)
        self.assertEqual(len(ids), len(set(ids)))

    def test_role_lifecycle(self):
        headers = self._admin()
        created = self.client.post(
            "/api/admin/roles",
            json={"name": "Editors", "description": "Edit content", "permissions": ["manage_content", "manage_content"]},
            headers=headers,
        )
        self.assertEqual(created.status_code, 201)
        role = created.json()
        self.assertEqual(role["permissions"], ["manage_content"])

        duplicate = self.client.post("/api/admin/roles", json={"name": "Editors"}, headers=headers)
        self.assertEqual(duplicate.status_code, 409)

        granted = self.client.put(
            f"/api/admin/roles/{role['id']}/permissions/manage_media", json={"granted": True}, headers=headers
        )
        self.assertEqual(granted.json()["permissions"], ["manage_content", "manage_media"])
        revoked = self.client.put(
            f"/api/admin/roles/{role['id']}/permissions/manage_content", json={"granted": False}, headers=headers
        )
        self.assertEqual(revoked.json()["permissions"], ["manage_media"])

        unknown = self.client.put(
            f"/api/admin/roles/{role['id']}/permissions/launch_rockets", json={"granted": True}, headers=headers
        )
        self.assertEqual(unknown.status_code, 400)

        listed = self.client.post("/api/admin/roles/query", json={}, headers=headers)
        self.assertEqual(listed.json()["total"], 1)

        self.assertEqual(self.client.delete(f"/api/admin/roles/{role['id']}", headers=headers).status_code, 200)
        actions = [r.action for r in self._audit_rows()]
        self.assertEqual(sorted(actions), ["CREATE", "DELETE", "UPDATE", "UPDATE"])
        self.assertTrue(all(r.entity_type == "Role" and r.user_name == "Root" for r in self._audit_rows()))

    def test_role_rejects_unknown_permissions(self):
        response = self.client.post(
            "/api/admin/roles", json={"name": "Odd", "permissions": ["launch_rockets"]}, headers=self._admin()
        )
        self.assertEqual(response.status_code, 422)

    def test_user_lifecycle(self):
        headers = self._admin()
        body = {"name": "Jane", "email": "Jane@Example.com", "role": "Editor", "password": "secret-pass"}
        created = self.client.post("/api/admin/users", json=body, headers=headers)
        self.assertEqual(created.status_code, 201)
        user = created.json()
        self.assertEqual(user["email"], "jane@example.com")
        self.assertTrue(user["isActive"])
        self.assertNotIn("password", user)
        with self.SessionLocal() as db:
            row = db.get(User, uuid.UUID(user["id"]))
            self.assertTrue(verify_password("secret-pass", row.password_hash))

        duplicate = self.client.post("/api/admin/users", json=body, headers=headers)
        self.assertEqual(duplicate.status_code, 409)

        updated = self.client.patch(
            f"/api/admin/users/{user['id']}",
            json={"name": "Jane D", "email": "jane@example.com", "role": "Admin", "isActive": False},
            headers=headers,
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["role"], "Admin")
        self.assertFalse(updated.json()["isActive"])

        invalid = self.client.post(
            "/api/admin/users", json={"name": "", "email": "nope", "role": "Editor"}, headers=headers
        )
        self.assertEqual(invalid.status_code, 422)

        self.assertEqual(self.client.delete(f"/api/admin/users/{user['id']}", headers=headers).status_code, 200)

    def test_admin_cannot_delete_self(self):
        created = self.client.post(
            "/api/admin/users",
            json={"name": "Root", "email": "root@example.com", "role": "Admin"},
            headers=self._admin(),
        ).json()
        response = self.client.delete(f"/api/admin/users/{created['id']}", headers=self._admin(sub=created["id"]))
        self.assertEqual(response.status_code, 400)
