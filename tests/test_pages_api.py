"""Page content blocks: create, upsert, admin-only delete."""

from tests.support import ApiTestCase, bearer, create_user


class TestPagesApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = create_user(email="admin@example.org", name="Ada Admin", role="admin")
        self.editor = create_user(email="editor@example.org", name="Edie Editor", role="editor")

    def test_create_then_get(self) -> None:
        response = self.client.post(
            "/api/pages",
            json={"page_key": "about", "content_json": {"heading": "About us"}, "markdown_body": "# Hi"},
            headers=bearer(self.editor),
        )
        self.assertEqual(response.status_code, 201)
        page = self.data(self.client.get("/api/pages/about", headers=bearer(self.editor)))
        self.assertEqual(page["content_json"], {"heading": "About us"})
        self.assertEqual(page["markdown_body"], "# Hi")
        self.assertEqual(page["updated_by_name"], "Edie Editor")

    def test_duplicate_key_conflicts(self) -> None:
        body = {"page_key": "about"}
        self.client.post("/api/pages", json=body, headers=bearer(self.editor))
        response = self.client.post("/api/pages", json=body, headers=bearer(self.editor))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(self.error_code(response), "PAGE_EXISTS")

    def test_put_creates_then_replaces(self) -> None:
        created = self.client.put(
            "/api/pages/home", json={"content_json": {"hero": "Welcome"}}, headers=bearer(self.editor)
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(self.data(created)["content_json"], {"hero": "Welcome"})

        replaced = self.client.put(
            "/api/pages/home", json={"markdown_body": "Body only"}, headers=bearer(self.admin)
        )
        self.assertEqual(replaced.status_code, 200)
        page = self.data(replaced)
        self.assertEqual(page["content_json"], {})
        self.assertEqual(page["markdown_body"], "Body only")
        self.assertEqual(page["updated_by"], self.admin.id)

    def test_content_json_must_be_an_object(self) -> None:
        response = self.client.put(
            "/api/pages/home", json={"content_json": ["not", "an", "object"]}, headers=bearer(self.editor)
        )
        self.assertEqual(self.error_code(response), "VALIDATION_ERROR")

    def test_list_sorted_by_key(self) -> None:
        for key in ("worship", "about"):
            self.client.put(f"/api/pages/{key}", json={}, headers=bearer(self.editor))
        pages = self.data(self.client.get("/api/pages", headers=bearer(self.editor)))
        self.assertEqual([p["page_key"] for p in pages], ["about", "worship"])

    def test_delete_is_admin_only(self) -> None:
        self.client.put("/api/pages/about", json={}, headers=bearer(self.editor))
        forbidden = self.client.delete("/api/pages/about", headers=bearer(self.editor))
        self.assertEqual(forbidden.status_code, 403)
        self.assertEqual(self.error_code(forbidden), "FORBIDDEN")

        deleted = self.client.delete("/api/pages/about", headers=bearer(self.admin))
        self.assertEqual(deleted.status_code, 200)
        missing = self.client.get("/api/pages/about", headers=bearer(self.admin))
        self.assertEqual(missing.status_code, 404)
