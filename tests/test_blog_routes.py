import unittest

from tests.support import ADMIN_KEY, FakeStore, Harness

ADMIN = {"key": ADMIN_KEY}


class PublicBlogTests(unittest.TestCase):
    def setUp(self):
        self.h = Harness()
        self.client = self.h.client
        self.published = self.h.add_post("Hello World", "hello-world", published=True)
        self.draft = self.h.add_post("Secret Draft", "secret-draft", published=False)

    def test_public_list_only_returns_published_posts(self):
        response = self.client.get("/api/blog")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertEqual([p["slug"] for p in payload["data"]], ["hello-world"])
        self.assertEqual(payload["pagination"], {"limit": 10, "offset": 0, "count": 1})

    def test_public_list_hides_drafts_even_for_admin(self):
        response = self.client.get("/api/blog", params=ADMIN)
        self.assertEqual([p["slug"] for p in response.json()["data"]], ["hello-world"])

    def test_admin_list_includes_drafts(self):
        response = self.client.get("/api/blog/admin/posts", params=ADMIN)
        self.assertEqual(response.status_code, 200)
        slugs = {p["slug"] for p in response.json()["data"]}
        self.assertEqual(slugs, {"hello-world", "secret-draft"})
        self.assertEqual(response.json()["pagination"]["limit"], 50)

    def test_public_get_by_slug(self):
        response = self.client.get("/api/blog/hello-world")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["title"], "Hello World")

    def test_unpublished_post_is_not_found_for_public_and_admin(self):
        self.assertEqual(self.client.get("/api/blog/secret-draft").status_code, 404)
        self.assertEqual(self.client.get("/api/blog/secret-draft", params=ADMIN).status_code, 404)

    def test_unknown_slug_is_not_found(self):
        response = self.client.get("/api/blog/missing")
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])

    def test_invalid_pagination_falls_back_to_defaults(self):
        response = self.client.get("/api/blog", params={"limit": "abc", "offset": "-3"})
        self.assertEqual(response.json()["pagination"]["limit"], 10)
        self.assertEqual(response.json()["pagination"]["offset"], 0)

    def test_list_degrades_to_empty_page_when_store_unavailable(self):
        h = Harness(store=FakeStore(enabled=False))
        response = h.client.get("/api/blog")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], [])


class AdminBlogTests(unittest.TestCase):
    def setUp(self):
        self.h = Harness()
        self.client = self.h.client

    def test_create_derives_slug_and_round_trips(self):
        response = self.client.post(
            "/api/blog/admin/create",
            params=ADMIN,
            json={"title": "Ten Tips: Build a Shop!", "content": "# Tips", "status": "published"},
        )
        self.assertEqual(response.status_code, 201)
        data = response.json()["data"]
        self.assertEqual(data["slug"], "ten-tips-build-a-shop")
        self.assertTrue(data["published"])
        self.assertEqual(data["author"], "Admin")

        fetched = self.client.get(f"/api/blog/{data['slug']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["data"]["content"], "# Tips")

    def test_create_requires_title_and_content(self):
        response = self.client.post("/api/blog/admin/create", params=ADMIN, json={"title": "Only"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["required"], ["title", "content"])

    def test_create_defaults_to_unpublished(self):
        response = self.client.post(
            "/api/blog/admin/create", params=ADMIN, json={"title": "Draft", "content": "x"}
        )
        self.assertFalse(response.json()["data"]["published"])

    def test_create_reports_store_failure(self):
        h = Harness(store=FakeStore(enabled=False))
        response = h.client.post(
            "/api/blog/admin/create", params=ADMIN, json={"title": "T", "content": "c"}
        )
        self.assertEqual(response.status_code, 500)

    def test_update_normalizes_status(self):
        post = self.h.add_post("Draft", "draft", published=False)
        response = self.client.put(
            f"/api/blog/admin/{post.id}",
            params=ADMIN,
            json={"status": "published", "title": "Now Live", "published_at": "2026-01-01"},
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertTrue(data["published"])
        self.assertEqual(data["title"], "Now Live")

    def test_partial_update_keeps_published_flag(self):
        post = self.h.add_post("Live", "live", published=True)
        self.client.put(f"/api/blog/admin/{post.id}", params=ADMIN, json={"excerpt": "short"})
        self.assertTrue(self.h.store.posts[post.id].published)
        self.assertEqual(self.h.store.posts[post.id].excerpt, "short")

    def test_update_can_clear_optional_fields(self):
        post = self.h.add_post("Live", "live", published=True)
        post.excerpt = "old summary"
        response = self.client.put(f"/api/blog/admin/{post.id}", params=ADMIN, json={"excerpt": None})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["data"]["excerpt"])
        self.assertEqual(self.h.store.posts[post.id].title, "Live")

    def test_update_rejects_null_required_fields(self):
        post = self.h.add_post("Live", "live", published=True)
        response = self.client.put(
            f"/api/blog/admin/{post.id}", params=ADMIN, json={"title": None, "excerpt": "x"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["fields"], ["title"])
        self.assertEqual(self.h.store.posts[post.id].title, "Live")

    def test_update_missing_post_is_404(self):
        response = self.client.put("/api/blog/admin/999", params=ADMIN, json={"title": "x"})
        self.assertEqual(response.status_code, 404)

    def test_update_without_fields_is_400(self):
        post = self.h.add_post("Live", "live", published=True)
        response = self.client.put(f"/api/blog/admin/{post.id}", params=ADMIN, json={})
        self.assertEqual(response.status_code, 400)

    def test_delete_then_delete_again_is_404(self):
        post = self.h.add_post("Gone", "gone", published=True)
        first = self.client.delete(f"/api/blog/admin/{post.id}", params=ADMIN)
        self.assertEqual(first.status_code, 200)
        second = self.client.delete(f"/api/blog/admin/{post.id}", params=ADMIN)
        self.assertEqual(second.status_code, 404)


if __name__ == "__main__":
    unittest.main()
