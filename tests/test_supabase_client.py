import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from src.shared.models import BlogPost, EmailCapture, StoreStatus
from src.shared.supabase_client import SupabaseClient

ROW = {
    "id": 7,
    "title": "Hello",
    "slug": "hello",
    "content": "Body",
    "published": True,
    "tags": ["a"],
    "created_at": "2026-01-01T00:00:00+00:00",
}


def make_query(rows=None, error: Exception = None) -> MagicMock:
    """모든 빌더 메서드가 자기 자신을 반환하는 쿼리 목"""
    query = MagicMock()
    for name in ("select", "insert", "update", "delete", "eq", "order", "range", "limit"):
        getattr(query, name).return_value = query
    if error:
        query.execute.side_effect = error
    else:
        query.execute.return_value = SimpleNamespace(data=rows if rows is not None else [])
    return query


class DisabledStoreTests(unittest.TestCase):
    def test_missing_credentials_disable_every_operation(self):
        with patch("src.shared.supabase_client.create_client") as create:
            store = SupabaseClient("", "")
            create.assert_not_called()

        self.assertFalse(store.enabled)
        post = BlogPost(title="t", slug="t", content="c")
        results = [
            store.save_email(EmailCapture(email="a@b.co")),
            store.create_post(post),
            store.update_post("1", {"title": "x"}),
            store.delete_post("1"),
            store.list_posts(),
            store.get_post_by_slug("t"),
        ]
        for result in results:
            self.assertEqual(result.status, StoreStatus.UNAVAILABLE)

    def test_client_construction_failure_disables_store(self):
        with patch("src.shared.supabase_client.create_client", side_effect=ValueError("bad url")):
            store = SupabaseClient("not-a-url", "key")
        self.assertFalse(store.enabled)


class SupabaseClientTests(unittest.TestCase):
    def make_store(self, query: MagicMock) -> SupabaseClient:
        client = MagicMock()
        client.table.return_value = query
        with patch("src.shared.supabase_client.create_client", return_value=client):
            store = SupabaseClient("https://example.supabase.co", "anon", blog_table="posts")
        self.client = client
        return store

    def test_save_email_inserts_row_with_timestamp(self):
        query = make_query(rows=[{"email": "a@b.co"}])
        store = self.make_store(query)

        result = store.save_email(EmailCapture(email="a@b.co", project_name="Shop", estimation="$1"))
        self.assertTrue(result.ok)
        self.client.table.assert_called_with("user_emails")
        inserted = query.insert.call_args.args[0][0]
        self.assertEqual(inserted["project_name"], "Shop")
        self.assertEqual(inserted["estimation"], "$1")
        self.assertIsNotNone(inserted["created_at"])

    def test_create_post_omits_generated_columns(self):
        query = make_query(rows=[ROW])
        store = self.make_store(query)

        result = store.create_post(BlogPost(title="Hello", slug="hello", content="Body", id="x"))
        self.assertTrue(result.ok)
        self.assertEqual(result.value.id, "7")
        inserted = query.insert.call_args.args[0]
        self.assertNotIn("id", inserted)
        self.assertNotIn("created_at", inserted)
        self.client.table.assert_called_with("posts")

    def test_list_published_only_orders_newest_first(self):
        query = make_query(rows=[ROW])
        store = self.make_store(query)

        result = store.list_posts(limit=10, offset=20, published_only=True)
        self.assertTrue(result.ok)
        self.assertEqual(result.value[0].slug, "hello")
        query.eq.assert_called_with("published", True)
        query.order.assert_called_with("created_at", desc=True)
        query.range.assert_called_with(20, 29)

    def test_list_all_does_not_filter(self):
        query = make_query(rows=[])
        store = self.make_store(query)
        store.list_posts()
        query.eq.assert_not_called()

    def test_get_by_slug_not_found(self):
        store = self.make_store(make_query(rows=[]))
        self.assertEqual(store.get_post_by_slug("nope").status, StoreStatus.NOT_FOUND)

    def test_update_sets_updated_at_and_reports_missing_rows(self):
        query = make_query(rows=[])
        store = self.make_store(query)

        result = store.update_post("42", {"title": "New"})
        self.assertEqual(result.status, StoreStatus.NOT_FOUND)
        updates = query.update.call_args.args[0]
        self.assertEqual(updates["title"], "New")
        self.assertIn("updated_at", updates)
        query.eq.assert_called_with("id", "42")

    def test_delete(self):
        store = self.make_store(make_query(rows=[ROW]))
        self.assertTrue(store.delete_post("7").ok)

    def test_exceptions_become_error_results(self):
        store = self.make_store(make_query(error=RuntimeError("connection reset")))
        result = store.get_post_by_slug("hello")
        self.assertEqual(result.status, StoreStatus.ERROR)
        self.assertEqual(result.error, "connection reset")
        self.assertEqual(store.delete_post("1").status, StoreStatus.ERROR)
        self.assertEqual(store.save_email(EmailCapture(email="a@b.co")).status, StoreStatus.ERROR)


if __name__ == "__main__":
    unittest.main()
