"""Route tests for /api/posts: public reads and author-or-admin writes."""

import unittest

from app.models import Post
from tests.support import ApiTestCase

VALID_POST = {"title": "Test Post", "content": "This is test content for the post."}


class PostsApiTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.author = self.make_user(username="author")
        self.other = self.make_user(username="other")
        self.admin = self.make_user(username="admin", role="admin")


class TestCreatePost(PostsApiTestCase):
    def test_authenticated_user_becomes_author(self) -> None:
        res = self.client.post(
            "/api/posts",
            json={**VALID_POST, "tags": ["b", "a"]},
            headers=self.auth_headers(self.author),
        )
        self.assertEqual(res.status_code, 201)
        body = res.json()
        self.assertEqual(body["author"]["id"], self.author.id)
        self.assertEqual(body["author"]["username"], "author")
        self.assertEqual(body["slug"], "test-post")
        self.assertEqual(body["tags"], ["b", "a"])
        self.assertFalse(body["published"])
        self.assertEqual(body["views"], 0)
        self.assertIn("createdAt", body)
        self.assertIn("updatedAt", body)

    def test_creation_is_logged_once_with_the_actor(self) -> None:
        with self.assertLogs("app", level="INFO") as cm:
            res = self.client.post(
                "/api/posts", json=VALID_POST, headers=self.auth_headers(self.author)
            )
        created = [r for r in cm.records if "created" in r.getMessage()]
        self.assertEqual(len(created), 1)
        self.assertEqual(created[0].post_id, res.json()["id"])
        self.assertEqual(created[0].user_id, self.author.id)
        self.assertIn("author", created[0].getMessage())

    def test_requires_token(self) -> None:
        res = self.client.post("/api/posts", json=VALID_POST)
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json(), {"error": "No token provided"})

    def test_validates_title_and_content(self) -> None:
        res = self.client.post(
            "/api/posts",
            json={"title": "ab", "content": "short"},
            headers=self.auth_headers(self.author),
        )
        self.assertEqual(res.status_code, 400)
        fields = {d["field"] for d in res.json()["details"]}
        self.assertEqual(fields, {"title", "content"})

    def test_duplicate_slug_is_rejected(self) -> None:
        headers = self.auth_headers(self.author)
        self.client.post("/api/posts", json=VALID_POST, headers=headers)
        res = self.client.post(
            "/api/posts",
            json={**VALID_POST, "title": "Test post!"},
            headers=headers,
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json(), {"error": "slug already exists"})


class TestReadPosts(PostsApiTestCase):
    def test_single_read_counts_a_view(self) -> None:
        post = self.make_post(self.author)
        first = self.client.get(f"/api/posts/{post.id}")
        second = self.client.get(f"/api/posts/{post.id}")
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["views"], 1)
        self.assertEqual(second.json()["views"], 2)

    def test_missing_post(self) -> None:
        res = self.client.get("/api/posts/4b0f6d39-59d5-4d2e-9e36-1b8f3e1d0c11")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json(), {"error": "Post not found"})

    def test_malformed_id(self) -> None:
        res = self.client.get("/api/posts/invalid-id")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json(), {"error": "Invalid ID format"})

    def test_list_pagination_and_published_filter(self) -> None:
        self.make_post(self.author, title="Published post", published=True)
        self.make_post(self.author, title="Draft post")

        res = self.client.get("/api/posts")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertEqual(len(body["posts"]), 2)
        self.assertEqual(body["pagination"], {"page": 1, "limit": 10, "total": 2, "pages": 1})

        drafts = self.client.get("/api/posts", params={"published": "false"}).json()
        self.assertEqual([p["title"] for p in drafts["posts"]], ["Draft post"])
        self.assertEqual(drafts["pagination"]["total"], 1)

    def test_list_clamps_bad_paging_input(self) -> None:
        self.make_post(self.author)
        body = self.client.get("/api/posts", params={"page": "0", "limit": "abc"}).json()
        self.assertEqual(body["pagination"]["page"], 1)
        self.assertEqual(body["pagination"]["limit"], 10)

    def test_list_with_huge_page_is_an_empty_page(self) -> None:
        self.make_post(self.author)
        response = self.client.get("/api/posts", params={"page": "99999999999999999999"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["posts"], [])
        self.assertEqual(body["pagination"]["total"], 1)


class TestUpdateAndDeletePost(PostsApiTestCase):
    def test_author_and_admin_may_update(self) -> None:
        post = self.make_post(self.author)
        for caller, title in ((self.author, "Author edit"), (self.admin, "Admin edit")):
            res = self.client.put(
                f"/api/posts/{post.id}",
                json={"title": title},
                headers=self.auth_headers(caller),
            )
            self.assertEqual(res.status_code, 200)
            self.assertEqual(res.json()["title"], title)
            self.assertEqual(res.json()["slug"], "first-post")

    def test_non_author_update_is_forbidden_and_store_unchanged(self) -> None:
        post = self.make_post(self.author)
        res = self.client.put(
            f"/api/posts/{post.id}",
            json={"title": "Hacked title"},
            headers=self.auth_headers(self.other),
        )
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json(), {"error": "Not authorized to update this post"})
        self.db.expire_all()
        self.assertEqual(self.db.get(Post, post.id).title, "First post")

    def test_non_author_delete_is_forbidden_and_store_unchanged(self) -> None:
        post = self.make_post(self.author)
        res = self.client.delete(f"/api/posts/{post.id}", headers=self.auth_headers(self.other))
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json(), {"error": "Not authorized to delete this post"})
        self.db.expire_all()
        self.assertIsNotNone(self.db.get(Post, post.id))

    def test_author_may_delete(self) -> None:
        post_id = self.make_post(self.author).id
        res = self.client.delete(f"/api/posts/{post_id}", headers=self.auth_headers(self.author))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"message": "Post deleted successfully"})
        self.db.expire_all()
        self.assertIsNone(self.db.get(Post, post_id))

    def test_admin_may_delete(self) -> None:
        post = self.make_post(self.author)
        res = self.client.delete(f"/api/posts/{post.id}", headers=self.auth_headers(self.admin))
        self.assertEqual(res.status_code, 200)

    def test_update_missing_post(self) -> None:
        res = self.client.put(
            "/api/posts/4b0f6d39-59d5-4d2e-9e36-1b8f3e1d0c11",
            json={"title": "Anything"},
            headers=self.auth_headers(self.author),
        )
        self.assertEqual(res.status_code, 404)


if __name__ == "__main__":
    unittest.main()
