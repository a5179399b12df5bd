"""
Post endpoints: listing filters, detail views, ownership and trending.
Run: pytest test_posts.py
"""

import pytest

from blog_api.crud import crud_category
from blog_api.models import Comment, Post
from blog_api.models.post import PostStatus
from blog_api.schemas.category import CategoryCreate

from conftest import auth_headers, make_comment, make_post

API = "/api/v1"


def _ids(response):
    return [post["id"] for post in response.json()["data"]["posts"]]


class TestListPosts:
    def test_lists_only_published_newest_first(self, client, db, user, category):
        older = make_post(db, user, category, title="Older post")
        newer = make_post(db, user, category, title="Newer post")
        make_post(db, user, category, title="Secret draft", status=PostStatus.DRAFT)

        response = client.get(f"{API}/posts")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert body["pagination"] == {"current": 1, "pages": 1, "total": 2}
        assert _ids(response) == [newer.id, older.id]

    def test_list_embeds_author_category_and_comment_preview(self, client, db, user, category):
        post = make_post(db, user, category)
        for i in range(5):
            make_comment(db, post, user, f"comment {i}")

        listed = client.get(f"{API}/posts").json()["data"]["posts"][0]
        assert listed["author"] == {"id": user.id, "name": "John Doe", "avatar": ""}
        assert listed["category"] == {"id": category.id, "name": "Technology"}
        assert listed["comments_count"] == 5
        assert len(listed["comments"]) == 3

    def test_search_matches_title_or_content(self, client, db, user, category):
        by_title = make_post(db, user, category, title="Intro to Docker", content="Containers explained")
        by_content = make_post(db, user, category, title="Weekend notes", content="Spent time on docker")
        make_post(db, user, category, title="Baking bread", content="Flour water salt")

        response = client.get(f"{API}/posts", params={"search": "DOCKER"})
        assert sorted(_ids(response)) == sorted([by_title.id, by_content.id])

    def test_category_filter_accepts_id_or_name(self, client, db, user, category):
        travel = crud_category.create(db, obj_in=CategoryCreate(name="Travel"))
        tech_post = make_post(db, user, category, title="Tech stuff")
        make_post(db, user, travel, title="Trip to Rome")

        assert _ids(client.get(f"{API}/posts", params={"category": category.id})) == [tech_post.id]
        assert _ids(client.get(f"{API}/posts", params={"category": "technology"})) == [tech_post.id]

    def test_unknown_category_filter_is_ignored(self, client, db, user, category):
        make_post(db, user, category, title="First post")
        make_post(db, user, category, title="Second post")

        response = client.get(f"{API}/posts", params={"category": "Nonexistent"})
        assert response.json()["count"] == 2

    def test_non_ascii_digit_category_filter_is_ignored(self, client, db, user, category):
        make_post(db, user, category)

        response = client.get(f"{API}/posts", params={"category": "²"})
        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_pagination(self, client, db, user, category):
        for i in range(12):
            make_post(db, user, category, title=f"Post number {i}")

        first = client.get(f"{API}/posts", params={"page": 1, "limit": 5}).json()
        last = client.get(f"{API}/posts", params={"page": 3, "limit": 5}).json()
        beyond = client.get(f"{API}/posts", params={"page": 4, "limit": 5}).json()

        assert first["pagination"] == {"current": 1, "pages": 3, "total": 12}
        assert first["count"] == 5
        assert last["count"] == 2
        assert beyond["count"] == 0
        assert beyond["data"]["posts"] == []

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    def test_invalid_paging_is_rejected(self, client, params):
        response = client.get(f"{API}/posts", params=params)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_listing_does_not_count_views(self, client, db, user, category):
        post = make_post(db, user, category)
        client.get(f"{API}/posts")
        client.get(f"{API}/posts")
        db.refresh(post)
        assert post.view_count == 0


class TestGetPost:
    def test_each_fetch_counts_one_view(self, client, db, user, category):
        post = make_post(db, user, category)

        first = client.get(f"{API}/posts/{post.id}").json()["data"]["post"]
        second = client.get(f"{API}/posts/{post.id}").json()["data"]["post"]

        assert first["view_count"] == 1
        assert second["view_count"] == 2
        db.refresh(post)
        assert post.view_count == 2

    def test_detail_includes_all_approved_comments(self, client, db, user, category):
        post = make_post(db, user, category)
        for i in range(4):
            make_comment(db, post, user, f"comment {i}")
        hidden = make_comment(db, post, user, "hidden")
        hidden.is_approved = False
        db.commit()

        detail = client.get(f"{API}/posts/{post.id}").json()["data"]["post"]
        assert detail["comments_count"] == 4
        assert [c["text"] for c in detail["comments"]] == [f"comment {i}" for i in range(4)]

    def test_detail_author_includes_bio(self, client, db, user, category):
        user.bio = "Writes about Python"
        db.commit()
        post = make_post(db, user, category)

        detail = client.get(f"{API}/posts/{post.id}").json()["data"]["post"]
        assert detail["author"] == {
            "id": user.id, "name": "John Doe", "avatar": "", "bio": "Writes about Python",
        }
        listed = client.get(f"{API}/posts").json()["data"]["posts"][0]
        assert "bio" not in listed["author"]

    def test_missing_post(self, client):
        response = client.get(f"{API}/posts/999")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Post not found"}

    def test_draft_visible_to_author_and_admin_only(self, client, db, user, other_user, admin, category):
        draft = make_post(db, user, category, status=PostStatus.DRAFT)
        url = f"{API}/posts/{draft.id}"

        assert client.get(url).status_code == 404
        assert client.get(url, headers=auth_headers(other_user)).status_code == 404
        assert client.get(url, headers=auth_headers(user)).status_code == 200
        assert client.get(url, headers=auth_headers(admin)).status_code == 200


class TestCreatePost:
    def test_create_by_category_name(self, client, user, category):
        response = client.post(f"{API}/posts", headers=auth_headers(user), json={
            "title": "Hello world",
            "content": "This is my very first post",
            "category": "Technology",
            "tags": [" python ", "", "fastapi"],
        })
        assert response.status_code == 201
        post = response.json()["data"]["post"]
        assert post["author"]["id"] == user.id
        assert post["category"]["id"] == category.id
        assert post["tags"] == ["python", "fastapi"]
        assert post["status"] == "published"
        assert post["view_count"] == 0

    def test_create_requires_authentication(self, client, category):
        response = client.post(f"{API}/posts", json={
            "title": "Hello world", "content": "This is my very first post", "category": category.id,
        })
        assert response.status_code == 401

    def test_non_ascii_digit_category_is_not_found(self, client, user, category):
        response = client.post(f"{API}/posts", headers=auth_headers(user), json={
            "title": "Hello world", "content": "This is my very first post", "category": "²",
        })
        assert response.status_code == 400
        assert response.json()["message"] == "Category not found"

    def test_unknown_category(self, client, db, user):
        response = client.post(f"{API}/posts", headers=auth_headers(user), json={
            "title": "Hello world", "content": "This is my very first post", "category": "Nope",
        })
        assert response.status_code == 400
        assert response.json()["message"] == "Category not found"
        assert db.query(Post).count() == 0

    def test_validation_errors(self, client, user, category):
        response = client.post(f"{API}/posts", headers=auth_headers(user), json={
            "title": "Hi", "content": "short", "category": category.id,
        })
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert {error["field"] for error in body["errors"]} == {"title", "content"}


class TestUpdateDeletePost:
    def test_author_can_update(self, client, user, db, category):
        post = make_post(db, user, category)
        response = client.put(
            f"{API}/posts/{post.id}", headers=auth_headers(user), json={"title": "A better title"}
        )
        assert response.status_code == 200
        updated = response.json()["data"]["post"]
        assert updated["title"] == "A better title"
        assert updated["content"] == "Some content long enough"

    def test_non_author_is_forbidden_and_post_unchanged(self, client, db, user, other_user, category):
        post = make_post(db, user, category)
        response = client.put(
            f"{API}/posts/{post.id}", headers=auth_headers(other_user), json={"title": "Hijacked title"}
        )
        assert response.status_code == 403
        assert response.json()["success"] is False
        db.refresh(post)
        assert post.title == "A first post"

    def test_admin_can_update_any_post(self, client, db, user, admin, category):
        post = make_post(db, user, category)
        response = client.put(
            f"{API}/posts/{post.id}", headers=auth_headers(admin), json={"status": "archived"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["post"]["status"] == "archived"

    def test_update_missing_post(self, client, user):
        response = client.put(f"{API}/posts/999", headers=auth_headers(user), json={"title": "Whatever"})
        assert response.status_code == 404

    def test_delete_removes_comments(self, client, db, user, other_user, category):
        post = make_post(db, user, category)
        parent = make_comment(db, post, other_user)
        make_comment(db, post, user, "reply", parent=parent)
        post_id = post.id

        assert client.delete(f"{API}/posts/{post_id}", headers=auth_headers(other_user)).status_code == 403

        response = client.delete(f"{API}/posts/{post_id}", headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["message"] == "Post deleted successfully"
        db.expire_all()
        assert db.get(Post, post_id) is None
        assert db.query(Comment).filter(Comment.post_id == post_id).count() == 0


class TestTrendingAndCategory:
    def test_trending(self, client, db, user, category):
        quiet = make_post(db, user, category, title="Quiet post")
        busy = make_post(db, user, category, title="Busy post")
        for i in range(3):
            make_comment(db, busy, user, f"comment {i}")

        response = client.get(f"{API}/posts/trending")
        assert response.status_code == 200
        posts = response.json()["data"]["posts"]
        assert [(p["id"], p["comments_count"]) for p in posts] == [(busy.id, 3), (quiet.id, 0)]

    def test_posts_by_category(self, client, db, user, category):
        post = make_post(db, user, category)
        make_post(db, user, category, title="Unpublished", status=PostStatus.DRAFT)

        response = client.get(f"{API}/posts/category/{category.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["category"]["name"] == "Technology"
        assert [p["id"] for p in data["posts"]] == [post.id]

    def test_posts_by_missing_category(self, client):
        response = client.get(f"{API}/posts/category/999")
        assert response.status_code == 404
        assert response.json()["message"] == "Category not found"
