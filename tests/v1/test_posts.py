# tests/v1/test_posts.py
"""Public post endpoints: CRUD, listing, search and ownership."""

from fastapi import status

from quillpost.models import Comment, Post


def _create(client, headers, **overrides):
    payload = {"title": "A", "content": "B", "is_secret": False}
    payload.update(overrides)
    return client.post("/posts", json=payload, headers=headers)


class TestCreatePost:
    def test_create_public_post(self, client, alice, alice_headers):
        response = _create(client, alice_headers, title="  Hello  ", content="World")

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["title"] == "Hello"
        assert body["content"] == "World"
        assert body["author_id"] == alice.id
        assert body["author_username"] == "alice"
        assert body["is_secret"] is False
        assert body["has_access"] is True
        assert body["created_at"] is not None

    def test_create_requires_identity(self, client):
        response = _create(client, {})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_blank_title_is_rejected(self, client, alice_headers):
        response = _create(client, alice_headers, title="   ")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_title_too_long(self, client, alice_headers):
        response = _create(client, alice_headers, title="x" * 101)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Title cannot exceed 100 characters"

    def test_length_limits_apply_after_trimming(self, client, alice_headers):
        response = _create(
            client,
            alice_headers,
            title="  " + "t" * 100 + "  ",
            content=" " + "c" * 2000 + " ",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["title"] == "t" * 100

    def test_content_too_long(self, client, alice_headers):
        response = _create(client, alice_headers, content="x" * 2001)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestReadPosts:
    def test_anonymous_reads_public_post(self, client, alice, make_post):
        post = make_post(alice, "A", "B")

        response = client.get(f"/posts/{post.id}")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["content"] == "B"
        assert body["has_access"] is True

    def test_missing_post(self, client):
        response = client.get("/posts/4242")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "NOT_FOUND"

    def test_list_is_newest_first(self, client, alice, make_post):
        make_post(alice, "first")
        make_post(alice, "second")
        make_post(alice, "third")

        response = client.get("/posts")

        assert response.status_code == status.HTTP_200_OK
        assert [p["title"] for p in response.json()] == ["third", "second", "first"]

    def test_public_posts_never_masked(self, client, alice, bob_headers, make_post):
        make_post(alice, "open", "plain text")

        for headers in ({}, bob_headers):
            (post,) = client.get("/posts", headers=headers).json()
            assert post["content"] == "plain text"
            assert post["has_access"] is True


class TestSearch:
    def test_search_matches_title_content_and_author(self, client, alice, bob, make_post):
        make_post(alice, "Gardening tips", "Tomatoes need sun")
        make_post(bob, "Cooking", "Tomato soup recipe")
        make_post(bob, "Travel", "Lisbon in spring")

        by_content = client.get("/posts/search", params={"q": "tomato"}).json()
        by_author = client.get("/posts/search", params={"q": "bob"}).json()

        assert {p["title"] for p in by_content} == {"Gardening tips", "Cooking"}
        assert {p["title"] for p in by_author} == {"Cooking", "Travel"}

    def test_all_keywords_must_match(self, client, alice, make_post):
        make_post(alice, "Tomato soup", "warm")
        make_post(alice, "Tomato salad", "cold")

        results = client.get("/posts/search", params={"q": "tomato  cold"}).json()

        assert [p["title"] for p in results] == ["Tomato salad"]

    def test_search_query_parameter_on_list(self, client, alice, make_post):
        make_post(alice, "Python tricks", "decorators")
        make_post(alice, "Rust notes", "lifetimes")

        results = client.get("/posts", params={"search": "python"}).json()

        assert [p["title"] for p in results] == ["Python tricks"]

    def test_blank_search_parameter_lists_everything(self, client, alice, make_post):
        make_post(alice, "Python tricks", "decorators")
        make_post(alice, "Rust notes", "lifetimes")

        for value in ("", "   "):
            response = client.get("/posts", params={"search": value})

            assert response.status_code == status.HTTP_200_OK
            assert [p["title"] for p in response.json()] == ["Rust notes", "Python tricks"]

    def test_search_wildcards_are_literal(self, client, alice, make_post):
        make_post(alice, "100% pure", "juice")
        make_post(alice, "1000 reasons", "water")

        results = client.get("/posts/search", params={"q": "0%"}).json()

        assert [p["title"] for p in results] == ["100% pure"]

    def test_short_query_is_rejected(self, client):
        response = client.get("/posts/search", params={"q": " a "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUpdateAndDelete:
    def test_author_can_update(self, client, alice, alice_headers, make_post):
        post = make_post(alice, "old", "old body")

        response = client.put(
            f"/posts/{post.id}",
            json={"title": "new", "content": "new body", "is_secret": False},
            headers=alice_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "new"
        assert response.json()["content"] == "new body"

    def test_other_user_cannot_update(self, client, alice, bob_headers, make_post):
        post = make_post(alice, "mine", "hands off")

        response = client.put(
            f"/posts/{post.id}",
            json={"title": "hijack", "content": "x", "is_secret": False},
            headers=bob_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "You can only update your own content"

    def test_other_user_cannot_delete(self, client, alice, bob_headers, make_post):
        post = make_post(alice)

        response = client.delete(f"/posts/{post.id}", headers=bob_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert client.get(f"/posts/{post.id}").status_code == status.HTTP_200_OK

    def test_delete_removes_post_and_comments(
        self, client, db_session, alice, bob, alice_headers, make_post
    ):
        post = make_post(alice)
        db_session.add(Comment(content="nice", post_id=post.id, author_id=bob.id))
        db_session.commit()
        post_id = post.id

        response = client.delete(f"/posts/{post_id}", headers=alice_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        db_session.expire_all()
        assert db_session.get(Post, post_id) is None
        assert db_session.query(Comment).filter_by(post_id=post_id).count() == 0

    def test_update_missing_post(self, client, alice_headers):
        response = client.put(
            "/posts/999",
            json={"title": "t", "content": "c", "is_secret": False},
            headers=alice_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
