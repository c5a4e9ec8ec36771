"""
MyGram Backend - API Endpoint Tests
====================================

What:  End-to-end HTTP tests through the FastAPI app (HTTPX + ASGITransport)
       with an in-memory SQLite database.

What we test:
    ✅ Register / login / update / delete account status codes and bodies
    ✅ Authentication failures: missing token 400, invalid token 401
    ✅ Ownership: 403 for someone else's content, 404 for unknown ids
    ✅ Validation failures answer 400 with the standard error body
    ✅ Listings embed owner summaries (and photos for comments)
    ✅ Health endpoint and request id header
    ✅ Out-of-range ids, long titles and deleted-account tokens never reach 500
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from mygram.models import Photo, User

PHOTO = {"title": "Sunset", "caption": "At the beach", "photo_url": "https://img.example.com/1.jpg"}


async def _count_users(app) -> int:
    async with app.state.database.session_factory() as session:
        return (await session.execute(select(func.count()).select_from(User))).scalar_one()


class TestUsers:
    @pytest.mark.asyncio
    async def test_register_returns_profile_without_password(self, client):
        response = await client.post(
            "/users/register",
            json={"username": "alice", "email": "alice@example.com", "password": "secret123", "age": 20},
        )

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"id", "username", "email", "age"}
        assert body["username"] == "alice"

    @pytest.mark.asyncio
    async def test_duplicate_register_answers_209_without_new_row(self, app, client, auth_headers):
        await auth_headers("alice")

        response = await client.post(
            "/users/register",
            json={"username": "alice", "email": "new@example.com", "password": "secret123", "age": 20},
        )

        assert response.status_code == 209
        assert "already registered" in response.json()["message"]
        assert await _count_users(app) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "kid", "email": "kid@example.com", "password": "secret123", "age": 8},
            {"username": "short", "email": "short@example.com", "password": "12345", "age": 20},
            {"username": "bad", "email": "not-an-email", "password": "secret123", "age": 20},
            {"username": "", "email": "empty@example.com", "password": "secret123", "age": 20},
        ],
    )
    async def test_register_validation_errors(self, client, payload):
        response = await client.post("/users/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_login_failures_are_indistinguishable(self, client, auth_headers):
        await auth_headers("alice")

        wrong_password = await client.post(
            "/users/login", json={"email": "alice@example.com", "password": "wrong-pass"}
        )
        unknown_email = await client.post(
            "/users/login", json={"email": "nobody@example.com", "password": "secret123"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json()["error"] == unknown_email.json()["error"] == "invalid_credentials"
        assert wrong_password.json()["message"] == unknown_email.json()["message"]

    @pytest.mark.asyncio
    async def test_update_profile(self, client, auth_headers):
        headers = await auth_headers("alice")

        response = await client.put("/users", json={"username": "alicia"}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "alicia"
        assert body["email"] == "alice@example.com"
        assert "updated_at" in body
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_update_to_taken_email_answers_200_message(self, client, auth_headers):
        headers = await auth_headers("alice")
        await auth_headers("bob")

        response = await client.put("/users", json={"email": "bob@example.com"}, headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "The email or username is already registered."}

    @pytest.mark.asyncio
    async def test_delete_account_keeps_content_without_owner(self, app, client, auth_headers):
        alice = await auth_headers("alice")
        bob = await auth_headers("bob")
        await client.post("/photos", json=PHOTO, headers=alice)

        response = await client.delete("/users", headers=alice)
        assert response.status_code == 200
        assert response.json() == {"message": "Your account has been successfully deleted"}

        photos = (await client.get("/photos", headers=bob)).json()
        assert len(photos) == 1
        assert photos[0]["user_id"] is None
        assert photos[0]["user"] is None
        assert await _count_users(app) == 1

    @pytest.mark.asyncio
    async def test_deleted_account_token_cannot_update_profile(self, client, auth_headers):
        headers = await auth_headers("alice")
        await client.delete("/users", headers=headers)

        response = await client.put("/users", json={"username": "ghost"}, headers=headers)

        assert response.status_code == 404


class TestAuthentication:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer"}])
    async def test_missing_token_is_400(self, client, headers):
        response = await client.get("/photos", headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "missing_token"

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self, client):
        response = await client.get("/photos", headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_token"

    @pytest.mark.asyncio
    async def test_expired_token_is_401(self, app, client):
        token = app.state.token_service.issue(1, now=datetime.now(timezone.utc) - timedelta(hours=25))
        response = await client.get("/photos", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"] == "token_expired"


class TestPhotos:
    @pytest.mark.asyncio
    async def test_ownership_flow(self, client, auth_headers):
        alice = await auth_headers("alice")
        bob = await auth_headers("bob")

        created = await client.post("/photos", json=PHOTO, headers=alice)
        assert created.status_code == 201
        photo_id = created.json()["id"]

        forbidden_update = await client.put(f"/photos/{photo_id}", json={"title": "Mine"}, headers=bob)
        assert forbidden_update.status_code == 403
        assert forbidden_update.json()["error"] == "forbidden"

        forbidden_delete = await client.delete(f"/photos/{photo_id}", headers=bob)
        assert forbidden_delete.status_code == 403

        deleted = await client.delete(f"/photos/{photo_id}", headers=alice)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Your photo has been successfully deleted"}

        again = await client.delete(f"/photos/{photo_id}", headers=alice)
        assert again.status_code == 404
        assert again.json()["message"] == f"Photo with ID {photo_id} is not found."

    @pytest.mark.asyncio
    async def test_partial_update(self, client, auth_headers):
        alice = await auth_headers("alice")
        photo_id = (await client.post("/photos", json=PHOTO, headers=alice)).json()["id"]

        response = await client.put(
            f"/photos/{photo_id}", json={"title": "", "caption": "new caption"}, headers=alice
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Sunset"
        assert body["caption"] == "new caption"
        assert body["photo_url"] == PHOTO["photo_url"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "photo_url": "https://img.example.com/1.jpg"},
            {"title": "t", "photo_url": "not a url"},
            {"title": "t"},
        ],
    )
    async def test_create_validation_errors(self, client, auth_headers, payload):
        alice = await auth_headers("alice")

        response = await client.post("/photos", json=payload, headers=alice)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_non_integer_id_is_400(self, client, auth_headers):
        alice = await auth_headers("alice")

        response = await client.delete("/photos/abc", headers=alice)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_embeds_owner(self, client, auth_headers):
        alice = await auth_headers("alice")
        await client.post("/photos", json=PHOTO, headers=alice)

        response = await client.get("/photos", headers=alice)

        assert response.status_code == 200
        [photo] = response.json()
        assert photo["user"]["username"] == "alice"
        assert photo["user"]["email"] == "alice@example.com"


class TestComments:
    @pytest.mark.asyncio
    async def test_comment_on_unknown_photo_is_404(self, client, auth_headers):
        alice = await auth_headers("alice")

        response = await client.post("/comments", json={"message": "hi", "photo_id": 99}, headers=alice)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_comment_lifecycle(self, client, auth_headers):
        alice = await auth_headers("alice")
        bob = await auth_headers("bob")
        photo_id = (await client.post("/photos", json=PHOTO, headers=alice)).json()["id"]

        created = await client.post(
            "/comments", json={"message": "Nice!", "photo_id": photo_id}, headers=bob
        )
        assert created.status_code == 201
        comment_id = created.json()["id"]

        listed = (await client.get("/comments", headers=alice)).json()
        assert listed[0]["user"]["username"] == "bob"
        assert listed[0]["photo"]["id"] == photo_id

        forbidden = await client.put(f"/comments/{comment_id}", json={"message": "x"}, headers=alice)
        assert forbidden.status_code == 403

        edited = await client.put(f"/comments/{comment_id}", json={"message": "Edited"}, headers=bob)
        assert edited.status_code == 200
        assert edited.json()["message"] == "Edited"

        deleted = await client.delete(f"/comments/{comment_id}", headers=bob)
        assert deleted.json() == {"message": "Your comment has been successfully deleted"}

    @pytest.mark.asyncio
    async def test_deleting_photo_removes_its_comments(self, client, auth_headers):
        alice = await auth_headers("alice")
        photo_id = (await client.post("/photos", json=PHOTO, headers=alice)).json()["id"]
        await client.post("/comments", json={"message": "mine", "photo_id": photo_id}, headers=alice)

        await client.delete(f"/photos/{photo_id}", headers=alice)

        assert (await client.get("/comments", headers=alice)).json() == []


class TestSocialMedias:
    @pytest.mark.asyncio
    async def test_social_media_lifecycle(self, client, auth_headers):
        alice = await auth_headers("alice")
        bob = await auth_headers("bob")

        created = await client.post(
            "/socialmedias",
            json={"name": "instagram", "social_media_url": "https://instagram.com/alice"},
            headers=alice,
        )
        assert created.status_code == 201
        link_id = created.json()["id"]

        listed = (await client.get("/socialmedias", headers=bob)).json()
        assert listed[0]["user"]["username"] == "alice"

        forbidden = await client.delete(f"/socialmedias/{link_id}", headers=bob)
        assert forbidden.status_code == 403

        updated = await client.put(
            f"/socialmedias/{link_id}",
            json={"name": "x", "social_media_url": "https://x.com/alice"},
            headers=alice,
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "x"

        deleted = await client.delete(f"/socialmedias/{link_id}", headers=alice)
        assert deleted.json() == {"message": "Your social media has been successfully deleted"}

    @pytest.mark.asyncio
    async def test_update_requires_both_fields(self, client, auth_headers):
        alice = await auth_headers("alice")
        link_id = (
            await client.post(
                "/socialmedias",
                json={"name": "instagram", "social_media_url": "https://instagram.com/alice"},
                headers=alice,
            )
        ).json()["id"]

        response = await client.put(f"/socialmedias/{link_id}", json={"name": "x"}, headers=alice)

        assert response.status_code == 400


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_reports_database(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestEdgeInputs:
    @pytest.mark.asyncio
    async def test_out_of_range_ids_are_404(self, client, auth_headers):
        alice = await auth_headers("alice")
        huge = 2**63

        assert (await client.delete(f"/photos/{huge}", headers=alice)).status_code == 404
        assert (await client.put(f"/comments/{huge}", json={"message": "x"}, headers=alice)).status_code == 404
        assert (
            await client.put(
                f"/socialmedias/{huge}",
                json={"name": "x", "social_media_url": "https://x.com/a"},
                headers=alice,
            )
        ).status_code == 404

        response = await client.post("/comments", json={"message": "hi", "photo_id": huge}, headers=alice)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_deleted_account_token_cannot_create_content(self, app, client, auth_headers):
        alice = await auth_headers("alice")
        await client.delete("/users", headers=alice)

        response = await client.post("/photos", json=PHOTO, headers=alice)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        async with app.state.database.session_factory() as session:
            count = (await session.execute(select(func.count()).select_from(Photo))).scalar_one()
        assert count == 0

    @pytest.mark.asyncio
    async def test_long_title_and_username_are_accepted(self, client, auth_headers):
        username = "u" * 300
        headers = await auth_headers(username, email="long@example.com")
        payload = dict(PHOTO, title="t" * 300)

        created = await client.post("/photos", json=payload, headers=headers)

        assert created.status_code == 201
        assert created.json()["title"] == "t" * 300
        [listed] = (await client.get("/photos", headers=headers)).json()
        assert listed["user"]["username"] == username

    def test_free_text_columns_are_unbounded(self):
        for column in (Photo.__table__.c.title, User.__table__.c.username, User.__table__.c.email):
            assert getattr(column.type, "length", None) is None

    @pytest.mark.asyncio
    async def test_create_then_list_round_trip(self, client, auth_headers):
        alice = await auth_headers("alice")
        photo = (await client.post("/photos", json=PHOTO, headers=alice)).json()
        comment_in = {"message": "Great light", "photo_id": photo["id"]}
        link_in = {"name": "github", "social_media_url": "https://github.com/alice"}
        await client.post("/comments", json=comment_in, headers=alice)
        await client.post("/socialmedias", json=link_in, headers=alice)

        [listed_photo] = (await client.get("/photos", headers=alice)).json()
        [listed_comment] = (await client.get("/comments", headers=alice)).json()
        [listed_link] = (await client.get("/socialmedias", headers=alice)).json()

        assert {k: listed_photo[k] for k in PHOTO} == PHOTO
        assert {k: listed_comment[k] for k in comment_in} == comment_in
        assert {k: listed_link[k] for k in link_in} == link_in
