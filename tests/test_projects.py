# =============================================================================
# tests/test_projects.py - Project Endpoint Tests
# =============================================================================
# Exercises /api/projects end to end against SQLite:
# - create/get/list with aggregated counts
# - like/unlike idempotency
# - ownership-scoped update and delete
#
# Run with: pytest tests/test_projects.py -v
# =============================================================================

from tests.conftest import ALICE, auth


# =============================================================================
# Create
# =============================================================================

class TestCreateProject:
    """Tests for POST /api/projects."""

    def test_requires_auth(self, client, verifier):
        """No Authorization header -> 401 and the verifier is never called."""
        response = client.post("/api/projects", json={"title": "X"})

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"
        assert verifier.calls == []

    def test_invalid_token(self, client):
        response = client.post("/api/projects", json={"title": "X"}, headers=auth("forged"))

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid auth token"

    def test_create_returns_row(self, client):
        response = client.post(
            "/api/projects",
            json={"title": "X", "github": "https://github.com/a/x", "tags": ["py", "web"]},
            headers=auth("alice-token"),
        )

        assert response.status_code == 200
        body = response.json()
        assert isinstance(body["id"], int)
        assert body["title"] == "X"
        assert body["user_id"] == ALICE
        assert body["tags"] == ["py", "web"]
        assert body["github"] == "https://github.com/a/x"

    def test_title_required(self, client):
        response = client.post("/api/projects", json={"short_desc": "no title"}, headers=auth("alice-token"))

        assert response.status_code == 400
        assert response.json()["message"] == "Title required"

    def test_empty_body_is_missing_title(self, client):
        response = client.post("/api/projects", headers=auth("alice-token"))

        assert response.status_code == 400
        assert response.json()["message"] == "Title required"

    def test_tags_default_to_empty_list(self, client, create_project):
        project = create_project(title="No tags")
        assert project["tags"] == []

    def test_non_list_tags_become_empty(self, client, create_project):
        project = create_project(tags="python")
        assert project["tags"] == []

    def test_fresh_project_has_zero_stats(self, client, create_project):
        """Create then Get-by-id: likes=0, comments_count=0, liked=false."""
        project = create_project()

        response = client.get(f"/api/projects/{project['id']}", headers=auth("alice-token"))

        assert response.status_code == 200
        body = response.json()
        assert body["likes"] == 0
        assert body["comments_count"] == 0
        assert body["liked"] is False


# =============================================================================
# Read
# =============================================================================

class TestGetProject:
    """Tests for GET /api/projects/{id}."""

    def test_not_found(self, client):
        response = client.get("/api/projects/9999")

        assert response.status_code == 404
        body = response.json()
        assert body["message"] == "Project not found"
        assert "title" not in body

    def test_non_integer_id_is_bad_request(self, client):
        response = client.get("/api/projects/abc")
        assert response.status_code == 400

    def test_anonymous_viewer_never_liked(self, client, create_project):
        project = create_project()
        client.post(f"/api/projects/{project['id']}/like", headers=auth("alice-token"))

        body = client.get(f"/api/projects/{project['id']}").json()

        assert body["likes"] == 1
        assert body["liked"] is False

    def test_invalid_token_is_treated_as_anonymous(self, client, create_project):
        project = create_project()
        client.post(f"/api/projects/{project['id']}/like", headers=auth("alice-token"))

        response = client.get(f"/api/projects/{project['id']}", headers=auth("forged"))

        assert response.status_code == 200
        assert response.json()["liked"] is False

    def test_liked_for_viewer_who_liked(self, client, create_project):
        project = create_project()
        client.post(f"/api/projects/{project['id']}/like", headers=auth("bob-token"))

        as_bob = client.get(f"/api/projects/{project['id']}", headers=auth("bob-token")).json()
        as_alice = client.get(f"/api/projects/{project['id']}", headers=auth("alice-token")).json()

        assert as_bob["liked"] is True
        assert as_alice["liked"] is False

    def test_counts_comments(self, client, create_project):
        project = create_project()
        for text in ("first", "second"):
            client.post(f"/api/comments/{project['id']}", json={"text": text}, headers=auth("bob-token"))

        body = client.get(f"/api/projects/{project['id']}").json()
        assert body["comments_count"] == 2


class TestListProjects:
    """Tests for GET /api/projects and GET /api/projects/me."""

    def test_newest_first(self, client, create_project):
        first = create_project(title="First")
        second = create_project(title="Second")

        ids = [p["id"] for p in client.get("/api/projects").json()]

        assert ids == [second["id"], first["id"]]

    def test_liked_per_viewer(self, client, create_project):
        liked = create_project(title="Liked")
        other = create_project(title="Other")
        client.post(f"/api/projects/{liked['id']}/like", headers=auth("bob-token"))

        as_bob = {p["id"]: p for p in client.get("/api/projects", headers=auth("bob-token")).json()}
        anonymous = client.get("/api/projects").json()

        assert as_bob[liked["id"]]["liked"] is True
        assert as_bob[other["id"]]["liked"] is False
        assert all(p["liked"] is False for p in anonymous)

    def test_counts_not_multiplied_by_join(self, client, create_project):
        """Two likes and three comments must stay 2 and 3, not 6 and 6."""
        project = create_project()
        client.post(f"/api/projects/{project['id']}/like", headers=auth("alice-token"))
        client.post(f"/api/projects/{project['id']}/like", headers=auth("bob-token"))
        for text in ("a", "b", "c"):
            client.post(f"/api/comments/{project['id']}", json={"text": text}, headers=auth("alice-token"))

        [listed] = client.get("/api/projects").json()

        assert listed["likes"] == 2
        assert listed["comments_count"] == 3

    def test_liked_not_confused_by_other_votes(self, client, create_project):
        """Alice's liked-state ignores Bob's vote on the same project."""
        project = create_project()
        client.post(f"/api/projects/{project['id']}/like", headers=auth("bob-token"))

        [listed] = client.get("/api/projects", headers=auth("alice-token")).json()

        assert listed["likes"] == 1
        assert listed["liked"] is False

    def test_mine_requires_auth(self, client):
        assert client.get("/api/projects/me").status_code == 401

    def test_mine_only_returns_own(self, client, create_project):
        mine = create_project("alice-token", title="Mine")
        create_project("bob-token", title="Theirs")

        response = client.get("/api/projects/me", headers=auth("alice-token"))

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [mine["id"]]
        assert response.json()[0]["user_id"] == ALICE

    def test_empty_list(self, client):
        response = client.get("/api/projects")
        assert response.status_code == 200
        assert response.json() == []


# =============================================================================
# Likes
# =============================================================================

class TestLikes:
    """Tests for POST/DELETE /api/projects/{id}/like."""

    def test_like_requires_auth(self, client, create_project):
        project = create_project()
        assert client.post(f"/api/projects/{project['id']}/like").status_code == 401
        assert client.delete(f"/api/projects/{project['id']}/like").status_code == 401

    def test_like_is_idempotent(self, client, create_project):
        project = create_project()
        url = f"/api/projects/{project['id']}/like"

        first = client.post(url, headers=auth("alice-token"))
        second = client.post(url, headers=auth("alice-token"))

        assert first.json() == {"likes": 1, "liked": True}
        assert second.json() == {"likes": 1, "liked": True}

    def test_like_missing_project_not_found(self, client, create_project):
        create_project()

        response = client.post("/api/projects/9999/like", headers=auth("alice-token"))

        assert response.status_code == 404
        assert response.json()["code"] == "PROJECT_NOT_FOUND"
        # No vote was stored anywhere
        listed = client.get("/api/projects").json()
        assert [p["likes"] for p in listed] == [0]

    def test_unlike(self, client, create_project):
        project = create_project()
        url = f"/api/projects/{project['id']}/like"
        client.post(url, headers=auth("alice-token"))
        client.post(url, headers=auth("bob-token"))

        response = client.delete(url, headers=auth("alice-token"))

        assert response.status_code == 200
        assert response.json() == {"likes": 1, "liked": False}

    def test_unlike_without_like_is_noop(self, client, create_project):
        project = create_project()
        url = f"/api/projects/{project['id']}/like"
        client.post(url, headers=auth("bob-token"))

        response = client.delete(url, headers=auth("alice-token"))

        assert response.status_code == 200
        assert response.json() == {"likes": 1, "liked": False}


# =============================================================================
# Update
# =============================================================================

class TestUpdateProject:
    """Tests for PATCH /api/projects/{id}."""

    def test_owner_can_update(self, client, create_project):
        project = create_project(full_desc="old", tags=["old"])

        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"title": "New", "short_desc": "Short", "tags": ["new"]},
            headers=auth("alice-token"),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "New"
        assert body["tags"] == ["new"]
        # Full replacement: fields not sent are cleared
        assert body["full_desc"] == ""
        assert body["user_id"] == ALICE

    def test_blank_title_rejected(self, client, create_project):
        project = create_project()

        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"title": "   ", "short_desc": "Short"},
            headers=auth("alice-token"),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Title required"

    def test_blank_short_desc_rejected(self, client, create_project):
        project = create_project()

        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"title": "Title"},
            headers=auth("alice-token"),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Short description required"

    def test_non_list_tags_coerced(self, client, create_project):
        project = create_project(tags=["keep"])

        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"title": "T", "short_desc": "S", "tags": "not-a-list"},
            headers=auth("alice-token"),
        )

        assert response.status_code == 200
        assert response.json()["tags"] == []

    def test_non_owner_forbidden(self, client, create_project):
        project = create_project("alice-token")

        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"title": "Hijacked", "short_desc": "S"},
            headers=auth("bob-token"),
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Not allowed to edit"
        assert client.get(f"/api/projects/{project['id']}").json()["title"] == "Pixel Garden"

    def test_missing_project_forbidden(self, client):
        response = client.patch(
            "/api/projects/9999",
            json={"title": "T", "short_desc": "S"},
            headers=auth("alice-token"),
        )
        assert response.status_code == 403

    def test_requires_auth(self, client, create_project):
        project = create_project()
        response = client.patch(f"/api/projects/{project['id']}", json={"title": "T", "short_desc": "S"})
        assert response.status_code == 401


# =============================================================================
# Delete
# =============================================================================

class TestDeleteProject:
    """Tests for DELETE /api/projects/{id}."""

    def test_owner_deletes_with_votes_and_comments(self, client, create_project):
        project = create_project()
        pid = project["id"]
        client.post(f"/api/projects/{pid}/like", headers=auth("bob-token"))
        client.post(f"/api/comments/{pid}", json={"text": "nice"}, headers=auth("bob-token"))

        response = client.delete(f"/api/projects/{pid}", headers=auth("alice-token"))

        assert response.status_code == 200
        assert response.json() == {"message": "Project deleted"}
        assert client.get(f"/api/projects/{pid}").status_code == 404
        assert client.get(f"/api/comments/{pid}").json() == []

    def test_non_owner_forbidden_and_nothing_removed(self, client, create_project):
        project = create_project("alice-token")
        pid = project["id"]
        client.post(f"/api/projects/{pid}/like", headers=auth("alice-token"))
        client.post(f"/api/comments/{pid}", json={"text": "mine"}, headers=auth("alice-token"))

        response = client.delete(f"/api/projects/{pid}", headers=auth("bob-token"))

        assert response.status_code == 403
        assert response.json()["message"] == "Not allowed to delete"
        body = client.get(f"/api/projects/{pid}").json()
        assert body["likes"] == 1
        assert body["comments_count"] == 1

    def test_missing_project_forbidden(self, client):
        response = client.delete("/api/projects/9999", headers=auth("alice-token"))
        assert response.status_code == 403

    def test_other_projects_untouched(self, client, create_project):
        doomed = create_project(title="Doomed")
        kept = create_project(title="Kept")
        client.post(f"/api/projects/{kept['id']}/like", headers=auth("bob-token"))

        client.delete(f"/api/projects/{doomed['id']}", headers=auth("alice-token"))

        body = client.get(f"/api/projects/{kept['id']}").json()
        assert body["likes"] == 1
