"""
CRUD endpoint tests against the in-memory catalog.
"""

import pytest

from conftest import find_character, find_show_id


@pytest.fixture
def farscape_api(farscape_db, api_client):
    """API client with Farscape loaded."""
    return api_client


def _premiere_id(client, show_id):
    episodes = client.get(f"/shows/{show_id}/seasons/1/episodes").json()["data"]
    return episodes[0]["id"]


class TestShowEndpoints:
    """Flow 1: Create, read, update and delete a show"""

    def test_create_and_get(self, api_client):
        response = api_client.post("/shows", json={"title": "Blake's 7", "year": 1978})

        assert response.status_code == 201
        show = response.json()
        assert show["title"] == "Blake's 7"
        assert show["description"] is None

        fetched = api_client.get(f"/shows/{show['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["year"] == 1978

    def test_create_existing_is_conflict(self, api_client):
        api_client.post("/shows", json={"title": "Blake's 7", "year": 1978})

        response = api_client.post("/shows", json={"title": "Blake's 7", "year": 1978})

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_put_keeps_omitted_fields(self, api_client):
        show = api_client.post(
            "/shows", json={"title": "Blake's 7", "year": 1978, "description": "Rebels"}
        ).json()

        response = api_client.put(f"/shows/{show['id']}", json={"year": 1979})

        assert response.status_code == 200
        assert response.json()["year"] == 1979
        assert response.json()["description"] == "Rebels"

    def test_put_null_clears_field(self, api_client):
        show = api_client.post(
            "/shows", json={"title": "Blake's 7", "year": 1978, "description": "Rebels"}
        ).json()

        response = api_client.put(f"/shows/{show['id']}", json={"description": None})

        assert response.json()["description"] is None

    def test_put_empty_body_rejected(self, api_client):
        show = api_client.post("/shows", json={"title": "Blake's 7"}).json()

        response = api_client.put(f"/shows/{show['id']}", json={})

        assert response.status_code == 422
        assert response.json() == {"error": "validation_error", "message": "No fields to update"}

    def test_delete(self, api_client):
        show = api_client.post("/shows", json={"title": "Blake's 7"}).json()

        assert api_client.delete(f"/shows/{show['id']}").status_code == 204
        assert api_client.get(f"/shows/{show['id']}").status_code == 404
        assert api_client.delete(f"/shows/{show['id']}").status_code == 404

    def test_missing_show_body(self, api_client):
        response = api_client.get("/shows/999")

        assert response.status_code == 404
        assert response.json() == {
            "error": "not_found",
            "message": "Show 999 not found",
            "details": {"resource": "Show", "id": 999},
        }

    def test_unknown_body_field_rejected(self, api_client):
        response = api_client.post("/shows", json={"title": "Blake's 7", "network": "BBC"})

        assert response.status_code == 422


class TestPagination:
    """Flow 2: Paginated listings"""

    def test_pagination_meta(self, farscape_api, farscape_db):
        show_id = find_show_id(farscape_db, "Farscape")

        body = farscape_api.get(f"/shows/{show_id}/episodes?limit=5&offset=5").json()

        assert len(body["data"]) == 5
        assert body["pagination"] == {
            "limit": 5,
            "offset": 5,
            "total_items": 12,
            "has_next": True,
            "has_prev": True,
        }

    def test_last_page(self, farscape_api, farscape_db):
        show_id = find_show_id(farscape_db, "Farscape")

        body = farscape_api.get(f"/shows/{show_id}/episodes?limit=5&offset=10").json()

        assert len(body["data"]) == 2
        assert not body["pagination"]["has_next"]

    def test_limit_bounds(self, api_client):
        assert api_client.get("/shows?limit=0").status_code == 422
        assert api_client.get("/shows?limit=1001").status_code == 422

    def test_filter_by_title(self, farscape_api):
        body = farscape_api.get("/shows", params={"title": "Farscape"}).json()

        assert body["pagination"]["total_items"] == 1
        assert body["data"][0]["year"] == 1999


class TestSeasonsAndEpisodes:
    """Flow 3: Nested season and episode routes"""

    def test_create_season(self, api_client):
        show = api_client.post("/shows", json={"title": "Blake's 7"}).json()

        response = api_client.post(f"/shows/{show['id']}/seasons", json={"season_number": 1, "year": 1978})

        assert response.status_code == 201
        assert response.json()["show_id"] == show["id"]

    def test_create_season_for_missing_show(self, api_client):
        response = api_client.post("/shows/999/seasons", json={"season_number": 1})

        assert response.status_code == 404

    def test_create_episode_by_season_number(self, api_client):
        show = api_client.post("/shows", json={"title": "Blake's 7"}).json()
        season = api_client.post(f"/shows/{show['id']}/seasons", json={"season_number": 1}).json()

        response = api_client.post(
            f"/shows/{show['id']}/episodes",
            json={"season_number": 1, "title": "The Way Back", "air_date": "1978-01-02"},
        )

        assert response.status_code == 201
        episode = response.json()
        assert episode["season_id"] == season["id"]
        assert episode["air_date"] == "1978-01-02"

    def test_create_episode_missing_season(self, api_client):
        show = api_client.post("/shows", json={"title": "Blake's 7"}).json()

        response = api_client.post(
            f"/shows/{show['id']}/episodes", json={"season_number": 3, "title": "Powerplay"}
        )

        assert response.status_code == 422
        assert response.json()["details"] == {"show_id": show["id"], "season_number": 3}

    def test_season_number_episodes(self, farscape_api, farscape_db):
        show_id = find_show_id(farscape_db, "Farscape")

        body = farscape_api.get(f"/shows/{show_id}/seasons/2/episodes").json()

        assert [e["title"] for e in body["data"]] == ["S2E1", "S2E2", "S2E3"]
        assert farscape_api.get(f"/shows/{show_id}/seasons/7/episodes").status_code == 404

    def test_season_episodes_by_id(self, farscape_api, farscape_db):
        season = farscape_db.get_season_by_number(find_show_id(farscape_db, "Farscape"), 3)

        body = farscape_api.get(f"/seasons/{season['id']}/episodes").json()

        assert body["pagination"]["total_items"] == 3
        assert all(e["season_number"] == 3 for e in body["data"])

    def test_move_episode_to_other_season(self, farscape_api, farscape_db):
        show_id = find_show_id(farscape_db, "Farscape")
        episode_id = _premiere_id(farscape_api, show_id)

        response = farscape_api.put(f"/episodes/{episode_id}", json={"season_number": 4, "title": "Moved"})

        assert response.status_code == 200
        assert response.json()["season_number"] == 4
        assert response.json()["title"] == "Moved"

    def test_move_episode_to_missing_season(self, farscape_api, farscape_db):
        episode_id = _premiere_id(farscape_api, find_show_id(farscape_db, "Farscape"))

        response = farscape_api.put(f"/episodes/{episode_id}", json={"season_number": 9})

        assert response.status_code == 422

    def test_delete_season_removes_episodes(self, farscape_api, farscape_db):
        show_id = find_show_id(farscape_db, "Farscape")
        season = farscape_db.get_season_by_number(show_id, 1)

        assert farscape_api.delete(f"/seasons/{season['id']}").status_code == 204

        body = farscape_api.get(f"/shows/{show_id}/episodes").json()
        assert body["pagination"]["total_items"] == 9


class TestCharacterEndpoints:
    """Flow 4: Character actor handling"""

    def test_create_character_with_actor_name(self, api_client):
        show = api_client.post("/shows", json={"title": "Blake's 7"}).json()

        response = api_client.post(
            f"/shows/{show['id']}/characters", json={"name": "Avon", "actor_name": "Paul Darrow"}
        )

        assert response.status_code == 201
        assert response.json()["actor_name"] == "Paul Darrow"
        assert api_client.get("/actors", params={"name": "Paul Darrow"}).json()["pagination"]["total_items"] == 1

    def test_put_without_actor_keeps_actor(self, farscape_api, farscape_db):
        chiana = find_character(farscape_db, find_show_id(farscape_db, "Farscape"), "Chiana")

        response = farscape_api.put(f"/characters/{chiana['id']}", json={"name": "Pip"})

        assert response.json()["name"] == "Pip"
        assert response.json()["actor_name"] == "Gigi Edgley"

    def test_put_null_actor_clears_actor(self, farscape_api, farscape_db):
        chiana = find_character(farscape_db, find_show_id(farscape_db, "Farscape"), "Chiana")

        response = farscape_api.put(f"/characters/{chiana['id']}", json={"actor_name": None})

        assert response.status_code == 200
        assert response.json()["actor_id"] is None
        # The actor row itself stays
        assert farscape_api.get("/actors", params={"name": "Gigi Edgley"}).json()["data"]

    def test_actor_characters(self, farscape_api):
        actor = farscape_api.get("/actors", params={"name": "Ben Browder"}).json()["data"][0]

        body = farscape_api.get(f"/actors/{actor['id']}/characters").json()

        assert [c["name"] for c in body["data"]] == ["John Crichton"]

    def test_delete_actor_keeps_character(self, farscape_api, farscape_db):
        actor = farscape_api.get("/actors", params={"name": "Ben Browder"}).json()["data"][0]

        assert farscape_api.delete(f"/actors/{actor['id']}").status_code == 204

        crichton = find_character(farscape_db, find_show_id(farscape_db, "Farscape"), "John Crichton")
        assert crichton["actor_id"] is None


class TestEpisodeLinks:
    """Flow 5: Linking characters to episodes"""

    def test_new_link_is_201(self, farscape_api, farscape_db):
        episode_id = _premiere_id(farscape_api, find_show_id(farscape_db, "Farscape"))

        response = farscape_api.post(
            f"/episodes/{episode_id}/characters",
            json={"character_name": "Rygel", "actor_name": "Jonathan Hardy"},
        )

        assert response.status_code == 201
        assert response.json()["created"] is True
        assert response.json()["actor_name"] == "Jonathan Hardy"

    def test_existing_link_is_200(self, farscape_api, farscape_db):
        episode_id = _premiere_id(farscape_api, find_show_id(farscape_db, "Farscape"))

        response = farscape_api.post(f"/episodes/{episode_id}/characters", json={"character_name": "Aeryn Sun"})

        assert response.status_code == 200
        assert response.json()["created"] is False
        # No actor sent, so the existing one is kept
        assert response.json()["actor_name"] == "Claudia Black"

    def test_link_needs_one_character_reference(self, farscape_api, farscape_db):
        episode_id = _premiere_id(farscape_api, find_show_id(farscape_db, "Farscape"))

        response = farscape_api.post(f"/episodes/{episode_id}/characters", json={})

        assert response.status_code == 422

    def test_list_and_unlink(self, farscape_api, farscape_db):
        show_id = find_show_id(farscape_db, "Farscape")
        episode_id = _premiere_id(farscape_api, show_id)
        argo = find_character(farscape_db, show_id, "Ka D'Argo")

        before = farscape_api.get(f"/episodes/{episode_id}/characters").json()
        assert before["pagination"]["total_items"] == 3

        assert farscape_api.delete(f"/episodes/{episode_id}/characters/{argo['id']}").status_code == 204
        assert farscape_api.delete(f"/episodes/{episode_id}/characters/{argo['id']}").status_code == 404

        after = farscape_api.get(f"/episodes/{episode_id}/characters").json()
        assert [c["name"] for c in after["data"]] == ["Aeryn Sun", "John Crichton"]
