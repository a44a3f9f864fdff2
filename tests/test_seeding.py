"""
Seed datasets, the seeder and the API client it drives.
"""

import pytest
import requests
from unittest.mock import MagicMock, call

from conftest import make_config
from tvcatalog.client import CatalogClient, CatalogClientError
from tvcatalog.seed_data import SEEDS, doctor_who, farscape, massive_showcase, space_1999
from tvcatalog.seeding import Seeder, build_snapshot, snapshot_chunks


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body if body is not None else {}
    response.text = str(body)
    return response


@pytest.fixture
def small_massive(monkeypatch):
    monkeypatch.setenv("TOTAL_SEASONS", "3")
    monkeypatch.setenv("EPISODES_PER_SEASON", "40")
    monkeypatch.setenv("DESCRIPTION_REPEATS", "1")


class TestSeedData:
    """Flow 1: Bundled datasets"""

    @pytest.mark.parametrize("name", [n for n in SEEDS if n != "massive"])
    def test_seed_snapshots_are_consistent(self, name):
        snapshot = build_snapshot(SEEDS[name]())
        season_ids = {s["id"] for s in snapshot["seasons"]}
        episode_ids = {e["id"] for e in snapshot["episodes"]}

        assert len(snapshot["shows"]) == 1
        assert all(e["season_id"] in season_ids for e in snapshot["episodes"])
        assert all(link["episode_id"] in episode_ids for link in snapshot["episode_characters"])

    def test_farscape_shape(self):
        snapshot = build_snapshot(farscape())

        assert len(snapshot["seasons"]) == 4
        assert len(snapshot["episodes"]) == 12
        assert len(snapshot["episode_characters"]) == 39
        assert snapshot["characters"][0] == {
            "id": 1, "show_id": 1, "name": "John Crichton", "actor_name": "Ben Browder",
        }

    def test_partial_snapshot(self):
        snapshot = build_snapshot(farscape(), seasons=[3])

        assert [s["season_number"] for s in snapshot["seasons"]] == [3]
        assert {e["season_id"] for e in snapshot["episodes"]} == {1}

    def test_doctor_who_fills_seasons_to_broadcast_counts(self):
        show = doctor_who()
        per_season = {}
        for episode in show.episodes:
            per_season[episode.season] = per_season.get(episode.season, 0) + 1

        assert len(show.seasons) == 26
        assert per_season[1] == 42
        assert per_season[22] == 13
        assert len(show.episodes) == 706

        placeholder = next(e for e in show.episodes if e.title == "S7E6")
        assert placeholder.air_date == "1970-02-05"
        assert placeholder.characters == (
            ("The Doctor (Third Doctor)", None),
            ("Liz Shaw", None),
            ("Brigadier Lethbridge-Stewart", None),
        )
        assert len(snapshot_chunks(show)) == 26

    def test_space_1999_shape(self):
        snapshot = build_snapshot(space_1999())

        assert [s["year"] for s in snapshot["seasons"]] == [1975, 1976]
        assert len(snapshot["episodes"]) == 48
        assert len(snapshot["characters"]) == 13
        # Episode casts carry their actors
        assert {"episode_id": 1, "character_name": "Commander John Koenig", "actor_name": "Martin Landau"} \
            in snapshot["episode_characters"]

    def test_small_show_is_one_chunk(self):
        assert len(snapshot_chunks(farscape())) == 1

    def test_massive_show_is_chunked_by_season(self, small_massive):
        show = massive_showcase()
        chunks = snapshot_chunks(show)

        assert len(show.episodes) == 120
        assert len(chunks) == 3
        assert [len(c["episodes"]) for c in chunks] == [40, 40, 40]
        # Every chunk repeats the show so it can be matched by title and year
        assert all(c["shows"][0]["title"] == show.title for c in chunks)

    def test_massive_rejects_non_positive_sizes(self, monkeypatch):
        monkeypatch.setenv("TOTAL_SEASONS", "0")

        with pytest.raises(ValueError):
            massive_showcase()


class TestSeeder:
    """Flow 2: Seeding and unseeding through the client"""

    def test_seed_posts_snapshot(self, config, mock_client):
        result = Seeder(mock_client, config).seed("farscape")

        mock_client.init_database.assert_called_once()
        mock_client.import_snapshot.assert_called_once()
        assert result["status"] == "completed"
        assert result["show"] == "Farscape"
        assert result["counts"]["episodes"]["created"] == 12

    def test_seed_merges_chunk_counts(self, config, mock_client, small_massive):
        result = Seeder(mock_client, config).seed("massive")

        assert mock_client.import_snapshot.call_count == 3
        assert result["counts"]["episodes"]["created"] == 120
        assert result["counts"]["shows"]["created"] == 3

    def test_seed_reports_failures(self, config, mock_client):
        failure = {"entity": "episodes", "index": 0, "key": {}, "error": "conflict", "message": "boom"}
        mock_client.import_snapshot.side_effect = None
        mock_client.import_snapshot.return_value = {"status": "completed_with_errors", "counts": {}, "failures": [failure]}

        result = Seeder(mock_client, config).seed("farscape")

        assert result["status"] == "completed_with_errors"
        assert result["failures"] == [failure]

    def test_unknown_seed(self, config, mock_client):
        with pytest.raises(ValueError) as exc:
            Seeder(mock_client, config).seed("doctor-who")

        assert "farscape" in str(exc.value)
        mock_client.init_database.assert_not_called()

    def test_unseed_deletes_only_orphaned_actors(self, config, mock_client):
        mock_client.find_show.return_value = {"id": 7, "title": "Farscape", "year": 1999}
        mock_client.list_show_characters.return_value = [
            {"name": "John Crichton", "actor_name": "Ben Browder"},
            {"name": "Aeryn Sun", "actor_name": "Claudia Black"},
            {"name": "Pilot", "actor_name": None},
        ]
        actors = {"Ben Browder": {"id": 1}, "Claudia Black": {"id": 2}}
        mock_client.find_actor.side_effect = actors.get
        # Ben Browder still plays a character in another show
        mock_client.list_actor_characters.side_effect = lambda actor_id: (
            [{"name": "Cameron Mitchell"}] if actor_id == 1 else []
        )
        mock_client.delete_actor.return_value = True

        result = Seeder(mock_client, config).unseed("farscape")

        mock_client.delete_show.assert_called_once_with(7)
        mock_client.delete_actor.assert_called_once_with(2)
        assert result == {"seed": "farscape", "show_id": 7, "deleted_actors": ["Claudia Black"]}

    def test_unseed_missing_show(self, config, mock_client):
        mock_client.find_show.return_value = None

        result = Seeder(mock_client, config).unseed("farscape")

        assert result["show_id"] is None
        mock_client.delete_show.assert_not_called()


class TestCatalogClient:
    """Flow 3: HTTP client retries and pagination"""

    @pytest.fixture
    def client(self, tmp_path):
        client = CatalogClient(make_config(tmp_path, api_token="s3cret"), base_url="http://catalog.test/")
        client.session = MagicMock()
        return client

    def test_session_sends_token(self, tmp_path):
        client = CatalogClient(make_config(tmp_path, api_token="s3cret"))

        assert client.session.headers["x-api-token"] == "s3cret"

    def test_retries_server_errors(self, client):
        client.session.request.side_effect = [
            _response(503, {"error": "database_unavailable", "message": "Database unavailable"}),
            _response(200, {"status": "completed", "counts": {}, "failures": []}),
        ]

        report = client.import_snapshot({"shows": []})

        assert report["status"] == "completed"
        assert client.session.request.call_count == 2

    def test_retries_connection_errors_until_exhausted(self, client):
        client.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(CatalogClientError):
            client.health()

        assert client.session.request.call_count == 2

    def test_client_error_not_retried(self, client):
        client.session.request.return_value = _response(422, {"error": "validation_error", "message": "bad"})

        with pytest.raises(CatalogClientError) as exc:
            client.import_snapshot({})

        assert exc.value.status_code == 422
        assert "bad" in str(exc.value)
        assert client.session.request.call_count == 1

    def test_init_tolerates_missing_route(self, client):
        client.session.request.return_value = _response(404, {"error": "not_found", "message": "Not Found"})

        assert client.init_database() is False

    def test_get_all_follows_pages(self, client):
        client.PAGE_SIZE = 2
        client.session.request.side_effect = [
            _response(200, {"data": [{"id": 1}, {"id": 2}], "pagination": {"has_next": True}}),
            _response(200, {"data": [{"id": 3}], "pagination": {"has_next": False}}),
        ]

        characters = client.list_show_characters(5)

        assert [c["id"] for c in characters] == [1, 2, 3]
        assert client.session.request.call_args_list[1] == call(
            "GET", "http://catalog.test/shows/5/characters",
            json=None, params={"limit": 2, "offset": 2}, timeout=60,
        )

    def test_find_show_matches_null_year(self, client):
        client.session.request.return_value = _response(
            200,
            {"data": [{"id": 3, "title": "Pilot", "year": 2001}, {"id": 4, "title": "Pilot", "year": None}],
             "pagination": {"has_next": False}},
        )

        assert client.find_show("Pilot", None)["id"] == 4
