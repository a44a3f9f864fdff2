"""
Export/import tests.

Covers repeat imports, actor preservation, partial failure reporting and
moving a catalog between databases.
"""

from dataclasses import replace

import pytest

from conftest import farscape_snapshot, find_character, find_show_id, make_snapshot
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import ValidationError
from tvcatalog.snapshot import SECTIONS, SnapshotManager


class TestExport:
    """Flow 1: Dumping the catalog"""

    def test_empty_export(self, snapshots):
        snapshot = snapshots.export_all()

        assert snapshot["version"] == 1
        for section in SECTIONS:
            assert snapshot[section] == []

    def test_export_contents(self, farscape_db, snapshots):
        snapshot = snapshots.export_all()

        assert len(snapshot["shows"]) == 1
        assert len(snapshot["seasons"]) == 4
        assert len(snapshot["episodes"]) == 12
        assert len(snapshot["characters"]) == 4
        assert len(snapshot["actors"]) == 4
        assert len(snapshot["episode_characters"]) == 39

        episode = snapshot["episodes"][0]
        assert episode["show_id"] == snapshot["shows"][0]["id"]
        assert episode["season_number"] == 1
        assert episode["air_date"] == "1999-01-01"

        aeryn = next(c for c in snapshot["characters"] if c["name"] == "Aeryn Sun")
        assert aeryn["actor_name"] == "Claudia Black"

    def test_export_is_ordered_by_id(self, farscape_db, snapshots):
        snapshot = snapshots.export_all()
        for section in ("shows", "seasons", "actors", "characters", "episodes"):
            ids = [row["id"] for row in snapshot[section]]
            assert ids == sorted(ids)


class TestRepeatImport:
    """Flow 2: Running the same import twice"""

    def test_second_import_changes_nothing(self, farscape_db, snapshots):
        before = snapshots.export_all()
        report = snapshots.import_all(farscape_snapshot())

        assert report.status == "completed"
        for section in ("shows", "seasons", "characters", "episodes", "episode_characters"):
            assert report.counts[section]["created"] == 0
            assert report.counts[section]["updated"] == 0
        assert report.counts["episodes"]["unchanged"] == 12
        assert snapshots.export_all() == before

    def test_changed_field_counts_as_updated(self, farscape_db, snapshots):
        snapshot = farscape_snapshot()
        snapshot["shows"][0]["description"] = "Lost in the Uncharted Territories"

        report = snapshots.import_all(snapshot)

        assert report.counts["shows"]["updated"] == 1
        show_id = find_show_id(farscape_db, "Farscape")
        assert farscape_db.get_show(show_id)["description"] == "Lost in the Uncharted Territories"


class TestActorPreservation:
    """Flow 3: Link-only imports do not clear actors"""

    def test_links_without_actor_keep_actor(self, farscape_db, snapshots):
        show_id = find_show_id(farscape_db, "Farscape")
        snapshot = make_snapshot(
            shows=[{"id": 10, "title": "Farscape", "year": 1999}],
            seasons=[{"id": 20, "show_id": 10, "season_number": 2, "year": 2000}],
            episodes=[{"id": 30, "season_id": 20, "title": "Mind the Baby"}],
            links=[{"episode_id": 30, "character_name": "Aeryn Sun"}],
        )

        report = snapshots.import_all(snapshot)

        assert report.status == "completed"
        assert report.counts["episodes"]["created"] == 1
        assert report.counts["episode_characters"]["created"] == 1
        assert find_character(farscape_db, show_id, "Aeryn Sun")["actor_name"] == "Claudia Black"

    def test_character_without_actor_keys_keeps_actor(self, farscape_db, snapshots):
        show_id = find_show_id(farscape_db, "Farscape")
        snapshot = make_snapshot(
            shows=[{"id": 1, "title": "Farscape", "year": 1999}],
            characters=[{"id": 1, "show_id": 1, "name": "Ka D'Argo"}],
        )

        report = snapshots.import_all(snapshot)

        assert report.counts["characters"]["unchanged"] == 1
        assert find_character(farscape_db, show_id, "Ka D'Argo")["actor_name"] == "Anthony Simcoe"

    def test_character_with_null_actor_clears(self, farscape_db, snapshots):
        show_id = find_show_id(farscape_db, "Farscape")
        snapshot = make_snapshot(
            shows=[{"id": 1, "title": "Farscape", "year": 1999}],
            characters=[{"id": 1, "show_id": 1, "name": "Chiana", "actor_id": None}],
        )

        report = snapshots.import_all(snapshot)

        assert report.counts["characters"]["updated"] == 1
        assert find_character(farscape_db, show_id, "Chiana")["actor_id"] is None


class TestPartialFailure:
    """Flow 4: One bad record does not sink the batch"""

    def test_forty_nine_of_fifty(self, snapshots, db):
        shows = [{"id": i, "title": f"Show {i:02d}", "year": 2000 + i % 20} for i in range(1, 51)]
        shows[36]["title"] = ""

        report = snapshots.import_all(make_snapshot(shows=shows))

        assert report.status == "completed_with_errors"
        assert report.counts["shows"]["created"] == 49
        assert report.counts["shows"]["failed"] == 1
        assert report.failures == [{
            "entity": "shows",
            "index": 36,
            "key": {"id": 37, "title": "", "year": 2017},
            "error": "validation_error",
            "message": "Missing natural key fields for show: title",
        }]
        assert db.get_status()["counts"]["shows"] == 49

    def test_children_of_failed_parent_fail(self, snapshots):
        snapshot = make_snapshot(
            shows=[{"id": 1, "title": ""}],
            seasons=[{"id": 1, "show_id": 1, "season_number": 1}],
        )

        report = snapshots.import_all(snapshot)

        assert report.counts["seasons"]["failed"] == 1
        assert report.failures[-1]["error"] == "not_found"

    def test_episode_by_show_and_season_number(self, farscape_db, snapshots):
        snapshot = make_snapshot(
            shows=[{"id": 7, "title": "Farscape", "year": 1999}],
            episodes=[{"id": 1, "show_id": 7, "season_number": 3, "title": "Season of Death"}],
        )

        report = snapshots.import_all(snapshot)

        assert report.status == "completed"
        episodes, _ = farscape_db.list_episodes(show_id=find_show_id(farscape_db, "Farscape"), season_number=3)
        assert "Season of Death" in [e["title"] for e in episodes]

    def test_episode_without_season_reference(self, snapshots):
        report = snapshots.import_all(make_snapshot(episodes=[{"id": 1, "title": "Orphan"}]))

        assert report.failures[0]["error"] == "validation_error"

    def test_non_object_record(self, snapshots):
        report = snapshots.import_all(make_snapshot(actors=["Ben Browder", {"id": 1, "name": "Claudia Black"}]))

        assert report.counts["actors"]["failed"] == 1
        assert report.counts["actors"]["created"] == 1
        assert report.failures[0]["key"] == {}


def _one_show_one_season(**sections):
    return make_snapshot(
        shows=[{"id": 1, "title": "Blake's 7", "year": 1978}],
        seasons=[{"id": 1, "show_id": 1, "season_number": 1}],
        **sections,
    )


class TestWrongTypedValues:
    """Flow 4b: Wrong-typed ids and references fail only their own record"""

    @pytest.mark.parametrize("bad_id", [[9], {"id": 9}, True])
    def test_bad_show_id(self, snapshots, db, bad_id):
        snapshot = make_snapshot(shows=[
            {"id": 1, "title": "Blake's 7", "year": 1978},
            {"id": bad_id, "title": "Survivors", "year": 1975},
            {"id": 3, "title": "Sapphire & Steel", "year": 1979},
        ])

        report = snapshots.import_all(snapshot)

        assert report.counts["shows"]["created"] == 2
        assert report.counts["shows"]["failed"] == 1
        assert report.failures[0]["index"] == 1
        assert report.failures[0]["error"] == "validation_error"
        # Nothing is written for the rejected record
        assert db.get_status()["counts"]["shows"] == 2

    @pytest.mark.parametrize("bad_ref", [[1], {"id": 1}, False])
    def test_bad_season_reference(self, snapshots, db, bad_ref):
        snapshot = _one_show_one_season(episodes=[
            {"id": 1, "season_id": bad_ref, "title": "Bad"},
            {"id": 2, "season_id": 1, "title": "The Way Back"},
        ])

        report = snapshots.import_all(snapshot)

        assert report.counts["episodes"]["created"] == 1
        assert report.failures == [{
            "entity": "episodes",
            "index": 0,
            "key": {"id": 1, "season_id": bad_ref, "title": "Bad"},
            "error": "validation_error",
            "message": "Season reference must be an integer or string",
        }]

    @pytest.mark.parametrize("bad_number", [{"n": 1}, [1], True, "one"])
    def test_bad_season_number(self, snapshots, bad_number):
        snapshot = _one_show_one_season(episodes=[
            {"id": 1, "show_id": 1, "season_number": bad_number, "title": "Bad"},
            {"id": 2, "show_id": 1, "season_number": 1, "title": "Spacefall"},
        ])

        report = snapshots.import_all(snapshot)

        assert report.counts["episodes"]["created"] == 1
        assert report.counts["episodes"]["failed"] == 1
        assert report.failures[0]["error"] == "validation_error"

    @pytest.mark.parametrize(
        "section, record",
        [
            ("seasons", {"id": 2, "show_id": [1], "season_number": 2}),
            ("seasons", {"id": 2, "show_id": 1, "season_number": {"n": 2}}),
            ("actors", {"id": 1, "name": ["Paul Darrow"]}),
            ("characters", {"id": 1, "show_id": 1, "name": "Avon", "actor_name": {"first": "Paul"}}),
            ("characters", {"id": 1, "show_id": 1, "name": "Avon", "actor_id": [1]}),
            ("episodes", {"id": 1, "season_id": 1, "title": "Cygnus Alpha", "air_date": 19780109}),
            ("episode_characters", {"episode_id": [1], "character_name": "Avon"}),
            ("episode_characters", {"episode_id": 1, "character_id": {"id": 1}}),
        ],
    )
    def test_bad_field_fails_one_record(self, snapshots, section, record):
        snapshot = _one_show_one_season(
            episodes=[{"id": 1, "season_id": 1, "title": "The Way Back"}],
            links=[{"episode_id": 1, "character_name": "Blake"}],
        )
        snapshot[section] = [record] + snapshot[section]

        report = snapshots.import_all(snapshot)

        assert report.status == "completed_with_errors"
        assert [(f["entity"], f["index"], f["error"]) for f in report.failures] == [
            (section, 0, "validation_error")
        ]
        assert report.counts["episode_characters"]["created"] == 1

    def test_over_http_reports_instead_of_500(self, api_client):
        snapshot = _one_show_one_season(episodes=[
            {"id": 1, "season_id": [1], "title": "Bad"},
            {"id": 2, "season_id": 1, "title": "Good"},
        ])

        response = api_client.post("/admin/database-import", json=snapshot)

        assert response.status_code == 200
        assert response.json()["counts"]["episodes"] == {
            "created": 1, "updated": 0, "unchanged": 0, "failed": 1,
        }


class TestMalformedSnapshot:
    """Flow 5: The whole call is rejected"""

    def test_not_an_object(self, snapshots):
        with pytest.raises(ValidationError):
            snapshots.import_all([{"title": "Farscape"}])

    def test_section_not_a_list(self, snapshots):
        with pytest.raises(ValidationError):
            snapshots.import_all({"shows": {"title": "Farscape"}})

    def test_missing_sections_are_empty(self, snapshots):
        report = snapshots.import_all({"version": 1})

        assert report.status == "completed"


def test_round_trip_into_fresh_database(farscape_db, snapshots, config):
    """Dump one catalog and load it into an empty one."""
    exported = snapshots.export_all()

    target = DatabaseManager(replace(config))
    target.init_schema()
    try:
        report = SnapshotManager(target).import_all(exported)

        assert report.status == "completed"
        assert report.counts["actors"]["created"] == 4
        assert report.counts["episode_characters"]["created"] == 39
        assert SnapshotManager(target).export_all() == exported
    finally:
        target.engine.dispose()
