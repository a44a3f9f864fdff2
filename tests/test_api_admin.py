"""
Admin and service endpoint tests.
"""

import asyncio
import json

from conftest import farscape_snapshot, make_snapshot
from tvcatalog.snapshot import SnapshotManager


class TestSchemaEndpoints:
    """Flow 1: init and reset"""

    def test_init_is_repeatable(self, api_client):
        response = api_client.post("/init")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "initialized"
        assert body["created"] == []

    def test_reset_empties_catalog(self, api_client, farscape_db):
        response = api_client.post("/admin/reset-database")

        assert response.status_code == 200
        assert response.json()["status"] == "reset"
        assert api_client.get("/shows").json()["pagination"]["total_items"] == 0


class TestDumpAndImport:
    """Flow 2: Export and re-import"""

    def test_dump_is_attachment(self, api_client, farscape_db):
        response = api_client.get("/admin/database-dump")

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="tvcatalog-dump-')
        assert disposition.endswith('.json"')

        snapshot = json.loads(response.content)
        assert snapshot["version"] == 1
        assert len(snapshot["episodes"]) == 12
        assert len(snapshot["episode_characters"]) == 39

    def test_import_report(self, api_client):
        response = api_client.post("/admin/database-import", json=farscape_snapshot())

        assert response.status_code == 200
        report = response.json()
        assert report["status"] == "completed"
        assert report["counts"]["shows"]["created"] == 1
        assert report["counts"]["episodes"]["created"] == 12
        assert report["failures"] == []

    def test_reimport_dump_changes_nothing(self, api_client, farscape_db):
        dump = json.loads(api_client.get("/admin/database-dump").content)

        report = api_client.post("/admin/database-import", json=dump).json()

        assert report["status"] == "completed"
        assert all(counts["created"] == 0 for counts in report["counts"].values())
        assert all(counts["updated"] == 0 for counts in report["counts"].values())

    def test_import_with_bad_record(self, api_client):
        snapshot = make_snapshot(
            shows=[
                {"id": 1, "title": "Blake's 7", "year": 1978},
                {"id": 2, "title": "", "year": 1980},
            ]
        )

        report = api_client.post("/admin/database-import", json=snapshot).json()

        assert report["status"] == "completed_with_errors"
        assert report["counts"]["shows"]["created"] == 1
        assert report["failures"][0]["index"] == 1

    def test_import_non_object_rejected(self, api_client):
        response = api_client.post("/admin/database-import", json=[1, 2, 3])

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_import_runs_off_the_event_loop(self, api_client, monkeypatch):
        seen = {}
        original = SnapshotManager.import_all

        def import_all(self, snapshot):
            try:
                asyncio.get_running_loop()
                seen["on_loop"] = True
            except RuntimeError:
                seen["on_loop"] = False
            return original(self, snapshot)

        monkeypatch.setattr(SnapshotManager, "import_all", import_all)

        response = api_client.post("/admin/database-import", json=make_snapshot(actors=[{"id": 1, "name": "Paul Darrow"}]))

        assert response.status_code == 200
        assert seen == {"on_loop": False}


class TestServiceEndpoints:
    """Flow 3: Health and version"""

    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    def test_health_degraded(self, api_client, db, monkeypatch):
        monkeypatch.setattr(db, "ping", lambda: False)

        response = api_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "unavailable"

    def test_deployment_version(self, secured_client):
        response = secured_client.get("/deployment-version")

        assert response.status_code == 200
        body = response.json()
        assert body["appVersion"] == "2.4.0"
        assert body["buildNumber"] == "117"
        assert body["packageVersion"]

    def test_request_id_header(self, api_client):
        response = api_client.get("/shows")

        assert "x-request-id" in response.headers

    def test_request_id_echoed(self, api_client):
        response = api_client.get("/shows", headers={"x-request-id": "seed-run-42"})

        assert response.headers["x-request-id"] == "seed-run-42"

    def test_malformed_request_id_replaced(self, api_client):
        response = api_client.get("/shows", headers={"x-request-id": "bad id\twith spaces"})

        assert response.headers["x-request-id"] != "bad id\twith spaces"
        assert len(response.headers["x-request-id"]) == 8
