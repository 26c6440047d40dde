from uuid import uuid4


def get_client():
    from runmetrics.main import app  # noqa: WPS433
    from fastapi.testclient import TestClient  # noqa: WPS433
    return TestClient(app)


GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><trkseg>
    <trkpt lat="40.0000" lon="-105.0"><ele>1600</ele><time>2026-10-10T07:00:00Z</time></trkpt>
    <trkpt lat="40.0009" lon="-105.0"><ele>1601</ele><time>2026-10-10T07:00:30Z</time></trkpt>
    <trkpt lat="40.0018" lon="-105.0"><ele>1602</ele><time>2026-10-10T07:01:00Z</time></trkpt>
  </trkseg></trk>
</gpx>
"""


def test_root_ok():
    client = get_client()
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_finalize_manual_run():
    client = get_client()
    r = client.post("/runs/finalize", json={"mode": "manual", "distance_miles": 3.0, "duration_seconds": 1800})
    assert r.status_code == 200, r.text
    run = r.json()
    assert run["distance_source"] == "manual"
    assert run["avg_pace_sec_per_mile"] == 600
    assert run["splits"] == []


def test_finalize_gps_run(make_route):
    client = get_client()
    route = [p.model_dump(mode="json") for p in make_route(100, 20, 30)]
    r = client.post("/runs/finalize", json={"mode": "gps", "route": route})
    assert r.status_code == 200, r.text
    run = r.json()
    assert run["distance_source"] == "gps"
    assert run["elapsed_seconds"] == 600
    assert len(run["splits"]) == 1
    assert run["splits"][0]["split_index"] == 1


def test_synthetic_splits():
    client = get_client()
    r = client.get("/runs/splits", params={"distance_mi": 3.0, "duration_seconds": 1800})
    assert r.status_code == 200
    assert [s["split_seconds"] for s in r.json()] == [600, 600, 600]

    bad = client.get("/runs/splits", params={"distance_mi": -1, "duration_seconds": 1800})
    assert bad.status_code == 422


def test_import_gpx():
    client = get_client()
    files = {"file": ("morning.gpx", GPX.encode("utf-8"), "application/gpx+xml")}
    r = client.post("/runs/import", files=files, params={"notes": "imported"})
    assert r.status_code == 200, r.text
    run = r.json()
    assert run["mode"] == "gps"
    assert run["distance_source"] == "gps"
    assert run["elapsed_seconds"] == 60
    assert run["notes"] == "imported"
    assert len(run["route"]) == 3


def test_import_rejects_other_files():
    client = get_client()
    r = client.post("/runs/import", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert r.status_code == 400

    broken = client.post("/runs/import", files={"file": ("broken.gpx", b"<gpx", "application/gpx+xml")})
    assert broken.status_code == 400


def test_running_records():
    client = get_client()
    run = client.post("/runs/finalize", json={"mode": "manual", "distance_miles": 1.0, "duration_seconds": 420}).json()
    payload = {"run": run, "session_id": str(uuid4()), "achieved_at": "2026-10-14T07:00:00"}
    r = client.post("/records/running", json=payload)
    assert r.status_code == 200, r.text
    updates = r.json()["updates"]
    assert [u["type"] for u in updates] == ["mile"]
    assert updates[0]["best_seconds"] == 420

    payload["records"] = updates
    again = client.post("/records/running", json=payload)
    assert again.json()["updates"] == []


def test_achievements():
    client = get_client()

    def session(weight, completed_at):
        return {
            "started_at": completed_at,
            "completed_at": completed_at,
            "exercises": [{"name": "Bench Press", "sets": [{"reps": 5, "weight": weight, "is_completed": True}]}],
        }

    payload = {
        "session": session(205, "2026-10-14T08:00:00"),
        "history": [session(200, "2026-10-07T08:00:00")],
    }
    r = client.post("/records/achievements", json=payload)
    assert r.status_code == 200, r.text
    kinds = {b["kind"]: b for b in r.json()}
    assert kinds["heaviestSet"]["display_value"] == "205.0 lb"
    assert "estimated1RM" in kinds


def test_load_weekly_and_history():
    client = get_client()
    sessions = [
        {
            "started_at": "2026-10-14T07:00:00",
            "completed_at": "2026-10-14T08:00:00",
            "exercises": [{"name": "Squat", "sets": [{"reps": 10, "weight": 100, "is_completed": True}]}],
        }
    ]
    body = {"sessions": sessions, "reference": "2026-10-15T12:00:00", "week_starts_on_monday": True}
    r = client.post("/load/weekly", json=body)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["this_week"]["total_load"] == 1000
    assert data["last_week"]["total_load"] == 0
    assert data["delta_percent"] == 100000

    h = client.post("/load/history", json={**body, "weeks": 3})
    assert h.status_code == 200
    weeks = h.json()
    assert len(weeks) == 3
    assert weeks[-1]["week_start"].startswith("2026-10-12")

    bad = client.post("/load/history", json={**body, "weeks": 0})
    assert bad.status_code == 422


def test_load_with_mixed_timezones():
    client = get_client()
    sessions = [
        {"started_at": "2026-10-14T07:00:00Z", "completed_at": "2026-10-14T08:00:00Z"},
        {
            "started_at": "2026-10-13T07:00:00",
            "completed_at": "2026-10-13T08:00:00",
            "exercises": [{"name": "Squat", "sets": [{"reps": 10, "weight": 100, "is_completed": True}]}],
        },
    ]
    body = {"sessions": sessions, "reference": "2026-10-15T12:00:00", "week_starts_on_monday": True}
    r = client.post("/load/weekly", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["this_week"]["session_count"] == 2
    assert r.json()["this_week"]["total_load"] == 1000

    aware_ref = client.post("/load/history", json={**body, "reference": "2026-10-15T12:00:00+02:00", "weeks": 2})
    assert aware_ref.status_code == 200, aware_ref.text
    assert aware_ref.json()[-1]["session_count"] == 2


def test_finalize_accepts_fractional_live_counters():
    client = get_client()
    body = {"mode": "gps", "live_distance_miles": 3.0, "live_elapsed_seconds": 1800.4}
    r = client.post("/runs/finalize", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["elapsed_seconds"] == 1800
    assert r.json()["distance_source"] == "estimated"
